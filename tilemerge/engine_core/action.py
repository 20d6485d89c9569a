"""
Move System - Directions and move results.

A move is the only player action in the game. Every move:
1. Names a direction
2. Produces a MoveResult from the reducer
3. Is accepted by the session only if it changed the grid
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .grid import Grid, Position


class Direction(Enum):
    """Directions a move can slide tiles toward."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)

    @property
    def is_reversed(self) -> bool:
        """True when the moving edge is at the high index end of the line."""
        return self in (Direction.RIGHT, Direction.DOWN)

    @classmethod
    def parse(cls, value: str | Direction) -> Direction:
        """Parse a direction name, case-insensitive."""
        if isinstance(value, Direction):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown direction: {value!r}") from None


@dataclass(frozen=True)
class MoveResult:
    """
    Result of applying one move to a grid.

    Contains:
    - The resulting grid (spawn not applied)
    - Score earned by this move's merges
    - Positions where merges landed, at most once each
    """
    grid: Grid
    score: int = 0
    merged: tuple[Position, ...] = field(default_factory=tuple)
    changed: bool = False
