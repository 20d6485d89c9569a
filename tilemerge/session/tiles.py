"""
Tile Views - Per-turn tile identities for presentation layers.

Ids are "{turn}-{row}-{col}". They are only stable within one turn;
renderers use is_new / is_merged to pick spawn and merge animations.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Sequence

from ..engine_core.grid import Cell, Position


@dataclass(frozen=True)
class TileView:
    """One occupied cell as a renderer sees it."""
    id: str
    value: int
    row: int
    col: int
    is_new: bool = False
    is_merged: bool = False


def build_tiles(
    grid: Sequence[Sequence[Cell]],
    turn: int,
    spawn: Position | None = None,
    merged: Iterable[Position] = (),
) -> list[TileView]:
    """Tiles in row-major order."""
    merged_set = set(merged)
    tiles = []
    for r, row in enumerate(grid):
        for c, value in enumerate(row):
            if value is None:
                continue
            position = Position(r, c)
            tiles.append(TileView(
                id=f"{turn}-{r}-{c}",
                value=value,
                row=r,
                col=c,
                is_new=position == spawn,
                is_merged=position in merged_set,
            ))
    return tiles
