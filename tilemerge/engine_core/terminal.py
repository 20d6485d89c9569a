"""
Terminal Detector - Win and loss checks.

can_move does not simulate the four directions: an empty cell or an
adjacent equal pair is both necessary and sufficient for some move to
change the grid.
"""

from __future__ import annotations
from typing import Sequence

from .grid import Cell


DEFAULT_WINNING_VALUE = 2048


def can_move(grid: Sequence[Sequence[Cell]]) -> bool:
    """True if any empty cell exists or any orthogonal neighbours are equal."""
    rows = len(grid)
    for r in range(rows):
        cols = len(grid[r])
        for c in range(cols):
            current = grid[r][c]
            if current is None:
                return True
            if c + 1 < cols and grid[r][c + 1] == current:
                return True
            if r + 1 < rows and grid[r + 1][c] == current:
                return True
    return False


def has_won(grid: Sequence[Sequence[Cell]], winning_value: int = DEFAULT_WINNING_VALUE) -> bool:
    """True iff some cell holds exactly the winning value."""
    return any(value == winning_value for row in grid for value in row)
