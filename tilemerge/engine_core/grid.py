"""
Grid - Immutable board representation.

Design principles:
- Immutable: a grid is a tuple of row tuples, all changes return a new grid
- Storage-agnostic comparison: lists and tuples with equal values are equal
- Empty cells are None, tiles are powers of two >= 2
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence


Cell = Optional[int]
Row = tuple[Cell, ...]
Grid = tuple[Row, ...]


class InvalidGridError(ValueError):
    """Raised when a grid is malformed or holds an illegal tile value."""


@dataclass(frozen=True, order=True)
class Position:
    """A (row, col) cell coordinate, 0-indexed."""
    row: int
    col: int


def is_tile_value(value: int) -> bool:
    """True for powers of two >= 2."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 2 and value & (value - 1) == 0


def create_empty(size: int) -> Grid:
    """Return an all-empty size x size grid."""
    if size <= 0:
        raise InvalidGridError(f"Grid size must be positive, got {size}")
    return tuple(tuple(None for _ in range(size)) for _ in range(size))


def from_rows(rows: Iterable[Iterable[Cell]]) -> Grid:
    """
    Build a grid from nested sequences.

    Accepts 0 as an empty cell. Rows must all have the same length.
    Raises InvalidGridError on ragged rows or non power-of-two values.
    """
    grid = tuple(
        tuple(None if value in (None, 0) else value for value in row)
        for row in rows
    )
    if not grid or not grid[0]:
        raise InvalidGridError("Grid must have at least one row and one column")

    width = len(grid[0])
    for r, row in enumerate(grid):
        if len(row) != width:
            raise InvalidGridError(f"Row {r} has {len(row)} cells, expected {width}")
        for c, value in enumerate(row):
            if value is not None and not is_tile_value(value):
                raise InvalidGridError(f"Illegal tile value {value!r} at ({r}, {c})")
    return grid


def to_rows(grid: Sequence[Sequence[Cell]]) -> list[list[Cell]]:
    """Return the grid as nested lists (for JSON)."""
    return [list(row) for row in grid]


def empty_cells(grid: Sequence[Sequence[Cell]]) -> list[Position]:
    """Empty cells in row-major order."""
    return [
        Position(r, c)
        for r, row in enumerate(grid)
        for c, value in enumerate(row)
        if value is None
    ]


def grids_equal(a: Sequence[Sequence[Cell]], b: Sequence[Sequence[Cell]]) -> bool:
    """Deep structural comparison, independent of list/tuple storage."""
    if len(a) != len(b):
        return False
    return all(tuple(row_a) == tuple(row_b) for row_a, row_b in zip(a, b))


def set_cell(grid: Sequence[Sequence[Cell]], position: Position, value: Cell) -> Grid:
    """Return a new grid with one cell replaced."""
    return tuple(
        tuple(
            value if (r, c) == (position.row, position.col) else cell
            for c, cell in enumerate(row)
        )
        for r, row in enumerate(grid)
    )


def grid_sum(grid: Sequence[Sequence[Cell]]) -> int:
    return sum(value for row in grid for value in row if value is not None)


def tile_count(grid: Sequence[Sequence[Cell]]) -> int:
    return sum(1 for row in grid for value in row if value is not None)


def max_tile(grid: Sequence[Sequence[Cell]]) -> int:
    """Largest tile on the board, 0 for an empty board."""
    return max((value for row in grid for value in row if value is not None), default=0)
