"""
Reducer - Applies moves to grids.

The reducer is the single place where tiles slide and merge.
Every direction goes through the same line reduction:

1. Orient: read the grid as lines whose index 0 is the moving edge
   (rows for left/right, columns for up/down, reversed for right/down)
2. Reduce each line toward index 0
3. Restore: undo the orientation and mirror merge indices back

Design principles:
- Pure functions: (grid, direction) -> MoveResult
- One merge implementation shared by all four directions
- Merged tiles never merge again in the same move
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Sequence

from .action import Direction, MoveResult
from .grid import Cell, Grid, Position, grids_equal


@dataclass(frozen=True)
class LineReduction:
    """Result of reducing one row or column toward index 0."""
    values: tuple[Cell, ...]
    score: int = 0
    merged_indices: tuple[int, ...] = field(default_factory=tuple)


def reduce_line(line: Sequence[Cell]) -> LineReduction:
    """
    Slide and merge one line toward index 0.

    The caller orients the line so index 0 is the edge being moved toward.
    """
    compacted = [value for value in line if value is not None]
    result: list[Cell] = []
    merged_indices: list[int] = []
    score = 0

    i = 0
    while i < len(compacted):
        if i + 1 < len(compacted) and compacted[i] == compacted[i + 1]:
            merged_value = compacted[i] * 2
            result.append(merged_value)
            merged_indices.append(len(result) - 1)
            score += merged_value
            i += 2
        else:
            result.append(compacted[i])
            i += 1

    result.extend([None] * (len(line) - len(result)))
    return LineReduction(
        values=tuple(result),
        score=score,
        merged_indices=tuple(merged_indices),
    )


def _oriented_lines(grid: Sequence[Sequence[Cell]], direction: Direction) -> list[list[Cell]]:
    """Read the grid as lines with the moving edge at index 0."""
    if direction.is_horizontal:
        lines = [list(row) for row in grid]
    else:
        lines = [list(column) for column in zip(*grid)]

    if direction.is_reversed:
        lines = [line[::-1] for line in lines]
    return lines


def _restore_grid(lines: list[Sequence[Cell]], direction: Direction) -> Grid:
    """Inverse of _oriented_lines."""
    if direction.is_reversed:
        lines = [tuple(line)[::-1] for line in lines]

    if direction.is_horizontal:
        return tuple(tuple(line) for line in lines)
    return tuple(tuple(row) for row in zip(*lines))


def _merge_position(line_index: int, merged_index: int, line_length: int, direction: Direction) -> Position:
    """Map a reduced-line index back to a grid position."""
    along = line_length - 1 - merged_index if direction.is_reversed else merged_index
    if direction.is_horizontal:
        return Position(line_index, along)
    return Position(along, line_index)


def move(grid: Sequence[Sequence[Cell]], direction: Direction | str) -> MoveResult:
    """
    Apply a move in one direction.

    Works on any rectangular grid. Scores of all lines are summed and
    merge positions are collected in line order.
    """
    direction = Direction.parse(direction)
    lines = _oriented_lines(grid, direction)

    reduced_lines = []
    merged: list[Position] = []
    score = 0

    for line_index, line in enumerate(lines):
        reduction = reduce_line(line)
        reduced_lines.append(reduction.values)
        score += reduction.score
        merged.extend(
            _merge_position(line_index, idx, len(line), direction)
            for idx in reduction.merged_indices
        )

    new_grid = _restore_grid(reduced_lines, direction)
    return MoveResult(
        grid=new_grid,
        score=score,
        merged=tuple(merged),
        changed=not grids_equal(grid, new_grid),
    )


def legal_directions(grid: Sequence[Sequence[Cell]]) -> list[Direction]:
    """Directions that would change the grid."""
    return [direction for direction in Direction if move(grid, direction).changed]
