"""
Spawn Generator - Places new tiles on the board.

Randomness comes from an injected source so tests can replay exact
sequences. Any object with a random() method returning floats in
[0, 1) works; random.Random is the default.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Protocol, Sequence

from .grid import Cell, Grid, Position, empty_cells, set_cell


BASE_TILE = 2
HIGH_TILE = 4
DEFAULT_FOUR_PROBABILITY = 0.1


class RandomSource(Protocol):
    def random(self) -> float: ...


@dataclass(frozen=True)
class SpawnResult:
    """New grid plus where the tile landed (None when the grid was full)."""
    grid: Grid
    position: Position | None = None

    @property
    def spawned(self) -> bool:
        return self.position is not None


def spawn_tile(
    grid: Sequence[Sequence[Cell]],
    rng: RandomSource | None = None,
    four_probability: float = DEFAULT_FOUR_PROBABILITY,
) -> SpawnResult:
    """
    Write a 2 (or, with four_probability, a 4) into a uniformly chosen empty cell.

    A full grid is returned unchanged with no position.
    """
    rng = rng or random
    cells = empty_cells(grid)
    if not cells:
        return SpawnResult(grid=tuple(tuple(row) for row in grid), position=None)

    index = min(int(rng.random() * len(cells)), len(cells) - 1)
    position = cells[index]
    value = BASE_TILE if rng.random() < 1.0 - four_probability else HIGH_TILE

    return SpawnResult(grid=set_cell(grid, position, value), position=position)


def spawn_initial_tiles(
    grid: Sequence[Sequence[Cell]],
    count: int,
    rng: RandomSource | None = None,
    four_probability: float = DEFAULT_FOUR_PROBABILITY,
) -> Grid:
    """Spawn `count` tiles one after another, stopping early if the grid fills."""
    current: Grid = tuple(tuple(row) for row in grid)
    for _ in range(count):
        result = spawn_tile(current, rng, four_probability)
        if not result.spawned:
            break
        current = result.grid
    return current
