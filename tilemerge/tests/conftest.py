"""
Pytest fixtures for Tilemerge tests.
"""

import pytest

from ..engine_core.config import GameConfig
from ..engine_core.grid import from_rows
from ..session import GameSession
from ..storage import InMemoryScoreStore


class FixedRandom:
    """
    Random source that replays a fixed sequence of floats.

    Cycles when exhausted so long games stay deterministic.
    """

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def fixed_random():
    """Always picks the first empty cell and spawns a 2."""
    return FixedRandom([0.0])


@pytest.fixture
def score_store() -> InMemoryScoreStore:
    return InMemoryScoreStore()


@pytest.fixture
def stuck_grid():
    """Full 4x4 board with no equal neighbours."""
    return from_rows([
        [2, 4, 2, 4],
        [4, 2, 4, 2],
        [2, 4, 2, 4],
        [4, 2, 4, 2],
    ])


@pytest.fixture
def one_merge_grid():
    """Board where only the top-left pair can merge."""
    return from_rows([
        [2, 2, None, None],
        [None, None, None, None],
        [None, None, None, None],
        [None, None, None, None],
    ])


@pytest.fixture
def session(fixed_random, score_store, one_merge_grid) -> GameSession:
    """4x4 session seeded with one_merge_grid."""
    return GameSession(
        config=GameConfig(size=4),
        store=score_store,
        rng=fixed_random,
        grid=one_merge_grid,
    )
