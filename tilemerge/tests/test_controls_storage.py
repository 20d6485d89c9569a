"""
Tests for input translation and best-score storage.
"""

import json

import pytest

from ..controls import direction_from_key, direction_from_swipe
from ..engine_core.action import Direction
from ..storage import BEST_SCORE_KEY, FileScoreStore, InMemoryScoreStore


class TestKeys:
    """Tests for key mapping."""

    @pytest.mark.parametrize("key,expected", [
        ("ArrowUp", Direction.UP),
        ("ArrowDown", Direction.DOWN),
        ("ArrowLeft", Direction.LEFT),
        ("ArrowRight", Direction.RIGHT),
        ("w", Direction.UP),
        ("A", Direction.LEFT),
        ("j", Direction.DOWN),
        (" right ", Direction.RIGHT),
    ])
    def test_bound_keys(self, key, expected):
        assert direction_from_key(key) == expected

    def test_unbound_key(self):
        assert direction_from_key("Enter") is None


class TestSwipes:
    """Tests for swipe mapping."""

    def test_horizontal_swipes(self):
        assert direction_from_swipe(120, 10) == Direction.RIGHT
        assert direction_from_swipe(-45, 20) == Direction.LEFT

    def test_vertical_swipes_grow_downward(self):
        assert direction_from_swipe(5, 80) == Direction.DOWN
        assert direction_from_swipe(-5, -80) == Direction.UP

    def test_short_swipe_ignored(self):
        assert direction_from_swipe(30, 0) is None
        assert direction_from_swipe(0, -12) is None

    def test_diagonal_tie_ignored(self):
        assert direction_from_swipe(50, 50) is None
        assert direction_from_swipe(-50, 50) is None

    def test_custom_threshold(self):
        assert direction_from_swipe(20, 0, min_distance=10) == Direction.RIGHT


class TestScoreStores:
    """Tests for score stores."""

    def test_in_memory_store(self):
        store = InMemoryScoreStore()
        assert store.load(BEST_SCORE_KEY) is None
        store.save(BEST_SCORE_KEY, 256)
        assert store.load(BEST_SCORE_KEY) == 256

    @pytest.mark.parametrize("kind", ["memory", "file"])
    def test_save_if_higher_never_lowers(self, tmp_path, kind):
        store = InMemoryScoreStore() if kind == "memory" else FileScoreStore(tmp_path / "scores.json")

        assert store.save_if_higher(BEST_SCORE_KEY, 128) == 128
        assert store.save_if_higher(BEST_SCORE_KEY, 4) == 128
        assert store.load(BEST_SCORE_KEY) == 128
        assert store.save_if_higher(BEST_SCORE_KEY, 256) == 256

    def test_file_store_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "scores.json"
        store = FileScoreStore(path)

        assert store.load(BEST_SCORE_KEY) is None
        store.save(BEST_SCORE_KEY, 1024)

        assert FileScoreStore(path).load(BEST_SCORE_KEY) == 1024
        assert json.loads(path.read_text()) == {BEST_SCORE_KEY: 1024}

    def test_file_store_keeps_other_keys(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text(json.dumps({"other": 7}))

        FileScoreStore(path).save(BEST_SCORE_KEY, 8)

        assert json.loads(path.read_text()) == {"other": 7, BEST_SCORE_KEY: 8}

    @pytest.mark.parametrize("content", ["not json", "[1, 2]", '{"2048-best": "lots"}'])
    def test_unreadable_file_treated_as_empty(self, tmp_path, content):
        path = tmp_path / "scores.json"
        path.write_text(content)

        assert FileScoreStore(path).load(BEST_SCORE_KEY) is None
