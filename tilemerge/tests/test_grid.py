"""
Tests for grid helpers and configuration.
"""

import pytest

from ..engine_core.config import ConfigurationError, GameConfig
from ..engine_core.grid import (
    InvalidGridError,
    Position,
    create_empty,
    empty_cells,
    from_rows,
    grid_sum,
    grids_equal,
    max_tile,
    set_cell,
    tile_count,
    to_rows,
)


class TestGrid:
    """Tests for grid construction and queries."""

    def test_create_empty(self):
        grid = create_empty(3)
        assert grid == ((None,) * 3,) * 3
        assert len(empty_cells(grid)) == 9

    @pytest.mark.parametrize("size", [0, -1])
    def test_create_empty_rejects_non_positive(self, size):
        with pytest.raises(InvalidGridError):
            create_empty(size)

    def test_empty_cells_row_major(self):
        grid = [[None, 2], [None, None]]
        assert empty_cells(grid) == [Position(0, 0), Position(1, 0), Position(1, 1)]

    def test_grids_equal_ignores_storage(self):
        as_lists = [[2, None], [None, 4]]
        as_tuples = ((2, None), (None, 4))
        assert grids_equal(as_lists, as_tuples)
        assert not grids_equal(as_lists, ((2, None), (4, None)))
        assert not grids_equal(as_lists, ((2, None),))

    def test_from_rows_accepts_zero_as_empty(self):
        grid = from_rows([[0, 2], [4, 0]])
        assert grid == ((None, 2), (4, None))

    @pytest.mark.parametrize("rows", [
        [[2, 3]],
        [[1, 2]],
        [[2, 2], [2]],
        [],
        [[-2, 2]],
    ])
    def test_from_rows_rejects_bad_grids(self, rows):
        with pytest.raises(InvalidGridError):
            from_rows(rows)

    def test_set_cell_returns_new_grid(self):
        grid = create_empty(2)
        updated = set_cell(grid, Position(1, 0), 4)
        assert updated == ((None, None), (4, None))
        assert grid == ((None, None), (None, None))

    def test_aggregates(self):
        grid = [[2, None], [8, 4]]
        assert grid_sum(grid) == 14
        assert tile_count(grid) == 3
        assert max_tile(grid) == 8
        assert max_tile(create_empty(2)) == 0

    def test_to_rows(self):
        assert to_rows(((2, None),)) == [[2, None]]


class TestGameConfig:
    """Tests for configuration validation."""

    def test_defaults(self):
        config = GameConfig()
        assert config.size == 4
        assert config.winning_value == 2048
        assert config.initial_tiles == 2

    @pytest.mark.parametrize("kwargs", [
        {"size": 0},
        {"size": -3},
        {"winning_value": 1000},
        {"winning_value": 1},
        {"winning_value": 0},
        {"initial_tiles": 5, "size": 2},
        {"four_probability": 1.5},
    ])
    def test_invalid_config_fails_fast(self, kwargs):
        with pytest.raises(ConfigurationError) as exc_info:
            GameConfig(**kwargs)
        assert exc_info.value.errors

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            GameConfig(size=0)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("TILEMERGE_GRID_SIZE", "5")
        monkeypatch.setenv("TILEMERGE_WINNING_VALUE", "512")
        config = GameConfig.from_env()
        assert config.size == 5
        assert config.winning_value == 512

    def test_from_env_rejects_garbage(self, monkeypatch):
        monkeypatch.setenv("TILEMERGE_GRID_SIZE", "four")
        with pytest.raises(ConfigurationError):
            GameConfig.from_env()
