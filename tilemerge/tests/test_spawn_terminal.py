"""
Tests for tile spawning and terminal detection.
"""

import random

from .conftest import FixedRandom
from ..engine_core.grid import Position, create_empty, empty_cells, from_rows, tile_count
from ..engine_core.spawn import spawn_initial_tiles, spawn_tile
from ..engine_core.terminal import can_move, has_won


class TestSpawn:
    """Tests for spawn_tile."""

    def test_spawns_two_in_first_empty_cell(self, fixed_random):
        grid = from_rows([[2, None], [None, None]])
        result = spawn_tile(grid, fixed_random)

        assert result.position == Position(0, 1)
        assert result.grid == ((2, 2), (None, None))
        assert result.spawned

    def test_high_draw_spawns_four(self):
        grid = create_empty(2)
        # 0.99 -> last empty cell; 0.95 -> a 4
        result = spawn_tile(grid, FixedRandom([0.99, 0.95]))
        assert result.position == Position(1, 1)
        assert result.grid[1][1] == 4

    def test_value_threshold_is_ninety_percent(self):
        grid = create_empty(2)
        assert spawn_tile(grid, FixedRandom([0.0, 0.899])).grid[0][0] == 2
        assert spawn_tile(grid, FixedRandom([0.0, 0.9])).grid[0][0] == 4

    def test_full_grid_is_noop(self, stuck_grid):
        result = spawn_tile(stuck_grid, FixedRandom([0.5]))
        assert result.position is None
        assert not result.spawned
        assert result.grid == stuck_grid

    def test_does_not_touch_existing_tiles(self):
        rng = random.Random(1)
        grid = from_rows([[2, None, 8], [None, 16, None], [4, None, None]])
        for _ in range(50):
            result = spawn_tile(grid, rng)
            assert tile_count(result.grid) == tile_count(grid) + 1
            for r, row in enumerate(grid):
                for c, value in enumerate(row):
                    if value is not None:
                        assert result.grid[r][c] == value

    def test_spawn_is_uniform_over_empty_cells(self):
        rng = random.Random(99)
        grid = create_empty(2)
        counts = {p: 0 for p in empty_cells(grid)}
        for _ in range(4000):
            counts[spawn_tile(grid, rng).position] += 1
        assert all(800 < count < 1200 for count in counts.values())

    def test_four_probability_respected(self):
        rng = random.Random(5)
        grid = create_empty(1)
        fours = sum(spawn_tile(grid, rng).grid[0][0] == 4 for _ in range(5000))
        assert 350 < fours < 650

    def test_initial_tiles(self, fixed_random):
        grid = spawn_initial_tiles(create_empty(4), 2, fixed_random)
        assert grid[0][:2] == (2, 2)
        assert tile_count(grid) == 2

    def test_initial_tiles_stop_when_full(self, fixed_random):
        grid = spawn_initial_tiles(create_empty(1), 3, fixed_random)
        assert grid == ((2,),)


class TestTerminal:
    """Tests for can_move and has_won."""

    def test_empty_cell_allows_move(self):
        assert can_move([[2, 4], [8, None]])

    def test_horizontal_pair_allows_move(self):
        assert can_move([[2, 2], [4, 8]])

    def test_vertical_pair_allows_move(self):
        assert can_move([[2, 4], [2, 8]])

    def test_stuck_board(self, stuck_grid):
        assert not can_move(stuck_grid)

    def test_has_won_default_threshold(self):
        assert has_won([[2048, None], [None, None]])
        assert not has_won([[1024, 1024], [None, None]])

    def test_has_won_custom_threshold(self):
        assert has_won([[None, 64]], winning_value=64)
        assert not has_won([[None, 32]], winning_value=64)
