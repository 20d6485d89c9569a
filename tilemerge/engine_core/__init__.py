"""
Engine Core - Deterministic grid transitions.

The engine is the rules layer that:
1. Represents the board as an immutable Grid
2. Reduces rows/columns toward the moving edge
3. Applies moves in any direction
4. Spawns new tiles from an injected random source
5. Detects wins and dead boards
"""

from .grid import (
    Grid,
    Position,
    InvalidGridError,
    create_empty,
    empty_cells,
    grids_equal,
    from_rows,
    to_rows,
)
from .action import Direction, MoveResult
from .reducer import LineReduction, reduce_line, move, legal_directions
from .spawn import RandomSource, SpawnResult, spawn_tile, spawn_initial_tiles
from .terminal import can_move, has_won
from .config import GameConfig, ConfigurationError

__all__ = [
    "Grid",
    "Position",
    "InvalidGridError",
    "create_empty",
    "empty_cells",
    "grids_equal",
    "from_rows",
    "to_rows",
    "Direction",
    "MoveResult",
    "LineReduction",
    "reduce_line",
    "move",
    "legal_directions",
    "RandomSource",
    "SpawnResult",
    "spawn_tile",
    "spawn_initial_tiles",
    "can_move",
    "has_won",
    "GameConfig",
    "ConfigurationError",
]
