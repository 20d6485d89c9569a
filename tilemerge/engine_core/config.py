"""
Game Configuration - Board size, winning tile and spawn odds.

Validated once at construction; a running game never sees an invalid
configuration.
"""

from __future__ import annotations
import os
from dataclasses import dataclass

from .grid import is_tile_value
from .spawn import DEFAULT_FOUR_PROBABILITY
from .terminal import DEFAULT_WINNING_VALUE


DEFAULT_SIZE = 4
DEFAULT_INITIAL_TILES = 2


class ConfigurationError(ValueError):
    """Raised when game parameters are invalid."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("Invalid game configuration: " + "; ".join(errors))


@dataclass(frozen=True)
class GameConfig:
    """Parameters for one game."""
    size: int = DEFAULT_SIZE
    winning_value: int = DEFAULT_WINNING_VALUE
    initial_tiles: int = DEFAULT_INITIAL_TILES
    four_probability: float = DEFAULT_FOUR_PROBABILITY

    def __post_init__(self):
        self.validate()

    def validate(self):
        errors: list[str] = []

        if not isinstance(self.size, int) or self.size <= 0:
            errors.append(f"size must be a positive integer, got {self.size!r}")
        if not is_tile_value(self.winning_value):
            errors.append(f"winning_value must be a power of 2 >= 2, got {self.winning_value!r}")
        if isinstance(self.size, int) and self.size > 0:
            if not 0 <= self.initial_tiles <= self.size * self.size:
                errors.append(
                    f"initial_tiles must be between 0 and {self.size * self.size}, got {self.initial_tiles}"
                )
        if not 0.0 <= self.four_probability <= 1.0:
            errors.append(f"four_probability must be within [0, 1], got {self.four_probability}")

        if errors:
            raise ConfigurationError(errors)

    @classmethod
    def from_env(cls) -> GameConfig:
        """
        Build a config from environment variables.

        TILEMERGE_GRID_SIZE and TILEMERGE_WINNING_VALUE override the defaults.
        """
        try:
            size = int(os.getenv("TILEMERGE_GRID_SIZE", DEFAULT_SIZE))
            winning_value = int(os.getenv("TILEMERGE_WINNING_VALUE", DEFAULT_WINNING_VALUE))
        except ValueError as e:
            raise ConfigurationError([f"non-integer environment setting: {e}"]) from e
        return cls(size=size, winning_value=winning_value)
