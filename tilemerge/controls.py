"""
Controls - Translate raw input into move directions.

Keys: arrow key names (ArrowUp, Up, ...), WASD and vi-style hjkl.
Swipes: the axis with the strictly larger absolute delta wins, and that
delta must exceed the minimum distance. Screen coordinates grow
downward, so a positive dy is a swipe down.
"""

from __future__ import annotations

from .engine_core.action import Direction


MIN_SWIPE_DISTANCE = 30

KEY_DIRECTIONS: dict[str, Direction] = {
    "arrowup": Direction.UP,
    "arrowdown": Direction.DOWN,
    "arrowleft": Direction.LEFT,
    "arrowright": Direction.RIGHT,
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
    "k": Direction.UP,
    "j": Direction.DOWN,
    "h": Direction.LEFT,
    "l": Direction.RIGHT,
}


def direction_from_key(key: str) -> Direction | None:
    """Map a key name to a direction, None for unbound keys."""
    return KEY_DIRECTIONS.get(key.strip().lower())


def direction_from_swipe(dx: float, dy: float, min_distance: float = MIN_SWIPE_DISTANCE) -> Direction | None:
    """Map a swipe vector to a direction, None for short or diagonal swipes."""
    if abs(dx) > abs(dy) and abs(dx) > min_distance:
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    if abs(dy) > abs(dx) and abs(dy) > min_distance:
        return Direction.DOWN if dy > 0 else Direction.UP
    return None
