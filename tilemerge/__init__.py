"""
Tilemerge - Sliding-Tile Merge Puzzle Engine

A deterministic rules engine for 2048-style games on an N x N grid.
The engine provides:
- Immutable grid values
- Directional moves with merge scoring
- Random tile spawning behind an injectable source
- Win/loss detection
- A session wrapper with best-score persistence
"""

__version__ = "0.1.0"
