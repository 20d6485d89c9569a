"""
Storage Module - Best-score persistence.

Full game state is never persisted. The only stored value is the
best score, behind the ScoreStore interface.
"""

from .score_store import ScoreStore, InMemoryScoreStore, FileScoreStore, BEST_SCORE_KEY

__all__ = [
    "ScoreStore",
    "InMemoryScoreStore",
    "FileScoreStore",
    "BEST_SCORE_KEY",
]
