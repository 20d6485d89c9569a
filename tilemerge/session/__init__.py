"""
Session Module - Manages game sessions.

A session represents one play-through of the puzzle:
- Created with two random tiles on an empty board
- Holds the current grid, score and flags
- Applies one move at a time
- Reset in place for a new game

Sessions are EPHEMERAL:
- No persistence of grids
- Only the best score outlives a session (through a ScoreStore)
"""

from .game import GameSession, GameSnapshot, GamePhase, TurnResult, RejectReason
from .manager import SessionManager, ManagedSession
from .tiles import TileView, build_tiles

__all__ = [
    "GameSession",
    "GameSnapshot",
    "GamePhase",
    "TurnResult",
    "RejectReason",
    "SessionManager",
    "ManagedSession",
    "TileView",
    "build_tiles",
]
