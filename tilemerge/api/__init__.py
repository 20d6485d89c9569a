"""
API Module - Client interface.

Exposes the engine via REST API. A client:
1. Creates a game session
2. Sends moves (or raw key/swipe input)
3. Renders the returned grid and tile flags
4. Resets or ends the session

All state is session-scoped. Only the best score is persisted.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    MoveRequest,
    InputRequest,
    # Responses
    GameStateResponse,
    MoveResponse,
    ErrorResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    # Shared
    PositionInfo,
    TileInfo,
    # Enums
    GameStatus,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "MoveRequest",
    "InputRequest",
    # Responses
    "GameStateResponse",
    "MoveResponse",
    "ErrorResponse",
    "SessionListResponse",
    "EndSessionResponse",
    "HealthResponse",
    # Shared
    "PositionInfo",
    "TileInfo",
    # Enums
    "GameStatus",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
