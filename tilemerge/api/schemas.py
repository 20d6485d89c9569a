"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between presentation clients and the
engine. Clients render from GameStateResponse and animate from the
tiles list (is_new / is_merged).

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or was ended
- INVALID_DIRECTION: Direction name is not up/down/left/right
- INVALID_CONFIG: Board size or winning value rejected
- VALIDATION_ERROR: Request body is malformed
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class GameStatus(str, Enum):
    """Game status values."""
    PLAYING = "playing"
    WON = "won"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_DIRECTION = "INVALID_DIRECTION"
    INVALID_CONFIG = "INVALID_CONFIG"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class PositionInfo(BaseModel):
    """A cell coordinate."""
    row: int
    col: int

    model_config = {"from_attributes": True}


class TileInfo(BaseModel):
    """A tile for display. Ids are only stable within one turn."""
    id: str
    value: int
    row: int
    col: int
    is_new: bool = False
    is_merged: bool = False

    model_config = {"from_attributes": True}


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new game session."""
    size: Optional[int] = Field(None, description="Board width and height (default from TILEMERGE_GRID_SIZE, else 4)")
    winning_value: Optional[int] = Field(
        None, description="Tile value that wins the game (default from TILEMERGE_WINNING_VALUE, else 2048)"
    )
    seed: Optional[int] = Field(None, description="Seed for reproducible spawns")


class MoveRequest(BaseModel):
    """Request to apply a move."""
    direction: str = Field(..., description="up, down, left or right")


class InputRequest(BaseModel):
    """Raw input to translate into a move: a key name or a swipe vector."""
    key: Optional[str] = Field(None, description="Key name, e.g. ArrowLeft or w")
    dx: Optional[float] = Field(None, description="Swipe delta x in logical units")
    dy: Optional[float] = Field(None, description="Swipe delta y in logical units")
    min_distance: float = Field(30, ge=0, description="Minimum swipe distance")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Complete game state for display."""
    session_id: str
    status: GameStatus
    size: int
    grid: list[list[Optional[int]]]
    score: int = 0
    best_score: int = 0
    game_over: bool = False
    won: bool = False
    winning_value: int = 2048
    turn: int = 0
    last_spawn: Optional[PositionInfo] = None
    last_merged: list[PositionInfo] = Field(default_factory=list)
    tiles: list[TileInfo] = Field(default_factory=list)
    api_version: str = "v1"


class MoveResponse(BaseModel):
    """
    Result of a move.

    accepted=false with reason "no_change" means the move could not slide
    or merge anything; "game_over" means the game has ended;
    "no_direction" means the input did not map to a direction.
    """
    session_id: str
    accepted: bool
    direction: Optional[str] = None
    reason: Optional[str] = None
    score_delta: int = 0
    spawn: Optional[PositionInfo] = None
    merged: list[PositionInfo] = Field(default_factory=list)
    reached_win: bool = False
    game_state: GameStateResponse
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
