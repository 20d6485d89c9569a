"""
FastAPI Application - REST API for presentation clients.

Endpoints:
    GET    /api/v1/health                  Health check
    POST   /api/v1/sessions                Create game session
    GET    /api/v1/sessions                List sessions
    GET    /api/v1/sessions/{id}           Get game state
    DELETE /api/v1/sessions/{id}           End session
    POST   /api/v1/sessions/{id}/moves     Apply a direction
    POST   /api/v1/sessions/{id}/input     Apply a key press or swipe
    POST   /api/v1/sessions/{id}/reset     Start a new game in the session

Rendering and input capture live in the client. The API returns the grid,
the score, and per-turn tile ids with is_new / is_merged flags so the
client can pick its own animations.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..engine_core.config import ConfigurationError
from ..session import SessionManager
from ..storage import FileScoreStore, InMemoryScoreStore
from .service import APIService
from .schemas import (
    # Request models
    CreateSessionRequest,
    MoveRequest,
    InputRequest,
    # Response models
    GameStateResponse,
    MoveResponse,
    ErrorResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    # Enums
    ErrorCode,
)

# Environment configuration
TILEMERGE_ENV = os.getenv("TILEMERGE_ENV", "development")
TILEMERGE_SCORE_FILE = os.getenv("TILEMERGE_SCORE_FILE", None)
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

STATUS_BY_ERROR_CODE = {
    ErrorCode.SESSION_NOT_FOUND: 404,
    ErrorCode.INVALID_DIRECTION: 400,
    ErrorCode.INVALID_CONFIG: 400,
    ErrorCode.VALIDATION_ERROR: 400,
}


def create_app(service: Optional[APIService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Tilemerge API",
        description="""
Sliding-tile merge puzzle engine.

## Turn Flow

1. `POST /sessions` returns a board with two tiles
2. `POST /sessions/{id}/moves` with `up`, `down`, `left` or `right`
3. Moves that change nothing come back with `accepted=false, reason=no_change`
4. `game_state.won` turns true once the winning tile appears; play may continue
5. `game_state.game_over` turns true when no move can change the board

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `INVALID_DIRECTION` | Direction is not up/down/left/right |
| `INVALID_CONFIG` | Size or winning value rejected |
| `VALIDATION_ERROR` | Request body is malformed |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if service is None:
        store = FileScoreStore(TILEMERGE_SCORE_FILE) if TILEMERGE_SCORE_FILE else InMemoryScoreStore()
        service = APIService(session_manager=SessionManager(store=store))
    api_service = service

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def error_json(response: ErrorResponse) -> JSONResponse:
        return make_error_response(
            response.error_code,
            response.error,
            status_code=STATUS_BY_ERROR_CODE.get(response.error_code, 400),
            details=response.details,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Invalid request",
            status_code=STATUS_BY_ERROR_CODE[ErrorCode.VALIDATION_ERROR],
            details={"errors": [
                {"loc": [str(part) for part in err["loc"]], "msg": err["msg"]}
                for err in exc.errors()
            ]},
        )

    # =========================================================================
    # Health
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check",
    )
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="tilemerge", version=__version__)

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=GameStateResponse,
        responses={400: {"model": ErrorResponse, "description": "Invalid board parameters"}},
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(
        body: Optional[CreateSessionRequest] = None,
    ) -> Union[GameStateResponse, JSONResponse]:
        """Create a session with two random tiles on an empty board."""
        try:
            return api_service.create_session(body or CreateSessionRequest())
        except ConfigurationError as e:
            return make_error_response(
                ErrorCode.INVALID_CONFIG,
                str(e),
                details={"errors": e.errors},
            )

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get game state",
    )
    async def get_state(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        response = api_service.get_state(session_id)
        if isinstance(response, ErrorResponse):
            return error_json(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Loop Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/moves",
        response_model=MoveResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Unknown direction"},
            404: {"model": ErrorResponse, "description": "Session not found"},
        },
        tags=["Game Loop"],
        summary="Apply a move",
    )
    async def apply_move(session_id: str, body: MoveRequest) -> Union[MoveResponse, JSONResponse]:
        """
        Slide all tiles toward one edge.

        A move that changes nothing is not an error: it is returned with
        `accepted=false`.
        """
        response = api_service.apply_move(session_id, body)
        if isinstance(response, ErrorResponse):
            return error_json(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/input",
        response_model=MoveResponse,
        responses={404: {"model": ErrorResponse, "description": "Session not found"}},
        tags=["Game Loop"],
        summary="Apply a key press or swipe",
    )
    async def apply_input(session_id: str, body: InputRequest) -> Union[MoveResponse, JSONResponse]:
        """
        Translate raw input into a move.

        **Request Body:**
        ```json
        {"key": "ArrowLeft"}
        {"dx": -120, "dy": 14}
        ```
        """
        response = api_service.apply_input(session_id, body)
        if isinstance(response, ErrorResponse):
            return error_json(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/reset",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Start a new game in this session",
    )
    async def reset_game(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        response = api_service.reset_game(session_id)
        if isinstance(response, ErrorResponse):
            return error_json(response)
        return response

    return app


# For running directly: uvicorn tilemerge.api.app:app
app = create_app()
