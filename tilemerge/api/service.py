"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session calls
2. Manages sessions
3. Serialises each move under the session lock
4. Formats responses for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    # Requests
    CreateSessionRequest,
    MoveRequest,
    InputRequest,
    # Responses
    GameStateResponse,
    MoveResponse,
    ErrorResponse,
    # Shared
    PositionInfo,
    TileInfo,
    # Enums
    GameStatus,
    ErrorCode,
)
from ..controls import direction_from_key, direction_from_swipe
from ..engine_core.action import Direction
from ..engine_core.config import GameConfig
from ..engine_core.grid import Position, to_rows
from ..session import SessionManager, ManagedSession, GameSnapshot, TurnResult


NO_DIRECTION = "no_direction"


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        state = service.create_session(CreateSessionRequest(size=4))
        response = service.apply_move(state.session_id, MoveRequest(direction="left"))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_session(self, request: CreateSessionRequest) -> GameStateResponse:
        """
        Create a new game session.

        Fields left out of the request fall back to GameConfig.from_env().
        Raises ConfigurationError for an invalid size or winning value.
        """
        defaults = GameConfig.from_env()
        config = GameConfig(
            size=defaults.size if request.size is None else request.size,
            winning_value=defaults.winning_value if request.winning_value is None else request.winning_value,
        )
        session = self.session_manager.create_session(config=config, seed=request.seed)
        return self._snapshot_to_response(session.session_id, session.game.get_state())

    def get_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        with session.lock:
            snapshot = session.game.get_state()
        return self._snapshot_to_response(session_id, snapshot)

    def apply_move(self, session_id: str, request: MoveRequest) -> MoveResponse | ErrorResponse:
        """Apply a named direction."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        try:
            direction = Direction.parse(request.direction)
        except ValueError as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.INVALID_DIRECTION,
                details={"allowed": [d.value for d in Direction]},
            )
        return self._play(session, direction)

    def apply_input(self, session_id: str, request: InputRequest) -> MoveResponse | ErrorResponse:
        """
        Translate a key or swipe into a direction and apply it.

        Input that maps to no direction is answered with accepted=false.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        direction = None
        if request.key is not None:
            direction = direction_from_key(request.key)
        elif request.dx is not None and request.dy is not None:
            direction = direction_from_swipe(request.dx, request.dy, request.min_distance)

        if direction is None:
            with session.lock:
                snapshot = session.game.get_state()
            return MoveResponse(
                session_id=session_id,
                accepted=False,
                reason=NO_DIRECTION,
                game_state=self._snapshot_to_response(session_id, snapshot),
            )
        return self._play(session, direction)

    def reset_game(self, session_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        with session.lock:
            session.game.reset()
            session.touch()
            snapshot = session.game.get_state()
        return self._snapshot_to_response(session_id, snapshot)

    def end_session(self, session_id: str) -> bool:
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _play(self, session: ManagedSession, direction: Direction) -> MoveResponse:
        with session.lock:
            result = session.game.apply_move(direction)
            session.touch()
        return self._turn_result_to_response(session.session_id, result)

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _turn_result_to_response(self, session_id: str, result: TurnResult) -> MoveResponse:
        return MoveResponse(
            session_id=session_id,
            accepted=result.accepted,
            direction=result.direction.value,
            reason=result.reason.value if result.reason else None,
            score_delta=result.score_delta,
            spawn=_position_info(result.spawn),
            merged=[_position_info(p) for p in result.merged],
            reached_win=result.reached_win,
            game_state=self._snapshot_to_response(session_id, result.snapshot),
        )

    def _snapshot_to_response(self, session_id: str, snapshot: GameSnapshot) -> GameStateResponse:
        return GameStateResponse(
            session_id=session_id,
            status=GameStatus(snapshot.phase.value),
            size=snapshot.size,
            grid=to_rows(snapshot.grid),
            score=snapshot.score,
            best_score=snapshot.best_score,
            game_over=snapshot.game_over,
            won=snapshot.won,
            winning_value=snapshot.winning_value,
            turn=snapshot.turn,
            last_spawn=_position_info(snapshot.last_spawn),
            last_merged=[_position_info(p) for p in snapshot.last_merged],
            tiles=[TileInfo.model_validate(tile) for tile in snapshot.tiles()],
        )


def _position_info(position: Position | None) -> PositionInfo | None:
    if position is None:
        return None
    return PositionInfo(row=position.row, col=position.col)
