"""
Game Session - One play-through of the puzzle.

A turn:
1. Caller supplies a direction
2. Reducer computes the moved grid
3. Unchanged grid -> move rejected, nothing else happens
4. New tile spawns into the moved grid
5. Score and best score update (best score is persisted, never lowered)
6. Win and game-over flags are checked

Phases:
- PLAYING: moves accepted
- WON: sticky for the rest of the game, moves still accepted
- GAME_OVER: no move can change the grid

The session is single-threaded; callers that share one across threads
must hold a lock around each call (see SessionManager).
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from ..engine_core.action import Direction
from ..engine_core.config import GameConfig
from ..engine_core.grid import Cell, Grid, InvalidGridError, Position, create_empty, from_rows
from ..engine_core.reducer import move
from ..engine_core.spawn import RandomSource, spawn_tile, spawn_initial_tiles
from ..engine_core.terminal import can_move, has_won
from ..storage.score_store import BEST_SCORE_KEY, InMemoryScoreStore, ScoreStore
from .tiles import TileView, build_tiles

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """High-level game phases."""
    PLAYING = "playing"
    WON = "won"
    GAME_OVER = "game_over"


class RejectReason(Enum):
    GAME_OVER = "game_over"
    NO_CHANGE = "no_change"


@dataclass(frozen=True)
class GameSnapshot:
    """
    Read-only view of a session at one point in time.

    Everything a renderer needs: the grid, scores, flags, and which
    cells were just spawned or merged.
    """
    grid: Grid
    score: int
    best_score: int
    game_over: bool
    won: bool
    turn: int
    winning_value: int
    last_spawn: Position | None = None
    last_merged: tuple[Position, ...] = field(default_factory=tuple)

    @property
    def size(self) -> int:
        return len(self.grid)

    @property
    def phase(self) -> GamePhase:
        if self.game_over:
            return GamePhase.GAME_OVER
        if self.won:
            return GamePhase.WON
        return GamePhase.PLAYING

    def tiles(self) -> list[TileView]:
        return build_tiles(self.grid, self.turn, self.last_spawn, self.last_merged)


@dataclass(frozen=True)
class TurnResult:
    """
    Result of one apply_move call.

    Contains:
    - Whether the move was accepted (and why not, if rejected)
    - Score earned and where tiles merged and spawned
    - Whether this move won the game or ended it
    - Snapshot of the session after the move
    """
    accepted: bool
    direction: Direction
    snapshot: GameSnapshot
    score_delta: int = 0
    spawn: Position | None = None
    merged: tuple[Position, ...] = field(default_factory=tuple)
    reached_win: bool = False
    reason: RejectReason | None = None

    @property
    def game_over(self) -> bool:
        return self.snapshot.game_over

    @classmethod
    def rejected(cls, direction: Direction, snapshot: GameSnapshot, reason: RejectReason) -> TurnResult:
        return cls(accepted=False, direction=direction, snapshot=snapshot, reason=reason)


class GameSession:
    """
    Mutable wrapper around the pure rules.

    Usage:
        session = GameSession(GameConfig(size=4), store=FileScoreStore())

        result = session.apply_move("left")
        if result.accepted:
            render(result.snapshot)

        session.reset()
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        store: ScoreStore | None = None,
        rng: RandomSource | None = None,
        grid: Sequence[Sequence[Cell]] | None = None,
    ):
        seed_grid = from_rows(grid) if grid is not None else None
        if seed_grid is not None:
            if len(seed_grid) != len(seed_grid[0]):
                raise InvalidGridError(
                    f"Session grids must be square, got {len(seed_grid)}x{len(seed_grid[0])}"
                )
            if config is None:
                config = GameConfig(size=len(seed_grid))
            elif config.size != len(seed_grid):
                raise InvalidGridError(
                    f"Grid is {len(seed_grid)}x{len(seed_grid)} but config size is {config.size}"
                )

        self.config = config or GameConfig()
        self.store = store or InMemoryScoreStore()
        self.rng = rng or random.Random()

        self.best_score = max(0, self.store.load(BEST_SCORE_KEY) or 0)
        self.turn = 0
        self._start(seed_grid)

    def _start(self, seed_grid: Grid | None = None):
        if seed_grid is None:
            seed_grid = spawn_initial_tiles(
                create_empty(self.config.size),
                self.config.initial_tiles,
                self.rng,
                self.config.four_probability,
            )
        self.grid: Grid = seed_grid
        self.score = 0
        self.game_over = False
        self.won = has_won(self.grid, self.config.winning_value)
        self.last_spawn: Position | None = None
        self.last_merged: tuple[Position, ...] = ()

    @property
    def phase(self) -> GamePhase:
        return self.get_state().phase

    def get_state(self) -> GameSnapshot:
        """Snapshot of the current session."""
        return GameSnapshot(
            grid=self.grid,
            score=self.score,
            best_score=self.best_score,
            game_over=self.game_over,
            won=self.won,
            turn=self.turn,
            winning_value=self.config.winning_value,
            last_spawn=self.last_spawn,
            last_merged=self.last_merged,
        )

    def apply_move(self, direction: Direction | str) -> TurnResult:
        """
        Play one turn.

        Raises ValueError only for an unknown direction name; everything
        else is reported through the TurnResult.
        """
        direction = Direction.parse(direction)

        if self.game_over and not self.won:
            logger.debug("Rejected %s: game is over", direction.value)
            return TurnResult.rejected(direction, self.get_state(), RejectReason.GAME_OVER)

        result = move(self.grid, direction)
        if not result.changed:
            if not self.game_over and not can_move(self.grid):
                self.game_over = True
                logger.info("Game over with score %d", self.score)
            logger.debug("Rejected %s: grid unchanged", direction.value)
            return TurnResult.rejected(direction, self.get_state(), RejectReason.NO_CHANGE)

        spawned = spawn_tile(result.grid, self.rng, self.config.four_probability)
        self.grid = spawned.grid
        self.turn += 1
        self.last_spawn = spawned.position
        self.last_merged = result.merged

        self.score += result.score
        self._update_best_score()

        reached_win = False
        if not self.won and has_won(self.grid, self.config.winning_value):
            self.won = True
            reached_win = True
            logger.info("Reached %d with score %d", self.config.winning_value, self.score)

        if not can_move(self.grid):
            self.game_over = True
            logger.info("Game over with score %d", self.score)

        return TurnResult(
            accepted=True,
            direction=direction,
            snapshot=self.get_state(),
            score_delta=result.score,
            spawn=spawned.position,
            merged=result.merged,
            reached_win=reached_win,
        )

    def _update_best_score(self):
        stored = self.store.save_if_higher(BEST_SCORE_KEY, self.score)
        if self.score > self.best_score and self.score == stored:
            logger.info("New best score %d", self.score)
        self.best_score = max(self.best_score, stored)

    def reset(self):
        """Start a new game with fresh random tiles. Best score is kept."""
        self.turn += 1
        self._start()
        logger.debug("Session reset, best score %d", self.best_score)
