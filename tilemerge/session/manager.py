"""
Session Manager - Creates and tracks game sessions.

LIFECYCLE:
1. Client creates a session -> new GameSession with fresh tiles
2. Client sends moves -> applied one at a time under the session lock
3. Client resets -> same session id, new board, best score kept
4. Client ends the session, or it goes stale -> removed from memory

PERSISTENCE RULES:
- Sessions are in-memory only
- The shared ScoreStore keeps the best score across sessions
"""

from __future__ import annotations
import logging
import random
import threading
import time
import uuid
from dataclasses import dataclass, field

from ..engine_core.config import GameConfig
from ..storage.score_store import InMemoryScoreStore, ScoreStore
from .game import GameSession

logger = logging.getLogger(__name__)


@dataclass
class ManagedSession:
    """
    A tracked game session.

    The lock makes each move a critical section when the session is
    reached from several request threads.
    """
    session_id: str
    game: GameSession
    created_at: float
    last_active: float = 0.0
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def touch(self):
        self.last_active = time.time()


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions sharing one best-score store
    - Look sessions up by id
    - Clean up ended and stale sessions
    """

    def __init__(self, store: ScoreStore | None = None):
        self.store = store or InMemoryScoreStore()
        self._sessions: dict[str, ManagedSession] = {}

    def create_session(
        self,
        config: GameConfig | None = None,
        seed: int | None = None,
    ) -> ManagedSession:
        """
        Create a new game session.

        Args:
            config: Board parameters (defaults to 4x4 / 2048)
            seed: Seed for the spawn random source, for reproducible games

        Returns:
            New ManagedSession with the opening tiles placed
        """
        session_id = str(uuid.uuid4())
        game = GameSession(
            config=config,
            store=self.store,
            rng=random.Random(seed),
        )
        now = time.time()
        session = ManagedSession(
            session_id=session_id,
            game=game,
            created_at=now,
            last_active=now,
        )
        self._sessions[session_id] = session
        logger.info("Created session %s (%dx%d)", session_id, game.config.size, game.config.size)
        return session

    def get_session(self, session_id: str) -> ManagedSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """Remove a session. Returns False if it did not exist."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        logger.info("Ended session %s with score %d", session_id, session.game.score)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of tracked sessions."""
        return list(self._sessions)

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> list[str]:
        """
        Remove sessions idle for longer than max_age_seconds.

        Returns the removed IDs.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.last_active > max_age_seconds
        ]
        for session_id in to_remove:
            self.end_session(session_id)
        return to_remove
