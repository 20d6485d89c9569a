"""
Score Store - Key/value persistence for best scores.

The store:
- Maps a string key to an integer
- Knows nothing about sessions or grids
- Is injected into GameSession, never looked up globally

FileScoreStore is the only on-disk persistence in the system:
- Simple JSON file, one object of key -> int
- Written whole on every save
- Unreadable files are treated as empty
"""

from __future__ import annotations
import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


BEST_SCORE_KEY = "2048-best"


class ScoreStore(ABC):
    """Abstract key/value store for integer scores."""

    def __init__(self):
        self._lock = threading.RLock()

    @abstractmethod
    def load(self, key: str) -> int | None:
        """Return the stored value, or None if absent."""
        ...

    @abstractmethod
    def save(self, key: str, value: int) -> None:
        ...

    def save_if_higher(self, key: str, value: int) -> int:
        """
        Store `value` unless the stored one is at least as high.

        Returns the stored value afterwards. Sessions sharing a store go
        through here so a lower score never overwrites a higher one.
        """
        with self._lock:
            current = self.load(key) or 0
            if value > current:
                self.save(key, value)
                return value
            return current


class InMemoryScoreStore(ScoreStore):
    """Process-local store. Used by tests and by the API when no file is configured."""

    def __init__(self, initial: dict[str, int] | None = None):
        super().__init__()
        self._values: dict[str, int] = dict(initial or {})

    def load(self, key: str) -> int | None:
        return self._values.get(key)

    def save(self, key: str, value: int) -> None:
        self._values[key] = int(value)


class FileScoreStore(ScoreStore):
    """
    JSON file store.

    Usage:
        store = FileScoreStore("~/.tilemerge/scores.json")
        best = store.load(BEST_SCORE_KEY) or 0
        store.save(BEST_SCORE_KEY, 1024)
    """

    def __init__(self, path: str | Path | None = None):
        super().__init__()
        if path is None:
            path = Path.home() / ".tilemerge" / "scores.json"
        self.path = Path(path).expanduser()

    def load(self, key: str) -> int | None:
        value = self._read().get(key)
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring non-integer score %r for key %s in %s", value, key, self.path)
            return None

    def save(self, key: str, value: int) -> None:
        with self._lock:
            data = self._read()
            data[key] = int(value)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read score file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Score file %s does not hold an object, ignoring it", self.path)
            return {}
        return data
