"""Best-score persistence.

The session only ever sees validated non-negative integers: stores turn
missing or unreadable data into ``0`` themselves.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Union


LOGGER = logging.getLogger(__name__)

HIGHSCORE_KEY = "high_score"


class HighScoreStore:
    """Interface for loading and saving the best score."""

    def load(self) -> int:
        raise NotImplementedError

    def save(self, value: int) -> None:
        raise NotImplementedError


class MemoryHighScoreStore(HighScoreStore):
    def __init__(self, value: int = 0) -> None:
        self.value = max(0, int(value))
        self.saves = 0

    def load(self) -> int:
        return self.value

    def save(self, value: int) -> None:
        self.value = int(value)
        self.saves += 1


class JsonHighScoreStore(HighScoreStore):
    """Stores ``{"high_score": <int>}`` in a JSON file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> int:
        if not self.path.exists():
            return 0
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            LOGGER.warning("Ignoring unreadable high score file %s: %s", self.path, exc)
            return 0
        value = data.get(HIGHSCORE_KEY) if isinstance(data, dict) else None
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            LOGGER.warning("Ignoring invalid high score %r in %s", value, self.path)
            return 0
        return value

    def save(self, value: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({HIGHSCORE_KEY: int(value)}), encoding="utf-8")
        except OSError as exc:
            LOGGER.warning("Could not save high score to %s: %s", self.path, exc)


class HighScoreTracker:
    """Keeps the best score and writes every improvement through to a store."""

    def __init__(self, store: Optional[HighScoreStore] = None) -> None:
        self.store = store or MemoryHighScoreStore()
        self.value = max(0, int(self.store.load()))

    def offer(self, score: int) -> bool:
        """Record ``score``; return ``True`` when it beat the stored best."""
        if score <= self.value:
            return False
        self.value = int(score)
        self.store.save(self.value)
        return True
