"""
storage.py — Highscore persistence.

Both stores expose the same two calls the model needs:
    load() -> int       read once at start-up, 0 when nothing is stored
    save(value)         called on every new record
"""

import json
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_PATH = os.path.join("~", ".neon_snake", "highscore.json")


class HighScoreStore:
    """Keeps the highscore in a small JSON file: {"highscore": 12}."""

    def __init__(self, path: str = DEFAULT_PATH):
        self.path = os.path.expanduser(path)

    def load(self) -> int:
        if not os.path.isfile(self.path):
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return max(0, int(data.get("highscore", 0)))
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.warning("Could not read highscore from %s: %s", self.path, exc)
            return 0

    def save(self, value: int) -> None:
        try:
            folder = os.path.dirname(self.path)
            if folder:
                os.makedirs(folder, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({"highscore": int(value)}, f)
        except OSError as exc:
            logger.warning("Could not save highscore to %s: %s", self.path, exc)


class MemoryHighScoreStore:
    """In-process store; used when nothing should touch the disk."""

    def __init__(self, value: int = 0):
        self.value = value

    def load(self) -> int:
        return self.value

    def save(self, value: int) -> None:
        self.value = value
