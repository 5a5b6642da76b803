"""
Score tracking and high-score persistence.

The tracker keeps the running score of one session and the best score seen so
far. The best score is read from and written back to a store, so it survives
restarts and separate sessions that share the same store.
"""

import json
import os
import tempfile


class HighScoreStore:
    """Interface for anything that can persist a single high score."""

    def load_high_score(self):
        raise NotImplementedError

    def save_high_score(self, value):
        raise NotImplementedError


class MemoryHighScoreStore(HighScoreStore):
    def __init__(self, high_score=0):
        self.high_score = high_score

    def load_high_score(self):
        return self.high_score

    def save_high_score(self, value):
        self.high_score = value


class JsonHighScoreStore(HighScoreStore):
    """Stores the high score as `{"high_score": n}` in a JSON file."""

    def __init__(self, path):
        self.path = path

    def load_high_score(self):
        # A missing or unreadable file just means nobody has scored yet.
        if not os.path.exists(self.path):
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                data = json.load(handle)
            return max(int(data.get("high_score", 0)), 0)
        except (OSError, json.JSONDecodeError, ValueError, TypeError, AttributeError):
            return 0

    def save_high_score(self, value):
        # The real file is only ever replaced whole, never truncated in place.
        directory = os.path.dirname(self.path) or "."
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".high_score.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump({"high_score": int(value)}, handle)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise


class ScoreTracker:
    def __init__(self, store=None):
        self.store = store if store is not None else MemoryHighScoreStore()
        self._score = 0
        self._high_score = self.store.load_high_score()

    def add_score(self, delta):
        """
        Adds merge gains to the running score.

        The high score follows the current score as soon as it is beaten and is
        saved right away. The store is re-read first: another session sharing it
        may have saved a higher score since this one started.
        """
        self._score += delta
        self._sync_high_score()
        if self._score > self._high_score:
            self._high_score = self._score
            self.store.save_high_score(self._high_score)

    def current_score(self):
        return self._score

    def high_score(self):
        return self._high_score

    def override_high_score(self, value):
        """External override (e.g. a reset from the UI); the only way it can go down."""
        self._high_score = value
        self.store.save_high_score(value)

    def _sync_high_score(self):
        self._high_score = max(self._high_score, self.store.load_high_score())

    def reset(self):
        self._score = 0
        self._sync_high_score()
