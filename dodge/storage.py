"""
High score stores (get/set of one integer)
"""

from __future__ import annotations

import json
import os

from .configs.game_config import STORAGE_CONFIG


class MemoryHighScoreStore:
    """Keeps the high score in memory only"""

    def __init__(self, initial: int = 0):
        self.value = int(initial)
        self.writes = 0

    def get(self) -> int:
        return self.value

    def set(self, value: int):
        self.value = int(value)
        self.writes += 1


class JsonHighScoreStore:
    """High score in a small JSON file, {"high_score": N}"""

    def __init__(self, path: str = STORAGE_CONFIG["high_score_file"],
                 key: str = STORAGE_CONFIG["high_score_key"], verbose: int = 0):
        self.path = os.path.expanduser(path)
        self.key = key
        self.verbose = verbose

    def get(self) -> int:
        if not os.path.exists(self.path):
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return max(0, int(data.get(self.key, 0)))
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            print(f"[JsonHighScoreStore] WARNING: could not read {self.path} ({exc}), using 0")
            return 0

    def set(self, value: int):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({self.key: int(value)}, f, indent=2)
        if self.verbose > 0:
            print(f"[JsonHighScoreStore] Saved high score {value} to {self.path}")
