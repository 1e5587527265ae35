"""
Board constants and difficulty profiles.
"""

from __future__ import annotations
from enum import Enum
from typing import Dict, Any, Union

from .errors import UnknownDifficultyError

# ----------------------------
# Config & Constants
# ----------------------------

BOARD_SIZE = 9
AREA_SIZE = 3
DIGITS = tuple(range(1, BOARD_SIZE + 1))

# Raw slot value of an empty cell on the evaluation board
EMPTY = -1

# Difficulty profiles: how many cells the reducer tries to empty, and how many
# pick attempts per requested removal it may spend before giving up.
DIFFICULTY_PROFILES: Dict[str, Dict[str, Any]] = {
    "easy": {
        "display_name": "Easy",
        "removals": 15,
        "retry_factor": 5,
    },
    "medium": {
        "display_name": "Medium",
        "removals": 30,
        "retry_factor": 5,
    },
    "hard": {
        "display_name": "Hard",
        "removals": 40,
        "retry_factor": 5,
    },
}

DEFAULT_RETRY_FACTOR = 5


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    def __str__(self) -> str:
        return DIFFICULTY_PROFILES[self.value]["display_name"]

    @property
    def removals(self) -> int:
        return DIFFICULTY_PROFILES[self.value]["removals"]

    @property
    def retry_factor(self) -> int:
        return DIFFICULTY_PROFILES[self.value]["retry_factor"]

    @classmethod
    def parse(cls, value: Union["Difficulty", str]) -> "Difficulty":
        """Accept a Difficulty or its name in any case ("hard", "Hard", "HARD")."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in DIFFICULTY_PROFILES:
                return cls(key)
        raise UnknownDifficultyError(f"Unknown difficulty: {value!r}")
