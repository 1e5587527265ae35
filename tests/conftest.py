# tests/conftest.py
import random
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "sudoku_game" can be imported without installing
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sudoku_game import Grid  # noqa: E402

SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)

PUZZLE = (
    "53..7...."
    "6..195..."
    ".98....6."
    "8...6...3"
    "4..8.3..1"
    "7...2...6"
    ".6....28."
    "...419..5"
    "....8..79"
)


def blank_digits(text, digits):
    """Replace every occurrence of the given digits with '.'."""
    return "".join("." if ch in digits else ch for ch in text)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def solution_grid():
    return Grid.from_string(SOLUTION)


@pytest.fixture
def puzzle_grid():
    return Grid.from_string(PUZZLE)


@pytest.fixture
def swap_puzzle_grid():
    # every 1 and 2 blanked: the 1<->2 swapped grid is also legal, so entries can be wrong
    return Grid.from_string(blank_digits(SOLUTION, "12"))
