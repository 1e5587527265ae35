"""
Turn a solved evaluation board into a puzzle with a unique solution.
"""

from __future__ import annotations
import logging
import random
import time
from typing import Optional, Union

from .config import DEFAULT_RETRY_FACTOR, Difficulty
from .evaluation import EvaluationBoard

logger = logging.getLogger(__name__)


def removals_for(difficulty: Union[Difficulty, str]) -> int:
    return Difficulty.parse(difficulty).removals


def reduce_board(
    solved: EvaluationBoard,
    removals: int,
    rng: Optional[random.Random] = None,
    retry_factor: int = DEFAULT_RETRY_FACTOR,
) -> EvaluationBoard:
    """
    Empty up to `removals` cells of a clone of `solved`, one at a time, keeping
    the puzzle uniquely solvable after each removal.

    A removal that breaks uniqueness is reverted and another random cell is
    tried. Every pick counts as an attempt; once more than
    retry_factor * removals attempts have been made the board is returned as
    it stands, possibly with fewer empty cells than requested.
    """
    if removals < 0:
        raise ValueError(f"removals must be >= 0, got {removals}")
    rng = rng or random.Random()
    board = solved.clone()
    budget = retry_factor * removals
    attempts = 0
    removed = 0
    start = time.perf_counter()

    while removed < removals:
        if attempts > budget:
            logger.info("Reduction stopped early: %d of %d cells removed after %d attempts",
                        removed, removals, attempts)
            break
        occupied = board.occupied_coordinates()
        if not occupied:
            break
        row, column = rng.choice(occupied)
        attempts += 1

        saved = board.reset_field(row, column)
        if board.has_unique_solution():
            removed += 1
            continue
        # not unique; revert
        board.set_field(row, column, saved)

    logger.debug("Removed %d/%d cells in %d attempts (%.3fs)",
                 removed, removals, attempts, time.perf_counter() - start)
    return board
