"""
Compact board used while generating puzzles.

Per cell it keeps a raw slot (EMPTY when unset), a 9-entry forbidden mask and a
shuffled option order. The option order is built once when a board is created
and shared by every clone, so a whole generation run draws on one shuffle.
"""

from __future__ import annotations
import logging
import random
import time
from typing import List, Tuple, Optional, Iterable

import numpy as np

from .config import BOARD_SIZE, AREA_SIZE, DIGITS, EMPTY
from .errors import GenerationError
from .grid import Grid, Coordinate, check_index, check_digit, area_origin

logger = logging.getLogger(__name__)


def _shuffled_options(rng: random.Random) -> np.ndarray:
    options = np.empty((BOARD_SIZE, BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
    digits = list(DIGITS)
    for r in range(BOARD_SIZE):
        for c in range(BOARD_SIZE):
            rng.shuffle(digits)
            options[r, c] = digits
    return options


def _next_cell(row: int, column: int) -> Optional[Tuple[int, int]]:
    if column + 1 < BOARD_SIZE:
        return (row, column + 1)
    if row + 1 < BOARD_SIZE:
        return (row + 1, 0)
    return None


class EvaluationBoard:
    """
    Generation-time board with eager constraint propagation.
    Clones copy values and forbidden masks; the option table is shared.
    """

    def __init__(self, fields: np.ndarray, unavailable: np.ndarray, options: np.ndarray):
        self.fields = fields
        self.unavailable = unavailable
        self.options = options

    @classmethod
    def empty(cls, rng: Optional[random.Random] = None) -> "EvaluationBoard":
        rng = rng or random.Random()
        return cls(
            np.full((BOARD_SIZE, BOARD_SIZE), EMPTY, dtype=np.int8),
            np.zeros((BOARD_SIZE, BOARD_SIZE, BOARD_SIZE), dtype=np.bool_),
            _shuffled_options(rng),
        )

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Optional[int]]],
                  rng: Optional[random.Random] = None) -> "EvaluationBoard":
        """Build from nested lists (0 or None for empty cells), propagating every digit."""
        board = cls.empty(rng)
        for r, row in enumerate(rows):
            for c, v in enumerate(row):
                if v:
                    board.set_field(r, c, v)
        return board

    @classmethod
    def from_grid(cls, grid: Grid, rng: Optional[random.Random] = None) -> "EvaluationBoard":
        return cls.from_rows(grid.to_list(), rng)

    def clone(self) -> "EvaluationBoard":
        return EvaluationBoard(self.fields.copy(), self.unavailable.copy(), self.options)

    # ---- cell access ----

    def get_field(self, row: int, column: int) -> int:
        return int(self.fields[check_index(row, "row"), check_index(column, "column")])

    def is_empty(self, row: int, column: int) -> bool:
        return self.fields[check_index(row, "row"), check_index(column, "column")] == EMPTY

    def is_available(self, row: int, column: int, value: int) -> bool:
        row, column = check_index(row, "row"), check_index(column, "column")
        return not self.unavailable[row, column, check_digit(value) - 1]

    def unoccupied_coordinates(self) -> List[Coordinate]:
        rows, cols = np.nonzero(self.fields == EMPTY)
        return [Coordinate(int(r), int(c)) for r, c in zip(rows, cols)]

    def occupied_coordinates(self) -> List[Coordinate]:
        rows, cols = np.nonzero(self.fields != EMPTY)
        return [Coordinate(int(r), int(c)) for r, c in zip(rows, cols)]

    def is_filled(self) -> bool:
        return not np.any(self.fields == EMPTY)

    def to_grid(self) -> Grid:
        return Grid.from_evaluation_board(self)

    # ---- propagation ----

    def set_field(self, row: int, column: int, value: int) -> None:
        """Place value and forbid it across the row, the column and the box."""
        row = check_index(row, "row")
        column = check_index(column, "column")
        value = check_digit(value)
        idx = value - 1
        self.fields[row, column] = value
        self.unavailable[row, :, idx] = True
        self.unavailable[:, column, idx] = True
        br, bc = area_origin(row, column)
        self.unavailable[br:br + AREA_SIZE, bc:bc + AREA_SIZE, idx] = True

    def reset_field(self, row: int, column: int) -> int:
        """
        Clear the cell and return the digit it held. The forbidden layer of that
        digit is rebuilt from the copies of it still on the board, so peers of
        another copy stay forbidden.
        """
        row, column = check_index(row, "row"), check_index(column, "column")
        previous = int(self.fields[row, column])
        if previous == EMPTY:
            return EMPTY
        self.fields[row, column] = EMPTY
        self.unavailable[:, :, previous - 1] = self._forbidden_layer(previous)
        return previous

    def _forbidden_layer(self, value: int) -> np.ndarray:
        placed = self.fields == value
        rows = placed.any(axis=1)
        cols = placed.any(axis=0)
        per_area = placed.reshape(AREA_SIZE, AREA_SIZE, AREA_SIZE, AREA_SIZE).any(axis=(1, 3))
        areas = np.repeat(np.repeat(per_area, AREA_SIZE, axis=0), AREA_SIZE, axis=1)
        return rows[:, None] | cols[None, :] | areas

    # ----------------------------
    # Full-grid generator
    # ----------------------------

    @classmethod
    def generate_new(cls, rng: Optional[random.Random] = None) -> "EvaluationBoard":
        """Fresh shuffled board, solved. A new shuffle gives a different grid."""
        return cls.empty(rng).generate_solved()

    def generate_solved(self) -> "EvaluationBoard":
        """
        Fill the board via randomized backtracking in row-major order, trying each
        cell's digits in its shuffled option order. Returns a new solved board;
        self is not modified. Stops at the first complete grid.
        """
        start = time.perf_counter()
        found = self._generate(0, 0)
        if found is None:
            raise GenerationError("Backtracking search found no valid grid")
        if found is self:
            found = self.clone()
        logger.debug("Generated solved grid in %.3fs", time.perf_counter() - start)
        return found

    def _generate(self, row: int, column: int) -> Optional["EvaluationBoard"]:
        # one frame per cell; cells before (row, column) are already placed
        following = _next_cell(row, column)
        if not self.is_empty(row, column):
            return self if following is None else self._generate(*following)
        for value in self.options[row, column]:
            value = int(value)
            if self.unavailable[row, column, value - 1]:
                continue
            branch = self.clone()
            branch.set_field(row, column, value)
            if following is None:
                return branch
            result = branch._generate(*following)
            if result is not None:
                return result
        return None

    def solve_grid(self) -> Grid:
        return self.generate_solved().to_grid()

    # ----------------------------
    # Uniqueness search
    # ----------------------------

    def count_solutions(self, limit: int = 2) -> int:
        """
        Count completions of the empty cells, stopping as soon as the count
        exceeds limit - 1. Empty cells are visited in row-major order; digits
        ascend.
        """
        empties = self.unoccupied_coordinates()
        count = 0

        def backtrack(board: EvaluationBoard, index: int) -> bool:
            """Return True to abort the whole search."""
            nonlocal count
            if index >= len(empties):
                count += 1
                return count >= limit
            r, c = empties[index]
            for idx in np.flatnonzero(~board.unavailable[r, c]):
                branch = board.clone()
                branch.set_field(r, c, int(idx) + 1)
                if backtrack(branch, index + 1):
                    return True
            return False

        if empties:
            backtrack(self, 0)
        return count

    def has_unique_solution(self) -> bool:
        """
        True iff exactly one completion exists. A board with no empty cells has
        nothing left to verify and reports False. Expensive; meant for puzzle
        reduction, not for play-time checks.
        """
        if self.is_filled():
            return False
        count = self.count_solutions(limit=2)
        logger.debug("Uniqueness search: %d solution(s) found (cap 2)", count)
        return count == 1

    def __repr__(self) -> str:
        rows = ["".join("." if v == EMPTY else str(int(v)) for v in row) for row in self.fields]
        return f"EvaluationBoard({''.join(rows)!r})"
