"""
One game of Sudoku: the live grid, the hidden solution and the move history.

The presentation layer only talks to Sudoku. It asks for a new game, submits
moves, asks for hints and undo, and reads cell values and status back.
"""

from __future__ import annotations
import logging
import random
import time
from enum import Enum
from typing import List, Tuple, Optional, Iterable, Union

import numpy as np

from .config import Difficulty
from .evaluation import EvaluationBoard
from .grid import Grid, Move, Coordinate, check_index
from .reducer import reduce_board
from .rules import MoveResult, apply_move

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"


class Sudoku:
    """
    A single session. The solution grid is never modified; a new game is a new
    Sudoku instance.
    """

    def __init__(
        self,
        board: Grid,
        solution: Grid,
        moves: Optional[Iterable[Move]] = None,
        rng: Optional[random.Random] = None,
        difficulty: Optional[Difficulty] = None,
    ):
        if not solution.is_filled():
            raise ValueError("Solution grid must be completely filled")
        self._board = board.copy()
        self._solution = solution.copy()
        self._moves: List[Move] = list(moves or [])
        self._rng = rng or random.Random()
        self.difficulty = difficulty
        self.status = GameStatus.WON if self.is_finished() else GameStatus.IN_PROGRESS

    @classmethod
    def new_game(cls, difficulty: Union[Difficulty, str], rng: Optional[random.Random] = None) -> "Sudoku":
        """Generate a solved grid, reduce it for the difficulty and start a session."""
        difficulty = Difficulty.parse(difficulty)
        rng = rng or random.Random()
        start = time.perf_counter()

        solved = EvaluationBoard.generate_new(rng)
        puzzle = reduce_board(solved, difficulty.removals, rng=rng, retry_factor=difficulty.retry_factor)

        game = cls(puzzle.to_grid(), solved.to_grid(), rng=rng, difficulty=difficulty)
        logger.info("New %s game: %d empty cells (%.2fs)",
                    difficulty, len(game._board.unoccupied_coordinates()), time.perf_counter() - start)
        return game

    # ---- read access ----

    @property
    def board(self) -> Grid:
        return self._board.copy()

    @property
    def solution(self) -> Grid:
        return self._solution.copy()

    @property
    def moves(self) -> Tuple[Move, ...]:
        return tuple(self._moves)

    def cell_value(self, row: int, column: int) -> Optional[int]:
        return self._board.get(row, column)

    def is_user_authored(self, row: int, column: int) -> bool:
        """True if the player wrote this cell; False for givens and hinted cells."""
        row, column = check_index(row, "row"), check_index(column, "column")
        return any(m.row == row and m.column == column for m in self._moves)

    def get_state(self) -> np.ndarray:
        return self._board.to_numpy()

    # ---- play ----

    def play(self, row: int, column: int, number: int) -> MoveResult:
        return self.play_move(Move(row, column, number))

    def play_move(self, move: Move) -> MoveResult:
        result = apply_move(self._board, move)
        if result.accepted:
            self._moves.append(move)
            self._update_status()
        return result

    def play_hint(self, move: Move) -> None:
        """Write a hint straight into the grid. The cell stops being player-authored."""
        self._board.field(move.row, move.column).set_value(move.number)
        self._moves = [m for m in self._moves if (m.row, m.column) != (move.row, move.column)]
        self._update_status()

    def back(self) -> Optional[Coordinate]:
        """
        Undo the last player move and return the coordinate it touched.
        The cell goes back to the latest earlier digit played there that
        differs from the undone one, or is cleared if there is none.
        """
        if not self._moves:
            return None
        last = self._moves.pop()
        previous = self._previous_different_move(last)
        field = self._board.field(last.row, last.column)
        if previous is not None:
            field.set_value(previous.number)
        else:
            field.reset_value()
        return last.coordinate

    def _previous_different_move(self, move: Move) -> Optional[Move]:
        for item in reversed(self._moves):
            if (item.row, item.column) == (move.row, move.column) and item.number != move.number:
                return item
        return None

    # ---- hints ----

    def get_hint(self) -> Optional[Move]:
        """
        First wrong entry in row-major order, corrected from the solution.
        Otherwise a random empty cell with its solution digit. None when the
        board is complete and correct.
        """
        for coord, field in self._board:
            if field.has_value():
                correct = self._solution.field(*coord).value
                if field.value != correct:
                    return Move.at(coord, correct)

        unoccupied = self._board.unoccupied_coordinates()
        if not unoccupied:
            return None
        coord = self._rng.choice(unoccupied)
        return Move.at(coord, self._solution.field(*coord).value)

    def hint(self) -> Optional[Move]:
        move = self.get_hint()
        if move is not None:
            self.play_hint(move)
        return move

    # ---- status ----

    def is_finished(self) -> bool:
        return self._board.is_filled() and np.array_equal(self._board.to_numpy(), self._solution.to_numpy())

    def is_board_filled(self) -> bool:
        return self._board.is_filled()

    def _update_status(self) -> None:
        if self.status is GameStatus.IN_PROGRESS and self.is_finished():
            self.status = GameStatus.WON
            logger.info("Game won after %d recorded moves", len(self._moves))

    def __str__(self) -> str:
        label = str(self.difficulty) if self.difficulty is not None else "Custom"
        return f"Sudoku - {label} [{self.status.value}]\n{self._board}"
