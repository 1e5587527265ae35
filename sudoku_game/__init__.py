"""
Sudoku engine: randomized grid generation, unique-solution puzzle reduction,
rule-checked play with undo and hints.
"""

from .config import BOARD_SIZE, AREA_SIZE, DIGITS, DIFFICULTY_PROFILES, Difficulty
from .errors import (
    SudokuError,
    InvalidDigitError,
    InvalidCoordinateError,
    EmptyFieldError,
    UnknownDifficultyError,
    GenerationError,
)
from .grid import Coordinate, Move, Field, Grid
from .evaluation import EvaluationBoard
from .rules import Rejection, MoveResult, check_move, apply_move
from .reducer import reduce_board, removals_for
from .game import Sudoku, GameStatus

__all__ = [
    "BOARD_SIZE",
    "AREA_SIZE",
    "DIGITS",
    "DIFFICULTY_PROFILES",
    "Difficulty",
    "SudokuError",
    "InvalidDigitError",
    "InvalidCoordinateError",
    "EmptyFieldError",
    "UnknownDifficultyError",
    "GenerationError",
    "Coordinate",
    "Move",
    "Field",
    "Grid",
    "EvaluationBoard",
    "Rejection",
    "MoveResult",
    "check_move",
    "apply_move",
    "reduce_board",
    "removals_for",
    "Sudoku",
    "GameStatus",
]
