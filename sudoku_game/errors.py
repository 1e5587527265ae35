"""Exception hierarchy for the Sudoku engine.

Every error raised by the package derives from :class:`SudokuError`. Each one
also derives from the closest built-in so callers that already catch
``ValueError`` or ``IndexError`` keep working.

Rejected moves are not exceptions; see :mod:`sudoku_game.rules`.
"""


class SudokuError(Exception):
    """Base exception for the package."""


class InvalidDigitError(SudokuError, ValueError):
    """Raised when a cell value is not a digit between 1 and 9."""


class InvalidCoordinateError(SudokuError, IndexError):
    """Raised when a row or column index falls outside the board."""


class EmptyFieldError(SudokuError, LookupError):
    """Raised when the digit of an empty field is read.

    Callers are expected to check ``Field.has_value()`` first.
    """


class UnknownDifficultyError(SudokuError, ValueError):
    """Raised for a difficulty that has no profile."""


class GenerationError(SudokuError, RuntimeError):
    """Raised when the backtracking generator returns no grid.

    A 9x9 grid always exists, so this signals a broken internal invariant,
    not a condition the player can act on.
    """
