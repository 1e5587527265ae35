"""
Player-facing board model: coordinates, moves, fields and the 9x9 grid.

Empty cells hold no digit at all. Reading the digit of an empty field is an
error, so callers check ``has_value()`` first.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple, Optional, Iterable, Iterator, NamedTuple, TYPE_CHECKING

import numpy as np

from .config import BOARD_SIZE, AREA_SIZE, EMPTY
from .errors import InvalidDigitError, InvalidCoordinateError, EmptyFieldError

if TYPE_CHECKING:
    from .evaluation import EvaluationBoard

# ----------------------------
# Utility
# ----------------------------

def check_index(index: int, name: str = "index") -> int:
    if not isinstance(index, (int, np.integer)) or isinstance(index, bool) or not 0 <= index < BOARD_SIZE:
        raise InvalidCoordinateError(f"{name} must be between 0 and {BOARD_SIZE - 1}, got {index!r}")
    return int(index)


def check_digit(value: int) -> int:
    if not isinstance(value, (int, np.integer)) or isinstance(value, bool) or not 1 <= value <= BOARD_SIZE:
        raise InvalidDigitError(f"Value must be a digit between 1 and {BOARD_SIZE}, got {value!r}")
    return int(value)


def area_origin(row: int, column: int) -> Tuple[int, int]:
    """Top-left coordinate of the 3x3 box containing (row, column)."""
    return (AREA_SIZE * (row // AREA_SIZE), AREA_SIZE * (column // AREA_SIZE))


def area_cells(row: int, column: int) -> List[Tuple[int, int]]:
    br, bc = area_origin(row, column)
    return [(r, c) for r in range(br, br + AREA_SIZE) for c in range(bc, bc + AREA_SIZE)]


class Coordinate(NamedTuple):
    row: int
    column: int


@dataclass(frozen=True)
class Move:
    """One placement event, whether typed by the player or given as a hint."""
    row: int
    column: int
    number: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "row", check_index(self.row, "row"))
        object.__setattr__(self, "column", check_index(self.column, "column"))
        object.__setattr__(self, "number", check_digit(self.number))

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.row, self.column)

    @classmethod
    def at(cls, coordinate: Tuple[int, int], number: int) -> "Move":
        return cls(coordinate[0], coordinate[1], number)


# ----------------------------
# Field
# ----------------------------

class Field:
    """One cell of the board holding an optional digit."""

    __slots__ = ("_value",)

    def __init__(self, value: Optional[int] = None):
        self._value: Optional[int] = None
        if value is not None:
            self.set_value(value)

    @property
    def value(self) -> int:
        if self._value is None:
            raise EmptyFieldError("Field does not have a value.")
        return self._value

    def set_value(self, value: int) -> None:
        self._value = check_digit(value)

    def has_value(self) -> bool:
        return self._value is not None

    def reset_value(self) -> None:
        self._value = None

    def get(self) -> Optional[int]:
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Field):
            return NotImplemented
        return self._value == other._value

    def __repr__(self) -> str:
        return f"Field({self._value!r})"

    def __str__(self) -> str:
        return "" if self._value is None else str(self._value)


# ----------------------------
# Grid
# ----------------------------

class Grid:
    """
    Fixed 9x9 array of fields. Holds no rules of its own; placement rules live
    in sudoku_game.rules and are applied by the session.
    """

    def __init__(self, fields: Optional[List[List[Field]]] = None):
        if fields is None:
            fields = [[Field() for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]
        if len(fields) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in fields):
            raise ValueError(f"Grid must be {BOARD_SIZE}x{BOARD_SIZE}")
        self._fields = fields

    # ---- construction ----

    @classmethod
    def from_list(cls, rows: Iterable[Iterable[Optional[int]]]) -> "Grid":
        """Build from nested lists; 0 and None mark empty cells."""
        fields = [[Field(v if v else None) for v in row] for row in rows]
        return cls(fields)

    @classmethod
    def from_string(cls, text: str) -> "Grid":
        """Build from 81 row-major characters; '.' or '0' mark empty cells."""
        chars = [ch for ch in text if not ch.isspace()]
        if len(chars) != BOARD_SIZE * BOARD_SIZE:
            raise ValueError(f"Expected {BOARD_SIZE * BOARD_SIZE} cells, got {len(chars)}")
        values: List[Optional[int]] = []
        for ch in chars:
            if ch in ".0":
                values.append(None)
            elif ch.isdigit():
                values.append(int(ch))
            else:
                raise InvalidDigitError(f"Unexpected character {ch!r} in grid string")
        return cls.from_list(values[r * BOARD_SIZE:(r + 1) * BOARD_SIZE] for r in range(BOARD_SIZE))

    @classmethod
    def from_evaluation_board(cls, board: "EvaluationBoard") -> "Grid":
        grid = cls()
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                value = board.get_field(r, c)
                if value != EMPTY:
                    grid.field(r, c).set_value(value)
        return grid

    def copy(self) -> "Grid":
        return Grid([[Field(f.get()) for f in row] for row in self._fields])

    # ---- access ----

    def field(self, row: int, column: int) -> Field:
        return self._fields[check_index(row, "row")][check_index(column, "column")]

    def get(self, row: int, column: int) -> Optional[int]:
        return self.field(row, column).get()

    def __iter__(self) -> Iterator[Tuple[Coordinate, Field]]:
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                yield Coordinate(r, c), self._fields[r][c]

    def row_values(self, row: int) -> List[Optional[int]]:
        return [f.get() for f in self._fields[row]]

    def column_values(self, column: int) -> List[Optional[int]]:
        return [self._fields[r][column].get() for r in range(BOARD_SIZE)]

    def area_values(self, row: int, column: int) -> List[Optional[int]]:
        return [self._fields[r][c].get() for r, c in area_cells(row, column)]

    def unoccupied_coordinates(self) -> List[Coordinate]:
        return [coord for coord, f in self if not f.has_value()]

    def is_filled(self) -> bool:
        return all(f.has_value() for _, f in self)

    # ---- serialization ----

    def to_list(self) -> List[List[int]]:
        return [[f.get() or 0 for f in row] for row in self._fields]

    def to_numpy(self) -> np.ndarray:
        return np.array(self.to_list(), dtype=np.int32)

    def to_string(self) -> str:
        return "".join(str(f) or "." for _, f in self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.to_list() == other.to_list()

    def __repr__(self) -> str:
        return f"Grid.from_string({self.to_string()!r})"

    def __str__(self) -> str:
        horiz = ("+" + "-" * (2 * AREA_SIZE + 1)) * (BOARD_SIZE // AREA_SIZE) + "+"
        lines = []
        for r in range(BOARD_SIZE):
            if r % AREA_SIZE == 0:
                lines.append(horiz)
            line = "|"
            for bc in range(0, BOARD_SIZE, AREA_SIZE):
                chunk = " ".join(str(f) or "." for f in self._fields[r][bc:bc + AREA_SIZE])
                line += " " + chunk + " |"
            lines.append(line)
        lines.append(horiz)
        return "\n".join(lines)
