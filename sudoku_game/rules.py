"""
Placement rules for the player grid.

A move is checked against the target cell, then its row, column and box. The
first failing check decides the rejection reason.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import BOARD_SIZE
from .grid import Grid, Move, area_cells

logger = logging.getLogger(__name__)


class Rejection(str, Enum):
    CELL_OCCUPIED = "cell occupied"
    ROW_CONFLICT = "row conflict"
    COLUMN_CONFLICT = "column conflict"
    BOX_CONFLICT = "box conflict"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class MoveResult:
    move: Move
    rejection: Optional[Rejection] = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None

    def __bool__(self) -> bool:
        return self.accepted


def check_move(grid: Grid, move: Move) -> Optional[Rejection]:
    """Return why the move is illegal on grid, or None if it may be played."""
    r, c, v = move.row, move.column, move.number
    if grid.field(r, c).has_value():
        return Rejection.CELL_OCCUPIED
    for cc in range(BOARD_SIZE):
        if cc != c and grid.get(r, cc) == v:
            return Rejection.ROW_CONFLICT
    for rr in range(BOARD_SIZE):
        if rr != r and grid.get(rr, c) == v:
            return Rejection.COLUMN_CONFLICT
    for rr, cc in area_cells(r, c):
        if (rr != r or cc != c) and grid.get(rr, cc) == v:
            return Rejection.BOX_CONFLICT
    return None


def apply_move(grid: Grid, move: Move) -> MoveResult:
    """Place the move on grid if legal. Only the target cell ever changes."""
    rejection = check_move(grid, move)
    if rejection is not None:
        logger.debug("Rejected %s: %s", move, rejection)
        return MoveResult(move, rejection)
    grid.field(move.row, move.column).set_value(move.number)
    return MoveResult(move)
