# tests/test_evaluation.py
import random

import numpy as np
import pytest

from sudoku_game import EvaluationBoard, Grid, InvalidCoordinateError, InvalidDigitError
from sudoku_game.config import DIGITS, EMPTY
from conftest import SOLUTION, blank_digits


def assert_valid_solution(grid):
    digits = list(range(1, 10))
    arr = grid.to_numpy()
    for i in range(9):
        assert sorted(arr[i, :]) == digits
        assert sorted(arr[:, i]) == digits
    for br in range(0, 9, 3):
        for bc in range(0, 9, 3):
            assert sorted(arr[br:br + 3, bc:bc + 3].ravel()) == digits


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
def test_generated_grids_are_valid(seed):
    solved = EvaluationBoard.generate_new(random.Random(seed))
    assert solved.is_filled()
    assert_valid_solution(solved.to_grid())


def test_fresh_shuffles_give_different_grids():
    a = EvaluationBoard.generate_new(random.Random(10)).to_grid()
    b = EvaluationBoard.generate_new(random.Random(11)).to_grid()
    assert a != b


def test_generation_does_not_touch_the_start_board(rng):
    start = EvaluationBoard.empty(rng)
    start.generate_solved()
    assert np.all(start.fields == EMPTY)
    assert not start.unavailable.any()


def test_set_field_propagates_row_column_and_box(rng):
    board = EvaluationBoard.empty(rng)
    board.set_field(4, 4, 7)
    assert not board.is_available(4, 0, 7)
    assert not board.is_available(0, 4, 7)
    assert not board.is_available(3, 5, 7)
    assert board.is_available(0, 0, 7)
    assert board.is_available(4, 0, 6)


def test_set_field_rejects_bad_digit(rng):
    with pytest.raises(InvalidDigitError):
        EvaluationBoard.empty(rng).set_field(0, 0, 0)


def test_reset_field_keeps_constraints_of_remaining_copies(rng):
    board = EvaluationBoard.empty(rng)
    board.set_field(0, 0, 5)
    board.set_field(1, 4, 5)
    assert board.reset_field(0, 0) == 5
    assert board.is_empty(0, 0)
    # row 1 and box (0, 3) still hold a 5
    assert not board.is_available(1, 0, 5)
    assert not board.is_available(0, 3, 5)
    # (0, 0) only saw the removed copy
    assert board.is_available(0, 0, 5)
    assert board.is_available(8, 0, 5)


def test_clone_shares_options_but_not_state(rng):
    board = EvaluationBoard.empty(rng)
    clone = board.clone()
    clone.set_field(0, 0, 1)
    assert board.is_empty(0, 0)
    assert board.is_available(0, 1, 1)
    assert clone.options is board.options


def test_option_order_is_a_permutation_per_cell(rng):
    board = EvaluationBoard.empty(rng)
    for r in range(9):
        for c in range(9):
            assert sorted(board.options[r, c].tolist()) == list(DIGITS)


def test_full_board_has_no_unique_remaining_solution(solution_grid):
    assert not EvaluationBoard.from_grid(solution_grid).has_unique_solution()


def test_single_blank_is_unique():
    board = EvaluationBoard.from_grid(Grid.from_string("." + SOLUTION[1:]))
    assert board.has_unique_solution()
    assert board.count_solutions() == 1


def test_blanking_one_digit_stays_unique():
    board = EvaluationBoard.from_grid(Grid.from_string(blank_digits(SOLUTION, "7")))
    assert board.has_unique_solution()


def test_digit_swap_is_not_unique():
    # blanking every 1 and 2 admits the original and the 1<->2 swapped grid
    board = EvaluationBoard.from_grid(Grid.from_string(blank_digits(SOLUTION, "12")))
    assert board.count_solutions(limit=10) == 2
    assert not board.has_unique_solution()


def test_contradictory_board_has_no_solution():
    rows = [[0] * 9 for _ in range(9)]
    rows[0][1:] = [1, 2, 3, 4, 5, 6, 7, 8]
    rows[1][0] = 9
    board = EvaluationBoard.from_rows(rows)
    assert board.count_solutions() == 0
    assert not board.has_unique_solution()


def test_solve_grid_completes_a_puzzle(puzzle_grid, solution_grid):
    assert EvaluationBoard.from_grid(puzzle_grid).solve_grid() == solution_grid


@pytest.mark.parametrize("row,column", [(-1, -1), (9, 0), (0, 9)])
def test_cell_access_rejects_out_of_range_indices(solution_grid, row, column):
    board = EvaluationBoard.from_grid(solution_grid)
    with pytest.raises(InvalidCoordinateError):
        board.reset_field(row, column)
    with pytest.raises(InvalidCoordinateError):
        board.get_field(row, column)
    with pytest.raises(InvalidCoordinateError):
        board.is_empty(row, column)
    with pytest.raises(InvalidCoordinateError):
        board.is_available(row, column, 1)
    # negative indices must not wrap around to the last cell
    assert board.is_filled()
    assert board.get_field(8, 8) == 9
