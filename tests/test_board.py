import numpy as np
import pytest

from flipfour.errors import ColumnFull, OutOfBounds
from flipfour.game.board import Board
from flipfour.utils import CellValue


def test_new_board_is_empty(board):
    assert board.shape == (6, 7)
    assert board.token_count() == 0
    assert not board.is_full()
    assert board.legal_columns() == list(range(7))


@pytest.mark.parametrize("row, col", [(-1, 0), (6, 0), (0, -1), (0, 7)])
def test_accessors_check_bounds(board, row, col):
    with pytest.raises(OutOfBounds):
        board.get(row, col)
    with pytest.raises(IndexError):
        board.set(row, col, CellValue.ONE.value)


def test_set_rejects_unknown_cell_value(board):
    with pytest.raises(ValueError):
        board.set(0, 0, 5)


def test_drops_stack_from_bottom_with_gravity_down(board):
    rows = [board.place(3, CellValue.ONE.value, gravity_down=True) for _ in range(4)]

    assert rows == [5, 4, 3, 2]
    assert [board.get(r, 3) for r in (5, 4, 3, 2)] == [1, 1, 1, 1]
    assert board.get(1, 3) == CellValue.EMPTY.value


def test_drops_stack_from_top_with_gravity_up(board):
    assert board.place(2, 1, gravity_down=False) == 0
    assert board.place(2, 2, gravity_down=False) == 1
    assert board.get(0, 2) == 1
    assert board.get(1, 2) == 2


def test_blocked_cells_are_skipped_not_replaced(board):
    board.set(5, 3, CellValue.BLOCKED.value)
    board.set(3, 3, CellValue.BLOCKED.value)

    assert board.place(3, 1) == 4
    assert board.place(3, 2) == 2
    assert board.get(5, 3) == CellValue.BLOCKED.value
    assert board.get(3, 3) == CellValue.BLOCKED.value


def test_floating_gap_below_blocked_cell_is_filled_first(board):
    board.set(4, 0, CellValue.BLOCKED.value)
    assert board.place(0, 1) == 5
    assert board.place(0, 1) == 3


def test_landing_row_does_not_modify_board(board):
    before = board.get_state()
    assert board.landing_row(4, gravity_down=True) == 5
    assert board.landing_row(4, gravity_down=False) == 0
    np.testing.assert_array_equal(board.grid, before)


def test_full_column_raises_and_is_not_legal(board):
    for _ in range(6):
        board.place(1, 2)

    with pytest.raises(ColumnFull) as excinfo:
        board.place(1, 1)
    assert excinfo.value.column == 1
    assert excinfo.value.reason == "column_full"
    with pytest.raises(ColumnFull):
        board.landing_row(1, gravity_down=False)
    assert 1 not in board.legal_columns()
    assert not board.is_column_open(1)


def test_fully_blocked_column_is_full(board):
    for row in range(6):
        board.set(row, 6, CellValue.BLOCKED.value)
    with pytest.raises(ColumnFull):
        board.place(6, 1)
    assert board.legal_columns() == [0, 1, 2, 3, 4, 5]


def test_place_checks_column_bounds(board):
    with pytest.raises(OutOfBounds):
        board.place(7, 1)
    with pytest.raises(OutOfBounds):
        board.landing_row(-1)


def test_place_rejects_non_player_values(board):
    with pytest.raises(ValueError):
        board.place(0, CellValue.BLOCKED.value)


def test_copy_is_independent(board):
    board.place(0, 1)
    clone = board.copy()
    clone.place(0, 2)

    assert board.token_count() == 1
    assert clone.token_count() == 2


def test_token_count_ignores_blocked(board):
    board.set(0, 0, CellValue.BLOCKED.value)
    board.place(1, 1)
    board.place(2, 2)
    assert board.token_count() == 2
    assert board.blocked_cells() == [(0, 0)]


def test_is_full(draw_grid):
    board = Board(6, 7)
    board.grid[:] = draw_grid
    assert board.is_full()
    assert board.legal_columns() == []


def test_render_marks_blocked_and_gravity(board):
    board.set(0, 0, CellValue.BLOCKED.value)
    board.place(3, 1)
    text = board.render(gravity_down=False)
    lines = text.splitlines()

    assert lines[0].strip().startswith("^")
    assert "#" in lines[2]
    assert "X" in lines[-3]
