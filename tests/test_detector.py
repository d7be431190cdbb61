import numpy as np
import pytest

from flipfour.game.board import Board
from flipfour.game.detector import is_draw, is_winning_move, winning_line
from flipfour.utils import CellValue


def make_board(cells, rows=6, cols=7):
    board = Board(rows, cols)
    for (row, col), value in cells.items():
        board.set(row, col, value)
    return board


@pytest.mark.parametrize("cells, origin", [
    # Horizontal, bottom row
    ({(5, c): 1 for c in range(4)}, (5, 3)),
    # Horizontal, origin in the middle of the line
    ({(2, c): 2 for c in range(2, 6)}, (2, 4)),
    # Vertical
    ({(r, 0): 1 for r in range(2, 6)}, (2, 0)),
    # Diagonal top-left to bottom-right
    ({(i, i): 2 for i in range(4)}, (1, 1)),
    # Diagonal top-right to bottom-left
    ({(5 - i, i): 1 for i in range(4)}, (3, 2)),
])
def test_detects_lines_on_every_axis(cells, origin):
    board = make_board(cells)
    player = next(iter(cells.values()))
    assert is_winning_move(board, *origin, player)


def test_three_in_a_row_is_not_a_win():
    board = make_board({(5, c): 1 for c in range(3)})
    assert not is_winning_move(board, 5, 2, 1)


def test_broken_line_is_not_a_win():
    board = make_board({(5, c): 1 for c in range(5) if c != 2})
    assert not is_winning_move(board, 5, 3, 1)


def test_opponent_tokens_do_not_count():
    board = make_board({(5, 0): 1, (5, 1): 1, (5, 2): 2, (5, 3): 1, (5, 4): 1})
    assert not is_winning_move(board, 5, 4, 1)


def test_blocked_cell_interrupts_a_line():
    board = make_board({(5, 0): 1, (5, 1): 1, (5, 2): CellValue.BLOCKED.value, (5, 3): 1, (5, 4): 1, (5, 5): 1})
    assert not is_winning_move(board, 5, 3, 1)
    board.set(5, 6, 1)
    assert is_winning_move(board, 5, 6, 1)


def test_hypothetical_cell_counts_as_the_player():
    board = make_board({(5, 0): 2, (5, 1): 2, (5, 2): 2})

    assert is_winning_move(board, 5, 3, 2)
    assert not is_winning_move(board, 5, 3, 1)
    assert board.get(5, 3) == CellValue.EMPTY.value


def test_winning_line_is_ordered_end_to_end():
    board = make_board({(1, 1): 2, (2, 2): 2, (3, 3): 2, (4, 4): 2})
    assert winning_line(board, 3, 3, 2) == [(1, 1), (2, 2), (3, 3), (4, 4)]
    assert winning_line(board, 3, 3, 1) == []


def test_longer_lines_still_win():
    board = make_board({(0, c): 1 for c in range(7)})
    assert is_winning_move(board, 0, 0, 1)
    assert len(winning_line(board, 0, 3, 1)) == 7


def test_win_detection_is_mirror_symmetric():
    rng = np.random.default_rng(7)
    for _ in range(25):
        grid = rng.choice([-1, 0, 1, 2], size=(6, 7), p=[0.1, 0.3, 0.3, 0.3]).astype(np.int8)
        board = Board(6, 7)
        board.grid[:] = grid
        mirrored = Board(6, 7)
        mirrored.grid[:] = grid[:, ::-1]

        for row in range(6):
            for col in range(7):
                for player in (1, 2):
                    assert (is_winning_move(board, row, col, player)
                            == is_winning_move(mirrored, row, 6 - col, player))


def test_draw_requires_no_empty_cell(draw_grid):
    board = Board(6, 7)
    board.grid[:] = draw_grid
    assert is_draw(board)

    board.set(0, 3, CellValue.EMPTY.value)
    assert not is_draw(board)


def test_draw_pattern_has_no_line(draw_grid):
    board = Board(6, 7)
    board.grid[:] = draw_grid
    assert not any(is_winning_move(board, r, c, int(draw_grid[r, c]))
                   for r in range(6) for c in range(7))


def test_blocked_cells_fill_the_board_for_draws():
    board = Board(6, 7)
    board.grid[:] = CellValue.BLOCKED.value
    assert is_draw(board)
