"""
detector.py - Win and draw detection for FlipFour

A single placement can only create a new line through the cell it landed on,
so wins are checked from that cell outward along the four axes. The same
routine serves committed moves and the hypothetical moves tried by the
heuristic opponent: the origin cell is treated as holding ``player`` whatever
the board currently stores there.
"""

from typing import List, Tuple

from flipfour.game.board import Board
from flipfour.utils import CONNECT_N, DIRECTION_VECTORS


def _run(board: Board, row: int, col: int, dr: int, dc: int, player: int) -> List[Tuple[int, int]]:
    """Cells holding ``player`` that extend from (row, col) along (dr, dc), excluding the origin."""
    cells = []
    r, c = row + dr, col + dc
    while board.in_bounds(r, c) and board.grid[r, c] == player:
        cells.append((r, c))
        r += dr
        c += dc
    return cells


def winning_line(board: Board, row: int, col: int, player: int) -> List[Tuple[int, int]]:
    """
    Get the line completed by ``player`` at (row, col).

    Args:
        board: The board to inspect (not modified)
        row: Row of the played (or hypothetical) cell
        col: Column of the played (or hypothetical) cell
        player: Player id assumed to occupy the cell

    Returns:
        Cells of the first winning axis, ordered end to end, or an empty list
    """
    for dr, dc in DIRECTION_VECTORS.values():
        backward = _run(board, row, col, -dr, -dc, player)
        forward = _run(board, row, col, dr, dc, player)
        if 1 + len(backward) + len(forward) >= CONNECT_N:
            return list(reversed(backward)) + [(row, col)] + forward
    return []


def is_winning_move(board: Board, row: int, col: int, player: int) -> bool:
    """True if ``player`` holding (row, col) makes CONNECT_N in a row."""
    for dr, dc in DIRECTION_VECTORS.values():
        count = 1  # The placed cell itself
        count += len(_run(board, row, col, dr, dc, player))
        count += len(_run(board, row, col, -dr, -dc, player))
        if count >= CONNECT_N:
            return True
    return False


def is_draw(board: Board) -> bool:
    """True iff no empty cell remains anywhere on the board."""
    return board.is_full()
