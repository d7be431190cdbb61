"""
heuristic.py - Heuristic opponent for FlipFour

HeuristicPlayer picks a column with a fixed priority list:

1. Win now: the leftmost column where its own token would complete a line
2. Block: the leftmost column where the opponent's token would complete one
3. Center: the center column, then center-1, then center+1
4. Random: a uniform choice among the remaining legal columns

Moves are simulated with the board's landing-row computation under the
current gravity direction; the board is never modified. There is no search
beyond this single ply.
"""

import numpy as np
from typing import List, Optional, TYPE_CHECKING

from flipfour.debug import debug
from flipfour.errors import NoLegalMove
from flipfour.game.board import Board
from flipfour.game.detector import is_winning_move
from flipfour.utils import other_player

if TYPE_CHECKING:
    from flipfour.game.state import GameState


class HeuristicPlayer:
    """A one-ply FlipFour opponent."""

    def __init__(self, player: int = 2, rng: Optional[np.random.Generator] = None):
        """
        Initialize the heuristic player.

        Args:
            player: Player id the heuristic moves for
            rng: Random generator for the fallback choice
        """
        self.player = player
        self.rng = rng if rng is not None else np.random.default_rng()

    def choose_column(self, state: 'GameState') -> int:
        """
        Pick a column for ``self.player`` in ``state``.

        Raises:
            NoLegalMove: If every column is full
        """
        return self.choose_on_board(state.board, state.gravity_down)

    def choose_on_board(self, board: Board, gravity_down: bool) -> int:
        legal = board.legal_columns()
        if not legal:
            raise NoLegalMove("Board is full")

        column = self._completing_column(board, legal, gravity_down, self.player)
        if column is not None:
            debug.debug(f"Player {self.player} wins with column {column}", "ai")
            return column

        opponent = other_player(self.player)
        column = self._completing_column(board, legal, gravity_down, opponent)
        if column is not None:
            debug.debug(f"Player {self.player} blocks column {column}", "ai")
            return column

        center = board.cols // 2
        for column in (center, center - 1, center + 1):
            if column in legal:
                debug.debug(f"Player {self.player} takes center-most column {column}", "ai")
                return column

        column = int(self.rng.choice(legal))
        debug.debug(f"Player {self.player} picks random column {column} from {legal}", "ai")
        return column

    @staticmethod
    def _completing_column(board: Board, legal: List[int], gravity_down: bool,
                           player: int) -> Optional[int]:
        """Leftmost legal column where ``player`` would complete a line."""
        for column in legal:
            row = board.landing_row(column, gravity_down)
            if is_winning_move(board, row, column, player):
                return column
        return None
