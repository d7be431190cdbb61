"""
state.py - Game state machine for FlipFour

GameState owns the board together with turn order, the gravity cycle and the
game-over/winner resolution. It is created by ``new_game``, changed only by
``submit_column`` and replaced wholesale by ``rematch``.
"""

import numpy as np
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from flipfour.debug import debug
from flipfour.errors import ColumnFull, InvalidState, NoLegalMove
from flipfour.game.board import Board
from flipfour.game.detector import is_winning_move, is_draw, winning_line
from flipfour.utils import (CellValue, DEFAULT_COLORS, DEFAULT_DIFFICULTY, GRAVITY_FLIP_INTERVAL,
                            GamePhase, PLAYERS, get_difficulty, other_player, render_board_ascii)


class GameState:
    """
    A single FlipFour game.

    Attributes:
        board: The game board
        current_player: Player id to move (1 or 2); the winner once won
        turn_count: Number of accepted placements
        gravity_down: True when tokens fall toward the last row
        game_over: True once the game is won or drawn (terminal)
        winner: 0 for none/draw, otherwise the winning player id
    """

    def __init__(self, player1: str = "Player 1", player2: str = "Player 2",
                 difficulty: str = DEFAULT_DIFFICULTY, *,
                 seed_tokens: bool = False,
                 ai_player: Optional[int] = None,
                 colors: Optional[Sequence[str]] = None,
                 blocked_cells: Optional[Iterable[Tuple[int, int]]] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Start a new game.

        Args:
            player1: Display name of player 1
            player2: Display name of player 2
            difficulty: "easy", "normal" or "hard"; anything else plays easy
            seed_tokens: Pre-seed random tokens (only without an AI opponent)
            ai_player: Player id controlled by the heuristic opponent, if any
            colors: Display colors of both players
            blocked_cells: Fixed blocked cells for this board instead of the
                random ones (a rematch draws random cells again)
            rng: Random generator for blocked cells, seeded tokens and the AI
        """
        if ai_player is not None and ai_player not in PLAYERS:
            raise ValueError(f"ai_player must be one of {PLAYERS}, got {ai_player}")
        if ai_player is not None and seed_tokens:
            raise ValueError("Pre-seeded tokens are not available against the AI opponent")

        resolved, settings = get_difficulty(difficulty)
        if resolved != (difficulty or "").strip().lower():
            debug.warning(f"Unknown difficulty {difficulty!r}, playing {resolved}", "game")

        self.player_names: Tuple[str, str] = (player1, player2)
        self.player_colors: Tuple[str, str] = tuple(colors or DEFAULT_COLORS)
        self.difficulty = resolved
        self.settings = settings
        self.seed_tokens = seed_tokens
        self.ai_player = ai_player
        self._rng = rng if rng is not None else np.random.default_rng()

        self._setup(blocked_cells)

    @classmethod
    def new_game(cls, player1: str, player2: str, difficulty: str = DEFAULT_DIFFICULTY,
                 **kwargs) -> 'GameState':
        """Create a game for two players at the given difficulty."""
        return cls(player1, player2, difficulty, **kwargs)

    def _setup(self, blocked_cells: Optional[Iterable[Tuple[int, int]]] = None):
        """Allocate a fresh board and reset every turn field."""
        self.board = Board(self.settings.rows, self.settings.cols)
        self.current_player = CellValue.ONE.value
        self.turn_count = 0
        self.gravity_down = True
        self.game_over = False
        self.winner = 0
        self.last_move: Optional[Tuple[int, int]] = None
        self.winning_line: List[Tuple[int, int]] = []

        if blocked_cells is None:
            self.blocked_cells = self._place_blocked(self.settings.blocked)
        else:
            self.blocked_cells = frozenset((int(r), int(c)) for r, c in blocked_cells)
            for row, col in self.blocked_cells:
                self.board.set(row, col, CellValue.BLOCKED.value)
        self.seeded_tokens = self._seed_tokens(self.settings.seeded) if self.seed_tokens else 0

        debug.info(f"New {self.difficulty} game {self.board.rows}x{self.board.cols}: "
                   f"{self.player_names[0]} vs {self.player_names[1]}, "
                   f"{len(self.blocked_cells)} blocked, {self.seeded_tokens} seeded", "game")

    def _place_blocked(self, count: int) -> frozenset:
        rows, cols = self.board.shape
        picks = self._rng.choice(rows * cols, size=min(count, rows * cols), replace=False)
        cells = []
        for index in picks:
            row, col = divmod(int(index), cols)
            self.board.set(row, col, CellValue.BLOCKED.value)
            cells.append((row, col))
        debug.debug(f"Blocked cells: {sorted(cells)}", "game")
        return frozenset(cells)

    def _seed_tokens(self, count: int) -> int:
        """
        Scatter ``count`` tokens of random owners over empty cells.

        Seeded tokens float where they are put (no gravity) and are never
        allowed to complete a line, so a game never starts already won.
        """
        candidates = self.board.empty_cells()
        order = self._rng.permutation(len(candidates))
        placed = 0
        for index in order:
            if placed == count:
                break
            row, col = candidates[index]
            owner = int(self._rng.integers(1, 3))
            if is_winning_move(self.board, row, col, owner):
                continue
            self.board.set(row, col, owner)
            placed += 1
        debug.debug(f"Seeded {placed} tokens", "game")
        return placed

    @property
    def phase(self) -> GamePhase:
        return GamePhase.OVER if self.game_over else GamePhase.IN_PROGRESS

    @property
    def finish_him(self) -> bool:
        """True when the game ended on a winning move rather than a draw."""
        return self.game_over and self.winner != 0

    def submit_column(self, col: int) -> int:
        """
        Play the current player's token in column ``col``.

        The gravity flip is applied before win/draw detection, so a flip
        triggered by this move only affects the next one.

        Returns:
            The row the token landed on

        Raises:
            InvalidState: If the game is over or the column is off the board
            ColumnFull: If the column has no empty cell
        """
        if self.game_over:
            debug.debug(f"Rejected column {col}: game is over", "game")
            raise InvalidState("Game already over", reason="game_over")

        if not 0 <= col < self.board.cols:
            debug.debug(f"Rejected column {col}: out of range", "game")
            raise InvalidState(f"Column {col} is outside 0-{self.board.cols - 1}", reason="invalid_column")

        try:
            row = self.board.place(col, self.current_player, self.gravity_down)
        except ColumnFull:
            debug.debug(f"Rejected column {col}: column full", "game")
            raise

        self.turn_count += 1
        self.last_move = (row, col)
        debug.debug(f"Turn {self.turn_count}: player {self.current_player} -> ({row}, {col})", "game")

        if self.turn_count % GRAVITY_FLIP_INTERVAL == 0:
            self.gravity_down = not self.gravity_down
            debug.debug(f"Gravity flipped {'down' if self.gravity_down else 'up'}", "game")

        if is_winning_move(self.board, row, col, self.current_player):
            self._finish(self.current_player)
            self.winning_line = winning_line(self.board, row, col, self.current_player)
        elif is_draw(self.board):
            self._finish(0)
        else:
            self.current_player = other_player(self.current_player)

        return row

    def _finish(self, winner: int):
        self.game_over = True
        self.winner = winner
        if winner:
            debug.info(f"{self.player_names[winner - 1]} (player {winner}) wins on turn {self.turn_count}",
                       "game")
        else:
            debug.info(f"Game ends in a draw after {self.turn_count} turns", "game")

    def rematch(self):
        """Start over with the same players and difficulty on a fresh board."""
        debug.debug("Rematch", "game")
        self._setup()

    def choose_ai_column(self) -> int:
        """
        Ask the heuristic opponent for its column.

        Raises:
            InvalidState: If there is no AI opponent, it is not its turn, or
                the game is over
            NoLegalMove: If the board is full; the game is closed as a draw
        """
        from flipfour.ai.heuristic import HeuristicPlayer

        if self.ai_player is None:
            raise InvalidState("No AI opponent in this game", reason="no_ai_opponent")
        if self.game_over:
            raise InvalidState("Game already over", reason="game_over")
        if self.current_player != self.ai_player:
            raise InvalidState(f"It is player {self.current_player}'s turn", reason="not_ai_turn")

        try:
            return HeuristicPlayer(self.ai_player, rng=self._rng).choose_column(self)
        except NoLegalMove:
            debug.warning("AI found no legal move on an open game, closing as a draw", "game")
            self._finish(0)
            raise

    def snapshot(self) -> Dict[str, Any]:
        """Read-only copy of everything a renderer needs."""
        return {
            "rows": self.board.rows,
            "cols": self.board.cols,
            "board": self.board.to_list(),
            "current_player": self.current_player,
            "turn_count": self.turn_count,
            "gravity_down": self.gravity_down,
            "game_over": self.game_over,
            "winner": self.winner,
            "finish_him": self.finish_him,
            "player_names": list(self.player_names),
            "player_colors": list(self.player_colors),
            "difficulty": self.difficulty,
            "ai_player": self.ai_player,
            "blocked_cells": sorted(self.blocked_cells),
            "last_move": self.last_move,
            "winning_line": list(self.winning_line),
        }

    def render(self) -> str:
        return render_board_ascii(self.board.grid, self.gravity_down, self.winning_line)

    def __str__(self) -> str:
        return self.render()
