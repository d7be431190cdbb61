"""
session.py - Lock-guarded handle around the live FlipFour game

A presentation layer keeps one GameSession and routes every request through
it. All operations, reads included, run under the same lock so nobody sees a
board whose turn, gravity or winner fields are still being updated.
"""

import threading
from typing import Any, Dict, Optional

from flipfour.debug import debug
from flipfour.errors import InvalidState
from flipfour.game.state import GameState
from flipfour.utils import DEFAULT_DIFFICULTY, GamePhase


class GameSession:
    """Owns at most one GameState at a time."""

    def __init__(self):
        self._lock = threading.RLock()
        self._state: Optional[GameState] = None

    @property
    def phase(self) -> GamePhase:
        with self._lock:
            if self._state is None:
                return GamePhase.NOT_STARTED
            return self._state.phase

    def _require_game(self) -> GameState:
        if self._state is None:
            raise InvalidState("No active game", reason="no_active_game")
        return self._state

    def new_game(self, player1: str, player2: str, difficulty: str = DEFAULT_DIFFICULTY,
                 **kwargs) -> Dict[str, Any]:
        """Replace the current game (if any) with a new one and return its snapshot."""
        state = GameState.new_game(player1, player2, difficulty, **kwargs)
        with self._lock:
            self._state = state
            debug.debug(f"Session started {state.difficulty} game", "session")
            return state.snapshot()

    def submit_column(self, column: int) -> Dict[str, Any]:
        """
        Play ``column`` for the player to move.

        Raises:
            InvalidState: No active game, game over or column off the board
            ColumnFull: The column has no empty cell
        """
        with self._lock:
            state = self._require_game()
            state.submit_column(column)
            return state.snapshot()

    def rematch(self) -> Dict[str, Any]:
        with self._lock:
            state = self._require_game()
            state.rematch()
            return state.snapshot()

    def choose_ai_column(self) -> int:
        with self._lock:
            return self._require_game().choose_ai_column()

    def play_ai_turn(self) -> Dict[str, Any]:
        """Let the heuristic opponent pick and play its column in one step."""
        with self._lock:
            state = self._require_game()
            column = state.choose_ai_column()
            state.submit_column(column)
            return state.snapshot()

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return self._require_game().snapshot()
