"""
flipfour.game - Core game mechanics for FlipFour

This package contains the board and placement rule, win/draw detection, the
game state machine and the session handle. The Gymnasium environment lives in
flipfour.game.rules and is imported from there directly.
"""

from flipfour.game.board import Board
from flipfour.game.state import GameState
from flipfour.game.session import GameSession

__all__ = ['Board', 'GameState', 'GameSession']
