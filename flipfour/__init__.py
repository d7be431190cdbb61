"""
FlipFour - Connect Four with flipping gravity and blocked cells

Tokens fall toward the bottom of the board at first; every fifth move the
direction flips. Some cells start blocked, and an optional heuristic
opponent can play either side.
"""

__version__ = '0.1.0'
