"""
errors.py - Exceptions raised by the FlipFour engine

Every rejection the engine can produce derives from GameError and carries a
short ``reason`` string that a presentation layer can map to its own output.
"""


class GameError(Exception):
    """Base class for engine rejections."""

    reason = "game_error"

    def __init__(self, message: str = "", reason: str = None):
        super().__init__(message or self.__class__.__name__)
        if reason is not None:
            self.reason = reason


class OutOfBounds(GameError, IndexError):
    """A row or column outside the grid reached a board accessor."""

    reason = "out_of_bounds"


class ColumnFull(GameError):
    """The chosen column has no empty cell left."""

    reason = "column_full"

    def __init__(self, column: int):
        super().__init__(f"Column {column} is full")
        self.column = column


class InvalidState(GameError):
    """The move cannot be accepted in the current game state."""

    reason = "invalid_state"


class NoLegalMove(GameError):
    """No column has an empty cell; callers treat this as a draw."""

    reason = "no_legal_move"
