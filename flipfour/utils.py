"""
utils.py - Constants, enumerations and helpers for the FlipFour engine

This module holds the rule constants, the difficulty table, the cell value
encoding and the ASCII renderer shared by the board, the CLI and the
Gymnasium environment.
"""

from enum import Enum, auto
from typing import Dict, List, NamedTuple, Optional, Tuple

import numpy as np

CONNECT_N = 4  # Number of tokens in a row to win
GRAVITY_FLIP_INTERVAL = 5  # Gravity flips after every N accepted moves

DEFAULT_COLORS = ("red", "yellow")


class CellValue(Enum):
    """Values stored in the board grid."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player
    BLOCKED = -1

    def __str__(self):
        return CELL_SYMBOLS[self.value]


CELL_SYMBOLS = {
    CellValue.EMPTY.value: ".",
    CellValue.ONE.value: "X",
    CellValue.TWO.value: "O",
    CellValue.BLOCKED.value: "#",
}

PLAYERS = (CellValue.ONE.value, CellValue.TWO.value)


def other_player(player: int) -> int:
    """Get the id of the other player."""
    if player not in PLAYERS:
        raise ValueError(f"Not a player id: {player}")
    return 3 - player


class GamePhase(Enum):
    """Lifecycle of a game held by a session."""
    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    OVER = auto()


class Direction(Enum):
    """Axes scanned by the win detector."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN = auto()  # top-left to bottom-right
    DIAGONAL_UP = auto()  # top-right to bottom-left


# Direction vectors (row, col) for each axis
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN: (1, 1),
    Direction.DIAGONAL_UP: (1, -1),
}


class DifficultySettings(NamedTuple):
    rows: int
    cols: int
    blocked: int
    seeded: int


DIFFICULTIES: Dict[str, DifficultySettings] = {
    "easy": DifficultySettings(rows=6, cols=7, blocked=3, seeded=3),
    "normal": DifficultySettings(rows=6, cols=9, blocked=5, seeded=5),
    "hard": DifficultySettings(rows=7, cols=8, blocked=7, seeded=7),
}

DEFAULT_DIFFICULTY = "easy"


def get_difficulty(name: Optional[str]) -> Tuple[str, DifficultySettings]:
    """
    Look up a difficulty tier.

    Unknown names fall back to the default tier; the resolved name is
    returned alongside the settings so callers can record it.
    """
    key = (name or "").strip().lower()
    if key not in DIFFICULTIES:
        return DEFAULT_DIFFICULTY, DIFFICULTIES[DEFAULT_DIFFICULTY]
    return key, DIFFICULTIES[key]


def render_board_ascii(grid: np.ndarray, gravity_down: Optional[bool] = None,
                       highlight: Optional[List[Tuple[int, int]]] = None) -> str:
    """
    Render a board grid as ASCII art.

    Args:
        grid: The board grid
        gravity_down: When given, an arrow row shows the gravity direction
        highlight: Cells drawn as "*" (e.g. a winning line)

    Returns:
        ASCII representation of the board
    """
    rows, cols = grid.shape
    marked = set(highlight or [])
    lines = []

    if gravity_down is not None:
        arrow = "v" if gravity_down else "^"
        lines.append(" " + " ".join(arrow for _ in range(cols)) + " ")

    lines.append("+" + "-" * (cols * 2 - 1) + "+")
    for row in range(rows):
        cells = []
        for col in range(cols):
            symbol = CELL_SYMBOLS[int(grid[row, col])]
            if (row, col) in marked:
                symbol = "*"
            cells.append(symbol)
        lines.append("|" + " ".join(cells) + "|")
    lines.append("+" + "-" * (cols * 2 - 1) + "+")

    lines.append(" " + " ".join(str(i % 10) for i in range(cols)) + " ")
    return "\n".join(lines)
