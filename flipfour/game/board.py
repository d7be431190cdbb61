"""
board.py - Board representation and placement rule for FlipFour

This module implements the Board class: a fixed-size grid of cell values with
bounds-checked accessors, plus the placement rule that drops a token into a
column under either gravity direction.
"""

import numpy as np
from typing import List, Tuple

from flipfour.debug import debug
from flipfour.errors import OutOfBounds, ColumnFull
from flipfour.utils import CellValue, PLAYERS, render_board_ascii


class Board:
    """
    A rows x cols FlipFour board.

    Cells hold the integer values of CellValue. Blocked cells are written once
    during setup and are treated as occupied by every placement afterwards.
    """

    def __init__(self, rows: int, cols: int):
        """
        Initialize an empty board.

        Args:
            rows: Number of rows
            cols: Number of columns
        """
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Board dimensions must be positive, got {rows}x{cols}")
        debug.debug(f"Initializing new {rows}x{cols} Board", "board")
        self.rows = rows
        self.cols = cols
        self.grid = np.zeros((rows, cols), dtype=np.int8)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if a position is within the board boundaries."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _check_bounds(self, row: int, col: int):
        if not self.in_bounds(row, col):
            raise OutOfBounds(f"Cell ({row}, {col}) is outside the {self.rows}x{self.cols} board")

    def get(self, row: int, col: int) -> int:
        """
        Get the value of a cell.

        Raises:
            OutOfBounds: If row or col is outside the grid
        """
        self._check_bounds(row, col)
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int):
        """
        Set the value of a cell.

        Raises:
            OutOfBounds: If row or col is outside the grid
        """
        self._check_bounds(row, col)
        self.grid[row, col] = CellValue(value).value

    def copy(self) -> 'Board':
        """Create an independent copy of this board."""
        new_board = Board.__new__(Board)
        new_board.rows = self.rows
        new_board.cols = self.cols
        new_board.grid = self.grid.copy()
        return new_board

    def is_full(self) -> bool:
        """True if no empty cell remains anywhere on the board."""
        return not np.any(self.grid == CellValue.EMPTY.value)

    def token_count(self) -> int:
        """Number of cells holding a player token."""
        return int(np.isin(self.grid, PLAYERS).sum())

    def blocked_cells(self) -> List[Tuple[int, int]]:
        return [(int(r), int(c)) for r, c in np.argwhere(self.grid == CellValue.BLOCKED.value)]

    def empty_cells(self) -> List[Tuple[int, int]]:
        return [(int(r), int(c)) for r, c in np.argwhere(self.grid == CellValue.EMPTY.value)]

    # Placement rule

    def landing_row(self, column: int, gravity_down: bool = True) -> int:
        """
        Compute where a token dropped into ``column`` would land, without
        changing the board.

        The scan starts at the edge gravity pulls toward (last row when
        gravity is down, row 0 otherwise) and stops at the first empty cell.
        Blocked cells and tokens are skipped over, never replaced.

        Args:
            column: Column index
            gravity_down: Gravity direction

        Returns:
            The row index where the token would land

        Raises:
            OutOfBounds: If column is outside the grid
            ColumnFull: If the column has no empty cell
        """
        if not 0 <= column < self.cols:
            raise OutOfBounds(f"Column {column} is outside the board (0-{self.cols - 1})")

        rows = range(self.rows - 1, -1, -1) if gravity_down else range(self.rows)
        for row in rows:
            if self.grid[row, column] == CellValue.EMPTY.value:
                return row

        raise ColumnFull(column)

    def place(self, column: int, player: int, gravity_down: bool = True) -> int:
        """
        Drop a token for ``player`` into ``column``.

        Returns:
            The row index where the token landed

        Raises:
            OutOfBounds: If column is outside the grid
            ColumnFull: If the column has no empty cell
        """
        if player not in PLAYERS:
            raise ValueError(f"Not a player id: {player}")

        row = self.landing_row(column, gravity_down)
        self.grid[row, column] = player
        debug.trace(f"Placed player {player} at ({row}, {column}), gravity {'down' if gravity_down else 'up'}",
                    "board")
        return row

    def is_column_open(self, column: int) -> bool:
        """True if ``column`` still has an empty cell (gravity does not matter)."""
        if not 0 <= column < self.cols:
            return False
        return bool(np.any(self.grid[:, column] == CellValue.EMPTY.value))

    def legal_columns(self) -> List[int]:
        """Columns that still accept a token, left to right."""
        return [col for col in range(self.cols) if self.is_column_open(col)]

    def get_state(self) -> np.ndarray:
        """Get a copy of the grid."""
        return self.grid.copy()

    def to_list(self) -> List[List[int]]:
        return self.grid.astype(int).tolist()

    def render(self, gravity_down: bool = None) -> str:
        return render_board_ascii(self.grid, gravity_down)

    def __str__(self) -> str:
        return self.render()
