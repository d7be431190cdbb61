import numpy as np
import pytest

from flipfour.debug import debug, DebugLevel
from flipfour.game.board import Board
from flipfour.game.state import GameState


@pytest.fixture(autouse=True)
def quiet_debug():
    """Keep the shared debug manager at its default between tests."""
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[], log_file="")
    yield
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[], log_file="")


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def board():
    return Board(6, 7)


@pytest.fixture
def open_game(rng):
    """Easy game without blocked cells."""
    return GameState("Alice", "Bob", "easy", blocked_cells=(), rng=rng)


def draw_pattern(rows, cols):
    """Full grid with no four-in-a-row: rows alternate, columns go in pairs."""
    grid = np.zeros((rows, cols), dtype=np.int8)
    for r in range(rows):
        for c in range(cols):
            grid[r, c] = 1 + ((r % 2) ^ ((c // 2) % 2))
    return grid


@pytest.fixture
def draw_grid():
    return draw_pattern(6, 7)
