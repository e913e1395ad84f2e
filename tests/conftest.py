"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell, Difficulty, Game, GameSession


class FakeClock:
    """Manually advanced monotonic clock, in seconds."""

    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible mine placement."""
    return random.Random(1234)


@pytest.fixture
def easy_board(rng: random.Random) -> Board:
    """Generate an easy (9x9, 10 mines) board."""
    return Board.generate(Difficulty.EASY.config, rng)


@pytest.fixture
def empty_board() -> Board:
    """A 3x3 board with no mines for cascade testing."""
    return Board.from_mines(3, 3, [])


@pytest.fixture
def corner_mine_board() -> Board:
    """
    A 5x5 board with a single mine at (0, 0).

    Revealing (4, 4) cascades over everything except the mine.
    """
    return Board.from_mines(5, 5, [(0, 0)])


@pytest.fixture
def walled_board() -> Board:
    """
    A 5x5 board split by a column of mines at col 2.

    Left region (cols 0-1) and right region (cols 3-4) are separate
    cascades.
    """
    return Board.from_mines(5, 5, [(row, 2) for row in range(5)])


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def corner_mine_game(corner_mine_board: Board, clock: FakeClock) -> Game:
    """Game over the corner-mine board."""
    return Game(Difficulty.EASY, board=corner_mine_board, clock=clock)


@pytest.fixture
def empty_game(empty_board: Board, clock: FakeClock) -> Game:
    """Game over the mine-free 3x3 board."""
    return Game(Difficulty.EASY, board=empty_board, clock=clock)


@pytest.fixture
def session(rng: random.Random) -> GameSession:
    """Session on an easy game."""
    return GameSession(Difficulty.EASY, rng=rng)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
