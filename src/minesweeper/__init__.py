"""
Minesweeper engine.

Provides board generation, reveal and flag rules, win/loss detection and
a serializable display projection, plus adapters that drive a shared game.
"""
from .cell import Cell, CellState
from .board import (
    Board,
    BoardConfig,
    Difficulty,
    GameState,
    RevealResult,
    EASY,
    MEDIUM,
    HARD,
)
from .display import Bomb, DisplayBoard, DisplayCell, Flagged, Hidden, Revealed
from .errors import GameNotOngoing, InvalidDifficulty, MinesweeperError
from .game import Game
from .session import GameSession

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "Difficulty",
    "GameState",
    "RevealResult",
    "EASY",
    "MEDIUM",
    "HARD",
    "Bomb",
    "DisplayBoard",
    "DisplayCell",
    "Flagged",
    "Hidden",
    "Revealed",
    "GameNotOngoing",
    "InvalidDifficulty",
    "MinesweeperError",
    "Game",
    "GameSession",
]
