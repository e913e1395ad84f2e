"""
Display projection for the Minesweeper engine.

The projection is the only view callers get of a game. Each cell becomes
one of four tagged variants, so a revealed mine can never carry a count
and a hidden cell never leaks whether it holds a mine.
"""
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

from .board import Board, Difficulty, GameState
from .cell import CellState


# ============================================================================
# Cell Variants
# ============================================================================

@dataclass(frozen=True)
class Hidden:
    """A cell the player has not uncovered."""

    observation = -1

    def to_wire(self) -> str:
        return "Hidden"


@dataclass(frozen=True)
class Flagged:
    """A covered cell carrying the player's flag."""

    observation = -2

    def to_wire(self) -> str:
        return "Flagged"


@dataclass(frozen=True)
class Bomb:
    """A revealed mine."""

    observation = 9

    def to_wire(self) -> str:
        return "Bomb"


@dataclass(frozen=True)
class Revealed:
    """A revealed safe cell and its adjacent mine count."""

    adjacent_mines: int

    def __post_init__(self) -> None:
        if not 0 <= self.adjacent_mines <= 8:
            raise ValueError(
                f"Adjacent mine count out of range: {self.adjacent_mines}"
            )

    @property
    def observation(self) -> int:
        return self.adjacent_mines

    def to_wire(self) -> Dict[str, int]:
        return {"Revealed": self.adjacent_mines}


DisplayCell = Union[Hidden, Flagged, Bomb, Revealed]

HIDDEN = Hidden()
FLAGGED = Flagged()
BOMB = Bomb()


def project_cell(cell) -> DisplayCell:
    """Map an engine cell to the variant the player may see."""
    if cell.state == CellState.HIDDEN:
        return HIDDEN
    if cell.state == CellState.FLAGGED:
        return FLAGGED
    if cell.is_mine:
        return BOMB
    return Revealed(cell.adjacent_mines)


# ============================================================================
# Display Board
# ============================================================================

@dataclass(frozen=True)
class DisplayBoard:
    """
    Read-only snapshot of a game for presentation.

    Attributes:
        difficulty: Preset the game was created with.
        cells: Row-major grid of display cells.
        game_state: Ongoing, Won or Lost.
        time_elapsed: Milliseconds since the game started, only set once
            the game is over.
    """

    difficulty: Difficulty
    cells: Tuple[Tuple[DisplayCell, ...], ...]
    game_state: GameState
    time_elapsed: Optional[int] = None

    @classmethod
    def from_board(
        cls,
        board: Board,
        difficulty: Difficulty,
        game_state: GameState,
        time_elapsed: Optional[int] = None,
    ) -> "DisplayBoard":
        cells = tuple(
            tuple(project_cell(cell) for cell in grid_row)
            for grid_row in board.iter_rows()
        )
        return cls(difficulty, cells, game_state, time_elapsed)

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def cell(self, row: int, col: int) -> DisplayCell:
        return self.cells[row][col]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the wire object.

        Cell states serialize as "Hidden", "Flagged", "Bomb" or
        {"Revealed": n}, each wrapped as {"state": ...}.
        """
        return {
            "difficulty": self.difficulty.value,
            "cells": [
                [{"state": cell.to_wire()} for cell in display_row]
                for display_row in self.cells
            ],
            "game_state": self.game_state.value,
            "time_elapsed": self.time_elapsed,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def to_array(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.rows, self.cols), dtype=np.int8)
        for row, display_row in enumerate(self.cells):
            for col, cell in enumerate(display_row):
                obs[row, col] = cell.observation
        return obs
