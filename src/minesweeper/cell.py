"""
Cell module for the Minesweeper engine.

A cell is the board's private unit of state: whether it holds a mine,
how many of its neighbours do, and whether the player has uncovered or
flagged it. Callers never see cells directly; they see the display
projection built from them.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Visibility of a cell to the player."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# Revealed cells are absent: they cannot be flagged.
_FLAG_TOGGLE = {
    CellState.HIDDEN: CellState.FLAGGED,
    CellState.FLAGGED: CellState.HIDDEN,
}


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighbouring cells (0-8).
            Only meaningful for non-mine cells.
        state: Current visibility (hidden, revealed, or flagged).
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Uncover this cell if it is still hidden.

        A mine is uncovered like any other cell; deciding that the game is
        lost belongs to the caller. Flagged cells stay put until unflagged.

        Returns:
            True if the state changed.
        """
        if self.is_hidden:
            self.state = CellState.REVEALED
            return True
        return False

    def toggle_flag(self) -> bool:
        """
        Swap HIDDEN and FLAGGED; revealed cells keep their state.

        Returns:
            True if the state changed.
        """
        toggled = _FLAG_TOGGLE.get(self.state)
        if toggled is None:
            return False
        self.state = toggled
        return True

    @property
    def is_hidden(self) -> bool:
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        return self.state == CellState.FLAGGED

    @property
    def is_covered(self) -> bool:
        """Hidden or flagged: the player has not uncovered it yet."""
        return self.state != CellState.REVEALED
