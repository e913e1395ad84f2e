"""
Unit tests for Cell class.

Tests cell state management and reveal/flag primitives.
"""
from minesweeper import Cell, CellState


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_not_mine(self) -> None:
        """New cell should not be a mine by default."""
        assert Cell().is_mine is False

    def test_default_cell_is_hidden(self) -> None:
        """New cell should be hidden by default."""
        cell = Cell()
        assert cell.state == CellState.HIDDEN
        assert cell.is_hidden is True
        assert cell.is_covered is True

    def test_default_cell_has_zero_adjacent_mines(self) -> None:
        """New cell should have 0 adjacent mines by default."""
        assert Cell().adjacent_mines == 0


# ============================================================================
# Cell Reveal Tests
# ============================================================================

class TestCellReveal:
    """Test cell reveal behavior."""

    def test_reveal_hidden_cell(self, hidden_cell: Cell) -> None:
        """Revealing a hidden cell should succeed and change state."""
        assert hidden_cell.reveal() is True
        assert hidden_cell.is_revealed is True
        assert hidden_cell.is_covered is False

    def test_reveal_already_revealed_returns_false(
        self, hidden_cell: Cell
    ) -> None:
        """Revealing an already revealed cell should fail."""
        hidden_cell.reveal()
        assert hidden_cell.reveal() is False

    def test_reveal_flagged_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot reveal a flagged cell."""
        hidden_cell.toggle_flag()
        assert hidden_cell.reveal() is False
        assert hidden_cell.is_flagged is True

    def test_reveal_mine_cell(self, mine_cell: Cell) -> None:
        """A mine is revealed like any other cell."""
        assert mine_cell.reveal() is True
        assert mine_cell.is_revealed is True


# ============================================================================
# Cell Flag Tests
# ============================================================================

class TestCellFlag:
    """Test cell flagging behavior."""

    def test_flag_hidden_cell(self, hidden_cell: Cell) -> None:
        """Flagging a hidden cell should succeed."""
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.state == CellState.FLAGGED
        assert hidden_cell.is_covered is True

    def test_unflag_returns_to_hidden(self, hidden_cell: Cell) -> None:
        """Flagging twice should return the cell to hidden."""
        hidden_cell.toggle_flag()
        hidden_cell.toggle_flag()
        assert hidden_cell.is_hidden is True

    def test_flag_revealed_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot flag a revealed cell."""
        hidden_cell.reveal()
        assert hidden_cell.toggle_flag() is False
        assert hidden_cell.is_revealed is True
