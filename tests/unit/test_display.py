"""
Unit tests for the display projection.

Tests the tagged cell variants, wire serialization and the numeric array.
"""
import json

import numpy as np
import pytest

from minesweeper import (
    Board,
    Bomb,
    Difficulty,
    DisplayBoard,
    Flagged,
    Game,
    GameState,
    Hidden,
    Revealed,
)


@pytest.fixture
def mixed_board(corner_mine_game: Game) -> DisplayBoard:
    """
    Corner-mine game with a flag at (4, 4), then the mine revealed.

    Row 0 reads: Bomb, Hidden, ... and (4, 4) is Flagged.
    """
    corner_mine_game.flag(4, 4)
    corner_mine_game.reveal_cell(1, 1)
    corner_mine_game.reveal_cell(0, 0)
    return corner_mine_game.get_display_board()


# ============================================================================
# Cell Variant Tests
# ============================================================================

class TestDisplayCells:
    """Test the per-cell tagged variants."""

    def test_revealed_count_range(self) -> None:
        """Revealed carries 0-8 and nothing else."""
        assert Revealed(8).adjacent_mines == 8
        with pytest.raises(ValueError):
            Revealed(9)
        with pytest.raises(ValueError):
            Revealed(-1)

    def test_variants_compare_by_value(self) -> None:
        assert Revealed(3) == Revealed(3)
        assert Revealed(3) != Revealed(2)
        assert Hidden() != Flagged()

    def test_projection_variants(self, mixed_board: DisplayBoard) -> None:
        """Each cell projects to the variant matching its state."""
        assert mixed_board.cell(0, 0) == Bomb()
        assert mixed_board.cell(1, 1) == Revealed(1)
        assert mixed_board.cell(4, 4) == Flagged()
        assert mixed_board.cell(2, 2) == Hidden()

    def test_hidden_mines_are_not_leaked(self, corner_mine_game: Game) -> None:
        """A hidden mine looks like any other hidden cell."""
        board = corner_mine_game.get_display_board()
        assert board.cell(0, 0) == board.cell(3, 3) == Hidden()


# ============================================================================
# Serialization Tests
# ============================================================================

class TestSerialization:
    """Test the wire format."""

    def test_wire_cell_states(self, mixed_board: DisplayBoard) -> None:
        data = mixed_board.to_dict()
        assert data["cells"][0][0] == {"state": "Bomb"}
        assert data["cells"][1][1] == {"state": {"Revealed": 1}}
        assert data["cells"][4][4] == {"state": "Flagged"}
        assert data["cells"][2][2] == {"state": "Hidden"}

    def test_wire_fields(self, mixed_board: DisplayBoard) -> None:
        data = mixed_board.to_dict()
        assert set(data) == {"difficulty", "cells", "game_state", "time_elapsed"}
        assert data["difficulty"] == "easy"
        assert data["game_state"] == "Lost"
        assert isinstance(data["time_elapsed"], int)

    def test_ongoing_time_elapsed_is_null(self, corner_mine_game: Game) -> None:
        data = json.loads(corner_mine_game.get_display_board().to_json())
        assert data["time_elapsed"] is None
        assert data["game_state"] == "Ongoing"

    def test_json_round_trips_through_dict(self, mixed_board: DisplayBoard) -> None:
        assert json.loads(mixed_board.to_json()) == mixed_board.to_dict()

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_difficulty_wire_names(self, difficulty: Difficulty) -> None:
        board = DisplayBoard.from_board(
            Board.from_mines(1, 1, []), difficulty, GameState.ONGOING
        )
        assert board.to_dict()["difficulty"] == difficulty.value


# ============================================================================
# Array Projection Tests
# ============================================================================

class TestArrayProjection:
    """Test the numeric projection."""

    def test_array_shape_and_dtype(self, mixed_board: DisplayBoard) -> None:
        obs = mixed_board.to_array()
        assert obs.shape == (5, 5)
        assert obs.dtype == np.int8

    def test_array_values(self, mixed_board: DisplayBoard) -> None:
        obs = mixed_board.to_array()
        assert obs[0, 0] == 9
        assert obs[1, 1] == 1
        assert obs[4, 4] == -2
        assert obs[2, 2] == -1

    def test_new_game_array_all_hidden(self, corner_mine_game: Game) -> None:
        obs = corner_mine_game.get_display_board().to_array()
        assert np.all(obs == -1)
