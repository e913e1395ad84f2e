"""
Board module for the Minesweeper engine.

Implements the grid of cells: randomized mine placement, adjacency
counting, flag toggling and the cascading reveal.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from .cell import Cell, CellState
from .errors import InvalidDifficulty

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

# Neighbour offsets in row-major order, centre excluded.
NEIGHBOR_OFFSETS: Tuple[Position, ...] = tuple(
    (delta_row, delta_col)
    for delta_row in (-1, 0, 1)
    for delta_col in (-1, 0, 1)
    if (delta_row, delta_col) != (0, 0)
)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game; WON and LOST are terminal."""

    ONGOING = "Ongoing"
    WON = "Won"
    LOST = "Lost"

    @property
    def is_terminal(self) -> bool:
        return self is not GameState.ONGOING


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Dimensions and mine count of a board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Total mines to place.
    """

    rows: int = 9
    cols: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        if self.num_mines > self.rows * self.cols:
            raise ValueError(f"Too many mines (max {self.rows * self.cols})")

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols


# Preset difficulty levels
EASY = BoardConfig(9, 9, 10)
MEDIUM = BoardConfig(16, 16, 40)
HARD = BoardConfig(16, 30, 99)


class Difficulty(Enum):
    """Preset board sizes, keyed by their wire names."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def config(self) -> BoardConfig:
        return _PRESETS[self]

    @classmethod
    def parse(cls, name: str) -> "Difficulty":
        """
        Resolve a wire name to a difficulty.

        Raises:
            InvalidDifficulty: If name is not exactly one of the wire names.
        """
        for difficulty in cls:
            if difficulty.value == name:
                return difficulty
        raise InvalidDifficulty(name)


_PRESETS = {
    Difficulty.EASY: EASY,
    Difficulty.MEDIUM: MEDIUM,
    Difficulty.HARD: HARD,
}


@dataclass
class RevealResult:
    """Outcome of a single reveal request."""

    revealed: List[Position] = field(default_factory=list)
    hit_mine: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.revealed)


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Minesweeper grid.

    Dimensions are fixed at construction. Adjacency counts are computed
    once, after mines are placed, and never recomputed.
    """

    def __init__(self, rows: int, cols: int) -> None:
        self._grid: List[List[Cell]] = [
            [Cell() for _ in range(cols)] for _ in range(rows)
        ]

    # ========================================================================
    # Construction
    # ========================================================================

    @classmethod
    def generate(
        cls, config: BoardConfig, rng: Optional[random.Random] = None
    ) -> "Board":
        """
        Build a board with mines placed uniformly at random.

        Args:
            config: Dimensions and mine count.
            rng: Random source; the module-level generator if omitted.

        Returns:
            A fully hidden board with adjacency counts computed.
        """
        board = cls(config.rows, config.cols)
        board._place_mines(config.num_mines, rng or random.Random())
        board._calculate_adjacent_mines()
        logger.debug(
            "Generated %dx%d board with %d mines",
            config.rows, config.cols, config.num_mines,
        )
        return board

    @classmethod
    def from_mines(
        cls, rows: int, cols: int, mines: Iterable[Position]
    ) -> "Board":
        """Build a board with mines at exactly the given positions."""
        board = cls(rows, cols)
        for row, col in mines:
            board._grid[row][col].is_mine = True
        board._calculate_adjacent_mines()
        return board

    def _place_mines(self, num_mines: int, rng: random.Random) -> None:
        """
        Place mines by rejection sampling.

        Draws uniformly random positions and retries whenever the drawn
        cell already holds a mine, until num_mines distinct cells are mined.
        """
        rows, cols = self.rows, self.cols
        for _ in range(num_mines):
            while True:
                cell = self._grid[rng.randrange(rows)][rng.randrange(cols)]
                if not cell.is_mine:
                    cell.is_mine = True
                    break

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all non-mine cells."""
        for row, col in self.positions():
            cell = self._grid[row][col]
            if not cell.is_mine:
                cell.adjacent_mines = self._count_adjacent_mines(row, col)

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Geometry
    # ========================================================================

    @property
    def rows(self) -> int:
        return len(self._grid)

    @property
    def cols(self) -> int:
        # Rectangular by construction, so the first row is representative.
        return len(self._grid[0])

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def positions(self) -> Iterator[Position]:
        """Yield every (row, col) in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get the in-bounds Chebyshev neighbours of a cell.

        Neighbours past the grid edge are excluded, never wrapped.
        """
        neighbors = []
        for delta_row, delta_col in NEIGHBOR_OFFSETS:
            new_row = row + delta_row
            new_col = col + delta_col
            if self.is_valid_position(new_row, new_col):
                neighbors.append((new_row, new_col))
        return neighbors

    @staticmethod
    def _cascade_targets(row: int, col: int) -> List[Position]:
        """
        Neighbour coordinates visited by a cascade.

        Indices below zero saturate at zero instead of being dropped, so
        an edge cell may list itself or a duplicate neighbour. Indices past
        the far edge are left as-is and rejected by the bounds check.
        """
        return [
            (max(row + delta_row, 0), max(col + delta_col, 0))
            for delta_row, delta_col in NEIGHBOR_OFFSETS
        ]

    # ========================================================================
    # Mutations
    # ========================================================================

    def flag(self, row: int, col: int) -> bool:
        """
        Toggle the flag on a cell.

        Out-of-bounds positions and revealed cells are silent no-ops.

        Returns:
            True if the cell changed.
        """
        if not self.is_valid_position(row, col):
            return False
        return self._grid[row][col].toggle_flag()

    def reveal(self, row: int, col: int) -> RevealResult:
        """
        Reveal a cell, cascading through zero-count safe cells.

        Uses an explicit work-list rather than recursion. Every popped
        position goes through the same rule: skip if out of bounds or not
        hidden, otherwise reveal it; a mine ends that branch and marks the
        result as a hit, a zero-count safe cell queues its neighbours.

        Returns:
            The positions revealed, in reveal order, and whether a mine
            was among them.
        """
        result = RevealResult()
        stack: List[Position] = [(row, col)]
        queued: Set[Position] = {(row, col)}

        while stack:
            current_row, current_col = stack.pop()
            if not self.is_valid_position(current_row, current_col):
                continue
            cell = self._grid[current_row][current_col]
            if not cell.reveal():
                continue
            result.revealed.append((current_row, current_col))

            if cell.is_mine:
                result.hit_mine = True
                continue
            if cell.adjacent_mines == 0:
                # Reversed so the first neighbour is popped first.
                for target in reversed(self._cascade_targets(current_row, current_col)):
                    if target not in queued:
                        queued.add(target)
                        stack.append(target)

        if len(result.revealed) > 1:
            logger.debug(
                "Reveal at (%d, %d) cascaded over %d cells",
                row, col, len(result.revealed),
            )
        return result

    # ========================================================================
    # State Accessors
    # ========================================================================

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def iter_rows(self) -> Iterator[List[Cell]]:
        return iter(self._grid)

    def count_mines(self) -> int:
        return sum(cell.is_mine for grid_row in self._grid for cell in grid_row)

    def count_covered(self) -> int:
        """Count cells that are hidden or flagged."""
        return sum(cell.is_covered for grid_row in self._grid for cell in grid_row)

    def count_state(self, state: CellState) -> int:
        return sum(cell.state == state for grid_row in self._grid for cell in grid_row)
