"""
Game module for the Minesweeper engine.

The Game is the aggregate root: difficulty, board, start time, mine count
and game state. It is created fresh for every new game and mutated in
place by reveals and flags.
"""
import logging
import random
import time
from typing import Callable, Optional

from .board import Board, Difficulty, GameState, RevealResult
from .display import DisplayBoard
from .errors import GameNotOngoing

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class Game:
    """
    A single Minesweeper game.

    The low-level operations (reveal_cell, flag_cell, validate_board) apply
    the board rules without looking at the game state. The guarded entry
    points (reveal, flag) refuse to touch a finished game and run the
    win check afterwards; adapters should use those.
    """

    def __init__(
        self,
        difficulty: Difficulty,
        board: Optional[Board] = None,
        num_mines: Optional[int] = None,
        rng: Optional[random.Random] = None,
        clock: Clock = time.monotonic,
    ) -> None:
        """
        Start a new game.

        Args:
            difficulty: Preset that fixes the board dimensions.
            board: Prebuilt board to play on instead of a generated one.
            num_mines: Mine total for the win check; defaults to the
                preset's count, or the prebuilt board's actual count.
            rng: Random source for mine placement.
            clock: Monotonic clock in seconds, used for elapsed time.
        """
        config = difficulty.config
        if board is None:
            board = Board.generate(config, rng)
            if num_mines is None:
                num_mines = config.num_mines
        elif num_mines is None:
            num_mines = board.count_mines()

        self.difficulty = difficulty
        self.board = board
        self.num_mines = num_mines
        self.game_state = GameState.ONGOING
        self._clock = clock
        self.start_time = clock()

    @classmethod
    def new(cls, difficulty: Difficulty, rng: Optional[random.Random] = None) -> "Game":
        game = cls(difficulty, rng=rng)
        logger.info(
            "New %s game: %dx%d, %d mines",
            difficulty.value, game.board.rows, game.board.cols, game.num_mines,
        )
        return game

    # ========================================================================
    # Board Rules
    # ========================================================================

    def flag_cell(self, row: int, col: int) -> bool:
        """Toggle a flag; out of bounds and revealed cells are no-ops."""
        return self.board.flag(row, col)

    def reveal_cell(self, row: int, col: int) -> RevealResult:
        """
        Reveal a cell and cascade through zero-count neighbours.

        Revealing a mine loses the game. Non-hidden and out-of-bounds
        targets are no-ops.
        """
        result = self.board.reveal(row, col)
        if result.hit_mine:
            self._finish(GameState.LOST)
        return result

    def validate_board(self) -> GameState:
        """
        Declare a win once the covered cells equal the mine count.

        Terminal states are sticky. The check relies on every revealed
        mine having already ended the game, so covered cells are assumed
        to be the mines.
        """
        if self.game_state is GameState.ONGOING:
            if self.board.count_covered() == self.num_mines:
                self._finish(GameState.WON)
        return self.game_state

    def _finish(self, state: GameState) -> None:
        self.game_state = state
        logger.info(
            "Game %s after %d ms", state.value.lower(), self.elapsed_ms()
        )

    # ========================================================================
    # Guarded Entry Points
    # ========================================================================

    def _ensure_ongoing(self) -> None:
        if self.game_state is not GameState.ONGOING:
            raise GameNotOngoing(self.game_state)

    def flag(self, row: int, col: int) -> DisplayBoard:
        """
        Toggle a flag and run the win check.

        Raises:
            GameNotOngoing: If the game is already won or lost.
        """
        self._ensure_ongoing()
        self.flag_cell(row, col)
        self.validate_board()
        return self.get_display_board()

    def reveal(self, row: int, col: int) -> DisplayBoard:
        """
        Reveal a cell and run the win check.

        Raises:
            GameNotOngoing: If the game is already won or lost.
        """
        self._ensure_ongoing()
        self.reveal_cell(row, col)
        self.validate_board()
        return self.get_display_board()

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def is_ongoing(self) -> bool:
        return self.game_state is GameState.ONGOING

    def elapsed_ms(self) -> int:
        return int((self._clock() - self.start_time) * 1000)

    def get_display_board(self) -> DisplayBoard:
        """
        Project the game for presentation without mutating it.

        Elapsed time is only reported once the game is over, and is
        measured at projection time.
        """
        time_elapsed = self.elapsed_ms() if self.game_state.is_terminal else None
        return DisplayBoard.from_board(
            self.board, self.difficulty, self.game_state, time_elapsed
        )
