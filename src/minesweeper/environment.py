"""
Gymnasium environment wrapper for Minesweeper.

Exposes the engine through the standard RL interface so agents can play
the same games the other adapters serve.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Difficulty, GameState
from .display import DisplayBoard
from .game import Game


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 2 * rows * cols.
        Action i < rows * cols reveals cell (i // cols, i % cols); the
        remaining actions toggle the flag on cell i - rows * cols.

    Rewards:
        - +1 for a reveal that uncovers at least one safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - 0 for toggling a flag
        - -0.1 for an action that leaves the board unchanged
    """

    metadata = {"render_modes": []}

    def __init__(self, difficulty: Difficulty = Difficulty.EASY) -> None:
        super().__init__()

        self.difficulty = difficulty
        config = difficulty.config
        self.rows = config.rows
        self.cols = config.cols
        self.game = Game(difficulty, rng=random.Random())

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.rows, self.cols),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(2 * self.rows * self.cols)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game.

        Args:
            seed: Random seed for reproducible mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        rng = random.Random(int(self.np_random.integers(2**31)))
        self.game = Game(self.difficulty, rng=rng)
        self._steps = 0

        board = self.game.get_display_board()
        return board.to_array(), self._get_info(board)

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        if not self.game.is_ongoing:
            raise RuntimeError("step() called on a finished game; call reset()")

        self._steps += 1
        reveal, row, col = self._decode_action(int(action))
        reward = self._apply(reveal, row, col)

        board = self.game.get_display_board()
        terminated = board.game_state.is_terminal
        return board.to_array(), reward, terminated, False, self._get_info(board)

    def _decode_action(self, action: int) -> Tuple[bool, int, int]:
        cells = self.rows * self.cols
        reveal = action < cells
        index = action if reveal else action - cells
        return reveal, index // self.cols, index % self.cols

    def _apply(self, reveal: bool, row: int, col: int) -> float:
        if not reveal:
            changed = self.game.flag_cell(row, col)
            self.game.validate_board()
            return 0.0 if changed else -0.1

        result = self.game.reveal_cell(row, col)
        state = self.game.validate_board()
        if state is GameState.LOST:
            return -10.0
        if state is GameState.WON:
            return 10.0
        return 1.0 if result.changed else -0.1

    def _get_info(self, board: DisplayBoard) -> Dict[str, Any]:
        return {
            "steps": self._steps,
            "game_state": board.game_state.value,
            "hidden": self.game.board.count_covered(),
            "time_elapsed": board.time_elapsed,
        }

    def action_masks(self) -> np.ndarray:
        """
        Get mask of actions that would change the board.

        Returns:
            Boolean array where True = valid action.
        """
        cells = self.rows * self.cols
        mask = np.zeros(self.action_space.n, dtype=bool)
        for row, col in self.game.board.positions():
            cell = self.game.board.get_cell(row, col)
            index = row * self.cols + col
            if cell.is_hidden:
                mask[index] = True
            if cell.is_covered:
                mask[cells + index] = True
        return mask
