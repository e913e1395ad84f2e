"""
Shared game session.

Holds the one live Game behind a lock so that several adapters (a local
command dispatcher, an HTTP handler, an RL environment) can drive it
concurrently. Every operation runs to completion under the lock; new
games replace the previous instance wholesale under the same lock.
"""
import logging
import random
import threading
from typing import Callable, List, Optional, Union

from .board import Difficulty
from .display import DisplayBoard
from .errors import GameNotOngoing
from .game import Game

logger = logging.getLogger(__name__)

Observer = Callable[[DisplayBoard], None]


class GameSession:
    """
    Lock-protected owner of the current game.

    Observers are called with the updated projection after each
    successful mutation, outside the lock. A failing observer is logged
    and otherwise ignored.
    """

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.MEDIUM,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._lock = threading.Lock()
        self._rng = rng
        self._observers: List[Observer] = []
        self._game = Game.new(difficulty, rng=self._rng)

    # ========================================================================
    # Observers
    # ========================================================================

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register an observer.

        Returns:
            A callable that removes the observer again.
        """
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def _notify(self, board: DisplayBoard) -> None:
        with self._lock:
            observers = list(self._observers)
        for observer in observers:
            try:
                observer(board)
            except Exception:
                logger.warning("Observer %r failed", observer, exc_info=True)

    # ========================================================================
    # Operations
    # ========================================================================

    def new_game(self, difficulty: Union[Difficulty, str]) -> DisplayBoard:
        """
        Replace the current game with a fresh one.

        Raises:
            InvalidDifficulty: If difficulty is a string other than
                easy, medium or hard.
        """
        if not isinstance(difficulty, Difficulty):
            difficulty = Difficulty.parse(difficulty)
        with self._lock:
            self._game = Game.new(difficulty, rng=self._rng)
            board = self._game.get_display_board()
        self._notify(board)
        return board

    def get_state(self) -> DisplayBoard:
        with self._lock:
            return self._game.get_display_board()

    def flag(self, row: int, col: int) -> DisplayBoard:
        """
        Toggle a flag on the current game.

        Raises:
            GameNotOngoing: If the current game is won or lost.
        """
        return self._mutate(lambda game: game.flag(row, col), "flag", row, col)

    def reveal(self, row: int, col: int) -> DisplayBoard:
        """
        Reveal a cell on the current game.

        Raises:
            GameNotOngoing: If the current game is won or lost.
        """
        return self._mutate(lambda game: game.reveal(row, col), "reveal", row, col)

    def _mutate(
        self,
        action: Callable[[Game], DisplayBoard],
        name: str,
        row: int,
        col: int,
    ) -> DisplayBoard:
        try:
            with self._lock:
                board = action(self._game)
        except GameNotOngoing as error:
            logger.warning("Rejected %s at (%d, %d): %s", name, row, col, error)
            raise
        self._notify(board)
        return board
