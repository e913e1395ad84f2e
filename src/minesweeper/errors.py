"""
Error types raised by the Minesweeper engine.

Out-of-range coordinates and redundant reveals or flags are not errors;
they are absorbed as no-ops so that stale UI coordinates never fail.
"""


class MinesweeperError(Exception):
    """Base class for all engine errors."""


class InvalidDifficulty(MinesweeperError, ValueError):
    """Raised when a difficulty name is not one of easy, medium, hard."""

    def __init__(self, difficulty: object) -> None:
        super().__init__(f"Invalid difficulty: {difficulty!r}")
        self.difficulty = difficulty


class GameNotOngoing(MinesweeperError):
    """Raised when a reveal or flag is attempted on a finished game."""

    def __init__(self, state) -> None:
        super().__init__(f"Game is not ongoing (state: {state.value})")
        self.state = state
