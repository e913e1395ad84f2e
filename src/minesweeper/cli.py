"""
Minesweeper command line.

Usage:
    minesweeper play [--difficulty {easy,medium,hard}] [--log-level LEVEL]
    minesweeper new {easy,medium,hard}

`play` reads one command per line from stdin and answers each with one
JSON line:

    new <difficulty>
    state
    reveal <row> <col>
    flag <row> <col>
    quit
"""
import argparse
import json
import logging
import sys
from typing import Any, Dict, Iterable, Optional, Sequence, TextIO, Tuple

from .board import Difficulty
from .errors import GameNotOngoing, InvalidDifficulty
from .session import GameSession

logger = logging.getLogger(__name__)


class BadCommand(ValueError):
    """Raised for a command line the dispatcher cannot parse."""


# ============================================================================
# Command Dispatcher
# ============================================================================

class CommandDispatcher:
    """Translate text commands into session operations."""

    def __init__(self, session: GameSession) -> None:
        self.session = session

    def dispatch(self, line: str) -> Dict[str, Any]:
        """
        Run one command.

        Returns:
            The board's wire object, or an error object with "error" and
            "kind" keys.
        """
        try:
            return self._run(line.split())
        except (InvalidDifficulty, GameNotOngoing, BadCommand) as error:
            logger.debug("Command %r rejected: %s", line.strip(), error)
            return {"error": str(error), "kind": type(error).__name__}

    def _run(self, words: Sequence[str]) -> Dict[str, Any]:
        if not words:
            raise BadCommand("Empty command")
        command, args = words[0].lower(), words[1:]

        if command == "state":
            self._expect(command, args, 0)
            return self.session.get_state().to_dict()
        if command == "new":
            self._expect(command, args, 1)
            return self.session.new_game(args[0]).to_dict()
        if command in ("reveal", "flag"):
            self._expect(command, args, 2)
            row, col = self._coordinates(args)
            operation = getattr(self.session, command)
            return operation(row, col).to_dict()
        raise BadCommand(f"Unknown command: {command}")

    @staticmethod
    def _expect(command: str, args: Sequence[str], count: int) -> None:
        if len(args) != count:
            raise BadCommand(f"{command} takes {count} argument(s), got {len(args)}")

    @staticmethod
    def _coordinates(args: Sequence[str]) -> Tuple[int, int]:
        try:
            return int(args[0]), int(args[1])
        except ValueError:
            raise BadCommand(f"Coordinates must be integers: {' '.join(args)}") from None

    def run(self, lines: Iterable[str], out: TextIO) -> None:
        """Answer each line until input ends or a quit command arrives."""
        for line in lines:
            if line.strip().lower() == "quit":
                break
            if not line.strip():
                continue
            print(json.dumps(self.dispatch(line)), file=out, flush=True)


# ============================================================================
# Entry Points
# ============================================================================

def play(args: argparse.Namespace) -> int:
    """Serve commands from stdin against one session."""
    session = GameSession(Difficulty.parse(args.difficulty))
    dispatcher = CommandDispatcher(session)
    print(session.get_state().to_json(), flush=True)
    dispatcher.run(sys.stdin, sys.stdout)
    return 0


def new(args: argparse.Namespace) -> int:
    """Print a fresh board."""
    try:
        difficulty = Difficulty.parse(args.difficulty)
    except InvalidDifficulty as error:
        print(f"error: {error}", file=sys.stderr)
        return 2
    session = GameSession(difficulty)
    print(session.get_state().to_json())
    return 0


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Minesweeper engine - play over a line-based command protocol"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=LOG_LEVELS,
        help="Logging level for engine diagnostics (stderr)",
    )

    # Accepted after the subcommand too; SUPPRESS keeps the top-level default.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        default=argparse.SUPPRESS,
        choices=LOG_LEVELS,
        help="Logging level for engine diagnostics (stderr)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser(
        "play", parents=[common], help="Read commands from stdin"
    )
    play_parser.add_argument(
        "--difficulty",
        choices=[difficulty.value for difficulty in Difficulty],
        default=Difficulty.MEDIUM.value,
        help="Difficulty of the first game",
    )

    new_parser = subparsers.add_parser(
        "new", parents=[common], help="Print a fresh board"
    )
    new_parser.add_argument("difficulty", help="easy, medium or hard")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments and run the appropriate command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        return play(args)
    if args.command == "new":
        return new(args)
    parser.print_help()
    return 1
