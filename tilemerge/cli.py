"""
Tilemerge CLI - Command-line interface for the engine.

Usage:
    tilemerge play [--size N] [--target V] [--seed S]   Play in the terminal
    tilemerge serve [--host H] [--port P]               Run the HTTP API
"""

import argparse
import logging
import random
import sys
from typing import Callable

from .controls import direction_from_key
from .engine_core.config import ConfigurationError, GameConfig
from .engine_core.grid import max_tile
from .session import GameSession, GameSnapshot, RejectReason
from .storage import FileScoreStore


HELP_TEXT = "Move with w/a/s/d, h/j/k/l or up/down/left/right. r = new game, q = quit."
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def main(argv: list[str] | None = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Tilemerge - sliding-tile merge puzzle",
        prog="tilemerge",
    )
    parser.add_argument(
        "--log-level", default="WARNING", type=str.upper, choices=LOG_LEVELS, help="Logging level"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument("--size", type=int, default=4, help="Board width and height")
    play_parser.add_argument("--target", type=int, default=2048, help="Winning tile value")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    play_parser.add_argument("--score-file", default=None, help="Best score JSON file")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "play":
        cmd_play(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_play(args):
    """Play an interactive game on stdin/stdout."""
    try:
        config = GameConfig(size=args.size, winning_value=args.target)
    except ConfigurationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    session = GameSession(
        config=config,
        store=FileScoreStore(args.score_file),
        rng=random.Random(args.seed),
    )
    run_game(session)


def cmd_serve(args):
    """Run the API under uvicorn."""
    import uvicorn

    uvicorn.run("tilemerge.api.app:app", host=args.host, port=args.port)


def run_game(
    session: GameSession,
    read_line: Callable[[str], str] | None = None,
    write: Callable[[str], None] | None = None,
):
    """
    Drive a session from line input until quit or end of input.

    Defaults to input() and print(). Returns the final snapshot.
    """
    read_line = read_line or input
    write = write or print
    write(HELP_TEXT)
    write(render_board(session.get_state()))
    announced_win = session.won

    while True:
        try:
            line = read_line("> ")
        except EOFError:
            break

        command = line.strip().lower()
        if command in ("q", "quit", "exit"):
            break
        if command in ("r", "reset"):
            session.reset()
            announced_win = False
            write(render_board(session.get_state()))
            continue

        direction = direction_from_key(command) if command else None
        if direction is None:
            write(f"Unknown command: {line.strip()!r}. {HELP_TEXT}")
            continue

        result = session.apply_move(direction)
        if result.reason == RejectReason.GAME_OVER:
            write(f"Game over. Final score: {result.snapshot.score}. Press r for a new game.")
            continue
        if not result.accepted:
            write(f"Can't move {direction.value}.")
            continue

        write(render_board(result.snapshot))
        if result.snapshot.won and not announced_win:
            announced_win = True
            write(f"You reached {result.snapshot.winning_value}! Keep going or press q.")
        if result.snapshot.game_over:
            write(f"Game over. Final score: {result.snapshot.score}. Press r for a new game.")

    return session.get_state()


def render_board(snapshot: GameSnapshot) -> str:
    """Text rendering: score line, then one row per line, '.' for empty cells."""
    width = max(4, len(str(max_tile(snapshot.grid))))
    lines = [f"Score: {snapshot.score}  Best: {snapshot.best_score}"]
    for row in snapshot.grid:
        lines.append(" ".join(
            ("." if value is None else str(value)).rjust(width) for value in row
        ))
    return "\n".join(lines)


if __name__ == "__main__":
    main()
