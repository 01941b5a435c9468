"""Command-line launcher for the terminal snake game."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from term_snake.config import GameConfig

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="term-snake",
        description=(
            "Play snake in the terminal. Arrow keys steer, space pauses, "
            "Esc or q quits."
        ),
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override its values).",
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--walls", type=float, default=None,
        help="Percentage of the field covered by walls.",
    )
    parser.add_argument(
        "--traversal-time", type=float, default=None,
        help="Milliseconds to cross the field at score zero.",
    )
    parser.add_argument("--max-speed-level", type=int, default=None)
    parser.add_argument("--initial-length", type=int, default=None)
    parser.add_argument(
        "--log-file", type=str, default=None,
        help="Write logs to this file; the terminal is used by the game.",
    )
    parser.add_argument(
        "--log-level", type=str, default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    parser.add_argument(
        "--dump-config", type=str, default=None, metavar="PATH",
        help="Write the effective config to PATH and exit.",
    )
    return parser


def _resolve_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig.load(args.config) if args.config else GameConfig()

    flag_map = {
        "seed": "seed",
        "walls": "wall_percentage",
        "traversal_time": "traversal_time_ms",
        "max_speed_level": "max_speed_level",
        "initial_length": "initial_length",
    }
    overrides = {
        cfg_name: getattr(args, cli_name)
        for cli_name, cfg_name in flag_map.items()
        if getattr(args, cli_name) is not None
    }
    return replace(config, **overrides) if overrides else config


def _play(config: GameConfig) -> int:
    from term_snake.curses_surface import run_in_terminal
    from term_snake.game import GameLoop
    from term_snake.surface import SurfaceError

    def _game(surface) -> int:
        try:
            loop = GameLoop(surface, config)
        except ValueError as exc:
            raise SurfaceError(f"Terminal too small for this config: {exc}") from exc
        return loop.run()

    return run_in_terminal(_game)


def _logging_kwargs(args: argparse.Namespace) -> dict:
    """Build ``logging.basicConfig`` arguments.

    Logs go to ``--log-file`` or nowhere: stderr would draw over the game.
    """
    log_kwargs: dict = {
        "level": getattr(logging, args.log_level),
        "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
    }
    if args.log_file:
        log_kwargs["filename"] = args.log_file
    else:
        log_kwargs["handlers"] = [logging.NullHandler()]
    return log_kwargs


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``term-snake`` CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(**_logging_kwargs(args))

    try:
        config = _resolve_config(args)
    except (OSError, TypeError, ValueError) as exc:
        parser.error(f"invalid configuration: {exc}")

    if args.dump_config:
        config.save(args.dump_config)
        return 0

    from term_snake.surface import SurfaceError

    try:
        score = _play(config)
    except SurfaceError as exc:
        logger.error("Could not start the game: %s", exc)
        print(f"Could not start the game: {exc}", file=sys.stderr)  # noqa: T201
        return 1

    print(f"Final score: {score}")  # noqa: T201
    return 0


if __name__ == "__main__":
    sys.exit(main())
