"""Command line entry point."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from dataclasses import replace

from broadside.core.models import Difficulty
from broadside.infra.config import load_default_env_files, load_engine_settings
from broadside.infra.logging import setup_logging, shutdown_logging
from broadside.selfplay import simulate

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="broadside", description="Naval combat targeting engine.")
    commands = parser.add_subparsers(dest="command", required=True)

    sim = commands.add_parser("simulate", help="Play seeded self-play games and report shot counts.")
    sim.add_argument(
        "--difficulty",
        choices=[difficulty.value for difficulty in Difficulty],
        default=None,
        help="Difficulty tier (defaults to BROADSIDE_DIFFICULTY).",
    )
    sim.add_argument("--games", type=int, default=20)
    sim.add_argument("--seed", type=int, default=None, help="Base seed (defaults to BROADSIDE_SEED or 0).")
    sim.add_argument("--log-level", default=None)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line interface."""
    args = build_parser().parse_args(argv)
    load_default_env_files(override_existing=False)
    settings = load_engine_settings()
    if args.log_level:
        settings = replace(settings, log_level=args.log_level.upper())
    setup_logging(settings)

    try:
        if args.games <= 0:
            logger.error("games must be positive, got %d", args.games)
            return 2
        difficulty = Difficulty(args.difficulty) if args.difficulty else settings.difficulty
        seed = args.seed if args.seed is not None else (settings.seed or 0)
        summary = simulate(difficulty, args.games, seed)
        print(
            f"{summary.difficulty.value}: games={summary.games} "
            f"mean={summary.mean:.2f} best={summary.best} worst={summary.worst}"
        )
        return 0
    finally:
        shutdown_logging()


if __name__ == "__main__":
    raise SystemExit(main())
