import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from aoc2025.config import RunConfig, get_run_config
from aoc2025.dispatcher import exit_code, known_days, run_days

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _build_config(args: argparse.Namespace) -> RunConfig:
    config = get_run_config()
    if args.input_dir:
        config.input_dir = Path(args.input_dir)
    if args.connections is not None:
        config.connection_budget = args.connections
        config.sample_connection_budget = args.connections
    if args.no_timeline_cache:
        config.memoize_timelines = False
    return config


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Solve Advent of Code 2025 puzzles")
    parser.add_argument(
        "days",
        nargs="*",
        type=int,
        help=f"Days to solve (default: all of {known_days()})",
    )
    parser.add_argument(
        "--input-dir",
        help="Directory holding <day>.txt input files (default: inputs)",
    )
    parser.add_argument(
        "--connections",
        type=int,
        help="Connection budget for day 8 part one (default: 1000, 10 for sample inputs)",
    )
    parser.add_argument(
        "--no-timeline-cache",
        action="store_true",
        help="Disable memoisation of day 7 timeline counts",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    args = parser.parse_args(argv)

    unknown = [day for day in args.days if day not in known_days()]
    if unknown:
        parser.error(f"unknown day(s) {unknown}; choose from {known_days()}")
    if args.connections is not None and args.connections < 0:
        parser.error("--connections must be non-negative")

    _configure_logging(args.log_level)
    config = _build_config(args)
    logger.info("Reading inputs from %s", config.input_dir)

    results = run_days(args.days or None, config)
    return exit_code(results)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
