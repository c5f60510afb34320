#!/usr/bin/env python3
"""
Unique Shape Generator - Command Line Interface
===============================================
Partition a square board into distinct connected shapes and print them.
"""

import argparse
import logging
import sys
from typing import List, Optional

from models import GenerationConfig
from render import describe_shapes, render_occupancy, render_text
from solver.orchestrator import generate

logger = logging.getLogger("generator.cli")


def _log_event(event: str, **fields) -> None:
    logger.debug("%s %s", event, " ".join(f"{k}={v}" for k, v in fields.items()))


def build_parser() -> argparse.ArgumentParser:
    defaults = GenerationConfig.from_cfg()
    parser = argparse.ArgumentParser(
        description="Partition a square board into distinct connected shapes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                  # 5x5 board, 4 shapes
  %(prog)s --board-size 6 --shapes 5        # bigger board
  %(prog)s --seed 7 --max-size 8            # reproducible, smaller shapes
        """
    )
    parser.add_argument("--board-size", type=int, default=defaults.board_size,
                        help=f"Board side length (default: {defaults.board_size})")
    parser.add_argument("--shapes", type=int, default=defaults.shape_count,
                        help=f"Number of shapes (default: {defaults.shape_count})")
    parser.add_argument("--min-size", type=int, default=defaults.min_size,
                        help=f"Smallest shape size (default: {defaults.min_size})")
    parser.add_argument("--max-size", type=int, default=defaults.max_size,
                        help=f"Largest shape size (default: {defaults.max_size})")
    parser.add_argument("--attempts", type=int, default=defaults.total_attempts,
                        help=f"Whole-board attempt budget (default: {defaults.total_attempts})")
    parser.add_argument("--attempts-per-shape", type=int, default=defaults.per_shape_attempts,
                        help=f"Per-shape attempt budget (default: {defaults.per_shape_attempts})")
    parser.add_argument("--seed", type=int, default=defaults.seed,
                        help="Random seed for reproducible output")
    parser.add_argument("--verbose", action="store_true",
                        help="Log every board attempt")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        config = GenerationConfig(
            board_size=args.board_size,
            shape_count=args.shapes,
            min_size=args.min_size,
            max_size=args.max_size,
            total_attempts=args.attempts,
            per_shape_attempts=args.attempts_per_shape,
            seed=args.seed,
        )
    except ValueError as e:
        parser.error(str(e))

    result = generate(config, on_event=_log_event if args.verbose else None)

    if not result.ok:
        print(f"No solution found after {result.attempts} attempts.")
        return 1

    print(f"Solved on attempt {result.attempts}.")
    print("Final board (0: free, 1: occupied):")
    print(render_occupancy(result))
    print()
    print(f"{len(result.shapes)} shapes (1-indexed cell numbers):")
    for line in describe_shapes(result):
        print(line)
    print()
    print("Board (one letter per shape):")
    print(render_text(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
