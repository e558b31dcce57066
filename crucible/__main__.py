"""Command line entry point: solve a puzzle input file and print the answer."""

import argparse
import logging
import sys
from typing import List, Optional

from .app.controller import SearchController
from .domain.errors import CrucibleError
from .domain.motion import MotionPolicy
from .domain.path import get_straight_runs
from .domain.types import Coord, SearchConfig, SearchStatus
from .utils.grid_factory import load_grid

PRESETS = {
    "crucible": MotionPolicy.crucible,
    "ultra": MotionPolicy.ultra_crucible,
}


def _parse_coord(raw: str) -> Coord:
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected 'row,col', got: {raw}")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected integer 'row,col', got: {raw}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crucible",
        description="Find the minimum-cost path through a grid of digit costs under run-length rules",
    )
    parser.add_argument("input", help="text file with one row of digit costs per line")
    parser.add_argument("--preset", choices=sorted(PRESETS), default="crucible",
                        help="named movement rules (default: crucible)")
    parser.add_argument("--min-run", type=int, default=None,
                        help="cells to travel straight before turning or stopping")
    parser.add_argument("--max-run", type=int, default=None,
                        help="cells that may be traveled straight before a turn is forced")
    parser.add_argument("--unbounded", action="store_true", help="no limit on straight runs")
    parser.add_argument("--start", type=_parse_coord, default=(0, 0), help="start cell as row,col")
    parser.add_argument("--goal", type=_parse_coord, default=None,
                        help="goal cell as row,col (default: bottom-right)")
    parser.add_argument("--heuristic", choices=["zero", "manhattan"], default=None,
                        help="frontier ordering (default: manhattan toward the goal cell)")
    parser.add_argument("--deadline", type=float, default=None, help="give up after this many seconds")
    parser.add_argument("--max-expansions", type=int, default=None, help="give up after this many expansions")
    parser.add_argument("--show-path", action="store_true", help="print the path and its straight runs")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def build_policy(args: argparse.Namespace) -> MotionPolicy:
    """Start from the preset and apply any explicit run-length overrides."""
    preset = PRESETS[args.preset]()
    min_run = args.min_run if args.min_run is not None else preset.min_run_before_turn
    if args.unbounded:
        max_run = None
    elif args.max_run is not None:
        max_run = args.max_run
    else:
        max_run = preset.max_run_before_forced_turn
    return MotionPolicy(min_run_before_turn=min_run, max_run_before_forced_turn=max_run)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line interface."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        policy = build_policy(args)
        grid = load_grid(args.input)
        config = SearchConfig(
            heuristic=args.heuristic,
            reconstruct_path=args.show_path,
            max_expansions=args.max_expansions,
            deadline_seconds=args.deadline,
        )
        result = SearchController(config).solve(grid, args.start, args.goal, policy)
    except OSError as e:
        print(f"Cannot read {args.input}: {e}", file=sys.stderr)
        return 2
    except (CrucibleError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if result.status is SearchStatus.NO_PATH:
        print(f"No path found ({result.nodes_explored} nodes explored)", file=sys.stderr)
        return 1
    if result.status is SearchStatus.DEADLINE_EXCEEDED:
        print(f"Search budget exhausted after {result.nodes_explored} nodes", file=sys.stderr)
        return 1

    print(result.cost)

    if args.show_path and result.path:
        print(" -> ".join(f"{row},{col}" for row, col in result.path))
        runs = ", ".join(f"{direction.name} {length}" for direction, length in get_straight_runs(result.path))
        print(f"runs: {runs}")
        print(f"explored {result.nodes_explored} nodes in {result.elapsed_seconds:.3f}s")

    return 0


if __name__ == "__main__":
    sys.exit(main())
