#!/usr/bin/env python3
"""
Grid pathfinding demo - run every algorithm on the same grid and compare.

Usage:
    python scripts/compare_algorithms.py
    python scripts/compare_algorithms.py --width 20 --height 12 --slow 0.25 --seed 7
    python scripts/compare_algorithms.py --algorithm astar --algorithm lpastar --show
    python scripts/compare_algorithms.py --start 0,0 --goal 9,9 --toggle 4,4 --toggle 5,4

Algorithms:
    bfs       - Breadth-first search (slow cells are walls)
    gbfs      - Greedy best-first search (slow cells are walls)
    dijkstra  - Uniform-cost search
    astar     - A* with Manhattan heuristic
    lpastar   - LPA* incremental replanning

After the first round, each --toggle cell is flipped and the query is run
again, so LPA*'s repaired search can be compared with the others.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from gridsearch.config import (  # noqa: E402
    DEFAULT_GOAL,
    DEFAULT_GRID_HEIGHT,
    DEFAULT_GRID_WIDTH,
    DEFAULT_START,
    LOG_LEVEL,
    NORMAL_COST,
    PENALTY_COST,
    validate_settings,
)
from gridsearch.graph import Location, build_grid_from_costs, is_heavy_cell  # noqa: E402
from gridsearch.session import PathfindingSession, SearchResult  # noqa: E402


def parse_location(text: str) -> Location:
    """Parse 'x,y' into a Location."""
    try:
        x, y = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected x,y but got '{text}'")
    return Location(x, y)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Compare grid pathfinding algorithms",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument("--width", type=int, default=DEFAULT_GRID_WIDTH, help="Grid columns")
    parser.add_argument("--height", type=int, default=DEFAULT_GRID_HEIGHT, help="Grid rows")
    parser.add_argument(
        "--start",
        type=parse_location,
        default=None,
        help="Start cell as x,y (default: bottom-left)",
    )
    parser.add_argument(
        "--goal",
        type=parse_location,
        default=None,
        help="Goal cell as x,y (default: top-right)",
    )
    parser.add_argument(
        "--slow",
        type=float,
        default=0.2,
        help="Fraction of cells marked as slow terrain (default: 0.2)",
    )
    parser.add_argument("--seed", type=int, default=0, help="Random seed for slow cells")
    parser.add_argument(
        "--algorithm",
        action="append",
        default=None,
        choices=["bfs", "gbfs", "dijkstra", "astar", "lpastar"],
        help="Algorithm to run (repeatable, default: all)",
    )
    parser.add_argument(
        "--toggle",
        type=parse_location,
        action="append",
        default=[],
        help="Cell to flip between normal and slow after the first round (repeatable)",
    )
    parser.add_argument("--show", action="store_true", help="Print each path on the grid")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    return parser.parse_args()


def make_costs(width: int, height: int, slow_fraction: float, seed: int) -> np.ndarray:
    """Random cost matrix with a fraction of penalty cells."""
    rng = np.random.default_rng(seed)
    costs = np.full((height, width), NORMAL_COST, dtype=float)
    costs[rng.random((height, width)) < slow_fraction] = PENALTY_COST
    return costs


def render(session: PathfindingSession, result: SearchResult, width: int, height: int) -> str:
    """ASCII grid: S start, G goal, * path, . expanded, # slow cell."""
    path = set(result.path)
    visited = set(result.visited)
    rows = []
    for y in range(height):
        row = []
        for x in range(width):
            location = Location(x, y)
            if location == result.start:
                row.append("S")
            elif location == result.goal:
                row.append("G")
            elif location in path:
                row.append("*")
            elif is_heavy_cell(session.graph.get_node(location)):
                row.append("#")
            elif location in visited:
                row.append(".")
            else:
                row.append(" ")
        rows.append("|" + "".join(row) + "|")
    border = "+" + "-" * width + "+"
    return "\n".join([border, *rows, border])


def print_round(
    title: str,
    session: PathfindingSession,
    results: dict[str, SearchResult],
    args: argparse.Namespace,
) -> None:
    print("\n" + "=" * 72)
    print(title)
    print("=" * 72)
    for name, result in results.items():
        if result.found:
            summary = f"{result.moves:3} moves, cost {result.total_cost:6g}"
        else:
            summary = f"{result.diagnostic.status.value:>24}"
        print(
            f"  {name:9} : {summary}, {len(result.visited):4} expanded "
            f"({result.elapsed_ms:.2f}ms)"
        )
    if args.show:
        for name, result in results.items():
            print(f"\n{name} - {session.algorithm(name).description}")
            print(render(session, result, args.width, args.height))


def main() -> int:
    """Main entry point."""
    args = parse_args()

    log_level = logging.DEBUG if args.verbose else getattr(logging, LOG_LEVEL.upper(), logging.WARNING)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    problems = validate_settings()
    for problem in problems:
        print(f"Config error: {problem}", file=sys.stderr)
    if problems:
        return 1

    if args.width < 1 or args.height < 1:
        print("Error: grid must be at least 1x1", file=sys.stderr)
        return 1

    start = args.start or Location(0, args.height - 1)
    goal = args.goal or Location(args.width - 1, 0)
    if (args.width, args.height) == (DEFAULT_GRID_WIDTH, DEFAULT_GRID_HEIGHT):
        start = args.start or Location(*DEFAULT_START)
        goal = args.goal or Location(*DEFAULT_GOAL)

    costs = make_costs(args.width, args.height, args.slow, args.seed)
    # Endpoints always start on normal terrain
    for x, y in (start, goal):
        if 0 <= x < args.width and 0 <= y < args.height:
            costs[y, x] = NORMAL_COST

    session = PathfindingSession(graph=build_grid_from_costs(costs))
    names = args.algorithm or session.registry.names()

    results = session.compare(start, goal, names)
    print_round(f"{args.width}x{args.height} grid, {start} -> {goal}", session, results, args)

    if args.toggle:
        changed = sum(session.toggle_cell(location) for location in args.toggle)
        results = session.compare(start, goal, names)
        print_round(f"After toggling {len(args.toggle)} cells ({changed} edges)", session, results, args)

    return 0 if all(result.found for result in results.values()) else 1


if __name__ == "__main__":
    sys.exit(main())
