"""
Configuration constants for the gridsearch engine.

All grid defaults, cost values, and tunable search parameters are defined here.
Overrides are read from environment variables (a local .env file is honored).
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# =============================================================================
# Path Configuration
# =============================================================================

# Project root is parent of gridsearch/
PROJECT_ROOT = Path(__file__).parent.parent

load_dotenv(PROJECT_ROOT / ".env")

# =============================================================================
# Grid Configuration
# =============================================================================

# Default grid dimensions (cells)
DEFAULT_GRID_WIDTH = 11
DEFAULT_GRID_HEIGHT = 11

# Default endpoints: bottom-left to top-right
DEFAULT_START = (0, DEFAULT_GRID_HEIGHT - 1)
DEFAULT_GOAL = (DEFAULT_GRID_WIDTH - 1, 0)

# =============================================================================
# Cost Configuration
# =============================================================================

# Cost of a normal move between adjacent cells
NORMAL_COST = 1

# Cost of leaving a cell marked as slow terrain
PENALTY_COST = 5

# Edges costing more than this are treated as walls by the
# cost-unaware searches (breadth-first, greedy best-first)
BLOCKED_COST_THRESHOLD = 1

# =============================================================================
# Search Configuration
# =============================================================================

# Tie-break charged for a move against the cell's preferred axis.
# Horizontal moves out of even (x + y) cells and vertical moves out of
# odd cells pay it, so among equal-cost paths the one that alternates
# axes and hugs the straight line to the goal wins. It is summed apart from
# edge costs and only orders paths of equal cost. Must be >= 0; a value
# that does not parse falls back to the default and is reported by
# validate_settings().
DEFAULT_STRAIGHT_PATH_BIAS = 0.001
_STRAIGHT_PATH_BIAS_RAW = os.environ.get("GRIDSEARCH_STRAIGHT_PATH_BIAS", str(DEFAULT_STRAIGHT_PATH_BIAS))
try:
    STRAIGHT_PATH_BIAS = float(_STRAIGHT_PATH_BIAS_RAW)
except ValueError:
    STRAIGHT_PATH_BIAS = DEFAULT_STRAIGHT_PATH_BIAS

# Multiplier on the Manhattan heuristic for A*
# f(n) = g(n) + HEURISTIC_WEIGHT * h(n); values > 1 lose optimality
HEURISTIC_WEIGHT = 1.0

# Sort breadth-first neighbors by distance to goal before enqueueing
BFS_SORT_NEIGHBORS = True

# Algorithm used when none is named
DEFAULT_ALGORITHM = os.environ.get("GRIDSEARCH_DEFAULT_ALGORITHM", "astar")

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("GRIDSEARCH_LOG_LEVEL", "INFO")

# =============================================================================
# Validation Helpers
# =============================================================================

KNOWN_ALGORITHMS = ("bfs", "gbfs", "dijkstra", "astar", "lpastar")


def validate_settings() -> list[str]:
    """Return a list of problems with the current settings (empty if fine)."""
    problems = []
    try:
        float(_STRAIGHT_PATH_BIAS_RAW)
    except ValueError:
        problems.append(
            f"GRIDSEARCH_STRAIGHT_PATH_BIAS is not a number: '{_STRAIGHT_PATH_BIAS_RAW}' "
            f"(using {DEFAULT_STRAIGHT_PATH_BIAS})"
        )
    if not STRAIGHT_PATH_BIAS >= 0:
        problems.append(f"STRAIGHT_PATH_BIAS must be >= 0, got {STRAIGHT_PATH_BIAS}")
    if HEURISTIC_WEIGHT < 0:
        problems.append(f"HEURISTIC_WEIGHT must be >= 0, got {HEURISTIC_WEIGHT}")
    if DEFAULT_ALGORITHM not in KNOWN_ALGORITHMS:
        problems.append(
            f"Unknown default algorithm '{DEFAULT_ALGORITHM}'. "
            f"Available: {', '.join(KNOWN_ALGORITHMS)}"
        )
    if LOG_LEVEL.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        problems.append(f"Unknown log level '{LOG_LEVEL}'")
    return problems
