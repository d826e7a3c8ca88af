"""
Search algorithms module.

Provides interchangeable pathfinding strategies over a Graph:
- BreadthFirstSearch ('bfs'): uninformed, ignores costs
- GreedyBestFirstSearch ('gbfs'): Manhattan distance to goal only
- UniformCostSearch ('dijkstra'): accumulated cost
- AStarSearch ('astar'): accumulated cost + Manhattan heuristic
- LPAStarSearch ('lpastar'): incremental A* with persistent state
"""

from gridsearch.algorithms.astar import AStarSearch
from gridsearch.algorithms.base import (
    FrontierSearch,
    PathFlowGraph,
    QueryDiagnostic,
    QueryStatus,
    SearchAlgorithm,
    SearchTask,
    path_cost,
)
from gridsearch.algorithms.bfs import BreadthFirstSearch
from gridsearch.algorithms.costs import manhattan, straight_path_bias
from gridsearch.algorithms.greedy import GreedyBestFirstSearch
from gridsearch.algorithms.lpa_star import LPAStarSearch
from gridsearch.algorithms.registry import (
    AlgorithmRegistry,
    create_algorithm,
    default_registry,
)
from gridsearch.algorithms.uniform_cost import UniformCostSearch

__all__ = [
    "AStarSearch",
    "AlgorithmRegistry",
    "BreadthFirstSearch",
    "FrontierSearch",
    "GreedyBestFirstSearch",
    "LPAStarSearch",
    "PathFlowGraph",
    "QueryDiagnostic",
    "QueryStatus",
    "SearchAlgorithm",
    "SearchTask",
    "UniformCostSearch",
    "create_algorithm",
    "default_registry",
    "manhattan",
    "path_cost",
    "straight_path_bias",
]
