"""
Algorithm registry: creates search algorithm instances by identifier.

There is no process-wide registry. The composition root builds one with
default_registry() (or registers its own classes) and passes it down.
"""

from __future__ import annotations

from typing import Any

from gridsearch.algorithms.astar import AStarSearch
from gridsearch.algorithms.base import SearchAlgorithm
from gridsearch.algorithms.bfs import BreadthFirstSearch
from gridsearch.algorithms.greedy import GreedyBestFirstSearch
from gridsearch.algorithms.lpa_star import LPAStarSearch
from gridsearch.algorithms.uniform_cost import UniformCostSearch
from gridsearch.graph import Graph


class AlgorithmRegistry:
    """Map of algorithm identifier -> SearchAlgorithm subclass."""

    def __init__(self) -> None:
        self._algorithms: dict[str, type[SearchAlgorithm]] = {}

    def register(self, name: str, algorithm_class: type[SearchAlgorithm]) -> None:
        """
        Register an algorithm implementation.

        Args:
            name: Identifier (e.g., 'bfs', 'astar')
            algorithm_class: SearchAlgorithm subclass taking the graph first
        """
        self._algorithms[name] = algorithm_class

    def create(self, name: str, graph: Graph, **kwargs: Any) -> SearchAlgorithm:
        """
        Create an algorithm instance bound to a graph.

        Args:
            name: Registered identifier
            graph: Graph the algorithm will search
            **kwargs: Passed to the algorithm constructor (e.g., straight_path_bias)

        Raises:
            ValueError: If the identifier is unknown
        """
        if name not in self._algorithms:
            available = ", ".join(self._algorithms)
            raise ValueError(f"Unknown algorithm '{name}'. Available: {available}")
        return self._algorithms[name](graph, **kwargs)

    def names(self) -> list[str]:
        """Registered identifiers in registration order."""
        return list(self._algorithms)

    def __contains__(self, name: object) -> bool:
        return name in self._algorithms

    def __len__(self) -> int:
        return len(self._algorithms)


def default_registry() -> AlgorithmRegistry:
    """Return a new registry holding the five built-in strategies."""
    registry = AlgorithmRegistry()
    registry.register("bfs", BreadthFirstSearch)
    registry.register("gbfs", GreedyBestFirstSearch)
    registry.register("dijkstra", UniformCostSearch)
    registry.register("astar", AStarSearch)
    registry.register("lpastar", LPAStarSearch)
    return registry


def create_algorithm(name: str, graph: Graph, **kwargs: Any) -> SearchAlgorithm:
    """
    Create a built-in algorithm by identifier.

    Args:
        name: One of bfs, gbfs, dijkstra, astar, lpastar
        graph: Graph the algorithm will search
        **kwargs: Passed to the algorithm constructor

    Raises:
        ValueError: If the identifier is unknown
    """
    return default_registry().create(name, graph, **kwargs)
