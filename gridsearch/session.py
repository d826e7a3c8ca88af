"""
Pathfinding session: the composition root used by grid editors and scripts.

A session owns one graph and one algorithm registry, caches one algorithm
instance per identifier, runs queries into SearchResult records, and routes
cost edits to the incremental engine so its state stays valid.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from gridsearch.algorithms import (
    AlgorithmRegistry,
    PathFlowGraph,
    QueryDiagnostic,
    QueryStatus,
    SearchAlgorithm,
    default_registry,
    path_cost,
)
from gridsearch.config import (
    DEFAULT_ALGORITHM,
    DEFAULT_GRID_HEIGHT,
    DEFAULT_GRID_WIDTH,
    NORMAL_COST,
    PENALTY_COST,
)
from gridsearch.graph import Graph, Location, Node, build_grid, toggle_cell_cost

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """
    Complete record of one query.

    Attributes:
        algorithm: Identifier of the algorithm that ran
        start: Requested start location
        goal: Requested goal location
        path: Locations from start to goal (empty if none)
        visited: Locations expanded, in order
        flow_graph: Shortest-path tree from start (may be empty)
        total_cost: Raw edge cost of the path (inf if no path)
        diagnostic: How the query ended
        elapsed_ms: Wall time of the path query in milliseconds
        timestamp: When the query ran
    """

    algorithm: str
    start: Location
    goal: Location
    path: list[Location]
    visited: list[Location]
    flow_graph: PathFlowGraph
    total_cost: float
    diagnostic: QueryDiagnostic
    elapsed_ms: float
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def found(self) -> bool:
        return self.diagnostic.status == QueryStatus.FOUND

    @property
    def moves(self) -> int:
        """Number of moves along the path (0 if no path)."""
        return max(len(self.path) - 1, 0)


class PathfindingSession:
    """
    Runs queries against a single shared graph.

    At most one query runs at a time; cost edits happen between queries
    through toggle_cell() or set_edge_cost().
    """

    def __init__(
        self,
        graph: Graph | None = None,
        registry: AlgorithmRegistry | None = None,
        algorithm_options: dict[str, dict[str, Any]] | None = None,
    ) -> None:
        """
        Args:
            graph: Graph to search (default: a uniform default-size grid)
            registry: Algorithm registry (default: the built-in strategies)
            algorithm_options: Per-identifier constructor kwargs
        """
        self.graph = graph if graph is not None else build_grid(DEFAULT_GRID_WIDTH, DEFAULT_GRID_HEIGHT)
        self.registry = registry if registry is not None else default_registry()
        self._options = algorithm_options or {}
        self._instances: dict[str, SearchAlgorithm] = {}

    def algorithm(self, name: str = DEFAULT_ALGORITHM) -> SearchAlgorithm:
        """
        Return this session's instance of an algorithm, creating it once.

        Raises:
            ValueError: If the identifier is unknown
        """
        if name not in self._instances:
            self._instances[name] = self.registry.create(name, self.graph, **self._options.get(name, {}))
            logger.debug(f"Created algorithm '{name}' for session")
        return self._instances[name]

    def run(
        self,
        start: tuple[int, int],
        goal: tuple[int, int],
        algorithm: str = DEFAULT_ALGORITHM,
        include_flow_graph: bool = False,
    ) -> SearchResult:
        """
        Run one query and collect path, visited trace, and diagnostics.

        Args:
            start: Start location
            goal: Goal location
            algorithm: Algorithm identifier
            include_flow_graph: Also build the flow graph from start

        Returns:
            SearchResult; an unreachable goal or unknown location gives an
            empty path rather than an exception
        """
        search = self.algorithm(algorithm)

        start_time = time.perf_counter()
        nodes = search.find_nearest_path(start, goal)
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        flow_graph = search.get_path_flow_graph(start) if include_flow_graph else {}
        diagnostic = search.last_diagnostic
        result = SearchResult(
            algorithm=search.name,
            start=Location(*start),
            goal=Location(*goal),
            path=[node.location for node in nodes],
            visited=[node.location for node in search.visited],
            flow_graph=flow_graph,
            total_cost=path_cost(self.graph, nodes) if nodes else float("inf"),
            diagnostic=diagnostic,
            elapsed_ms=elapsed_ms,
        )

        if result.found:
            logger.info(
                f"{search.name}: {result.start} -> {result.goal} in {result.moves} moves, "
                f"cost {result.total_cost:g}, {len(result.visited)} expanded ({elapsed_ms:.1f}ms)"
            )
        else:
            logger.info(f"{search.name}: {result.start} -> {result.goal}: {diagnostic.message}")
        return result

    def compare(
        self,
        start: tuple[int, int],
        goal: tuple[int, int],
        algorithms: list[str] | None = None,
    ) -> dict[str, SearchResult]:
        """Run the same query with several algorithms."""
        names = algorithms if algorithms is not None else self.registry.names()
        return {name: self.run(start, goal, algorithm=name) for name in names}

    def toggle_cell(
        self,
        location: tuple[int, int],
        normal: float = NORMAL_COST,
        penalty: float = PENALTY_COST,
    ) -> int:
        """
        Flip a cell between normal and slow terrain.

        Returns:
            Number of edges changed (0 if the cell does not exist)
        """
        changed = toggle_cell_cost(self.graph, location, normal=normal, penalty=penalty)
        self._notify(changed)
        return len(changed)

    def set_edge_cost(self, source: tuple[int, int], target: tuple[int, int], cost: float) -> bool:
        """
        Set the cost of the edge source -> target.

        Returns:
            False if either node or the edge does not exist
        """
        source_node = self.graph.get_node(source)
        target_node = self.graph.get_node(target)
        if source_node is None or target_node is None:
            logger.warning(f"Cannot set cost: no edge {source} -> {target}")
            return False
        edge = self.graph.get_edge(source_node, target_node)
        if edge is None:
            logger.warning(f"Cannot set cost: no edge {source} -> {target}")
            return False
        edge.cost = cost
        self._notify([(source_node, target_node)])
        return True

    def _notify(self, changed: list[tuple[Node, Node]]) -> None:
        for search in self._instances.values():
            for source, target in changed:
                search.notify_edge_changed(source, target)

    def __repr__(self) -> str:
        return f"PathfindingSession(graph={self.graph!r}, algorithms={list(self._instances)})"
