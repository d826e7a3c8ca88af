"""
Search algorithm base classes and the per-query records they share.

Every algorithm runs a query as a SearchTask that can be advanced one
expansion at a time; find_nearest_path() simply drives advance() until the
task finishes, so stepping and one-shot queries behave identically.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from gridsearch.errors import NodeNotFoundError, PathReconstructionError
from gridsearch.frontier import FifoFrontier, PriorityFrontier
from gridsearch.graph import Graph, Location, Node

logger = logging.getLogger(__name__)

Frontier = Union[PriorityFrontier, FifoFrontier]

# Mapping from each reached location to the location it was discovered from
PathFlowGraph = dict[Location, Location]


class QueryStatus(str, Enum):
    """Outcome of the most recent query."""

    PENDING = "pending"
    FOUND = "found"
    UNREACHABLE = "unreachable"
    NODE_NOT_FOUND = "node_not_found"
    INTERNAL_ERROR = "internal_error"


@dataclass
class QueryDiagnostic:
    """
    Diagnostic record for one query.

    Attributes:
        status: How the query ended
        message: Human-readable detail
    """

    status: QueryStatus = QueryStatus.PENDING
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == QueryStatus.FOUND


@dataclass
class SearchTask:
    """
    State of one query, advanced one expansion at a time.

    Attributes:
        start_node: Node the search starts from
        goal_node: Node the search is looking for
        came_from: Location -> predecessor location (None for the start)
        cost_so_far: Location -> best known accumulated edge cost
        tie_break: Location -> secondary cost used only to order equal-cost
            paths (the straight-path bias sum)
        frontier: Discovered nodes awaiting expansion
        visited: Nodes expanded so far, in order
        path: Start-to-goal path, filled in when the task finishes
        finished: Whether the task has produced its result
        diagnostic: Outcome, set when the task finishes
    """

    start_node: Node
    goal_node: Node
    came_from: dict[Location, Location | None]
    cost_so_far: dict[Location, float]
    frontier: Frontier
    tie_break: dict[Location, float] = field(default_factory=dict)
    visited: list[Node] = field(default_factory=list)
    path: list[Node] = field(default_factory=list)
    finished: bool = False
    diagnostic: QueryDiagnostic = field(default_factory=QueryDiagnostic)


def path_cost(graph: Graph, path: list[Node]) -> float:
    """
    Total raw edge cost along a path.

    Returns 0 for a single-node or empty path and inf if consecutive nodes
    are not joined by a passable edge.
    """
    total = 0.0
    for current, following in zip(path, path[1:]):
        edge = graph.get_edge(current, following)
        if edge is None or not edge.passable:
            return math.inf
        total += edge.cost
    return total


class SearchAlgorithm(ABC):
    """
    Abstract base class for grid search strategies.

    Construction binds a graph. Instances can be reused for any number of
    queries; the visited trace and diagnostic describe the latest one.
    """

    def __init__(self, graph: Graph) -> None:
        self.graph = graph
        self.visited: list[Node] = []
        self.last_diagnostic = QueryDiagnostic()

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier (e.g., 'bfs', 'astar')."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """One-line human-readable description of the strategy."""
        ...

    @property
    def supports_flow_graph(self) -> bool:
        """Whether get_path_flow_graph() returns a real shortest-path tree."""
        return False

    @abstractmethod
    def create_task(self, start: tuple[int, int], goal: tuple[int, int]) -> SearchTask:
        """
        Prepare a query for stepwise execution.

        Raises:
            NodeNotFoundError: If start or goal is not in the graph
        """
        ...

    @abstractmethod
    def advance(self, task: SearchTask) -> bool:
        """
        Run a single expansion of the task.

        Once there is nothing left to expand, the next call builds the path,
        marks the task finished and returns False.

        Returns:
            True while more work remains
        """
        ...

    @abstractmethod
    def _build_path(self, task: SearchTask) -> list[Node]:
        """
        Produce the start-to-goal path once expansion is over.

        Returns an empty list when the goal was not reached.

        Raises:
            PathReconstructionError: If bookkeeping is inconsistent
        """
        ...

    def find_nearest_path(self, start: tuple[int, int], goal: tuple[int, int]) -> list[Node]:
        """
        Find a path from start to goal.

        Never raises for bad input or an unreachable goal; check
        `last_diagnostic` to tell the cases apart.

        Returns:
            Nodes from start to goal inclusive, or an empty list
        """
        try:
            task = self.create_task(start, goal)
        except NodeNotFoundError as e:
            logger.warning(f"{self.name}: {e}")
            self.visited = []
            self.last_diagnostic = QueryDiagnostic(QueryStatus.NODE_NOT_FOUND, str(e))
            return []

        while self.advance(task):
            pass
        return task.path

    def notify_edge_changed(self, source: tuple[int, int] | Node, target: tuple[int, int] | Node) -> None:
        """Report an edge cost edit. Stateless strategies re-read costs on every query."""

    def get_path_flow_graph(self, start: tuple[int, int]) -> PathFlowGraph:
        """
        Map every location reachable from start to the location it was
        reached from. Strategies without a flow tree return an empty map.
        """
        return {}

    def reconstruct_path(
        self,
        came_from: dict[Location, Location | None],
        start_node: Node,
        goal_node: Node,
    ) -> list[Node]:
        """
        Follow predecessors from goal back to start.

        Raises:
            PathReconstructionError: If a predecessor is missing before the
                start is reached, or the predecessors form a cycle
        """
        path = [goal_node]
        current = goal_node
        while current != start_node:
            previous = came_from.get(current.location)
            if previous is None:
                raise PathReconstructionError(
                    f"No predecessor recorded for {current.location} "
                    f"while backtracking to {start_node.location}"
                )
            node = self.graph.get_node(previous)
            if node is None:
                raise PathReconstructionError(f"Predecessor {previous} is not in the graph")
            current = node
            path.append(current)
            if len(path) > len(self.graph):
                raise PathReconstructionError(
                    f"Predecessor chain from {goal_node.location} does not reach the start"
                )
        path.reverse()
        return path

    def _resolve(self, role: str, location: tuple[int, int] | Node) -> Node:
        if isinstance(location, Node):
            location = location.location
        node = self.graph.get_node(location)
        if node is None:
            raise NodeNotFoundError(role, location)
        return node

    def _finish(self, task: SearchTask) -> None:
        """Build the path and record how the query ended."""
        try:
            task.path = self._build_path(task)
        except PathReconstructionError as e:
            logger.error(f"{self.name}: internal error: {e}")
            task.path = []
            task.diagnostic = QueryDiagnostic(QueryStatus.INTERNAL_ERROR, str(e))
        else:
            if task.path:
                task.diagnostic = QueryDiagnostic(
                    QueryStatus.FOUND,
                    f"Path of {len(task.path)} nodes after {len(task.visited)} expansions",
                )
                logger.debug(f"{self.name}: {task.diagnostic.message}")
            else:
                task.diagnostic = QueryDiagnostic(
                    QueryStatus.UNREACHABLE,
                    f"No path from {task.start_node.location} to {task.goal_node.location}",
                )
                logger.debug(f"{self.name}: {task.diagnostic.message}")
        task.finished = True
        self.last_diagnostic = task.diagnostic

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class FrontierSearch(SearchAlgorithm):
    """
    Shared driver for the stateless best-first family.

    Subclasses pick the frontier type and define how an expanded node
    admits its neighbors; this class handles popping, goal detection, the
    visited trace, and path reconstruction.
    """

    def _new_frontier(self) -> Frontier:
        return PriorityFrontier(ascending=True)

    def _start_priority(self) -> Any:
        return 0

    @abstractmethod
    def _expand(self, task: SearchTask, current: Node) -> None:
        """Relax or admit every neighbor of an expanded node."""
        ...

    def create_task(self, start: tuple[int, int], goal: tuple[int, int]) -> SearchTask:
        start_node = self._resolve("start", start)
        goal_node = self._resolve("goal", goal)

        frontier = self._new_frontier()
        frontier.put(start_node, self._start_priority())
        task = SearchTask(
            start_node=start_node,
            goal_node=goal_node,
            came_from={start_node.location: None},
            cost_so_far={start_node.location: 0.0},
            frontier=frontier,
            tie_break={start_node.location: 0.0},
        )
        self.visited = task.visited
        self.last_diagnostic = task.diagnostic
        return task

    def advance(self, task: SearchTask) -> bool:
        if task.finished:
            return False
        if task.frontier.is_empty():
            self._finish(task)
            return False

        current = task.frontier.get()
        if current == task.goal_node:
            # Goal reached; the next call reconstructs the path
            task.frontier.clear()
            return True

        task.visited.append(current)
        self._expand(task, current)
        return True

    def _build_path(self, task: SearchTask) -> list[Node]:
        if task.goal_node.location not in task.came_from:
            return []
        return self.reconstruct_path(task.came_from, task.start_node, task.goal_node)
