"""
Lifelong Planning A* (LPA*): incremental replanning after edge-cost changes.

The engine keeps g and rhs values for every node and a frontier of the
locally inconsistent ones across queries. After an edge cost changes, only
the endpoints of the changed edge need update_vertex(); the next
compute_shortest_path() then repairs just the affected region instead of
searching from scratch.

Usage:
    engine = LPAStarSearch(graph)
    path = engine.find_nearest_path((0, 0), (9, 9))

    edge = graph.get_edge(a, b)
    edge.cost = 5
    engine.notify_edge_changed(a, b)
    path = engine.find_nearest_path((0, 0), (9, 9))  # re-converges only
"""

from __future__ import annotations

import logging
import math

from gridsearch.algorithms.base import SearchAlgorithm, SearchTask
from gridsearch.algorithms.costs import manhattan
from gridsearch.errors import NodeNotFoundError, PathReconstructionError
from gridsearch.frontier import PriorityFrontier
from gridsearch.graph import Graph, Location, Node

logger = logging.getLogger(__name__)

INF = math.inf

Key = tuple[float, float]


class LPAStarSearch(SearchAlgorithm):
    """
    Incremental A* with persistent per-node state.

    rhs(n) is the one-step look-ahead min over incoming edges p -> n of
    g(p) + cost(p, n); a node is locally consistent when g == rhs. The
    frontier holds exactly the inconsistent nodes, keyed by
    (min(g, rhs) + h(n), min(g, rhs)).

    Querying a different start or goal re-initializes all state. Callers
    that edit edge costs must report the edge through notify_edge_changed()
    (or update_vertex() on both endpoints) before the next query.
    """

    def __init__(self, graph: Graph) -> None:
        super().__init__(graph)
        self.g: dict[Location, float] = {}
        self.rhs: dict[Location, float] = {}
        self.frontier: PriorityFrontier[Node] = PriorityFrontier(ascending=True)
        self.start_node: Node | None = None
        self.goal_node: Node | None = None

    @property
    def name(self) -> str:
        return "lpastar"

    @property
    def description(self) -> str:
        return "LPA* (Lifelong Planning A*): incremental A* that repairs paths after cost changes"

    @property
    def initialized(self) -> bool:
        return self.start_node is not None and self.goal_node is not None

    # -------------------------------------------------------------------------
    # Core LPA* operations
    # -------------------------------------------------------------------------

    def heuristic(self, node: Node) -> float:
        return manhattan(node, self.goal_node)

    def calculate_key(self, node: Node) -> Key:
        """(min(g, rhs) + h, min(g, rhs)); compared lexicographically."""
        best = min(self.g.get(node.location, INF), self.rhs.get(node.location, INF))
        return (best + self.heuristic(node), best)

    def initialize(self, start: tuple[int, int] | Node, goal: tuple[int, int] | Node) -> None:
        """
        Reset all state for a new start/goal pair.

        Raises:
            NodeNotFoundError: If start or goal is not in the graph
        """
        start_node = self._resolve("start", start)
        goal_node = self._resolve("goal", goal)

        self.start_node = start_node
        self.goal_node = goal_node
        self.frontier.clear()
        self.g = {node.location: INF for node in self.graph}
        self.rhs = {node.location: INF for node in self.graph}

        self.rhs[start_node.location] = 0.0
        self.frontier.put(start_node, self.calculate_key(start_node))
        logger.debug(
            f"{self.name}: initialized {start_node.location} -> {goal_node.location} "
            f"over {len(self.g)} nodes"
        )

    def update_vertex(self, node: Node) -> None:
        """Recompute rhs for a node and fix its frontier membership."""
        location = node.location
        if node != self.start_node:
            best = INF
            for source, edge in self.graph.get_incoming(node):
                if edge.cost < 0:
                    continue
                best = min(best, self.g.get(source.location, INF) + edge.cost)
            self.rhs[location] = best

        if self.g.get(location, INF) != self.rhs.get(location, INF):
            self.frontier.update(node, self.calculate_key(node))
        else:
            self.frontier.remove(node)

    def _needs_expansion(self) -> bool:
        if self.frontier.is_empty():
            return False
        goal = self.goal_node.location
        if self.g.get(goal, INF) != self.rhs.get(goal, INF):
            return True
        return self.frontier.peek_priority() < self.calculate_key(self.goal_node)

    def _expand_next(self, visited: list[Node]) -> bool:
        """
        Process one frontier node. Returns False once the goal is settled.
        """
        if not self._needs_expansion():
            return False

        node, old_key = self.frontier.pop()
        new_key = self.calculate_key(node)
        if old_key < new_key:
            self.frontier.put(node, new_key)
            return True

        visited.append(node)
        location = node.location
        if self.g.get(location, INF) > self.rhs.get(location, INF):
            # Over-consistent: settle g
            self.g[location] = self.rhs.get(location, INF)
            for successor in self.graph.get_neighbors(node):
                self.update_vertex(successor)
        else:
            # Under-consistent: invalidate and let rhs pull it back down
            self.g[location] = INF
            self.update_vertex(node)
            for successor in self.graph.get_neighbors(node):
                self.update_vertex(successor)
        return True

    def compute_shortest_path(self) -> int:
        """
        Expand inconsistent nodes until the goal is locally consistent and
        no frontier key is below the goal's.

        Returns:
            Number of nodes expanded by this call
        """
        if not self.initialized:
            raise RuntimeError("compute_shortest_path() called before initialize()")
        self.visited = []
        while self._expand_next(self.visited):
            pass
        return len(self.visited)

    def notify_edge_changed(self, source: tuple[int, int] | Node, target: tuple[int, int] | Node) -> None:
        """
        Tell the engine that the cost of source -> target changed.

        Does nothing before the first query; the next initialize() reads the
        current costs anyway.
        """
        if not self.initialized:
            return
        for role, location in (("source", source), ("target", target)):
            try:
                self.update_vertex(self._resolve(role, location))
            except NodeNotFoundError as e:
                logger.warning(f"{self.name}: ignoring edge change: {e}")

    def extract_path(self) -> list[Node]:
        """
        Walk back from the goal choosing the predecessor with least
        g + edge cost. Only meaningful after compute_shortest_path().

        Returns:
            Start-to-goal path, or an empty list if the goal is unreachable

        Raises:
            PathReconstructionError: If the walk cannot reach the start
        """
        if not self.initialized:
            return []
        if self.g.get(self.goal_node.location, INF) == INF:
            return []

        path = [self.goal_node]
        current = self.goal_node
        while current != self.start_node:
            best_node, best_cost = None, INF
            for source, edge in self.graph.get_incoming(current):
                if edge.cost < 0:
                    continue
                cost = self.g.get(source.location, INF) + edge.cost
                if cost < best_cost:
                    best_node, best_cost = source, cost
            if best_node is None:
                raise PathReconstructionError(
                    f"No finite predecessor for {current.location} while walking back to "
                    f"{self.start_node.location}"
                )
            current = best_node
            path.append(current)
            if len(path) > len(self.graph):
                raise PathReconstructionError(
                    f"Backward walk from {self.goal_node.location} does not reach the start"
                )
        path.reverse()
        return path

    # -------------------------------------------------------------------------
    # SearchAlgorithm contract
    # -------------------------------------------------------------------------

    def _same_query(self, start_node: Node, goal_node: Node) -> bool:
        return self.initialized and start_node == self.start_node and goal_node == self.goal_node

    def create_task(self, start: tuple[int, int], goal: tuple[int, int]) -> SearchTask:
        """
        Prepare a query, reusing all state when start and goal are unchanged.
        """
        start_node = self._resolve("start", start)
        goal_node = self._resolve("goal", goal)
        if not self._same_query(start_node, goal_node):
            self.initialize(start_node, goal_node)

        task = SearchTask(
            start_node=start_node,
            goal_node=goal_node,
            came_from={},
            cost_so_far=self.g,
            frontier=self.frontier,
        )
        self.visited = task.visited
        self.last_diagnostic = task.diagnostic
        return task

    def advance(self, task: SearchTask) -> bool:
        if task.finished:
            return False
        if self._expand_next(task.visited):
            return True
        self._finish(task)
        return False

    def _build_path(self, task: SearchTask) -> list[Node]:
        return self.extract_path()

    def state_of(self, location: tuple[int, int]) -> tuple[float, float]:
        """(g, rhs) of a location; (inf, inf) if unknown."""
        location = Location(*location)
        return self.g.get(location, INF), self.rhs.get(location, INF)

    def inconsistent_nodes(self) -> list[Node]:
        """Nodes currently on the frontier, in expansion order."""
        return [node for node, _ in self.frontier.items()]
