"""
Breadth-first search: uninformed, ignores move costs.
"""

from __future__ import annotations

import logging
from collections import deque

from gridsearch.algorithms.base import FrontierSearch, PathFlowGraph, SearchTask
from gridsearch.algorithms.costs import is_blocked, manhattan
from gridsearch.config import BFS_SORT_NEIGHBORS, BLOCKED_COST_THRESHOLD
from gridsearch.errors import NodeNotFoundError
from gridsearch.frontier import FifoFrontier
from gridsearch.graph import Graph, Node

logger = logging.getLogger(__name__)


class BreadthFirstSearch(FrontierSearch):
    """
    Expands nodes in discovery order; the first discovery of a node wins.

    Edges costing more than the blocked threshold are walls. On a uniform
    grid this returns a fewest-moves path.
    """

    def __init__(
        self,
        graph: Graph,
        sort_neighbors: bool = BFS_SORT_NEIGHBORS,
        blocked_threshold: float = BLOCKED_COST_THRESHOLD,
    ) -> None:
        """
        Args:
            graph: Graph to search
            sort_neighbors: Enqueue neighbors closest to the goal first
            blocked_threshold: Edges costing more than this are skipped
        """
        super().__init__(graph)
        self._sort_neighbors = sort_neighbors
        self._blocked_threshold = blocked_threshold

    @property
    def name(self) -> str:
        return "bfs"

    @property
    def description(self) -> str:
        return "Breadth-first search: ignores move costs, expands by distance in moves"

    @property
    def supports_flow_graph(self) -> bool:
        return True

    def _new_frontier(self) -> FifoFrontier:
        return FifoFrontier()

    def _expand(self, task: SearchTask, current: Node) -> None:
        edges = [e for e in current.edges if not is_blocked(e, self._blocked_threshold)]
        if self._sort_neighbors:
            # sorted() is stable, so equal distances keep edge order
            edges = sorted(edges, key=lambda e: manhattan(e.target, task.goal_node))

        current_cost = task.cost_so_far[current.location]
        for edge in edges:
            key = edge.target.location
            if key in task.came_from:
                continue
            task.came_from[key] = current.location
            task.cost_so_far[key] = current_cost + edge.cost
            task.frontier.put(edge.target)

    def get_path_flow_graph(self, start: tuple[int, int]) -> PathFlowGraph:
        try:
            start_node = self._resolve("start", start)
        except NodeNotFoundError as e:
            logger.warning(f"{self.name}: {e}")
            return {}

        flow: PathFlowGraph = {start_node.location: start_node.location}
        queue = deque([start_node])
        while queue:
            current = queue.popleft()
            for edge in current.edges:
                if is_blocked(edge, self._blocked_threshold):
                    continue
                key = edge.target.location
                if key in flow:
                    continue
                flow[key] = current.location
                queue.append(edge.target)

        logger.debug(f"{self.name}: flow graph from {start_node.location} covers {len(flow)} cells")
        return flow
