"""
Uniform-cost search (Dijkstra): expands nodes in order of accumulated cost.
"""

from __future__ import annotations

import logging

from gridsearch.algorithms.base import FrontierSearch, PathFlowGraph, SearchTask
from gridsearch.algorithms.costs import straight_path_bias
from gridsearch.config import STRAIGHT_PATH_BIAS
from gridsearch.errors import NodeNotFoundError
from gridsearch.frontier import PriorityFrontier
from gridsearch.graph import Graph, Location, Node

logger = logging.getLogger(__name__)

Priority = tuple[float, float]


class UniformCostSearch(FrontierSearch):
    """
    Dijkstra's algorithm with a straight-path tie-break.

    Paths are compared by (edge cost, bias sum): the bias never outweighs
    a real cost difference, it only orders paths of equal cost. A neighbor
    is relaxed when it is undiscovered or the new pair is strictly lower
    than its best known pair. Negative-cost edges are impassable.
    """

    def __init__(self, graph: Graph, straight_path_bias: float = STRAIGHT_PATH_BIAS) -> None:
        """
        Args:
            graph: Graph to search
            straight_path_bias: Non-negative tie-break charged for moves
                against a cell's preferred axis; 0 disables it

        Raises:
            ValueError: If straight_path_bias is negative or NaN
        """
        super().__init__(graph)
        if not straight_path_bias >= 0:
            raise ValueError(f"straight_path_bias must be >= 0, got {straight_path_bias}")
        self.straight_path_bias = straight_path_bias

    @property
    def name(self) -> str:
        return "dijkstra"

    @property
    def description(self) -> str:
        return "Dijkstra (uniform-cost search): expands the cheapest accumulated cost first"

    @property
    def supports_flow_graph(self) -> bool:
        return True

    def _start_priority(self) -> Priority:
        return (0.0, 0.0)

    def _priority(self, task: SearchTask, neighbor: Node, new_cost: float, new_tie: float) -> Priority:
        return (new_cost, new_tie)

    def _expand(self, task: SearchTask, current: Node) -> None:
        current_cost = task.cost_so_far[current.location]
        current_tie = task.tie_break[current.location]
        for edge in current.edges:
            if edge.cost < 0:
                continue
            key = edge.target.location
            new_cost = current_cost + edge.cost
            new_tie = current_tie + straight_path_bias(current, edge.target, self.straight_path_bias)
            known = task.cost_so_far.get(key)
            if known is None or (new_cost, new_tie) < (known, task.tie_break[key]):
                task.cost_so_far[key] = new_cost
                task.tie_break[key] = new_tie
                task.came_from[key] = current.location
                task.frontier.put(edge.target, self._priority(task, edge.target, new_cost, new_tie))

    def get_path_flow_graph(self, start: tuple[int, int]) -> PathFlowGraph:
        """Shortest-path tree from start over the whole reachable graph."""
        try:
            start_node = self._resolve("start", start)
        except NodeNotFoundError as e:
            logger.warning(f"{self.name}: {e}")
            return {}

        flow: PathFlowGraph = {start_node.location: start_node.location}
        best: dict[Location, Priority] = {start_node.location: (0.0, 0.0)}
        frontier: PriorityFrontier[Node] = PriorityFrontier(ascending=True)
        frontier.put(start_node, (0.0, 0.0))

        while not frontier.is_empty():
            current = frontier.get()
            current_cost, current_tie = best[current.location]
            for edge in current.edges:
                if edge.cost < 0:
                    continue
                key = edge.target.location
                candidate = (
                    current_cost + edge.cost,
                    current_tie + straight_path_bias(current, edge.target, self.straight_path_bias),
                )
                known = best.get(key)
                if known is None or candidate < known:
                    best[key] = candidate
                    flow[key] = current.location
                    frontier.put(edge.target, candidate)

        logger.debug(f"{self.name}: flow graph from {start_node.location} covers {len(flow)} cells")
        return flow
