"""
Greedy best-first search: always expands the node that looks closest to the goal.
"""

from __future__ import annotations

from gridsearch.algorithms.base import FrontierSearch, SearchTask
from gridsearch.algorithms.costs import is_blocked, manhattan
from gridsearch.config import BLOCKED_COST_THRESHOLD
from gridsearch.graph import Graph, Node


class GreedyBestFirstSearch(FrontierSearch):
    """
    Frontier ordered by Manhattan distance to the goal only.

    First discovery of a node wins and is never revised, so the result is a
    valid path but not necessarily the cheapest or the shortest.
    """

    def __init__(self, graph: Graph, blocked_threshold: float = BLOCKED_COST_THRESHOLD) -> None:
        super().__init__(graph)
        self._blocked_threshold = blocked_threshold

    @property
    def name(self) -> str:
        return "gbfs"

    @property
    def description(self) -> str:
        return "Greedy best-first search: expands the node nearest the goal first, not optimal"

    def _expand(self, task: SearchTask, current: Node) -> None:
        current_cost = task.cost_so_far[current.location]
        for edge in current.edges:
            if is_blocked(edge, self._blocked_threshold):
                continue
            key = edge.target.location
            if key in task.came_from:
                continue
            task.came_from[key] = current.location
            task.cost_so_far[key] = current_cost + edge.cost
            task.frontier.put(edge.target, manhattan(edge.target, task.goal_node))
