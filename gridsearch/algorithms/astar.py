"""
A* search: uniform-cost relaxation ordered by cost plus a Manhattan heuristic.
"""

from __future__ import annotations

from gridsearch.algorithms.base import SearchTask
from gridsearch.algorithms.costs import manhattan
from gridsearch.algorithms.uniform_cost import Priority, UniformCostSearch
from gridsearch.config import HEURISTIC_WEIGHT, STRAIGHT_PATH_BIAS
from gridsearch.graph import Graph, Node


class AStarSearch(UniformCostSearch):
    """
    f(n) = g(n) + w * h(n), with h the Manhattan distance from the candidate
    neighbor to the goal.

    With w <= 1 and every edge costing at least 1, h never overestimates and
    is consistent, so the first expansion of the goal is optimal. The
    straight-path bias is the second element of the priority and only
    orders nodes with equal f.

    The flow graph is the uniform-cost tree: without a goal there is no
    heuristic to apply.
    """

    def __init__(
        self,
        graph: Graph,
        straight_path_bias: float = STRAIGHT_PATH_BIAS,
        heuristic_weight: float = HEURISTIC_WEIGHT,
    ) -> None:
        super().__init__(graph, straight_path_bias=straight_path_bias)
        if heuristic_weight < 0:
            raise ValueError(f"heuristic_weight must be >= 0, got {heuristic_weight}")
        self.heuristic_weight = heuristic_weight

    @property
    def name(self) -> str:
        return "astar"

    @property
    def description(self) -> str:
        return "A*: f(n) = g(n) + h(n), accumulated cost plus Manhattan distance to the goal"

    def _priority(self, task: SearchTask, neighbor: Node, new_cost: float, new_tie: float) -> Priority:
        return (new_cost + self.heuristic_weight * manhattan(neighbor, task.goal_node), new_tie)
