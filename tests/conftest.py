"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

import numpy as np
import pytest

from gridsearch.graph import Graph, Node, build_grid, build_grid_from_costs

ALGORITHMS = ["bfs", "gbfs", "dijkstra", "astar", "lpastar"]
COST_AWARE_ALGORITHMS = ["dijkstra", "astar", "lpastar"]


@pytest.fixture
def grid3() -> Graph:
    """3x3 grid with unit costs."""
    return build_grid(3, 3)


@pytest.fixture
def grid5() -> Graph:
    """5x5 grid with unit costs."""
    return build_grid(5, 5)


@pytest.fixture
def walled_grid() -> Graph:
    """
    5x5 grid where column x=2 is slow except for a gap at the bottom row.

    . . # . .
    . . # . .
    . . # . .
    . . # . .
    . . . . .
    """
    costs = np.ones((5, 5))
    costs[0:4, 2] = 5
    return build_grid_from_costs(costs)


@pytest.fixture
def split_graph() -> Graph:
    """Two nodes with no edge between them."""
    graph = Graph()
    graph.add_node(Node((0, 0)))
    graph.add_node(Node((1, 0)))
    return graph
