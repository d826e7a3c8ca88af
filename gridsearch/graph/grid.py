"""
Builders for 4-connected grid graphs and the cell cost toggle used by editors.

Cell (x, y) sits at column x, row y; row 0 is the top of the grid.
"""

from __future__ import annotations

import logging

import numpy as np

from gridsearch.config import NORMAL_COST, PENALTY_COST
from gridsearch.graph.graph import Graph
from gridsearch.graph.types import Location, Node

logger = logging.getLogger(__name__)

# Neighbor offsets in the order edges are added: right, left, down, up
GRID_DIRECTIONS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def build_grid(width: int, height: int, cost: float = NORMAL_COST) -> Graph:
    """
    Build a width x height grid with every move costing `cost`.

    Args:
        width: Number of columns
        height: Number of rows
        cost: Initial cost of every edge

    Returns:
        Graph with one node per cell and an edge in each direction between
        orthogonally adjacent cells
    """
    return build_grid_from_costs(np.full((height, width), cost, dtype=float))


def build_grid_from_costs(costs: np.ndarray) -> Graph:
    """
    Build a grid whose outgoing edge costs come from a (height, width) array.

    costs[y, x] is the cost of every move out of cell (x, y). A negative
    value makes the cell impossible to leave.

    Raises:
        ValueError: If the array is not two-dimensional or is empty
    """
    costs = np.asarray(costs, dtype=float)
    if costs.ndim != 2:
        raise ValueError(f"Cost matrix must be 2-D, got shape {costs.shape}")
    height, width = costs.shape
    if width == 0 or height == 0:
        raise ValueError(f"Grid must have at least one cell, got {width}x{height}")

    graph = Graph()
    nodes: list[list[Node]] = []

    # First pass: all nodes
    for y in range(height):
        row = []
        for x in range(width):
            node = Node(Location(x, y))
            graph.add_node(node)
            row.append(node)
        nodes.append(row)

    # Second pass: edges to in-bounds neighbors
    for y in range(height):
        for x in range(width):
            cost = float(costs[y, x])
            for dx, dy in GRID_DIRECTIONS:
                nx, ny = x + dx, y + dy
                if 0 <= nx < width and 0 <= ny < height:
                    graph.add_edge(nodes[y][x], nodes[ny][nx], cost)

    logger.debug(f"Built {width}x{height} grid with {graph.edge_count()} edges")
    return graph


def toggle_cell_cost(
    graph: Graph,
    location: tuple[int, int],
    normal: float = NORMAL_COST,
    penalty: float = PENALTY_COST,
) -> list[tuple[Node, Node]]:
    """
    Flip every outgoing edge of a cell between the normal and penalty cost.

    Returns:
        (source, target) pairs of the edges that changed, so an incremental
        search can be told about them. Empty if the cell does not exist.
    """
    node = graph.get_node(location)
    if node is None:
        logger.warning(f"Cannot toggle cost: no cell at {location}")
        return []

    changed = []
    for edge in node.edges:
        edge.cost = penalty if edge.cost == normal else normal
        changed.append((node, edge.target))
    return changed


def is_heavy_cell(node: Node, threshold: float = NORMAL_COST) -> bool:
    """Whether any move out of the cell costs more than `threshold`."""
    return any(edge.cost > threshold for edge in node.edges)
