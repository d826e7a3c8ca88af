"""
Heuristic and step-cost functions shared by the search strategies.
"""

from __future__ import annotations

from gridsearch.graph import Edge, Node


def manhattan(a: Node, b: Node) -> int:
    """Manhattan distance between two nodes."""
    return a.location.manhattan(b.location)


def is_blocked(edge: Edge, threshold: float) -> bool:
    """Whether a cost-unaware search must treat the edge as a wall."""
    return not edge.passable or edge.cost > threshold


def straight_path_bias(node: Node, neighbor: Node, bias: float) -> float:
    """
    Tie-break charged for a move that runs against the cell's preferred axis.

    Cells alternate in a checkerboard: even (x + y) cells charge horizontal
    moves, odd cells charge vertical moves. Diagonal or self moves are free.
    """
    if bias == 0:
        return 0.0
    dx = neighbor.x - node.x
    dy = neighbor.y - node.y
    if (node.x + node.y) % 2 == 0:
        return bias if dx != 0 and dy == 0 else 0.0
    return bias if dy != 0 and dx == 0 else 0.0

