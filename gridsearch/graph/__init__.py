"""
Graph model module.

Provides the weighted, directed graph the searches run on:
- Location, Node, Edge: value types
- Graph: node/edge storage with lookup by location
- build_grid / build_grid_from_costs: 4-connected grid construction
- toggle_cell_cost: flip a cell between normal and slow terrain
"""

from gridsearch.graph.graph import Graph
from gridsearch.graph.grid import (
    build_grid,
    build_grid_from_costs,
    is_heavy_cell,
    toggle_cell_cost,
)
from gridsearch.graph.types import Edge, Location, Node

__all__ = [
    "Edge",
    "Graph",
    "Location",
    "Node",
    "build_grid",
    "build_grid_from_costs",
    "is_heavy_cell",
    "toggle_cell_cost",
]
