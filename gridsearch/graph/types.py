"""
Core graph value types: Location, Node, Edge.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple


class Location(NamedTuple):
    """Integer grid coordinate; the identity key of a node."""

    x: int
    y: int

    def manhattan(self, other: tuple[int, int]) -> int:
        """Manhattan distance to another location."""
        return abs(self.x - other[0]) + abs(self.y - other[1])

    def __str__(self) -> str:
        return f"{self.x},{self.y}"


@dataclass(eq=False)
class Edge:
    """
    Directed edge to a target node.

    Attributes:
        target: Node the edge leads to
        cost: Traversal cost; negative means impassable
    """

    target: Node
    cost: float

    @property
    def passable(self) -> bool:
        return self.cost >= 0

    def __repr__(self) -> str:
        return f"Edge(-> {self.target.location}, cost={self.cost})"


@dataclass(eq=False)
class Node:
    """
    Graph node identified by its location.

    Equality and hashing follow the location only, so a node can be used
    anywhere a location key is expected to be unique. The edge list is the
    only mutable part.

    Attributes:
        location: Grid coordinate of the node
        edges: Outgoing edges in insertion order
    """

    location: Location
    edges: list[Edge] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.location = Location(*self.location)

    @property
    def x(self) -> int:
        return self.location.x

    @property
    def y(self) -> int:
        return self.location.y

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.location == other.location

    def __hash__(self) -> int:
        return hash(self.location)

    def __repr__(self) -> str:
        return f"Node({self.location.x}, {self.location.y})"
