"""
Graph container: nodes unique by location plus directed, weighted edges.

Usage:
    from gridsearch.graph import Graph, Node

    graph = Graph()
    a, b = Node((0, 0)), Node((1, 0))
    graph.add_node(a)
    graph.add_node(b)
    graph.add_edge(a, b, 1)
    graph.add_edge(b, a, 1)  # edges are not mirrored automatically
"""

from __future__ import annotations

from collections.abc import Iterator

from gridsearch.errors import DuplicateNodeError
from gridsearch.graph.types import Edge, Location, Node


class Graph:
    """
    Owner of all nodes and their edges.

    Algorithms borrow nodes from the graph and never change its topology.
    Callers may change an edge's cost in place between queries; that is the
    only permitted external write.

    Attributes:
        nodes: Nodes in insertion order
    """

    def __init__(self) -> None:
        self._nodes: dict[Location, Node] = {}
        # Reverse adjacency, kept in step with add_edge
        self._incoming: dict[Location, list[tuple[Node, Edge]]] = {}

    @property
    def nodes(self) -> list[Node]:
        return list(self._nodes.values())

    def add_node(self, node: Node) -> None:
        """
        Add a node to the graph.

        Raises:
            DuplicateNodeError: If a node with the same location exists
        """
        if node.location in self._nodes:
            raise DuplicateNodeError(node.location)
        self._nodes[node.location] = node
        self._incoming.setdefault(node.location, [])
        # Edges created before insertion still count as incoming
        for edge in node.edges:
            self._incoming.setdefault(edge.target.location, []).append((node, edge))

    def get_node(self, location: tuple[int, int]) -> Node | None:
        """Return the node at a location, or None."""
        return self._nodes.get(Location(*location))

    def get_neighbors(self, node: Node) -> list[Node]:
        """Return target nodes of all outgoing edges."""
        return [edge.target for edge in node.edges]

    def get_edge(self, node: Node, neighbor: Node) -> Edge | None:
        """Return the edge node -> neighbor, or None."""
        for edge in node.edges:
            if edge.target == neighbor:
                return edge
        return None

    def get_cost(self, node: Node, neighbor: Node) -> float | None:
        """Return the cost of node -> neighbor, or None if there is no edge."""
        edge = self.get_edge(node, neighbor)
        return edge.cost if edge is not None else None

    def add_edge(self, node: Node, neighbor: Node, cost: float) -> Edge:
        """
        Append a directed edge node -> neighbor.

        Call twice (once per direction) for bidirectional movement.

        Returns:
            The new edge, whose cost may later be edited in place
        """
        edge = Edge(target=neighbor, cost=cost)
        node.edges.append(edge)
        if node.location in self._nodes:
            self._incoming.setdefault(neighbor.location, []).append((node, edge))
        return edge

    def get_incoming(self, node: Node) -> list[tuple[Node, Edge]]:
        """Return (source, edge) pairs for every edge ending at node."""
        return list(self._incoming.get(node.location, ()))

    def edge_count(self) -> int:
        return sum(len(node.edges) for node in self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, location: object) -> bool:
        if isinstance(location, Node):
            location = location.location
        try:
            return Location(*location) in self._nodes
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.values())

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self)}, edges={self.edge_count()})"
