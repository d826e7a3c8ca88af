"""
Exception types raised by the graph model and the search algorithms.
"""

from __future__ import annotations


class GridSearchError(Exception):
    """Base class for all gridsearch errors."""


class DuplicateNodeError(GridSearchError):
    """A node with the same location is already in the graph."""

    def __init__(self, location) -> None:
        super().__init__(f"Node already exists at {tuple(location)}")
        self.location = location


class NodeNotFoundError(GridSearchError):
    """A query referenced a location that has no node."""

    def __init__(self, role: str, location) -> None:
        super().__init__(f"{role.capitalize()} node not found: {location}")
        self.role = role
        self.location = location


class PathReconstructionError(GridSearchError):
    """
    Backtracking hit a node with no recorded predecessor.

    This means relaxation bookkeeping is broken; it is never the same
    thing as an unreachable goal.
    """
