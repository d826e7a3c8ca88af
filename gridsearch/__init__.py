"""
Grid pathfinding engine.

A family of interchangeable shortest-path searches (breadth-first, greedy
best-first, uniform-cost, A*, and incremental LPA*) over one weighted grid
graph model.
"""

__version__ = "0.1.0"
