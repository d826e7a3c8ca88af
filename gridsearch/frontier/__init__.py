"""
Frontier module.

Worklists of discovered-but-unexpanded nodes:
- PriorityFrontier: heap ordered by priority, decrease-priority in place
- FifoFrontier: insertion order, same interface
"""

from gridsearch.frontier.fifo import FifoFrontier
from gridsearch.frontier.priority import PriorityFrontier

__all__ = ["FifoFrontier", "PriorityFrontier"]
