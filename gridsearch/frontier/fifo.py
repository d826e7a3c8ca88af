"""
First-in, first-out frontier for breadth-first search.

Shares the PriorityFrontier interface so searches can treat both the same
way; the priority argument is accepted and ignored.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Generic, Hashable, TypeVar

T = TypeVar("T", bound=Hashable)


class FifoFrontier(Generic[T]):
    """Worklist returning items in insertion order. Each item is held once."""

    def __init__(self) -> None:
        self._queue: deque[T] = deque()
        self._members: set[T] = set()

    def put(self, item: T, priority: Any = None) -> None:
        if item in self._members:
            return
        self._queue.append(item)
        self._members.add(item)

    def get(self) -> T:
        """
        Remove and return the oldest item.

        Raises:
            IndexError: If the frontier is empty
        """
        if not self._queue:
            raise IndexError("get from an empty frontier")
        item = self._queue.popleft()
        self._members.discard(item)
        return item

    def is_empty(self) -> bool:
        return not self._queue

    def size(self) -> int:
        return len(self._queue)

    def clear(self) -> None:
        self._queue.clear()
        self._members.clear()

    def __len__(self) -> int:
        return len(self._queue)

    def __contains__(self, item: object) -> bool:
        return item in self._members

    def __repr__(self) -> str:
        return f"FifoFrontier(size={len(self)})"
