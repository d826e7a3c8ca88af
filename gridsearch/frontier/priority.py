"""
Priority frontier with in-place priority updates.

A binary heap of entries plus an item -> entry index. Updating or removing an
item invalidates its old heap entry instead of searching the heap for it, so
every operation is O(log n) amortized. Once dead entries outnumber live ones
two to one the heap is rebuilt from the live ones. Ties are broken by
insertion order.
"""

from __future__ import annotations

import heapq
import itertools
from functools import total_ordering
from typing import Any, Generic, Hashable, TypeVar

T = TypeVar("T", bound=Hashable)


@total_ordering
class _Descending:
    """Wraps a priority so that larger values sort first in a min-heap."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _Descending):
            return NotImplemented
        return self.value == other.value

    def __lt__(self, other: _Descending) -> bool:
        return other.value < self.value


class PriorityFrontier(Generic[T]):
    """
    Ordered worklist keyed by a comparable priority.

    Priorities may be numbers or tuples (LPA* uses two-part keys). Each item
    appears at most once; `put` on a present item keeps whichever priority is
    better, `update` sets it unconditionally.

    Args:
        ascending: If True (default) the smallest priority comes out first
    """

    def __init__(self, ascending: bool = True) -> None:
        self._ascending = ascending
        self._heap: list[list] = []
        # item -> live heap entry [sort_key, seq, item, priority]
        self._entries: dict[T, list] = {}
        # Dead heap entries not yet popped
        self._stale = 0
        self._counter = itertools.count()

    @property
    def ascending(self) -> bool:
        return self._ascending

    def _sort_key(self, priority: Any) -> Any:
        return priority if self._ascending else _Descending(priority)

    def _is_better(self, new: Any, old: Any) -> bool:
        return new < old if self._ascending else new > old

    def _push(self, item: T, priority: Any) -> None:
        entry = [self._sort_key(priority), next(self._counter), item, priority]
        self._entries[item] = entry
        heapq.heappush(self._heap, entry)

    def _discard(self, item: T) -> None:
        entry = self._entries.pop(item)
        # Mark stale; skipped when it reaches the top
        entry[2] = None
        self._stale += 1
        if self._stale > 2 * len(self._entries):
            self._compact()

    def _compact(self) -> None:
        self._heap = [entry for entry in self._heap if entry[2] is not None]
        heapq.heapify(self._heap)
        self._stale = 0

    def _prune(self) -> None:
        while self._heap and self._heap[0][2] is None:
            heapq.heappop(self._heap)
            self._stale -= 1

    def put(self, item: T, priority: Any) -> None:
        """
        Insert an item, or move it to a better priority if already present.

        A worse priority for a present item is ignored.
        """
        entry = self._entries.get(item)
        if entry is not None:
            if not self._is_better(priority, entry[3]):
                return
            self._discard(item)
        self._push(item, priority)

    def update(self, item: T, priority: Any) -> None:
        """Set an item's priority whether it is better or worse."""
        entry = self._entries.get(item)
        if entry is not None:
            if entry[3] == priority:
                return
            self._discard(item)
        self._push(item, priority)

    def remove(self, item: T) -> bool:
        """Remove an item if present. Returns whether it was present."""
        if item not in self._entries:
            return False
        self._discard(item)
        return True

    def get(self) -> T:
        """
        Remove and return the highest-ranked item.

        Raises:
            IndexError: If the frontier is empty
        """
        return self.pop()[0]

    def pop(self) -> tuple[T, Any]:
        """Remove and return (item, priority) of the highest-ranked item."""
        self._prune()
        if not self._heap:
            raise IndexError("get from an empty frontier")
        _, _, item, priority = heapq.heappop(self._heap)
        del self._entries[item]
        return item, priority

    def peek(self) -> T:
        """Return the highest-ranked item without removing it."""
        self._prune()
        if not self._heap:
            raise IndexError("peek at an empty frontier")
        return self._heap[0][2]

    def peek_priority(self) -> Any:
        """Return the priority of the highest-ranked item."""
        self._prune()
        if not self._heap:
            raise IndexError("peek at an empty frontier")
        return self._heap[0][3]

    def priority_of(self, item: T) -> Any | None:
        entry = self._entries.get(item)
        return entry[3] if entry is not None else None

    def is_empty(self) -> bool:
        return not self._entries

    def size(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._heap.clear()
        self._entries.clear()
        self._stale = 0

    def items(self) -> list[tuple[T, Any]]:
        """(item, priority) pairs in the order they would be returned."""
        live = sorted(entry for entry in self._heap if entry[2] is not None)
        return [(entry[2], entry[3]) for entry in live]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, item: object) -> bool:
        return item in self._entries

    def __repr__(self) -> str:
        order = "ascending" if self._ascending else "descending"
        return f"PriorityFrontier({order}, size={len(self)})"
