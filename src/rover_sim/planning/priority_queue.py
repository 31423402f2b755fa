"""
Binary-heap priority queue for A*.

Lowest priority pops first; equal priorities pop in insertion
order, so a search is reproducible run to run. Re-pushing an item
with a better priority leaves the old entry in the heap; callers
skip stale entries when they pop them.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Generic, TypeVar

T = TypeVar("T")


class PriorityQueue(Generic[T]):
    """Min-heap keyed by (priority, insertion order)."""

    def __init__(self):
        self._heap: list[tuple[float, int, T]] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def push(self, item: T, priority: float) -> None:
        heapq.heappush(self._heap, (priority, next(self._counter), item))

    def pop(self) -> tuple[T, float]:
        """Remove and return (item, priority) with the lowest priority."""
        priority, _, item = heapq.heappop(self._heap)
        return item, priority
