"""
recommender/ranking.py
----------------------
Bounded top-K ranking backed by a per-instance binary min-heap.
Used by the category classifier and by the latent factor recommender.
"""

from __future__ import annotations

from typing import Generic, List, Optional, Tuple, TypeVar

from agent_core.errors import EmptyRanking

T = TypeVar("T")


class TopKRanking(Generic[T]):
    """
    Min-heap of (rank, item) slots. The lowest rank sits at the root, so a
    bounded push evicts the weakest item and a drain returns the survivors
    from the highest rank down.
    """

    def __init__(self):
        self._heap: List[Tuple[float, T]] = []
        self._dropped: List[T] = []

    def __len__(self) -> int:
        return len(self._heap)

    @property
    def dropped(self) -> List[T]:
        """Items evicted by push_and_evict, in eviction order."""
        return list(self._dropped)

    def push(self, item: T, rank: float) -> None:
        self._heap.append((float(rank), item))
        self._sift_up(len(self._heap) - 1)

    def pop(self) -> T:
        """Remove and return the lowest-ranked item."""
        if not self._heap:
            raise EmptyRanking("The ranking is already empty")

        root = self._heap[0]
        last = self._heap.pop()
        if self._heap:
            self._heap[0] = last
            self._sift_down(0)
        return root[1]

    def push_and_evict(self, item: T, rank: float, limit: int = 0) -> Optional[T]:
        """Push, then evict and return the lowest item if the size exceeds `limit`."""
        self.push(item, rank)
        if len(self._heap) > limit:
            evicted = self.pop()
            self._dropped.append(evicted)
            return evicted
        return None

    def drain(self) -> List[T]:
        """Empty the ranking; items come back highest rank first."""
        items: List[T] = []
        while self._heap:
            items.append(self.pop())
        items.reverse()
        return items

    # ── heap maintenance ─────────────────────────────────────
    def _sift_up(self, index: int) -> None:
        heap = self._heap
        while index > 0:
            parent = (index - 1) // 2
            if heap[index][0] >= heap[parent][0]:
                break
            heap[index], heap[parent] = heap[parent], heap[index]
            index = parent

    def _sift_down(self, index: int) -> None:
        heap = self._heap
        size = len(heap)
        while True:
            smallest = index
            for child in (2 * index + 1, 2 * index + 2):
                if child < size and heap[child][0] < heap[smallest][0]:
                    smallest = child
            if smallest == index:
                return
            heap[index], heap[smallest] = heap[smallest], heap[index]
            index = smallest
