# gridpath/core/priority_queue.py
#!/usr/bin/env python3
"""
Indexed binary min-heap used as the open set.

Unlike a plain heapq list (push duplicates, skip stale pops), every element
has an identity key and the heap keeps a key -> index map, so a queued cell
can be re-prioritized or removed in O(log n) without leaving stale entries.

Ordering is given by `priority`, a function returning a sortable value
(usually a tuple, e.g. (f, h) for A*). It is read at comparison time, so
callers mutate the element's fields first and then call update().
"""

from typing import Any, Callable, Dict, Generic, Hashable, List, Optional, TypeVar

T = TypeVar("T")


def by_distance(cell: Any) -> Any:
    return cell.distance


def by_key(cell: Any) -> Hashable:
    return cell.key


class IndexedPriorityQueue(Generic[T]):
    def __init__(self,
                 priority: Callable[[T], Any] = by_distance,
                 identity: Callable[[T], Hashable] = by_key):
        self._heap: List[T] = []
        self._index: Dict[Hashable, int] = {}
        self._priority = priority
        self._identity = identity

    # -------------------- queue API --------------------

    def enqueue(self, element: T) -> None:
        k = self._identity(element)
        if k in self._index:
            self.remove(k)
        self._heap.append(element)
        self._index[k] = len(self._heap) - 1
        self._sift_up(len(self._heap) - 1)

    def dequeue(self) -> Optional[T]:
        if not self._heap:
            return None
        top = self._heap[0]
        last = self._heap.pop()
        del self._index[self._identity(top)]
        if self._heap:
            self._heap[0] = last
            self._index[self._identity(last)] = 0
            self._sift_down(0)
        return top

    def remove(self, key: Hashable) -> bool:
        i = self._index.pop(key, None)
        if i is None:
            return False
        last = self._heap.pop()
        if i == len(self._heap):
            return True
        self._heap[i] = last
        self._index[self._identity(last)] = i
        self._restore(i)
        return True

    def update(self, element: T) -> bool:
        """Re-seat a queued element after its priority changed. False if not queued."""
        i = self._index.get(self._identity(element))
        if i is None:
            return False
        self._heap[i] = element
        self._restore(i)
        return True

    def peek(self) -> Optional[T]:
        return self._heap[0] if self._heap else None

    def contains(self, key: Hashable) -> bool:
        return key in self._index

    def is_empty(self) -> bool:
        return not self._heap

    def size(self) -> int:
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._index

    # -------------------- heap internals --------------------

    def _less(self, i: int, j: int) -> bool:
        return self._priority(self._heap[i]) < self._priority(self._heap[j])

    def _swap(self, i: int, j: int) -> None:
        h = self._heap
        h[i], h[j] = h[j], h[i]
        self._index[self._identity(h[i])] = i
        self._index[self._identity(h[j])] = j

    def _restore(self, i: int) -> None:
        parent = (i - 1) // 2
        if i > 0 and self._less(i, parent):
            self._sift_up(i)
        else:
            self._sift_down(i)

    def _sift_up(self, i: int) -> None:
        while i > 0:
            parent = (i - 1) // 2
            if not self._less(i, parent):
                break
            self._swap(i, parent)
            i = parent

    def _sift_down(self, i: int) -> None:
        n = len(self._heap)
        while True:
            left, right = 2 * i + 1, 2 * i + 2
            smallest = i
            if left < n and self._less(left, smallest):
                smallest = left
            if right < n and self._less(right, smallest):
                smallest = right
            if smallest == i:
                return
            self._swap(i, smallest)
            i = smallest

    def check_invariants(self) -> bool:
        """Index and heap order agree. Used by tests."""
        if len(self._index) != len(self._heap):
            return False
        for i, el in enumerate(self._heap):
            if self._index.get(self._identity(el)) != i:
                return False
            if i > 0 and self._less(i, (i - 1) // 2):
                return False
        return True
