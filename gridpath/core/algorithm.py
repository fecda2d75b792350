# gridpath/core/algorithm.py
#!/usr/bin/env python3
"""
Search state machine shared by Dijkstra and A*.

Lifecycle:
    IDLE -> INITIALIZING -> RUNNING -> COMPLETED | STOPPED | NO_PATH_FOUND

- initialize() -> bool    False when lattice/start/end is missing (never raises)
- step() -> StepResult    exactly one queue pop; for animation / stepping
- run(record_visits)      drives step() until a terminal status
- stop()                  cooperative; seen at the top of the next iteration

Subclasses only choose the priority and how an improved neighbour is scored.
"""

from abc import ABC, abstractmethod
from enum import Enum
from math import inf
from typing import Any, Callable, List, Optional, Set
import logging

from gridpath.core.paths import path_cost, reconstruct_path
from gridpath.core.priority_queue import IndexedPriorityQueue
from gridpath.core.types import Cell, Key, Lattice, SearchResult, SearchStatus, StepResult

logger = logging.getLogger(__name__)


class SearchKind(str, Enum):
    DIJKSTRA = "dijkstra"
    ASTAR = "astar"


class SearchAlgorithm(ABC):
    kind: SearchKind
    name: str = "(search)"
    description: str = ""

    def __init__(self, lattice: Optional[Lattice] = None):
        self.lattice = lattice
        self.status = SearchStatus.IDLE
        self.visited_order: List[Cell] = []
        self.path_order: List[Cell] = []
        self.popped_count = 0
        self._visited: Set[Key] = set()
        self._queue: Optional[IndexedPriorityQueue[Cell]] = None
        self._stop_requested = False

    # -------------------- strategy hooks --------------------

    @abstractmethod
    def priority(self, cell: Cell) -> Any:
        """Heap key for the open set; smaller pops first."""

    @abstractmethod
    def cost_of(self, cell: Cell) -> float:
        """Accumulated cost from start used for relaxation."""

    def _seed(self, start: Cell) -> None:
        start.distance = 0
        start.g_score = 0

    @abstractmethod
    def _improve(self, cell: Cell, cost: float) -> None:
        """Record a cheaper cost found for cell."""

    # -------------------- lifecycle --------------------

    def initialize(self) -> bool:
        lat = self.lattice
        if lat is None or lat.start is None or lat.end is None:
            logger.debug("%s: cannot initialize, lattice/start/end unset", self.name)
            self.status = SearchStatus.IDLE
            return False

        self.status = SearchStatus.INITIALIZING
        self.visited_order = []
        self.path_order = []
        self.popped_count = 0
        self._visited.clear()
        self._stop_requested = False

        lat.reset_transient_state()
        self._seed(lat.start)

        self._queue = IndexedPriorityQueue(self.priority)
        lat.start.in_open_set = True
        self._queue.enqueue(lat.start)
        return True

    def stop(self) -> None:
        self._stop_requested = True

    @property
    def is_running(self) -> bool:
        return self.status in (SearchStatus.INITIALIZING, SearchStatus.RUNNING)

    def has_visited(self, cell: Cell) -> bool:
        return cell.key in self._visited

    def _mark_visited(self, cell: Cell) -> None:
        cell.is_visited = True
        self.visited_order.append(cell)
        self._visited.add(cell.key)

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        if self.status == SearchStatus.IDLE or self._queue is None:
            return StepResult(status=SearchStatus.IDLE, metrics={"algo": self.name})

        if self.status.terminal:
            return StepResult(status=self.status, path=self.path_order or None,
                              metrics=self.metrics())

        if self._stop_requested:
            return self._finish(SearchStatus.STOPPED)

        self.status = SearchStatus.RUNNING
        if self._queue.is_empty():
            return self._finish(SearchStatus.NO_PATH_FOUND)

        u = self._queue.dequeue()
        u.in_open_set = False

        # stale or blocked entry; a correct indexed heap never produces one
        if self.has_visited(u) or u.is_wall:
            return StepResult(status=self.status, current=u, metrics=self.metrics())

        if self.cost_of(u) == inf:
            return self._finish(SearchStatus.NO_PATH_FOUND)

        self.popped_count += 1
        self._mark_visited(u)

        if u is self.lattice.end:
            self.path_order = reconstruct_path(u)
            res = self._finish(SearchStatus.COMPLETED)
            res.closed = [u]
            res.current = u
            return res

        opened_now: List[Cell] = []
        for v in self.lattice.neighbors(u):
            if self.has_visited(v):
                continue
            alt = self.cost_of(u) + v.weight
            if alt < self.cost_of(v):
                self._improve(v, alt)
                v.previous = u
                if not v.in_open_set:
                    v.in_open_set = True
                    self._queue.enqueue(v)
                    opened_now.append(v)
                else:
                    self._queue.update(v)

        return StepResult(status=self.status, opened=opened_now, closed=[u], current=u,
                          metrics=self.metrics())

    def _finish(self, status: SearchStatus) -> StepResult:
        self.status = status
        logger.debug("%s finished: %s after %d visits", self.name, status.value, len(self.visited_order))
        return StepResult(status=status, path=self.path_order or None, metrics=self.metrics())

    def run(self, record_visits: bool = True,
            on_visit: Optional[Callable[[Cell], None]] = None) -> SearchResult:
        if not self.initialize():
            return SearchResult()

        while not self.status.terminal:
            seen = len(self.visited_order)
            self.step()
            if on_visit is not None and len(self.visited_order) > seen:
                on_visit(self.visited_order[-1])

        return self.result(record_visits)

    def result(self, record_visits: bool = True) -> SearchResult:
        found = self.status == SearchStatus.COMPLETED
        return SearchResult(
            visited=list(self.visited_order) if record_visits else [],
            path=list(self.path_order),
            path_found=found,
            status=self.status,
            total_cost=path_cost(self.path_order) if found else None,
        )

    # -------------------- metrics --------------------

    def metrics(self) -> dict:
        found = self.status == SearchStatus.COMPLETED
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": self._queue.size() if self._queue is not None else 0,
            "closed_count": len(self._visited),
            "path_len": len(self.path_order),
            "total_cost": path_cost(self.path_order) if found else None,
        }
