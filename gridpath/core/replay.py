# gridpath/core/replay.py
#!/usr/bin/env python3
"""
Step / back-step over a finished search without re-running it.

Replay keeps a cursor into SearchResult.visited. Step N means cells 0..N are
visited and cell N is current; the path is shown only on the last step.

CoordinationContext links several replays (e.g. Dijkstra and A* side by
side) so a caller can ask whether the other one is done and be told once
all of them are.
"""

from typing import Callable, Dict, List, Optional
import logging

from gridpath.core.types import Cell, Lattice, SearchResult

logger = logging.getLogger(__name__)


class CoordinationContext:
    def __init__(self):
        self._finished: Dict[str, bool] = {}
        self._callbacks: List[Callable[[], None]] = []
        self._fired = False

    def register(self, name: str) -> None:
        self._finished[name] = False
        self._fired = False

    def unregister(self, name: str) -> None:
        self._finished.pop(name, None)

    def is_finished(self, name: str) -> bool:
        return self._finished.get(name, False)

    def other_finished(self, name: str) -> bool:
        others = [done for n, done in self._finished.items() if n != name]
        return bool(others) and all(others)

    @property
    def all_finished(self) -> bool:
        return bool(self._finished) and all(self._finished.values())

    def on_both_finished(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    def mark_finished(self, name: str, finished: bool = True) -> None:
        if name not in self._finished:
            return
        self._finished[name] = finished
        if not self.all_finished:
            self._fired = False  # re-arm after a back-step
            return
        if not self._fired:
            self._fired = True
            logger.debug("all sessions finished: %s", ", ".join(self._finished))
            for cb in list(self._callbacks):
                cb()


class Replay:
    def __init__(self, lattice: Lattice, result: SearchResult,
                 name: str = "replay", context: Optional[CoordinationContext] = None):
        self.lattice = lattice
        self.result = result
        self.name = name
        self.context = context
        self.current_step = -1
        if context is not None:
            context.register(name)

    @property
    def max_step(self) -> int:
        return len(self.result.visited) - 1

    @property
    def visited_count(self) -> int:
        return min(self.current_step + 1, len(self.result.visited))

    @property
    def at_end(self) -> bool:
        return self.current_step >= self.max_step

    @property
    def can_step_back(self) -> bool:
        return self.current_step > 0

    @property
    def path_shown(self) -> bool:
        return self.at_end and self.result.path_found and self.current_step >= 0

    @property
    def path_length(self) -> int:
        """Interior path cells, as counted on screen."""
        if not self.path_shown:
            return 0
        return sum(1 for c in self.result.path if not c.is_start and not c.is_end)

    @property
    def current(self) -> Optional[Cell]:
        if 0 <= self.current_step <= self.max_step:
            return self.result.visited[self.current_step]
        return None

    # -------------------- cursor --------------------

    def next_step(self) -> bool:
        if self.at_end:
            return False
        return self.seek(self.current_step + 1)

    def prev_step(self) -> bool:
        if not self.can_step_back:
            return False
        return self.seek(self.current_step - 1)

    def rewind(self) -> None:
        self.seek(-1)

    def finish(self) -> None:
        self.seek(self.max_step)

    def seek(self, step: int) -> bool:
        step = max(-1, min(step, self.max_step))
        self.current_step = step
        self.apply()
        if self.context is not None:
            self.context.mark_finished(self.name, self.at_end and self.max_step >= 0)
        return True

    def apply(self) -> None:
        """Rewrite display flags on the lattice for the current step."""
        self.lattice.clear_marks()
        visited = self.result.visited
        for cell in visited[:self.current_step + 1]:
            cell.is_visited = True
        cur = self.current
        if cur is not None:
            cur.is_current = True
        if self.path_shown:
            for cell in self.result.path:
                if not cell.is_start and not cell.is_end:
                    cell.is_path = True
