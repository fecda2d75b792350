# gridpath/core/types.py
#!/usr/bin/env python3
"""
Lattice model shared by the search engine, replay and viewer.

- Cell: one grid position (topology flags + per-run transient fields)
- Lattice: rows x cols array of Cells, owns every Cell and the start/end refs
- SearchStatus / StepResult / SearchResult: what a search hands back
"""

from dataclasses import dataclass, field
from enum import Enum
from math import inf
from typing import Any, Dict, Iterator, List, Optional, Tuple
import weakref

Key = Tuple[int, int]  # (row, col)

# Up, Right, Down, Left
DIRECTIONS: Tuple[Key, ...] = ((-1, 0), (0, 1), (1, 0), (0, -1))


@dataclass(eq=False)
class Cell:
    row: int
    col: int

    # topology
    is_start: bool = False
    is_end: bool = False
    is_wall: bool = False
    weight: int = 1

    # display flags (replay)
    is_visited: bool = False
    is_path: bool = False
    is_current: bool = False

    # search transient
    distance: float = inf
    in_open_set: bool = False
    g_score: float = inf
    h_score: float = 0
    f_score: float = inf
    _previous: Optional["weakref.ref[Cell]"] = field(default=None, repr=False)

    @property
    def key(self) -> Key:
        return (self.row, self.col)

    @property
    def previous(self) -> Optional["Cell"]:
        """Back-pointer for path reconstruction. Non-owning: the lattice keeps cells alive."""
        return self._previous() if self._previous is not None else None

    @previous.setter
    def previous(self, cell: Optional["Cell"]) -> None:
        self._previous = weakref.ref(cell) if cell is not None else None

    @property
    def is_weighted(self) -> bool:
        return self.weight > 1

    def reset(self) -> None:
        """Clear search and display fields, keep topology."""
        self.is_visited = False
        self.is_path = False
        self.is_current = False
        self.distance = inf
        self.previous = None
        self.in_open_set = False
        self.g_score = inf
        self.h_score = 0
        self.f_score = inf

    def reset_all(self) -> None:
        self.is_start = False
        self.is_end = False
        self.is_wall = False
        self.weight = 1
        self.reset()

    def clear_marks(self) -> None:
        self.is_visited = False
        self.is_path = False
        self.is_current = False

    def status(self) -> str:
        if self.is_start: return "start"
        if self.is_end: return "end"
        if self.is_wall: return "wall"
        if self.is_path: return "path"
        if self.is_current: return "current"
        if self.is_visited: return "visited"
        return ""


class Lattice:
    """4-connected grid. Mutators return False for out-of-bounds or rejected edits."""

    def __init__(self, rows: int = 10, cols: int = 10):
        self.rows = rows
        self.cols = cols
        self.cells: List[List[Cell]] = []
        self.start: Optional[Cell] = None
        self.end: Optional[Cell] = None
        self._build()

    def _build(self) -> None:
        self.cells = [[Cell(r, c) for c in range(self.cols)] for r in range(self.rows)]

    # -------------------- lookup --------------------

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        if not self.in_bounds(row, col):
            return None
        return self.cells[row][col]

    def cells_iter(self) -> Iterator[Cell]:
        for line in self.cells:
            yield from line

    def neighbors(self, cell: Cell) -> List[Cell]:
        """Traversable 4-neighbours in up/right/down/left order."""
        out: List[Cell] = []
        for dr, dc in DIRECTIONS:
            n = self.get_cell(cell.row + dr, cell.col + dc)
            if n is not None and not n.is_wall:
                out.append(n)
        return out

    def is_weighted(self) -> bool:
        return any(c.weight > 1 for c in self.cells_iter() if not c.is_wall)

    def min_traversable_weight(self) -> int:
        weights = [c.weight for c in self.cells_iter() if not c.is_wall]
        return min(weights) if weights else 1

    # -------------------- topology edits --------------------

    def set_start(self, row: int, col: int) -> bool:
        cell = self.get_cell(row, col)
        if cell is None:
            return False
        if self.start is not None:
            self.start.is_start = False
        cell.is_start = True
        cell.is_wall = False
        if cell is self.end:
            cell.is_end = False
            self.end = None
        self.start = cell
        return True

    def set_end(self, row: int, col: int) -> bool:
        cell = self.get_cell(row, col)
        if cell is None:
            return False
        if self.end is not None:
            self.end.is_end = False
        cell.is_end = True
        cell.is_wall = False
        if cell is self.start:
            cell.is_start = False
            self.start = None
        self.end = cell
        return True

    def set_wall(self, row: int, col: int, is_wall: bool = True) -> bool:
        cell = self.get_cell(row, col)
        if cell is None or cell.is_start or cell.is_end:
            return False
        cell.is_wall = bool(is_wall)
        return True

    def toggle_wall(self, row: int, col: int) -> bool:
        cell = self.get_cell(row, col)
        if cell is None:
            return False
        return self.set_wall(row, col, not cell.is_wall)

    def set_weight(self, row: int, col: int, weight: int) -> bool:
        cell = self.get_cell(row, col)
        if cell is None or isinstance(weight, bool) or not isinstance(weight, int) or weight < 1:
            return False
        cell.weight = weight
        return True

    def clear_walls(self) -> None:
        for c in self.cells_iter():
            c.is_wall = False

    # -------------------- resets --------------------

    def reset_transient_state(self) -> None:
        for c in self.cells_iter():
            c.reset()

    def clear_marks(self) -> None:
        for c in self.cells_iter():
            c.clear_marks()

    def reset(self) -> None:
        """Wipe walls, weights and start/end as well."""
        for c in self.cells_iter():
            c.reset_all()
        self.start = None
        self.end = None

    def resize(self, rows: int, cols: int) -> None:
        self.rows = rows
        self.cols = cols
        self._build()
        self.start = None
        self.end = None

    def clone(self) -> "Lattice":
        """Topology-only copy; transient search fields start fresh."""
        other = Lattice(self.rows, self.cols)
        for c in self.cells_iter():
            o = other.cells[c.row][c.col]
            o.is_wall = c.is_wall
            o.weight = c.weight
            o.is_start = c.is_start
            o.is_end = c.is_end
            if c.is_start: other.start = o
            if c.is_end: other.end = o
        return other

    def __repr__(self) -> str:
        s = self.start.key if self.start else None
        e = self.end.key if self.end else None
        return f"Lattice(rows={self.rows}, cols={self.cols}, start={s}, end={e})"


class SearchStatus(str, Enum):
    IDLE = "idle"
    INITIALIZING = "initializing"
    RUNNING = "running"
    COMPLETED = "completed"
    STOPPED = "stopped"
    NO_PATH_FOUND = "no_path"

    @property
    def terminal(self) -> bool:
        return self in (SearchStatus.COMPLETED, SearchStatus.STOPPED, SearchStatus.NO_PATH_FOUND)


@dataclass
class StepResult:
    status: SearchStatus
    opened: List[Cell] = field(default_factory=list)
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SearchResult:
    visited: List[Cell] = field(default_factory=list)
    path: List[Cell] = field(default_factory=list)
    path_found: bool = False
    status: SearchStatus = SearchStatus.IDLE
    total_cost: Optional[float] = None
