# gridpath/core/paths.py
#!/usr/bin/env python3

from typing import List, Optional, Sequence

from gridpath.core.types import Cell


def reconstruct_path(end: Optional[Cell]) -> List[Cell]:
    """Follow `previous` links back from `end`. Empty if `end` was never reached."""
    if end is None or end.previous is None:
        return []
    path: List[Cell] = []
    cur: Optional[Cell] = end
    while cur is not None:
        path.append(cur)
        cur = cur.previous
    path.reverse()
    return path


def path_cost(path: Sequence[Cell]) -> int:
    """Sum of entry weights; the first cell is free."""
    return sum(c.weight for c in path[1:])


def are_adjacent(a: Cell, b: Cell) -> bool:
    return abs(a.row - b.row) + abs(a.col - b.col) == 1
