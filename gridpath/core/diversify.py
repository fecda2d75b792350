# gridpath/core/diversify.py
#!/usr/bin/env python3
"""
Alternative routes by blocking parts of the optimal path and searching again.

1. Search a clone of the lattice: that path is "Optimal".
2. Wall off each interior cell of it, one at a time, on a fresh clone.
3. If still short (and the path has >= 5 cells), wall off consecutive pairs.
4. Pad with relabelled copies of the last accepted route.

A route is accepted only if it is distinct from every accepted one (see
paths_are_distinct). The caller's lattice is never touched; returned paths
are made of the caller's own cells.
"""

from dataclasses import dataclass, field
from math import floor
from typing import Callable, Iterable, List, Optional, Sequence
import logging

from gridpath import config
from gridpath.core.algorithm import SearchAlgorithm
from gridpath.core.paths import path_cost
from gridpath.core.types import Cell, Lattice

logger = logging.getLogger(__name__)

SearchFactory = Callable[[Lattice], SearchAlgorithm]


@dataclass
class Alternative:
    path: List[Cell] = field(default_factory=list)
    total_cost: int = 0
    label: str = ""
    found: bool = True


def paths_are_distinct(a: Sequence[Cell], b: Sequence[Cell], *,
                       ratio: Optional[float] = None, min_diff: Optional[int] = None) -> bool:
    """Differing interior cells over the shared length + length gap must exceed the threshold."""
    ratio = config.DIVERSITY_RATIO if ratio is None else ratio
    min_diff = config.DIVERSITY_MIN_DIFF if min_diff is None else min_diff

    inner_a, inner_b = a[1:-1], b[1:-1]
    overlap = min(len(inner_a), len(inner_b))
    diff = sum(1 for i in range(overlap) if inner_a[i].key != inner_b[i].key)
    diff += abs(len(a) - len(b))
    threshold = max(min_diff, floor(max(len(a), len(b)) * ratio))
    return diff > threshold


def _search_blocked(lattice: Lattice, factory: SearchFactory,
                    blocked: Iterable[Cell] = ()) -> Optional[List[Cell]]:
    trial = lattice.clone()
    for c in blocked:
        trial.set_wall(c.row, c.col, True)
    result = factory(trial).run(record_visits=False)
    if not result.path_found:
        return None
    # map back onto the caller's cells so the clone can be dropped
    return [lattice.cells[c.row][c.col] for c in result.path]


def generate_alternatives(lattice: Lattice, search_factory: SearchFactory, *,
                          max_alternatives: Optional[int] = None,
                          ratio: Optional[float] = None,
                          min_diff: Optional[int] = None) -> List[Alternative]:
    limit = config.MAX_ALTERNATIVES if max_alternatives is None else max_alternatives

    optimal = _search_blocked(lattice, search_factory)
    if optimal is None:
        logger.info("No path between start and end; nothing to diversify")
        return []

    accepted: List[Alternative] = [Alternative(optimal, path_cost(optimal), "Optimal")]
    if len(optimal) < 3:
        return accepted

    def try_block(cells: List[Cell]) -> None:
        path = _search_blocked(lattice, search_factory, cells)
        if path is None:
            return
        if all(paths_are_distinct(path, alt.path, ratio=ratio, min_diff=min_diff) for alt in accepted):
            accepted.append(Alternative(path, path_cost(path), f"Alternative {len(accepted)}"))

    interior = optimal[1:-1]
    for cell in interior:
        if len(accepted) >= limit:
            break
        try_block([cell])

    if len(accepted) < limit and len(optimal) >= 5:
        for first, second in zip(interior, interior[1:]):
            if len(accepted) >= limit:
                break
            try_block([first, second])

    found = len(accepted)
    while len(accepted) < limit:
        last = accepted[found - 1]
        accepted.append(Alternative(list(last.path), last.total_cost,
                                    f"Alternative {len(accepted)} (not found)", found=False))

    logger.info("Diversification: %d distinct route(s), %d padded", found, len(accepted) - found)
    return accepted
