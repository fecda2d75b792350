"""
Search engine.

- Cell, Lattice: grid model
- IndexedPriorityQueue: open set with decrease-key
- DijkstraSearch, AStarSearch: the two strategies, tagged by SearchKind
- generate_alternatives: diversified routes
- Replay, CoordinationContext: stepping over recorded results
"""

from gridpath.core.algorithm import SearchAlgorithm, SearchKind
from gridpath.core.astar import AStarSearch
from gridpath.core.dijkstra import DijkstraSearch
from gridpath.core.diversify import Alternative, generate_alternatives, paths_are_distinct
from gridpath.core.paths import path_cost, reconstruct_path
from gridpath.core.priority_queue import IndexedPriorityQueue
from gridpath.core.replay import CoordinationContext, Replay
from gridpath.core.types import Cell, Lattice, SearchResult, SearchStatus, StepResult

__all__ = [
    "Alternative",
    "AStarSearch",
    "Cell",
    "CoordinationContext",
    "DijkstraSearch",
    "IndexedPriorityQueue",
    "Lattice",
    "Replay",
    "SEARCHES",
    "SearchAlgorithm",
    "SearchKind",
    "SearchResult",
    "SearchStatus",
    "StepResult",
    "generate_alternatives",
    "get_search",
    "path_cost",
    "paths_are_distinct",
    "reconstruct_path",
]

SEARCHES = {
    SearchKind.DIJKSTRA: DijkstraSearch,
    SearchKind.ASTAR: AStarSearch,
}


def get_search(kind, lattice: Lattice) -> SearchAlgorithm:
    """
    Build a search by tag.

    Args:
        kind: SearchKind or its value ("dijkstra", "astar")
        lattice: Lattice to search

    Raises:
        ValueError: If kind is unknown
    """
    try:
        kind = SearchKind(kind)
    except ValueError:
        available = ", ".join(k.value for k in SearchKind)
        raise ValueError(f"Unknown search '{kind}'. Available: {available}") from None
    return SEARCHES[kind](lattice)
