# gridpath/core/dijkstra.py
#!/usr/bin/env python3

from gridpath.core.algorithm import SearchAlgorithm, SearchKind
from gridpath.core.types import Cell


class DijkstraSearch(SearchAlgorithm):
    kind = SearchKind.DIJKSTRA
    name = "Dijkstra"
    description = ("Expands the cell with the smallest known distance first. "
                   "Guarantees the cheapest path on a weighted grid.")

    def priority(self, cell: Cell) -> float:
        return cell.distance

    def cost_of(self, cell: Cell) -> float:
        return cell.distance

    def _improve(self, cell: Cell, cost: float) -> None:
        cell.distance = cost
