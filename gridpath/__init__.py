"""
gridpath: interactive grid pathfinding.

Dijkstra and A* over a weighted 4-connected lattice, with recorded
exploration order for step-by-step replay and diversified alternative routes.
"""

__version__ = "0.1.0"
