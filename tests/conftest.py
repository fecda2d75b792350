"""
Shared fixtures.

Lattices are drawn as text, one string per row:
    S start, E end, # wall, 1-9 weight, . open (weight 1)
"""

import random
from typing import List

import pytest

from gridpath.core.types import Lattice


def lattice_from_rows(rows: List[str]) -> Lattice:
    lat = Lattice(len(rows), len(rows[0]))
    for r, line in enumerate(rows):
        for c, ch in enumerate(line):
            if ch == "S":
                lat.set_start(r, c)
            elif ch == "E":
                lat.set_end(r, c)
            elif ch == "#":
                lat.set_wall(r, c, True)
            elif ch.isdigit():
                lat.set_weight(r, c, int(ch))
    return lat


def random_lattice(seed: int, rows: int = 5, cols: int = 5, wall_p: float = 0.25) -> Lattice:
    rng = random.Random(seed)
    lat = Lattice(rows, cols)
    for cell in lat.cells_iter():
        if rng.random() < wall_p:
            cell.is_wall = True
        else:
            cell.weight = rng.randint(1, 9)
    lat.set_start(0, 0)
    lat.set_end(rows - 1, cols - 1)
    return lat


@pytest.fixture
def make_lattice():
    return lattice_from_rows


@pytest.fixture
def open_3x3() -> Lattice:
    return lattice_from_rows([
        "S..",
        "...",
        "..E",
    ])


@pytest.fixture
def two_routes() -> Lattice:
    """A 3x3 block in the middle: go over the top or under the bottom."""
    return lattice_from_rows([
        ".......",
        "..###..",
        "S.###.E",
        "..###..",
        ".......",
    ])


@pytest.fixture
def make_random_lattice():
    return random_lattice
