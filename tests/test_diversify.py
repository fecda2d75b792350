"""Tests for alternative-route generation."""

from math import inf

import pytest

from gridpath.core import AStarSearch, DijkstraSearch
from gridpath.core.diversify import generate_alternatives, paths_are_distinct
from gridpath.core.types import Cell


def row_path(*cols, row=0):
    return [Cell(row, c) for c in cols]


class TestDistinctness:
    """The difference threshold."""

    def test_identical_paths_are_not_distinct(self):
        p = row_path(0, 1, 2, 3, 4)
        assert not paths_are_distinct(p, list(p))

    def test_small_difference_is_not_enough(self):
        a = [Cell(0, 0), Cell(0, 1), Cell(0, 2), Cell(0, 3), Cell(0, 4)]
        b = [Cell(0, 0), Cell(1, 1), Cell(1, 2), Cell(0, 3), Cell(0, 4)]
        # two differing interior cells; threshold is max(2, floor(5 * 0.2)) = 2
        assert not paths_are_distinct(a, b)

    def test_length_gap_counts(self):
        a = row_path(0, 1, 2, 3, 4)
        b = [Cell(0, 0), Cell(1, 1), Cell(1, 2), Cell(1, 3), Cell(0, 3), Cell(0, 4)]
        assert paths_are_distinct(a, b)

    def test_threshold_is_configurable(self):
        a = [Cell(0, 0), Cell(0, 1), Cell(0, 2), Cell(0, 3), Cell(0, 4)]
        b = [Cell(0, 0), Cell(1, 1), Cell(1, 2), Cell(0, 3), Cell(0, 4)]
        assert paths_are_distinct(a, b, min_diff=1)
        assert not paths_are_distinct(a, b, min_diff=1, ratio=0.5)


class TestGenerateAlternatives:
    """Blocking segments of the optimal path."""

    @pytest.mark.parametrize("algo", [DijkstraSearch, AStarSearch])
    def test_two_structurally_different_routes(self, algo, two_routes):
        alts = generate_alternatives(two_routes, algo)
        assert len(alts) == 3
        assert alts[0].label == "Optimal"
        assert alts[0].total_cost == 10
        found = [a for a in alts if a.found]
        assert len(found) >= 2
        assert paths_are_distinct(found[0].path, found[1].path)
        for a in found:
            assert a.path[0] is two_routes.start
            assert a.path[-1] is two_routes.end

    def test_caller_lattice_untouched(self, two_routes):
        walls = [c.key for c in two_routes.cells_iter() if c.is_wall]
        generate_alternatives(two_routes, DijkstraSearch)
        assert [c.key for c in two_routes.cells_iter() if c.is_wall] == walls
        assert all(c.distance == inf for c in two_routes.cells_iter())
        assert two_routes.start.key == (2, 0) and two_routes.end.key == (2, 6)

    def test_short_path_is_not_diversified(self, make_lattice):
        alts = generate_alternatives(make_lattice(["SE", ".."]), DijkstraSearch)
        assert len(alts) == 1
        assert alts[0].label == "Optimal"

    def test_no_path_returns_empty(self, make_lattice):
        assert generate_alternatives(make_lattice(["S#E"]), DijkstraSearch) == []

    def test_corridor_is_padded(self, make_lattice):
        lat = make_lattice(["S...E"])
        alts = generate_alternatives(lat, DijkstraSearch)
        assert len(alts) == 3
        assert alts[0].found
        assert not alts[1].found and not alts[2].found
        assert "not found" in alts[1].label
        assert [c.key for c in alts[2].path] == [c.key for c in alts[0].path]

    def test_max_alternatives(self, two_routes):
        alts = generate_alternatives(two_routes, DijkstraSearch, max_alternatives=2)
        assert len(alts) == 2

    def test_strict_threshold_pads_everything(self, two_routes):
        alts = generate_alternatives(two_routes, DijkstraSearch, min_diff=100)
        assert len(alts) == 3
        assert alts[0].found
        assert [a.found for a in alts[1:]] == [False, False]
