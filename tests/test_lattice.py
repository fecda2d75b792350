"""Unit tests for Cell and Lattice."""

import gc
from math import inf

from gridpath.core.types import Cell, Lattice


class TestTopology:
    """Start, end, walls and weights."""

    def test_start_and_end_are_unique(self):
        lat = Lattice(3, 3)
        assert lat.set_start(0, 0)
        assert lat.set_start(1, 1)
        assert lat.start is lat.get_cell(1, 1)
        assert not lat.get_cell(0, 0).is_start
        assert sum(c.is_start for c in lat.cells_iter()) == 1

    def test_start_on_end_unsets_end(self):
        lat = Lattice(3, 3)
        lat.set_end(2, 2)
        lat.set_start(2, 2)
        assert lat.end is None
        assert lat.start.key == (2, 2)
        assert not lat.start.is_end

    def test_start_clears_wall(self):
        lat = Lattice(3, 3)
        lat.set_wall(1, 1, True)
        lat.set_start(1, 1)
        assert not lat.start.is_wall

    def test_out_of_bounds_edits_return_false(self):
        lat = Lattice(3, 3)
        assert lat.set_start(3, 0) is False
        assert lat.set_end(0, -1) is False
        assert lat.set_wall(5, 5, True) is False
        assert lat.set_weight(-1, 0, 3) is False
        assert lat.get_cell(3, 3) is None

    def test_walls_rejected_on_start_and_end(self, open_3x3):
        assert open_3x3.set_wall(0, 0, True) is False
        assert open_3x3.toggle_wall(2, 2) is False
        assert not open_3x3.start.is_wall

    def test_toggle_wall(self):
        lat = Lattice(2, 2)
        lat.toggle_wall(0, 1)
        assert lat.get_cell(0, 1).is_wall
        lat.toggle_wall(0, 1)
        assert not lat.get_cell(0, 1).is_wall

    def test_weight_must_be_positive_int(self):
        lat = Lattice(2, 2)
        assert lat.set_weight(0, 0, 4)
        assert lat.get_cell(0, 0).weight == 4
        assert lat.get_cell(0, 0).is_weighted
        assert lat.set_weight(0, 0, 0) is False
        assert lat.set_weight(0, 0, 2.5) is False
        assert lat.set_weight(0, 0, True) is False
        assert lat.get_cell(0, 0).weight == 4

    def test_clear_walls(self, two_routes):
        two_routes.clear_walls()
        assert not any(c.is_wall for c in two_routes.cells_iter())

    def test_status(self, open_3x3):
        assert open_3x3.start.status() == "start"
        assert open_3x3.end.status() == "end"
        mid = open_3x3.get_cell(1, 1)
        assert mid.status() == ""
        mid.is_visited = True
        assert mid.status() == "visited"
        mid.is_path = True
        assert mid.status() == "path"


class TestNeighbors:
    """4-directional adjacency."""

    def test_order_is_up_right_down_left(self):
        lat = Lattice(3, 3)
        keys = [n.key for n in lat.neighbors(lat.get_cell(1, 1))]
        assert keys == [(0, 1), (1, 2), (2, 1), (1, 0)]

    def test_corner_has_two_neighbors(self):
        lat = Lattice(3, 3)
        assert len(lat.neighbors(lat.get_cell(0, 0))) == 2

    def test_walls_excluded(self):
        lat = Lattice(3, 3)
        lat.set_wall(0, 1, True)
        keys = [n.key for n in lat.neighbors(lat.get_cell(1, 1))]
        assert (0, 1) not in keys
        assert len(keys) == 3


class TestResetAndClone:
    """Transient state, resets and clones."""

    def test_reset_transient_keeps_topology(self, make_lattice):
        lat = make_lattice(["S5", "#E"])
        for c in lat.cells_iter():
            c.distance = 3
            c.is_visited = True
            c.in_open_set = True
        lat.get_cell(0, 1).previous = lat.start
        lat.reset_transient_state()
        assert all(c.distance == inf and not c.is_visited and not c.in_open_set
                   for c in lat.cells_iter())
        assert lat.get_cell(0, 1).previous is None
        assert lat.get_cell(0, 1).weight == 5
        assert lat.get_cell(1, 0).is_wall
        assert lat.start.key == (0, 0) and lat.end.key == (1, 1)

    def test_reset_wipes_everything(self, make_lattice):
        lat = make_lattice(["S5", "#E"])
        lat.reset()
        assert lat.start is None and lat.end is None
        assert all(c.weight == 1 and not c.is_wall for c in lat.cells_iter())

    def test_resize_builds_fresh_cells(self, open_3x3):
        open_3x3.resize(4, 6)
        assert (open_3x3.rows, open_3x3.cols) == (4, 6)
        assert open_3x3.start is None and open_3x3.end is None
        assert all(c.distance == inf for c in open_3x3.cells_iter())
        assert open_3x3.get_cell(3, 5) is not None

    def test_clone_is_independent(self, make_lattice):
        lat = make_lattice(["S3.", "..#", "..E"])
        copy = lat.clone()
        assert copy.start is copy.get_cell(0, 0)
        assert copy.start is not lat.start
        assert copy.get_cell(0, 1).weight == 3
        assert copy.get_cell(1, 2).is_wall
        copy.set_wall(1, 1, True)
        assert not lat.get_cell(1, 1).is_wall

    def test_min_traversable_weight(self, make_lattice):
        assert make_lattice(["S3", "4E"]).min_traversable_weight() == 1
        lat = make_lattice(["S3", "4E"])
        lat.set_weight(0, 0, 2)
        lat.set_weight(1, 1, 2)
        assert lat.min_traversable_weight() == 2


class TestPreviousPointer:
    """`previous` never keeps a cell alive."""

    def test_previous_is_weak(self):
        a = Cell(0, 0)
        b = Cell(0, 1)
        a.previous = b
        assert a.previous is b
        del b
        gc.collect()
        assert a.previous is None
