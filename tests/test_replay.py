"""Tests for step/back-step replay and session coordination."""

import pytest

from gridpath.core import AStarSearch, CoordinationContext, DijkstraSearch, Replay


@pytest.fixture
def replay(open_3x3):
    result = DijkstraSearch(open_3x3).run()
    return Replay(open_3x3, result, "dijkstra")


def marked(lattice, flag):
    return {c.key for c in lattice.cells_iter() if getattr(c, flag)}


class TestReplay:
    def test_starts_before_first_step(self, replay):
        assert replay.current_step == -1
        assert replay.max_step == len(replay.result.visited) - 1
        assert replay.visited_count == 0
        assert replay.current is None

    def test_next_step_marks_prefix(self, replay, open_3x3):
        replay.next_step()
        replay.next_step()
        visited = replay.result.visited
        assert marked(open_3x3, "is_visited") == {visited[0].key, visited[1].key}
        assert marked(open_3x3, "is_current") == {visited[1].key}
        assert marked(open_3x3, "is_path") == set()
        assert replay.visited_count == 2

    def test_path_only_on_last_step(self, replay, open_3x3):
        replay.finish()
        assert replay.at_end
        assert replay.path_shown
        assert replay.path_length == 3
        assert len(marked(open_3x3, "is_path")) == 3
        assert replay.next_step() is False

    def test_step_back_hides_path(self, replay, open_3x3):
        replay.finish()
        replay.prev_step()
        assert not replay.path_shown
        assert replay.path_length == 0
        assert marked(open_3x3, "is_path") == set()
        assert len(marked(open_3x3, "is_visited")) == replay.max_step

    def test_cannot_step_back_past_first(self, replay):
        replay.next_step()
        assert not replay.can_step_back
        assert replay.prev_step() is False
        assert replay.current_step == 0

    def test_seek_is_clamped(self, replay):
        replay.seek(1000)
        assert replay.current_step == replay.max_step
        replay.seek(-50)
        assert replay.current_step == -1

    def test_replay_matches_search_state(self, make_random_lattice):
        lat = make_random_lattice(7, rows=6, cols=6, wall_p=0.0)
        result = AStarSearch(lat).run()
        r = Replay(lat, result)
        r.seek(4)
        assert marked(lat, "is_visited") == {c.key for c in result.visited[:5]}
        r.rewind()
        assert marked(lat, "is_visited") == set()

    def test_replay_keeps_search_fields(self, replay, open_3x3):
        replay.seek(3)
        assert open_3x3.end.distance == 4
        assert open_3x3.end.previous is not None


class TestCoordinationContext:
    def make_pair(self, lattice):
        ctx = CoordinationContext()
        left = lattice.clone()
        right = lattice.clone()
        a = Replay(left, DijkstraSearch(left).run(), "dijkstra", ctx)
        b = Replay(right, AStarSearch(right).run(), "astar", ctx)
        return ctx, a, b

    def test_other_finished(self, open_3x3):
        ctx, a, b = self.make_pair(open_3x3)
        a.finish()
        assert ctx.is_finished("dijkstra")
        assert ctx.other_finished("astar")
        assert not ctx.other_finished("dijkstra")
        assert not ctx.all_finished

    def test_callback_fires_once_and_rearms(self, open_3x3):
        ctx, a, b = self.make_pair(open_3x3)
        calls = []
        ctx.on_both_finished(lambda: calls.append(1))

        a.finish()
        assert calls == []
        b.finish()
        assert calls == [1]
        b.finish()
        assert calls == [1]

        b.prev_step()
        assert not ctx.all_finished
        b.next_step()
        assert calls == [1, 1]

    def test_unknown_session_is_ignored(self):
        ctx = CoordinationContext()
        ctx.mark_finished("ghost")
        assert not ctx.is_finished("ghost")
        assert not ctx.all_finished
