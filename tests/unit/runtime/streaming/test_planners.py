"""Unit tests for WindowPlanner."""

from vitrine.fetch.runtime.streaming import StreamPolicy, StreamWindow, WindowPlanner


class TestWindowPlanner:
    """Test window partitioning."""

    def test_even_split(self):
        planner = WindowPlanner(StreamPolicy(concurrency=2))
        windows = planner.plan([1, 2, 3, 4])

        assert [w.ids for w in windows] == [(1, 2), (3, 4)]
        assert [w.index for w in windows] == [0, 1]

    def test_last_window_shorter(self):
        planner = WindowPlanner(StreamPolicy(concurrency=3))
        windows = planner.plan(range(1, 8))

        assert [len(w) for w in windows] == [3, 3, 1]
        assert windows[-1].ids == (7,)

    def test_offsets(self):
        planner = WindowPlanner(StreamPolicy(concurrency=3))
        windows = planner.plan(range(10, 17))

        assert [w.offset for w in windows] == [0, 3, 6]

    def test_empty_ids(self):
        assert WindowPlanner(StreamPolicy(concurrency=4)).plan([]) == []

    def test_concurrency_larger_than_ids(self):
        windows = WindowPlanner(StreamPolicy(concurrency=10)).plan([5, 6])

        assert windows == [StreamWindow(index=0, ids=(5, 6), offset=0)]

    def test_concurrency_below_one_is_clamped(self):
        for concurrency in (0, -3):
            planner = WindowPlanner(StreamPolicy(concurrency=concurrency))
            assert planner.window_size == 1
            assert [w.ids for w in planner.plan([1, 2])] == [(1,), (2,)]

    def test_duplicates_preserved(self):
        windows = WindowPlanner(StreamPolicy(concurrency=2)).plan([1, 1, 2])

        assert [w.ids for w in windows] == [(1, 1), (2,)]

    def test_default_policy(self):
        assert WindowPlanner().window_size == StreamPolicy().concurrency
