"""Tests for LanePool allocation and release."""

import pytest

from commitlanes.graph.errors import InvalidLaneRelease
from commitlanes.graph.lane_pool import LanePool


class TestAllocate:
    def test_fresh_pool_counts_up(self):
        pool = LanePool()
        assert [pool.allocate() for _ in range(3)] == [0, 1, 2]
        assert pool.active_count() == 3
        assert pool.high_water_mark == 3

    def test_reuses_smallest_released_position_first(self):
        pool = LanePool()
        for _ in range(4):
            pool.allocate()
        pool.release(2)
        pool.release(0)

        assert pool.free_positions == (0, 2)
        assert pool.allocate() == 0
        assert pool.allocate() == 2
        assert pool.allocate() == 4
        assert pool.high_water_mark == 5

    def test_active_positions_snapshot(self):
        pool = LanePool()
        pool.allocate()
        snapshot = pool.active_positions
        pool.allocate()
        assert snapshot == frozenset({0})
        assert pool.active_positions == frozenset({0, 1})


class TestRelease:
    def test_release_moves_position_to_free_list(self):
        pool = LanePool()
        lane = pool.allocate()
        pool.release(lane)
        assert not pool.is_active(lane)
        assert pool.free_positions == (lane,)
        assert pool.active_count() == 0

    def test_release_never_allocated(self):
        pool = LanePool()
        with pytest.raises(InvalidLaneRelease) as exc_info:
            pool.release(3)
        assert exc_info.value.position == 3

    def test_double_release(self):
        pool = LanePool()
        lane = pool.allocate()
        pool.release(lane)
        with pytest.raises(InvalidLaneRelease):
            pool.release(lane)
