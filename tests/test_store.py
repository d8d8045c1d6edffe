import numpy as np
import pytest

from regression_playground.exceptions import IndexOutOfRange
from regression_playground.models import PlotSettings, Point
from regression_playground.store import PointStore, snap


def make_store(*pairs):
    return PointStore(Point(float(x), float(y)) for x, y in pairs)


def test_add_clamps_each_coordinate_into_domain():
    store = PointStore()
    stored = store.add(Point(-2.0, 20.0))
    assert stored == Point(0.0, 15.0)
    assert store.snapshot() == (Point(0.0, 15.0),)


def test_add_does_not_round():
    store = PointStore()
    store.add(Point(3.33, 4.44))
    assert store[0] == Point(3.33, 4.44)


def test_add_at_position_snaps_then_clamps():
    store = PointStore()
    assert store.add_at_position(7.26, 15.8) == Point(7.5, 15.0)
    assert store.add_at_position(2.25, 0.74) == Point(2.5, 0.5)
    assert store.add_at_position(-0.2, 3.0) == Point(0.0, 3.0)


def test_snap_rounds_halves_up():
    assert snap(1.25, 0.5) == 1.5
    assert snap(1.24, 0.5) == 1.0
    assert snap(3.0, 1.0) == 3.0


def test_update_clamps_without_rounding():
    store = make_store((2, 3), (4, 5))
    assert store.update(0, 20, -3) == Point(15.0, 0.0)
    assert store.update(1, 3.33, 4.44) == Point(3.33, 4.44)
    assert store.snapshot() == (Point(15.0, 0.0), Point(3.33, 4.44))


@pytest.mark.parametrize("index", [2, 5, -1])
def test_update_out_of_range_leaves_store_unchanged(index):
    store = make_store((2, 3), (4, 5))
    before = store.snapshot()
    with pytest.raises(IndexOutOfRange):
        store.update(index, 1.0, 1.0)
    assert store.snapshot() == before


@pytest.mark.parametrize("index", [3, -1])
def test_remove_out_of_range_leaves_store_unchanged(index):
    store = make_store((1, 1), (2, 2), (3, 3))
    before = store.snapshot()
    with pytest.raises(IndexOutOfRange) as exc_info:
        store.remove(index)
    assert store.snapshot() == before
    assert exc_info.value.index == index
    assert exc_info.value.length == 3


def test_index_out_of_range_is_an_index_error():
    with pytest.raises(IndexError):
        PointStore().remove(0)


def test_remove_preserves_relative_order():
    store = make_store((1, 1), (2, 2), (3, 3), (4, 4))
    removed = store.remove(1)
    assert removed == Point(2.0, 2.0)
    assert [p.x for p in store.snapshot()] == [1.0, 3.0, 4.0]


def test_replace_all_installs_points_verbatim():
    store = make_store((1, 1))
    store.replace_all([Point(20.0, -1.0), Point(2.2, 3.3)])
    assert store.snapshot() == (Point(20.0, -1.0), Point(2.2, 3.3))


def test_clear_empties_store():
    store = make_store((1, 1), (2, 2))
    store.clear()
    assert len(store) == 0
    assert store.snapshot() == ()


def test_snapshot_is_not_affected_by_later_mutations():
    store = make_store((1, 1), (2, 2))
    snap_before = store.snapshot()
    store.add(Point(3.0, 3.0))
    store.update(0, 9.0, 9.0)
    assert snap_before == (Point(1.0, 1.0), Point(2.0, 2.0))
    assert isinstance(snap_before, tuple)


def test_add_random_stays_on_grid_within_random_range():
    store = PointStore()
    rng = np.random.default_rng(42)
    for _ in range(200):
        store.add_random(rng)
    xs = np.array([p.x for p in store])
    ys = np.array([p.y for p in store])
    assert xs.min() >= 1.0 and xs.max() <= 13.0
    assert ys.min() >= 1.0 and ys.max() <= 13.0
    # every coordinate is a multiple of the 0.5 step
    assert np.all(np.mod(xs * 2, 1) == 0)
    assert np.all(np.mod(ys * 2, 1) == 0)


def test_custom_settings_change_domain_and_step():
    store = PointStore(settings=PlotSettings(domain_max=10.0, step=1.0,
                                             random_low=0.0, random_high=10.0))
    assert store.add_at_position(3.4, 12.0) == Point(3.0, 10.0)
    assert store.update(0, 11.0, 4.4) == Point(10.0, 4.4)


def test_reconfigure_clamps_points_into_smaller_domain():
    store = make_store((1, 2), (3, 4), (7, 8), (9, 10))
    moved = store.reconfigure(PlotSettings(domain_max=5.0, random_high=5.0))
    assert moved == 2
    assert store.snapshot() == (
        Point(1.0, 2.0), Point(3.0, 4.0), Point(5.0, 5.0), Point(5.0, 5.0),
    )
    store.add_at_position(1, 1)
    assert all(0 <= p.x <= 5 and 0 <= p.y <= 5 for p in store)


def test_reconfigure_to_larger_domain_keeps_points():
    store = make_store((1, 2), (14, 15))
    assert store.reconfigure(PlotSettings(domain_max=30.0)) == 0
    assert store.snapshot() == (Point(1.0, 2.0), Point(14.0, 15.0))
    assert store.add(Point(25.0, 40.0)) == Point(25.0, 30.0)
