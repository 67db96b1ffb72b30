import itertools

import pytest

from atlas_packer.utils.packers.free_rects import FreeRectTracker, Rectangle
from atlas_packer.utils.packers.heuristics import Heuristic

from conftest import rects_overlap


def test_new_tracker_has_one_region_covering_everything():
    tracker = FreeRectTracker(128, 64)
    assert list(tracker.regions()) == [(0, Rectangle(0, 0, 128, 64))]
    assert tracker.max_free_size() == (128, 64)


def test_vertical_cut_when_width_leftover_is_larger():
    tracker = FreeRectTracker(100, 100)
    assert tracker.place(0, 30, 60) == (0, 0)
    assert tracker.free_rectangles == [
        Rectangle(30, 0, 70, 100),
        Rectangle(0, 60, 30, 40),
    ]


def test_horizontal_cut_when_height_leftover_is_larger():
    tracker = FreeRectTracker(100, 100)
    tracker.place(0, 60, 30)
    assert tracker.free_rectangles == [
        Rectangle(60, 0, 40, 30),
        Rectangle(0, 30, 100, 70),
    ]


def test_exact_fit_leaves_no_free_space():
    tracker = FreeRectTracker(40, 20)
    tracker.place(0, 40, 20)
    assert tracker.free_rectangles == []
    assert tracker.max_free_size() == (0, 0)


def test_zero_sized_strips_are_dropped():
    tracker = FreeRectTracker(40, 20)
    tracker.place(0, 10, 20)
    assert tracker.free_rectangles == [Rectangle(10, 0, 30, 20)]


def test_consumed_region_index_is_not_reused():
    tracker = FreeRectTracker(100, 100)
    tracker.place(0, 60, 30)
    indices = [index for index, _ in tracker.regions()]
    assert indices == [1, 2]
    with pytest.raises(KeyError):
        tracker.region(0)
    # Placing into region 2 keeps region 1 at its index
    tracker.place(2, 10, 10)
    assert tracker.region(1) == Rectangle(60, 0, 40, 30)


def test_place_rejects_rectangles_larger_than_the_region():
    tracker = FreeRectTracker(50, 50)
    with pytest.raises(ValueError):
        tracker.place(0, 51, 10)


def test_prune_removes_contained_regions():
    tracker = FreeRectTracker(100, 100)
    # Split the still live root region, both halves are contained by it
    tracker.split_after_placement(Rectangle(0, 0, 100, 100), Rectangle(0, 0, 10, 10))
    assert len(tracker.free_rectangles) == 3
    tracker.prune()
    assert tracker.free_rectangles == [Rectangle(0, 0, 100, 100)]


def test_prune_keeps_one_of_two_identical_regions():
    tracker = FreeRectTracker(100, 100)
    tracker.split_after_placement(Rectangle(0, 0, 100, 100), Rectangle(0, 0, 100, 0))
    tracker.prune()
    assert tracker.free_rectangles == [Rectangle(0, 0, 100, 100)]


@pytest.mark.parametrize("heuristic", list(Heuristic))
def test_free_and_used_space_tile_the_area(heuristic):
    tracker = FreeRectTracker(200, 150)
    sizes = [(70, 40), (30, 90), (50, 50), (120, 20), (20, 20), (45, 15), (10, 60)]
    for width, height in sizes:
        index = heuristic.find_position(tracker.regions(), width, height)
        if index is not None:
            tracker.place(index, width, height)

    assert len(tracker.used_rectangles) >= 4

    free = tracker.free_rectangles
    used = tracker.used_rectangles
    assert sum(r.area for r in free) + sum(r.area for r in used) == 200 * 150
    for a, b in itertools.combinations(free + used, 2):
        assert not rects_overlap(a, b)
    for rect in free + used:
        assert Rectangle(0, 0, 200, 150).contains(rect)
