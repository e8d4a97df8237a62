from __future__ import annotations

import pytest

from handicap_analytics.scoring.allocation import (
    DEFAULT_STABLEFORD,
    allocate_strokes,
    net_from_gross,
    playing_handicap,
    stableford_points,
    strokes_received_on_hole,
)


@pytest.mark.parametrize(
    "stroke_index, expected",
    [(1, 2), (2, 2), (3, 1), (5, 1), (18, 1)],
)
def test_course_handicap_20(stroke_index: int, expected: int) -> None:
    assert strokes_received_on_hole(20, stroke_index) == expected


@pytest.mark.parametrize("course_handicap", [0, 1, 5, 17, 18, 20, 36, 40, 54])
def test_allocation_sums_to_course_handicap(course_handicap: int) -> None:
    allocation = allocate_strokes(course_handicap, [(hole, hole) for hole in range(1, 19)])
    assert sum(allocation.values()) == course_handicap


def test_fractional_handicap_is_floored() -> None:
    assert playing_handicap(20.7) == 20
    allocation = allocate_strokes(20.7, [(hole, hole) for hole in range(1, 19)])
    assert sum(allocation.values()) == 20


@pytest.mark.parametrize("course_handicap", [None, 0, -3, float("nan"), "abc", True])
def test_no_strokes_without_positive_handicap(course_handicap) -> None:
    assert strokes_received_on_hole(course_handicap, 1) == 0


@pytest.mark.parametrize("stroke_index", [None, 0, -1])
def test_no_strokes_without_stroke_index(stroke_index) -> None:
    assert strokes_received_on_hole(18, stroke_index) == 0


def test_allocation_keys_are_hole_numbers() -> None:
    allocation = allocate_strokes(2, [(10, 1), (11, 7), (12, 2)])
    assert allocation == {10: 1, 11: 0, 12: 1}


@pytest.mark.parametrize(
    "gross, received, expected",
    [(5, 1, 4), (4, 0, 4), (3, 2, 1), (2, 4, 1), (1, 3, 1)],
)
def test_net_never_below_one(gross: int, received: int, expected: int) -> None:
    assert net_from_gross(gross, received) == expected


@pytest.mark.parametrize(
    "net_to_par, points",
    [(-4, 5), (-3, 5), (-2, 4), (-1, 3), (0, 2), (1, 1), (2, 0), (5, 0)],
)
def test_stableford_default_table(net_to_par: int, points: int) -> None:
    assert stableford_points(net_to_par) == points


def test_stableford_custom_table() -> None:
    assert stableford_points(0, {"par": 3}) == 3
    assert stableford_points(1) == DEFAULT_STABLEFORD["bogey"]
