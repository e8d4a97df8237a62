"""Stroke allocation by stroke index and net scoring helpers."""

from __future__ import annotations

import math
from typing import Dict, Iterable, Mapping, Tuple

HOLES_PER_ROUND = 18

DEFAULT_STABLEFORD: Dict[str, int] = {
    "albatross": 5,
    "eagle": 4,
    "birdie": 3,
    "par": 2,
    "bogey": 1,
    "double_bogey": 0,
    "worse": 0,
}


def playing_handicap(course_handicap: float | None) -> int:
    """Floor a course handicap to the non-negative integer used for allocation."""

    if course_handicap is None or isinstance(course_handicap, bool):
        return 0
    try:
        value = float(course_handicap)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(value):
        return 0
    return max(0, math.floor(value))


def strokes_received_on_hole(
    course_handicap: float | None, stroke_index: int | None
) -> int:
    ch = playing_handicap(course_handicap)
    if ch <= 0 or stroke_index is None or stroke_index <= 0:
        return 0

    base, remainder = divmod(ch, HOLES_PER_ROUND)
    return base + (1 if stroke_index <= remainder else 0)


def net_from_gross(gross: int, received: int) -> int:
    """Net strokes on a hole; never below one."""

    return max(1, gross - received)


def allocate_strokes(
    course_handicap: float | None, holes: Iterable[Tuple[int, int | None]]
) -> Dict[int, int]:
    """Strokes received per hole for ``(hole_number, stroke_index)`` pairs."""

    return {
        hole_number: strokes_received_on_hole(course_handicap, stroke_index)
        for hole_number, stroke_index in holes
    }


def stableford_points(
    net_to_par: int, points_table: Mapping[str, int] | None = None
) -> int:
    table = {**DEFAULT_STABLEFORD, **(points_table or {})}
    if net_to_par <= -3:
        return table["albatross"]
    if net_to_par == -2:
        return table["eagle"]
    if net_to_par == -1:
        return table["birdie"]
    if net_to_par == 0:
        return table["par"]
    if net_to_par == 1:
        return table["bogey"]
    if net_to_par == 2:
        return table["double_bogey"]
    return table["worse"]


__all__ = [
    "DEFAULT_STABLEFORD",
    "HOLES_PER_ROUND",
    "allocate_strokes",
    "net_from_gross",
    "playing_handicap",
    "stableford_points",
    "strokes_received_on_hole",
]
