"""Per-round aggregation of hole records."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Literal

from .allocation import net_from_gross, stableford_points, strokes_received_on_hole
from .models import HoleRecord, RoundAggregate
from .tees import NineTag, normalize_tee_name

logger = logging.getLogger(__name__)

ScoreMode = Literal["gross", "net"]

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def hole_net_strokes(record: HoleRecord) -> int | None:
    """Net strokes for a hole: upstream value, else derived by allocation."""

    if record.net_strokes is not None:
        return record.net_strokes
    if record.strokes is None:
        return None
    if record.strokes_received is not None:
        return net_from_gross(record.strokes, max(0, record.strokes_received))
    if record.course_handicap is not None:
        received = strokes_received_on_hole(record.course_handicap, record.stroke_index)
        return net_from_gross(record.strokes, received)
    return None


def hole_strokes(record: HoleRecord, mode: ScoreMode = "gross") -> int | None:
    return hole_net_strokes(record) if mode == "net" else record.strokes


def hole_to_par(record: HoleRecord, mode: ScoreMode = "gross") -> int | None:
    strokes = hole_strokes(record, mode)
    if strokes is None or record.par is None:
        return None
    return strokes - record.par


def _first(values: Iterable):
    return next((v for v in values if v), None)


def _sum_or_none(values: List[int]) -> int | None:
    return sum(values) if values else None


def scale_to_18(value: int | None, denom: int) -> float | None:
    if value is None or denom <= 0:
        return None
    return value * (18 / denom)


def _aggregate_round(round_id: str, holes: List[HoleRecord]) -> RoundAggregate:
    tee_name = _first(h.tee_name for h in holes)
    tee = normalize_tee_name(tee_name)

    canonical = {
        h.canonical_hole
        for h in holes
        if h.canonical_hole is not None and h.strokes is not None
    }
    unique_holes = len(canonical)
    max_hole = max(canonical) if canonical else 0
    is_9_hole = tee.nine is not NineTag.FULL or (max_hole <= 9 and unique_holes <= 9)

    gross = [h.strokes for h in holes if h.strokes is not None]
    net = [n for n in (hole_net_strokes(h) for h in holes) if n is not None]
    gross_to_par = [t for t in (hole_to_par(h, "gross") for h in holes) if t is not None]
    net_to_par = [t for t in (hole_to_par(h, "net") for h in holes) if t is not None]

    holes_scored = len(gross)
    denom = unique_holes if unique_holes > 0 else holes_scored

    birdies = eagles = albatrosses = holes_in_one = 0
    for hole in holes:
        if hole.strokes is None or hole.par is None:
            continue
        diff = hole.strokes - hole.par
        if hole.strokes == 1:
            holes_in_one += 1
        if diff == -1:
            birdies += 1
        elif diff == -2:
            eagles += 1
        elif diff <= -3:
            albatrosses += 1

    gross_total_to_par = _sum_or_none(gross_to_par)
    net_total_to_par = _sum_or_none(net_to_par)

    return RoundAggregate(
        round_id=round_id,
        played_at=_first(h.played_at for h in holes),
        course_id=_first(h.course_id for h in holes),
        course_name=_first(h.course_name for h in holes),
        tee_box_id=_first(h.tee_box_id for h in holes),
        tee_name=tee_name,
        tee_base=tee.base,
        holes_scored=holes_scored,
        unique_holes_scored=unique_holes,
        is_9_hole=is_9_hole,
        gross_total=_sum_or_none(gross),
        net_total=_sum_or_none(net),
        gross_to_par=gross_total_to_par,
        net_to_par=net_total_to_par,
        gross_to_par_18eq=scale_to_18(gross_total_to_par, denom),
        net_to_par_18eq=scale_to_18(net_total_to_par, denom),
        stableford=_sum_or_none([stableford_points(t) for t in net_to_par]),
        birdies=birdies,
        eagles=eagles,
        albatrosses=albatrosses,
        holes_in_one=holes_in_one,
    )


def aggregate_rounds(records: Iterable[HoleRecord]) -> List[RoundAggregate]:
    """Group hole records by round; most recent round first."""

    by_round: Dict[str, List[HoleRecord]] = defaultdict(list)
    dropped = 0
    for record in records:
        if not record.round_id:
            dropped += 1
            continue
        by_round[record.round_id].append(record)

    if dropped:
        logger.debug("skipped %d hole records without a round id", dropped)

    out = [_aggregate_round(round_id, holes) for round_id, holes in by_round.items()]
    out.sort(key=lambda r: r.played_at or _EPOCH, reverse=True)
    return out


def rounds_ascending(rounds: Iterable[RoundAggregate]) -> List[RoundAggregate]:
    return sorted(rounds, key=lambda r: r.played_at or _EPOCH)


def to_par_18eq(round_agg: RoundAggregate, mode: ScoreMode = "gross") -> float | None:
    return round_agg.net_to_par_18eq if mode == "net" else round_agg.gross_to_par_18eq


__all__ = [
    "ScoreMode",
    "aggregate_rounds",
    "hole_net_strokes",
    "hole_strokes",
    "hole_to_par",
    "rounds_ascending",
    "scale_to_18",
    "to_par_18eq",
]
