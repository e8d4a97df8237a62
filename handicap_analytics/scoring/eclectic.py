"""Eclectic (best-ever per hole) scorecards and course records."""

from __future__ import annotations

from collections import Counter, defaultdict
from datetime import datetime
from typing import Dict, Iterable, List, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .models import HoleRecord, RoundAggregate


class HoleBest(BaseModel):
    strokes: int
    played_at: Optional[datetime] = Field(default=None, serialization_alias="playedAt")
    par: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True)


class EclecticSummary(BaseModel):
    total: Optional[int] = None
    have: int
    holes: int
    missing: List[int] = Field(default_factory=list)
    complete: bool


class EclecticCard(BaseModel):
    course_id: str = Field(serialization_alias="courseId")
    tee_box_id: str = Field(serialization_alias="teeBoxId")
    holes: List[int] = Field(default_factory=list)
    best_by_hole: Dict[int, HoleBest] = Field(
        default_factory=dict, serialization_alias="bestByHole"
    )
    summary: EclecticSummary

    model_config = ConfigDict(populate_by_name=True)


class ScoreOnDate(BaseModel):
    score: int
    played_at: Optional[datetime] = Field(default=None, serialization_alias="playedAt")

    model_config = ConfigDict(populate_by_name=True)


class CourseRecord(BaseModel):
    course_id: str = Field(serialization_alias="courseId")
    tee_box_id: str = Field(serialization_alias="teeBoxId")
    course_name: str = Field(serialization_alias="courseName")
    tee_name: str = Field(serialization_alias="teeName")
    par_total: Optional[int] = Field(default=None, serialization_alias="parTotal")
    rounds: int
    best_gross: Optional[ScoreOnDate] = Field(default=None, serialization_alias="bestGross")
    best_net: Optional[ScoreOnDate] = Field(default=None, serialization_alias="bestNet")

    model_config = ConfigDict(populate_by_name=True)


def _expected_holes(present: Sequence[int]) -> List[int]:
    if present and max(present) > 9:
        return list(range(1, 19))
    return list(range(1, 10))


def eclectic_scorecard(
    records: Iterable[HoleRecord],
    course_id: str,
    tee_box_id: str,
    *,
    profile_id: str | None = None,
    expected_holes: Sequence[int] | None = None,
) -> EclecticCard:
    """Best strokes ever recorded on each canonical hole of a course/tee.

    Ties keep the first record seen. ``total`` is only reported when every
    expected hole has a score.
    """

    best: Dict[int, HoleBest] = {}
    par_by_hole: Dict[int, int] = {}

    for record in records:
        if record.course_id != course_id or record.tee_box_id != tee_box_id:
            continue
        if profile_id is not None and record.profile_id != profile_id:
            continue
        hole = record.canonical_hole
        if hole is None or record.strokes is None:
            continue

        if hole not in par_by_hole and record.par is not None:
            par_by_hole[hole] = record.par

        current = best.get(hole)
        if current is None or record.strokes < current.strokes:
            best[hole] = HoleBest(strokes=record.strokes, played_at=record.played_at)

    for hole, entry in best.items():
        if hole in par_by_hole:
            best[hole] = entry.model_copy(update={"par": par_by_hole[hole]})

    present = sorted(best)
    expected = sorted(set(expected_holes)) if expected_holes else _expected_holes(present)
    missing = [hole for hole in expected if hole not in best]
    have = sum(1 for hole in expected if hole in best)

    summary = EclecticSummary(
        total=sum(best[h].strokes for h in expected) if not missing else None,
        have=have,
        holes=len(expected),
        missing=missing,
        complete=not missing,
    )
    return EclecticCard(
        course_id=course_id,
        tee_box_id=tee_box_id,
        holes=present,
        best_by_hole=best,
        summary=summary,
    )


def is_complete_round(round_agg: RoundAggregate, expected: int | None = None) -> bool:
    if expected is None:
        expected = 9 if round_agg.is_9_hole else 18
    return round_agg.unique_holes_scored >= expected


def _par_total(round_agg: RoundAggregate) -> int | None:
    if round_agg.gross_total is None or round_agg.gross_to_par is None:
        return None
    return round_agg.gross_total - round_agg.gross_to_par


def _better(current: ScoreOnDate | None, score: int, round_agg: RoundAggregate):
    if current is None or score < current.score:
        return ScoreOnDate(score=score, played_at=round_agg.played_at)
    return current


def course_records(rounds: Iterable[RoundAggregate]) -> List[CourseRecord]:
    """Best gross (complete rounds only) and best net per course and tee box."""

    groups: Dict[Tuple[str, str], List[RoundAggregate]] = defaultdict(list)
    for round_agg in rounds:
        if not round_agg.course_id or not round_agg.tee_box_id:
            continue
        groups[(round_agg.course_id, round_agg.tee_box_id)].append(round_agg)

    out: List[CourseRecord] = []
    for (course_id, tee_box_id), items in groups.items():
        best_gross: ScoreOnDate | None = None
        best_net: ScoreOnDate | None = None
        # A tee box with any 18-hole round is an 18-hole layout.
        expected = 9 if all(r.is_9_hole for r in items) else 18
        complete = [r for r in items if is_complete_round(r, expected)]
        for round_agg in complete:
            if round_agg.gross_total is not None:
                best_gross = _better(best_gross, round_agg.gross_total, round_agg)
        for round_agg in items:
            if round_agg.net_total is not None:
                best_net = _better(best_net, round_agg.net_total, round_agg)

        # Most common par total wins; Counter keeps first-seen order on ties.
        pars = Counter(
            p for p in (_par_total(r) for r in complete or items) if p is not None
        )
        par_total = pars.most_common(1)[0][0] if pars else None

        sample = items[0]
        out.append(
            CourseRecord(
                course_id=course_id,
                tee_box_id=tee_box_id,
                course_name=sample.course_name or course_id[:8],
                tee_name=sample.tee_name or tee_box_id[:8],
                par_total=par_total,
                rounds=len(items),
                best_gross=best_gross,
                best_net=best_net,
            )
        )
    return out


def sort_course_records(
    records: Iterable[CourseRecord],
    *,
    metric: Literal["gross", "net"] = "gross",
    descending: bool = False,
) -> List[CourseRecord]:
    """Order by best score to par; records without a score go last."""

    def best(record: CourseRecord) -> ScoreOnDate | None:
        return record.best_gross if metric == "gross" else record.best_net

    def to_par(record: CourseRecord) -> int | None:
        entry = best(record)
        if entry is None:
            return None
        if record.par_total is None:
            return entry.score
        return entry.score - record.par_total

    sign = -1 if descending else 1

    scored = list(records)
    with_value = [r for r in scored if to_par(r) is not None]
    without_value = [r for r in scored if to_par(r) is None]

    with_value.sort(
        key=lambda r: (
            sign * to_par(r),
            sign * best(r).score,
            r.course_name,
            r.tee_name,
        )
    )
    without_value.sort(key=lambda r: (r.course_name, r.tee_name))
    return with_value + without_value


__all__ = [
    "CourseRecord",
    "EclecticCard",
    "EclecticSummary",
    "HoleBest",
    "ScoreOnDate",
    "course_records",
    "eclectic_scorecard",
    "is_complete_round",
    "sort_course_records",
]
