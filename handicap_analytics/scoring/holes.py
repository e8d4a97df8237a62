"""Hole-level scoring statistics and the worst-hole ranking."""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Literal, Optional, Tuple

from ..config import get_settings
from .models import HoleRecord
from .rounds import ScoreMode, hole_strokes, hole_to_par

BlowupMode = Literal["double", "triple"]

SI_BUCKETS = ("01–03", "04–06", "07–09", "10–12", "13–15", "16–18", "Unknown")

LENGTH_BUCKETS: Dict[int, Tuple[Tuple[float, str], ...]] = {
    3: ((140, "<140"), (170, "140–169"), (200, "170–199"), (math.inf, "200+")),
    4: (
        (330, "<330"),
        (380, "330–379"),
        (430, "380–429"),
        (480, "430–479"),
        (math.inf, "480+"),
    ),
    5: (
        (460, "<460"),
        (490, "460–489"),
        (520, "490–519"),
        (550, "520–549"),
        (math.inf, "550+"),
    ),
}

LENGTH_ORDER = tuple(
    f"P{par} · {label}" for par, buckets in LENGTH_BUCKETS.items() for _, label in buckets
)

PrevContext = Literal[
    "after_birdie_or_better", "after_par", "after_bogeyplus", "after_doubleplus", "unknown"
]
PREV_CONTEXTS: Tuple[PrevContext, ...] = (
    "after_birdie_or_better",
    "after_par",
    "after_bogeyplus",
    "after_doubleplus",
    "unknown",
)


@dataclass
class HoleDetail:
    attempts: int
    avg_strokes: float
    avg_to_par: float
    blowup_rate: float
    birdie_or_better_rate: float
    par_rate: float
    bogey_rate: float


@dataclass
class BucketDetail:
    bucket: str
    detail: HoleDetail


@dataclass
class HoleScoringSummary:
    holes: int
    avg_to_par: float
    avg_strokes: float
    blowup_rate: float


@dataclass
class ContextRate:
    context: PrevContext
    attempts: int
    rate: float


@dataclass
class WorstHole:
    key: str
    course_id: Optional[str]
    course_name: str
    tee: str
    hole: int
    par: int
    yardage: Optional[float]
    stroke_index: Optional[int]
    attempts: int
    avg_to_par: float
    blowup_rate: float
    severity: float


@dataclass
class DistributionBin:
    label: str
    count: int


@dataclass
class ScoringDistribution:
    holes: int
    rounds: int
    birdie_plus: int
    par: int
    par_plus: int
    birdie_plus_rate: float
    par_rate: float
    par_plus_rate: float
    round_bins: List[DistributionBin]


def si_bucket(stroke_index: int | None) -> str:
    if not stroke_index or stroke_index <= 0:
        return "Unknown"
    if stroke_index <= 3:
        return "01–03"
    if stroke_index <= 6:
        return "04–06"
    if stroke_index <= 9:
        return "07–09"
    if stroke_index <= 12:
        return "10–12"
    if stroke_index <= 15:
        return "13–15"
    return "16–18"


def length_bucket(par: int | None, yardage: float | None) -> str | None:
    """Yardage bucket for par 3/4/5 holes; ``None`` for anything else."""

    if par is None or yardage is None:
        return None
    buckets = LENGTH_BUCKETS.get(par)
    if buckets is None:
        return None
    for upper, label in buckets:
        if yardage < upper:
            return label
    return None


def is_blowup(to_par: int | None, mode: BlowupMode = "double") -> bool:
    if to_par is None:
        return False
    return to_par >= (2 if mode == "double" else 3)


def _scored(
    records: Iterable[HoleRecord], mode: ScoreMode
) -> List[Tuple[HoleRecord, int, int]]:
    out = []
    for record in records:
        strokes = hole_strokes(record, mode)
        to_par = hole_to_par(record, mode)
        if strokes is None or to_par is None:
            continue
        out.append((record, strokes, to_par))
    return out


def _detail(rows: List[Tuple[HoleRecord, int, int]], blowup: BlowupMode) -> HoleDetail:
    attempts = len(rows)
    to_pars = [tp for _, _, tp in rows]
    return HoleDetail(
        attempts=attempts,
        avg_strokes=sum(st for _, st, _ in rows) / attempts,
        avg_to_par=sum(to_pars) / attempts,
        blowup_rate=sum(1 for tp in to_pars if is_blowup(tp, blowup)) / attempts,
        birdie_or_better_rate=sum(1 for tp in to_pars if tp <= -1) / attempts,
        par_rate=sum(1 for tp in to_pars if tp == 0) / attempts,
        bogey_rate=sum(1 for tp in to_pars if tp == 1) / attempts,
    )


def hole_scoring_summary(
    records: Iterable[HoleRecord],
    *,
    mode: ScoreMode = "gross",
    blowup: BlowupMode = "double",
) -> HoleScoringSummary | None:
    rows = _scored(records, mode)
    if not rows:
        return None
    detail = _detail(rows, blowup)
    return HoleScoringSummary(
        holes=detail.attempts,
        avg_to_par=detail.avg_to_par,
        avg_strokes=detail.avg_strokes,
        blowup_rate=detail.blowup_rate,
    )


def _bucketed(
    rows: List[Tuple[HoleRecord, int, int]],
    key_of,
    order: Iterable[str],
    blowup: BlowupMode,
) -> List[BucketDetail]:
    groups: Dict[str, List[Tuple[HoleRecord, int, int]]] = defaultdict(list)
    for row in rows:
        key = key_of(row[0])
        if key is not None:
            groups[key].append(row)

    rank = {label: i for i, label in enumerate(order)}
    ordered = sorted(groups, key=lambda k: (rank.get(k, len(rank)), k))
    return [BucketDetail(bucket=k, detail=_detail(groups[k], blowup)) for k in ordered]


def by_par(
    records: Iterable[HoleRecord],
    *,
    mode: ScoreMode = "gross",
    blowup: BlowupMode = "double",
) -> List[BucketDetail]:
    rows = _scored(records, mode)
    pars = sorted({r.par for r, _, _ in rows})
    return _bucketed(rows, lambda r: str(r.par), [str(p) for p in pars], blowup)


def by_length(
    records: Iterable[HoleRecord],
    *,
    mode: ScoreMode = "gross",
    blowup: BlowupMode = "double",
) -> List[BucketDetail]:
    def key_of(record: HoleRecord) -> str | None:
        label = length_bucket(record.par, record.yardage)
        return f"P{record.par} · {label}" if label else None

    return _bucketed(_scored(records, mode), key_of, LENGTH_ORDER, blowup)


def by_stroke_index(
    records: Iterable[HoleRecord],
    *,
    mode: ScoreMode = "gross",
    blowup: BlowupMode = "double",
) -> List[BucketDetail]:
    return _bucketed(
        _scored(records, mode),
        lambda r: si_bucket(r.stroke_index),
        SI_BUCKETS,
        blowup,
    )


def _previous_context(to_par: int | None, blowup: BlowupMode) -> PrevContext:
    if to_par is None:
        return "unknown"
    if to_par <= -1:
        return "after_birdie_or_better"
    if to_par == 0:
        return "after_par"
    if is_blowup(to_par, blowup):
        return "after_doubleplus"
    return "after_bogeyplus"


def blowup_after_previous(
    records: Iterable[HoleRecord],
    *,
    mode: ScoreMode = "gross",
    blowup: BlowupMode = "double",
) -> List[ContextRate]:
    """Blow-up rate on a hole given how the previous hole of the round went."""

    by_round: Dict[str, List[HoleRecord]] = defaultdict(list)
    for record in records:
        if record.round_id:
            by_round[record.round_id].append(record)

    attempts = {ctx: 0 for ctx in PREV_CONTEXTS}
    blowups = {ctx: 0 for ctx in PREV_CONTEXTS}

    for holes in by_round.values():
        ordered = sorted(holes, key=lambda h: h.canonical_hole or 0)
        for prev, cur in zip(ordered, ordered[1:]):
            ctx = _previous_context(hole_to_par(prev, mode), blowup)
            attempts[ctx] += 1
            if is_blowup(hole_to_par(cur, mode), blowup):
                blowups[ctx] += 1

    return [
        ContextRate(
            context=ctx,
            attempts=attempts[ctx],
            rate=blowups[ctx] / attempts[ctx] if attempts[ctx] else 0.0,
        )
        for ctx in PREV_CONTEXTS
    ]


def rank_worst_holes(
    records: Iterable[HoleRecord],
    *,
    top_n: int | None = None,
    mode: ScoreMode = "gross",
    blowup: BlowupMode = "double",
) -> List[WorstHole]:
    """Holes ranked by ``max(0, avg to-par) * sqrt(attempts)``.

    Holes are keyed by course, canonical tee base and canonical hole number,
    so front/back nine snapshots fold into the full tee.
    """

    limit = top_n if top_n is not None else get_settings().worst_holes_top_n

    groups: Dict[str, List[Tuple[HoleRecord, int, int]]] = defaultdict(list)
    for row in _scored(records, mode):
        record = row[0]
        hole = record.canonical_hole
        if hole is None:
            continue
        key = f"{record.course_id or '?'}::{record.tee.base}::{hole}"
        groups[key].append(row)

    out: List[WorstHole] = []
    for key, rows in groups.items():
        attempts = len(rows)
        avg_to_par = sum(tp for _, _, tp in rows) / attempts
        sample = rows[0][0]
        out.append(
            WorstHole(
                key=key,
                course_id=sample.course_id,
                course_name=sample.course_name or sample.course_id or "Course",
                tee=sample.tee.base,
                hole=sample.canonical_hole or 0,
                par=sample.par or 0,
                yardage=sample.yardage,
                stroke_index=sample.stroke_index,
                attempts=attempts,
                avg_to_par=avg_to_par,
                blowup_rate=sum(1 for _, _, tp in rows if is_blowup(tp, blowup)) / attempts,
                severity=max(0.0, avg_to_par) * math.sqrt(attempts),
            )
        )

    out.sort(key=lambda h: h.severity, reverse=True)
    return out[:limit]


def _distribution_label(total: float) -> str:
    k = math.floor(total + 0.5)
    if k <= -5:
        return "≤ -5"
    if k >= 11:
        return "≥ +11"
    if k == 0:
        return "E"
    return f"+{k}" if k > 0 else str(k)


def _label_order(label: str) -> int:
    if label == "≤ -5":
        return -999
    if label == "≥ +11":
        return 999
    if label == "E":
        return 0
    return int(label.replace("+", ""))


def scoring_distribution(
    records: Iterable[HoleRecord], *, mode: ScoreMode = "gross"
) -> ScoringDistribution | None:
    """Birdie-or-better / par / over-par rates and a histogram of round to-par."""

    items = list(records)
    if not items:
        return None

    birdie_plus = par = par_plus = 0
    round_totals: Dict[str, int] = defaultdict(int)
    for record in items:
        to_par = hole_to_par(record, mode)
        if to_par is None:
            continue
        if to_par <= -1:
            birdie_plus += 1
        elif to_par == 0:
            par += 1
        else:
            par_plus += 1
        if record.round_id:
            round_totals[record.round_id] += to_par

    classified = max(1, birdie_plus + par + par_plus)

    bins: Dict[str, int] = defaultdict(int)
    for total in round_totals.values():
        bins[_distribution_label(total)] += 1

    return ScoringDistribution(
        holes=len(items),
        rounds=len(round_totals),
        birdie_plus=birdie_plus,
        par=par,
        par_plus=par_plus,
        birdie_plus_rate=birdie_plus / classified,
        par_rate=par / classified,
        par_plus_rate=par_plus / classified,
        round_bins=[
            DistributionBin(label=label, count=bins[label])
            for label in sorted(bins, key=_label_order)
        ],
    )


__all__ = [
    "BlowupMode",
    "BucketDetail",
    "ContextRate",
    "DistributionBin",
    "HoleDetail",
    "HoleScoringSummary",
    "LENGTH_ORDER",
    "SI_BUCKETS",
    "ScoringDistribution",
    "WorstHole",
    "blowup_after_previous",
    "by_length",
    "by_par",
    "by_stroke_index",
    "hole_scoring_summary",
    "is_blowup",
    "length_bucket",
    "rank_worst_holes",
    "scoring_distribution",
    "si_bucket",
]
