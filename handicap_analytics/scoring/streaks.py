"""Play streaks and best k-round scoring stretches."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from ..config import get_settings
from ..utils.dates import to_utc_datetime
from .models import RoundAggregate
from .rounds import ScoreMode, rounds_ascending, to_par_18eq


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class StreakSummary:
    longest: int
    current: int
    longest_range: Optional[DateRange]
    current_range: Optional[DateRange]


@dataclass(frozen=True)
class Stretch:
    window: int
    average: float
    start: Optional[datetime]
    end: Optional[datetime]


def compute_streaks(
    dates: Iterable[date | datetime | str], gap_days: int | None = None
) -> StreakSummary:
    """Run lengths where consecutive plays are at most ``gap_days`` apart.

    ``longest`` keeps the first run of maximal length; ``current`` is the run
    that ends at the most recent play.
    """

    gap = gap_days if gap_days is not None else get_settings().streak_gap_days
    if gap <= 0:
        raise ValueError("gap_days must be positive")

    ordered = sorted(d for d in (to_utc_datetime(v) for v in dates) if d is not None)
    if not ordered:
        return StreakSummary(longest=0, current=0, longest_range=None, current_range=None)

    max_gap = timedelta(days=gap)

    longest = 1
    longest_start = longest_end = ordered[0]
    run_start = ordered[0]
    run_len = 1

    for prev, cur in zip(ordered, ordered[1:]):
        if cur - prev <= max_gap:
            run_len += 1
            continue
        if run_len > longest:
            longest, longest_start, longest_end = run_len, run_start, prev
        run_start, run_len = cur, 1

    last = ordered[-1]
    if run_len > longest:
        longest, longest_start, longest_end = run_len, run_start, last

    # The final run is the current one.
    return StreakSummary(
        longest=longest,
        current=run_len,
        longest_range=DateRange(longest_start, longest_end),
        current_range=DateRange(run_start, last),
    )


def best_stretch(
    rounds: Iterable[RoundAggregate], window: int, mode: ScoreMode = "gross"
) -> Stretch | None:
    """Lowest average 18-hole-equivalent to-par over ``window`` consecutive rounds."""

    if window < 1:
        raise ValueError("window must be at least 1")

    usable: List[RoundAggregate] = [
        r for r in rounds_ascending(rounds) if to_par_18eq(r, mode) is not None
    ]
    if len(usable) < window:
        return None

    values = [to_par_18eq(r, mode) for r in usable]
    best_avg, best_index = None, 0
    for i in range(len(values) - window + 1):
        avg = sum(values[i : i + window]) / window
        if best_avg is None or avg < best_avg:
            best_avg, best_index = avg, i

    chosen = usable[best_index : best_index + window]
    return Stretch(
        window=window,
        average=best_avg,
        start=chosen[0].played_at,
        end=chosen[-1].played_at,
    )


__all__ = ["DateRange", "Stretch", "StreakSummary", "best_stretch", "compute_streaks"]
