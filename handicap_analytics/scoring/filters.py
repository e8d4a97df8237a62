"""Record selection: time presets plus course/tee narrowing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Literal, Optional, get_args

from ..utils.dates import days_ago, months_ago, to_utc_datetime
from .models import HoleRecord

logger = logging.getLogger(__name__)

TimePreset = Literal["all", "12m", "6m", "30d", "40r", "20r", "10r", "5r"]

_TIME_PRESETS = set(get_args(TimePreset))
_ROUND_LIMITS = {"40r": 40, "20r": 20, "10r": 10, "5r": 5}

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _cutoff(preset: str, now: datetime) -> datetime | None:
    if preset == "30d":
        return days_ago(now, 30)
    if preset == "6m":
        return months_ago(now, 6)
    if preset == "12m":
        return months_ago(now, 12)
    return None


def _most_recent_rounds(records: List[HoleRecord], limit: int) -> set[str]:
    ordered = sorted(records, key=lambda r: r.played_at or _EPOCH, reverse=True)
    allowed: list[str] = []
    for record in ordered:
        if not record.round_id or record.round_id in allowed:
            continue
        allowed.append(record.round_id)
        if len(allowed) >= limit:
            break
    return set(allowed)


@dataclass(frozen=True)
class RecordFilter:
    preset: TimePreset = "all"
    course_id: Optional[str] = None
    tee_box_id: Optional[str] = None
    predicate: Optional[Callable[[HoleRecord], bool]] = None

    def __post_init__(self) -> None:
        if self.preset not in _TIME_PRESETS:
            raise ValueError(f"unknown time preset: {self.preset!r}")

    def apply(
        self, records: Iterable[HoleRecord], *, now: datetime | None = None
    ) -> List[HoleRecord]:
        """Time preset first, then course/tee, then the caller's predicate."""

        rows = list(records)
        reference = to_utc_datetime(now) or datetime.now(timezone.utc)

        cutoff = _cutoff(self.preset, reference)
        if cutoff is not None:
            rows = [r for r in rows if r.played_at is not None and r.played_at >= cutoff]
        elif self.preset in _ROUND_LIMITS:
            allowed = _most_recent_rounds(rows, _ROUND_LIMITS[self.preset])
            rows = [r for r in rows if r.round_id in allowed]

        if self.course_id:
            rows = [r for r in rows if r.course_id == self.course_id]
        if self.tee_box_id:
            rows = [r for r in rows if r.tee_box_id == self.tee_box_id]
        if self.predicate is not None:
            rows = [r for r in rows if self.predicate(r)]

        logger.debug("record filter %s kept %d rows", self.preset, len(rows))
        return rows


__all__ = ["RecordFilter", "TimePreset"]
