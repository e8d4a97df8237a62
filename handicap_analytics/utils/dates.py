from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta, timezone

_SECONDS_PER_DAY = 24 * 60 * 60


def to_utc_datetime(value: date | datetime | str | None) -> datetime | None:
    """Coerce dates, datetimes and ISO-8601 strings to aware UTC datetimes.

    Naive values are treated as UTC. Unparsable strings return ``None``.
    """

    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    return None


def days_between(start: date | datetime, end: date | datetime) -> float:
    """Fractional days from ``start`` to ``end`` (negative when end is earlier)."""

    a = to_utc_datetime(start)
    b = to_utc_datetime(end)
    if a is None or b is None:
        raise ValueError("days_between requires two dates")
    return (b - a).total_seconds() / _SECONDS_PER_DAY


def add_days(value: date | datetime, days: float) -> datetime:
    base = to_utc_datetime(value)
    if base is None:
        raise ValueError("add_days requires a date")
    return base + timedelta(days=days)


def iso(value: date | datetime) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    return value.isoformat()


def days_ago(now: datetime, days: int) -> datetime:
    return now - timedelta(days=days)


def months_ago(now: datetime, months: int) -> datetime:
    # Clamp to the last day of the target month (31 Mar - 1 month -> 28/29 Feb).
    month_index = now.month - 1 - months
    year = now.year + month_index // 12
    month = month_index % 12 + 1
    day = min(now.day, calendar.monthrange(year, month)[1])
    return now.replace(year=year, month=month, day=day)


__all__ = [
    "add_days",
    "days_ago",
    "days_between",
    "iso",
    "months_ago",
    "to_utc_datetime",
]
