from __future__ import annotations

import math
from statistics import fmean, pstdev
from typing import Any, Iterable


def safe_num(value: Any) -> float | None:
    """Return ``value`` as a finite float, or ``None``."""

    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def round1(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


def mean(values: Iterable[float]) -> float | None:
    items = list(values)
    if not items:
        return None
    return fmean(items)


def stdev(values: Iterable[float]) -> float | None:
    """Population standard deviation; ``None`` below two values."""

    items = list(values)
    if len(items) < 2:
        return None
    return pstdev(items)


def rms(a: float, b: float) -> float:
    return math.sqrt((a * a + b * b) / 2)


__all__ = ["mean", "rms", "round1", "safe_num", "stdev"]
