"""Root finding over fitted trajectories."""

from __future__ import annotations

import math
from typing import Callable

from ..utils.dates import days_between
from .schemas import Fit

_ZERO = 1e-6
_BISECTION_STEPS = 60


def solve_time_to_target(fit: Fit, target: float) -> float | None:
    """Days since ``fit.first_date`` at which the curve reaches ``target``.

    ``None`` when the target sits at or below the floor (unreachable for the
    model) or the parameters cannot produce a finite answer. A target above
    the curve's starting value resolves to ``0``.
    """

    a, b, c = fit.a, fit.b, fit.c
    if target <= c:
        return None
    if not (a > 0) or not (b > 0):
        return None

    ratio = (target - c) / a
    if not (ratio > 0):
        return None
    if ratio >= 1:
        return 0.0

    t = -math.log(ratio) / b
    return t if math.isfinite(t) else None


def _opposite(d1: float, d2: float) -> bool:
    return (d1 < 0 < d2) or (d1 > 0 > d2)


def find_next_crossing(
    f: Callable[[float], float],
    g: Callable[[float], float],
    t_start: float,
    t_end: float,
    sample_count: int = 1600,
) -> float | None:
    """First ``t`` in ``[t_start, t_end]`` where ``f`` and ``g`` cross.

    Samples ``f - g`` on an even grid, takes the first sign change and refines
    it by bisection. Non-finite samples never count as a sign change.
    """

    if sample_count < 1:
        raise ValueError("sample_count must be positive")

    def diff(t: float) -> float:
        return f(t) - g(t)

    span = max(1e-9, t_end - t_start)

    prev_t = t_start
    prev_d = diff(prev_t)
    if math.isfinite(prev_d) and abs(prev_d) < _ZERO:
        return prev_t

    for i in range(1, sample_count + 1):
        t = t_start + (i / sample_count) * span
        d = diff(t)

        if math.isfinite(d) and abs(d) < _ZERO:
            return t

        if math.isfinite(prev_d) and math.isfinite(d) and _opposite(prev_d, d):
            lo, hi = prev_t, t
            d_lo = prev_d
            for _ in range(_BISECTION_STEPS):
                mid = (lo + hi) / 2
                d_mid = diff(mid)
                if not math.isfinite(d_mid):
                    break
                if abs(d_mid) < _ZERO:
                    return mid
                if _opposite(d_lo, d_mid):
                    hi = mid
                else:
                    lo, d_lo = mid, d_mid
            return (lo + hi) / 2

        prev_t, prev_d = t, d

    return None


def find_next_intercept(
    fit_a: Fit,
    fit_b: Fit,
    t_start: float,
    t_end: float,
    sample_count: int = 1600,
) -> float | None:
    """Next crossing of two fits, ``t`` in days since ``fit_a.first_date``.

    Each curve is evaluated on its own time axis, so ``fit_b`` is shifted by
    the gap between the two first observations.
    """

    offset = days_between(fit_b.first_date, fit_a.first_date)
    return find_next_crossing(
        fit_a.predict,
        lambda t: fit_b.predict(t + offset),
        t_start,
        t_end,
        sample_count,
    )


__all__ = ["find_next_crossing", "find_next_intercept", "solve_time_to_target"]
