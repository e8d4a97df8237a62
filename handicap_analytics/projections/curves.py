"""Exponential-decay-with-floor fitting for handicap-index histories.

The model is ``HI(t) = a * exp(-b * t) + c`` with ``t`` in days since the first
observation. For a fixed floor ``c`` the model is linear in log space, so the
fit sweeps candidate floors, regresses ``ln(HI - c)`` on ``t`` for each one and
keeps the floor whose reconstructed curve has the smallest squared error.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Iterable, Sequence, Tuple

import numpy as np

from ..config import MIN_SWEEP_STEPS, get_settings
from ..utils.dates import days_between
from .schemas import Fit, FitResult, HiPoint

logger = logging.getLogger(__name__)

_SSE_TIE = 1e-9
_DEGENERATE = 1e-12


def linear_regression(xs: np.ndarray, ys: np.ndarray) -> Tuple[float, float] | None:
    """Ordinary least squares ``y = m * x + k``; ``None`` for degenerate input."""

    n = xs.size
    if n < 2:
        return None

    sum_x = float(xs.sum())
    sum_y = float(ys.sum())
    sum_xx = float((xs * xs).sum())
    sum_xy = float((xs * ys).sum())

    denom = n * sum_xx - sum_x * sum_x
    if abs(denom) < _DEGENERATE:
        return None

    m = (n * sum_xy - sum_x * sum_y) / denom
    k = (sum_y - m * sum_x) / n
    return m, k


def _floor_candidates(min_value: float, steps: int) -> np.ndarray:
    settings = get_settings()
    c_min = min(settings.fit_floor_min, min_value - 10.0)
    c_max = min_value - settings.fit_floor_margin
    return np.linspace(c_min, c_max, steps + 1)


def fit_series(
    series: Sequence[Tuple[float, float]],
    first_date: datetime,
    *,
    steps: int | None = None,
) -> FitResult:
    """Fit ``(t_days, value)`` pairs already measured from ``first_date``."""

    if len({t for t, _ in series}) < 2:
        return FitResult(status="insufficient")

    ts = np.array([t for t, _ in series], dtype=float)
    values = np.array([v for _, v in series], dtype=float)
    if not (np.isfinite(ts).all() and np.isfinite(values).all()):
        finite = np.isfinite(ts) & np.isfinite(values)
        ts, values = ts[finite], values[finite]
        if np.unique(ts).size < 2:
            return FitResult(status="insufficient")

    sweep_steps = max(MIN_SWEEP_STEPS, steps or get_settings().fit_sweep_steps)

    best: tuple[float, float, float, float, float, int] | None = None
    for c in _floor_candidates(float(values.min()), sweep_steps):
        usable = values > c
        if int(usable.sum()) < 2:
            continue

        t_used = ts[usable]
        shifted = values[usable] - c
        logs = np.log(shifted)

        line = linear_regression(t_used, logs)
        if line is None:
            continue
        slope, intercept = line

        b = -slope
        a = math.exp(intercept)
        if not (b > 0 and a > 0 and math.isfinite(a) and math.isfinite(b)):
            continue

        log_residuals = logs - (intercept + slope * t_used)
        predicted = a * np.exp(-b * t_used) + c
        sse = float(((values[usable] - predicted) ** 2).sum())
        log_sse = float((log_residuals**2).sum())
        if not math.isfinite(sse):
            continue

        # Candidates arrive in ascending c, so a tie keeps the lower floor.
        if best is None or sse < best[3] - _SSE_TIE:
            best = (a, b, float(c), sse, log_sse, int(usable.sum()))

    if best is None:
        logger.debug("no decaying candidate across %d floors", sweep_steps + 1)
        return FitResult(status="no_fit")

    a, b, c, sse, log_sse, used = best
    fit = Fit(
        a=a,
        b=b,
        c=c,
        first_date=first_date,
        sse=sse,
        log_sse=log_sse,
        points_used=used,
    )
    return FitResult(status="ok", fit=fit)


def fit_exp_best_floor(
    points: Iterable[HiPoint], *, steps: int | None = None
) -> FitResult:
    """Fit a handicap-index history; needs two or more distinct dates."""

    ordered = sorted(points, key=lambda p: p.date)
    if not ordered:
        return FitResult(status="insufficient")

    first_date = ordered[0].date
    series = [(days_between(first_date, p.date), p.hi) for p in ordered]
    return fit_series(series, first_date, steps=steps)


def fit_or_none(points: Iterable[HiPoint], *, steps: int | None = None) -> Fit | None:
    """Convenience wrapper: ``insufficient`` and ``no_fit`` both become ``None``."""

    return fit_exp_best_floor(points, steps=steps).fit


__all__ = ["fit_exp_best_floor", "fit_or_none", "fit_series", "linear_regression"]
