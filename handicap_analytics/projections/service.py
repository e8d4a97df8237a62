"""Projection queries composed from the curve fitter and root solver."""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Iterable, List

from ..config import get_settings
from ..utils.dates import add_days, days_between, iso
from ..utils.numbers import round1
from .curves import fit_or_none
from .schemas import (
    EntityHistory,
    EtaResult,
    EtaStatus,
    Fit,
    GoalRow,
    InterceptResult,
    PotentialFloor,
    ProjectionRow,
    TrendPoint,
)
from .solver import find_next_intercept, solve_time_to_target

logger = logging.getLogger(__name__)

_NOT_ENOUGH_DATA = "Not enough data"

_STATUS_RANK: dict[EtaStatus, int] = {"reached": 0, "estimated": 1, "unreachable": 2}


def eta_for_target(fit: Fit | None, today: date | datetime, target: float) -> EtaResult:
    if fit is None:
        return EtaResult(status="insufficient", note=_NOT_ENOUGH_DATA)

    value_today = fit.predict(days_between(fit.first_date, today))
    if math.isfinite(value_today) and value_today <= target:
        return EtaResult(
            status="reached",
            days=0,
            date=iso(today),
            note="Already at or below target",
        )

    if target <= fit.c:
        return EtaResult(
            status="unreachable",
            note=f"Below model floor (~{round1(fit.c)}). Choose a higher target.",
        )

    t_hit = solve_time_to_target(fit, target)
    if t_hit is None:
        return EtaResult(status="unknown", note="Unable to estimate")

    hit_date = add_days(fit.first_date, t_hit)
    days = math.ceil(days_between(today, hit_date))
    return EtaResult(status="estimated", days=max(0, days), date=iso(hit_date))


def projected_on_date(fit: Fit | None, on: date | datetime) -> float | None:
    if fit is None:
        return None
    value = fit.predict_on(on)
    return round1(value) if math.isfinite(value) else None


def potential_floor(fit: Fit | None, today: date | datetime) -> PotentialFloor:
    """Floor reported ``EPS_VIS`` above the asymptote, which is never reached."""

    if fit is None:
        return PotentialFloor(
            eta=EtaResult(status="insufficient", note=_NOT_ENOUGH_DATA),
            note=_NOT_ENOUGH_DATA,
        )
    adjusted = fit.c + get_settings().eps_vis
    return PotentialFloor(value=round1(adjusted), eta=eta_for_target(fit, today, adjusted))


def next_intercept(
    fit_a: Fit | None,
    fit_b: Fit | None,
    today: date | datetime,
    *,
    horizon_days: int | None = None,
    sample_count: int | None = None,
) -> InterceptResult:
    if fit_a is None or fit_b is None:
        return InterceptResult(status="insufficient", note=_NOT_ENOUGH_DATA)

    settings = get_settings()
    horizon = horizon_days if horizon_days is not None else settings.intercept_horizon_days
    samples = sample_count if sample_count is not None else settings.intercept_samples

    t_today = days_between(fit_a.first_date, today)
    t_hit = find_next_intercept(fit_a, fit_b, t_today, t_today + horizon, samples)
    if t_hit is None:
        return InterceptResult(
            status="no_crossing_in_window",
            note=f"No crossing found in next {horizon} days",
        )

    when = add_days(fit_a.first_date, t_hit)
    value = fit_a.predict(t_hit)
    return InterceptResult(
        status="crossing",
        t=t_hit,
        date=iso(when),
        days_from_today=round(days_between(today, when)),
        hi=round1(value) if math.isfinite(value) else None,
    )


def sample_trend(
    fit: Fit, start: date | datetime, end: date | datetime, steps: int = 140
) -> List[TrendPoint]:
    """``steps + 1`` evenly spaced samples of the fitted curve."""

    if steps < 1:
        raise ValueError("steps must be positive")

    span = max(0.0001, days_between(start, end))
    out: List[TrendPoint] = []
    for i in range(steps + 1):
        when = add_days(start, (i / steps) * span)
        value = fit.predict_on(when)
        if math.isfinite(value):
            out.append(TrendPoint(date=when.isoformat(), value=value))
    return out


def _latest_hi(history: EntityHistory) -> float | None:
    if not history.points:
        return None
    latest = max(history.points, key=lambda p: p.date)
    return round1(latest.hi)


def compare_goal_eta(
    histories: Iterable[EntityHistory], today: date | datetime, target: float
) -> List[GoalRow]:
    """Goal ETA for every entity, reached first, then soonest estimate."""

    rows: List[GoalRow] = []
    for history in histories:
        fit = fit_or_none(history.points)
        eta = eta_for_target(fit, today, target)
        rows.append(
            GoalRow(
                entity_id=history.entity_id,
                name=history.display_name,
                hi_now=_latest_hi(history),
                status=eta.status,
                days=eta.days,
                date=eta.date,
                note=eta.note,
            )
        )

    rows.sort(
        key=lambda r: (
            _STATUS_RANK.get(r.status, 3),
            r.days if r.days is not None else 1e9,
        )
    )
    return rows


def compare_projection(
    histories: Iterable[EntityHistory], on: date | datetime
) -> List[ProjectionRow]:
    rows: List[ProjectionRow] = []
    for history in histories:
        fit = fit_or_none(history.points)
        rows.append(
            ProjectionRow(
                entity_id=history.entity_id,
                name=history.display_name,
                hi_now=_latest_hi(history),
                projected=projected_on_date(fit, on),
                note="" if fit else _NOT_ENOUGH_DATA,
            )
        )

    rows.sort(key=lambda r: (r.projected if r.projected is not None else 1e9, r.name))
    return rows


__all__ = [
    "compare_goal_eta",
    "compare_projection",
    "eta_for_target",
    "next_intercept",
    "potential_floor",
    "projected_on_date",
    "sample_trend",
]
