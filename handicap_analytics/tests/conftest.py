"""Shared pytest fixtures for analytics tests."""

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Sequence

import pytest

from handicap_analytics.config import reset_settings_cache
from handicap_analytics.projections import HiPoint
from handicap_analytics.scoring.models import HoleRecord

BASE_DATE = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    for key in list(os.environ):
        if key.startswith("HANDICAP_"):
            monkeypatch.delenv(key, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def base_date() -> datetime:
    return BASE_DATE


@pytest.fixture
def hi_points() -> Callable[[Sequence[tuple[float, float]]], List[HiPoint]]:
    """Build HI points from ``(days since BASE_DATE, hi)`` pairs."""

    def build(pairs: Sequence[tuple[float, float]]) -> List[HiPoint]:
        return [HiPoint(date=BASE_DATE + timedelta(days=t), hi=hi) for t, hi in pairs]

    return build


@pytest.fixture
def make_round() -> Callable[..., List[HoleRecord]]:
    """Hole records for one round; stroke index defaults to the local hole number."""

    def build(
        round_id: str,
        played_at: datetime | str,
        strokes: Sequence[int | None],
        *,
        pars: Sequence[int] | None = None,
        start_hole: int = 1,
        tee_name: str = "White",
        course_id: str = "c1",
        course_name: str = "Links",
        tee_box_id: str = "t1",
        stroke_indexes: Sequence[int] | None = None,
        yardages: Sequence[float] | None = None,
        course_handicap: float | None = None,
        profile_id: str = "p1",
    ) -> List[HoleRecord]:
        pars = list(pars) if pars is not None else [4] * len(strokes)
        rows = []
        for i, (score, par) in enumerate(zip(strokes, pars)):
            hole = start_hole + i
            rows.append(
                HoleRecord(
                    profile_id=profile_id,
                    round_id=round_id,
                    played_at=played_at,
                    course_id=course_id,
                    course_name=course_name,
                    tee_box_id=tee_box_id,
                    tee_name=tee_name,
                    hole_number=hole,
                    par=par,
                    yardage=yardages[i] if yardages else None,
                    stroke_index=stroke_indexes[i] if stroke_indexes else hole,
                    strokes=score,
                    course_handicap=course_handicap,
                )
            )
        return rows

    return build


@pytest.fixture
def round_to_par(make_round) -> Callable[..., List[HoleRecord]]:
    """An 18-hole par-72 round whose gross to-par equals ``over`` (0-18)."""

    def build(round_id: str, played_at: datetime | str, over: int, **kwargs):
        strokes = [5] * over + [4] * (18 - over)
        return make_round(round_id, played_at, strokes, **kwargs)

    return build
