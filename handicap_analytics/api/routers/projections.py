from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ...projections import (
    EntityHistory,
    EtaResult,
    FitResult,
    GoalRow,
    HiPoint,
    InterceptResult,
    PotentialFloor,
    ProjectionRow,
    TrendPoint,
    compare_goal_eta,
    compare_projection,
    eta_for_target,
    fit_exp_best_floor,
    fit_or_none,
    next_intercept,
    potential_floor,
    projected_on_date,
    sample_trend,
)
from ...utils.dates import to_utc_datetime

router = APIRouter(prefix="/api/projections", tags=["projections"])


def _coerce_date(value):
    if value is None:
        return None
    coerced = to_utc_datetime(value)
    if coerced is None:
        raise ValueError("expected an ISO-8601 date or datetime")
    return coerced


class _TodayMixin(BaseModel):
    today: Optional[datetime] = None

    @field_validator("today", mode="before")
    @classmethod
    def _validate_today(cls, value):
        return _coerce_date(value)

    def resolved_today(self) -> datetime:
        return self.today or datetime.now(timezone.utc)


class FitRequest(BaseModel):
    points: List[HiPoint] = Field(default_factory=list)
    trend_steps: int | None = Field(
        default=None,
        ge=1,
        le=1000,
        validation_alias=AliasChoices("trend_steps", "trendSteps"),
    )

    model_config = ConfigDict(populate_by_name=True)


class FitResponse(FitResult):
    trend: List[TrendPoint] = Field(default_factory=list)


class EtaRequest(_TodayMixin):
    points: List[HiPoint] = Field(default_factory=list)
    target: float


class ProjectionRequest(BaseModel):
    points: List[HiPoint] = Field(default_factory=list)
    on: datetime

    @field_validator("on", mode="before")
    @classmethod
    def _validate_on(cls, value):
        return _coerce_date(value)


class ProjectionResponse(BaseModel):
    projected: Optional[float] = None
    note: str = ""


class FloorRequest(_TodayMixin):
    points: List[HiPoint] = Field(default_factory=list)


class InterceptRequest(_TodayMixin):
    a: List[HiPoint] = Field(default_factory=list)
    b: List[HiPoint] = Field(default_factory=list)
    horizon_days: int | None = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices("horizon_days", "horizonDays"),
    )

    model_config = ConfigDict(populate_by_name=True)


class CompareGoalRequest(_TodayMixin):
    entities: List[EntityHistory] = Field(default_factory=list)
    target: float


class CompareProjectionRequest(BaseModel):
    entities: List[EntityHistory] = Field(default_factory=list)
    on: datetime

    @field_validator("on", mode="before")
    @classmethod
    def _validate_on(cls, value):
        return _coerce_date(value)


@router.post("/fit", response_model=FitResponse)
async def fit_history(payload: FitRequest) -> FitResponse:
    result = fit_exp_best_floor(payload.points)
    trend: List[TrendPoint] = []
    if result.fit is not None and payload.trend_steps:
        last = max(p.date for p in payload.points)
        trend = sample_trend(result.fit, result.fit.first_date, last, payload.trend_steps)
    return FitResponse(status=result.status, fit=result.fit, trend=trend)


@router.post("/eta", response_model=EtaResult)
async def goal_eta(payload: EtaRequest) -> EtaResult:
    fit = fit_or_none(payload.points)
    return eta_for_target(fit, payload.resolved_today(), payload.target)


@router.post("/projection", response_model=ProjectionResponse)
async def projection_on_date(payload: ProjectionRequest) -> ProjectionResponse:
    fit = fit_or_none(payload.points)
    if fit is None:
        return ProjectionResponse(note="Not enough data")
    return ProjectionResponse(projected=projected_on_date(fit, payload.on))


@router.post("/floor", response_model=PotentialFloor)
async def floor(payload: FloorRequest) -> PotentialFloor:
    return potential_floor(fit_or_none(payload.points), payload.resolved_today())


@router.post("/intercept", response_model=InterceptResult)
async def intercept(payload: InterceptRequest) -> InterceptResult:
    return next_intercept(
        fit_or_none(payload.a),
        fit_or_none(payload.b),
        payload.resolved_today(),
        horizon_days=payload.horizon_days,
    )


@router.post("/compare/goal", response_model=List[GoalRow])
async def compare_goal(payload: CompareGoalRequest) -> List[GoalRow]:
    return compare_goal_eta(payload.entities, payload.resolved_today(), payload.target)


@router.post("/compare/projection", response_model=List[ProjectionRow])
async def compare_projected(payload: CompareProjectionRequest) -> List[ProjectionRow]:
    return compare_projection(payload.entities, payload.on)


__all__ = ["router"]
