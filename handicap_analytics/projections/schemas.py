"""Pydantic models for handicap-index history and fitted trajectories."""

from __future__ import annotations

import math
from datetime import date as date_type
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..utils.dates import days_between, to_utc_datetime

FitStatus = Literal["ok", "insufficient", "no_fit"]
EtaStatus = Literal["insufficient", "reached", "unreachable", "unknown", "estimated"]
InterceptStatus = Literal["crossing", "no_crossing_in_window", "insufficient"]


class HiPoint(BaseModel):
    """One handicap-index observation."""

    date: datetime = Field(validation_alias=AliasChoices("date", "as_of_date"))
    hi: float = Field(validation_alias=AliasChoices("hi", "handicap_index"))

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value):
        coerced = to_utc_datetime(value)
        if coerced is None:
            raise ValueError("date must be an ISO-8601 date or datetime")
        return coerced


class Fit(BaseModel):
    """Fitted ``a * exp(-b * t) + c`` curve, ``t`` in days since ``first_date``."""

    a: float
    b: float = Field(gt=0)
    c: float
    first_date: datetime = Field(serialization_alias="firstDate")
    sse: float = 0.0
    log_sse: float = Field(default=0.0, serialization_alias="logSse")
    points_used: int = Field(default=0, serialization_alias="pointsUsed")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def predict(self, t_days: float) -> float:
        try:
            return self.a * math.exp(-self.b * t_days) + self.c
        except OverflowError:
            return math.inf

    def predict_on(self, on: date_type | datetime) -> float:
        return self.predict(days_between(self.first_date, on))


class FitResult(BaseModel):
    status: FitStatus
    fit: Optional[Fit] = None


class EtaResult(BaseModel):
    status: EtaStatus
    days: Optional[int] = None
    date: Optional[str] = None
    note: str = ""


class PotentialFloor(BaseModel):
    value: Optional[float] = None
    eta: EtaResult
    note: str = ""


class InterceptResult(BaseModel):
    status: InterceptStatus
    t: Optional[float] = None
    date: Optional[str] = None
    days_from_today: Optional[int] = Field(
        default=None, serialization_alias="daysFromToday"
    )
    hi: Optional[float] = None
    note: str = ""

    model_config = ConfigDict(populate_by_name=True)


class TrendPoint(BaseModel):
    date: str
    value: float


class GoalRow(BaseModel):
    entity_id: str = Field(serialization_alias="entityId")
    name: str
    hi_now: Optional[float] = Field(default=None, serialization_alias="hiNow")
    status: EtaStatus
    days: Optional[int] = None
    date: Optional[str] = None
    note: str = ""

    model_config = ConfigDict(populate_by_name=True)


class ProjectionRow(BaseModel):
    entity_id: str = Field(serialization_alias="entityId")
    name: str
    hi_now: Optional[float] = Field(default=None, serialization_alias="hiNow")
    projected: Optional[float] = None
    note: str = ""

    model_config = ConfigDict(populate_by_name=True)


class EntityHistory(BaseModel):
    """A named HI history (the player or somebody they follow)."""

    entity_id: str = Field(validation_alias=AliasChoices("entity_id", "entityId", "id"))
    name: Optional[str] = None
    points: List[HiPoint] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @property
    def display_name(self) -> str:
        return self.name or self.entity_id[:8]


__all__ = [
    "EntityHistory",
    "EtaResult",
    "EtaStatus",
    "Fit",
    "FitResult",
    "FitStatus",
    "GoalRow",
    "HiPoint",
    "InterceptResult",
    "InterceptStatus",
    "PotentialFloor",
    "ProjectionRow",
    "TrendPoint",
]
