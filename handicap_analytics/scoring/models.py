from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.dates import to_utc_datetime
from ..utils.numbers import safe_num
from .tees import TeeIdentity, canonical_hole_number, normalize_tee_name


class HoleRecord(BaseModel):
    """One hole of one round, as materialized by the scoring source."""

    profile_id: Optional[str] = None
    round_id: Optional[str] = None
    played_at: Optional[datetime] = None

    course_id: Optional[str] = None
    course_name: Optional[str] = None

    tee_box_id: Optional[str] = None
    tee_name: Optional[str] = None

    hole_number: Optional[int] = None
    par: Optional[int] = None
    yardage: Optional[float] = None
    stroke_index: Optional[int] = None

    strokes: Optional[int] = None

    # Optional upstream net fields.
    net_strokes: Optional[int] = None
    strokes_received: Optional[int] = None
    course_handicap: Optional[float] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("played_at", mode="before")
    @classmethod
    def _coerce_played_at(cls, value):
        return to_utc_datetime(value)

    @field_validator(
        "hole_number",
        "par",
        "stroke_index",
        "strokes",
        "net_strokes",
        "strokes_received",
        mode="before",
    )
    @classmethod
    def _coerce_int(cls, value):
        number = safe_num(value)
        return None if number is None else int(round(number))

    @field_validator("yardage", "course_handicap", mode="before")
    @classmethod
    def _coerce_float(cls, value):
        return safe_num(value)

    @property
    def tee(self) -> TeeIdentity:
        return normalize_tee_name(self.tee_name)

    @property
    def canonical_hole(self) -> int | None:
        return canonical_hole_number(self.hole_number, self.tee.nine)

    @property
    def to_par(self) -> int | None:
        if self.strokes is None or self.par is None:
            return None
        return self.strokes - self.par


class RoundAggregate(BaseModel):
    round_id: str = Field(serialization_alias="roundId")
    played_at: Optional[datetime] = Field(default=None, serialization_alias="playedAt")

    course_id: Optional[str] = Field(default=None, serialization_alias="courseId")
    course_name: Optional[str] = Field(default=None, serialization_alias="courseName")
    tee_box_id: Optional[str] = Field(default=None, serialization_alias="teeBoxId")
    tee_name: Optional[str] = Field(default=None, serialization_alias="teeName")
    tee_base: str = Field(serialization_alias="teeBase")

    holes_scored: int = Field(serialization_alias="holesScored")
    unique_holes_scored: int = Field(serialization_alias="uniqueHolesScored")
    is_9_hole: bool = Field(serialization_alias="is9Hole")

    gross_total: Optional[int] = Field(default=None, serialization_alias="grossTotal")
    net_total: Optional[int] = Field(default=None, serialization_alias="netTotal")

    gross_to_par: Optional[int] = Field(default=None, serialization_alias="grossToPar")
    net_to_par: Optional[int] = Field(default=None, serialization_alias="netToPar")

    # 18-hole-equivalent values, used for every cross-round comparison.
    gross_to_par_18eq: Optional[float] = Field(
        default=None, serialization_alias="grossToPar18eq"
    )
    net_to_par_18eq: Optional[float] = Field(
        default=None, serialization_alias="netToPar18eq"
    )

    birdies: int = 0
    eagles: int = 0
    albatrosses: int = 0
    holes_in_one: int = Field(default=0, serialization_alias="holesInOne")
    stableford: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True)


__all__ = ["HoleRecord", "RoundAggregate"]
