from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Literal, Optional

from fastapi import APIRouter
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ...scoring.eclectic import (
    CourseRecord,
    EclecticCard,
    course_records,
    eclectic_scorecard,
    sort_course_records,
)
from ...scoring.filters import RecordFilter, TimePreset
from ...scoring.holes import (
    BlowupMode,
    BucketDetail,
    ContextRate,
    HoleScoringSummary,
    ScoringDistribution,
    WorstHole,
    blowup_after_previous,
    by_length,
    by_par,
    by_stroke_index,
    hole_scoring_summary,
    rank_worst_holes,
    scoring_distribution,
)
from ...scoring.milestones import (
    BestWorstRounds,
    Firsts,
    Goals,
    ScoringSummary,
    best_and_worst_rounds,
    count_goals,
    find_firsts,
    summarize_rounds,
)
from ...scoring.models import HoleRecord, RoundAggregate
from ...scoring.rounds import ScoreMode, aggregate_rounds
from ...scoring.streaks import StreakSummary, Stretch, best_stretch, compute_streaks
from ...utils.dates import to_utc_datetime

router = APIRouter(prefix="/api/stats", tags=["stats"])


class RecordFilterIn(BaseModel):
    preset: TimePreset = "all"
    course_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("course_id", "courseId"),
    )
    tee_box_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("tee_box_id", "teeBoxId"),
    )

    model_config = ConfigDict(populate_by_name=True)

    def build(self) -> RecordFilter:
        return RecordFilter(
            preset=self.preset, course_id=self.course_id, tee_box_id=self.tee_box_id
        )


class StatsRequest(BaseModel):
    records: List[HoleRecord] = Field(default_factory=list)
    filter: Optional[RecordFilterIn] = None
    now: Optional[datetime] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("now", mode="before")
    @classmethod
    def _validate_now(cls, value):
        if value is None:
            return None
        coerced = to_utc_datetime(value)
        if coerced is None:
            raise ValueError("now must be an ISO-8601 date or datetime")
        return coerced

    def selected(self) -> List[HoleRecord]:
        if self.filter is None:
            return list(self.records)
        return self.filter.build().apply(self.records, now=self.now)


class EclecticRequest(StatsRequest):
    course_id: str = Field(validation_alias=AliasChoices("course_id", "courseId"))
    tee_box_id: str = Field(validation_alias=AliasChoices("tee_box_id", "teeBoxId"))
    profile_id: str | None = Field(
        default=None, validation_alias=AliasChoices("profile_id", "profileId")
    )
    expected_holes: List[int] | None = Field(
        default=None, validation_alias=AliasChoices("expected_holes", "expectedHoles")
    )


class RecordsRequest(StatsRequest):
    metric: Literal["gross", "net"] = "gross"
    descending: bool = False


class StreaksRequest(StatsRequest):
    gap_days: int | None = Field(
        default=None, gt=0, validation_alias=AliasChoices("gap_days", "gapDays")
    )


class StretchesRequest(StatsRequest):
    windows: List[Annotated[int, Field(ge=1)]] = Field(default_factory=lambda: [3, 5])
    mode: ScoreMode = "gross"


class HolesRequest(StatsRequest):
    mode: ScoreMode = "gross"
    blowup: BlowupMode = "double"
    top_n: int | None = Field(
        default=None, ge=1, validation_alias=AliasChoices("top_n", "topN")
    )


class MilestonesResponse(BaseModel):
    summary: Optional[ScoringSummary] = None
    best_worst: BestWorstRounds = Field(serialization_alias="bestWorst")
    firsts: Firsts
    goals: Goals

    model_config = ConfigDict(populate_by_name=True)


class BreakdownResponse(BaseModel):
    summary: Optional[HoleScoringSummary] = None
    by_par: List[BucketDetail] = Field(default_factory=list, serialization_alias="byPar")
    by_length: List[BucketDetail] = Field(
        default_factory=list, serialization_alias="byLength"
    )
    by_stroke_index: List[BucketDetail] = Field(
        default_factory=list, serialization_alias="byStrokeIndex"
    )
    after_previous: List[ContextRate] = Field(
        default_factory=list, serialization_alias="afterPrevious"
    )
    distribution: Optional[ScoringDistribution] = None

    model_config = ConfigDict(populate_by_name=True)


@router.post("/rounds", response_model=List[RoundAggregate])
async def rounds(payload: StatsRequest) -> List[RoundAggregate]:
    return aggregate_rounds(payload.selected())


@router.post("/milestones", response_model=MilestonesResponse)
async def milestones(payload: StatsRequest) -> MilestonesResponse:
    items = aggregate_rounds(payload.selected())
    return MilestonesResponse(
        summary=summarize_rounds(items),
        best_worst=best_and_worst_rounds(items),
        firsts=find_firsts(items),
        goals=count_goals(items),
    )


@router.post("/eclectic", response_model=EclecticCard)
async def eclectic(payload: EclecticRequest) -> EclecticCard:
    return eclectic_scorecard(
        payload.selected(),
        payload.course_id,
        payload.tee_box_id,
        profile_id=payload.profile_id,
        expected_holes=payload.expected_holes,
    )


@router.post("/records", response_model=List[CourseRecord])
async def records(payload: RecordsRequest) -> List[CourseRecord]:
    found = course_records(aggregate_rounds(payload.selected()))
    return sort_course_records(found, metric=payload.metric, descending=payload.descending)


@router.post("/streaks", response_model=StreakSummary)
async def streaks(payload: StreaksRequest) -> StreakSummary:
    played = [r.played_at for r in aggregate_rounds(payload.selected()) if r.played_at]
    return compute_streaks(played, gap_days=payload.gap_days)


@router.post("/stretches", response_model=List[Stretch])
async def stretches(payload: StretchesRequest) -> List[Stretch]:
    items = aggregate_rounds(payload.selected())
    found = (best_stretch(items, window, payload.mode) for window in payload.windows)
    return [stretch for stretch in found if stretch is not None]


@router.post("/worst-holes", response_model=List[WorstHole])
async def worst_holes(payload: HolesRequest) -> List[WorstHole]:
    return rank_worst_holes(
        payload.selected(),
        top_n=payload.top_n,
        mode=payload.mode,
        blowup=payload.blowup,
    )


@router.post("/breakdown", response_model=BreakdownResponse)
async def breakdown(payload: HolesRequest) -> BreakdownResponse:
    selected = payload.selected()
    options = {"mode": payload.mode, "blowup": payload.blowup}
    return BreakdownResponse(
        summary=hole_scoring_summary(selected, **options),
        by_par=by_par(selected, **options),
        by_length=by_length(selected, **options),
        by_stroke_index=by_stroke_index(selected, **options),
        after_previous=blowup_after_previous(selected, **options),
        distribution=scoring_distribution(selected, mode=payload.mode),
    )


__all__ = ["router"]
