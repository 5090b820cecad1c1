"""Input snapshot and combined output of a full analytics run."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field

from .base import CamelModel
from .measurements import Gender, Insight, MeasurementStats, MeasurementTrend
from .personal_records import ExerciseProgress, PersonalRecord, PRSummary


class AnalyticsSnapshot(CamelModel):
    """Raw collections handed over by the storage layer.

    Entries are left unvalidated so that a malformed record, even a null
    or a bare string, is skipped during normalization instead of failing
    the whole request.
    """

    workouts: List[Any] = Field(default_factory=list)
    measurements: List[Any] = Field(default_factory=list)


class AnalyticsReport(CamelModel):
    """Everything the engine derives from one snapshot."""

    personal_records: List[PersonalRecord] = Field(default_factory=list)
    exercise_progress: List[ExerciseProgress] = Field(default_factory=list)
    measurement_trends: List[MeasurementTrend] = Field(default_factory=list)
    measurement_stats: MeasurementStats = Field(default_factory=MeasurementStats)
    bmi: Optional[float] = None
    insights: List[Insight] = Field(default_factory=list)
    generated_at: datetime


class RecordsResponse(CamelModel):
    """Detected records with their summary."""

    records: List[PersonalRecord] = Field(default_factory=list)
    summary: PRSummary


class CorrelationResponse(CamelModel):
    type_a: str
    type_b: str
    coefficient: Optional[float] = Field(None, description="Pearson r, null without enough paired data")


class BodyCompositionResponse(CamelModel):
    """BMI and Navy body-fat estimate from the latest measurements."""

    bmi: Optional[float] = None
    body_fat: Optional[float] = None
    gender: Gender


class MeasurementValueCheck(CamelModel):
    type: str
    value: float


class MeasurementValueCheckResult(CamelModel):
    is_valid: bool
    error: Optional[str] = None
