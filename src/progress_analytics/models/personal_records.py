"""Personal Records (PR) and per-exercise progress models."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from .base import CamelModel


class PRType(str, Enum):
    """Types of personal records that can be tracked."""
    WEIGHT = "weight"          # Heaviest load lifted
    REPS = "reps"              # Most reps at a given load
    VOLUME = "volume"          # Highest weight x reps in a single set
    DURATION = "duration"      # Longest timed set


class ProgressTrend(str, Enum):
    """Direction of an exercise's recent volume."""
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class SetDetails(CamelModel):
    """The set that produced a record."""

    weight: float
    reps: int
    volume: float


class PersonalRecord(CamelModel):
    """A personal record event: a metric strictly beat its previous best."""

    id: str = Field(..., description="Deterministic record identifier")
    exercise_id: str = Field(..., description="Exercise the record belongs to")
    exercise_name: str = Field(..., description="Display name of the exercise")
    record_type: PRType = Field(..., description="Type of personal record")
    value: float = Field(..., description="Record value (kg, reps, kg volume or seconds)")
    unit: str = Field(..., description="Unit of measurement")
    achieved_at: datetime = Field(..., description="When the record was achieved")
    workout_id: str = Field(..., description="ID of the workout where the record was set")
    previous_record: Optional[float] = Field(None, description="Previous best value")
    improvement: float = Field(..., description="Improvement over the previous best")
    improvement_percentage: float = Field(..., description="Improvement percentage")
    set_details: Optional[SetDetails] = Field(None, description="Set that produced the record")


class ExerciseProgress(CamelModel):
    """Summary of one exercise's history for a computation run."""

    exercise_id: str
    exercise_name: str
    muscle_groups: List[str] = Field(default_factory=list)
    records: List[PersonalRecord] = Field(default_factory=list)
    progress_trend: ProgressTrend = ProgressTrend.STABLE
    total_sessions: int = Field(default=0, description="Distinct workouts containing the exercise")
    last_performed: Optional[datetime] = None
    average_weight: float = 0.0
    average_reps: float = 0.0
    average_volume: float = 0.0
    best_weight: float = 0.0
    best_reps: int = 0
    best_volume: float = 0.0
    progress_score: int = Field(default=0, ge=0, le=100, description="0-100 progress heuristic")


class PRSummary(CamelModel):
    """Summary of a user's personal records."""

    total_prs: int = Field(default=0, description="Total number of PRs")
    recent_prs: int = Field(default=0, description="PRs in the trailing window")
    prs_by_type: dict = Field(default_factory=dict, description="Count of PRs by type")
    latest_pr: Optional[PersonalRecord] = Field(None, description="Most recently achieved PR")
