"""Workout log models: raw storage records and the normalized per-set view."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field, field_validator

from ..utils.dates import coerce_timestamp, ensure_utc
from .base import CamelModel, FrozenCamelModel


def _id_to_str(value: Any) -> Any:
    """Storage rows may carry integer keys."""
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


# =============================================================================
# Raw logs (as handed over by the storage/sync layer)
# =============================================================================

class SetLog(CamelModel):
    """A single logged set inside an exercise."""

    id: Optional[str] = Field(None, description="Set identifier")
    is_completed: bool = Field(default=False, description="Whether the set was completed")
    actual_weight_kg: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    actual_reps: Optional[int] = Field(None, ge=0)
    duration_seconds: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    distance_meters: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    completed_at: Optional[datetime] = Field(None, description="Set-level completion time")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        return _id_to_str(value)

    @field_validator("completed_at", mode="before")
    @classmethod
    def coerce_completed_at(cls, value: Any) -> Any:
        return coerce_timestamp(value)

    @field_validator("completed_at")
    @classmethod
    def to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None


class ExerciseLog(CamelModel):
    """An exercise performed within a workout."""

    id: Optional[str] = Field(None, description="Workout-exercise row identifier")
    exercise_id: Optional[str] = Field(None, description="Catalog exercise identifier")
    exercise_name: str = Field(default="Unknown Exercise")
    muscle_groups: List[str] = Field(default_factory=list)
    sets: List[SetLog] = Field(default_factory=list)

    @field_validator("id", "exercise_id", mode="before")
    @classmethod
    def coerce_ids(cls, value: Any) -> Any:
        return _id_to_str(value)

    @property
    def identity(self) -> Optional[str]:
        """The key sets are grouped by."""
        return self.exercise_id or self.id


class WorkoutLog(CamelModel):
    """A completed workout with its nested exercises."""

    id: str = Field(..., description="Workout identifier")
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    exercises: List[ExerciseLog] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        return _id_to_str(value)

    @field_validator("completed_at", "created_at", mode="before")
    @classmethod
    def coerce_timestamps(cls, value: Any) -> Any:
        return coerce_timestamp(value)

    @field_validator("completed_at", "created_at")
    @classmethod
    def to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None

    @property
    def timestamp(self) -> Optional[datetime]:
        """When the workout happened: completion time, else creation time."""
        return self.completed_at or self.created_at


# =============================================================================
# Normalized sets
# =============================================================================

class PerformanceSet(FrozenCamelModel):
    """One completed set, flattened out of its workout and exercise."""

    exercise_id: str = Field(..., description="Exercise identity used for grouping")
    exercise_name: str = Field(..., description="Display name of the exercise")
    weight: float = Field(default=0.0, ge=0, allow_inf_nan=False, description="Load in kg")
    reps: int = Field(default=0, ge=0)
    duration_seconds: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    distance_meters: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    completed_at: datetime = Field(..., description="When the set was completed")
    workout_id: str = Field(..., description="Workout the set belongs to")
    set_id: Optional[str] = Field(None, description="Source set identifier")
    muscle_groups: List[str] = Field(default_factory=list)

    @field_validator("completed_at", mode="before")
    @classmethod
    def coerce_completed_at(cls, value: Any) -> Any:
        return coerce_timestamp(value)

    @field_validator("completed_at")
    @classmethod
    def to_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @property
    def volume(self) -> float:
        """Weight x reps for this set."""
        return self.weight * self.reps

    @property
    def has_strength_data(self) -> bool:
        """Whether the set counts for weight, reps and volume records."""
        return self.weight > 0 and self.reps > 0

    @property
    def has_duration(self) -> bool:
        return self.duration_seconds is not None and self.duration_seconds > 0
