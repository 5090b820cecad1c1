"""Body measurement models and the results derived from them."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator

from ..utils.dates import coerce_timestamp, ensure_utc
from .base import CamelModel, FrozenCamelModel


class Period(str, Enum):
    """Look-back windows for measurement trends."""
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @property
    def days(self) -> int:
        return PERIOD_DAYS[self]


PERIOD_DAYS = {
    Period.WEEK: 7,
    Period.MONTH: 30,
    Period.QUARTER: 90,
    Period.YEAR: 365,
}


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class Gender(str, Enum):
    """Supported variants of the Navy body-fat formula."""
    MALE = "male"
    FEMALE = "female"


class InsightType(str, Enum):
    TREND = "trend"
    MILESTONE = "milestone"
    ANOMALY = "anomaly"


class InsightPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return {"high": 3, "medium": 2, "low": 1}[self.value]


class Measurement(FrozenCamelModel):
    """A dated scalar body measurement."""

    type: str = Field(..., min_length=1, description="Measurement type id, e.g. body_weight")
    value: float = Field(..., allow_inf_nan=False)
    unit: str = Field(default="", description="Unit of the value")
    date: datetime = Field(..., description="When the measurement was taken")
    id: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, value: Any) -> Any:
        return coerce_timestamp(value)

    @field_validator("date")
    @classmethod
    def to_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class MeasurementTrend(CamelModel):
    """Period-over-period change of one measurement type."""

    measurement_type: str
    period: Period
    trend: TrendDirection
    current: float
    previous: float
    change: float
    change_percent: float
    data_points: int


class MeasurementStats(CamelModel):
    """Corpus-wide logging statistics."""

    total_measurements: int = 0
    measurement_types: int = 0
    streak_days: int = 0
    most_tracked_type: str = ""
    average_frequency: float = Field(default=0.0, description="Measurements per week")


class Insight(CamelModel):
    """A human-readable observation about the measurement history."""

    type: InsightType
    title: str
    description: str
    priority: InsightPriority
    measurement_type: Optional[str] = None


class ProgressPoint(CamelModel):
    """A chart point for one measurement."""

    date: datetime
    value: float
    label: Optional[str] = None


class SmoothedPoint(CamelModel):
    """A moving-average point alongside the raw reading."""

    date: datetime
    value: float
    original_value: float
