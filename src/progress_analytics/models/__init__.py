"""Data models for the progress analytics engine."""

from .base import CamelModel, FrozenCamelModel, to_camel

from .workouts import (
    ExerciseLog,
    PerformanceSet,
    SetLog,
    WorkoutLog,
)

from .personal_records import (
    ExerciseProgress,
    PersonalRecord,
    PRSummary,
    PRType,
    ProgressTrend,
    SetDetails,
)

from .measurements import (
    Gender,
    Insight,
    InsightPriority,
    InsightType,
    Measurement,
    MeasurementStats,
    MeasurementTrend,
    Period,
    PERIOD_DAYS,
    ProgressPoint,
    SmoothedPoint,
    TrendDirection,
)

from .report import (
    AnalyticsReport,
    AnalyticsSnapshot,
    BodyCompositionResponse,
    CorrelationResponse,
    MeasurementValueCheck,
    MeasurementValueCheckResult,
    RecordsResponse,
)

__all__ = [
    "CamelModel",
    "FrozenCamelModel",
    "to_camel",
    # Workouts
    "ExerciseLog",
    "PerformanceSet",
    "SetLog",
    "WorkoutLog",
    # Records and progress
    "ExerciseProgress",
    "PersonalRecord",
    "PRSummary",
    "PRType",
    "ProgressTrend",
    "SetDetails",
    # Measurements
    "Gender",
    "Insight",
    "InsightPriority",
    "InsightType",
    "Measurement",
    "MeasurementStats",
    "MeasurementTrend",
    "Period",
    "PERIOD_DAYS",
    "ProgressPoint",
    "SmoothedPoint",
    "TrendDirection",
    # Report
    "AnalyticsReport",
    "AnalyticsSnapshot",
    "BodyCompositionResponse",
    "CorrelationResponse",
    "MeasurementValueCheck",
    "MeasurementValueCheckResult",
    "RecordsResponse",
]
