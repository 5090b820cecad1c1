"""Deterministic personal-record, progress and body measurement analytics."""

__version__ = "0.1.0"

from .exceptions import (
    ErrorCode,
    InvalidParameterError,
    MeasurementValidationError,
    NotFoundError,
    ProgressAnalyticsError,
    ValidationError,
)
from .analysis import (
    calculate_all_exercise_progress,
    calculate_exercise_progress,
    detect_personal_records,
    normalize_workouts,
    summarize_records,
)
from .measurements import (
    calculate_all_trends,
    calculate_bmi,
    calculate_body_fat_navy,
    calculate_correlation,
    calculate_stats,
    calculate_trend,
    detect_anomalies,
    get_progress_data,
    normalize_measurements,
    smooth_measurements,
)
from .insights import generate_insights
from .services import ProgressAnalyticsService

__all__ = [
    "__version__",
    "ErrorCode",
    "InvalidParameterError",
    "MeasurementValidationError",
    "NotFoundError",
    "ProgressAnalyticsError",
    "ValidationError",
    "calculate_all_exercise_progress",
    "calculate_exercise_progress",
    "detect_personal_records",
    "normalize_workouts",
    "summarize_records",
    "calculate_all_trends",
    "calculate_bmi",
    "calculate_body_fat_navy",
    "calculate_correlation",
    "calculate_stats",
    "calculate_trend",
    "detect_anomalies",
    "get_progress_data",
    "normalize_measurements",
    "smooth_measurements",
    "generate_insights",
    "ProgressAnalyticsService",
]
