"""Measurement-side analysis: catalog, trends, statistics, anomalies and correlation."""

from .catalog import (
    HEIGHT_TYPE,
    MEASUREMENT_TYPES,
    DefaultGoal,
    GoalType,
    MeasurementCategory,
    MeasurementTypeInfo,
    SuggestedFrequency,
    display_name,
    format_measurement_value,
    get_measurement_categories,
    get_measurement_type,
    get_measurement_types_by_category,
    get_suggested_frequency,
    require_valid_measurement,
    validate_measurement_value,
)
from .series import latest, normalize_measurements, of_type, types_in_order
from .trends import (
    calculate_all_trends,
    calculate_trend,
    get_progress_data,
    parse_period,
    smooth_measurements,
)
from .stats import (
    calculate_bmi,
    calculate_body_fat_navy,
    calculate_stats,
    calculate_streak_days,
)
from .anomalies import detect_anomalies
from .correlation import calculate_correlation

__all__ = [
    "HEIGHT_TYPE",
    "MEASUREMENT_TYPES",
    "DefaultGoal",
    "GoalType",
    "MeasurementCategory",
    "MeasurementTypeInfo",
    "SuggestedFrequency",
    "display_name",
    "format_measurement_value",
    "get_measurement_categories",
    "get_measurement_type",
    "get_measurement_types_by_category",
    "get_suggested_frequency",
    "require_valid_measurement",
    "validate_measurement_value",
    "latest",
    "normalize_measurements",
    "of_type",
    "types_in_order",
    "calculate_all_trends",
    "calculate_trend",
    "get_progress_data",
    "parse_period",
    "smooth_measurements",
    "calculate_bmi",
    "calculate_body_fat_navy",
    "calculate_stats",
    "calculate_streak_days",
    "detect_anomalies",
    "calculate_correlation",
]
