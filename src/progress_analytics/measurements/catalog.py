"""Known body measurement types, value validation and display formatting."""

import math
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import Field

from ..exceptions import ErrorCode, MeasurementValidationError
from ..models.base import CamelModel


class MeasurementCategory(str, Enum):
    WEIGHT = "weight"
    BODY = "body"
    PERFORMANCE = "performance"


class GoalType(str, Enum):
    INCREASE = "increase"
    DECREASE = "decrease"
    MAINTAIN = "maintain"


class DefaultGoal(CamelModel):
    type: GoalType
    target: Optional[float] = None


class MeasurementTypeInfo(CamelModel):
    """Catalog entry describing one measurement type."""

    id: str
    name: str
    unit: str
    category: MeasurementCategory
    description: str
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    step: Optional[float] = None
    default_goal: Optional[DefaultGoal] = None


class SuggestedFrequency(CamelModel):
    frequency: str = Field(..., description="daily, weekly or monthly")
    description: str


def _entry(
    id: str,
    name: str,
    unit: str,
    category: MeasurementCategory,
    description: str,
    min_value: float,
    max_value: float,
    step: float,
    goal: GoalType,
    target: Optional[float] = None,
) -> MeasurementTypeInfo:
    return MeasurementTypeInfo(
        id=id,
        name=name,
        unit=unit,
        category=category,
        description=description,
        min_value=min_value,
        max_value=max_value,
        step=step,
        default_goal=DefaultGoal(type=goal, target=target),
    )


_W, _B, _P = MeasurementCategory.WEIGHT, MeasurementCategory.BODY, MeasurementCategory.PERFORMANCE
_UP, _DOWN, _KEEP = GoalType.INCREASE, GoalType.DECREASE, GoalType.MAINTAIN

MEASUREMENT_TYPES: List[MeasurementTypeInfo] = [
    # Weight
    _entry("body_weight", "Body Weight", "kg", _W, "Overall body weight", 30, 300, 0.1, _KEEP),
    _entry("body_fat", "Body Fat %", "%", _W, "Body fat percentage", 3, 50, 0.1, _DOWN, 15),
    _entry("muscle_mass", "Muscle Mass", "kg", _W, "Total muscle mass", 10, 100, 0.1, _UP),
    # Body
    _entry("chest", "Chest", "cm", _B, "Chest circumference", 50, 200, 0.5, _UP),
    _entry("waist", "Waist", "cm", _B, "Waist circumference", 40, 150, 0.5, _DOWN),
    _entry("hips", "Hips", "cm", _B, "Hip circumference", 50, 200, 0.5, _KEEP),
    _entry("bicep_left", "Left Bicep", "cm", _B, "Left bicep circumference", 15, 60, 0.5, _UP),
    _entry("bicep_right", "Right Bicep", "cm", _B, "Right bicep circumference", 15, 60, 0.5, _UP),
    _entry("thigh_left", "Left Thigh", "cm", _B, "Left thigh circumference", 30, 100, 0.5, _UP),
    _entry("thigh_right", "Right Thigh", "cm", _B, "Right thigh circumference", 30, 100, 0.5, _UP),
    _entry("neck", "Neck", "cm", _B, "Neck circumference", 20, 60, 0.5, _KEEP),
    _entry("forearm_left", "Left Forearm", "cm", _B, "Left forearm circumference", 15, 50, 0.5, _UP),
    _entry("forearm_right", "Right Forearm", "cm", _B, "Right forearm circumference", 15, 50, 0.5, _UP),
    # Performance
    _entry("resting_heart_rate", "Resting Heart Rate", "bpm", _P, "Resting heart rate", 40, 120, 1, _DOWN, 60),
    _entry("blood_pressure_systolic", "Blood Pressure (Systolic)", "mmHg", _P,
           "Systolic blood pressure", 80, 200, 1, _KEEP, 120),
    _entry("blood_pressure_diastolic", "Blood Pressure (Diastolic)", "mmHg", _P,
           "Diastolic blood pressure", 50, 120, 1, _KEEP, 80),
    _entry("vo2_max", "VO2 Max", "ml/kg/min", _P, "Maximum oxygen uptake", 20, 80, 0.1, _UP),
    _entry("flexibility_score", "Flexibility Score", "points", _P,
           "Overall flexibility assessment", 0, 100, 1, _UP, 80),
    _entry("sleep_quality", "Sleep Quality", "/10", _P, "Subjective sleep quality rating", 1, 10, 1, _UP, 8),
    _entry("energy_level", "Energy Level", "/10", _P, "Daily energy level rating", 1, 10, 1, _UP, 8),
    _entry("stress_level", "Stress Level", "/10", _P, "Daily stress level rating", 1, 10, 1, _DOWN, 3),
]

_BY_ID: Dict[str, MeasurementTypeInfo] = {t.id: t for t in MEASUREMENT_TYPES}

# Height is not a tracked progress metric but feeds BMI and body fat
HEIGHT_TYPE = "height"

DAILY_LIFESTYLE_TYPES = {"sleep_quality", "energy_level", "stress_level"}


def get_measurement_type(type_id: str) -> Optional[MeasurementTypeInfo]:
    """Catalog entry for an id, or None."""
    return _BY_ID.get(type_id)


def get_measurement_types_by_category(category: MeasurementCategory) -> List[MeasurementTypeInfo]:
    return [t for t in MEASUREMENT_TYPES if t.category == MeasurementCategory(category)]


def get_measurement_categories() -> List[MeasurementCategory]:
    """Categories in catalog order."""
    return list(dict.fromkeys(t.category for t in MEASUREMENT_TYPES))


def display_name(type_id: str) -> str:
    """Human-readable name, falling back to the raw id."""
    info = _BY_ID.get(type_id)
    return info.name if info else type_id


def validate_measurement_value(type_id: str, value: float) -> Tuple[bool, Optional[str]]:
    """Check a value against the type's plausible range.

    Returns:
        (is_valid, error message or None)
    """
    info = _BY_ID.get(type_id)
    if info is None:
        return False, "Invalid measurement type"

    if not math.isfinite(value) or value <= 0:
        return False, "Value must be a positive number"

    if info.min_value and value < info.min_value:
        return False, f"Value must be at least {info.min_value:g} {info.unit}"

    if info.max_value and value > info.max_value:
        return False, f"Value must not exceed {info.max_value:g} {info.unit}"

    return True, None


def require_valid_measurement(type_id: str, value: float) -> None:
    """Raise MeasurementValidationError when ``validate_measurement_value`` fails."""
    is_valid, error = validate_measurement_value(type_id, value)
    if is_valid:
        return
    exc = MeasurementValidationError(error, measurement_type=type_id, details={"value": value})
    if type_id not in _BY_ID:
        exc.code = ErrorCode.UNKNOWN_MEASUREMENT_TYPE
    raise exc


def format_measurement_value(value: float, unit: str) -> str:
    """Format a value for display according to its unit."""
    if unit in ("%", "/10"):
        return f"{value:.1f}{unit}"

    if unit in ("kg", "cm", "ml/kg/min"):
        return f"{value:.1f} {unit}"

    if unit in ("bpm", "mmHg", "points"):
        return f"{math.floor(value + 0.5)} {unit}"

    return f"{value:g} {unit}".strip()


def get_suggested_frequency(type_id: str) -> SuggestedFrequency:
    """How often a type is worth logging, by category."""
    info = _BY_ID.get(type_id)
    if info is None:
        return SuggestedFrequency(frequency="weekly", description="Weekly tracking recommended")

    if info.category == MeasurementCategory.WEIGHT:
        if info.id == "body_weight":
            return SuggestedFrequency(frequency="daily", description="Daily morning weigh-ins for best accuracy")
        return SuggestedFrequency(frequency="weekly", description="Weekly measurements for tracking changes")

    if info.category == MeasurementCategory.BODY:
        return SuggestedFrequency(frequency="weekly", description="Weekly measurements to track progress")

    if info.id in DAILY_LIFESTYLE_TYPES:
        return SuggestedFrequency(frequency="daily", description="Daily tracking for lifestyle insights")
    if info.id == "resting_heart_rate":
        return SuggestedFrequency(frequency="daily", description="Daily morning measurements")
    return SuggestedFrequency(frequency="monthly", description="Monthly assessments recommended")
