"""Workout-side analysis: normalization, PR detection and exercise progress."""

from .normalizer import (
    extract_sets,
    group_sets_by_exercise,
    normalize_workouts,
)
from .records import (
    detect_duration_prs,
    detect_exercise_records,
    detect_personal_records,
    detect_rep_prs,
    detect_volume_prs,
    detect_weight_prs,
    record_id,
    summarize_records,
)
from .progress import (
    calculate_all_exercise_progress,
    calculate_exercise_progress,
    calculate_progress_score,
    calculate_progress_trend,
)

__all__ = [
    "extract_sets",
    "group_sets_by_exercise",
    "normalize_workouts",
    "detect_duration_prs",
    "detect_exercise_records",
    "detect_personal_records",
    "detect_rep_prs",
    "detect_volume_prs",
    "detect_weight_prs",
    "record_id",
    "summarize_records",
    "calculate_all_exercise_progress",
    "calculate_exercise_progress",
    "calculate_progress_score",
    "calculate_progress_trend",
]
