"""
Exercise progress aggregation.

Summarises one exercise's history: averages and bests, the direction of
recent volume and a 0-100 progress score built from recency, consistency
and recent personal records.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Dict, List, Mapping, Optional, Sequence

from ..models.personal_records import ExerciseProgress, PersonalRecord, ProgressTrend
from ..models.workouts import PerformanceSet
from ..utils.dates import days_between, ensure_utc, utc_now

logger = logging.getLogger(__name__)


# Recency bonus: (max whole days since last set, points)
RECENCY_BONUS = (
    (3, 20),
    (7, 15),
    (14, 10),
    (30, 5),
)
BASE_SCORE = 50
POINTS_PER_WEEK = 2
MAX_CONSISTENCY_POINTS = 15
POINTS_PER_RECENT_PR = 5
MAX_RECENT_PR_POINTS = 15


def _average_volume(sets: Sequence[PerformanceSet]) -> float:
    return sum(s.volume for s in sets) / len(sets)


def calculate_progress_trend(
    sets: Sequence[PerformanceSet],
    window: int = 6,
    min_sets: int = 4,
    threshold: float = 0.05,
) -> ProgressTrend:
    """Compare the average volume of the last ``window`` sets with the window before.

    Args:
        sets: Qualifying sets, oldest first
        window: Sets per comparison window
        min_sets: Fewer sets than this always reads as stable
        threshold: Relative change needed to leave "stable"

    Returns:
        ProgressTrend
    """
    if len(sets) < min_sets:
        return ProgressTrend.STABLE

    recent = sets[-window:]
    older = sets[-2 * window:-window]
    if not older:
        return ProgressTrend.STABLE

    older_avg = _average_volume(older)
    if older_avg == 0:
        return ProgressTrend.STABLE

    change = (_average_volume(recent) - older_avg) / older_avg
    if change > threshold:
        return ProgressTrend.IMPROVING
    if change < -threshold:
        return ProgressTrend.DECLINING
    return ProgressTrend.STABLE


def calculate_progress_score(
    sets: Sequence[PerformanceSet],
    records: Sequence[PersonalRecord],
    now: Optional[datetime] = None,
    recent_pr_days: int = 30,
) -> int:
    """Weighted 0-100 heuristic of how an exercise is going.

    - Base 50
    - Recency: +20/15/10/5 when the last set is within 3/7/14/30 days
    - Consistency: +2 per distinct ISO week logged, up to 15
    - Recent PRs: +5 per record in the trailing window, up to 15
    """
    if not sets:
        return 0

    now = ensure_utc(now) if now is not None else utc_now()
    score = BASE_SCORE

    last_performed = max(s.completed_at for s in sets)
    days_since = math.floor(days_between(now, last_performed))
    for max_days, points in RECENCY_BONUS:
        if days_since <= max_days:
            score += points
            break

    weeks = {s.completed_at.isocalendar()[:2] for s in sets}
    score += min(len(weeks) * POINTS_PER_WEEK, MAX_CONSISTENCY_POINTS)

    cutoff = now - timedelta(days=recent_pr_days)
    recent_prs = sum(1 for r in records if r.achieved_at >= cutoff)
    score += min(recent_prs * POINTS_PER_RECENT_PR, MAX_RECENT_PR_POINTS)

    return min(max(score, 0), 100)


def calculate_exercise_progress(
    exercise_id: str,
    exercise_name: str,
    sets: Sequence[PerformanceSet],
    records: Sequence[PersonalRecord],
    muscle_groups: Optional[List[str]] = None,
    now: Optional[datetime] = None,
    trend_window: int = 6,
    trend_min_sets: int = 4,
    trend_threshold: float = 0.05,
    recent_pr_days: int = 30,
) -> ExerciseProgress:
    """Build the progress summary for one exercise.

    Averages, bests and the trend use sets with both load and reps; session
    count, last performed and the score use every set of the exercise.
    """
    muscle_groups = list(muscle_groups or [])
    exercise_records = [r for r in records if r.exercise_id == exercise_id]

    if not sets:
        return ExerciseProgress(
            exercise_id=exercise_id,
            exercise_name=exercise_name,
            muscle_groups=muscle_groups,
        )

    ordered = sorted(sets, key=lambda s: s.completed_at)
    strength_sets = [s for s in ordered if s.has_strength_data]

    progress = ExerciseProgress(
        exercise_id=exercise_id,
        exercise_name=exercise_name,
        muscle_groups=muscle_groups,
        records=exercise_records,
        progress_trend=calculate_progress_trend(
            strength_sets, trend_window, trend_min_sets, trend_threshold,
        ),
        total_sessions=len({s.workout_id for s in ordered}),
        last_performed=ordered[-1].completed_at,
        progress_score=calculate_progress_score(ordered, exercise_records, now, recent_pr_days),
    )

    if strength_sets:
        count = len(strength_sets)
        progress.average_weight = sum(s.weight for s in strength_sets) / count
        progress.average_reps = sum(s.reps for s in strength_sets) / count
        progress.average_volume = _average_volume(strength_sets)
        progress.best_weight = max(s.weight for s in strength_sets)
        progress.best_reps = max(s.reps for s in strength_sets)
        progress.best_volume = max(s.volume for s in strength_sets)

    return progress


def calculate_all_exercise_progress(
    groups: Mapping[str, Sequence[PerformanceSet]],
    records: Sequence[PersonalRecord],
    muscle_groups: Optional[Mapping[str, List[str]]] = None,
    now: Optional[datetime] = None,
    **options,
) -> List[ExerciseProgress]:
    """One summary per exercise group, in group order.

    Muscle groups come from ``muscle_groups`` when given, else from the
    first set that carries any.
    """
    records_by_exercise: Dict[str, List[PersonalRecord]] = {}
    for record in records:
        records_by_exercise.setdefault(record.exercise_id, []).append(record)

    summaries = []
    for exercise_id, sets in groups.items():
        if not sets:
            continue
        groups_for_exercise = (muscle_groups or {}).get(exercise_id)
        if groups_for_exercise is None:
            groups_for_exercise = next((s.muscle_groups for s in sets if s.muscle_groups), [])
        summaries.append(calculate_exercise_progress(
            exercise_id,
            sets[0].exercise_name,
            sets,
            records_by_exercise.get(exercise_id, []),
            muscle_groups=groups_for_exercise,
            now=now,
            **options,
        ))

    logger.debug(f"Computed progress for {len(summaries)} exercises")
    return summaries
