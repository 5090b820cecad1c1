"""Flatten workout history into chronologically ordered per-set records.

Raw workouts may arrive as ``WorkoutLog`` models or as plain dictionaries
straight from storage. Dictionaries are validated one level at a time so a
single malformed set only costs that set, never its workout.
"""

import logging
from collections import OrderedDict
from typing import Any, Dict, Iterable, Iterator, List, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from ..models.workouts import ExerciseLog, PerformanceSet, SetLog, WorkoutLog

logger = logging.getLogger(__name__)

RawWorkout = Union[WorkoutLog, Dict[str, Any]]


def _iter_workout_sets(
    raw_workout: RawWorkout,
) -> Iterator[Tuple[WorkoutLog, ExerciseLog, SetLog]]:
    """Yield validated (workout, exercise, set) triples, skipping bad records."""
    if isinstance(raw_workout, WorkoutLog):
        for exercise in raw_workout.exercises:
            for set_log in exercise.sets:
                yield raw_workout, exercise, set_log
        return

    if not isinstance(raw_workout, dict):
        logger.debug(f"Skipping workout of unexpected type {type(raw_workout).__name__}")
        return

    try:
        workout = WorkoutLog.model_validate({**raw_workout, "exercises": []})
    except PydanticValidationError as e:
        logger.debug(f"Skipping malformed workout {raw_workout.get('id')!r}: {e.error_count()} errors")
        return

    for raw_exercise in raw_workout.get("exercises") or []:
        if not isinstance(raw_exercise, dict):
            continue
        try:
            exercise = ExerciseLog.model_validate({**raw_exercise, "sets": []})
        except PydanticValidationError:
            logger.debug(f"Skipping malformed exercise in workout {workout.id}")
            continue

        raw_sets = raw_exercise.get("sets") or []
        if not isinstance(raw_sets, list):
            logger.debug(f"Skipping exercise {exercise.identity!r} with malformed sets")
            continue

        for raw_set in raw_sets:
            try:
                set_log = SetLog.model_validate(raw_set)
            except PydanticValidationError:
                logger.debug(f"Skipping malformed set in workout {workout.id}")
                continue
            yield workout, exercise, set_log


def _is_qualifying(set_log: SetLog) -> bool:
    """Completed and carrying either strength or cardio data."""
    if not set_log.is_completed:
        return False
    if set_log.actual_weight_kg and set_log.actual_reps:
        return True
    return bool(set_log.duration_seconds) or bool(set_log.distance_meters)


def extract_sets(workouts: Iterable[RawWorkout]) -> List[PerformanceSet]:
    """Flatten workouts into qualifying sets ordered by completion time.

    The sort is stable, so sets sharing a timestamp keep their input order.

    Args:
        workouts: Workout history (models or storage dictionaries)

    Returns:
        Qualifying PerformanceSets, oldest first
    """
    sets: List[PerformanceSet] = []
    skipped = 0

    for raw_workout in workouts:
        for workout, exercise, set_log in _iter_workout_sets(raw_workout):
            if not _is_qualifying(set_log):
                skipped += 1
                continue

            exercise_id = exercise.identity
            completed_at = set_log.completed_at or workout.timestamp
            if exercise_id is None or completed_at is None:
                skipped += 1
                continue

            sets.append(PerformanceSet(
                exercise_id=exercise_id,
                exercise_name=exercise.exercise_name,
                weight=set_log.actual_weight_kg or 0.0,
                reps=set_log.actual_reps or 0,
                duration_seconds=set_log.duration_seconds,
                distance_meters=set_log.distance_meters,
                completed_at=completed_at,
                workout_id=workout.id,
                set_id=set_log.id,
                muscle_groups=list(exercise.muscle_groups),
            ))

    if skipped:
        logger.debug(f"Dropped {skipped} incomplete sets during normalization")

    return sorted(sets, key=lambda s: s.completed_at)


def group_sets_by_exercise(
    sets: Iterable[PerformanceSet],
) -> "OrderedDict[str, List[PerformanceSet]]":
    """Partition sets by exercise, each group ordered by completion time.

    Groups appear in the order their exercise was first seen.
    """
    groups: "OrderedDict[str, List[PerformanceSet]]" = OrderedDict()
    for performance_set in sets:
        groups.setdefault(performance_set.exercise_id, []).append(performance_set)

    for exercise_id, group in groups.items():
        groups[exercise_id] = sorted(group, key=lambda s: s.completed_at)

    return groups


def normalize_workouts(
    workouts: Iterable[RawWorkout],
) -> "OrderedDict[str, List[PerformanceSet]]":
    """Extract and group in one step: exerciseId -> sets, oldest first."""
    return group_sets_by_exercise(extract_sets(workouts))
