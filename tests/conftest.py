"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from progress_analytics.config import AnalyticsSettings
from progress_analytics.models.measurements import Measurement
from progress_analytics.services.analytics_service import ProgressAnalyticsService


NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """Fixed reference time (Saturday 2024-06-15 12:00 UTC)."""
    return NOW


@pytest.fixture
def make_set():
    """Build a raw set dictionary as stored by the app."""
    counter = {"n": 0}

    def _make(weight=None, reps=None, completed=True, duration=None, distance=None, completed_at=None, id=None):
        counter["n"] += 1
        raw = {
            "id": id or f"set-{counter['n']}",
            "isCompleted": completed,
            "actualWeightKg": weight,
            "actualReps": reps,
        }
        if duration is not None:
            raw["durationSeconds"] = duration
        if distance is not None:
            raw["distanceMeters"] = distance
        if completed_at is not None:
            raw["completedAt"] = completed_at.isoformat()
        return raw

    return _make


@pytest.fixture
def make_workout():
    """Build a raw workout with one exercise per (exercise_id, sets) pair."""

    def _make(workout_id, completed_at, *exercises, name_prefix="Exercise"):
        return {
            "id": workout_id,
            "completedAt": completed_at.isoformat() if completed_at else None,
            "exercises": [
                {
                    "id": f"{workout_id}-{exercise_id}",
                    "exerciseId": exercise_id,
                    "exerciseName": f"{name_prefix} {exercise_id}",
                    "muscleGroups": ["chest"],
                    "sets": sets,
                }
                for exercise_id, sets in exercises
            ],
        }

    return _make


@pytest.fixture
def make_measurement(now):
    """Build a Measurement dated ``days_ago`` days before NOW."""

    def _make(type, value, days_ago=0, unit="", hours=0):
        return Measurement(
            type=type,
            value=value,
            unit=unit,
            date=now - timedelta(days=days_ago, hours=hours),
        )

    return _make


@pytest.fixture
def bench_history(make_workout, make_set, now):
    """Scenario: bench 100x5, then 100x8, then 110x5 on consecutive weeks."""
    return [
        make_workout("w1", now - timedelta(days=14), ("bench", [make_set(100, 5)])),
        make_workout("w2", now - timedelta(days=7), ("bench", [make_set(100, 8)])),
        make_workout("w3", now - timedelta(days=1), ("bench", [make_set(110, 5)])),
    ]


@pytest.fixture
def settings():
    """Default settings, ignoring any local .env file."""
    return AnalyticsSettings(_env_file=None)


@pytest.fixture
def service(settings, now):
    """Analytics service pinned to NOW."""
    return ProgressAnalyticsService(settings=settings, clock=lambda: now)
