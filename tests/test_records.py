"""Tests for personal record detection."""

from datetime import timedelta

import pytest

from progress_analytics.analysis.normalizer import extract_sets, normalize_workouts
from progress_analytics.analysis.records import (
    detect_duration_prs,
    detect_personal_records,
    detect_rep_prs,
    detect_volume_prs,
    detect_weight_prs,
    record_id,
    summarize_records,
)
from progress_analytics.models.personal_records import PRSummary, PRType


def _values(records, record_type):
    return [r.value for r in records if r.record_type == record_type]


class TestScenarioBench:
    """Bench 100x5, then 100x8, then 110x5."""

    @pytest.fixture
    def records(self, bench_history):
        return detect_personal_records(normalize_workouts(bench_history))

    def test_weight_records(self, records):
        """Weight PRs at 100 then 110."""
        weight = sorted(r.value for r in records if r.record_type == PRType.WEIGHT)
        assert weight == [100, 110]

        latest = next(r for r in records if r.record_type == PRType.WEIGHT and r.value == 110)
        assert latest.previous_record == 100
        assert latest.improvement == 10
        assert latest.improvement_percentage == pytest.approx(10.0)
        assert latest.workout_id == "w3"

    def test_rep_records_per_load(self, records):
        """Reps go 5 -> 8 at 100kg; 110kg gets its own first record."""
        at_100 = sorted(
            r.value for r in records
            if r.record_type == PRType.REPS and r.set_details.weight == 100
        )
        at_110 = [r for r in records if r.record_type == PRType.REPS and r.set_details.weight == 110]

        assert at_100 == [5, 8]
        assert len(at_110) == 1
        assert at_110[0].unit == "reps @ 110kg"
        assert at_110[0].previous_record is None

    def test_volume_records_follow_running_max(self, records):
        """500 then 800; the 110x5 set (550) is below 800 so no record."""
        volume = sorted(r.value for r in records if r.record_type == PRType.VOLUME)
        assert volume == [500, 800]

        best = next(r for r in records if r.record_type == PRType.VOLUME and r.value == 800)
        assert best.previous_record == 500
        assert best.improvement == 300
        assert best.improvement_percentage == pytest.approx(60.0)
        assert best.set_details.reps == 8

    def test_newest_first(self, records):
        """Records are returned by achievedAt descending."""
        times = [r.achieved_at for r in records]
        assert times == sorted(times, reverse=True)
        assert records[0].workout_id == "w3"

    def test_first_record_improvement(self, records):
        """Without a previous record the improvement is the value and 100%."""
        first = next(r for r in records if r.record_type == PRType.WEIGHT and r.value == 100)
        assert first.previous_record is None
        assert first.improvement == 100
        assert first.improvement_percentage == 100.0

    def test_ids_are_unique(self, records):
        assert len({r.id for r in records}) == len(records)

    def test_recomputation_is_identical(self, bench_history, records):
        """Identical input yields identical output, ids included."""
        again = detect_personal_records(normalize_workouts(bench_history))
        assert again == records


class TestRecordRules:
    """Tests for the strict running-maximum rules."""

    def test_weight_records_strictly_increase(self, make_workout, make_set, now):
        """Weight PR values strictly increase with time."""
        loads = [60, 70, 65, 70, 80, 75, 90]
        workouts = [
            make_workout(f"w{i}", now - timedelta(days=len(loads) - i), ("bench", [make_set(w, 5)]))
            for i, w in enumerate(loads)
        ]

        records = detect_weight_prs(extract_sets(workouts))

        assert [r.value for r in records] == [60, 70, 80, 90]
        times = [r.achieved_at for r in records]
        assert times == sorted(times)

    def test_ties_never_create_records(self, make_workout, make_set, now):
        """Only the first of several tying sets triggers."""
        workouts = [
            make_workout("w1", now - timedelta(days=2), ("bench", [make_set(100, 5, id="a"), make_set(100, 5, id="b")])),
            make_workout("w2", now, ("bench", [make_set(100, 5, id="c")])),
        ]

        sets = extract_sets(workouts)

        weight = detect_weight_prs(sets)
        volume = detect_volume_prs(sets)
        reps = detect_rep_prs(sets)

        assert len(weight) == len(volume) == len(reps) == 1
        assert weight[0].id == record_id("bench", PRType.WEIGHT, sets[0].completed_at, "a")

    def test_cardio_sets_ignored_by_strength_scans(self, make_workout, make_set, now):
        """Sets without load and reps feed only the duration scan."""
        workouts = [make_workout("w1", now, ("plank", [make_set(duration=60)]))]
        sets = extract_sets(workouts)

        assert detect_weight_prs(sets) == []
        assert detect_rep_prs(sets) == []
        assert detect_volume_prs(sets) == []
        assert len(detect_duration_prs(sets)) == 1

    def test_duration_records(self, make_workout, make_set, now):
        """Longest timed set, in seconds, without set details."""
        workouts = [
            make_workout("w1", now - timedelta(days=3), ("plank", [make_set(duration=60)])),
            make_workout("w2", now - timedelta(days=2), ("plank", [make_set(duration=90)])),
            make_workout("w3", now - timedelta(days=1), ("plank", [make_set(duration=90)])),
        ]

        records = detect_duration_prs(extract_sets(workouts))

        assert [r.value for r in records] == [60, 90]
        assert records[1].unit == "seconds"
        assert records[1].improvement_percentage == pytest.approx(50.0)
        assert all(r.set_details is None for r in records)

    def test_rep_records_grouped_by_first_seen_load(self, make_workout, make_set, now):
        """Reps output lists each load's records together."""
        workouts = [
            make_workout("w1", now - timedelta(days=3), ("bench", [make_set(100, 5)])),
            make_workout("w2", now - timedelta(days=2), ("bench", [make_set(80, 10)])),
            make_workout("w3", now - timedelta(days=1), ("bench", [make_set(100, 6)])),
        ]

        records = detect_rep_prs(extract_sets(workouts))

        assert [(r.set_details.weight, r.value) for r in records] == [(100, 5), (100, 6), (80, 10)]

    def test_exercises_are_independent(self, make_workout, make_set, now):
        """Each exercise has its own running maxima."""
        workouts = [
            make_workout("w1", now - timedelta(days=1), ("bench", [make_set(100, 5)])),
            make_workout("w2", now, ("squat", [make_set(90, 5)])),
        ]

        records = detect_personal_records(normalize_workouts(workouts))

        assert _values(records, PRType.WEIGHT) == [90, 100]
        assert {r.exercise_id for r in records} == {"bench", "squat"}

    def test_empty_history(self):
        assert detect_personal_records({}) == []


class TestSummary:
    """Tests for record summaries."""

    def test_summary_counts(self, bench_history, now):
        records = detect_personal_records(normalize_workouts(bench_history))

        summary = summarize_records(records, now=now, recent_days=10)

        assert summary.total_prs == len(records) == 7
        # w2 (7 days ago) and w3 (1 day ago) are within 10 days
        assert summary.recent_prs == 4
        assert summary.prs_by_type == {"weight": 2, "reps": 3, "volume": 2}
        assert summary.latest_pr.workout_id == "w3"

    def test_empty_summary(self, now):
        assert summarize_records([], now=now) == PRSummary()
