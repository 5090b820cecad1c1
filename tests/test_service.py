"""Tests for the ProgressAnalyticsService facade."""

from datetime import timedelta

import pytest

from progress_analytics.config import AnalyticsSettings
from progress_analytics.exceptions import InvalidParameterError
from progress_analytics.models.measurements import Period
from progress_analytics.models.personal_records import PRType
from progress_analytics.services.analytics_service import ProgressAnalyticsService


@pytest.fixture
def raw_measurements(now):
    def _at(days_ago):
        return (now - timedelta(days=days_ago)).isoformat()

    return [
        {"type": "body_weight", "value": 80, "unit": "kg", "date": _at(20)},
        {"type": "body_weight", "value": 79, "unit": "kg", "date": _at(10)},
        {"type": "body_weight", "value": 78, "unit": "kg", "date": _at(1)},
        {"type": "height", "value": 180, "unit": "cm", "date": _at(60)},
        {"type": "waist", "value": 85, "unit": "cm", "date": _at(1)},
        {"type": "neck", "value": 38, "unit": "cm", "date": _at(1)},
        {"type": "waist", "value": "not-a-number", "date": _at(1)},
    ]


class TestServiceOperations:
    """Tests for individual service calls."""

    def test_records_from_raw_workouts(self, service, bench_history):
        records = service.detect_personal_records(bench_history)

        assert len(records) == 7
        assert records[0].record_type == PRType.WEIGHT

    def test_records_from_groups(self, service, bench_history):
        groups = service.normalize_workouts(bench_history)
        assert service.detect_personal_records(groups) == service.detect_personal_records(bench_history)

    def test_exercise_progress_uses_clock(self, service, bench_history):
        [progress] = service.exercise_progress(bench_history)

        # 50 + 20 recency + 2*3 weeks + 5*3 recent records (capped)
        assert progress.progress_score == 91

    def test_trend_uses_default_period(self, service, raw_measurements):
        trend = service.measurement_trend(raw_measurements, "body_weight")

        assert trend.period == Period.MONTH
        assert trend.change_percent == pytest.approx(-2.5)

    def test_trends_with_period(self, service, raw_measurements):
        trends = service.measurement_trends(raw_measurements, "week")
        assert trends == []

    def test_invalid_period(self, service, raw_measurements):
        with pytest.raises(InvalidParameterError):
            service.measurement_trends(raw_measurements, "decade")

    def test_stats_skip_malformed(self, service, raw_measurements):
        stats = service.measurement_stats(raw_measurements)

        assert stats.total_measurements == 6
        assert stats.most_tracked_type == "body_weight"
        assert stats.streak_days == 2

    def test_body_composition(self, service, raw_measurements):
        assert service.bmi(raw_measurements) == pytest.approx(78 / 1.8 ** 2)
        assert service.body_fat(raw_measurements, "male") is not None
        assert service.body_fat(raw_measurements, "female") is None

    def test_anomaly_threshold_from_settings(self, now, make_measurement):
        measurements = [make_measurement("waist", v, days_ago=10 - i) for i, v in enumerate([10, 11, 12, 13, 20])]
        strict = ProgressAnalyticsService(
            settings=AnalyticsSettings(_env_file=None, anomaly_threshold=1.0),
            clock=lambda: now,
        )
        default = ProgressAnalyticsService(settings=AnalyticsSettings(_env_file=None), clock=lambda: now)

        assert default.anomalies(measurements, "waist") == []
        assert len(strict.anomalies(measurements, "waist")) == 1
        assert len(default.anomalies(measurements, "waist", threshold=1.0)) == 1

    def test_correlation_needs_pairs(self, service, raw_measurements):
        assert service.correlation(raw_measurements, "body_weight", "waist") is None

    def test_smoothed_and_progress_data(self, service, raw_measurements):
        assert len(service.smoothed(raw_measurements, "body_weight")) == 3
        assert [p.label for p in service.progress_data(raw_measurements, "body_weight")] == [
            "80.0 kg", "79.0 kg", "78.0 kg",
        ]


class TestAnalyze:
    """Tests for the combined report."""

    def test_report(self, service, bench_history, raw_measurements, now):
        report = service.analyze(bench_history, raw_measurements)

        assert report.generated_at == now
        assert len(report.personal_records) == 7
        assert len(report.exercise_progress) == 1
        assert [t.measurement_type for t in report.measurement_trends] == ["body_weight"]
        assert report.measurement_stats.total_measurements == 6
        assert report.bmi == pytest.approx(78 / 1.8 ** 2)
        assert report.insights == []

    def test_report_is_deterministic(self, service, bench_history, raw_measurements):
        first = service.analyze(bench_history, raw_measurements)
        second = service.analyze(bench_history, raw_measurements)

        assert first.model_dump() == second.model_dump()

    def test_report_serializes_camel_case(self, service, bench_history, raw_measurements):
        data = service.analyze(bench_history, raw_measurements).model_dump(by_alias=True, mode="json")

        assert "personalRecords" in data
        assert "achievedAt" in data["personalRecords"][0]
        assert "streakDays" in data["measurementStats"]

    def test_empty_snapshot(self, service):
        report = service.analyze([], [])

        assert report.personal_records == []
        assert report.measurement_stats.total_measurements == 0
        assert report.bmi is None


class TestSnapshotKey:
    """Tests for cache keys."""

    def test_stable_and_order_insensitive_for_keys(self, service):
        a = service.snapshot_key([{"id": "w1", "completedAt": "2024-06-01"}], [], period="month")
        b = service.snapshot_key([{"completedAt": "2024-06-01", "id": "w1"}], [], period="month")

        assert a == b
        assert len(a) == 64

    def test_params_change_the_key(self, service, bench_history):
        assert service.snapshot_key(bench_history, [], period="month") != service.snapshot_key(
            bench_history, [], period="week",
        )

    def test_models_are_hashed(self, service, make_measurement):
        key = service.snapshot_key([], [make_measurement("waist", 90)])
        assert key == service.snapshot_key([], [make_measurement("waist", 90)])
