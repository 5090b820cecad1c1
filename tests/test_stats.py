"""Tests for measurement statistics, streaks and body composition."""

import math

import pytest

from progress_analytics.exceptions import InvalidParameterError
from progress_analytics.measurements.stats import (
    calculate_bmi,
    calculate_body_fat_navy,
    calculate_stats,
    calculate_streak_days,
)
from progress_analytics.models.measurements import Gender, MeasurementStats


def _navy_male(height, waist, neck):
    return 495 / (1.0324 - 0.19077 * math.log10(waist - neck) + 0.15456 * math.log10(height)) - 450


def _navy_female(height, waist, hips, neck):
    return 495 / (1.29579 - 0.35004 * math.log10(waist + hips - neck) + 0.22100 * math.log10(height)) - 450


class TestStreak:
    """Tests for consecutive logging days."""

    def _streak(self, make_measurement, now, days_ago):
        measurements = [make_measurement("body_weight", 80, days_ago=d) for d in days_ago]
        return calculate_streak_days(measurements, now=now)

    def test_empty(self, now):
        assert calculate_streak_days([], now=now) == 0

    def test_today_only(self, make_measurement, now):
        assert self._streak(make_measurement, now, [0]) == 1

    def test_gap_after_yesterday_stops_the_walk(self, make_measurement, now):
        """Today, yesterday and three days ago: the missed day ends the streak at 2."""
        assert self._streak(make_measurement, now, [0, 1, 3]) == 2

    def test_consecutive_days(self, make_measurement, now):
        assert self._streak(make_measurement, now, [0, 1, 2, 3, 4]) == 5

    def test_three_logged_days_count_three(self, make_measurement, now):
        """Every consecutive day counts once; only the first entry gets the yesterday credit."""
        assert self._streak(make_measurement, now, [0, 1, 2]) == 3

    def test_yesterday_counts_for_today(self, make_measurement, now):
        """A most-recent entry from yesterday earns two days."""
        assert self._streak(make_measurement, now, [1]) == 2
        assert self._streak(make_measurement, now, [1, 2]) == 3

    def test_older_than_yesterday_is_no_streak(self, make_measurement, now):
        assert self._streak(make_measurement, now, [2, 3, 4]) == 0

    def test_same_day_entries_count_once(self, make_measurement, now):
        measurements = [
            make_measurement("body_weight", 80, days_ago=0),
            make_measurement("waist", 90, days_ago=0, hours=3),
            make_measurement("neck", 38, days_ago=1),
        ]
        assert calculate_streak_days(measurements, now=now) == 2

    def test_future_entries_ignored(self, make_measurement, now):
        assert self._streak(make_measurement, now, [-2, 0, 1]) == 2


class TestCalculateStats:
    """Tests for corpus statistics."""

    def test_empty(self, now):
        assert calculate_stats([], now=now) == MeasurementStats()

    def test_counts_and_frequency(self, make_measurement, now):
        measurements = [
            make_measurement("waist", 90, days_ago=14),
            make_measurement("body_weight", 80, days_ago=10),
            make_measurement("body_weight", 79, days_ago=5),
            make_measurement("waist", 89, days_ago=0),
        ]

        stats = calculate_stats(measurements, now=now)

        assert stats.total_measurements == 4
        assert stats.measurement_types == 2
        assert stats.streak_days == 1
        # 4 entries over 14 days
        assert stats.average_frequency == pytest.approx(2.0)

    def test_most_tracked_ties_go_to_first_seen(self, make_measurement, now):
        measurements = [
            make_measurement("waist", 90, days_ago=3),
            make_measurement("body_weight", 80, days_ago=2),
            make_measurement("body_weight", 79, days_ago=1),
            make_measurement("waist", 89, days_ago=0),
        ]

        assert calculate_stats(measurements, now=now).most_tracked_type == "waist"

    def test_most_tracked_by_count(self, make_measurement, now):
        measurements = [
            make_measurement("waist", 90, days_ago=3),
            make_measurement("body_weight", 80, days_ago=2),
            make_measurement("body_weight", 79, days_ago=1),
        ]

        assert calculate_stats(measurements, now=now).most_tracked_type == "body_weight"

    def test_frequency_uses_at_least_one_day(self, make_measurement, now):
        """A history younger than a day counts as one day."""
        measurements = [
            make_measurement("body_weight", 80, hours=2),
            make_measurement("waist", 90, hours=1),
        ]

        assert calculate_stats(measurements, now=now).average_frequency == pytest.approx(14.0)


class TestBMI:
    """Tests for BMI from the latest weight and height."""

    def test_uses_latest_values(self, make_measurement):
        measurements = [
            make_measurement("body_weight", 90, days_ago=10),
            make_measurement("body_weight", 80, days_ago=1),
            make_measurement("height", 180, days_ago=30),
        ]

        assert calculate_bmi(measurements) == pytest.approx(80 / 1.8 ** 2)

    def test_missing_height(self, make_measurement):
        assert calculate_bmi([make_measurement("body_weight", 80)]) is None

    def test_missing_weight(self, make_measurement):
        assert calculate_bmi([make_measurement("height", 180)]) is None


class TestNavyBodyFat:
    """Tests for the U.S. Navy body-fat estimate."""

    @pytest.fixture
    def male_inputs(self, make_measurement):
        return [
            make_measurement("height", 180, days_ago=5),
            make_measurement("waist", 85, days_ago=1),
            make_measurement("neck", 38, days_ago=1),
        ]

    def test_male(self, male_inputs):
        result = calculate_body_fat_navy(male_inputs, "male")

        assert result == pytest.approx(_navy_male(180, 85, 38))
        assert 10 < result < 25

    def test_accepts_enum(self, male_inputs):
        assert calculate_body_fat_navy(male_inputs, Gender.MALE) == pytest.approx(_navy_male(180, 85, 38))

    def test_female_uses_hips(self, male_inputs, make_measurement):
        measurements = male_inputs + [make_measurement("hips", 100, days_ago=1)]

        result = calculate_body_fat_navy(measurements, "female")

        assert result == pytest.approx(_navy_female(180, 85, 100, 38))

    def test_female_without_hips(self, male_inputs):
        assert calculate_body_fat_navy(male_inputs, "female") is None

    def test_missing_neck(self, make_measurement):
        measurements = [
            make_measurement("height", 180),
            make_measurement("waist", 85),
        ]
        assert calculate_body_fat_navy(measurements, "male") is None

    def test_waist_not_above_neck(self, make_measurement):
        """A non-positive log argument gives no result."""
        measurements = [
            make_measurement("height", 180),
            make_measurement("waist", 38),
            make_measurement("neck", 40),
        ]
        assert calculate_body_fat_navy(measurements, "male") is None

    def test_unsupported_gender(self, male_inputs):
        with pytest.raises(InvalidParameterError) as exc_info:
            calculate_body_fat_navy(male_inputs, "other")

        assert exc_info.value.parameter == "gender"
        assert exc_info.value.details["allowed"] == ["male", "female"]
