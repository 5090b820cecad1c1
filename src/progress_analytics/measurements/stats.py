"""Corpus statistics, logging streaks and derived body composition."""

import logging
import math
from collections import Counter
from datetime import date, datetime
from typing import Optional, Sequence, Union

from ..exceptions import InvalidParameterError
from ..models.measurements import Gender, Measurement, MeasurementStats
from ..utils.dates import days_between, ensure_utc, utc_now
from .catalog import HEIGHT_TYPE
from .series import latest

logger = logging.getLogger(__name__)


def calculate_streak_days(
    measurements: Sequence[Measurement],
    now: Optional[datetime] = None,
) -> int:
    """
    Count consecutive logging days ending today.

    Distinct UTC calendar dates are walked newest first from today:
    - a date directly following the previous one extends the streak by 1
    - when nothing is logged today yet, a most-recent entry dated
      yesterday counts for both days (2)
    - any other gap ends the walk

    Dates after today are ignored. The yesterday credit applies only to the
    first entry. The mobile app compared each day gap against the running
    streak instead, which gave 2 for today plus the two preceding days
    and 3 for today, yesterday and three days ago. Here those give 3 and 2.

    Returns:
        Streak length in days (0 with no entries)
    """
    if not measurements:
        return 0

    now = ensure_utc(now) if now is not None else utc_now()
    today = now.date()
    days = sorted({m.date.date() for m in measurements}, reverse=True)

    streak = 0
    cursor: date = today
    for day in days:
        if day > today:
            continue
        gap = (cursor - day).days - (1 if streak else 0)
        if gap == 0:
            streak += 1
        elif gap == 1 and streak == 0:
            streak += 2
        else:
            break
        cursor = day

    return streak


def calculate_stats(
    measurements: Sequence[Measurement],
    now: Optional[datetime] = None,
) -> MeasurementStats:
    """
    Summarise the whole measurement history.

    Args:
        measurements: Normalized measurements of any type
        now: Reference time (defaults to the current UTC time)

    Returns:
        MeasurementStats; all zero for an empty history
    """
    if not measurements:
        return MeasurementStats()

    now = ensure_utc(now) if now is not None else utc_now()
    counts = Counter(m.type for m in measurements)
    # max() keeps the first-seen type on ties
    most_tracked = max(counts, key=counts.get)

    oldest = min(m.date for m in measurements)
    days_since_start = max(1.0, days_between(now, oldest))

    return MeasurementStats(
        total_measurements=len(measurements),
        measurement_types=len(counts),
        streak_days=calculate_streak_days(measurements, now),
        most_tracked_type=most_tracked,
        average_frequency=len(measurements) / days_since_start * 7,
    )


def calculate_bmi(measurements: Sequence[Measurement]) -> Optional[float]:
    """BMI from the latest body_weight (kg) and height (cm), or None."""
    weight = latest(measurements, "body_weight")
    height = latest(measurements, HEIGHT_TYPE)
    if weight is None or height is None or height.value <= 0:
        return None

    height_m = height.value / 100
    return weight.value / (height_m * height_m)


def _parse_gender(gender: Union[Gender, str]) -> Gender:
    try:
        return Gender(gender)
    except ValueError:
        raise InvalidParameterError(
            "gender", gender, allowed=[g.value for g in Gender],
        ) from None


def calculate_body_fat_navy(
    measurements: Sequence[Measurement],
    gender: Union[Gender, str],
) -> Optional[float]:
    """
    Estimate body fat % with the U.S. Navy circumference method.

    Uses the latest height, waist and neck (and hips for women), all in cm.

    Args:
        measurements: Normalized measurements of any type
        gender: "male" or "female"

    Returns:
        Body fat percentage, or None when an input is missing or the
        circumferences give a non-positive logarithm argument

    Raises:
        InvalidParameterError: If gender is not supported
    """
    gender = _parse_gender(gender)

    def latest_value(measurement_type: str) -> Optional[float]:
        entry = latest(measurements, measurement_type)
        return entry.value if entry is not None and entry.value else None

    height = latest_value(HEIGHT_TYPE)
    waist = latest_value("waist")
    neck = latest_value("neck")
    if height is None or waist is None or neck is None or height <= 0:
        return None

    if gender == Gender.MALE:
        girth = waist - neck
        if girth <= 0:
            return None
        density = 1.0324 - 0.19077 * math.log10(girth) + 0.15456 * math.log10(height)
    else:
        hips = latest_value("hips")
        if hips is None:
            return None
        girth = waist + hips - neck
        if girth <= 0:
            return None
        density = 1.29579 - 0.35004 * math.log10(girth) + 0.22100 * math.log10(height)

    if density == 0:
        logger.debug("Navy body fat density term is zero, skipping")
        return None

    return 495 / density - 450
