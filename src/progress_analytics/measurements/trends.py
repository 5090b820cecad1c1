"""Period-over-period measurement trends, chart series and smoothing.

Direction indicators follow the personal-baseline idea: compare the latest
reading in the window with the first one and only call it a move when the
relative change clears a small threshold.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence, Union

from ..exceptions import InvalidParameterError
from ..models.measurements import (
    Measurement,
    MeasurementTrend,
    Period,
    ProgressPoint,
    SmoothedPoint,
    TrendDirection,
)
from ..utils.dates import ensure_utc, utc_now
from .catalog import format_measurement_value
from .series import of_type, types_in_order

logger = logging.getLogger(__name__)

PeriodLike = Union[Period, str]


def parse_period(period: PeriodLike) -> Period:
    """Resolve a period name, raising InvalidParameterError for unknown ones."""
    try:
        return Period(period)
    except ValueError:
        raise InvalidParameterError(
            "period", period, allowed=[p.value for p in Period],
        ) from None


def _window(
    measurements: Iterable[Measurement],
    measurement_type: str,
    period: Period,
    now: Optional[datetime],
) -> List[Measurement]:
    """Entries of a type dated on/after ``now - period``, oldest first."""
    now = ensure_utc(now) if now is not None else utc_now()
    cutoff = now - timedelta(days=period.days)
    return [m for m in of_type(measurements, measurement_type) if m.date >= cutoff]


def _determine_direction(change_percent: float, threshold_pct: float) -> TrendDirection:
    """Up/down only when the change exceeds the threshold in either direction."""
    if change_percent > threshold_pct:
        return TrendDirection.UP
    elif change_percent < -threshold_pct:
        return TrendDirection.DOWN
    return TrendDirection.STABLE


def calculate_trend(
    measurements: Sequence[Measurement],
    measurement_type: str,
    period: PeriodLike = Period.MONTH,
    now: Optional[datetime] = None,
    threshold_pct: float = 2.0,
) -> Optional[MeasurementTrend]:
    """
    Calculate the trend of one measurement type over a look-back period.

    Args:
        measurements: Normalized measurements of any type
        measurement_type: Type to analyze
        period: week, month, quarter or year
        now: Reference time (defaults to the current UTC time)
        threshold_pct: Percentage change required to register as up/down

    Returns:
        MeasurementTrend or None if fewer than 2 readings fall in the period
    """
    period = parse_period(period)

    if len(of_type(measurements, measurement_type)) < 2:
        return None

    recent = _window(measurements, measurement_type, period, now)
    if len(recent) < 2:
        return None

    current = recent[-1].value
    previous = recent[0].value
    change = current - previous
    change_percent = (change / previous * 100) if previous != 0 else 0.0

    return MeasurementTrend(
        measurement_type=measurement_type,
        period=period,
        trend=_determine_direction(change_percent, threshold_pct),
        current=current,
        previous=previous,
        change=change,
        change_percent=change_percent,
        data_points=len(recent),
    )


def calculate_all_trends(
    measurements: Sequence[Measurement],
    period: PeriodLike = Period.MONTH,
    now: Optional[datetime] = None,
    threshold_pct: float = 2.0,
) -> List[MeasurementTrend]:
    """One trend per type, in first-seen order; types without enough data are omitted."""
    period = parse_period(period)
    trends = []
    for measurement_type in types_in_order(measurements):
        trend = calculate_trend(measurements, measurement_type, period, now, threshold_pct)
        if trend is not None:
            trends.append(trend)

    logger.debug(f"Computed {len(trends)} {period.value} trends")
    return trends


def get_progress_data(
    measurements: Sequence[Measurement],
    measurement_type: str,
    timeframe: PeriodLike = Period.MONTH,
    now: Optional[datetime] = None,
) -> List[ProgressPoint]:
    """Chart series for one type within the timeframe, oldest first, with display labels."""
    timeframe = parse_period(timeframe)
    return [
        ProgressPoint(
            date=m.date,
            value=m.value,
            label=format_measurement_value(m.value, m.unit),
        )
        for m in _window(measurements, measurement_type, timeframe, now)
    ]


def smooth_measurements(
    measurements: Sequence[Measurement],
    measurement_type: str,
    window_size: int = 3,
) -> List[SmoothedPoint]:
    """Centred moving average over one type's readings.

    The window starts ``window_size // 2`` entries back and is clipped at
    both ends of the series. With fewer readings than the window the raw
    values are returned unchanged.
    """
    if window_size <= 0:
        raise InvalidParameterError(
            "window_size", window_size, message="window_size must be a positive integer",
        )

    entries = of_type(measurements, measurement_type)
    if len(entries) < window_size:
        return [SmoothedPoint(date=m.date, value=m.value, original_value=m.value) for m in entries]

    smoothed = []
    for i, measurement in enumerate(entries):
        start = max(0, i - window_size // 2)
        end = min(len(entries), start + window_size)
        window = entries[start:end]
        smoothed.append(SmoothedPoint(
            date=measurement.date,
            value=sum(m.value for m in window) / len(window),
            original_value=measurement.value,
        ))

    return smoothed
