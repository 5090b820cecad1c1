"""Insight generation from the measurement history.

Turns trends, milestones and anomalies into short, ranked observations:
- Trend: monthly change beyond the insight threshold (high above the high-priority threshold)
- Milestone: a type logged at least ``milestone_count`` times (low)
- Anomaly: a type with at least one outlier reading (medium)
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from .measurements.anomalies import detect_anomalies
from .measurements.series import of_type, types_in_order
from .measurements.trends import calculate_all_trends
from .models.measurements import (
    Insight,
    InsightPriority,
    InsightType,
    Measurement,
    MeasurementTrend,
    Period,
)

logger = logging.getLogger(__name__)


def _trend_insight(trend: MeasurementTrend, high_priority_pct: float) -> Insight:
    magnitude = abs(trend.change_percent)
    direction = "increased" if trend.change_percent > 0 else "decreased"
    return Insight(
        type=InsightType.TREND,
        title=f"{trend.measurement_type} {direction}",
        description=f"Your {trend.measurement_type} has {direction} by {magnitude:.1f}% this month.",
        priority=InsightPriority.HIGH if magnitude > high_priority_pct else InsightPriority.MEDIUM,
        measurement_type=trend.measurement_type,
    )


def generate_insights(
    measurements: Sequence[Measurement],
    now: Optional[datetime] = None,
    trend_threshold_pct: float = 10.0,
    high_priority_pct: float = 20.0,
    milestone_count: int = 10,
    anomaly_threshold: float = 2.0,
) -> List[Insight]:
    """
    Generate ranked insights for a measurement history.

    Args:
        measurements: Normalized measurements of any type
        now: Reference time for the monthly trends
        trend_threshold_pct: Minimum absolute monthly change for a trend insight
        high_priority_pct: Change above which a trend insight is high priority
        milestone_count: Entries of one type needed for a milestone
        anomaly_threshold: Standard deviations used for anomaly detection

    Returns:
        Insights ordered high, medium, low; generation order within a priority
    """
    insights: List[Insight] = []

    for trend in calculate_all_trends(measurements, Period.MONTH, now):
        if abs(trend.change_percent) > trend_threshold_pct:
            insights.append(_trend_insight(trend, high_priority_pct))

    types = types_in_order(measurements)

    for measurement_type in types:
        count = len(of_type(measurements, measurement_type))
        if count >= milestone_count:
            insights.append(Insight(
                type=InsightType.MILESTONE,
                title=f"{measurement_type} milestone reached",
                description=f"You've recorded {count} {measurement_type} measurements!",
                priority=InsightPriority.LOW,
                measurement_type=measurement_type,
            ))

    for measurement_type in types:
        anomalies = detect_anomalies(measurements, measurement_type, anomaly_threshold)
        if anomalies:
            insights.append(Insight(
                type=InsightType.ANOMALY,
                title=f"Unusual {measurement_type} readings",
                description=f"{len(anomalies)} unusual {measurement_type} measurement(s) detected.",
                priority=InsightPriority.MEDIUM,
                measurement_type=measurement_type,
            ))

    logger.debug(f"Generated {len(insights)} insights from {len(measurements)} measurements")
    return sorted(insights, key=lambda i: i.priority.rank, reverse=True)
