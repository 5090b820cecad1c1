"""Analytics API routes.

Every endpoint takes a snapshot of the caller's stored workouts and
measurements and returns the collections derived from it.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from ..deps import get_analytics_service
from ...models.measurements import (
    Gender,
    Insight,
    Measurement,
    MeasurementStats,
    MeasurementTrend,
    Period,
    ProgressPoint,
    SmoothedPoint,
)
from ...models.personal_records import ExerciseProgress
from ...models.report import (
    AnalyticsReport,
    AnalyticsSnapshot,
    BodyCompositionResponse,
    CorrelationResponse,
    RecordsResponse,
)
from ...services.analytics_service import ProgressAnalyticsService


router = APIRouter()


# ============================================================================
# Workouts
# ============================================================================

@router.post("/records", response_model=RecordsResponse)
async def get_personal_records(
    snapshot: AnalyticsSnapshot,
    service: ProgressAnalyticsService = Depends(get_analytics_service),
):
    """Detect personal records, most recent first, with a summary."""
    records = service.detect_personal_records(snapshot.workouts)
    return RecordsResponse(records=records, summary=service.record_summary(records))


@router.post("/progress", response_model=List[ExerciseProgress])
async def get_exercise_progress(
    snapshot: AnalyticsSnapshot,
    service: ProgressAnalyticsService = Depends(get_analytics_service),
):
    """Progress summary for every exercise in the snapshot."""
    return service.exercise_progress(snapshot.workouts)


# ============================================================================
# Measurements
# ============================================================================

@router.post("/trends", response_model=List[MeasurementTrend])
async def get_measurement_trends(
    snapshot: AnalyticsSnapshot,
    period: Optional[Period] = Query(None, description="Look-back window (defaults to settings)"),
    service: ProgressAnalyticsService = Depends(get_analytics_service),
):
    return service.measurement_trends(snapshot.measurements, period)


@router.post("/trends/{measurement_type}", response_model=Optional[MeasurementTrend])
async def get_measurement_trend(
    measurement_type: str,
    snapshot: AnalyticsSnapshot,
    period: Optional[Period] = Query(None),
    service: ProgressAnalyticsService = Depends(get_analytics_service),
):
    """Trend for one type; null when the period holds fewer than two readings."""
    return service.measurement_trend(snapshot.measurements, measurement_type, period)


@router.post("/progress-data/{measurement_type}", response_model=List[ProgressPoint])
async def get_measurement_progress_data(
    measurement_type: str,
    snapshot: AnalyticsSnapshot,
    timeframe: Optional[Period] = Query(None),
    service: ProgressAnalyticsService = Depends(get_analytics_service),
):
    return service.progress_data(snapshot.measurements, measurement_type, timeframe)


@router.post("/smoothed/{measurement_type}", response_model=List[SmoothedPoint])
async def get_smoothed_measurements(
    measurement_type: str,
    snapshot: AnalyticsSnapshot,
    window_size: int = Query(3, description="Moving-average window"),
    service: ProgressAnalyticsService = Depends(get_analytics_service),
):
    return service.smoothed(snapshot.measurements, measurement_type, window_size)


@router.post("/stats", response_model=MeasurementStats)
async def get_measurement_stats(
    snapshot: AnalyticsSnapshot,
    service: ProgressAnalyticsService = Depends(get_analytics_service),
):
    return service.measurement_stats(snapshot.measurements)


@router.post("/anomalies/{measurement_type}", response_model=List[Measurement])
async def get_anomalies(
    measurement_type: str,
    snapshot: AnalyticsSnapshot,
    threshold: Optional[float] = Query(None, description="Standard deviations (defaults to settings)"),
    service: ProgressAnalyticsService = Depends(get_analytics_service),
):
    return service.anomalies(snapshot.measurements, measurement_type, threshold)


@router.post("/correlation", response_model=CorrelationResponse)
async def get_correlation(
    snapshot: AnalyticsSnapshot,
    type_a: str = Query(..., min_length=1),
    type_b: str = Query(..., min_length=1),
    service: ProgressAnalyticsService = Depends(get_analytics_service),
):
    return CorrelationResponse(
        type_a=type_a,
        type_b=type_b,
        coefficient=service.correlation(snapshot.measurements, type_a, type_b),
    )


@router.post("/body-composition", response_model=BodyCompositionResponse)
async def get_body_composition(
    snapshot: AnalyticsSnapshot,
    gender: str = Query(..., description="male or female"),
    service: ProgressAnalyticsService = Depends(get_analytics_service),
):
    """BMI and Navy body-fat estimate from the latest measurements."""
    measurements = service.normalize_measurements(snapshot.measurements)
    body_fat = service.body_fat(measurements, gender)
    return BodyCompositionResponse(
        bmi=service.bmi(measurements),
        body_fat=body_fat,
        gender=Gender(gender),
    )


@router.post("/insights", response_model=List[Insight])
async def get_insights(
    snapshot: AnalyticsSnapshot,
    service: ProgressAnalyticsService = Depends(get_analytics_service),
):
    return service.insights(snapshot.measurements)


# ============================================================================
# Combined
# ============================================================================

@router.post("/report", response_model=AnalyticsReport)
async def get_report(
    snapshot: AnalyticsSnapshot,
    response: Response,
    period: Optional[Period] = Query(None),
    service: ProgressAnalyticsService = Depends(get_analytics_service),
):
    """Run every calculation over the snapshot.

    The ETag identifies the snapshot and parameters so clients can skip
    re-rendering an unchanged report.
    """
    key = service.snapshot_key(
        snapshot.workouts,
        snapshot.measurements,
        period=period.value if period else None,
    )
    response.headers["ETag"] = f'"{key}"'
    return service.analyze(snapshot.workouts, snapshot.measurements, period)
