"""Progress analytics service.

This service handles:
- Normalizing workout and measurement snapshots
- Personal record detection and exercise progress
- Measurement trends, statistics, anomalies and correlations
- Insight generation and combined reports

The service holds only configuration and a clock; every call recomputes
from the snapshot it is given.
"""

import hashlib
import json
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel

from ..analysis.normalizer import RawWorkout, normalize_workouts
from ..analysis.progress import calculate_all_exercise_progress
from ..analysis.records import detect_personal_records, summarize_records
from ..config import AnalyticsSettings, get_settings
from ..exceptions import InvalidParameterError
from ..insights import generate_insights
from ..measurements.anomalies import detect_anomalies
from ..measurements.correlation import calculate_correlation
from ..measurements.series import RawMeasurement, normalize_measurements
from ..measurements.stats import calculate_bmi, calculate_body_fat_navy, calculate_stats
from ..measurements.trends import (
    calculate_all_trends,
    calculate_trend,
    get_progress_data,
    parse_period,
    smooth_measurements,
)
from ..models.measurements import (
    Gender,
    Insight,
    Measurement,
    MeasurementStats,
    MeasurementTrend,
    Period,
    ProgressPoint,
    SmoothedPoint,
)
from ..models.personal_records import ExerciseProgress, PersonalRecord, PRSummary
from ..models.report import AnalyticsReport
from ..models.workouts import PerformanceSet
from ..utils.dates import ensure_utc, utc_now

logger = logging.getLogger(__name__)

Groups = Mapping[str, Sequence[PerformanceSet]]


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


class ProgressAnalyticsService:
    """Facade over the record, progress and measurement calculators."""

    def __init__(
        self,
        settings: Optional[AnalyticsSettings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize the analytics service.

        Args:
            settings: Tunables (defaults to the cached environment settings)
            clock: Returns the reference time; defaults to the current UTC time
        """
        self.settings = settings or get_settings()
        self._clock = clock or utc_now

    def now(self) -> datetime:
        """Reference time for recency windows."""
        return ensure_utc(self._clock())

    # ------------------------------------------------------------------
    # Normalization
    # ------------------------------------------------------------------

    def normalize_workouts(self, workouts: Iterable[RawWorkout]) -> Dict[str, List[PerformanceSet]]:
        return normalize_workouts(workouts)

    def normalize_measurements(self, measurements: Iterable[RawMeasurement]) -> List[Measurement]:
        return normalize_measurements(measurements)

    def _groups(self, workouts: Union[Groups, Iterable[RawWorkout]]) -> Groups:
        if isinstance(workouts, Mapping):
            return workouts
        return normalize_workouts(workouts)

    def _measurements(self, measurements: Iterable[RawMeasurement]) -> List[Measurement]:
        measurements = list(measurements)
        if all(isinstance(m, Measurement) for m in measurements):
            return measurements
        return normalize_measurements(measurements)

    # ------------------------------------------------------------------
    # Workouts
    # ------------------------------------------------------------------

    def detect_personal_records(
        self, workouts: Union[Groups, Iterable[RawWorkout]],
    ) -> List[PersonalRecord]:
        """All personal records, most recent first."""
        return detect_personal_records(self._groups(workouts))

    def record_summary(self, records: Sequence[PersonalRecord]) -> PRSummary:
        return summarize_records(records, self.now(), self.settings.recent_pr_days)

    def exercise_progress(
        self,
        workouts: Union[Groups, Iterable[RawWorkout]],
        records: Optional[Sequence[PersonalRecord]] = None,
        muscle_groups: Optional[Mapping[str, List[str]]] = None,
    ) -> List[ExerciseProgress]:
        """Progress summary per exercise, detecting records first if none are given."""
        groups = self._groups(workouts)
        if records is None:
            records = detect_personal_records(groups)

        return calculate_all_exercise_progress(
            groups,
            records,
            muscle_groups=muscle_groups,
            now=self.now(),
            trend_window=self.settings.progress_trend_window,
            trend_min_sets=self.settings.progress_trend_min_sets,
            trend_threshold=self.settings.progress_trend_threshold,
            recent_pr_days=self.settings.recent_pr_days,
        )

    # ------------------------------------------------------------------
    # Measurements
    # ------------------------------------------------------------------

    def _period(self, period: Optional[Union[Period, str]]) -> Period:
        return parse_period(period or self.settings.default_trend_period)

    def measurement_trend(
        self,
        measurements: Iterable[RawMeasurement],
        measurement_type: str,
        period: Optional[Union[Period, str]] = None,
    ) -> Optional[MeasurementTrend]:
        return calculate_trend(
            self._measurements(measurements),
            measurement_type,
            self._period(period),
            self.now(),
            self.settings.trend_change_threshold_pct,
        )

    def measurement_trends(
        self,
        measurements: Iterable[RawMeasurement],
        period: Optional[Union[Period, str]] = None,
    ) -> List[MeasurementTrend]:
        return calculate_all_trends(
            self._measurements(measurements),
            self._period(period),
            self.now(),
            self.settings.trend_change_threshold_pct,
        )

    def progress_data(
        self,
        measurements: Iterable[RawMeasurement],
        measurement_type: str,
        timeframe: Optional[Union[Period, str]] = None,
    ) -> List[ProgressPoint]:
        """Chart series for one type within the timeframe."""
        return get_progress_data(
            self._measurements(measurements), measurement_type, self._period(timeframe), self.now(),
        )

    def smoothed(
        self,
        measurements: Iterable[RawMeasurement],
        measurement_type: str,
        window_size: int = 3,
    ) -> List[SmoothedPoint]:
        return smooth_measurements(self._measurements(measurements), measurement_type, window_size)

    def measurement_stats(self, measurements: Iterable[RawMeasurement]) -> MeasurementStats:
        return calculate_stats(self._measurements(measurements), self.now())

    def anomalies(
        self,
        measurements: Iterable[RawMeasurement],
        measurement_type: str,
        threshold: Optional[float] = None,
    ) -> List[Measurement]:
        if threshold is None:
            threshold = self.settings.anomaly_threshold
        return detect_anomalies(self._measurements(measurements), measurement_type, threshold)

    def correlation(
        self,
        measurements: Iterable[RawMeasurement],
        type_a: str,
        type_b: str,
    ) -> Optional[float]:
        return calculate_correlation(self._measurements(measurements), type_a, type_b)

    def bmi(self, measurements: Iterable[RawMeasurement]) -> Optional[float]:
        return calculate_bmi(self._measurements(measurements))

    def body_fat(
        self,
        measurements: Iterable[RawMeasurement],
        gender: Union[Gender, str],
    ) -> Optional[float]:
        return calculate_body_fat_navy(self._measurements(measurements), gender)

    def insights(self, measurements: Iterable[RawMeasurement]) -> List[Insight]:
        return generate_insights(
            self._measurements(measurements),
            now=self.now(),
            trend_threshold_pct=self.settings.insight_trend_threshold_pct,
            high_priority_pct=self.settings.insight_high_priority_pct,
            milestone_count=self.settings.milestone_entry_count,
            anomaly_threshold=self.settings.anomaly_threshold,
        )

    # ------------------------------------------------------------------
    # Combined
    # ------------------------------------------------------------------

    def analyze(
        self,
        workouts: Iterable[RawWorkout],
        measurements: Iterable[RawMeasurement],
        period: Optional[Union[Period, str]] = None,
    ) -> AnalyticsReport:
        """Run every calculation over one snapshot with a single reference time."""
        now = self.now()
        frozen = ProgressAnalyticsService(self.settings, clock=lambda: now)

        groups = normalize_workouts(workouts)
        normalized = normalize_measurements(measurements)
        records = detect_personal_records(groups)

        report = AnalyticsReport(
            personal_records=records,
            exercise_progress=frozen.exercise_progress(groups, records),
            measurement_trends=frozen.measurement_trends(normalized, period),
            measurement_stats=frozen.measurement_stats(normalized),
            bmi=calculate_bmi(normalized),
            insights=frozen.insights(normalized),
            generated_at=now,
        )

        logger.info(
            f"Analyzed {len(groups)} exercises and {len(normalized)} measurements: "
            f"{len(records)} records, {len(report.insights)} insights"
        )
        return report

    def snapshot_key(
        self,
        workouts: Iterable[Any],
        measurements: Iterable[Any],
        **params: Any,
    ) -> str:
        """Stable SHA-256 of the canonical JSON input and parameters, for callers that cache."""
        payload = {
            "workouts": list(workouts),
            "measurements": list(measurements),
            "params": params,
        }
        try:
            canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=_jsonable)
        except (TypeError, ValueError) as e:
            raise InvalidParameterError(
                "snapshot", type(e).__name__, message=f"Snapshot is not serializable: {e}",
            ) from e
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
