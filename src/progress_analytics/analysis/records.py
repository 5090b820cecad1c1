"""Personal Record (PR) detection.

Each exercise's sets are scanned oldest first with one running maximum per
metric:
- Weight: heaviest load
- Reps: most reps, tracked separately for every exact load
- Volume: highest weight x reps in a single set
- Duration: longest timed set

A record is emitted only when a value strictly beats the running maximum,
so ties never create records and the first of several tying sets wins.
"""

import hashlib
import logging
from collections import Counter
from datetime import datetime, timedelta
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from ..models.personal_records import PersonalRecord, PRSummary, PRType, SetDetails
from ..models.workouts import PerformanceSet
from ..utils.dates import ensure_utc, utc_now

logger = logging.getLogger(__name__)


def record_id(
    exercise_id: str,
    record_type: PRType,
    achieved_at: datetime,
    set_key: str,
) -> str:
    """Stable identifier for a record, unique per exercise, metric and set."""
    raw = f"{exercise_id}|{record_type.value}|{set_key}|{achieved_at.isoformat()}"
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()[:24]


def _set_key(performance_set: PerformanceSet, position: int) -> str:
    return performance_set.set_id or f"#{position}"


def _chronological(sets: Iterable[PerformanceSet]) -> List[PerformanceSet]:
    return sorted(sets, key=lambda s: s.completed_at)


def _build_record(
    performance_set: PerformanceSet,
    position: int,
    record_type: PRType,
    value: float,
    unit: str,
    previous: Optional[float],
    with_set_details: bool = True,
) -> PersonalRecord:
    improvement = value - previous if previous is not None else value
    improvement_pct = (improvement / previous * 100) if previous else 100.0

    set_details = None
    if with_set_details:
        set_details = SetDetails(
            weight=performance_set.weight,
            reps=performance_set.reps,
            volume=performance_set.volume,
        )

    return PersonalRecord(
        id=record_id(
            performance_set.exercise_id,
            record_type,
            performance_set.completed_at,
            # reps records are keyed per load as well
            f"{_set_key(performance_set, position)}@{performance_set.weight:g}"
            if record_type == PRType.REPS else _set_key(performance_set, position),
        ),
        exercise_id=performance_set.exercise_id,
        exercise_name=performance_set.exercise_name,
        record_type=record_type,
        value=value,
        unit=unit,
        achieved_at=performance_set.completed_at,
        workout_id=performance_set.workout_id,
        previous_record=previous,
        improvement=improvement,
        improvement_percentage=improvement_pct,
        set_details=set_details,
    )


def _scan_running_max(
    sets: Sequence[PerformanceSet],
    record_type: PRType,
    metric: Callable[[PerformanceSet], float],
    unit: Callable[[PerformanceSet], str],
    include: Callable[[PerformanceSet], bool],
    with_set_details: bool = True,
) -> List[PersonalRecord]:
    """Single pass emitting a record whenever ``metric`` beats its running max."""
    records: List[PersonalRecord] = []
    running_max: Optional[float] = None

    for position, performance_set in enumerate(sets):
        if not include(performance_set):
            continue
        value = metric(performance_set)
        if running_max is None or value > running_max:
            records.append(_build_record(
                performance_set, position, record_type, value,
                unit(performance_set), running_max, with_set_details,
            ))
            running_max = value

    return records


def detect_weight_prs(sets: Iterable[PerformanceSet]) -> List[PersonalRecord]:
    """Detect heaviest-load records."""
    return _scan_running_max(
        _chronological(sets),
        PRType.WEIGHT,
        metric=lambda s: s.weight,
        unit=lambda s: "kg",
        include=lambda s: s.has_strength_data,
    )


def detect_rep_prs(sets: Iterable[PerformanceSet]) -> List[PersonalRecord]:
    """Detect most-reps records, one running maximum per exact load."""
    ordered = _chronological(sets)
    records: List[PersonalRecord] = []
    running_max: Dict[float, int] = {}

    for position, performance_set in enumerate(ordered):
        if not performance_set.has_strength_data:
            continue
        weight = performance_set.weight
        previous = running_max.get(weight)
        if previous is None or performance_set.reps > previous:
            records.append(_build_record(
                performance_set,
                position,
                PRType.REPS,
                performance_set.reps,
                f"reps @ {weight:g}kg",
                previous,
            ))
            running_max[weight] = performance_set.reps

    # group by load, first-seen load first, like separate scans per load
    load_order = {w: i for i, w in enumerate(dict.fromkeys(
        s.weight for s in ordered if s.has_strength_data
    ))}
    return sorted(records, key=lambda r: load_order[r.set_details.weight])


def detect_volume_prs(sets: Iterable[PerformanceSet]) -> List[PersonalRecord]:
    """Detect highest single-set volume (weight x reps) records."""
    return _scan_running_max(
        _chronological(sets),
        PRType.VOLUME,
        metric=lambda s: s.volume,
        unit=lambda s: "kg",
        include=lambda s: s.has_strength_data,
    )


def detect_duration_prs(sets: Iterable[PerformanceSet]) -> List[PersonalRecord]:
    """Detect longest timed-set records."""
    return _scan_running_max(
        _chronological(sets),
        PRType.DURATION,
        metric=lambda s: s.duration_seconds,
        unit=lambda s: "seconds",
        include=lambda s: s.has_duration,
        with_set_details=False,
    )


def detect_exercise_records(sets: Sequence[PerformanceSet]) -> List[PersonalRecord]:
    """Run all four scans for one exercise's sets."""
    return (
        detect_weight_prs(sets)
        + detect_rep_prs(sets)
        + detect_volume_prs(sets)
        + detect_duration_prs(sets)
    )


def detect_personal_records(
    groups: Mapping[str, Sequence[PerformanceSet]],
) -> List[PersonalRecord]:
    """Detect records for every exercise group.

    Args:
        groups: exerciseId -> sets, as produced by ``group_sets_by_exercise``

    Returns:
        All records, most recently achieved first
    """
    records: List[PersonalRecord] = []
    for exercise_id, sets in groups.items():
        exercise_records = detect_exercise_records(sets)
        logger.debug(f"Exercise {exercise_id}: {len(exercise_records)} records from {len(sets)} sets")
        records.extend(exercise_records)

    return sorted(records, key=lambda r: r.achieved_at, reverse=True)


def summarize_records(
    records: Sequence[PersonalRecord],
    now: Optional[datetime] = None,
    recent_days: int = 30,
) -> PRSummary:
    """Count records overall, by type and within the trailing window."""
    if not records:
        return PRSummary()

    now = ensure_utc(now) if now is not None else utc_now()
    cutoff = now - timedelta(days=recent_days)
    by_type = Counter(r.record_type.value for r in records)

    return PRSummary(
        total_prs=len(records),
        recent_prs=sum(1 for r in records if r.achieved_at >= cutoff),
        prs_by_type=dict(by_type),
        latest_pr=max(records, key=lambda r: r.achieved_at),
    )
