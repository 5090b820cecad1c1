"""Outlier detection for measurement series."""

import logging
import statistics
from typing import List, Sequence

from ..exceptions import InvalidParameterError
from ..models.measurements import Measurement
from .series import of_type

logger = logging.getLogger(__name__)

MIN_ANOMALY_ENTRIES = 3


def detect_anomalies(
    measurements: Sequence[Measurement],
    measurement_type: str,
    threshold: float = 2.0,
) -> List[Measurement]:
    """
    Flag readings more than ``threshold`` population standard deviations from the mean.

    Args:
        measurements: Normalized measurements of any type
        measurement_type: Type to check
        threshold: Number of standard deviations (must be >= 0)

    Returns:
        Flagged entries, oldest first; empty with fewer than 3 readings
        or zero spread
    """
    if threshold < 0:
        raise InvalidParameterError(
            "threshold", threshold, message="threshold must not be negative",
        )

    entries = of_type(measurements, measurement_type)
    if len(entries) < MIN_ANOMALY_ENTRIES:
        return []

    values = [m.value for m in entries]
    mean = statistics.mean(values)
    std_dev = statistics.pstdev(values, mu=mean)
    if std_dev == 0:
        return []

    flagged = [m for m in entries if abs(m.value - mean) > threshold * std_dev]
    if flagged:
        logger.debug(f"{len(flagged)} anomalous {measurement_type} readings (mean={mean:.2f}, sd={std_dev:.2f})")
    return flagged
