"""Selecting and normalizing measurement series."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from ..models.measurements import Measurement

logger = logging.getLogger(__name__)

RawMeasurement = Union[Measurement, Dict[str, Any]]


def normalize_measurements(raw: Iterable[RawMeasurement]) -> List[Measurement]:
    """Validate raw measurements, dropping malformed or non-finite entries.

    Input order is preserved.
    """
    measurements: List[Measurement] = []
    skipped = 0

    for entry in raw:
        if isinstance(entry, Measurement):
            measurements.append(entry)
            continue
        try:
            measurements.append(Measurement.model_validate(entry))
        except PydanticValidationError:
            skipped += 1

    if skipped:
        logger.debug(f"Skipped {skipped} malformed measurements")

    return measurements


def of_type(
    measurements: Iterable[Measurement],
    measurement_type: str,
    newest_first: bool = False,
) -> List[Measurement]:
    """Entries of one type sorted by date (stable)."""
    return sorted(
        (m for m in measurements if m.type == measurement_type),
        key=lambda m: m.date,
        reverse=newest_first,
    )


def latest(measurements: Iterable[Measurement], measurement_type: str) -> Optional[Measurement]:
    """Most recent entry of a type, or None."""
    entries = of_type(measurements, measurement_type, newest_first=True)
    return entries[0] if entries else None


def types_in_order(measurements: Sequence[Measurement]) -> List[str]:
    """Distinct types in the order they first appear."""
    return list(dict.fromkeys(m.type for m in measurements))
