"""Pearson correlation between two measurement types."""

import math
from datetime import date
from typing import Dict, Optional, Sequence

from ..models.measurements import Measurement

MIN_PAIRS = 3


def _first_by_date(measurements: Sequence[Measurement], measurement_type: str) -> Dict[date, float]:
    by_date: Dict[date, float] = {}
    for m in measurements:
        if m.type == measurement_type:
            by_date.setdefault(m.date.date(), m.value)
    return by_date


def calculate_correlation(
    measurements: Sequence[Measurement],
    type_a: str,
    type_b: str,
) -> Optional[float]:
    """
    Correlate two types over the calendar dates on which both were logged.

    The first entry of each type per date is used. Pairs are summed in
    ascending date order, so swapping the arguments gives the same value.

    Returns:
        Coefficient in [-1, 1], or None with fewer than 3 common dates or
        when either series has no variance
    """
    values_a = _first_by_date(measurements, type_a)
    values_b = _first_by_date(measurements, type_b)

    common = sorted(set(values_a) & set(values_b))
    if len(common) < MIN_PAIRS:
        return None

    pairs = [(values_a[d], values_b[d]) for d in common]
    n = len(pairs)
    sum_x = sum(x for x, _ in pairs)
    sum_y = sum(y for _, y in pairs)
    sum_x2 = sum(x * x for x, _ in pairs)
    sum_y2 = sum(y * y for _, y in pairs)
    sum_xy = sum(x * y for x, y in pairs)

    numerator = n * sum_xy - sum_x * sum_y
    variance_product = (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)
    if variance_product <= 0:
        return None

    return max(-1.0, min(1.0, numerator / math.sqrt(variance_product)))
