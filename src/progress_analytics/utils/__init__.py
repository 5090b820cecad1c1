"""Utility helpers."""

from .dates import coerce_timestamp, days_between, ensure_utc, utc_now

__all__ = [
    "coerce_timestamp",
    "days_between",
    "ensure_utc",
    "utc_now",
]
