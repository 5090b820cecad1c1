"""Service layer for the progress analytics engine."""

from .analytics_service import ProgressAnalyticsService

__all__ = ["ProgressAnalyticsService"]
