"""Dependency injection for API routes."""

from functools import lru_cache

from ..config import get_settings
from ..services.analytics_service import ProgressAnalyticsService


@lru_cache
def get_analytics_service() -> ProgressAnalyticsService:
    """Get the analytics service instance."""
    return ProgressAnalyticsService(settings=get_settings())
