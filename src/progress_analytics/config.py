"""Configuration settings for the progress analytics engine."""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalyticsSettings(BaseSettings):
    """Tunables loaded from environment variables (PROGRESS_ANALYTICS_*).

    A ``.env`` file in the working directory is read as well.
    """

    model_config = SettingsConfigDict(
        env_prefix="PROGRESS_ANALYTICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:3000"]

    # Anomaly detection: standard deviations from the mean
    anomaly_threshold: float = 2.0

    # Measurement trends
    default_trend_period: str = "month"
    trend_change_threshold_pct: float = 2.0

    # Exercise progress
    progress_trend_window: int = 6
    progress_trend_min_sets: int = 4
    progress_trend_threshold: float = 0.05
    recent_pr_days: int = 30

    # Insights
    insight_trend_threshold_pct: float = 10.0
    insight_high_priority_pct: float = 20.0
    milestone_entry_count: int = 10


@lru_cache
def get_settings() -> AnalyticsSettings:
    """Get cached settings instance."""
    return AnalyticsSettings()
