"""Application settings and configuration management."""

from pathlib import Path

import yaml
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import AggregationDefaults, HeartRateZoneThresholds, TrendConstants
from .exceptions import ConfigurationError
from .models import HeartRateZoneConfig


class Settings(BaseSettings):
    """
    Application settings for trail_stats.

    Settings are loaded in the following order of precedence (highest to lowest):
    1. Values passed explicitly (e.g. from a YAML file via load_settings)
    2. Environment variables (e.g., TRAIL_STATS_MAX_HEART_RATE)
    3. .env file (if found)
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="TRAIL_STATS_", env_file=".env", extra="ignore"
    )

    # --- File Paths ---
    data_dir: Path = Path("data")
    activities_file: Path = Path("activities.csv")
    streams_dir: Path = Path("Streams")

    processed_data_dir: Path = Path("processed_data")
    metrics_dir: Path | None = None  # Will be set based on processed_data_dir

    def __init__(self, **data):
        """Initialize the Settings object."""
        super().__init__(**data)
        if self.processed_data_dir and self.metrics_dir is None:
            self.metrics_dir = self.processed_data_dir / "metrics"

    # --- Athlete ---
    # Placeholder until a per-athlete value is configured
    max_heart_rate: float = HeartRateZoneThresholds.DEFAULT_MAX_HR

    hr_zones: HeartRateZoneConfig = HeartRateZoneConfig(
        zone1_upper=HeartRateZoneThresholds.ZONE_1_MAX,
        zone2_upper=HeartRateZoneThresholds.ZONE_2_MAX,
        zone3_upper=HeartRateZoneThresholds.ZONE_3_MAX,
        zone4_upper=HeartRateZoneThresholds.ZONE_4_MAX,
    )

    # --- Aggregation ---
    time_frame_days: int = AggregationDefaults.TIME_FRAME_DAYS
    trend_window_days: int = TrendConstants.RECENT_WINDOW_DAYS

    # --- Processing ---
    max_workers: int = 1  # Activities processed in parallel by the pipeline


def load_settings(config_file: Path | None = None) -> Settings:
    """Load settings from a YAML file, environment variables, and defaults."""
    if config_file:
        with open(config_file, encoding="utf-8") as f:
            yaml_settings = yaml.safe_load(f) or {}

        data_dir = Path(yaml_settings.get("data_dir", "")).expanduser()
        if not data_dir.is_absolute():
            data_dir = (config_file.parent / data_dir).resolve()
        yaml_settings["data_dir"] = str(data_dir)

        # Join relative paths with data_dir
        for key in (
            "activities_file",
            "streams_dir",
            "processed_data_dir",
            "metrics_dir",
        ):
            if yaml_settings.get(key) and not Path(yaml_settings[key]).is_absolute():
                yaml_settings[key] = str(data_dir / yaml_settings[key])

        try:
            return Settings(**yaml_settings)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid settings in {config_file}: {e}") from e

    return Settings()
