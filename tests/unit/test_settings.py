"""Unit tests for Settings module."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from trail_stats.exceptions import ConfigurationError
from trail_stats.models import HeartRateZoneConfig
from trail_stats.settings import Settings, load_settings


class TestSettingsBasicLoading:
    """Test basic settings loading from different sources."""

    def test_load_from_env_vars(self, monkeypatch):
        """Test that settings are correctly loaded from environment variables."""
        monkeypatch.setenv("TRAIL_STATS_MAX_HEART_RATE", "182")
        monkeypatch.setenv("TRAIL_STATS_TIME_FRAME_DAYS", "14")
        monkeypatch.setenv("TRAIL_STATS_MAX_WORKERS", "4")

        settings = load_settings()

        assert settings.max_heart_rate == 182
        assert settings.time_frame_days == 14
        assert settings.max_workers == 4

    def test_load_from_yaml(self, sample_config_file: Path):
        """Test that settings are correctly loaded from a YAML file."""
        settings = load_settings(config_file=sample_config_file)

        assert settings.max_heart_rate == 185
        assert settings.time_frame_days == 42
        assert settings.hr_zones.zone1_upper == 0.65
        assert settings.hr_zones.zone4_upper == 0.92

    def test_yaml_overrides_env_vars(self, monkeypatch, temp_config_file: Path):
        """Test that YAML settings override environment variables."""
        monkeypatch.setenv("TRAIL_STATS_MAX_HEART_RATE", "200")

        with open(temp_config_file, "w") as f:
            yaml.dump({"max_heart_rate": 178}, f)

        settings = load_settings(config_file=temp_config_file)

        assert settings.max_heart_rate == 178

    def test_default_values(self):
        """Test that settings use default values when no config is provided."""
        settings = Settings()

        assert settings.max_heart_rate == 190
        assert settings.hr_zones.fractions == (0.6, 0.7, 0.8, 0.9)
        assert settings.time_frame_days == 30
        assert settings.trend_window_days == 30
        assert settings.max_workers == 1
        assert settings.data_dir == Path("data")


class TestSettingsPathResolution:
    """Test path resolution and handling."""

    def test_relative_paths_resolved(self, temp_config_file: Path):
        """Test that relative paths are joined onto the resolved data_dir."""
        config_data = {
            "data_dir": "test_data",
            "activities_file": "activities.csv",
            "streams_dir": "Streams",
        }
        with open(temp_config_file, "w") as f:
            yaml.dump(config_data, f)

        settings = load_settings(config_file=temp_config_file)

        expected_data_dir = (temp_config_file.parent / "test_data").resolve()
        assert settings.data_dir == expected_data_dir
        assert settings.activities_file == expected_data_dir / "activities.csv"
        assert settings.streams_dir == expected_data_dir / "Streams"

    def test_relative_metrics_dir_resolved(self, temp_config_file: Path):
        """Test that an explicit relative metrics_dir is joined onto data_dir."""
        config_data = {"data_dir": "test_data", "metrics_dir": "cache/metrics"}
        with open(temp_config_file, "w") as f:
            yaml.dump(config_data, f)

        settings = load_settings(config_file=temp_config_file)

        expected_data_dir = (temp_config_file.parent / "test_data").resolve()
        assert settings.metrics_dir == expected_data_dir / "cache" / "metrics"

    def test_absolute_paths_preserved(self, temp_config_file: Path, tmp_path: Path):
        """Test that absolute paths are preserved."""
        abs_data_dir = tmp_path / "absolute_data"
        abs_data_dir.mkdir()

        config_data = {
            "data_dir": str(abs_data_dir),
            "activities_file": str(tmp_path / "elsewhere.csv"),
        }
        with open(temp_config_file, "w") as f:
            yaml.dump(config_data, f)

        settings = load_settings(config_file=temp_config_file)

        assert settings.data_dir == abs_data_dir
        assert settings.activities_file == tmp_path / "elsewhere.csv"

    def test_metrics_dir_derived_from_processed_data_dir(self):
        """Test that the metrics directory defaults below processed_data_dir."""
        settings = Settings(processed_data_dir=Path("output"))

        assert settings.metrics_dir == Path("output") / "metrics"

    def test_explicit_metrics_dir_kept(self):
        """Test that an explicit metrics directory is not overridden."""
        settings = Settings(metrics_dir=Path("cache"))

        assert settings.metrics_dir == Path("cache")


class TestSettingsValidation:
    """Test settings validation and constraints."""

    def test_custom_zone_config(self):
        """Test that zone fractions can be customized."""
        settings = Settings(hr_zones=HeartRateZoneConfig(zone1_upper=0.5))

        assert settings.hr_zones.fractions[0] == 0.5

    def test_zone_fraction_out_of_range_rejected(self):
        """Test that zone fractions outside (0, 1] are rejected."""
        with pytest.raises(ValidationError):
            HeartRateZoneConfig(zone2_upper=1.5)

        with pytest.raises(ValidationError):
            HeartRateZoneConfig(zone3_upper=0)

    def test_zone_fractions_out_of_order_rejected(self):
        """Test that zone boundaries must increase from zone 1 to zone 4."""
        with pytest.raises(ValidationError, match="strictly increasing"):
            HeartRateZoneConfig(zone2_upper=0.85)

        with pytest.raises(ValidationError):
            HeartRateZoneConfig(zone3_upper=0.70)

    def test_out_of_order_yaml_zones_rejected(self, temp_config_file: Path):
        """Test that an out-of-order zone config in YAML is a configuration error."""
        temp_config_file.write_text(
            "hr_zones:\n  zone1_upper: 0.8\n  zone2_upper: 0.7\n"
            "  zone3_upper: 0.85\n  zone4_upper: 0.9\n"
        )

        with pytest.raises(ConfigurationError):
            load_settings(config_file=temp_config_file)


class TestSettingsEdgeCases:
    """Test edge cases and error handling."""

    def test_missing_config_file_raises_error(self):
        """Test that missing config file raises appropriate error."""
        with pytest.raises(FileNotFoundError):
            load_settings(config_file=Path("nonexistent.yaml"))

    def test_invalid_yaml_raises_error(self, temp_config_file: Path):
        """Test that invalid YAML content raises error."""
        with open(temp_config_file, "w") as f:
            f.write("invalid: yaml: content: [")

        with pytest.raises(yaml.YAMLError):
            load_settings(config_file=temp_config_file)

    def test_empty_config_file_uses_defaults(self, temp_config_file: Path):
        """Test that an empty config file falls back to defaults."""
        temp_config_file.write_text("")

        settings = load_settings(config_file=temp_config_file)

        assert settings.max_heart_rate == 190
        assert settings.time_frame_days == 30

    def test_invalid_value_raises_configuration_error(self, temp_config_file: Path):
        """Test that an invalid setting value is reported as a configuration error."""
        temp_config_file.write_text("max_heart_rate: not-a-number\n")

        with pytest.raises(ConfigurationError, match="max_heart_rate"):
            load_settings(config_file=temp_config_file)
