"""
Shared pytest fixtures for trail_stats tests.

This module provides reusable fixtures for:
- Test data (activity summaries, raw stream bundles)
- Settings configurations
- Temporary data directories
"""

from datetime import datetime
from pathlib import Path

import pandas as pd
import pytest
import yaml

from trail_stats.models import ActivitySummary
from trail_stats.settings import Settings

# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """Create a temporary YAML config file path for testing."""
    return tmp_path / "config.yaml"


@pytest.fixture
def sample_config_dict() -> dict:
    """Provide a sample configuration dictionary."""
    return {
        "data_dir": "data",
        "activities_file": "activities.csv",
        "streams_dir": "Streams",
        "processed_data_dir": "processed_data",
        "max_heart_rate": 185,
        "hr_zones": {
            "zone1_upper": 0.65,
            "zone2_upper": 0.75,
            "zone3_upper": 0.85,
            "zone4_upper": 0.92,
        },
        "time_frame_days": 42,
    }


@pytest.fixture
def sample_config_file(temp_config_file: Path, sample_config_dict: dict) -> Path:
    """Create a temporary config file with sample data."""
    with open(temp_config_file, "w") as f:
        yaml.dump(sample_config_dict, f)
    return temp_config_file


@pytest.fixture
def temp_settings(temp_data_dir: Path) -> Settings:
    """Provide settings pointing at a temporary data directory."""
    return Settings(
        data_dir=temp_data_dir,
        activities_file=temp_data_dir / "activities.csv",
        streams_dir=temp_data_dir / "Streams",
        processed_data_dir=temp_data_dir / "processed_data",
    )


# ============================================================================
# Data Fixtures - Streams
# ============================================================================


@pytest.fixture
def hill_run_streams() -> dict[str, list]:
    """
    Provide a one-hour steady climb at 1 sample per second.

    10 km covered at constant speed while the altitude rises 450 m (4.5%),
    constant 200 W power and heart rate drifting from 130 to 150 bpm.
    """
    n = 3601
    return {
        "time": list(range(n)),
        "distance": [i * 10000.0 / 3600 for i in range(n)],
        "altitude": [100.0 + i * 450.0 / 3600 for i in range(n)],
        "heartrate": [130.0 + i * 20.0 / 3600 for i in range(n)],
        "cadence": [170.0] * n,
        "watts": [200.0] * n,
    }


@pytest.fixture
def messy_streams() -> dict[str, list]:
    """Provide a short bundle with missing and non-numeric samples."""
    return {
        "time": [0, 1, 2, 3, 4, 5],
        "distance": [0.0, 3.0, None, 9.0, "n/a", 15.0],
        "altitude": [100.0, 100.5, 101.0, float("nan"), 102.0, 102.5],
        "heartrate": [120, 122, 124, 126, 128, 130],
    }


# ============================================================================
# Data Fixtures - Activities
# ============================================================================


@pytest.fixture
def hill_run_summary() -> ActivitySummary:
    """Provide the summary matching hill_run_streams."""
    return ActivitySummary(
        id=1001,
        name="Hill Repeats",
        start_date=datetime(2024, 3, 6, 7, 30),
        distance=10000.0,
        duration=3600.0,
        elevation_gain=500.0,
        average_heart_rate=140.0,
        average_cadence=170.0,
        average_power=200.0,
    )


@pytest.fixture
def sample_activities() -> list[ActivitySummary]:
    """Provide three activities over two calendar weeks."""
    return [
        ActivitySummary(
            id=1,
            name="Monday Trail",
            start_date=datetime(2024, 3, 4, 7, 0),
            distance=12000.0,
            duration=4800.0,
            elevation_gain=600.0,
            average_heart_rate=145.0,
            vertical_oscillation=8.5,
            ground_contact_time=250.0,
        ),
        ActivitySummary(
            id=2,
            name="Sunday Long Run",
            start_date=datetime(2024, 3, 10, 9, 0),
            distance=25000.0,
            duration=10800.0,
            elevation_gain=1500.0,
            average_heart_rate=140.0,
            vertical_oscillation=9.5,
            ground_contact_time=270.0,
        ),
        ActivitySummary(
            id=3,
            name="Recovery",
            start_date=datetime(2024, 3, 12, 18, 0),
            distance=6000.0,
            duration=2400.0,
            elevation_gain=50.0,
        ),
    ]


@pytest.fixture
def sample_activities_df() -> pd.DataFrame:
    """Provide a sample activities DataFrame as exported to CSV."""
    return pd.DataFrame(
        {
            "id": [1001, 1002],
            "name": ["Hill Repeats", None],
            "start_date": ["2024-03-06T07:30:00", "2024-03-08T18:00:00"],
            "distance": [10000.0, 8000.0],
            "duration": [3600.0, 2900.0],
            "elevation_gain": [500.0, 120.0],
            "average_heart_rate": [140.0, None],
            "vertical_oscillation": [None, 9.1],
        }
    )


# ============================================================================
# Temporary Directory Fixtures
# ============================================================================


@pytest.fixture
def temp_data_dir(tmp_path: Path) -> Path:
    """Create a temporary data directory structure."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "Streams").mkdir()
    return data_dir


@pytest.fixture
def populated_data_dir(
    temp_data_dir: Path,
    sample_activities_df: pd.DataFrame,
    hill_run_streams: dict[str, list],
) -> Path:
    """
    Create a data directory with an activities file and one stream.

    Activity 1001 has a stream file; activity 1002 does not.
    """
    sample_activities_df.to_csv(
        temp_data_dir / "activities.csv", sep=";", index=False
    )
    pd.DataFrame(hill_run_streams).to_csv(
        temp_data_dir / "Streams" / "stream_1001.csv", sep=";", index=False
    )
    return temp_data_dir
