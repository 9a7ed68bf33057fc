"""Unit tests for the CSV data loader."""

from datetime import datetime

import pandas as pd
import pytest

from trail_stats.data.loader import ActivityDataLoader
from trail_stats.exceptions import DataLoadError, InvalidDataError


@pytest.fixture
def loader(temp_settings) -> ActivityDataLoader:
    return ActivityDataLoader(temp_settings)


class TestLoadActivities:
    """Test loading activity summaries."""

    def test_load(self, populated_data_dir, loader):
        """Test that every row becomes an ActivitySummary."""
        activities = loader.load_activities()

        assert [a.id for a in activities] == [1001, 1002]
        first = activities[0]
        assert first.name == "Hill Repeats"
        assert first.start_date == datetime(2024, 3, 6, 7, 30)
        assert first.elevation_gain == pytest.approx(500.0)
        assert first.average_heart_rate == pytest.approx(140.0)

    def test_empty_cells_use_defaults(self, populated_data_dir, loader):
        """Test that empty cells fall back to the model defaults."""
        second = loader.load_activities()[1]

        assert second.name == ""
        assert second.average_heart_rate is None
        assert second.vertical_oscillation == pytest.approx(9.1)

    def test_missing_file(self, loader):
        """Test that a missing activities file raises DataLoadError."""
        with pytest.raises(DataLoadError, match="not found"):
            loader.load_activities()

    def test_missing_column(self, temp_data_dir, loader):
        """Test that a file without a required column is rejected."""
        pd.DataFrame({"id": [1], "distance": [1000.0]}).to_csv(
            temp_data_dir / "activities.csv", sep=";", index=False
        )

        with pytest.raises(InvalidDataError, match="start_date"):
            loader.load_activities()

    def test_invalid_row(self, temp_data_dir, loader):
        """Test that an unparseable row raises InvalidDataError."""
        pd.DataFrame(
            {
                "id": [1],
                "start_date": ["not a date"],
                "distance": [1000.0],
                "duration": [300.0],
                "elevation_gain": [10.0],
            }
        ).to_csv(temp_data_dir / "activities.csv", sep=";", index=False)

        with pytest.raises(InvalidDataError):
            loader.load_activities()


class TestLoadStream:
    """Test loading raw stream bundles."""

    def test_load_stream(self, populated_data_dir, loader):
        """Test that known stream columns are returned as lists."""
        streams = loader.load_stream(1001)

        assert set(streams) >= {"time", "distance", "altitude", "heartrate"}
        assert len(streams["time"]) == 3601
        assert streams["time"][:3] == [0, 1, 2]

    def test_unknown_columns_dropped(self, temp_data_dir, loader):
        """Test that columns outside the known streams are ignored."""
        pd.DataFrame({"time": [0, 1], "distance": [0.0, 3.0], "extra": [1, 2]}).to_csv(
            temp_data_dir / "Streams" / "stream_5.csv", sep=";", index=False
        )

        assert set(loader.load_stream(5)) == {"time", "distance"}

    def test_missing_stream(self, populated_data_dir, loader):
        """Test that a missing stream file raises DataLoadError."""
        with pytest.raises(DataLoadError):
            loader.load_stream(1002)

    def test_stream_exists(self, populated_data_dir, loader):
        """Test stream presence checks."""
        assert loader.stream_exists(1001)
        assert not loader.stream_exists(1002)
