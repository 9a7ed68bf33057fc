"""Unit tests for the moving median smoother."""

import pandas as pd
import pytest

from trail_stats.data.series import build_series
from trail_stats.metrics.smoothing import moving_median


@pytest.fixture
def spiky_series() -> pd.Series:
    return build_series([0, 1, 2, 3, 4], [1.0, 100.0, 3.0, 4.0, 5.0])


class TestMovingMedian:
    """Test centered moving median behaviour."""

    def test_window_shrinks_at_boundaries(self, spiky_series):
        """Test the median over a window truncated at both ends."""
        smoothed = moving_median(spiky_series, 3)

        assert list(smoothed) == pytest.approx([50.5, 3.0, 4.0, 4.0, 4.5])

    def test_index_preserved(self, spiky_series):
        """Test that the smoothed series keeps the time index."""
        smoothed = moving_median(spiky_series, 3)

        assert list(smoothed.index) == list(spiky_series.index)

    def test_even_window_is_noop(self, spiky_series):
        """Test that an even window returns the input unchanged."""
        assert moving_median(spiky_series, 4).equals(spiky_series)

    def test_window_longer_than_series_is_noop(self, spiky_series):
        """Test that a series shorter than the window is returned unchanged."""
        assert moving_median(spiky_series, 31).equals(spiky_series)

    def test_non_positive_window_is_noop(self, spiky_series):
        """Test that a window below one returns the input unchanged."""
        assert moving_median(spiky_series, 0).equals(spiky_series)

    def test_constant_series_unchanged(self):
        """Test that a constant series stays constant."""
        series = build_series(list(range(40)), [170.0] * 40)

        smoothed = moving_median(series, 31)

        assert (smoothed == 170.0).all()
        assert len(smoothed) == len(series)
