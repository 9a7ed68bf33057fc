"""Unit tests for Normalized Power."""

import numpy as np
import pytest

from trail_stats.data.series import build_series, empty_series
from trail_stats.metrics.power import normalized_power


class TestNormalizedPower:
    """Test Normalized Power over a trailing 30-second window."""

    def test_constant_power(self):
        """Test that constant power gives NP equal to that power."""
        power = build_series(list(range(60)), [250.0] * 60)

        assert normalized_power(power) == pytest.approx(250.0, abs=1e-6)

    def test_constant_power_irregular_sampling(self):
        """Test that constant power with gaps still gives that power."""
        times = [0, 1, 2, 5, 9, 30, 31, 45, 90, 91]
        power = build_series(times, [250.0] * len(times))

        assert normalized_power(power) == pytest.approx(250.0, abs=1e-6)

    def test_empty_series(self):
        """Test that an empty series yields None."""
        assert normalized_power(empty_series("watts")) is None

    def test_variable_power_above_average(self):
        """Test that NP of a variable effort is at least its average power."""
        watts = [150.0] * 60 + [350.0] * 60 + [150.0] * 60
        power = build_series(list(range(180)), watts)

        np_value = normalized_power(power)

        assert np_value is not None
        assert np_value > np.mean(watts)

    def test_trailing_time_window(self):
        """Test that the rolling mean covers (t - 30, t]."""
        # Two samples 30 s apart never share a window
        power = build_series([0, 30], [100.0, 300.0])

        expected = ((100.0**4 + 300.0**4) / 2) ** 0.25
        assert normalized_power(power) == pytest.approx(expected)

    def test_samples_within_window_are_averaged(self):
        """Test that samples less than 30 s apart share a window."""
        power = build_series([0, 29], [100.0, 300.0])

        expected = ((100.0**4 + 200.0**4) / 2) ** 0.25
        assert normalized_power(power) == pytest.approx(expected)

    def test_unsorted_index(self):
        """Test that samples out of time order are handled."""
        power = build_series([29, 0], [300.0, 100.0])

        expected = ((100.0**4 + 200.0**4) / 2) ** 0.25
        assert normalized_power(power) == pytest.approx(expected)
