"""Unit tests for decoupling and efficiency index."""

import pytest

from trail_stats.data.series import build_series, empty_series
from trail_stats.metrics.efficiency import cardiac_decoupling, efficiency_index


class TestCardiacDecoupling:
    """Test pace:HR decoupling."""

    def test_ten_percent_drop(self):
        """Test that a 10% lower ratio in the second half gives ~10%."""
        times = list(range(1, 21))
        pace = build_series(times, [6.0] * 20)
        # ratio 6/150 = 0.04 in the first half, 0.036 in the second
        heart_rate = build_series(times, [150.0] * 10 + [6.0 / 0.036] * 10)

        assert cardiac_decoupling(pace, heart_rate) == pytest.approx(10.0)

    def test_steady_effort(self):
        """Test that an unchanged ratio gives zero decoupling."""
        times = list(range(30))
        pace = build_series(times, [5.5] * 30)
        heart_rate = build_series(times, [145.0] * 30)

        assert cardiac_decoupling(pace, heart_rate) == pytest.approx(0.0)

    def test_odd_count_split(self):
        """Test that the halves split at n // 2."""
        times = list(range(11))
        pace = build_series(times, [6.0] * 11)
        # First 5 pairs ratio 0.04, last 6 pairs ratio 0.03
        heart_rate = build_series(times, [150.0] * 5 + [200.0] * 6)

        assert cardiac_decoupling(pace, heart_rate) == pytest.approx(25.0)

    def test_too_few_pairs(self):
        """Test that fewer than 11 pairs yields None."""
        times = list(range(10))
        pace = build_series(times, [6.0] * 10)
        heart_rate = build_series(times, [150.0] * 10)

        assert cardiac_decoupling(pace, heart_rate) is None

    def test_zero_samples_excluded(self):
        """Test that pairs with zero pace or HR do not count."""
        times = list(range(12))
        pace = build_series(times, [6.0] * 11 + [0.0])
        heart_rate = build_series(times, [150.0] * 12)

        # 11 usable pairs remain
        assert cardiac_decoupling(pace, heart_rate) == pytest.approx(0.0)

        heart_rate = build_series(times, [0.0] + [150.0] * 11)
        assert cardiac_decoupling(pace, heart_rate) is None

    def test_pairs_joined_on_time(self):
        """Test that only samples with matching timestamps are paired."""
        pace = build_series(list(range(20)), [6.0] * 20)
        heart_rate = build_series(list(range(100, 120)), [150.0] * 20)

        assert cardiac_decoupling(pace, heart_rate) is None


class TestEfficiencyIndex:
    """Test the Efficiency Index."""

    def test_constant_effort(self):
        """Test speed per beat for constant pace and HR."""
        times = list(range(5))
        pace = build_series(times, [5.0] * 5)
        heart_rate = build_series(times, [150.0] * 5)

        speed = 1000.0 / (5.0 * 60)
        assert efficiency_index(pace, heart_rate) == pytest.approx(speed / 150.0)

    def test_mean_over_pairs(self):
        """Test that the index is the mean of per-pair values."""
        pace = build_series([0, 1], [5.0, 4.0])
        heart_rate = build_series([0, 1], [150.0, 160.0])

        expected = (1000 / 300 / 150 + 1000 / 240 / 160) / 2
        assert efficiency_index(pace, heart_rate) == pytest.approx(expected)

    def test_no_pairs(self):
        """Test that no usable pair yields None."""
        pace = build_series([0, 1], [5.0, 5.0])

        assert efficiency_index(pace, empty_series()) is None
        assert efficiency_index(pace, build_series([0, 1], [0.0, 0.0])) is None
