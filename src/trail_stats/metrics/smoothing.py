"""
Series smoothing.

Cadence, power, pace and stride-length streams are denoised with a centered
moving median before any downstream calculation.
"""

from ..models import SampleSeries


def moving_median(series: SampleSeries, window: int) -> SampleSeries:
    """
    Centered moving median with a window that shrinks at the boundaries.

    Output sample i is the median of input samples
    [max(0, i - window//2), min(n - 1, i + window//2)].

    Args:
        series: Series to smooth
        window: Odd window size in samples

    Returns:
        Smoothed series with the same index, or the input unchanged if the
        window is even or longer than the series
    """
    if window < 1 or window % 2 == 0 or len(series) < window:
        return series

    return series.rolling(window=window, center=True, min_periods=1).median()
