"""
Derived running series.

This module turns the distance stream (and cadence) into:
- Pace series (min/km)
- Stride length series (m)

Both are smoothed with the moving median before use.
"""

import numpy as np
import pandas as pd

from ..constants import SmoothingWindows, TimeConstants
from ..data.series import empty_series, series_deltas, time_lookup
from ..models import SampleSeries
from .smoothing import moving_median


def pace_series(distance: SampleSeries) -> SampleSeries:
    """
    Calculate the smoothed pace series from the distance stream.

    pace = (dt / 60) / (d_distance / 1000) for each consecutive pair with a
    positive distance and time delta, 0 otherwise.

    Args:
        distance: Cumulative distance series in meters

    Returns:
        Pace in min/km indexed by the later sample's time
    """
    if len(distance) < 2:
        return empty_series("pace")

    deltas = series_deltas(distance)
    dt = deltas["dt"].to_numpy()
    dd = deltas["delta"].to_numpy()
    moving = (dd > 0) & (dt > 0)

    values = np.zeros(len(deltas))
    values[moving] = (dt[moving] / TimeConstants.SECONDS_PER_MINUTE) / (
        dd[moving] / 1000.0
    )
    pace = pd.Series(values, index=deltas.index, name="pace")

    return moving_median(pace, SmoothingWindows.PACE)


def stride_length_series(
    distance: SampleSeries, cadence: SampleSeries
) -> SampleSeries:
    """
    Calculate the smoothed stride length series.

    For each consecutive distance pair whose later timestamp has a cadence
    sample: stride = speed (m/s) / (cadence / 60). Pairs without a matching
    cadence sample, with zero cadence or with no elapsed time are skipped.

    Args:
        distance: Cumulative distance series in meters
        cadence: Cadence series (steps per minute)

    Returns:
        Stride length in meters indexed by time
    """
    if len(distance) < 2 or cadence.empty:
        return empty_series("stride_length")

    deltas = series_deltas(distance)
    steps = time_lookup(cadence).reindex(deltas.index).to_numpy()
    dt = deltas["dt"].to_numpy()
    dd = deltas["delta"].to_numpy()

    with np.errstate(invalid="ignore"):
        usable = ~np.isnan(steps) & (steps > 0) & (dt > 0)
    if not usable.any():
        return empty_series("stride_length")

    speed = dd[usable] / dt[usable]
    stride = speed / (steps[usable] / TimeConstants.SECONDS_PER_MINUTE)
    series = pd.Series(stride, index=deltas.index[usable], name="stride_length")

    return moving_median(series, SmoothingWindows.STRIDE_LENGTH)


def average_stride_length(stride_length: SampleSeries) -> float | None:
    """
    Average of the smoothed stride length series.

    Args:
        stride_length: Stride length series in meters

    Returns:
        Mean stride length in meters, or None without samples
    """
    strides = stride_length[stride_length > 0]
    if strides.empty:
        return None
    return float(strides.mean())
