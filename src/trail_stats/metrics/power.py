"""
Power-based metric calculations.

This module handles Normalized Power (NP) computed over a trailing
time-based window, so that irregular sampling does not change its meaning.
"""

import logging

import numpy as np
import pandas as pd

from ..constants import TimeConstants
from ..models import SampleSeries

logger = logging.getLogger(__name__)


def normalized_power(power: SampleSeries) -> float | None:
    """
    Calculate Normalized Power using a trailing 30-second rolling average.

    For each sample at time t, the mean of all samples with time in
    (t - 30, t] is taken; NP is the fourth root of the mean fourth power of
    those rolling means.

    Args:
        power: Power series in watts indexed by time

    Returns:
        Normalized Power in watts, or None for an empty series
    """
    if power.empty:
        return None

    timed = pd.Series(
        power.to_numpy(dtype=float),
        index=pd.to_timedelta(power.index.to_numpy(), unit="s"),
    )
    if not timed.index.is_monotonic_increasing:
        timed = timed.sort_index(kind="stable")
    rolling_avg = timed.rolling(f"{TimeConstants.NORMALIZED_POWER_WINDOW}s").mean()

    fourth_power_mean = float((rolling_avg.to_numpy() ** 4).mean())
    np_value = fourth_power_mean**0.25

    if not np.isfinite(np_value):
        logger.warning("Non-finite normalized power, discarding")
        return None
    return float(np_value)
