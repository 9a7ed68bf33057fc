"""
Efficiency and decoupling metric calculations.

This module handles pace:HR metrics including:
- Cardiac (pace:HR) decoupling
- Efficiency Index (speed per heart beat)

Pace and heart rate are paired by exact timestamp before any calculation.
"""

import logging

import numpy as np
import pandas as pd

from ..constants import EfficiencyConstants, TimeConstants
from ..data.series import join_on_time
from ..models import SampleSeries

logger = logging.getLogger(__name__)


def _paired_pace_hr(pace: SampleSeries, heart_rate: SampleSeries) -> pd.DataFrame:
    """Join pace and heart rate on timestamp, keeping pairs where both are > 0."""
    paired = join_on_time(pace, heart_rate).rename(
        columns={"left": "pace", "right": "heartrate"}
    )
    return paired[(paired["pace"] > 0) & (paired["heartrate"] > 0)]


def cardiac_decoupling(
    pace: SampleSeries, heart_rate: SampleSeries
) -> float | None:
    """
    Calculate pace:HR decoupling percentage.

    The paired samples are split in two halves by index; the decoupling is
    the relative drop of the average pace/HR ratio from the first half to
    the second.

    Args:
        pace: Smoothed pace series (min/km)
        heart_rate: Heart rate series (bpm)

    Returns:
        Decoupling in percent, or None with fewer than 11 paired samples
    """
    paired = _paired_pace_hr(pace, heart_rate)
    if len(paired) < EfficiencyConstants.MIN_DECOUPLING_SAMPLES:
        return None

    ratio = (paired["pace"] / paired["heartrate"]).to_numpy()
    midpoint = len(ratio) // 2
    first_half = float(ratio[:midpoint].mean())
    second_half = float(ratio[midpoint:].mean())

    if first_half == 0:
        return None

    decoupling = (first_half - second_half) / first_half * 100
    return decoupling if np.isfinite(decoupling) else None


def efficiency_index(pace: SampleSeries, heart_rate: SampleSeries) -> float | None:
    """
    Calculate the Efficiency Index.

    Mean over paired samples of speed (m/s, from pace) per beat per minute.

    Args:
        pace: Smoothed pace series (min/km)
        heart_rate: Heart rate series (bpm)

    Returns:
        Efficiency Index, or None if no pace/HR pair exists
    """
    paired = _paired_pace_hr(pace, heart_rate)
    if paired.empty:
        return None

    speed = 1000.0 / (paired["pace"] * TimeConstants.SECONDS_PER_MINUTE)
    ei = float((speed / paired["heartrate"]).mean())
    return ei if np.isfinite(ei) else None
