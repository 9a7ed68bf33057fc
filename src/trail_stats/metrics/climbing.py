"""
Climbing-specific metric calculations.

This module handles vertical metrics including:
- VAM (Velocità Ascensionale Media)
- Descent vertical speed
- Grade-Adjusted Pace (GAP)

Every function returns None when the input does not carry enough data.
"""

import logging

import numpy as np

from ..constants import GradeCostModel, TimeConstants
from ..data.series import series_deltas
from ..models import SampleSeries

logger = logging.getLogger(__name__)


def vertical_speed_vam(elevation_gain: float, duration: float) -> float | None:
    """
    Calculate VAM - vertical ascent rate over the whole activity.

    VAM = elevation_gain / (duration / 3600) (m/h)

    Args:
        elevation_gain: Total elevation gain in meters
        duration: Activity duration in seconds

    Returns:
        VAM in m/h, or None if gain or duration is not positive
    """
    if elevation_gain <= 0 or duration <= 0:
        return None
    return elevation_gain / (duration / TimeConstants.SECONDS_PER_HOUR)


def descent_vertical_speed(altitude: SampleSeries) -> float | None:
    """
    Calculate the vertical speed over descending steps.

    Args:
        altitude: Altitude series in meters

    Returns:
        Metres descended per hour of descending time, or None if the
        activity never descends
    """
    if len(altitude) < 2:
        return None

    deltas = series_deltas(altitude)
    descending = deltas["delta"].to_numpy() < 0
    descent = float(-deltas["delta"].to_numpy()[descending].sum())
    descent_time = float(deltas["dt"].to_numpy()[descending].sum())

    if descent_time <= 0:
        return None
    return descent / (descent_time / TimeConstants.SECONDS_PER_HOUR)


def grade_cost(grade: np.ndarray) -> np.ndarray:
    """
    Relative metabolic cost of running at a grade (fraction, not percent).

    cost = 1 + 3.5 * grade uphill, 1 + 1.8 * grade downhill, floored at 0.3.
    """
    factor = np.where(
        grade >= 0, GradeCostModel.UPHILL_FACTOR, GradeCostModel.DOWNHILL_FACTOR
    )
    return np.maximum(1.0 + factor * grade, GradeCostModel.MIN_COST)


def grade_adjusted_pace(
    distance: SampleSeries, altitude: SampleSeries
) -> float | None:
    """
    Calculate Grade-Adjusted Pace.

    Each step's elapsed time is scaled by the grade cost into a flat-ground
    equivalent time; GAP is that equivalent time per kilometre.

    Args:
        distance: Cumulative distance series in meters
        altitude: Altitude series in meters, index-aligned with distance

    Returns:
        GAP in min/km, or None if the series are misaligned or cover no distance
    """
    if len(distance) != len(altitude):
        logger.debug(
            f"Distance/altitude length mismatch ({len(distance)} vs "
            f"{len(altitude)}), skipping GAP"
        )
        return None
    if len(distance) < 2:
        return None

    deltas = series_deltas(distance)
    dd = deltas["delta"].to_numpy()
    dt = deltas["dt"].to_numpy()
    dalt = np.diff(altitude.to_numpy(dtype=float))

    moving = (dd > 0) & (dt > 0)
    total_distance = float(dd[moving].sum())
    if total_distance <= 0:
        return None

    grade = dalt[moving] / dd[moving]
    equivalent_time = float((dt[moving] * grade_cost(grade)).sum())

    return equivalent_time / total_distance * 1000.0 / TimeConstants.SECONDS_PER_MINUTE
