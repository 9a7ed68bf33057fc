"""
Zone and grade distribution calculations.

This module provides two single-pass reducers over aligned series:
- Time in heart rate zones (fractions of max heart rate)
- Performance accumulated per fixed grade bucket
"""

import logging

import numpy as np

from ..constants import GradeBuckets, HeartRateZoneThresholds
from ..data.series import series_deltas, time_lookup
from ..models import (
    GradeBucketPerformance,
    HeartRateZoneConfig,
    HeartRateZoneDistribution,
    SampleSeries,
)

logger = logging.getLogger(__name__)


def heart_rate_zone_boundaries(
    max_heart_rate: float, zone_config: HeartRateZoneConfig | None = None
) -> np.ndarray:
    """Absolute heart rate boundaries between the five zones."""
    config = zone_config or HeartRateZoneConfig()
    return np.array(config.fractions) * max_heart_rate


def heart_rate_zone_distribution(
    heart_rate: SampleSeries,
    max_heart_rate: float = HeartRateZoneThresholds.DEFAULT_MAX_HR,
    zone_config: HeartRateZoneConfig | None = None,
) -> HeartRateZoneDistribution | None:
    """
    Calculate time spent in each heart rate zone.

    Each consecutive pair of samples attributes its time delta to the zone
    of the pair's average heart rate.

    Args:
        heart_rate: Heart rate series (bpm)
        max_heart_rate: Athlete maximum heart rate
        zone_config: Zone fractions (defaults to 60/70/80/90%)

    Returns:
        HeartRateZoneDistribution, or None if the series is empty
    """
    if heart_rate.empty:
        return None

    boundaries = heart_rate_zone_boundaries(max_heart_rate, zone_config)
    times = np.zeros(HeartRateZoneThresholds.ZONE_COUNT)

    if len(heart_rate) > 1:
        deltas = series_deltas(heart_rate)
        values = heart_rate.to_numpy(dtype=float)
        pair_average = (values[:-1] + values[1:]) / 2
        # Zone index = number of boundaries the average is not below
        zone_index = np.searchsorted(boundaries, pair_average, side="right")
        np.add.at(times, zone_index, deltas["dt"].to_numpy())

    return HeartRateZoneDistribution(
        time_in_zone1=float(times[0]),
        time_in_zone2=float(times[1]),
        time_in_zone3=float(times[2]),
        time_in_zone4=float(times[3]),
        time_in_zone5=float(times[4]),
    )


def grade_bucket_index(grade_percent: np.ndarray) -> np.ndarray:
    """Map grades (percent) onto indices of GradeBuckets.LABELS."""
    return np.searchsorted(np.array(GradeBuckets.EDGES), grade_percent, side="right")


def performance_by_grade(
    distance: SampleSeries,
    altitude: SampleSeries,
    cadence: SampleSeries | None = None,
) -> list[GradeBucketPerformance]:
    """
    Aggregate distance, time, elevation and cadence per grade bucket.

    Args:
        distance: Cumulative distance series in meters
        altitude: Altitude series in meters, index-aligned with distance
        cadence: Optional cadence series looked up by exact timestamp

    Returns:
        Buckets with more than one second of time, in fixed bucket order
    """
    if len(distance) != len(altitude) or len(distance) < 2:
        return []

    deltas = series_deltas(distance)
    dd = deltas["delta"].to_numpy()
    dt = deltas["dt"].to_numpy()
    dalt = np.diff(altitude.to_numpy(dtype=float))

    moving = dd > GradeBuckets.MIN_DISTANCE_DELTA
    if not moving.any():
        return []

    dd, dt, dalt = dd[moving], dt[moving], dalt[moving]
    bucket = grade_bucket_index(dalt / dd * 100)

    if cadence is not None and not cadence.empty:
        steps = time_lookup(cadence).reindex(deltas.index[moving]).to_numpy()
    else:
        steps = np.full(len(dd), np.nan)
    has_cadence = ~np.isnan(steps)

    bucket_count = len(GradeBuckets.LABELS)
    totals = {
        "distance": np.bincount(bucket, weights=dd, minlength=bucket_count),
        "time": np.bincount(bucket, weights=dt, minlength=bucket_count),
        "elevation": np.bincount(bucket, weights=dalt, minlength=bucket_count),
        "weighted_cadence_sum": np.bincount(
            bucket[has_cadence],
            weights=steps[has_cadence] * dt[has_cadence],
            minlength=bucket_count,
        ),
        "time_with_cadence": np.bincount(
            bucket[has_cadence], weights=dt[has_cadence], minlength=bucket_count
        ),
    }

    results = []
    for i, label in enumerate(GradeBuckets.LABELS):
        if totals["time"][i] <= GradeBuckets.MIN_BUCKET_TIME:
            continue
        results.append(
            GradeBucketPerformance(
                grade_bucket=label,
                **{key: float(values[i]) for key, values in totals.items()},
            )
        )
    return results
