"""
High-level metric calculator orchestrator.

The shared series (distance, altitude, heart rate, smoothed cadence and
power, pace, stride length) are built once per activity and fanned out to the
independent calculators; their results are joined into a single immutable
ProcessedMetrics.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from ..constants import HeartRateZoneThresholds, SmoothingWindows, StreamNames
from ..data.series import build_stream_series
from ..models import (
    ActivitySummary,
    HeartRateZoneConfig,
    ProcessedMetrics,
    SampleSeries,
)
from ..settings import Settings
from .climbing import descent_vertical_speed, grade_adjusted_pace, vertical_speed_vam
from .derived import average_stride_length, pace_series, stride_length_series
from .efficiency import cardiac_decoupling, efficiency_index
from .power import normalized_power
from .segments import detect_segments
from .smoothing import moving_median
from .zones import heart_rate_zone_distribution, performance_by_grade

logger = logging.getLogger(__name__)

T = TypeVar("T")

RawStreams = Mapping[str, Sequence[Any]]


@dataclass(frozen=True)
class ActivitySeries:
    """Series shared by every calculator for one activity."""

    distance: SampleSeries
    altitude: SampleSeries
    heart_rate: SampleSeries
    cadence: SampleSeries
    power: SampleSeries
    pace: SampleSeries
    stride_length: SampleSeries

    @classmethod
    def from_streams(cls, raw_streams: RawStreams) -> "ActivitySeries":
        """Build and smooth every shared series from a raw stream bundle."""
        distance = build_stream_series(raw_streams, StreamNames.DISTANCE)
        cadence = moving_median(
            build_stream_series(raw_streams, StreamNames.CADENCE),
            SmoothingWindows.CADENCE,
        )
        power = moving_median(
            build_stream_series(raw_streams, StreamNames.WATTS),
            SmoothingWindows.POWER,
        )
        return cls(
            distance=distance,
            altitude=build_stream_series(raw_streams, StreamNames.ALTITUDE),
            heart_rate=build_stream_series(raw_streams, StreamNames.HEARTRATE),
            cadence=cadence,
            power=power,
            pace=pace_series(distance),
            stride_length=stride_length_series(distance, cadence),
        )


class MetricsCalculator:
    """
    Orchestrates calculation of all per-activity metrics.

    Each calculator runs independently; an unexpected failure in one of them
    is logged and leaves only that field empty.
    """

    def __init__(self, settings: Settings):
        """
        Initialize the calculator.

        Args:
            settings: Application settings providing max heart rate and zones
        """
        self.settings = settings

    def compute(
        self, activity_summary: ActivitySummary, raw_streams: RawStreams
    ) -> ProcessedMetrics:
        """
        Compute ProcessedMetrics for one activity.

        Args:
            activity_summary: Summary of the activity
            raw_streams: Mapping of stream name to per-second samples

        Returns:
            ProcessedMetrics with every field the streams support
        """
        return compute_processed_metrics(
            activity_summary,
            raw_streams,
            max_heart_rate=self.settings.max_heart_rate,
            zone_config=self.settings.hr_zones,
        )


def _guarded(name: str, activity_id: int, func: Callable[[], T], default: T) -> T:
    """Run one calculator, logging and falling back to `default` on failure."""
    try:
        return func()
    except Exception as e:
        logger.warning(f"Error calculating {name} for activity {activity_id}: {e}")
        return default


def compute_processed_metrics(
    activity_summary: ActivitySummary,
    raw_streams: RawStreams,
    max_heart_rate: float = HeartRateZoneThresholds.DEFAULT_MAX_HR,
    zone_config: HeartRateZoneConfig | None = None,
) -> ProcessedMetrics:
    """
    Compute all derived metrics of one activity.

    The result depends only on the summary, the raw streams and the heart
    rate configuration.

    Args:
        activity_summary: Summary of the activity
        raw_streams: Mapping of stream name to per-second samples
        max_heart_rate: Athlete maximum heart rate for zone boundaries
        zone_config: Zone fractions (defaults to 60/70/80/90%)

    Returns:
        ProcessedMetrics for the activity
    """
    activity_id = activity_summary.id
    series = _guarded(
        "series", activity_id, lambda: ActivitySeries.from_streams(raw_streams), None
    )
    if series is None:
        return ProcessedMetrics(
            vertical_speed_vam=vertical_speed_vam(
                activity_summary.elevation_gain, activity_summary.duration
            )
        )

    logger.debug(
        f"Activity {activity_id}: {len(series.distance)} distance, "
        f"{len(series.altitude)} altitude, {len(series.heart_rate)} HR samples"
    )

    metrics = ProcessedMetrics(
        vertical_speed_vam=_guarded(
            "VAM",
            activity_id,
            lambda: vertical_speed_vam(
                activity_summary.elevation_gain, activity_summary.duration
            ),
            None,
        ),
        descent_vertical_speed=_guarded(
            "descent vertical speed",
            activity_id,
            lambda: descent_vertical_speed(series.altitude),
            None,
        ),
        normalized_power=_guarded(
            "normalized power", activity_id, lambda: normalized_power(series.power), None
        ),
        cardiac_decoupling=_guarded(
            "cardiac decoupling",
            activity_id,
            lambda: cardiac_decoupling(series.pace, series.heart_rate),
            None,
        ),
        grade_adjusted_pace=_guarded(
            "grade-adjusted pace",
            activity_id,
            lambda: grade_adjusted_pace(series.distance, series.altitude),
            None,
        ),
        efficiency_index=_guarded(
            "efficiency index",
            activity_id,
            lambda: efficiency_index(series.pace, series.heart_rate),
            None,
        ),
        average_stride_length=_guarded(
            "stride length",
            activity_id,
            lambda: average_stride_length(series.stride_length),
            None,
        ),
        heart_rate_zone_distribution=_guarded(
            "heart rate zones",
            activity_id,
            lambda: heart_rate_zone_distribution(
                series.heart_rate, max_heart_rate, zone_config
            ),
            None,
        ),
        performance_by_grade=tuple(
            _guarded(
                "performance by grade",
                activity_id,
                lambda: performance_by_grade(
                    series.distance, series.altitude, series.cadence
                ),
                [],
            )
        ),
        climb_segments=tuple(
            _guarded(
                "segments",
                activity_id,
                lambda: detect_segments(
                    series.distance, series.altitude, series.heart_rate
                ),
                [],
            )
        ),
    )

    logger.debug(
        f"Activity {activity_id}: {len(metrics.climb_segments)} segments, "
        f"{len(metrics.performance_by_grade)} grade buckets"
    )
    return metrics
