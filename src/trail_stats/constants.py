"""
Constants used throughout the trail_stats package.

This module centralizes all magic numbers and commonly used values. The
numeric thresholds below are part of the metrics contract: changing them
changes every ProcessedMetrics record produced by the engine.
"""

from typing import Final


# === Time Constants ===
class TimeConstants:
    """Time-related constants in seconds."""

    SECONDS_PER_MINUTE: Final[int] = 60
    SECONDS_PER_HOUR: Final[int] = 3600

    # Rolling window sizes
    NORMALIZED_POWER_WINDOW: Final[int] = 30  # Trailing (t-30, t] window for NP


# === Series Smoothing ===
class SmoothingWindows:
    """Moving-median window sizes (in samples, must be odd)."""

    PACE: Final[int] = 31
    STRIDE_LENGTH: Final[int] = 31
    CADENCE: Final[int] = 31
    POWER: Final[int] = 31


# === Stream Names ===
class StreamNames:
    """Keys of the raw per-activity stream bundle."""

    TIME: Final[str] = "time"
    DISTANCE: Final[str] = "distance"
    ALTITUDE: Final[str] = "altitude"
    HEARTRATE: Final[str] = "heartrate"
    CADENCE: Final[str] = "cadence"
    WATTS: Final[str] = "watts"

    @classmethod
    def all(cls) -> list[str]:
        """Get all known stream names."""
        return [
            cls.TIME,
            cls.DISTANCE,
            cls.ALTITUDE,
            cls.HEARTRATE,
            cls.CADENCE,
            cls.WATTS,
        ]


# === Grade Adjustment (Running) ===
class GradeCostModel:
    """Metabolic cost factors for grade-adjusted pace."""

    UPHILL_FACTOR: Final[float] = 3.5  # cost = 1 + 3.5 * grade for grade >= 0
    DOWNHILL_FACTOR: Final[float] = 1.8  # cost = 1 + 1.8 * grade for grade < 0
    MIN_COST: Final[float] = 0.3  # Floor for steep descents


# === Efficiency Calculation ===
class EfficiencyConstants:
    """Constants for pace:HR efficiency metrics."""

    MIN_DECOUPLING_SAMPLES: Final[int] = 11  # Paired samples needed for decoupling


# === Heart Rate Zones ===
class HeartRateZoneThresholds:
    """Heart rate zone boundaries as fractions of maximum heart rate."""

    DEFAULT_MAX_HR: Final[float] = 190.0

    ZONE_1_MAX: Final[float] = 0.60
    ZONE_2_MAX: Final[float] = 0.70
    ZONE_3_MAX: Final[float] = 0.80
    ZONE_4_MAX: Final[float] = 0.90
    # Zone 5 is everything above 0.90

    ZONE_COUNT: Final[int] = 5


# === Performance by Grade ===
class GradeBuckets:
    """Fixed grade buckets (percent) used to aggregate performance by slope."""

    # Lower edge inclusive: grade < -15 -> "<-15%", -15 <= grade < -10 -> ...
    EDGES: Final[tuple[float, ...]] = (-15.0, -10.0, -5.0, 0.0, 5.0, 10.0, 15.0)
    LABELS: Final[tuple[str, ...]] = (
        "<-15%",
        "-15% to -10%",
        "-10% to -5%",
        "-5% to 0%",
        "0% to 5%",
        "5% to 10%",
        "10% to 15%",
        ">15%",
    )

    MIN_DISTANCE_DELTA: Final[float] = 0.1  # Metres; shorter steps are GPS jitter
    MIN_BUCKET_TIME: Final[float] = 1.0  # Buckets with time <= 1s are dropped


# === Segment Detection ===
class SegmentThresholds:
    """Thresholds of the climb/descent segment detector."""

    DIRECTION_CHANGE: Final[float] = 0.1  # Altitude delta (m) marking climbing/descending
    MIN_ELEVATION_CHANGE: Final[float] = 10.0  # Metres
    MIN_DISTANCE: Final[float] = 100.0  # Metres


# === Trend Classification ===
class TrendConstants:
    """Constants for KPI trend classification."""

    TOLERANCE_FRACTION: Final[float] = 0.01  # 1% of the comparison average
    RECENT_WINDOW_DAYS: Final[int] = 30


# === Aggregation ===
class AggregationDefaults:
    """Defaults for cross-activity aggregation."""

    TIME_FRAME_DAYS: Final[int] = 30
    WEEK_LABEL_PREFIX: Final[str] = "W"


# === CSV Parsing ===
class CSVConstants:
    """Constants for CSV file parsing."""

    DEFAULT_SEPARATOR: Final[str] = ";"  # Semicolon-separated format
    DEFAULT_ENCODING: Final[str] = "utf-8"


# === File Naming ===
class FileNames:
    """File naming conventions of the data directory."""

    STREAM_TEMPLATE: Final[str] = "stream_{activity_id}.csv"
    METRICS_TEMPLATE: Final[str] = "{activity_id}.json"
    AGGREGATE_SUMMARY: Final[str] = "aggregate_summary.json"
