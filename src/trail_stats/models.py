"""
Data models for the trail_stats package.

This module defines the core data structures exchanged between the engine and
its callers. All records are immutable Pydantic models.
"""

from datetime import date, datetime
from enum import Enum

from pandas import Series
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import GradeBuckets, TimeConstants


# Float samples indexed by integer time (seconds from activity start)
SampleSeries = Series


class SegmentType(str, Enum):
    """Direction of a detected segment."""

    CLIMB = "climb"
    DESCENT = "descent"


class Trend(str, Enum):
    """Classification of a KPI against a comparison baseline."""

    UP = "up"
    DOWN = "down"
    EQUAL = "equal"


class KPI(str, Enum):
    """Per-activity key performance indicators stored in ProcessedMetrics."""

    VERTICAL_SPEED_VAM = "vertical_speed_vam"
    DESCENT_VERTICAL_SPEED = "descent_vertical_speed"
    NORMALIZED_POWER = "normalized_power"
    CARDIAC_DECOUPLING = "cardiac_decoupling"
    GRADE_ADJUSTED_PACE = "grade_adjusted_pace"
    EFFICIENCY_INDEX = "efficiency_index"

    @property
    def higher_is_better(self) -> bool:
        """Whether a larger value of this KPI is an improvement."""
        # Pace is min/km and decoupling is drift: lower values are better.
        return self not in (KPI.CARDIAC_DECOUPLING, KPI.GRADE_ADJUSTED_PACE)


class HeartRateZoneConfig(BaseModel):
    """Configuration for heart rate zones as fractions of max heart rate."""

    zone1_upper: float = Field(
        0.60, description="Upper limit for Zone 1 (Recovery) as % of max HR"
    )
    zone2_upper: float = Field(
        0.70, description="Upper limit for Zone 2 (Endurance) as % of max HR"
    )
    zone3_upper: float = Field(
        0.80, description="Upper limit for Zone 3 (Tempo) as % of max HR"
    )
    zone4_upper: float = Field(
        0.90, description="Upper limit for Zone 4 (Threshold) as % of max HR"
    )

    @field_validator("*")
    @classmethod
    def check_zone_ranges(cls, v: float) -> float:
        """Validate that zone fractions are within (0, 1]."""
        if v <= 0 or v > 1:
            raise ValueError("Zone percentage must be between 0 and 1")
        return v

    @model_validator(mode="after")
    def check_zone_order(self) -> "HeartRateZoneConfig":
        """Validate that zone boundaries increase from zone 1 to zone 4."""
        fractions = self.fractions
        if any(lower >= upper for lower, upper in zip(fractions, fractions[1:])):
            raise ValueError("Zone boundaries must be strictly increasing")
        return self

    @property
    def fractions(self) -> tuple[float, float, float, float]:
        """Zone boundaries in ascending order."""
        return (self.zone1_upper, self.zone2_upper, self.zone3_upper, self.zone4_upper)


class ActivitySummary(BaseModel):
    """Summary data for an activity, as supplied by the activity provider."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Unique activity ID")
    name: str = Field("", description="Activity name")
    start_date: datetime = Field(..., description="Activity start time")
    distance: float = Field(..., description="Total distance in meters")
    duration: float = Field(..., description="Duration in seconds")
    elevation_gain: float = Field(..., description="Total elevation gain in meters")
    average_heart_rate: float | None = Field(
        None, description="Average heart rate in bpm"
    )
    average_cadence: float | None = Field(None, description="Average cadence in spm")
    average_power: float | None = Field(None, description="Average power in watts")

    # Running dynamics (only recorded by some devices)
    vertical_oscillation: float | None = Field(
        None, description="Vertical oscillation in cm"
    )
    ground_contact_time: float | None = Field(
        None, description="Ground contact time in ms"
    )
    stride_length: float | None = Field(None, description="Stride length in meters")
    vertical_ratio: float | None = Field(None, description="Vertical ratio in %")


class HeartRateZoneDistribution(BaseModel):
    """Time spent (seconds) in each of the five heart rate zones."""

    model_config = ConfigDict(frozen=True)

    time_in_zone1: float = 0.0
    time_in_zone2: float = 0.0
    time_in_zone3: float = 0.0
    time_in_zone4: float = 0.0
    time_in_zone5: float = 0.0

    @property
    def as_tuple(self) -> tuple[float, float, float, float, float]:
        """Zone times ordered from zone 1 to zone 5."""
        return (
            self.time_in_zone1,
            self.time_in_zone2,
            self.time_in_zone3,
            self.time_in_zone4,
            self.time_in_zone5,
        )

    @property
    def total_time(self) -> float:
        """Total time across all zones in seconds."""
        return sum(self.as_tuple)


class GradeBucketPerformance(BaseModel):
    """Performance accumulated over one fixed grade bucket."""

    model_config = ConfigDict(frozen=True)

    grade_bucket: str = Field(..., description="Bucket label, e.g. '5% to 10%'")
    distance: float = Field(0.0, description="Distance in meters")
    time: float = Field(0.0, description="Time in seconds")
    elevation: float = Field(0.0, description="Signed elevation change in meters")
    weighted_cadence_sum: float = Field(
        0.0, description="Sum of cadence x time over samples with cadence"
    )
    time_with_cadence: float = Field(
        0.0, description="Time in seconds covered by cadence samples"
    )

    @field_validator("grade_bucket")
    @classmethod
    def validate_grade_bucket(cls, v: str) -> str:
        """Validate the label is one of the fixed bucket labels."""
        if v not in GradeBuckets.LABELS:
            raise ValueError(f"Grade bucket must be one of: {', '.join(GradeBuckets.LABELS)}")
        return v

    @property
    def average_pace(self) -> float:
        """Average pace in min/km (0 when undefined)."""
        if self.distance <= 0 or self.time <= 0:
            return 0.0
        return (self.time / TimeConstants.SECONDS_PER_MINUTE) / (self.distance / 1000.0)

    @property
    def vertical_speed(self) -> float | None:
        """Vertical ascent rate in m/h, only for net-climbing buckets."""
        if self.elevation <= 0 or self.time <= 0:
            return None
        return self.elevation / (self.time / TimeConstants.SECONDS_PER_HOUR)

    @property
    def average_cadence(self) -> float | None:
        """Time-weighted average cadence."""
        if self.time_with_cadence <= 0:
            return None
        return self.weighted_cadence_sum / self.time_with_cadence


class ActivitySegment(BaseModel):
    """A sustained climb or descent extracted from the altitude profile."""

    model_config = ConfigDict(frozen=True)

    type: SegmentType = Field(..., description="Climb or descent")
    start_time: int = Field(..., description="Start time in seconds")
    end_time: int = Field(..., description="End time in seconds")
    start_distance: float = Field(..., description="Start distance in meters")
    end_distance: float = Field(..., description="End distance in meters")
    distance: float = Field(..., description="Segment distance in meters")
    elevation_change: float = Field(..., description="Signed elevation change (m)")
    average_grade: float = Field(..., description="Average grade in percent")
    time: float = Field(..., description="Elapsed time in seconds")
    average_pace: float = Field(..., description="Average pace in min/km")
    average_heart_rate: float | None = Field(
        None, description="Mean heart rate within the segment"
    )
    vertical_speed: float | None = Field(
        None, description="Vertical ascent rate in m/h (climbs only)"
    )


class ProcessedMetrics(BaseModel):
    """
    Derived metrics for one activity.

    Produced once per processing pass and always replaced wholesale. Every
    scalar KPI is optional: None means the streams did not carry enough data.
    """

    model_config = ConfigDict(frozen=True)

    vertical_speed_vam: float | None = Field(None, description="VAM in m/h")
    descent_vertical_speed: float | None = Field(
        None, description="Descent vertical speed in m/h"
    )
    normalized_power: float | None = Field(None, description="Normalized power (W)")
    cardiac_decoupling: float | None = Field(
        None, description="Pace:HR decoupling in percent"
    )
    grade_adjusted_pace: float | None = Field(
        None, description="Grade-adjusted pace in min/km"
    )
    efficiency_index: float | None = Field(
        None, description="Speed (m/s) per heart beat per minute"
    )
    average_stride_length: float | None = Field(
        None, description="Mean stride length from the streams in meters"
    )
    heart_rate_zone_distribution: HeartRateZoneDistribution | None = Field(
        None, description="Time in heart rate zones"
    )
    performance_by_grade: tuple[GradeBucketPerformance, ...] = Field(
        default=(), description="Performance per grade bucket, fixed bucket order"
    )
    climb_segments: tuple[ActivitySegment, ...] = Field(
        default=(), description="Detected climb and descent segments"
    )

    def kpi(self, kpi: KPI) -> float | None:
        """Get the value of a KPI by enum member."""
        return getattr(self, kpi.value)


class WeeklyDistance(BaseModel):
    """Total distance of one calendar week."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Week label, e.g. 'W14'")
    week_start: date = Field(..., description="Monday of the week")
    distance: float = Field(..., description="Total distance in meters")


class WeeklyZoneDistribution(BaseModel):
    """Time in heart rate zones summed over one calendar week."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Week label, e.g. 'W14'")
    week_start: date = Field(..., description="Monday of the week")
    time_in_zones: tuple[float, float, float, float, float] = Field(
        default=(0.0, 0.0, 0.0, 0.0, 0.0), description="Seconds in zones 1-5"
    )


class WeeklyDecoupling(BaseModel):
    """Mean cardiac decoupling over one calendar week."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Week label, e.g. 'W14'")
    week_start: date = Field(..., description="Monday of the week")
    average_decoupling: float = Field(..., description="Mean decoupling in percent")


class EfficiencyPoint(BaseModel):
    """Summary-level efficiency (km/h per bpm) of one activity."""

    model_config = ConfigDict(frozen=True)

    activity_id: int
    start_date: datetime
    value: float


class RunningDynamicsAverages(BaseModel):
    """Averages of the optional running-dynamics summary fields."""

    model_config = ConfigDict(frozen=True)

    vertical_oscillation: float | None = None
    ground_contact_time: float | None = None
    stride_length: float | None = None
    vertical_ratio: float | None = None

    @property
    def has_running_dynamics(self) -> bool:
        """Whether any activity reported vertical oscillation."""
        return self.vertical_oscillation is not None


class AggregateResult(BaseModel):
    """Cross-activity aggregation of summaries and processed metrics."""

    model_config = ConfigDict(frozen=True)

    # Totals (all selected activities)
    total_distance: float = Field(0.0, description="Total distance in meters")
    total_elevation: float = Field(0.0, description="Total elevation gain in meters")
    total_duration: float = Field(0.0, description="Total duration in seconds")
    total_activities: int = Field(0, description="Number of activities")

    # KPI averages over activities with a value
    average_vam: float | None = None
    average_gap: float | None = None
    average_descent_vam: float | None = None
    average_normalized_power: float | None = None
    average_efficiency_index: float | None = None
    average_decoupling: float | None = None

    running_dynamics: RunningDynamicsAverages = Field(
        default_factory=RunningDynamicsAverages
    )

    # Series
    efficiency_data: tuple[EfficiencyPoint, ...] = ()
    weekly_zone_distribution: tuple[WeeklyZoneDistribution, ...] = ()
    weekly_distance: tuple[WeeklyDistance, ...] = ()
    weekly_decoupling: tuple[WeeklyDecoupling, ...] = ()
    performance_by_grade: tuple[GradeBucketPerformance, ...] = ()
