"""
Climb and descent segment detection.

The detector walks the altitude profile as a two-state machine
(climbing / descending). A step whose altitude change exceeds the direction
threshold in the opposite direction closes the current run as a candidate
segment; smaller changes are absorbed into the run being accumulated.
Candidates shorter than 100 m or with less than 10 m of elevation change
are discarded.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from ..constants import SegmentThresholds, TimeConstants
from ..data.series import empty_series
from ..models import ActivitySegment, SampleSeries, SegmentType

logger = logging.getLogger(__name__)


class Direction(Enum):
    """State of the segment detector."""

    CLIMBING = "climbing"
    DESCENDING = "descending"

    @property
    def segment_type(self) -> SegmentType:
        """Segment type emitted for a run in this direction."""
        return SegmentType.CLIMB if self is Direction.CLIMBING else SegmentType.DESCENT


@dataclass(frozen=True)
class ProfilePoint:
    """One sample of the aligned time/distance/altitude profile."""

    time: int
    distance: float
    altitude: float


@dataclass(frozen=True)
class Candidate:
    """A closed run of points in one direction, not yet filtered."""

    direction: Direction
    points: tuple[ProfilePoint, ...]


def classify_step(altitude_delta: float) -> Direction | None:
    """Direction signalled by one altitude step, None if below threshold."""
    if altitude_delta > SegmentThresholds.DIRECTION_CHANGE:
        return Direction.CLIMBING
    if altitude_delta < -SegmentThresholds.DIRECTION_CHANGE:
        return Direction.DESCENDING
    return None


@dataclass
class SegmentDetector:
    """
    Direction-change state machine over a profile.

    Feed points in time order with `step`, then call `finish` to flush the
    last run. Closed runs are collected in `candidates`.
    """

    direction: Direction | None = None
    points: list[ProfilePoint] = field(default_factory=list)
    candidates: list[Candidate] = field(default_factory=list)

    def step(self, point: ProfilePoint) -> None:
        """Consume the next profile point."""
        if not self.points:
            self.points.append(point)
            return

        previous = self.points[-1]
        signalled = classify_step(point.altitude - previous.altitude)

        if signalled is None or signalled is self.direction:
            self.points.append(point)
        elif self.direction is None:
            self.direction = signalled
            self.points.append(point)
        else:
            self.flush()
            self.points = [previous, point]
            self.direction = signalled

    def flush(self) -> None:
        """Close the run being accumulated as a candidate."""
        if self.direction is not None and len(self.points) > 1:
            self.candidates.append(Candidate(self.direction, tuple(self.points)))
        self.points = []

    def finish(self) -> list[Candidate]:
        """Flush the final run and return every candidate."""
        self.flush()
        return self.candidates


def build_segment(
    candidate: Candidate, heart_rate: SampleSeries
) -> ActivitySegment | None:
    """
    Turn a candidate into a segment if it passes the noise filter.

    Args:
        candidate: Closed run of profile points
        heart_rate: Heart rate series used for the segment average

    Returns:
        ActivitySegment, or None if the candidate is too short or too flat
    """
    start, end = candidate.points[0], candidate.points[-1]
    distance = end.distance - start.distance
    elevation_change = end.altitude - start.altitude

    if (
        abs(elevation_change) < SegmentThresholds.MIN_ELEVATION_CHANGE
        or distance < SegmentThresholds.MIN_DISTANCE
    ):
        return None

    elapsed = float(end.time - start.time)
    average_pace = (
        (elapsed / TimeConstants.SECONDS_PER_MINUTE) / (distance / 1000.0)
        if elapsed > 0
        else 0.0
    )

    in_segment = (heart_rate.index >= start.time) & (heart_rate.index <= end.time)
    hr_values = heart_rate.to_numpy()[in_segment]
    average_hr = float(hr_values.mean()) if len(hr_values) else None

    vertical_speed = None
    if candidate.direction is Direction.CLIMBING and elapsed > 0:
        vertical_speed = elevation_change / (elapsed / TimeConstants.SECONDS_PER_HOUR)

    return ActivitySegment(
        type=candidate.direction.segment_type,
        start_time=start.time,
        end_time=end.time,
        start_distance=start.distance,
        end_distance=end.distance,
        distance=distance,
        elevation_change=elevation_change,
        average_grade=elevation_change / distance * 100,
        time=elapsed,
        average_pace=average_pace,
        average_heart_rate=average_hr,
        vertical_speed=vertical_speed,
    )


def detect_segments(
    distance: SampleSeries,
    altitude: SampleSeries,
    heart_rate: SampleSeries | None = None,
) -> list[ActivitySegment]:
    """
    Detect sustained climbs and descents.

    Args:
        distance: Cumulative distance series in meters
        altitude: Altitude series in meters, index-aligned with distance
        heart_rate: Optional heart rate series for segment averages

    Returns:
        Segments ordered by start time
    """
    if len(distance) != len(altitude) or len(distance) < 2:
        return []

    heart_rate = heart_rate if heart_rate is not None else empty_series("heartrate")

    detector = SegmentDetector()
    for t, d, a in zip(
        distance.index.to_numpy(),
        distance.to_numpy(dtype=float),
        altitude.to_numpy(dtype=float),
        strict=True,
    ):
        detector.step(ProfilePoint(time=int(t), distance=float(d), altitude=float(a)))
    candidates = detector.finish()

    segments = []
    for candidate in candidates:
        segment = build_segment(candidate, heart_rate)
        if segment is not None:
            segments.append(segment)

    logger.debug(
        f"Segment detection: {len(candidates)} candidates, {len(segments)} kept"
    )
    return segments
