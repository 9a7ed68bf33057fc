"""
Cross-activity aggregation.

This module reduces many activity summaries and their ProcessedMetrics into
totals, KPI averages, weekly series and a merged performance-by-grade table.
Aggregation is a pure reduction: inputs are never mutated and calling it
twice with the same inputs yields equal results.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import date, datetime, timedelta

import pandas as pd

from ..constants import AggregationDefaults, GradeBuckets, TimeConstants
from ..models import (
    KPI,
    ActivitySummary,
    AggregateResult,
    EfficiencyPoint,
    GradeBucketPerformance,
    ProcessedMetrics,
    RunningDynamicsAverages,
    WeeklyDecoupling,
    WeeklyDistance,
    WeeklyZoneDistribution,
)

logger = logging.getLogger(__name__)

# Maps an activity id to its metrics, or None if it was never processed
MetricsLookup = Callable[[int], ProcessedMetrics | None]

ZONE_COLUMNS = [f"zone{i}" for i in range(1, 6)]

KPI_AVERAGE_FIELDS = {
    KPI.VERTICAL_SPEED_VAM: "average_vam",
    KPI.GRADE_ADJUSTED_PACE: "average_gap",
    KPI.DESCENT_VERTICAL_SPEED: "average_descent_vam",
    KPI.NORMALIZED_POWER: "average_normalized_power",
    KPI.EFFICIENCY_INDEX: "average_efficiency_index",
    KPI.CARDIAC_DECOUPLING: "average_decoupling",
}

RUNNING_DYNAMICS_FIELDS = (
    "vertical_oscillation",
    "ground_contact_time",
    "stride_length",
    "vertical_ratio",
)


def week_start(start_date: datetime) -> date:
    """Monday of the week containing `start_date`."""
    day = start_date.date()
    return day - timedelta(days=day.weekday())


def week_label(monday: date) -> str:
    """Label of a week, e.g. 'W14' for ISO week 14."""
    return f"{AggregationDefaults.WEEK_LABEL_PREFIX}{monday.isocalendar()[1]}"


def filter_by_time_frame(
    activities: Sequence[ActivitySummary],
    days: int = AggregationDefaults.TIME_FRAME_DAYS,
    as_of: datetime | None = None,
) -> list[ActivitySummary]:
    """
    Select the activities that started within the last `days` days.

    Args:
        activities: Activity summaries
        days: Length of the time frame in days
        as_of: End of the time frame (defaults to the latest start date)

    Returns:
        Activities with start_date >= as_of - days, input order preserved
    """
    if not activities:
        return []
    reference = as_of or max(a.start_date for a in activities)
    cutoff = reference - timedelta(days=days)
    return [a for a in activities if a.start_date >= cutoff]


def _activity_frame(
    activities: Sequence[ActivitySummary],
    metrics_by_id: dict[int, ProcessedMetrics | None],
) -> pd.DataFrame:
    """One row per activity with its summary fields, KPIs and zone times."""
    rows = []
    for activity in activities:
        metrics = metrics_by_id[activity.id]
        row: dict[str, object] = {
            "id": activity.id,
            "week_start": week_start(activity.start_date),
            "distance": activity.distance,
            "duration": activity.duration,
            "elevation_gain": activity.elevation_gain,
        }
        for kpi in KPI:
            row[kpi.value] = metrics.kpi(kpi) if metrics is not None else None

        zones = metrics.heart_rate_zone_distribution if metrics is not None else None
        zone_times = zones.as_tuple if zones is not None else (0.0,) * 5
        row.update(zip(ZONE_COLUMNS, zone_times, strict=True))
        rows.append(row)

    columns = [
        "id",
        "week_start",
        "distance",
        "duration",
        "elevation_gain",
        *(kpi.value for kpi in KPI),
        *ZONE_COLUMNS,
    ]
    df = pd.DataFrame(rows, columns=columns)
    kpi_columns = [kpi.value for kpi in KPI]
    df[kpi_columns] = df[kpi_columns].astype(float)
    return df


def _optional_mean(values: pd.Series) -> float | None:
    """Mean of the non-missing values, None if there are none."""
    present = values.dropna()
    if present.empty:
        return None
    return float(present.mean())


def _weekly_distance(df: pd.DataFrame) -> tuple[WeeklyDistance, ...]:
    weekly = df.groupby("week_start", sort=True)["distance"].sum()
    return tuple(
        WeeklyDistance(id=week_label(monday), week_start=monday, distance=float(total))
        for monday, total in weekly.items()
    )


def _weekly_zone_distribution(df: pd.DataFrame) -> tuple[WeeklyZoneDistribution, ...]:
    weekly = df.groupby("week_start", sort=True)[ZONE_COLUMNS].sum()
    return tuple(
        WeeklyZoneDistribution(
            id=week_label(monday),
            week_start=monday,
            time_in_zones=tuple(float(row[col]) for col in ZONE_COLUMNS),
        )
        for monday, row in weekly.iterrows()
    )


def _weekly_decoupling(df: pd.DataFrame) -> tuple[WeeklyDecoupling, ...]:
    # groupby().mean() skips NaN; weeks without any value come back as NaN
    weekly = (
        df.groupby("week_start", sort=True)[KPI.CARDIAC_DECOUPLING.value]
        .mean()
        .dropna()
    )
    return tuple(
        WeeklyDecoupling(
            id=week_label(monday), week_start=monday, average_decoupling=float(value)
        )
        for monday, value in weekly.items()
    )


def merge_performance_by_grade(
    tables: Iterable[Sequence[GradeBucketPerformance]],
) -> tuple[GradeBucketPerformance, ...]:
    """
    Merge per-activity grade tables bucket by bucket.

    Args:
        tables: Performance-by-grade tables of several activities

    Returns:
        Summed buckets in fixed bucket order; buckets absent everywhere are
        not emitted
    """
    fields = ("distance", "time", "elevation", "weighted_cadence_sum", "time_with_cadence")
    totals: dict[str, dict[str, float]] = {}
    for table in tables:
        for bucket in table:
            merged = totals.setdefault(bucket.grade_bucket, dict.fromkeys(fields, 0.0))
            for name in fields:
                merged[name] += getattr(bucket, name)

    return tuple(
        GradeBucketPerformance(grade_bucket=label, **totals[label])
        for label in GradeBuckets.LABELS
        if label in totals
    )


def efficiency_data(
    activities: Sequence[ActivitySummary],
) -> tuple[EfficiencyPoint, ...]:
    """
    Summary-level efficiency (speed in km/h per bpm) of each activity.

    Activities without a positive average heart rate or duration are skipped.
    Points are ordered by start date.
    """
    points = []
    for activity in activities:
        hr = activity.average_heart_rate
        if hr is None or hr <= 0 or activity.duration <= 0:
            continue
        speed_kmh = (activity.distance / 1000.0) / (
            activity.duration / TimeConstants.SECONDS_PER_HOUR
        )
        points.append(
            EfficiencyPoint(
                activity_id=activity.id,
                start_date=activity.start_date,
                value=speed_kmh / hr,
            )
        )
    points.sort(key=lambda p: p.start_date)
    return tuple(points)


def running_dynamics_averages(
    activities: Sequence[ActivitySummary],
) -> RunningDynamicsAverages:
    """Average each running-dynamics field over the activities reporting it."""
    df = pd.DataFrame(
        [{name: getattr(a, name) for name in RUNNING_DYNAMICS_FIELDS} for a in activities],
        columns=list(RUNNING_DYNAMICS_FIELDS),
    ).astype(float)
    return RunningDynamicsAverages(
        **{name: _optional_mean(df[name]) for name in RUNNING_DYNAMICS_FIELDS}
    )


def aggregate(
    activities: Sequence[ActivitySummary], metrics_lookup: MetricsLookup
) -> AggregateResult:
    """
    Aggregate activities and their processed metrics.

    Activities without ProcessedMetrics count in the totals and weekly
    distance but not in any KPI aggregate.

    Args:
        activities: Activity summaries to aggregate
        metrics_lookup: Returns the ProcessedMetrics of an activity id, or None

    Returns:
        AggregateResult
    """
    if not activities:
        return AggregateResult()

    metrics_by_id = {a.id: metrics_lookup(a.id) for a in activities}
    available = [m for m in metrics_by_id.values() if m is not None]
    df = _activity_frame(activities, metrics_by_id)
    logger.debug(
        f"Aggregating {len(activities)} activities ({len(available)} with metrics)"
    )

    averages = {
        field: _optional_mean(df[kpi.value]) for kpi, field in KPI_AVERAGE_FIELDS.items()
    }

    return AggregateResult(
        total_distance=float(df["distance"].sum()),
        total_elevation=float(df["elevation_gain"].sum()),
        total_duration=float(df["duration"].sum()),
        total_activities=len(df),
        **averages,
        running_dynamics=running_dynamics_averages(activities),
        efficiency_data=efficiency_data(activities),
        weekly_zone_distribution=_weekly_zone_distribution(df),
        weekly_distance=_weekly_distance(df),
        weekly_decoupling=_weekly_decoupling(df),
        performance_by_grade=merge_performance_by_grade(
            m.performance_by_grade for m in available
        ),
    )
