"""
KPI trend classification.

A KPI value is compared against the average of a comparison set; values
within 1% of that average are considered equal. Whether a difference is an
improvement depends on the KPI's polarity (lower pace and lower decoupling
are better).
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import timedelta

from ..constants import TrendConstants
from ..models import KPI, ActivitySummary, Trend
from .aggregator import MetricsLookup

logger = logging.getLogger(__name__)


def classify_trend(
    value: float | None,
    comparison_values: Iterable[float | None],
    higher_is_better: bool = True,
) -> Trend | None:
    """
    Classify a value against the average of a comparison set.

    Args:
        value: Value to classify
        comparison_values: Baseline values (missing entries are ignored)
        higher_is_better: KPI polarity

    Returns:
        Trend.EQUAL within 1% of the average, otherwise Trend.UP for an
        improvement and Trend.DOWN for a deterioration; None if there is
        nothing to compare
    """
    baseline = [v for v in comparison_values if v is not None]
    if value is None or not baseline:
        return None

    average = sum(baseline) / len(baseline)
    tolerance = TrendConstants.TOLERANCE_FRACTION * abs(average)

    if abs(value - average) <= tolerance:
        return Trend.EQUAL

    improved = value > average if higher_is_better else value < average
    return Trend.UP if improved else Trend.DOWN


def recent_kpi_trends(
    activity: ActivitySummary,
    activities: Sequence[ActivitySummary],
    metrics_lookup: MetricsLookup,
    window_days: int = TrendConstants.RECENT_WINDOW_DAYS,
) -> dict[KPI, Trend | None]:
    """
    Classify every KPI of an activity against its recent history.

    The comparison set is the other activities that started within
    `window_days` days before the activity (inclusive of both ends).

    Args:
        activity: Activity whose KPIs are classified
        activities: Candidate comparison activities
        metrics_lookup: Returns the ProcessedMetrics of an activity id, or None
        window_days: Length of the comparison window in days

    Returns:
        Trend (or None when not comparable) per KPI
    """
    metrics = metrics_lookup(activity.id)
    if metrics is None:
        logger.debug(f"No metrics for activity {activity.id}, no trends")
        return dict.fromkeys(KPI)

    window_start = activity.start_date - timedelta(days=window_days)
    recent = [
        other_metrics
        for other in activities
        if other.id != activity.id
        and window_start <= other.start_date <= activity.start_date
        and (other_metrics := metrics_lookup(other.id)) is not None
    ]

    return {
        kpi: classify_trend(
            metrics.kpi(kpi),
            (m.kpi(kpi) for m in recent),
            higher_is_better=kpi.higher_is_better,
        )
        for kpi in KPI
    }
