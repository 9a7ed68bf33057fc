"""
Analysis and computation layer.

This package contains the cross-activity aggregator and KPI trend
classification.
"""

from .aggregator import (
    MetricsLookup,
    aggregate,
    efficiency_data,
    filter_by_time_frame,
    merge_performance_by_grade,
    running_dynamics_averages,
)
from .trends import classify_trend, recent_kpi_trends

__all__ = [
    "MetricsLookup",
    "aggregate",
    "efficiency_data",
    "filter_by_time_frame",
    "merge_performance_by_grade",
    "running_dynamics_averages",
    "classify_trend",
    "recent_kpi_trends",
]
