"""
Metrics calculation modules.

This package contains all per-activity metric logic, organized by type:
- smoothing: Moving median smoother
- derived: Pace and stride length series
- climbing: VAM, descent vertical speed, grade-adjusted pace
- power: Normalized power
- efficiency: Cardiac decoupling and efficiency index
- zones: Heart rate zone distribution and performance by grade
- segments: Climb and descent segment detection
- calculators: High-level calculator orchestrator
"""

from .calculators import ActivitySeries, MetricsCalculator, compute_processed_metrics
from .climbing import (
    descent_vertical_speed,
    grade_adjusted_pace,
    grade_cost,
    vertical_speed_vam,
)
from .derived import average_stride_length, pace_series, stride_length_series
from .efficiency import cardiac_decoupling, efficiency_index
from .power import normalized_power
from .segments import SegmentDetector, detect_segments
from .smoothing import moving_median
from .zones import heart_rate_zone_distribution, performance_by_grade

__all__ = [
    "ActivitySeries",
    "MetricsCalculator",
    "compute_processed_metrics",
    "moving_median",
    "pace_series",
    "stride_length_series",
    "average_stride_length",
    "vertical_speed_vam",
    "descent_vertical_speed",
    "grade_adjusted_pace",
    "grade_cost",
    "normalized_power",
    "cardiac_decoupling",
    "efficiency_index",
    "heart_rate_zone_distribution",
    "performance_by_grade",
    "SegmentDetector",
    "detect_segments",
]
