"""trail_stats - a package for analyzing trail running activity streams."""

__version__ = "0.3.0"

from . import analysis, constants, data, exceptions, metrics, models, services
from .analysis import aggregate, classify_trend, filter_by_time_frame, recent_kpi_trends
from .data import ActivityDataLoader, ProcessedMetricsStore
from .metrics import MetricsCalculator, compute_processed_metrics
from .models import (
    KPI,
    ActivitySegment,
    ActivitySummary,
    AggregateResult,
    GradeBucketPerformance,
    HeartRateZoneDistribution,
    ProcessedMetrics,
    Trend,
)
from .pipeline import Pipeline
from .services import ActivityService, AnalysisService


def get_version() -> str:
    """Get the current version of trail_stats."""
    return __version__


def get_package_info() -> dict[str, str]:
    """Get package information including name and version."""
    return {
        "name": "trail-stats",
        "version": __version__,
        "description": "A package for analyzing trail running activity streams",
    }


__all__ = [
    # Version & Info
    "get_version",
    "get_package_info",
    # Models
    "KPI",
    "ActivitySegment",
    "ActivitySummary",
    "AggregateResult",
    "GradeBucketPerformance",
    "HeartRateZoneDistribution",
    "ProcessedMetrics",
    "Trend",
    # Engine
    "MetricsCalculator",
    "compute_processed_metrics",
    "aggregate",
    "classify_trend",
    "filter_by_time_frame",
    "recent_kpi_trends",
    # Data Layer
    "ActivityDataLoader",
    "ProcessedMetricsStore",
    # Services
    "ActivityService",
    "AnalysisService",
    # Pipeline
    "Pipeline",
    # Modules
    "analysis",
    "constants",
    "data",
    "exceptions",
    "metrics",
    "models",
    "services",
]
