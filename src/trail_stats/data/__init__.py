"""
Data access layer.

This package contains the series builder and time-alignment helpers, the
CSV loaders and the processed metrics store.
"""

from .loader import ActivityDataLoader
from .series import (
    build_series,
    build_stream_series,
    empty_series,
    join_on_time,
    series_deltas,
    time_lookup,
)
from .store import ProcessedMetricsStore

__all__ = [
    "ActivityDataLoader",
    "ProcessedMetricsStore",
    "build_series",
    "build_stream_series",
    "empty_series",
    "join_on_time",
    "series_deltas",
    "time_lookup",
]
