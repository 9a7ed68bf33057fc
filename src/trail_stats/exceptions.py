"""
Custom exceptions for the trail_stats package.

The metric calculators never raise for data reasons (they return None instead);
these exceptions belong to the configuration, I/O and service layers.
"""


class TrailStatsError(Exception):
    """Base exception for all trail_stats errors."""


class ConfigurationError(TrailStatsError):
    """Raised when there is an issue with configuration settings."""


class ValidationError(TrailStatsError):
    """Raised when data validation fails."""


class InvalidDataError(ValidationError):
    """Raised when input data is invalid or missing required fields."""


class DataLoadError(TrailStatsError):
    """Raised when there is an error loading data files."""


class ProcessingError(TrailStatsError):
    """Raised when there is an error processing activity data."""


class StreamDataError(TrailStatsError):
    """Raised when there are issues with activity stream data."""
