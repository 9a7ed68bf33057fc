"""
Data loading functionality.

This module provides a clean interface for loading activity summaries and raw
stream bundles from the CSV exports.
"""

import logging
from pathlib import Path
from typing import Any, Protocol

import pandas as pd
from pydantic import ValidationError as PydanticValidationError

from ..constants import CSVConstants, FileNames, StreamNames
from ..exceptions import DataLoadError, InvalidDataError
from ..models import ActivitySummary
from ..settings import Settings

logger = logging.getLogger(__name__)

REQUIRED_ACTIVITY_COLUMNS = (
    "id",
    "start_date",
    "distance",
    "duration",
    "elevation_gain",
)


class DataLoaderProtocol(Protocol):
    """Protocol for data loaders."""

    def load_activities(self) -> list[ActivitySummary]:
        """Load activity summaries."""
        ...

    def load_stream(self, activity_id: int) -> dict[str, list[Any]]:
        """Load the raw stream bundle of a specific activity."""
        ...


class ActivityDataLoader:
    """
    Handles loading of activity and stream data from files.

    This class encapsulates all file I/O operations for activity data,
    providing a clean interface for the rest of the application.
    """

    def __init__(self, settings: Settings):
        """
        Initialize the data loader.

        Args:
            settings: Application settings containing data paths
        """
        self.settings = settings
        self.logger = logging.getLogger(__name__)

    def stream_file(self, activity_id: int) -> Path:
        """Path of the stream CSV of an activity."""
        return self.settings.streams_dir / FileNames.STREAM_TEMPLATE.format(
            activity_id=activity_id
        )

    def load_activities(self) -> list[ActivitySummary]:
        """
        Load activity summaries from the activities CSV file.

        Returns:
            Activity summaries in file order

        Raises:
            DataLoadError: If the file cannot be read
            InvalidDataError: If a required column is missing or a row is invalid
        """
        activities_file = self.settings.activities_file
        if not activities_file.exists():
            raise DataLoadError(f"Activities file not found: {activities_file}")

        self.logger.info(f"Loading activities from {activities_file}")
        try:
            df = pd.read_csv(
                activities_file,
                sep=CSVConstants.DEFAULT_SEPARATOR,
                encoding=CSVConstants.DEFAULT_ENCODING,
            )
        except Exception as e:
            raise DataLoadError(f"Failed to load activities: {e}") from e

        missing = [c for c in REQUIRED_ACTIVITY_COLUMNS if c not in df.columns]
        if missing:
            raise InvalidDataError(
                f"Activities file is missing columns: {', '.join(missing)}"
            )

        # Empty cells come back as NaN; leave them to the model defaults
        records = df.astype(object).where(df.notna(), None).to_dict("records")
        try:
            activities = [
                ActivitySummary.model_validate(
                    {k: v for k, v in r.items() if v is not None}
                )
                for r in records
            ]
        except PydanticValidationError as e:
            raise InvalidDataError(f"Invalid activity row: {e}") from e

        self.logger.info(f"Loaded {len(activities)} activities")
        return activities

    def load_stream(self, activity_id: int) -> dict[str, list[Any]]:
        """
        Load the raw stream bundle of a specific activity.

        Only known stream columns are returned; values are passed through
        uncleaned.

        Args:
            activity_id: ID of the activity

        Returns:
            Mapping of stream name to per-second samples

        Raises:
            DataLoadError: If loading fails
        """
        stream_file = self.stream_file(activity_id)
        if not stream_file.exists():
            raise DataLoadError(f"Stream file not found: {stream_file}")

        self.logger.debug(f"Loading stream data from {stream_file}")
        try:
            df = pd.read_csv(
                stream_file,
                sep=CSVConstants.DEFAULT_SEPARATOR,
                encoding=CSVConstants.DEFAULT_ENCODING,
            )
        except Exception as e:
            raise DataLoadError(
                f"Failed to load stream for activity {activity_id}: {e}"
            ) from e

        return {
            name: df[name].tolist() for name in StreamNames.all() if name in df.columns
        }

    def stream_exists(self, activity_id: int) -> bool:
        """
        Check if stream data exists for an activity.

        Args:
            activity_id: ID of the activity

        Returns:
            True if stream file exists, False otherwise
        """
        return self.stream_file(activity_id).exists()
