"""
High-level service for activity processing.

This service coordinates stream loading, metric computation and the explicit
persistence step for one activity at a time.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from ..data import ActivityDataLoader, ProcessedMetricsStore
from ..exceptions import DataLoadError, ProcessingError, StreamDataError
from ..metrics import MetricsCalculator
from ..models import ActivitySummary, ProcessedMetrics
from ..settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActivityResult:
    """
    Outcome of processing one activity.

    Attributes:
        activity_id: ID of the processed activity
        metrics: Freshly computed metrics
        saved: Whether the stored metrics were (re)written
    """

    activity_id: int
    metrics: ProcessedMetrics
    saved: bool


class ActivityServiceProtocol(Protocol):
    """Protocol for activity services."""

    def process_activity(self, activity: ActivitySummary) -> ActivityResult:
        """Process a single activity."""
        ...


class ActivityService:
    """
    High-level service for activity data operations.

    This service coordinates the loader, the metrics calculator and the
    metrics store to provide the per-activity workflow.
    """

    def __init__(
        self,
        settings: Settings,
        store: ProcessedMetricsStore | None = None,
    ):
        """
        Initialize the activity service.

        Args:
            settings: Application settings
            store: Metrics store to share with other services (created if omitted)
        """
        self.settings = settings
        self.logger = logging.getLogger(__name__)

        # Initialize components
        self.loader = ActivityDataLoader(settings)
        self.calculator = MetricsCalculator(settings)
        self.store = store or ProcessedMetricsStore(settings)

    def process_activity(self, activity: ActivitySummary) -> ActivityResult:
        """
        Process a single activity through the complete pipeline.

        This method:
        1. Loads the raw stream bundle
        2. Computes ProcessedMetrics
        3. Saves them if they differ from the stored ones

        Args:
            activity: Summary of the activity

        Returns:
            ActivityResult with the metrics and whether they were saved

        Raises:
            DataLoadError: If the stream cannot be loaded
            StreamDataError: If the stream carries no samples
            ProcessingError: If computing or saving fails
        """
        activity_id = activity.id

        try:
            self.logger.debug(f"Loading stream for activity {activity_id}")
            raw_streams = self.loader.load_stream(activity_id)

            if not any(len(samples) for samples in raw_streams.values()):
                raise StreamDataError(f"Empty stream data for activity {activity_id}")

            self.logger.debug(f"Computing metrics for activity {activity_id}")
            metrics = self.calculator.compute(activity, raw_streams)
            saved = self.store.save_if_changed(activity_id, metrics)

            return ActivityResult(activity_id=activity_id, metrics=metrics, saved=saved)

        except (DataLoadError, StreamDataError, ProcessingError):
            raise
        except Exception as e:
            raise ProcessingError(
                f"Failed to process activity {activity_id}: {e}"
            ) from e

    def get_activities(self) -> list[ActivitySummary]:
        """
        Get all activity summaries.

        Returns:
            Activity summaries in file order
        """
        return self.loader.load_activities()

    def activity_has_stream(self, activity_id: int) -> bool:
        """
        Check if stream data exists for an activity.

        Args:
            activity_id: ID of the activity

        Returns:
            True if stream exists, False otherwise
        """
        return self.loader.stream_exists(activity_id)
