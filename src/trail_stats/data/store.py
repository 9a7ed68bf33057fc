"""
Processed metrics store.

ProcessedMetrics are cached as one JSON document per activity. Saving is an
explicit step of the pipeline: a document is only rewritten when the newly
computed metrics differ from the stored ones.
"""

import logging
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError as PydanticValidationError

from ..constants import FileNames
from ..exceptions import DataLoadError, ProcessingError
from ..models import ProcessedMetrics
from ..settings import Settings

logger = logging.getLogger(__name__)


class MetricsStoreProtocol(Protocol):
    """Protocol for processed metrics stores."""

    def load(self, activity_id: int) -> ProcessedMetrics | None:
        """Get the stored metrics of an activity."""
        ...

    def lookup(self, activity_id: int) -> ProcessedMetrics | None:
        """Get the stored metrics of an activity, None if unreadable."""
        ...

    def save_if_changed(self, activity_id: int, metrics: ProcessedMetrics) -> bool:
        """Persist metrics unless identical metrics are already stored."""
        ...


class ProcessedMetricsStore:
    """
    File-backed store of ProcessedMetrics.

    Loaded documents are kept in memory so repeated lookups during
    aggregation do not hit the disk again.
    """

    def __init__(self, settings: Settings):
        """
        Initialize the store.

        Args:
            settings: Application settings providing the metrics directory
        """
        self.settings = settings
        self.metrics_dir: Path = settings.metrics_dir or (
            settings.processed_data_dir / "metrics"
        )
        self.logger = logging.getLogger(__name__)
        self._cache: dict[int, ProcessedMetrics] = {}

    def path_for(self, activity_id: int) -> Path:
        """Path of the JSON document of an activity."""
        return self.metrics_dir / FileNames.METRICS_TEMPLATE.format(
            activity_id=activity_id
        )

    def load(self, activity_id: int) -> ProcessedMetrics | None:
        """
        Get the stored metrics of an activity.

        Args:
            activity_id: ID of the activity

        Returns:
            ProcessedMetrics, or None if the activity was never processed

        Raises:
            DataLoadError: If the stored document cannot be read or parsed
        """
        if activity_id in self._cache:
            return self._cache[activity_id]

        path = self.path_for(activity_id)
        if not path.exists():
            return None

        try:
            metrics = ProcessedMetrics.model_validate_json(
                path.read_text(encoding="utf-8")
            )
        except (OSError, PydanticValidationError) as e:
            raise DataLoadError(
                f"Failed to load metrics for activity {activity_id}: {e}"
            ) from e

        self._cache[activity_id] = metrics
        return metrics

    def lookup(self, activity_id: int) -> ProcessedMetrics | None:
        """
        Get the stored metrics of an activity for aggregation.

        Unlike `load`, an unreadable document is logged and treated as absent.

        Args:
            activity_id: ID of the activity

        Returns:
            ProcessedMetrics, or None if missing or unreadable
        """
        try:
            return self.load(activity_id)
        except DataLoadError as e:
            self.logger.warning(f"Ignoring unreadable metrics: {e}")
            return None

    def save_if_changed(self, activity_id: int, metrics: ProcessedMetrics) -> bool:
        """
        Persist metrics unless identical metrics are already stored.

        A stored document that cannot be read is overwritten.

        Args:
            activity_id: ID of the activity
            metrics: Newly computed metrics

        Returns:
            True if the document was written, False if it was unchanged

        Raises:
            ProcessingError: If the document cannot be written
        """
        try:
            stored = self.load(activity_id)
        except DataLoadError as e:
            self.logger.warning(f"Replacing unreadable metrics: {e}")
            stored = None

        if stored == metrics:
            self.logger.debug(f"Metrics unchanged for activity {activity_id}")
            return False

        path = self.path_for(activity_id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(metrics.model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            raise ProcessingError(
                f"Failed to save metrics for activity {activity_id}: {e}"
            ) from e

        self._cache[activity_id] = metrics
        self.logger.debug(f"Saved metrics for activity {activity_id} to {path}")
        return True

    def invalidate_cache(self) -> None:
        """Forget loaded documents, forcing a reload on next access."""
        self._cache.clear()
        self.logger.debug("Metrics cache invalidated")
