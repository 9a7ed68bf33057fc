"""
High-level service for cross-activity analysis.

This service aggregates stored ProcessedMetrics over a selection of
activities, classifies KPI trends and saves the aggregate summary.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Protocol

from ..analysis import aggregate, filter_by_time_frame, recent_kpi_trends
from ..constants import FileNames
from ..data import ActivityDataLoader, ProcessedMetricsStore
from ..exceptions import DataLoadError, InvalidDataError, ProcessingError
from ..models import KPI, ActivitySummary, AggregateResult, Trend
from ..settings import Settings

logger = logging.getLogger(__name__)


class AnalysisServiceProtocol(Protocol):
    """Protocol for analysis services."""

    def run_analysis(self, days: int | None = None) -> AggregateResult:
        """Aggregate the selected activities."""
        ...


class AnalysisService:
    """
    High-level service coordinating aggregation and trend analysis.

    This service orchestrates:
    - Loading activity summaries
    - Selecting a time frame
    - Aggregating stored metrics
    - Classifying KPI trends
    - Saving the aggregate summary
    """

    def __init__(
        self,
        settings: Settings,
        store: ProcessedMetricsStore | None = None,
    ):
        """
        Initialize the analysis service.

        Args:
            settings: Application settings
            store: Metrics store to share with other services (created if omitted)
        """
        self.settings = settings
        self.logger = logging.getLogger(__name__)

        self.loader = ActivityDataLoader(settings)
        self.store = store or ProcessedMetricsStore(settings)

    def select_activities(
        self,
        activities: list[ActivitySummary] | None = None,
        days: int | None = None,
        as_of: datetime | None = None,
    ) -> list[ActivitySummary]:
        """
        Select the activities to analyze.

        Args:
            activities: Activities to select from (loaded if omitted)
            days: Restrict to the last `days` days (all activities if None)
            as_of: End of the time frame

        Returns:
            Selected activity summaries
        """
        if activities is None:
            activities = self.loader.load_activities()
        if days is None:
            return list(activities)

        selected = filter_by_time_frame(activities, days, as_of)
        self.logger.info(
            f"Selected {len(selected)} of {len(activities)} activities "
            f"from the last {days} days"
        )
        return selected

    def run_analysis(
        self,
        days: int | None = None,
        activities: list[ActivitySummary] | None = None,
    ) -> AggregateResult:
        """
        Aggregate the selected activities with their stored metrics.

        Args:
            days: Restrict to the last `days` days (all activities if None)
            activities: Activities to aggregate (loaded if omitted)

        Returns:
            AggregateResult

        Raises:
            ProcessingError: If aggregation fails
        """
        try:
            self.logger.info("Starting aggregation")
            selected = self.select_activities(activities, days)
            result = aggregate(selected, self.store.lookup)
            self.logger.info(
                f"Aggregated {result.total_activities} activities, "
                f"{len(result.weekly_distance)} weeks"
            )
            return result

        except DataLoadError:
            raise
        except Exception as e:
            self.logger.error(f"Aggregation failed: {e}")
            raise ProcessingError(f"Error in aggregation: {e}") from e

    def activity_trends(
        self,
        activity_id: int,
        activities: list[ActivitySummary] | None = None,
    ) -> dict[KPI, Trend | None]:
        """
        Classify the KPIs of one activity against its recent history.

        Args:
            activity_id: ID of the activity
            activities: Candidate comparison activities (loaded if omitted)

        Returns:
            Trend (or None) per KPI

        Raises:
            InvalidDataError: If the activity is unknown
        """
        if activities is None:
            activities = self.loader.load_activities()

        activity = next((a for a in activities if a.id == activity_id), None)
        if activity is None:
            raise InvalidDataError(f"Unknown activity: {activity_id}")

        return recent_kpi_trends(
            activity,
            activities,
            self.store.lookup,
            window_days=self.settings.trend_window_days,
        )

    def save_results(self, result: AggregateResult) -> Path:
        """
        Save the aggregate summary as JSON.

        Args:
            result: Aggregation result

        Returns:
            Path of the written file

        Raises:
            ProcessingError: If the file cannot be written
        """
        summary_file = self.settings.processed_data_dir / FileNames.AGGREGATE_SUMMARY
        try:
            self.logger.info(f"Saving summary to {summary_file}")
            summary_file.parent.mkdir(parents=True, exist_ok=True)
            summary_file.write_text(result.model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            self.logger.error(f"Failed to save results: {e}")
            raise ProcessingError(f"Failed to save results: {e}") from e

        return summary_file
