"""
Processing pipeline using the service layer.

The pipeline computes ProcessedMetrics for every activity (sequentially or on
a thread pool), saves the ones that changed, then aggregates the selection
and writes the aggregate summary.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from .data import ProcessedMetricsStore
from .exceptions import DataLoadError, ProcessingError, StreamDataError
from .models import ActivitySummary, AggregateResult
from .services import ActivityResult, ActivityService, AnalysisService
from .settings import Settings, load_settings

logger = logging.getLogger(__name__)


@dataclass
class ProcessingReport:
    """Counts of a processing run."""

    processed: int = 0
    saved: int = 0
    skipped: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)

    def record(self, result: ActivityResult) -> None:
        """Count one successfully processed activity."""
        self.processed += 1
        if result.saved:
            self.saved += 1


class Pipeline:
    """
    Pipeline orchestrating activity processing and aggregation.

    Both services share one metrics store so that metrics saved during
    processing are visible to the aggregation without reloading.
    """

    def __init__(self, settings: Settings):
        """
        Initialize the pipeline.

        Args:
            settings: Application settings
        """
        self.settings = settings
        self.store = ProcessedMetricsStore(settings)
        self.activity_service = ActivityService(settings, store=self.store)
        self.analysis_service = AnalysisService(settings, store=self.store)
        self.logger = logging.getLogger(__name__)

    def _process_one(self, activity: ActivitySummary) -> ActivityResult:
        result = self.activity_service.process_activity(activity)
        self.logger.debug(
            f"Processed activity {activity.id} ({'saved' if result.saved else 'unchanged'})"
        )
        return result

    def process_activities(
        self, activities: list[ActivitySummary]
    ) -> ProcessingReport:
        """
        Compute and save metrics for each activity.

        Activities without a stream file are skipped; failures are logged and
        counted without stopping the run.

        Args:
            activities: Activities to process

        Returns:
            ProcessingReport
        """
        report = ProcessingReport()
        runnable = []
        for activity in activities:
            if self.activity_service.activity_has_stream(activity.id):
                runnable.append(activity)
            else:
                self.logger.warning(f"No stream data for activity {activity.id}")
                report.skipped.append(activity.id)

        workers = max(1, self.settings.max_workers)
        self.logger.info(
            f"Processing {len(runnable)} activities with {workers} worker(s)"
        )

        if workers == 1:
            for activity in runnable:
                try:
                    report.record(self._process_one(activity))
                except (DataLoadError, StreamDataError, ProcessingError) as e:
                    self.logger.error(f"Failed to process activity {activity.id}: {e}")
                    report.failed.append(activity.id)
            return report

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(self._process_one, activity): activity.id
                for activity in runnable
            }
            for future in as_completed(futures):
                activity_id = futures[future]
                try:
                    report.record(future.result())
                except (DataLoadError, StreamDataError, ProcessingError) as e:
                    self.logger.error(f"Failed to process activity {activity_id}: {e}")
                    report.failed.append(activity_id)

        report.failed.sort()
        return report

    def run(self, days: int | None = None) -> tuple[ProcessingReport, AggregateResult]:
        """
        Execute the complete pipeline.

        This method:
        1. Loads activity summaries
        2. Processes every activity and saves changed metrics
        3. Aggregates the selected time frame
        4. Saves the aggregate summary

        Args:
            days: Restrict the aggregation to the last `days` days

        Returns:
            Tuple of (processing report, aggregate result)

        Raises:
            ProcessingError: If pipeline execution fails
        """
        try:
            self.logger.info("=" * 60)
            self.logger.info("Starting pipeline")
            self.logger.info("=" * 60)

            activities = self.activity_service.get_activities()
            report = self.process_activities(activities)

            result = self.analysis_service.run_analysis(days, activities=activities)
            self.analysis_service.save_results(result)

            self.logger.info("=" * 60)
            self.logger.info("Pipeline completed successfully")
            self.logger.info(
                f"Processed: {report.processed}, saved: {report.saved}, "
                f"skipped: {len(report.skipped)}, failed: {len(report.failed)}"
            )
            self.logger.info("=" * 60)
            return report, result

        except Exception as e:
            self.logger.error(f"Pipeline failed: {e}")
            raise ProcessingError(f"Pipeline execution failed: {e}") from e


def run_pipeline(config_path: str) -> tuple[ProcessingReport, AggregateResult]:
    """
    Run the pipeline from a config file.

    Args:
        config_path: Path to the configuration YAML file
    """
    settings = load_settings(Path(config_path))
    return Pipeline(settings).run()
