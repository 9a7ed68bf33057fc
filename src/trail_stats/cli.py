"""
Command-line interface for the trail_stats package.

This module provides commands to process activity streams into metrics,
inspect a single activity, summarize a time frame and classify KPI trends.
"""

import logging
from pathlib import Path

import click

from .constants import TimeConstants
from .exceptions import TrailStatsError
from .models import KPI, AggregateResult, ProcessedMetrics
from .pipeline import Pipeline
from .services import ActivityService, AnalysisService
from .settings import Settings, load_settings


# Configure basic logging
def configure_logging(verbose: bool = False) -> None:
    """Configure logging with appropriate level."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def _settings(
    config: Path | None,
    activities: Path | None = None,
    streams_dir: Path | None = None,
) -> Settings:
    settings = load_settings(config)

    # Override settings if paths provided
    if activities is not None:
        settings.activities_file = activities
    if streams_dir is not None:
        settings.streams_dir = streams_dir
    return settings


def _format(value: float | None, unit: str = "", digits: int = 1) -> str:
    if value is None:
        return "n/a"
    return f"{value:.{digits}f}{(' ' + unit) if unit else ''}"


def _echo_metrics(metrics: ProcessedMetrics) -> None:
    click.echo("\nKey Metrics:")
    click.echo(f"VAM: {_format(metrics.vertical_speed_vam, 'm/h', 0)}")
    click.echo(f"Descent Speed: {_format(metrics.descent_vertical_speed, 'm/h', 0)}")
    click.echo(f"Normalized Power: {_format(metrics.normalized_power, 'W', 0)}")
    click.echo(f"Grade-Adjusted Pace: {_format(metrics.grade_adjusted_pace, 'min/km', 2)}")
    click.echo(f"Cardiac Decoupling: {_format(metrics.cardiac_decoupling, '%')}")
    click.echo(f"Efficiency Index: {_format(metrics.efficiency_index, '', 4)}")
    click.echo(f"Stride Length: {_format(metrics.average_stride_length, 'm', 2)}")

    zones = metrics.heart_rate_zone_distribution
    if zones is not None and zones.total_time > 0:
        click.echo("\nHeart Rate Zone Distribution:")
        for zone, seconds in enumerate(zones.as_tuple, start=1):
            click.echo(
                f"Zone {zone}: {seconds / TimeConstants.SECONDS_PER_MINUTE:.1f} min "
                f"({seconds / zones.total_time * 100:.1f}%)"
            )

    if metrics.performance_by_grade:
        click.echo("\nPerformance by Grade:")
        for bucket in metrics.performance_by_grade:
            click.echo(
                f"{bucket.grade_bucket:>14}: {bucket.distance / 1000:.2f} km, "
                f"{_format(bucket.average_pace, 'min/km', 2)}"
            )

    if metrics.climb_segments:
        click.echo("\nSegments:")
        for segment in metrics.climb_segments:
            click.echo(
                f"{segment.type.value:>7}: {segment.distance:.0f} m, "
                f"{segment.elevation_change:+.0f} m ({segment.average_grade:.1f}%)"
            )


def _echo_summary(result: AggregateResult) -> None:
    click.echo("\nActivity Summary Report")
    click.echo("=" * 40)
    click.echo(f"Total Activities: {result.total_activities}")
    click.echo(f"Total Distance: {result.total_distance / 1000:.1f} km")
    click.echo(f"Total Elevation: {result.total_elevation:.0f} m")
    click.echo(
        f"Total Time: {result.total_duration / TimeConstants.SECONDS_PER_HOUR:.1f} hours"
    )

    click.echo("\nAverages")
    click.echo("-" * 20)
    click.echo(f"VAM: {_format(result.average_vam, 'm/h', 0)}")
    click.echo(f"Descent Speed: {_format(result.average_descent_vam, 'm/h', 0)}")
    click.echo(f"GAP: {_format(result.average_gap, 'min/km', 2)}")
    click.echo(f"Normalized Power: {_format(result.average_normalized_power, 'W', 0)}")
    click.echo(f"Efficiency Index: {_format(result.average_efficiency_index, '', 4)}")
    click.echo(f"Decoupling: {_format(result.average_decoupling, '%')}")

    if result.weekly_distance:
        click.echo("\nWeekly Distance")
        click.echo("-" * 20)
        for week in result.weekly_distance:
            click.echo(f"{week.id} ({week.week_start}): {week.distance / 1000:.1f} km")


@click.group()
def main():
    """
    Analyze trail running activities and calculate performance metrics.

    This tool processes per-second activity streams, calculates climbing,
    power and heart rate metrics, and aggregates them across activities.
    """


@main.command()
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--verbose/--quiet",
    default=False,
    help="Enable verbose output",
)
@click.option(
    "--activities",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to activities CSV file (overrides config)",
)
@click.option(
    "--streams-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Path to streams directory (overrides config)",
)
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of activities processed in parallel (overrides config)",
)
def process(
    config: Path | None,
    verbose: bool,
    activities: Path | None,
    streams_dir: Path | None,
    workers: int | None,
) -> None:
    """
    Process all activities and aggregate the results.

    Metrics are saved per activity only when they changed; the aggregate
    summary is written to the processed data directory.
    """
    configure_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        settings = _settings(config, activities, streams_dir)
        if workers is not None:
            settings.max_workers = workers

        report, result = Pipeline(settings).run()

        logger.info(
            f"Processed {report.processed} activities "
            f"({report.saved} updated, {len(report.failed)} failed)"
        )
        _echo_summary(result)

    except TrailStatsError as e:
        logger.error(f"Processing failed: {str(e)}")
        raise click.Abort() from e


@main.command()
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--verbose/--quiet",
    default=False,
    help="Enable verbose output",
)
@click.argument("activity_id", type=int)
def analyze(config: Path | None, verbose: bool, activity_id: int) -> None:
    """
    Analyze a single activity in detail.

    This command computes (and saves, if changed) the metrics of one activity
    and displays them.
    """
    configure_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        service = ActivityService(_settings(config))
        activity = next(
            (a for a in service.get_activities() if a.id == activity_id), None
        )
        if activity is None:
            raise TrailStatsError(f"Activity {activity_id} not found")

        result = service.process_activity(activity)

        click.echo(f"\nActivity Analysis Results: {activity.name or activity.id}")
        click.echo("-" * 40)
        click.echo(f"Distance: {activity.distance / 1000:.2f} km")
        click.echo(f"Elevation Gain: {activity.elevation_gain:.0f} m")
        click.echo(
            f"Duration: {activity.duration / TimeConstants.SECONDS_PER_MINUTE:.0f} min"
        )
        _echo_metrics(result.metrics)

    except TrailStatsError as e:
        logger.error(f"Analysis failed: {str(e)}")
        raise click.Abort() from e


@main.command()
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--days",
    type=int,
    default=None,
    help="Only include activities from the last N days (default: configured time frame)",
)
@click.option(
    "--all",
    "include_all",
    is_flag=True,
    default=False,
    help="Include every activity regardless of date",
)
def summarize(config: Path | None, days: int | None, include_all: bool) -> None:
    """
    Generate summary statistics from processed activities.

    This command aggregates the stored metrics of the selected activities
    and saves the aggregate summary.
    """
    configure_logging()
    logger = logging.getLogger(__name__)

    try:
        settings = _settings(config)
        service = AnalysisService(settings)

        time_frame = None if include_all else (days or settings.time_frame_days)
        result = service.run_analysis(time_frame)

        if result.total_activities == 0:
            logger.warning("No activities found in specified time frame")
            return

        _echo_summary(result)
        summary_file = service.save_results(result)
        logger.info(f"Detailed summary saved to {summary_file}")

    except TrailStatsError as e:
        logger.error(f"Summary generation failed: {str(e)}")
        raise click.Abort() from e


@main.command()
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.argument("activity_id", type=int)
def trend(config: Path | None, activity_id: int) -> None:
    """
    Compare an activity's KPIs with the preceding weeks.

    Each KPI is classified as up (improved), down or equal against the
    average of the activities in the trend window.
    """
    configure_logging()
    logger = logging.getLogger(__name__)

    try:
        settings = _settings(config)
        trends = AnalysisService(settings).activity_trends(activity_id)

        click.echo(
            f"\nKPI Trends for activity {activity_id} "
            f"(last {settings.trend_window_days} days)"
        )
        click.echo("-" * 40)
        for kpi in KPI:
            result = trends.get(kpi)
            click.echo(
                f"{kpi.value.replace('_', ' ').title()}: "
                f"{result.value if result is not None else 'n/a'}"
            )

    except TrailStatsError as e:
        logger.error(f"Trend analysis failed: {str(e)}")
        raise click.Abort() from e


if __name__ == "__main__":
    main()
