#!/usr/bin/env python3
"""
Progress Analytics CLI.

Personal records, exercise progress and measurement analytics for a JSON
snapshot of stored workouts and measurements.

Usage:
    progress-analytics records snapshot.json
    progress-analytics progress snapshot.json
    progress-analytics trends snapshot.json --period quarter
    progress-analytics stats snapshot.json
    progress-analytics insights snapshot.json
    progress-analytics report snapshot.json      # Full report as JSON
    progress-analytics validate body_weight 82.5 # Range-check a value
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from .config import get_settings
from .exceptions import ProgressAnalyticsError
from .measurements.catalog import (
    display_name,
    format_measurement_value,
    get_measurement_type,
    require_valid_measurement,
)
from .models.measurements import InsightPriority, Period, TrendDirection
from .models.personal_records import ProgressTrend
from .models.report import AnalyticsSnapshot
from .services.analytics_service import ProgressAnalyticsService

console = Console()


# ============================================================================
# Formatting helpers
# ============================================================================

def get_trend_color(trend: str) -> str:
    """Get rich color for a trend label."""
    colors = {
        TrendDirection.UP.value: "green",
        ProgressTrend.IMPROVING.value: "green",
        TrendDirection.DOWN.value: "red",
        ProgressTrend.DECLINING.value: "red",
    }
    return colors.get(trend, "yellow")


def get_priority_color(priority: InsightPriority) -> str:
    return {
        InsightPriority.HIGH: "red",
        InsightPriority.MEDIUM: "yellow",
        InsightPriority.LOW: "cyan",
    }[priority]


def _format_value(measurement_type: str, value: float) -> str:
    info = get_measurement_type(measurement_type)
    return format_measurement_value(value, info.unit if info else "")


def load_snapshot(path: str) -> AnalyticsSnapshot:
    """Read a snapshot from a JSON file, or stdin when path is '-'."""
    if path == "-":
        raw = sys.stdin.read()
    else:
        raw = Path(path).read_text(encoding="utf-8")
    return AnalyticsSnapshot.model_validate_json(raw)


# ============================================================================
# Commands
# ============================================================================

def cmd_records(args, service: ProgressAnalyticsService, snapshot: AnalyticsSnapshot) -> None:
    """Show personal records, most recent first."""
    records = service.detect_personal_records(snapshot.workouts)
    summary = service.record_summary(records)

    console.print()
    console.print(Panel(f"[bold]Personal Records[/bold]  ({summary.total_prs} total, {summary.recent_prs} recent)"))

    if not records:
        console.print("[yellow]No personal records found.[/yellow]")
        return

    table = Table(box=box.ROUNDED)
    table.add_column("Date", style="cyan")
    table.add_column("Exercise", style="white")
    table.add_column("Type", style="magenta")
    table.add_column("Value", style="green", justify="right")
    table.add_column("Improvement", justify="right")

    for record in records[: args.limit]:
        improvement = (
            f"+{record.improvement:g} ({record.improvement_percentage:.1f}%)"
            if record.previous_record is not None else "first"
        )
        table.add_row(
            record.achieved_at.date().isoformat(),
            record.exercise_name,
            record.record_type.value,
            f"{record.value:g} {record.unit}",
            improvement,
        )

    console.print(table)


def cmd_progress(args, service: ProgressAnalyticsService, snapshot: AnalyticsSnapshot) -> None:
    """Show per-exercise progress."""
    summaries = service.exercise_progress(snapshot.workouts)

    console.print()
    if not summaries:
        console.print("[yellow]No exercises with completed sets.[/yellow]")
        return

    table = Table(title="Exercise Progress", box=box.ROUNDED)
    table.add_column("Exercise", style="cyan")
    table.add_column("Sessions", justify="right")
    table.add_column("Best", justify="right")
    table.add_column("Avg Volume", justify="right")
    table.add_column("Trend")
    table.add_column("Score", justify="right", style="bold")

    for progress in sorted(summaries, key=lambda p: p.progress_score, reverse=True):
        color = get_trend_color(progress.progress_trend.value)
        table.add_row(
            progress.exercise_name,
            str(progress.total_sessions),
            f"{progress.best_weight:g} kg x {progress.best_reps}" if progress.best_weight else "-",
            f"{progress.average_volume:.0f}",
            f"[{color}]{progress.progress_trend.value}[/{color}]",
            str(progress.progress_score),
        )

    console.print(table)


def cmd_trends(args, service: ProgressAnalyticsService, snapshot: AnalyticsSnapshot) -> None:
    """Show measurement trends for a period."""
    trends = service.measurement_trends(snapshot.measurements, args.period)

    console.print()
    if not trends:
        console.print("[yellow]Not enough measurements in this period.[/yellow]")
        return

    table = Table(title=f"Measurement Trends ({trends[0].period.value})", box=box.ROUNDED)
    table.add_column("Measurement", style="cyan")
    table.add_column("Previous", justify="right")
    table.add_column("Current", justify="right")
    table.add_column("Change", justify="right")
    table.add_column("Trend")

    for trend in trends:
        color = get_trend_color(trend.trend.value)
        table.add_row(
            display_name(trend.measurement_type),
            _format_value(trend.measurement_type, trend.previous),
            _format_value(trend.measurement_type, trend.current),
            f"{trend.change:+.1f} ({trend.change_percent:+.1f}%)",
            f"[{color}]{trend.trend.value}[/{color}]",
        )

    console.print(table)


def cmd_stats(args, service: ProgressAnalyticsService, snapshot: AnalyticsSnapshot) -> None:
    """Show measurement logging statistics."""
    measurements = service.normalize_measurements(snapshot.measurements)
    stats = service.measurement_stats(measurements)
    bmi = service.bmi(measurements)

    table = Table(title="Measurement Statistics", box=box.ROUNDED)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Total measurements", str(stats.total_measurements))
    table.add_row("Measurement types", str(stats.measurement_types))
    table.add_row("Streak", f"{stats.streak_days} days")
    table.add_row("Most tracked", display_name(stats.most_tracked_type) if stats.most_tracked_type else "-")
    table.add_row("Frequency", f"{stats.average_frequency:.1f} per week")
    table.add_row("BMI", f"{bmi:.1f}" if bmi is not None else "-")

    if args.gender:
        body_fat = service.body_fat(measurements, args.gender)
        table.add_row("Body fat (Navy)", f"{body_fat:.1f}%" if body_fat is not None else "-")

    console.print()
    console.print(table)


def cmd_insights(args, service: ProgressAnalyticsService, snapshot: AnalyticsSnapshot) -> None:
    """Show ranked insights."""
    insights = service.insights(snapshot.measurements)

    console.print()
    if not insights:
        console.print("[yellow]No insights yet. Keep logging![/yellow]")
        return

    for insight in insights:
        color = get_priority_color(insight.priority)
        console.print(f"[{color}]●[/{color}] [bold]{insight.title}[/bold]")
        console.print(f"  {insight.description}")


def cmd_report(args, service: ProgressAnalyticsService, snapshot: AnalyticsSnapshot) -> None:
    """Print the full report as JSON."""
    report = service.analyze(snapshot.workouts, snapshot.measurements, args.period)
    print(report.model_dump_json(by_alias=True, indent=2))


def cmd_validate(args) -> None:
    """Range-check one value; raises MeasurementValidationError when rejected."""
    require_valid_measurement(args.type, args.value)
    console.print(
        f"[green]✓[/green] {display_name(args.type)}: "
        f"{_format_value(args.type, args.value)} is within range"
    )


COMMANDS = {
    "records": cmd_records,
    "progress": cmd_progress,
    "trends": cmd_trends,
    "stats": cmd_stats,
    "insights": cmd_insights,
    "report": cmd_report,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="progress-analytics",
        description="Personal records, progress and measurement analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  progress-analytics records snapshot.json --limit 10
  progress-analytics trends snapshot.json --period quarter
  progress-analytics stats snapshot.json --gender female
  cat snapshot.json | progress-analytics report -
  progress-analytics validate body_weight 82.5
""",
    )
    parser.add_argument("--log-level", help="Override the configured log level")

    subparsers = parser.add_subparsers(dest="command")
    periods = [p.value for p in Period]

    records_p = subparsers.add_parser("records", help="Show personal records")
    records_p.add_argument("--limit", "-n", type=int, default=20, help="Records to show")

    subparsers.add_parser("progress", help="Show per-exercise progress")

    trends_p = subparsers.add_parser("trends", help="Show measurement trends")
    trends_p.add_argument("--period", "-p", choices=periods, default=None, help="Look-back window")

    stats_p = subparsers.add_parser("stats", help="Show measurement statistics")
    stats_p.add_argument("--gender", "-g", choices=["male", "female"], help="Include a Navy body-fat estimate")

    subparsers.add_parser("insights", help="Show measurement insights")

    report_p = subparsers.add_parser("report", help="Print the full report as JSON")
    report_p.add_argument("--period", "-p", choices=periods, default=None, help="Trend look-back window")

    validate_p = subparsers.add_parser("validate", help="Check a value against its measurement type")
    validate_p.add_argument("type", help="Measurement type id, e.g. body_weight")
    validate_p.add_argument("value", type=float, help="Value to check")

    for name in COMMANDS:
        subparsers.choices[name].add_argument(
            "snapshot", help="Snapshot JSON file with workouts and measurements ('-' for stdin)",
        )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    settings = get_settings()
    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    snapshot = None
    if args.command in COMMANDS:
        try:
            snapshot = load_snapshot(args.snapshot)
        except OSError as e:
            console.print(f"[red]Cannot read snapshot: {e}[/red]")
            return 1
        except PydanticValidationError as e:
            console.print(f"[red]Invalid snapshot: {e}[/red]")
            return 1

    try:
        if snapshot is None:
            cmd_validate(args)
        else:
            COMMANDS[args.command](args, ProgressAnalyticsService(settings=settings), snapshot)
    except ProgressAnalyticsError as e:
        console.print(f"[red]{e.code.value}: {e.message}[/red]")
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
