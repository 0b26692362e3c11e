"""Weekly overtime command."""

from decimal import Decimal
from typing import Optional

import click

from src.aggregators.overtime_aggregator import (
    aggregate_weekly_overtime_with_breakdown,
    generate_worker_matrix,
)
from src.cli.error_handlers import with_error_handling
from src.cli.utils.entries import DECIMAL, load_entries, load_settings
from src.cli.utils.formatters import (
    format_hours,
    format_info,
    format_success,
    format_table,
    format_warning,
)
from src.utils.logging_utils import LogContext, generate_correlation_id


@click.command(name="overtime")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--threshold",
    type=DECIMAL,
    default=None,
    help="Weekly overtime threshold in hours (default: WEEKLY_OVERTIME_THRESHOLD)",
)
@click.option(
    "--by-worker",
    is_flag=True,
    help="Show the regular/overtime split of every worker",
)
@click.option("--skip-invalid", is_flag=True, help="Skip rows that fail validation")
@click.option("--debug", is_flag=True, help="Show full stack traces on errors")
def overtime(
    file: str,
    threshold: Optional[Decimal],
    by_worker: bool,
    skip_invalid: bool,
    debug: bool,
):
    """Aggregate one week of time entries into regular and overtime hours.

    Each worker's hours are split at the weekly threshold and the splits
    are summed over all workers.

    Example:
        overtime-cli overtime week-10.csv
        overtime-cli overtime week-10.csv --threshold 44 --by-worker
    """
    with with_error_handling(debug) as handler, LogContext(
        correlation_id=generate_correlation_id(), command="overtime"
    ):
        settings = load_settings(handler)
        threshold = settings.get_overtime_rules(weekly_threshold=threshold)[
            "weekly_threshold"
        ]

        click.echo(format_info(f"Reading time entries from {file}..."))
        entries = load_entries(file, skip_invalid=skip_invalid)
        if not entries:
            click.echo(format_warning("No time entries found"))
            return

        breakdown = aggregate_weekly_overtime_with_breakdown(entries, threshold)
        totals = breakdown.totals

        click.echo()
        click.echo(click.style("Weekly Overtime", bold=True))
        click.echo(f"  Threshold:      {format_hours(threshold)} h")
        click.echo(f"  Workers:        {len(breakdown.by_worker)}")
        click.echo(f"  Regular hours:  {format_hours(totals.regular_hours)}")
        click.echo(f"  Overtime hours: {format_hours(totals.overtime_hours)}")
        click.echo(f"  Total hours:    {format_hours(totals.total_hours)}")

        if by_worker:
            matrix = generate_worker_matrix(breakdown)
            rows = [
                [
                    str(worker_key),
                    format_hours(row["total_hours"]),
                    format_hours(row["regular_hours"]),
                    format_hours(row["overtime_hours"]),
                ]
                for worker_key, row in matrix.iterrows()
            ]
            click.echo()
            click.echo(
                format_table(["Worker", "Total", "Regular", "Overtime"], rows)
            )

        click.echo()
        click.echo(format_success(f"Aggregated {len(entries)} time entries"))
