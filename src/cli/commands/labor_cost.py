"""Labor cost and labor allocation commands."""

from decimal import Decimal
from typing import Optional

import click

from src.calculators.labor_cost_calculator import (
    calculate_labor_allocation,
    calculate_weekly_labor_cost,
)
from src.cli.error_handlers import with_error_handling
from src.cli.utils.entries import DECIMAL, load_entries, load_settings
from src.cli.utils.formatters import (
    format_currency,
    format_hours,
    format_info,
    format_success,
    format_table,
    format_warning,
)
from src.utils.logging_utils import LogContext, generate_correlation_id

threshold_option = click.option(
    "--threshold",
    type=DECIMAL,
    default=None,
    help="Weekly overtime threshold in hours (default: WEEKLY_OVERTIME_THRESHOLD)",
)
overtime_multiplier_option = click.option(
    "--overtime-multiplier",
    type=DECIMAL,
    default=None,
    help="Overtime rate factor (default: OVERTIME_MULTIPLIER)",
)


@click.command(name="labor-cost")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@threshold_option
@overtime_multiplier_option
@click.option(
    "--holiday-multiplier",
    type=DECIMAL,
    default=None,
    help="Holiday rate factor (default: HOLIDAY_MULTIPLIER)",
)
@click.option("--skip-invalid", is_flag=True, help="Skip rows that fail validation")
@click.option("--debug", is_flag=True, help="Show full stack traces on errors")
def labor_cost(
    file: str,
    threshold: Optional[Decimal],
    overtime_multiplier: Optional[Decimal],
    holiday_multiplier: Optional[Decimal],
    skip_invalid: bool,
    debug: bool,
):
    """Estimate one week of labor cost per worker.

    Holiday hours are paid at the holiday multiplier and do not count
    toward the overtime threshold.

    Example:
        overtime-cli labor-cost week-10.csv
        overtime-cli labor-cost week-10.json --overtime-multiplier 2
    """
    with with_error_handling(debug) as handler, LogContext(
        correlation_id=generate_correlation_id(), command="labor-cost"
    ):
        settings = load_settings(handler)
        rules = settings.get_overtime_rules(
            threshold, overtime_multiplier, holiday_multiplier
        )

        click.echo(format_info(f"Reading time entries from {file}..."))
        entries = load_entries(file, skip_invalid=skip_invalid)
        if not entries:
            click.echo(format_warning("No time entries found"))
            return

        summary = calculate_weekly_labor_cost(entries, **rules)

        rows = [
            [
                worker.worker_name or worker.worker_key,
                format_currency(worker.hourly_rate),
                format_hours(worker.regular_hours),
                format_hours(worker.overtime_hours),
                format_hours(worker.holiday_hours),
                format_currency(worker.total_amount),
            ]
            for worker in summary.workers
        ]
        click.echo()
        click.echo(
            format_table(
                ["Worker", "Rate", "Regular", "Overtime", "Holiday", "Cost"], rows
            )
        )

        click.echo()
        click.echo(click.style("Weekly Labor Cost", bold=True))
        click.echo(f"  Regular hours:  {format_hours(summary.regular_hours)}")
        click.echo(f"  Overtime hours: {format_hours(summary.overtime_hours)}")
        click.echo(f"  Holiday hours:  {format_hours(summary.holiday_hours)}")
        click.echo(f"  Total hours:    {format_hours(summary.total_hours)}")
        click.echo(f"  Total cost:     {format_currency(summary.total_cost)}")

        zero_rate = [w for w in summary.workers if not w.hourly_rate]
        if zero_rate:
            click.echo()
            click.echo(
                format_warning(
                    f"{len(zero_rate)} worker(s) have no hourly rate and cost $0.00"
                )
            )

        click.echo()
        click.echo(format_success(f"Costed {len(summary.workers)} workers"))


@click.command(name="labor-allocation")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@threshold_option
@overtime_multiplier_option
@click.option("--skip-invalid", is_flag=True, help="Skip rows that fail validation")
@click.option("--debug", is_flag=True, help="Show full stack traces on errors")
def labor_allocation(
    file: str,
    threshold: Optional[Decimal],
    overtime_multiplier: Optional[Decimal],
    skip_invalid: bool,
    debug: bool,
):
    """Allocate a project's labor hours and cost per worker.

    Overhead entries are left out. Workers whose title names a
    superintendent, supervisor or foreman count as supervision.

    Example:
        overtime-cli labor-allocation project-42.csv
    """
    with with_error_handling(debug) as handler, LogContext(
        correlation_id=generate_correlation_id(), command="labor-allocation"
    ):
        settings = load_settings(handler)
        rules = settings.get_overtime_rules(threshold, overtime_multiplier)

        click.echo(format_info(f"Reading time entries from {file}..."))
        entries = load_entries(file, skip_invalid=skip_invalid)

        summary = calculate_labor_allocation(
            entries,
            weekly_threshold=rules["weekly_threshold"],
            overtime_multiplier=rules["overtime_multiplier"],
        )
        if not summary.allocations:
            click.echo(format_warning("No project time entries found"))
            return

        rows = [
            [
                allocation.worker_name,
                allocation.title or "-",
                format_hours(allocation.total_hours),
                format_hours(allocation.overtime_hours),
                format_currency(allocation.estimated_cost),
                "yes" if allocation.is_supervision else "",
            ]
            for allocation in summary.allocations
        ]
        click.echo()
        click.echo(
            format_table(
                ["Worker", "Title", "Hours", "Overtime", "Cost", "Supervision"], rows
            )
        )

        click.echo()
        click.echo(click.style("Labor Allocation", bold=True))
        click.echo(
            f"  Supervision: {format_hours(summary.supervision_hours)} h, "
            f"{format_currency(summary.supervision_cost)}"
        )
        click.echo(
            f"  Field:       {format_hours(summary.field_hours)} h, "
            f"{format_currency(summary.field_cost)}"
        )
        click.echo(
            f"  Total:       {format_hours(summary.total_hours)} h, "
            f"{format_currency(summary.total_cost)}"
        )
