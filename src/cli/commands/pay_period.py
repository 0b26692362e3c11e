"""Pay period command."""

import datetime as dt
from decimal import Decimal
from typing import Optional

import click

from src.calculators.pay_period_calculator import (
    calculate_pay_period_totals,
    get_all_pay_periods_from_entries,
    get_last_completed_pay_period,
    get_pay_period_for_date,
)
from src.cli.error_handlers import ProcessingError, with_error_handling
from src.cli.utils.entries import DECIMAL, load_entries, load_settings
from src.cli.utils.formatters import (
    format_currency,
    format_hours,
    format_info,
    format_success,
    format_table,
    format_warning,
)
from src.utils.decimal_utils import ZERO
from src.utils.logging_utils import LogContext, generate_correlation_id


@click.command(name="pay-period")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--date",
    "date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Any date inside the pay period (default: last completed period)",
)
@click.option(
    "--rate",
    type=DECIMAL,
    default=None,
    help="Hourly rate for entries without a snapshotted rate (default: 0)",
)
@click.option(
    "--list-periods",
    is_flag=True,
    help="List the pay periods present in FILE and exit",
)
@click.option("--skip-invalid", is_flag=True, help="Skip rows that fail validation")
@click.option("--debug", is_flag=True, help="Show full stack traces on errors")
def pay_period(
    file: str,
    date: Optional[dt.datetime],
    rate: Optional[Decimal],
    list_periods: bool,
    skip_invalid: bool,
    debug: bool,
):
    """Show one worker's hours and pay for a Monday-Sunday pay period.

    FILE should hold a single worker's entries. Periods are paid on the
    Friday after they end.

    Example:
        overtime-cli pay-period jane.csv --date 2023-06-15 --rate 25
        overtime-cli pay-period jane.csv --list-periods
    """
    with with_error_handling(debug) as handler, LogContext(
        correlation_id=generate_correlation_id(), command="pay-period"
    ):
        settings = load_settings(handler)

        click.echo(format_info(f"Reading time entries from {file}..."))
        entries = load_entries(file, skip_invalid=skip_invalid)

        if list_periods:
            periods = get_all_pay_periods_from_entries(entries)
            if not periods:
                click.echo(format_warning("No dated time entries found"))
                return
            rows = [
                [
                    period.label,
                    period.week_start.isoformat(),
                    period.week_end.isoformat(),
                    period.payment_date.isoformat(),
                ]
                for period in periods
            ]
            click.echo()
            click.echo(format_table(["Period", "Start", "End", "Paid on"], rows))
            return

        workers = sorted({entry.worker_key for entry in entries})
        if len(workers) > 1:
            raise ProcessingError(
                f"Expected one worker's entries, found {len(workers)}: "
                f"{', '.join(workers)}",
                recovery_hint="Export the entries of a single worker",
            )

        if date is None:
            period = get_last_completed_pay_period()
        else:
            period = get_pay_period_for_date(date.date())

        totals = calculate_pay_period_totals(
            entries,
            period,
            fallback_hourly_rate=ZERO if rate is None else rate,
            **settings.get_overtime_rules(),
        )

        click.echo()
        click.echo(click.style(f"Pay Period {period.label}", bold=True))
        click.echo(f"  Paid on: {period.payment_date:%a %b %d, %Y}")

        rows = [
            [
                f"{day.day_name} {day.date:%m/%d}",
                format_hours(day.regular_hours),
                format_hours(day.overtime_hours),
                format_hours(day.holiday_hours),
                format_hours(day.total_hours),
            ]
            for day in totals.daily_breakdown
        ]
        click.echo()
        click.echo(
            format_table(["Day", "Regular", "Overtime", "Holiday", "Total"], rows)
        )

        click.echo()
        click.echo(f"  Days worked:    {totals.days_worked}")
        click.echo(
            f"  Regular:        {format_hours(totals.regular_hours)} h  "
            f"{format_currency(totals.regular_pay)}"
        )
        click.echo(
            f"  Overtime:       {format_hours(totals.overtime_hours)} h  "
            f"{format_currency(totals.overtime_pay)}"
        )
        click.echo(
            f"  Holiday:        {format_hours(totals.holiday_hours)} h  "
            f"{format_currency(totals.holiday_pay)}"
        )
        click.echo(
            f"  Total:          {format_hours(totals.total_hours)} h  "
            f"{format_currency(totals.total_pay)}"
        )

        if totals.days_worked == 0:
            click.echo()
            click.echo(format_warning("No hours logged in this pay period"))
        else:
            click.echo()
            click.echo(format_success(f"Totaled pay period {period.label}"))
