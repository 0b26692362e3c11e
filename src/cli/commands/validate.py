"""Validate time entries command."""

from collections import defaultdict
from typing import Dict, List

import click

from src.cli.error_handlers import with_error_handling
from src.cli.utils.entries import load_entries, load_settings
from src.cli.utils.formatters import (
    format_error,
    format_info,
    format_success,
    format_warning,
)
from src.utils.logging_utils import LogContext, generate_correlation_id
from src.validators.entry_validator import TimeEntryValidator
from src.validators.validation_report import ValidationIssue, ValidationSeverity

MAX_ISSUES_PER_SEVERITY = 20

_SEVERITY_FORMATTERS = {
    ValidationSeverity.ERROR: ("Errors", format_error),
    ValidationSeverity.WARNING: ("Warnings", format_warning),
    ValidationSeverity.INFO: ("Info", format_info),
}


@click.command(name="validate-entries")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--severity",
    type=click.Choice(["error", "warning", "info"], case_sensitive=False),
    default="warning",
    help="Minimum severity level to display (default: warning)",
)
@click.option("--debug", is_flag=True, help="Show full stack traces on errors")
def validate_entries(file: str, severity: str, debug: bool):
    """Check time entries for data quality problems.

    Checks for:
    - Negative, NaN or infinite hours and rates
    - Entries without a personnel or user id
    - Workers whose entries carry conflicting rates

    Returns non-zero exit code if errors are found.

    Example:
        overtime-cli validate-entries week-10.csv
        overtime-cli validate-entries week-10.csv --severity info
    """
    severity_level = ValidationSeverity[severity.upper()]
    has_errors = False

    with with_error_handling(debug) as handler, LogContext(
        correlation_id=generate_correlation_id(), command="validate-entries"
    ):
        load_settings(handler)
        click.echo(format_info(f"Validating time entries in {file}..."))
        entries = load_entries(file)
        report = TimeEntryValidator().validate_entries(entries)

        click.echo()
        click.echo(click.style("Validation Summary", bold=True))
        click.echo(f"  Entries checked: {len(entries)}")
        click.echo(f"  Errors:          {report.error_count}")
        click.echo(f"  Warnings:        {report.warning_count}")
        click.echo(f"  Info:            {report.info_count}")

        grouped: Dict[ValidationSeverity, List[ValidationIssue]] = defaultdict(list)
        for issue in report.get_issues(severity_level):
            grouped[issue.severity].append(issue)

        for level, (heading, formatter) in _SEVERITY_FORMATTERS.items():
            issues = grouped.get(level)
            if not issues:
                continue
            click.echo()
            click.echo(click.style(f"{heading}:", bold=True))
            for issue in issues[:MAX_ISSUES_PER_SEVERITY]:
                click.echo(f"  {formatter(str(issue))}")
            if len(issues) > MAX_ISSUES_PER_SEVERITY:
                click.echo(
                    f"  ... and {len(issues) - MAX_ISSUES_PER_SEVERITY} more"
                )

        click.echo()
        has_errors = report.has_errors()
        if has_errors:
            click.echo(format_error(f"Validation failed: {report.summary()}"))
        else:
            click.echo(format_success(f"Validation passed: {report.summary()}"))

    if has_errors:
        raise click.Abort()
