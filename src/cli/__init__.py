"""Overtime Engine CLI.

This module provides a command-line interface for the weekly overtime and
labor cost engine. It includes commands for aggregating overtime, costing a
week of labor, totaling pay periods, and validating time entry exports.
"""

import click

from src.cli.commands.labor_cost import labor_allocation, labor_cost
from src.cli.commands.overtime import overtime
from src.cli.commands.pay_period import pay_period
from src.cli.commands.validate import validate_entries
from src.config.logging_config import LoggingConfig, configure_logging

__version__ = "1.0.0"


@click.group(
    help="Overtime Engine CLI - Split weekly hours into regular and overtime "
    "and estimate labor cost"
)
@click.version_option(version=__version__)
@click.option("--verbose", is_flag=True, help="Log at DEBUG level")
def cli(verbose: bool):
    """Overtime Engine CLI main entry point."""
    configure_logging(
        LoggingConfig.from_env(default_level="DEBUG" if verbose else "WARNING")
    )


# Register commands
cli.add_command(overtime)
cli.add_command(labor_cost)
cli.add_command(labor_allocation)
cli.add_command(pay_period)
cli.add_command(validate_entries)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
