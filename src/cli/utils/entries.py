"""Shared input handling for CLI commands."""

from decimal import Decimal, InvalidOperation
from typing import List, Optional

import click
from pydantic import ValidationError

from src.cli.error_handlers import (
    ConfigurationError,
    DataValidationError,
    ErrorHandler,
)
from src.config.settings import PayrollConfig, get_config
from src.models.time_entry import TimeEntry
from src.readers.time_entry_reader import EntryReadError, TimeEntryReader


class DecimalParamType(click.ParamType):
    """Click parameter type parsing options straight into Decimal."""

    name = "decimal"

    def convert(self, value, param, ctx):
        if isinstance(value, Decimal):
            return value
        try:
            return Decimal(str(value).strip())
        except InvalidOperation:
            self.fail(f"{value!r} is not a valid number", param, ctx)


DECIMAL = DecimalParamType()


def load_settings(handler: Optional[ErrorHandler] = None) -> PayrollConfig:
    """Load the payroll configuration for a command.

    Args:
        handler: Error handler of the command; ``DEBUG=true`` turns on its
            stack traces

    Raises:
        ConfigurationError: If an environment variable holds an invalid value
    """
    try:
        config = get_config()
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid payroll configuration: {e}",
            recovery_hint="Check WEEKLY_OVERTIME_THRESHOLD, OVERTIME_MULTIPLIER, "
            "HOLIDAY_MULTIPLIER and DEBUG in your environment or .env file",
        ) from e

    if handler is not None and config.debug:
        handler.debug = True
    return config


def load_entries(path: str, skip_invalid: bool = False) -> List[TimeEntry]:
    """Read time entries for a command.

    Args:
        path: CSV or JSON export
        skip_invalid: Skip rows that fail validation

    Raises:
        DataValidationError: If the file cannot be read or holds an invalid row
    """
    reader = TimeEntryReader(skip_invalid=skip_invalid)
    try:
        return reader.read_file(path)
    except EntryReadError as e:
        hint = None
        if e.row_number:
            hint = "Fix the row or rerun with --skip-invalid"
        raise DataValidationError(str(e), recovery_hint=hint) from e
