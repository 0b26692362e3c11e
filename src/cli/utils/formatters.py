"""Output formatting utilities for CLI."""

from decimal import Decimal
from typing import List

import click

CENTS = Decimal("0.01")


def _styled(symbol: str, message: str, **style) -> str:
    return click.style(f"{symbol} {message}", **style)


def format_success(message: str) -> str:
    """Format a success message with green color."""
    return _styled("✓", message, fg="green", bold=True)


def format_error(message: str) -> str:
    """Format an error message with red color."""
    return _styled("✗", message, fg="red", bold=True)


def format_warning(message: str) -> str:
    """Format a warning message with yellow color."""
    return _styled("⚠", message, fg="yellow", bold=True)


def format_info(message: str) -> str:
    """Format an info message with blue color."""
    return _styled("ℹ", message, fg="blue")


def format_hours(value: Decimal) -> str:
    """Format an hour count with two decimals.

    Non-finite values (NaN, Infinity) are shown as-is.

    Example:
        >>> format_hours(Decimal("42.5"))
        '42.50'
    """
    if not value.is_finite():
        return str(value)
    return str(value.quantize(CENTS))


def format_currency(value: Decimal) -> str:
    """Format a money amount with a dollar sign and thousands separators.

    Example:
        >>> format_currency(Decimal("1270"))
        '$1,270.00'
    """
    if not value.is_finite():
        return str(value)
    return f"${value.quantize(CENTS):,}"


def format_table(headers: List[str], rows: List[List[str]], max_width: int = 40) -> str:
    """Format data as a plain-text table.

    Args:
        headers: List of column headers
        rows: List of data rows (each row is a list of cell values)
        max_width: Maximum width for each column (default: 40)

    Returns:
        Formatted table as a string
    """
    if not headers:
        return ""

    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row[: len(headers)]):
            col_widths[i] = max(col_widths[i], len(str(cell)))
    col_widths = [min(w, max_width) for w in col_widths]

    def render(cells: List[str]) -> str:
        padded = [
            f" {str(cell)[:width]:<{width}} "
            for cell, width in zip(cells, col_widths)
        ]
        return "|" + "|".join(padded) + "|"

    separator = "+" + "+".join("-" * (w + 2) for w in col_widths) + "+"

    lines = [separator, render(headers), separator]
    if rows:
        lines.extend(render(row) for row in rows)
        lines.append(separator)

    return "\n".join(lines)
