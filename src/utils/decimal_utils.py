"""Decimal helpers shared by the aggregators and calculators.

This module provides low-level utilities for hour and money arithmetic:
- Coercing int/float/str inputs to Decimal without binary float noise
- A decimal context that never raises, so invalid values turn into NaN
- A threshold split that propagates NaN instead of comparing against it
"""

import decimal
from decimal import Decimal
from typing import ContextManager, Tuple, Union

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")

# Invalid operations (Infinity - Infinity, Infinity * 0) yield NaN instead
# of raising decimal.InvalidOperation.
LENIENT_CONTEXT = decimal.Context(traps=[])


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")``.

    Args:
        value: The number to convert

    Returns:
        The value as a Decimal

    Example:
        >>> to_decimal(0.1)
        Decimal('0.1')
        >>> to_decimal(float("nan"))
        Decimal('NaN')
    """
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def lenient_context() -> ContextManager[decimal.Context]:
    """Return a context manager running Decimal arithmetic without traps."""
    return decimal.localcontext(LENIENT_CONTEXT)


def split_at_threshold(total: Decimal, threshold: Decimal) -> Tuple[Decimal, Decimal]:
    """Split a total into the part up to the threshold and the part beyond it.

    ``regular = min(total, threshold)`` and ``overtime = max(0, total - threshold)``.
    A NaN on either side yields NaN for both parts. An undefined excess
    (Infinity - Infinity) yields NaN overtime.

    Args:
        total: Total hours
        threshold: Hour count above which hours are overtime

    Returns:
        Tuple of (regular, overtime)

    Example:
        >>> split_at_threshold(Decimal("45"), Decimal("40"))
        (Decimal('40'), Decimal('5'))
    """
    if total.is_nan() or threshold.is_nan():
        nan = Decimal("NaN")
        return nan, nan

    with lenient_context():
        regular = total if total < threshold else threshold
        excess = total - threshold
        if excess.is_nan():
            # Infinity - Infinity
            return regular, excess
        overtime = excess if excess > ZERO else ZERO
    return regular, overtime
