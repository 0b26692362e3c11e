"""Pay period calculations for a single worker's timesheet.

Pay periods run Monday through Sunday and are paid on the Friday after the
period ends. This module provides:
- Pay period lookup for a date, the last completed period, and pay dates
- Listing the distinct pay periods present in a set of entries
- A Monday-Sunday daily breakdown of a period
- Period totals with the weekly threshold distributed chronologically

Every entry, holiday or not, counts toward the weekly threshold in date
order. Holiday hours that fall under the threshold are paid at the holiday
multiplier, holiday hours beyond it at the larger of the overtime and
holiday multipliers.
"""

import datetime as dt
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from src.aggregators.overtime_aggregator import (
    DEFAULT_WEEKLY_THRESHOLD,
    EntryLike,
    normalize_entries,
)
from src.calculators.labor_cost_calculator import (
    DEFAULT_HOLIDAY_MULTIPLIER,
    DEFAULT_OVERTIME_MULTIPLIER,
)
from src.models.time_entry import TimeEntry
from src.utils.decimal_utils import (
    ZERO,
    Number,
    lenient_context,
    split_at_threshold,
    to_decimal,
)

logger = logging.getLogger(__name__)

FRIDAY = 4


@dataclass
class PayPeriod:
    """A Monday-Sunday pay period.

    Attributes:
        week_start: Monday the period starts on
        week_end: Sunday the period ends on
        payment_date: Friday after the period ends
        label: Display label, e.g. "Jun 12 - Jun 18, 2023"

    Example:
        >>> period = get_pay_period_for_date(dt.date(2023, 6, 15))
        >>> period.week_start, period.payment_date
        (datetime.date(2023, 6, 12), datetime.date(2023, 6, 23))
    """

    week_start: dt.date
    week_end: dt.date
    payment_date: dt.date
    label: str

    def contains(self, date: dt.date) -> bool:
        """Check whether a date falls inside the period (inclusive)."""
        return self.week_start <= date <= self.week_end


@dataclass
class DailyHours:
    """Hours worked on one day of a pay period."""

    date: dt.date
    day_name: str
    regular_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    holiday_hours: Decimal = ZERO
    total_hours: Decimal = ZERO


@dataclass
class PayPeriodTotals:
    """Hour and pay totals of one worker for one pay period.

    Attributes:
        regular_hours: Hours up to the weekly threshold, holiday hours included
        overtime_hours: Hours beyond the weekly threshold, holiday hours included
        holiday_hours: Hours flagged as holiday
        total_hours: All hours in the period
        days_worked: Days with any hours logged
        regular_pay: Pay for regular hours
        overtime_pay: Pay for overtime hours
        holiday_pay: Pay for holiday hours
        total_pay: Sum of the three pay amounts
        daily_breakdown: Monday-Sunday rows with the overtime placed on the
            days where the running total crossed the threshold
    """

    regular_hours: Decimal
    overtime_hours: Decimal
    holiday_hours: Decimal
    total_hours: Decimal
    days_worked: int
    regular_pay: Decimal
    overtime_pay: Decimal
    holiday_pay: Decimal
    total_pay: Decimal
    daily_breakdown: List[DailyHours] = field(default_factory=list)


def _week_start(date: dt.date) -> dt.date:
    return date - dt.timedelta(days=date.weekday())


def _format_label(week_start: dt.date, week_end: dt.date) -> str:
    return (
        f"{week_start:%b} {week_start.day} - "
        f"{week_end:%b} {week_end.day}, {week_end.year}"
    )


def _next_friday(date: dt.date) -> dt.date:
    """Return the first Friday strictly after ``date``."""
    days_ahead = (FRIDAY - date.weekday()) % 7 or 7
    return date + dt.timedelta(days=days_ahead)


def get_payment_date_for_week(week_start: dt.date) -> dt.date:
    """Get the Friday a week is paid on.

    Args:
        week_start: Any date in the week, normally its Monday

    Returns:
        The first Friday after the week's Sunday
    """
    week_end = _week_start(week_start) + dt.timedelta(days=6)
    return _next_friday(week_end)


def get_pay_period_for_date(date: dt.date) -> PayPeriod:
    """Get the pay period containing a date.

    Args:
        date: Any date

    Returns:
        PayPeriod whose Monday-Sunday range contains ``date``
    """
    week_start = _week_start(date)
    week_end = week_start + dt.timedelta(days=6)
    return PayPeriod(
        week_start=week_start,
        week_end=week_end,
        payment_date=get_payment_date_for_week(week_start),
        label=_format_label(week_start, week_end),
    )


def get_last_completed_pay_period(
    reference_date: Optional[dt.date] = None,
) -> PayPeriod:
    """Get the most recent pay period that has fully ended.

    Args:
        reference_date: Date to look back from (default: today)

    Returns:
        The pay period of the week before ``reference_date``'s week
    """
    reference_date = reference_date or dt.date.today()
    return get_pay_period_for_date(_week_start(reference_date) - dt.timedelta(days=7))


def get_upcoming_pay_date(reference_date: Optional[dt.date] = None) -> dt.date:
    """Get the next pay Friday, or ``reference_date`` itself if it is a Friday.

    Args:
        reference_date: Date to look forward from (default: today)

    Returns:
        The upcoming Friday
    """
    reference_date = reference_date or dt.date.today()
    if reference_date.weekday() == FRIDAY:
        return reference_date
    return _next_friday(reference_date)


def get_all_pay_periods_from_entries(entries: Iterable[EntryLike]) -> List[PayPeriod]:
    """List the distinct pay periods present in a set of entries.

    Entries without an ``entry_date`` are skipped.

    Args:
        entries: Time entries

    Returns:
        Unique pay periods, most recent first
    """
    periods: Dict[dt.date, PayPeriod] = {}
    for entry in normalize_entries(entries):
        if entry.entry_date is None:
            continue
        week_start = _week_start(entry.entry_date)
        if week_start not in periods:
            periods[week_start] = get_pay_period_for_date(entry.entry_date)

    return sorted(periods.values(), key=lambda p: p.week_start, reverse=True)


def _entries_in_period(
    entries: Iterable[TimeEntry], period: PayPeriod
) -> List[TimeEntry]:
    return [
        entry
        for entry in entries
        if entry.entry_date is not None and period.contains(entry.entry_date)
    ]


def _logged_hours(entry: TimeEntry) -> Decimal:
    """Stored regular + overtime hours, or ``hours`` when no split is stored."""
    if entry.regular_hours is None and entry.overtime_hours is None:
        return entry.effective_hours
    return entry.stored_hours


def get_daily_breakdown(
    entries: Iterable[EntryLike], period: PayPeriod
) -> List[DailyHours]:
    """Build the Monday-Sunday daily breakdown of a pay period.

    Each day carries the stored regular and overtime hours of its entries
    and their sum; entries without a stored split count their ``hours``.
    Holiday hours are tracked separately. Entries outside the period are
    ignored.

    Args:
        entries: One worker's time entries
        period: Pay period to break down

    Returns:
        Seven DailyHours rows, Monday first
    """
    days = [
        DailyHours(date=day, day_name=f"{day:%a}")
        for day in (period.week_start + dt.timedelta(days=i) for i in range(7))
    ]
    by_date = {day.date: day for day in days}

    with lenient_context():
        for entry in _entries_in_period(normalize_entries(entries), period):
            day = by_date[entry.entry_date]
            hours = _logged_hours(entry)
            day.regular_hours += entry.regular_hours or ZERO
            day.overtime_hours += entry.overtime_hours or ZERO
            day.total_hours += hours
            if entry.is_holiday:
                day.holiday_hours += hours

    return days


def _distribute(
    hours: Decimal, accumulated: Decimal, threshold: Decimal
) -> Tuple[Decimal, Decimal]:
    """Split ``hours`` given the hours already accumulated this week."""
    if accumulated >= threshold:
        return ZERO, hours
    if accumulated + hours > threshold:
        regular = threshold - accumulated
        return regular, hours - regular
    return hours, ZERO


def calculate_pay_period_totals(
    entries: Iterable[EntryLike],
    period: PayPeriod,
    fallback_hourly_rate: Number = ZERO,
    overtime_multiplier: Number = DEFAULT_OVERTIME_MULTIPLIER,
    weekly_threshold: Number = DEFAULT_WEEKLY_THRESHOLD,
    holiday_multiplier: Number = DEFAULT_HOLIDAY_MULTIPLIER,
) -> PayPeriodTotals:
    """Calculate hours and pay for one worker's pay period.

    Entries are walked in date order. Their hours fill the regular bucket
    until the weekly threshold is reached, then spill into overtime, each
    priced at the entry's snapshotted rate (or ``fallback_hourly_rate`` when
    the entry has none). Holiday entries count toward the threshold too:
    their regular part is paid at ``holiday_multiplier`` and their overtime
    part at ``max(overtime_multiplier, holiday_multiplier)``. All holiday
    pay is reported as ``holiday_pay``.

    Args:
        entries: One worker's time entries (entries outside the period are
            ignored)
        period: Pay period to total
        fallback_hourly_rate: Rate for entries without a snapshotted rate
        overtime_multiplier: Overtime rate factor (default: 1.5)
        weekly_threshold: Weekly overtime threshold (default: 40)
        holiday_multiplier: Holiday rate factor (default: 2.0)

    Returns:
        PayPeriodTotals with the chronological daily breakdown
    """
    threshold = to_decimal(weekly_threshold)
    fallback_rate = to_decimal(fallback_hourly_rate)
    ot_factor = to_decimal(overtime_multiplier)
    holiday_factor = to_decimal(holiday_multiplier)

    normalized = normalize_entries(entries)
    period_entries = sorted(
        _entries_in_period(normalized, period), key=lambda e: e.entry_date
    )
    daily = get_daily_breakdown(period_entries, period)

    logger.info(
        f"Calculating pay period totals for {period.label} "
        f"({len(period_entries)} entries)"
    )

    regular_pay = ZERO
    overtime_pay = ZERO
    holiday_pay = ZERO

    with lenient_context():
        holiday_ot_factor = max(ot_factor, holiday_factor)
        accumulated = ZERO
        for entry in period_entries:
            rate = entry.hourly_rate if entry.hourly_rate is not None else fallback_rate
            hours = _logged_hours(entry)
            entry_regular, entry_overtime = _distribute(hours, accumulated, threshold)
            accumulated += hours
            if entry.is_holiday:
                holiday_pay += entry_regular * rate * holiday_factor
                holiday_pay += entry_overtime * rate * holiday_ot_factor
            else:
                regular_pay += entry_regular * rate
                overtime_pay += entry_overtime * rate * ot_factor

        total_hours = sum((d.total_hours for d in daily), ZERO)
        holiday_hours = sum((d.holiday_hours for d in daily), ZERO)
        regular_hours, overtime_hours = split_at_threshold(total_hours, threshold)

        # Re-split the days so overtime lands where the threshold was crossed
        daily_accumulated = ZERO
        for day in daily:
            day.regular_hours, day.overtime_hours = _distribute(
                day.total_hours, daily_accumulated, threshold
            )
            daily_accumulated += day.total_hours

        total_pay = regular_pay + overtime_pay + holiday_pay
        days_worked = sum(1 for d in daily if d.total_hours > ZERO)

    return PayPeriodTotals(
        regular_hours=regular_hours,
        overtime_hours=overtime_hours,
        holiday_hours=holiday_hours,
        total_hours=total_hours,
        days_worked=days_worked,
        regular_pay=regular_pay,
        overtime_pay=overtime_pay,
        holiday_pay=holiday_pay,
        total_pay=total_pay,
        daily_breakdown=daily,
    )
