"""Time entry data model for the payroll engine.

This module defines the TimeEntry model which represents a single block of
hours logged by one worker. Entries arrive from remote query results, so
every field except the holiday/overhead flags is optional.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import Field

from src.models.base import BaseDataModel

UNKNOWN_WORKER_KEY = "unknown"


class TimeEntry(BaseDataModel):
    """Represents a single time entry.

    Hours and rates are deliberately not range checked: negative, NaN and
    infinite values flow through the aggregators unchanged. Use
    ``TimeEntryValidator`` to report suspicious data before aggregating.

    Attributes:
        personnel_id: Personnel record the hours belong to
        user_id: Login account the hours were clocked with (fallback identity)
        hours: Total hours of the entry
        regular_hours: Stored regular part, used when ``hours`` is absent
        overtime_hours: Stored overtime part, used when ``hours`` is absent
        is_holiday: Whether the whole entry was worked on a holiday
        hourly_rate: Rate snapshotted on the entry
        personnel_hourly_rate: Worker's current rate, used as a fallback
        entry_date: Date the hours were worked
        personnel_name: Display name of the worker
        personnel_title: Job title of the worker
        is_overhead: Whether the hours are company overhead, not project work

    Example:
        >>> entry = TimeEntry(personnel_id="p-1", hours="8.5", hourly_rate=32)
        >>> entry.worker_key
        'p-1'
        >>> entry.effective_hours
        Decimal('8.5')
    """

    personnel_id: Optional[str] = Field(None, description="Personnel identifier")
    user_id: Optional[str] = Field(None, description="User account identifier")
    hours: Optional[Decimal] = Field(
        None, allow_inf_nan=True, description="Total hours"
    )
    regular_hours: Optional[Decimal] = Field(
        None, allow_inf_nan=True, description="Stored regular hours"
    )
    overtime_hours: Optional[Decimal] = Field(
        None, allow_inf_nan=True, description="Stored overtime hours"
    )
    is_holiday: bool = Field(False, description="Worked on a holiday")
    hourly_rate: Optional[Decimal] = Field(
        None, allow_inf_nan=True, description="Snapshotted hourly rate"
    )
    personnel_hourly_rate: Optional[Decimal] = Field(
        None, allow_inf_nan=True, description="Worker's current hourly rate"
    )
    entry_date: Optional[dt.date] = Field(None, description="Date of work")
    personnel_name: Optional[str] = Field(None, description="Worker display name")
    personnel_title: Optional[str] = Field(None, description="Worker job title")
    is_overhead: bool = Field(False, description="Overhead (non-project) hours")

    @property
    def worker_key(self) -> str:
        """Key grouping this entry with the rest of the worker's hours.

        Falls back from ``personnel_id`` to ``user_id`` to ``"unknown"`` so
        every entry lands in exactly one bucket.
        """
        return self.personnel_id or self.user_id or UNKNOWN_WORKER_KEY

    @property
    def effective_hours(self) -> Decimal:
        """Hours of the entry, falling back to the stored regular/OT split."""
        if self.hours is not None:
            return self.hours
        return (self.regular_hours or Decimal("0")) + (
            self.overtime_hours or Decimal("0")
        )

    @property
    def stored_hours(self) -> Decimal:
        """Sum of the stored regular and overtime columns."""
        return (self.regular_hours or Decimal("0")) + (
            self.overtime_hours or Decimal("0")
        )

    @property
    def resolved_hourly_rate(self) -> Decimal:
        """Entry rate if set, else the worker's current rate, else 0."""
        if self.hourly_rate is not None:
            return self.hourly_rate
        if self.personnel_hourly_rate is not None:
            return self.personnel_hourly_rate
        return Decimal("0")
