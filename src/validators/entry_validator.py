"""Data quality checks for time entries.

The overtime aggregator and labor cost calculators accept whatever numbers
they are given. This validator is the opt-in place for callers to find
suspicious input before aggregating: negative or non-finite hours, entries
that fall into the "unknown" worker bucket, and workers whose entries carry
conflicting rates.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable, Optional

from src.aggregators.overtime_aggregator import EntryLike, normalize_entries
from src.models.time_entry import UNKNOWN_WORKER_KEY, TimeEntry
from src.validators.validation_report import ValidationReport

logger = logging.getLogger(__name__)

HOUR_FIELDS = ("hours", "regular_hours", "overtime_hours")
RATE_FIELDS = ("hourly_rate", "personnel_hourly_rate")


class TimeEntryValidator:
    """Validator for time entries feeding the overtime engine.

    Example:
        >>> validator = TimeEntryValidator()
        >>> report = validator.validate_entries([{"hours": -3}])
        >>> report.summary()
        '1 error(s), 1 warning(s)'
    """

    def validate_entry(
        self, entry: TimeEntry, row_number: Optional[int] = None
    ) -> ValidationReport:
        """Validate a single time entry.

        Args:
            entry: The entry to validate
            row_number: Optional row number for context in messages

        Returns:
            ValidationReport with any issues found
        """
        report = ValidationReport()
        context = {"row": row_number} if row_number is not None else {}
        context["worker"] = entry.worker_key

        for field_name in HOUR_FIELDS + RATE_FIELDS:
            value: Optional[Decimal] = getattr(entry, field_name)
            if value is None:
                continue
            if not value.is_finite():
                report.add_error(
                    field_name, "Value is not a finite number", value, context
                )
            elif value < 0:
                report.add_error(
                    field_name, "Value must not be negative", value, context
                )

        if entry.worker_key == UNKNOWN_WORKER_KEY:
            report.add_warning(
                "worker_key",
                "Entry has neither personnel_id nor user_id and is grouped "
                f"under '{UNKNOWN_WORKER_KEY}'",
                None,
                context,
            )

        if (
            entry.hours is not None
            and (entry.regular_hours is not None or entry.overtime_hours is not None)
            and entry.hours.is_finite()
            and entry.stored_hours.is_finite()
            and entry.hours != entry.stored_hours
        ):
            report.add_info(
                "hours",
                f"hours ({entry.hours}) differs from regular + overtime "
                f"({entry.stored_hours}); hours is used",
                entry.hours,
                context,
            )

        return report

    def validate_entries(self, entries: Iterable[EntryLike]) -> ValidationReport:
        """Validate a set of time entries.

        Runs the per-entry checks and flags workers whose entries carry more
        than one distinct non-zero rate (the first one found is used for
        costing).

        Args:
            entries: Entries to validate

        Returns:
            ValidationReport with all issues found
        """
        report = ValidationReport()
        rates: Dict[str, set] = {}

        normalized = normalize_entries(entries)
        for row_number, entry in enumerate(normalized, start=1):
            report.merge(self.validate_entry(entry, row_number=row_number))
            rate = entry.resolved_hourly_rate
            if rate.is_finite() and rate > 0:
                rates.setdefault(entry.worker_key, set()).add(rate)

        for worker_key, worker_rates in rates.items():
            if len(worker_rates) > 1:
                listed = ", ".join(str(r) for r in sorted(worker_rates))
                report.add_warning(
                    "hourly_rate",
                    f"Entries carry different rates ({listed}); "
                    "the first positive rate is used",
                    sorted(worker_rates),
                    {"worker": worker_key},
                )

        logger.info(f"Validated {len(normalized)} time entries: {report.summary()}")
        return report
