"""Weekly overtime aggregator for time entries.

This module groups time entries by worker, applies the weekly overtime
threshold to each worker's total, and sums the regular/overtime split
across workers. It is the shared engine behind time-tracking statistics
and payroll cost estimates.

The functions are pure: no I/O besides logging, no shared state, and no
exceptions for odd numeric input. Negative, NaN or infinite hours are
propagated through the arithmetic rather than rejected.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Union

import pandas as pd

from src.models.time_entry import TimeEntry
from src.utils.decimal_utils import (
    ZERO,
    Number,
    lenient_context,
    split_at_threshold,
    to_decimal,
)

logger = logging.getLogger(__name__)

DEFAULT_WEEKLY_THRESHOLD = Decimal("40")

EntryLike = Union[TimeEntry, Mapping[str, Any]]


@dataclass
class OvertimeTotals:
    """Regular/overtime hour totals.

    ``total_hours`` is always ``regular_hours + overtime_hours``.

    Attributes:
        regular_hours: Hours up to the weekly threshold
        overtime_hours: Hours beyond the weekly threshold
        total_hours: Sum of regular and overtime hours

    Example:
        >>> totals = OvertimeTotals.from_split(Decimal("40"), Decimal("5"))
        >>> totals.total_hours
        Decimal('45')
    """

    regular_hours: Decimal
    overtime_hours: Decimal
    total_hours: Decimal

    @classmethod
    def from_split(
        cls, regular_hours: Decimal, overtime_hours: Decimal
    ) -> "OvertimeTotals":
        """Build totals from a regular/overtime split."""
        with lenient_context():
            total = regular_hours + overtime_hours
        return cls(
            regular_hours=regular_hours,
            overtime_hours=overtime_hours,
            total_hours=total,
        )


@dataclass
class WorkerOvertime:
    """Regular/overtime split of one worker's weekly hours.

    Attributes:
        total_hours: Hours the worker logged in the week
        regular_hours: Hours up to the weekly threshold
        overtime_hours: Hours beyond the weekly threshold
    """

    total_hours: Decimal
    regular_hours: Decimal
    overtime_hours: Decimal


@dataclass
class OvertimeBreakdown:
    """Aggregate totals together with the per-worker split.

    Attributes:
        totals: Aggregate over all workers
        by_worker: Worker key to that worker's split
    """

    totals: OvertimeTotals
    by_worker: Dict[str, WorkerOvertime] = field(default_factory=dict)


def normalize_entries(entries: Iterable[EntryLike]) -> List[TimeEntry]:
    """Resolve mappings into TimeEntry models.

    Entries that already are TimeEntry instances are passed through, plain
    mappings (query rows, JSON records) are validated into the model.

    Args:
        entries: TimeEntry instances or mappings with the same field names

    Returns:
        List of TimeEntry models in input order
    """
    return [
        entry if isinstance(entry, TimeEntry) else TimeEntry.model_validate(entry)
        for entry in entries
    ]


def sum_hours_by_worker(entries: Iterable[EntryLike]) -> Dict[str, Decimal]:
    """Sum effective hours per worker key.

    Args:
        entries: Time entries to group

    Returns:
        Dictionary of worker key to total hours, in first-seen order
    """
    totals: Dict[str, Decimal] = {}
    with lenient_context():
        for entry in normalize_entries(entries):
            key = entry.worker_key
            totals[key] = totals.get(key, ZERO) + entry.effective_hours
    return totals


def aggregate_single_worker_overtime(
    total_hours: Number, weekly_threshold: Number = DEFAULT_WEEKLY_THRESHOLD
) -> WorkerOvertime:
    """Split one worker's known weekly total at the threshold.

    Args:
        total_hours: Hours the worker logged in the week
        weekly_threshold: Hours above which time counts as overtime

    Returns:
        WorkerOvertime with ``regular = min(H, t)`` and
        ``overtime = max(0, H - t)``

    Example:
        >>> split = aggregate_single_worker_overtime(Decimal("45"))
        >>> split.regular_hours, split.overtime_hours
        (Decimal('40'), Decimal('5'))
    """
    total = to_decimal(total_hours)
    regular, overtime = split_at_threshold(total, to_decimal(weekly_threshold))
    return WorkerOvertime(
        total_hours=total, regular_hours=regular, overtime_hours=overtime
    )


def aggregate_weekly_overtime_with_breakdown(
    entries: Iterable[EntryLike], weekly_threshold: Number = DEFAULT_WEEKLY_THRESHOLD
) -> OvertimeBreakdown:
    """Aggregate weekly overtime and keep each worker's split.

    Entries are grouped by worker key (personnel id, then user id, then
    ``"unknown"``) and each worker's total is split at the threshold. The
    aggregate totals are the component-wise sums of the worker splits.

    Args:
        entries: Time entries for one week
        weekly_threshold: Hours above which a worker's time is overtime

    Returns:
        OvertimeBreakdown with aggregate totals and per-worker splits
    """
    threshold = to_decimal(weekly_threshold)
    hours_by_worker = sum_hours_by_worker(entries)

    logger.info(
        f"Aggregating weekly overtime for {len(hours_by_worker)} workers "
        f"(threshold {threshold})"
    )

    by_worker: Dict[str, WorkerOvertime] = {}
    regular_sum = ZERO
    overtime_sum = ZERO

    with lenient_context():
        for worker_key, hours in hours_by_worker.items():
            split = aggregate_single_worker_overtime(hours, threshold)
            by_worker[worker_key] = split
            regular_sum += split.regular_hours
            overtime_sum += split.overtime_hours
            logger.debug(
                f"Worker {worker_key}: {split.regular_hours} regular, "
                f"{split.overtime_hours} overtime"
            )

    return OvertimeBreakdown(
        totals=OvertimeTotals.from_split(regular_sum, overtime_sum),
        by_worker=by_worker,
    )


def aggregate_weekly_overtime(
    entries: Iterable[EntryLike], weekly_threshold: Number = DEFAULT_WEEKLY_THRESHOLD
) -> OvertimeTotals:
    """Aggregate regular/overtime hours across all workers for a week.

    Args:
        entries: Time entries for one week
        weekly_threshold: Hours above which a worker's time is overtime

    Returns:
        OvertimeTotals summed over workers

    Example:
        >>> aggregate_weekly_overtime([
        ...     {"personnel_id": "A", "hours": 50},
        ...     {"personnel_id": "B", "hours": 20},
        ... ])
        OvertimeTotals(regular_hours=Decimal('60'), overtime_hours=Decimal('10'), total_hours=Decimal('70'))
    """
    return aggregate_weekly_overtime_with_breakdown(entries, weekly_threshold).totals


def generate_worker_matrix(breakdown: OvertimeBreakdown) -> pd.DataFrame:
    """Generate a worker-by-column matrix from a breakdown.

    Args:
        breakdown: Result of ``aggregate_weekly_overtime_with_breakdown``

    Returns:
        DataFrame indexed by worker key with total, regular and overtime
        hour columns; empty when there are no workers
    """
    if not breakdown.by_worker:
        logger.info("No workers in breakdown, returning empty DataFrame")
        return pd.DataFrame(columns=["total_hours", "regular_hours", "overtime_hours"])

    rows = {
        worker_key: {
            "total_hours": split.total_hours,
            "regular_hours": split.regular_hours,
            "overtime_hours": split.overtime_hours,
        }
        for worker_key, split in breakdown.by_worker.items()
    }
    df = pd.DataFrame.from_dict(rows, orient="index")
    df.index.name = "worker_key"
    return df
