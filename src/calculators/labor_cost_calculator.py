"""Labor cost calculator for weekly payroll estimates.

This module implements the cost side of the weekly overtime engine:
- The base regular/overtime cost formula
- Weekly labor cost per worker with holiday hours paid separately
- Project labor allocation with supervision/field split

Holiday hours are removed from a worker's hours before the weekly threshold
split and costed in full at the holiday multiplier. Leaving them in the pool
would let holiday time fill the regular bucket and understate holiday pay.

No rounding is applied; callers round for display.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List

from src.aggregators.overtime_aggregator import (
    DEFAULT_WEEKLY_THRESHOLD,
    EntryLike,
    aggregate_single_worker_overtime,
    normalize_entries,
)
from src.models.time_entry import TimeEntry
from src.utils.decimal_utils import ZERO, Number, lenient_context, to_decimal

logger = logging.getLogger(__name__)

DEFAULT_OVERTIME_MULTIPLIER = Decimal("1.5")
DEFAULT_HOLIDAY_MULTIPLIER = Decimal("2.0")

SUPERVISION_TITLE_KEYWORDS = ("superintendent", "supervisor", "foreman")


@dataclass
class WorkerLaborCost:
    """Weekly labor cost breakdown for one worker.

    Attributes:
        worker_key: Worker grouping key
        hourly_rate: First non-zero rate found among the worker's entries
        total_hours: All hours, holiday included
        regular_hours: Non-holiday hours up to the threshold
        overtime_hours: Non-holiday hours beyond the threshold
        holiday_hours: Hours flagged as holiday
        regular_amount: regular_hours × rate
        overtime_amount: overtime_hours × rate × overtime multiplier
        holiday_amount: holiday_hours × rate × holiday multiplier
        total_amount: Sum of the three amounts
        worker_name: Display name from the first named entry, if any
    """

    worker_key: str
    hourly_rate: Decimal
    total_hours: Decimal
    regular_hours: Decimal
    overtime_hours: Decimal
    holiday_hours: Decimal
    regular_amount: Decimal
    overtime_amount: Decimal
    holiday_amount: Decimal
    total_amount: Decimal
    worker_name: str = ""


@dataclass
class LaborCostSummary:
    """Weekly labor cost over all workers.

    Attributes:
        workers: Per-worker breakdowns in first-seen order
        regular_hours: Sum of regular hours
        overtime_hours: Sum of overtime hours
        holiday_hours: Sum of holiday hours
        total_hours: Sum of all hours
        total_cost: Sum of worker costs
    """

    workers: List[WorkerLaborCost] = field(default_factory=list)
    regular_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    holiday_hours: Decimal = ZERO
    total_hours: Decimal = ZERO
    total_cost: Decimal = ZERO


@dataclass
class WorkerAllocation:
    """Labor allocated to a project by one worker.

    Attributes:
        worker_key: Worker grouping key
        worker_name: Display name
        title: Job title, if known
        total_hours: Project hours
        regular_hours: Hours up to the threshold
        overtime_hours: Hours beyond the threshold
        hourly_rate: First non-zero rate found
        estimated_cost: Regular/overtime cost estimate
        is_supervision: Whether the title marks a supervisory role
    """

    worker_key: str
    worker_name: str
    title: str
    total_hours: Decimal
    regular_hours: Decimal
    overtime_hours: Decimal
    hourly_rate: Decimal
    estimated_cost: Decimal
    is_supervision: bool


@dataclass
class LaborAllocationSummary:
    """Project labor allocation with supervision/field split."""

    allocations: List[WorkerAllocation] = field(default_factory=list)
    total_hours: Decimal = ZERO
    total_cost: Decimal = ZERO
    supervision_hours: Decimal = ZERO
    supervision_cost: Decimal = ZERO
    field_hours: Decimal = ZERO
    field_cost: Decimal = ZERO


@dataclass
class _WorkerAccumulator:
    name: str = ""
    title: str = ""
    rate: Decimal = ZERO
    holiday_hours: Decimal = ZERO
    non_holiday_hours: Decimal = ZERO
    entry_count: int = 0

    def add(self, entry: TimeEntry) -> None:
        if not self.name and entry.personnel_name:
            self.name = entry.personnel_name
        if not self.title and entry.personnel_title:
            self.title = entry.personnel_title
        # First entry sets the rate; a zero rate is replaced by the first positive one
        rate = entry.resolved_hourly_rate
        if self.entry_count == 0 or (
            self.rate == ZERO and not rate.is_nan() and rate > ZERO
        ):
            self.rate = rate
        self.entry_count += 1
        if entry.is_holiday:
            self.holiday_hours += entry.effective_hours
        else:
            self.non_holiday_hours += entry.effective_hours


def _accumulate_by_worker(
    entries: Iterable[TimeEntry],
) -> Dict[str, _WorkerAccumulator]:
    workers: Dict[str, _WorkerAccumulator] = {}
    for entry in entries:
        workers.setdefault(entry.worker_key, _WorkerAccumulator()).add(entry)
    return workers


def is_supervision_title(title: str) -> bool:
    """Check whether a job title describes a supervisory role.

    Args:
        title: Job title, may be empty

    Returns:
        True if the title mentions superintendent, supervisor or foreman

    Example:
        >>> is_supervision_title("Site Foreman")
        True
        >>> is_supervision_title("Roofer")
        False
    """
    lowered = (title or "").lower()
    return any(keyword in lowered for keyword in SUPERVISION_TITLE_KEYWORDS)


def calculate_labor_cost(
    regular_hours: Number,
    overtime_hours: Number,
    hourly_rate: Number,
    overtime_multiplier: Number = DEFAULT_OVERTIME_MULTIPLIER,
) -> Decimal:
    """Calculate labor cost for a regular/overtime split.

    ``cost = regular × rate + overtime × rate × multiplier``. Multipliers
    below 1 are accepted as given.

    Args:
        regular_hours: Hours paid at the base rate
        overtime_hours: Hours paid at the overtime rate
        hourly_rate: Base hourly rate
        overtime_multiplier: Overtime rate factor (default: 1.5)

    Returns:
        Unrounded labor cost

    Example:
        >>> calculate_labor_cost(30, 10, 20, Decimal("1.5"))
        Decimal('900.0')
    """
    rate = to_decimal(hourly_rate)
    with lenient_context():
        return to_decimal(regular_hours) * rate + to_decimal(
            overtime_hours
        ) * rate * to_decimal(overtime_multiplier)


def calculate_weekly_labor_cost(
    entries: Iterable[EntryLike],
    weekly_threshold: Number = DEFAULT_WEEKLY_THRESHOLD,
    overtime_multiplier: Number = DEFAULT_OVERTIME_MULTIPLIER,
    holiday_multiplier: Number = DEFAULT_HOLIDAY_MULTIPLIER,
) -> LaborCostSummary:
    """Calculate weekly labor cost with holiday hours costed separately.

    For each worker:
    1. Sum holiday and non-holiday hours separately
    2. Split only the non-holiday hours at the weekly threshold
    3. Cost the split with ``calculate_labor_cost`` and add
       ``holiday_hours × rate × holiday_multiplier``

    The worker's rate is the first non-zero resolved rate among their
    entries in input order.

    Args:
        entries: Time entries for one week
        weekly_threshold: Hours above which non-holiday time is overtime
        overtime_multiplier: Overtime rate factor (default: 1.5)
        holiday_multiplier: Holiday rate factor (default: 2.0)

    Returns:
        LaborCostSummary with per-worker breakdowns and totals

    Example:
        >>> summary = calculate_weekly_labor_cost([
        ...     {"personnel_id": "A", "hours": 45, "hourly_rate": 20},
        ...     {"personnel_id": "A", "hours": 8, "hourly_rate": 20, "is_holiday": True},
        ... ])
        >>> summary.total_cost
        Decimal('1270.0')
    """
    threshold = to_decimal(weekly_threshold)
    ot_multiplier = to_decimal(overtime_multiplier)
    holiday_factor = to_decimal(holiday_multiplier)

    summary = LaborCostSummary()

    with lenient_context():
        workers = _accumulate_by_worker(normalize_entries(entries))
        logger.info(f"Calculating weekly labor cost for {len(workers)} workers")

        for worker_key, acc in workers.items():
            split = aggregate_single_worker_overtime(acc.non_holiday_hours, threshold)
            regular_amount = split.regular_hours * acc.rate
            overtime_amount = split.overtime_hours * acc.rate * ot_multiplier
            holiday_amount = acc.holiday_hours * acc.rate * holiday_factor
            worker_cost = (
                calculate_labor_cost(
                    split.regular_hours, split.overtime_hours, acc.rate, ot_multiplier
                )
                + holiday_amount
            )

            summary.workers.append(
                WorkerLaborCost(
                    worker_key=worker_key,
                    hourly_rate=acc.rate,
                    total_hours=acc.non_holiday_hours + acc.holiday_hours,
                    regular_hours=split.regular_hours,
                    overtime_hours=split.overtime_hours,
                    holiday_hours=acc.holiday_hours,
                    regular_amount=regular_amount,
                    overtime_amount=overtime_amount,
                    holiday_amount=holiday_amount,
                    total_amount=worker_cost,
                    worker_name=acc.name,
                )
            )
            summary.regular_hours += split.regular_hours
            summary.overtime_hours += split.overtime_hours
            summary.holiday_hours += acc.holiday_hours
            summary.total_hours += acc.non_holiday_hours + acc.holiday_hours
            summary.total_cost += worker_cost

    logger.info(f"Weekly labor cost: {summary.total_cost}")
    return summary


def calculate_labor_allocation(
    entries: Iterable[EntryLike],
    weekly_threshold: Number = DEFAULT_WEEKLY_THRESHOLD,
    overtime_multiplier: Number = DEFAULT_OVERTIME_MULTIPLIER,
) -> LaborAllocationSummary:
    """Allocate project labor hours and estimated cost per worker.

    Overhead entries are skipped. Holiday entries count as ordinary hours
    here, the allocation estimates cost from the regular/overtime split only.
    Allocations are sorted by hours, largest first.

    Args:
        entries: Time entries booked to one project
        weekly_threshold: Hours above which time is overtime
        overtime_multiplier: Overtime rate factor (default: 1.5)

    Returns:
        LaborAllocationSummary with supervision and field totals
    """
    project_entries = [e for e in normalize_entries(entries) if not e.is_overhead]
    summary = LaborAllocationSummary()

    with lenient_context():
        for worker_key, acc in _accumulate_by_worker(project_entries).items():
            hours = acc.non_holiday_hours + acc.holiday_hours
            split = aggregate_single_worker_overtime(hours, weekly_threshold)
            cost = calculate_labor_cost(
                split.regular_hours, split.overtime_hours, acc.rate, overtime_multiplier
            )
            allocation = WorkerAllocation(
                worker_key=worker_key,
                worker_name=acc.name or worker_key,
                title=acc.title,
                total_hours=hours,
                regular_hours=split.regular_hours,
                overtime_hours=split.overtime_hours,
                hourly_rate=acc.rate,
                estimated_cost=cost,
                is_supervision=is_supervision_title(acc.title),
            )
            summary.allocations.append(allocation)
            summary.total_hours += hours
            summary.total_cost += cost
            if allocation.is_supervision:
                summary.supervision_hours += hours
                summary.supervision_cost += cost

        summary.field_hours = summary.total_hours - summary.supervision_hours
        summary.field_cost = summary.total_cost - summary.supervision_cost
        summary.allocations.sort(key=lambda a: a.total_hours, reverse=True)

    return summary
