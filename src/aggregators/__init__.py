"""Aggregators module for combining time entries into weekly totals.

This module provides the weekly overtime aggregator that groups time entries
by worker and splits each worker's hours at the weekly threshold.
"""

from src.aggregators.overtime_aggregator import (
    DEFAULT_WEEKLY_THRESHOLD,
    OvertimeBreakdown,
    OvertimeTotals,
    WorkerOvertime,
    aggregate_single_worker_overtime,
    aggregate_weekly_overtime,
    aggregate_weekly_overtime_with_breakdown,
    generate_worker_matrix,
    normalize_entries,
    sum_hours_by_worker,
)

__all__ = [
    "DEFAULT_WEEKLY_THRESHOLD",
    "OvertimeBreakdown",
    "OvertimeTotals",
    "WorkerOvertime",
    "aggregate_single_worker_overtime",
    "aggregate_weekly_overtime",
    "aggregate_weekly_overtime_with_breakdown",
    "generate_worker_matrix",
    "normalize_entries",
    "sum_hours_by_worker",
]
