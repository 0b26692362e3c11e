"""Calculator modules for labor cost and pay period figures."""

from src.calculators.labor_cost_calculator import (
    DEFAULT_HOLIDAY_MULTIPLIER,
    DEFAULT_OVERTIME_MULTIPLIER,
    LaborAllocationSummary,
    LaborCostSummary,
    WorkerAllocation,
    WorkerLaborCost,
    calculate_labor_allocation,
    calculate_labor_cost,
    calculate_weekly_labor_cost,
    is_supervision_title,
)
from src.calculators.pay_period_calculator import (
    DailyHours,
    PayPeriod,
    PayPeriodTotals,
    calculate_pay_period_totals,
    get_all_pay_periods_from_entries,
    get_daily_breakdown,
    get_last_completed_pay_period,
    get_pay_period_for_date,
    get_payment_date_for_week,
    get_upcoming_pay_date,
)

__all__ = [
    # labor_cost_calculator
    "DEFAULT_HOLIDAY_MULTIPLIER",
    "DEFAULT_OVERTIME_MULTIPLIER",
    "LaborAllocationSummary",
    "LaborCostSummary",
    "WorkerAllocation",
    "WorkerLaborCost",
    "calculate_labor_allocation",
    "calculate_labor_cost",
    "calculate_weekly_labor_cost",
    "is_supervision_title",
    # pay_period_calculator
    "DailyHours",
    "PayPeriod",
    "PayPeriodTotals",
    "calculate_pay_period_totals",
    "get_all_pay_periods_from_entries",
    "get_daily_breakdown",
    "get_last_completed_pay_period",
    "get_pay_period_for_date",
    "get_payment_date_for_week",
    "get_upcoming_pay_date",
]
