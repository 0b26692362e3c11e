"""Tests for the labor cost calculator."""

from decimal import Decimal

import pytest

from src.calculators.labor_cost_calculator import (
    DEFAULT_HOLIDAY_MULTIPLIER,
    DEFAULT_OVERTIME_MULTIPLIER,
    calculate_labor_allocation,
    calculate_labor_cost,
    calculate_weekly_labor_cost,
    is_supervision_title,
)


class TestCalculateLaborCost:
    """Tests for the regular/overtime cost formula."""

    def test_cost_formula(self):
        """Test 30 regular + 10 overtime at $20 and 1.5x is $900."""
        assert calculate_labor_cost(30, 10, 20, Decimal("1.5")) == Decimal("900")

    def test_default_multiplier(self):
        """Test that the default overtime multiplier is 1.5."""
        assert DEFAULT_OVERTIME_MULTIPLIER == Decimal("1.5")
        assert calculate_labor_cost(0, 2, 10) == Decimal("30")

    def test_no_rounding(self):
        """Test that fractional cents are kept."""
        cost = calculate_labor_cost(Decimal("1.333"), 0, Decimal("0.01"))

        assert cost == Decimal("0.01333")

    def test_multiplier_below_one_is_accepted(self):
        """Test that multipliers are not range checked."""
        assert calculate_labor_cost(0, 10, 20, Decimal("0.5")) == Decimal("100")

    def test_infinite_hours_times_zero_rate_is_nan(self):
        """Test that an invalid operation yields NaN instead of raising."""
        cost = calculate_labor_cost(Decimal("Infinity"), 0, 0)

        assert cost.is_nan()


class TestCalculateWeeklyLaborCost:
    """Tests for weekly labor cost with holiday hours."""

    def test_end_to_end_scenario(self):
        """Test the 45 regular-week + 8 holiday hour scenario."""
        summary = calculate_weekly_labor_cost(
            [
                {"personnel_id": "A", "hours": 45, "is_holiday": False, "hourly_rate": 20},
                {"personnel_id": "A", "hours": 8, "is_holiday": True, "hourly_rate": 20},
            ],
            weekly_threshold=40,
            overtime_multiplier=Decimal("1.5"),
            holiday_multiplier=Decimal("2.0"),
        )

        worker = summary.workers[0]
        assert worker.regular_hours == Decimal("40")
        assert worker.overtime_hours == Decimal("5")
        assert worker.holiday_hours == Decimal("8")
        assert worker.regular_amount == Decimal("800")
        assert worker.overtime_amount == Decimal("150")
        assert worker.holiday_amount == Decimal("320")
        assert worker.total_amount == Decimal("1270")
        assert summary.total_cost == Decimal("1270")

    def test_holiday_hours_removed_from_threshold_pool(self):
        """Test 35 regular + 10 holiday hours produce no overtime."""
        summary = calculate_weekly_labor_cost(
            [
                {"personnel_id": "A", "hours": 35, "hourly_rate": 10},
                {"personnel_id": "A", "hours": 10, "hourly_rate": 10, "is_holiday": True},
            ],
            weekly_threshold=40,
        )

        worker = summary.workers[0]
        assert worker.regular_hours == Decimal("35")
        assert worker.overtime_hours == Decimal("0")
        assert worker.holiday_hours == Decimal("10")
        assert worker.total_hours == Decimal("45")

    def test_default_holiday_multiplier(self):
        """Test that holiday hours are paid at 2x by default."""
        summary = calculate_weekly_labor_cost(
            [{"personnel_id": "A", "hours": 8, "hourly_rate": 25, "is_holiday": True}]
        )

        assert DEFAULT_HOLIDAY_MULTIPLIER == Decimal("2.0")
        assert summary.total_cost == Decimal("400")

    def test_first_non_zero_rate_wins(self):
        """Test that the first non-zero rate in input order is used."""
        summary = calculate_weekly_labor_cost(
            [
                {"personnel_id": "A", "hours": 10, "hourly_rate": 0},
                {"personnel_id": "A", "hours": 10, "hourly_rate": 30},
                {"personnel_id": "A", "hours": 10, "hourly_rate": 50},
            ]
        )

        assert summary.workers[0].hourly_rate == Decimal("30")
        assert summary.total_cost == Decimal("900")

    def test_negative_rate_does_not_replace_zero(self):
        """Test that only a positive rate replaces a zero rate."""
        summary = calculate_weekly_labor_cost(
            [
                {"personnel_id": "A", "hours": 10, "hourly_rate": 0},
                {"personnel_id": "A", "hours": 10, "hourly_rate": -15},
                {"personnel_id": "A", "hours": 10, "hourly_rate": 25},
            ]
        )

        assert summary.workers[0].hourly_rate == Decimal("25")

    def test_zero_entry_rate_not_replaced_by_worker_rate(self):
        """Test that an explicit zero entry rate is kept over the worker's rate."""
        summary = calculate_weekly_labor_cost(
            [
                {
                    "personnel_id": "A",
                    "hours": 10,
                    "hourly_rate": 0,
                    "personnel_hourly_rate": 18,
                }
            ]
        )

        assert summary.workers[0].hourly_rate == Decimal("0")
        assert summary.total_cost == Decimal("0")

    def test_personnel_rate_fallback(self):
        """Test that the worker's current rate is used when the entry has none."""
        summary = calculate_weekly_labor_cost(
            [{"personnel_id": "A", "hours": 10, "personnel_hourly_rate": 18}]
        )

        assert summary.workers[0].hourly_rate == Decimal("18")
        assert summary.total_cost == Decimal("180")

    def test_worker_without_rate_costs_zero(self):
        """Test that a worker without any rate is costed at zero."""
        summary = calculate_weekly_labor_cost([{"user_id": "u1", "hours": 50}])

        worker = summary.workers[0]
        assert worker.hourly_rate == Decimal("0")
        assert worker.overtime_hours == Decimal("10")
        assert worker.total_amount == Decimal("0")

    def test_summary_totals(self, sample_entries):
        """Test that summary totals add up over workers."""
        summary = calculate_weekly_labor_cost(sample_entries)

        assert [w.worker_key for w in summary.workers] == ["A", "B"]
        assert summary.regular_hours == Decimal("60")
        assert summary.overtime_hours == Decimal("5")
        assert summary.holiday_hours == Decimal("8")
        assert summary.total_hours == Decimal("73")
        # A: 1270, B: 20 * 30 = 600
        assert summary.total_cost == Decimal("1870")
        assert summary.workers[0].worker_name == "Ana Ruiz"

    def test_empty_input(self):
        """Test that no entries produce an empty zero summary."""
        summary = calculate_weekly_labor_cost([])

        assert summary.workers == []
        assert summary.total_cost == Decimal("0")

    def test_nan_rate_propagates_to_total(self):
        """Test that a NaN rate makes the cost NaN instead of raising."""
        summary = calculate_weekly_labor_cost(
            [{"personnel_id": "A", "hours": 10, "hourly_rate": "NaN"}]
        )

        assert summary.total_cost.is_nan()


class TestIsSupervisionTitle:
    """Tests for supervision title detection."""

    @pytest.mark.parametrize(
        "title,expected",
        [
            ("Superintendent", True),
            ("Site Supervisor", True),
            ("Foreman", True),
            ("general foreman", True),
            ("Laborer", False),
            ("", False),
            (None, False),
        ],
    )
    def test_titles(self, title, expected):
        """Test keyword matching on job titles."""
        assert is_supervision_title(title) is expected


class TestCalculateLaborAllocation:
    """Tests for project labor allocation."""

    @pytest.fixture
    def project_entries(self):
        """Entries of one project with a supervisor and two field workers."""
        return [
            {
                "personnel_id": "S",
                "personnel_name": "Sam Diaz",
                "personnel_title": "Superintendent",
                "hours": 20,
                "hourly_rate": 50,
            },
            {
                "personnel_id": "F1",
                "personnel_name": "Fay Lin",
                "personnel_title": "Carpenter",
                "hours": 44,
                "hourly_rate": 30,
            },
            {
                "personnel_id": "F2",
                "personnel_title": "Laborer",
                "hours": 10,
                "hourly_rate": 20,
            },
            {
                "personnel_id": "F2",
                "hours": 99,
                "hourly_rate": 20,
                "is_overhead": True,
            },
        ]

    def test_overhead_is_excluded(self, project_entries):
        """Test that overhead hours are not allocated to the project."""
        summary = calculate_labor_allocation(project_entries)

        f2 = next(a for a in summary.allocations if a.worker_key == "F2")
        assert f2.total_hours == Decimal("10")

    def test_sorted_by_hours(self, project_entries):
        """Test that allocations are ordered largest first."""
        summary = calculate_labor_allocation(project_entries)

        assert [a.worker_key for a in summary.allocations] == ["F1", "S", "F2"]

    def test_costs_and_split(self, project_entries):
        """Test overtime-aware cost estimates and the supervision split."""
        summary = calculate_labor_allocation(project_entries)
        by_key = {a.worker_key: a for a in summary.allocations}

        # 40 * 30 + 4 * 30 * 1.5
        assert by_key["F1"].estimated_cost == Decimal("1380")
        assert by_key["F1"].overtime_hours == Decimal("4")
        assert by_key["S"].is_supervision is True
        assert by_key["F2"].worker_name == "F2"

        assert summary.supervision_hours == Decimal("20")
        assert summary.supervision_cost == Decimal("1000")
        assert summary.field_hours == Decimal("54")
        assert summary.field_cost == Decimal("1580")
        assert summary.total_cost == Decimal("2580")

    def test_empty_input(self):
        """Test that no entries produce an empty allocation."""
        summary = calculate_labor_allocation([])

        assert summary.allocations == []
        assert summary.total_hours == Decimal("0")
