"""
Labor Cost Aggregator Unit Tests

Day-bucketed actual and scheduled labor cost, and reconciliation with payroll.
"""

from datetime import date

import pytest

from engines.schemas.employee import CompensationChange
from engines.services.labor_costs import (
    calculate_actual_labor_cost,
    calculate_employee_period_cost,
    calculate_scheduled_labor_cost,
    generate_date_range,
    shifts_to_punches,
)
from engines.services.pay_calculator import calculate_payroll_period
from engines.services.work_period_parser import group_punches_by_employee
from tests.factories import (
    make_employee,
    make_punch,
    make_salary_employee,
    make_shift,
    make_shift_punches,
)

START = date(2024, 1, 15)
END = date(2024, 1, 21)


def by_date(result) -> dict:
    return {d.date: d for d in result.daily_costs}


class TestDateRange:
    def test_inclusive(self):
        days = generate_date_range(START, END)

        assert len(days) == 7
        assert days[0] == START
        assert days[-1] == END

    def test_single_day(self):
        assert generate_date_range(START, START) == [START]


class TestActualLaborCost:
    def test_every_day_present(self):
        result = calculate_actual_labor_cost([], [], START, END)

        assert [d.date for d in result.daily_costs] == generate_date_range(START, END)
        assert all(d.total_cost == 0 for d in result.daily_costs)
        assert result.breakdown.total == 0

    def test_hourly_fractional_hours(self, hourly_employee):
        punches = make_shift_punches("2024-01-15T09:00:00Z", "2024-01-15T15:09:43Z", "hourly-1")

        result = calculate_actual_labor_cost([hourly_employee], punches, START, END)

        day = by_date(result)[START]
        assert day.hourly_cost == 6162
        assert day.hours_worked == pytest.approx(6.161944, abs=1e-6)
        assert result.breakdown.hourly.cost == 6162
        assert result.breakdown.total == 6162
        assert result.breakdown.total_dollars == pytest.approx(61.62)

    def test_overtime_spread_over_worked_days(self, hourly_employee):
        punches = []
        for day in range(15, 20):
            punches += make_shift_punches(
                f"2024-01-{day}T08:00:00Z", f"2024-01-{day}T17:00:00Z", "hourly-1"
            )

        result = calculate_actual_labor_cost([hourly_employee], punches, START, END)

        days = by_date(result)
        assert [days[date(2024, 1, d)].hourly_cost for d in range(15, 20)] == [9500] * 5
        assert days[date(2024, 1, 20)].total_cost == 0
        assert result.breakdown.hourly.cost == 47500
        assert result.breakdown.hourly.hours == pytest.approx(45.0)

    def test_salary_spread_over_employed_days(self):
        employee = make_salary_employee(
            status="terminated", termination_date=date(2024, 1, 17)
        )

        result = calculate_actual_labor_cost([employee], [], START, END)

        days = by_date(result)
        assert [days[date(2024, 1, d)].salary_cost for d in range(15, 22)] == [
            10000, 10000, 10000, 0, 0, 0, 0,
        ]
        assert result.breakdown.salary.cost == 30000
        assert result.breakdown.salary.employees == 1
        assert result.breakdown.salary.days == 3

    def test_salary_daily_costs_sum_to_period_pay(self):
        """$1,000/week does not divide evenly by 7; the days still add up."""
        employee = make_salary_employee(salary_amount=100000)

        result = calculate_actual_labor_cost([employee], [], START, END)

        assert sum(d.salary_cost for d in result.daily_costs) == 100000

    def test_contractor(self):
        employee = make_employee(
            id="con-1",
            compensation_type="contractor",
            contractor_payment_amount=70000,
            contractor_type="weekly",
        )

        result = calculate_actual_labor_cost([employee], [], START, END)

        assert by_date(result)[END].contractor_cost == 10000
        assert result.breakdown.contractor.cost == 70000

    def test_daily_rate_lands_on_worked_days(self):
        employee = make_employee(
            id="dr-1", compensation_type="daily_rate", daily_rate_amount=20000
        )
        punches = [
            *make_shift_punches("2024-01-16T09:00:00Z", "2024-01-16T11:00:00Z", "dr-1"),
            *make_shift_punches("2024-01-18T09:00:00Z", "2024-01-18T19:00:00Z", "dr-1"),
        ]

        result = calculate_actual_labor_cost([employee], punches, START, END)

        days = by_date(result)
        assert days[date(2024, 1, 16)].daily_rate_cost == 20000
        assert days[date(2024, 1, 17)].daily_rate_cost == 0
        assert days[date(2024, 1, 18)].daily_rate_cost == 20000
        assert result.breakdown.daily_rate.cost == 40000
        assert result.breakdown.daily_rate.days == 2

    def test_incomplete_shifts_collected(self, hourly_employee):
        punches = [make_punch("clock_in", "2024-01-16T09:00:00Z", "hourly-1")]

        result = calculate_actual_labor_cost([hourly_employee], punches, START, END)

        assert len(result.incomplete_shifts) == 1
        assert result.breakdown.total == 0

    def test_punches_for_unknown_employees_ignored(self, hourly_employee):
        punches = make_shift_punches("2024-01-15T09:00:00Z", "2024-01-15T17:00:00Z", "stranger")

        result = calculate_actual_labor_cost([hourly_employee], punches, START, END)

        assert result.breakdown.total == 0


class TestPayrollReconciliation:
    """Dashboard labor cost and payroll agree to the cent."""

    def test_totals_match(self, hourly_employee, salary_employee):
        daily = make_employee(id="dr-1", compensation_type="daily_rate", daily_rate_amount=15000)
        contractor = make_employee(
            id="con-1",
            compensation_type="contractor",
            contractor_payment_amount=100000,
            contractor_type="monthly",
        )
        employees = [hourly_employee, salary_employee, daily, contractor]
        punches = [
            *make_shift_punches("2024-01-15T09:00:00Z", "2024-01-15T15:09:43Z", "hourly-1"),
            *make_shift_punches("2024-01-16T08:00:00Z", "2024-01-16T20:30:00Z", "hourly-1"),
            *make_shift_punches("2024-01-19T22:00:00Z", "2024-01-20T07:00:00Z", "hourly-1"),
            *make_shift_punches("2024-01-17T10:00:00Z", "2024-01-17T12:00:00Z", "dr-1"),
            make_punch("clock_in", "2024-01-18T10:00:00Z", "dr-1"),
        ]

        labor = calculate_actual_labor_cost(employees, punches, START, END)
        payroll = calculate_payroll_period(
            START, END, employees, group_punches_by_employee(punches), {}
        )

        assert labor.breakdown.total == payroll.total_labor_cost
        assert sum(d.total_cost for d in labor.daily_costs) == payroll.total_labor_cost
        assert len(labor.incomplete_shifts) == payroll.incomplete_shift_count


class TestScheduledLaborCost:
    def test_shift_to_punches(self):
        shift = make_shift("2024-01-15T09:00:00Z", "2024-01-15T17:00:00Z", break_duration=30)

        punches = shifts_to_punches([shift])

        assert [p.punch_type for p in punches] == ["clock_in", "clock_out"]
        assert (punches[1].punch_time - punches[0].punch_time).total_seconds() == 7.5 * 3600
        assert punches[0].shift_id == shift.id

    def test_scheduled_cost(self):
        employee = make_employee()
        shifts = [
            make_shift(f"2024-01-{d}T09:00:00Z", f"2024-01-{d}T17:00:00Z", break_duration=30)
            for d in (15, 16, 17)
        ]

        result = calculate_scheduled_labor_cost(shifts, [employee], START, END)

        days = by_date(result)
        # 7.5 hours at $15
        assert [days[date(2024, 1, d)].hourly_cost for d in (15, 16, 17)] == [11250] * 3
        assert result.breakdown.total == 33750

    def test_scheduled_matches_actual_for_same_hours(self):
        employee = make_employee()
        shifts = [make_shift("2024-01-15T09:00:00Z", "2024-01-15T17:00:00Z")]
        punches = make_shift_punches("2024-01-15T09:00:00Z", "2024-01-15T17:00:00Z")

        scheduled = calculate_scheduled_labor_cost(shifts, [employee], START, END)
        actual = calculate_actual_labor_cost([employee], punches, START, END)

        assert scheduled.breakdown.total == actual.breakdown.total == 12000

    def test_break_longer_than_shift(self):
        shift = make_shift("2024-01-15T09:00:00Z", "2024-01-15T09:20:00Z", break_duration=30)

        assert shift.scheduled_hours == 0

        result = calculate_scheduled_labor_cost([shift], [make_employee()], START, END)

        assert result.breakdown.total == 0


class TestEmployeePeriodCost:
    def test_hourly_straight_time(self):
        hours = {START: 8, date(2024, 1, 16): 9, date(2024, 1, 30): 8}

        assert calculate_employee_period_cost(make_employee(), START, END, hours) == 25500

    def test_salary(self, salary_employee):
        assert calculate_employee_period_cost(salary_employee, START, END) == 70000

    def test_daily_rate_respects_employment(self):
        employee = make_employee(
            compensation_type="daily_rate",
            daily_rate_amount=20000,
            termination_date=date(2024, 1, 16),
        )
        hours = {START: 2, date(2024, 1, 16): 3, date(2024, 1, 17): 4}

        assert calculate_employee_period_cost(employee, START, END, hours) == 40000


class TestDashboardPayrollScenarios:
    """Both paths report the same cost for the same restated inputs."""

    def test_hourly_fractional_shift(self, hourly_employee):
        """$10/hr, 08:00:00 to 14:09:43 -> 6.161944h -> 6162 cents on both paths."""
        punches = make_shift_punches("2026-01-08T08:00:00Z", "2026-01-08T14:09:43Z", "hourly-1")
        start, end = date(2026, 1, 4), date(2026, 1, 10)

        labor = calculate_actual_labor_cost([hourly_employee], punches, start, end)
        payroll = calculate_payroll_period(
            start, end, [hourly_employee], {"hourly-1": punches}, {}
        )

        pay = payroll.employees[0]
        assert pay.regular_pay + pay.overtime_pay == 6162
        assert labor.breakdown.total == 6162
        assert by_date(labor)[date(2026, 1, 8)].total_cost == 6162

    def test_termination_truncation(self):
        """$700/week, terminated Jan 6 inside Jan 4-10 -> $300 on both paths."""
        employee = make_salary_employee(
            status="terminated", termination_date=date(2026, 1, 6)
        )
        start, end = date(2026, 1, 4), date(2026, 1, 10)

        labor = calculate_actual_labor_cost([employee], [], start, end)
        payroll = calculate_payroll_period(start, end, [employee], {}, {})

        assert payroll.employees[0].salary_pay == 30000
        assert labor.breakdown.total == 30000
        assert by_date(labor)[date(2026, 1, 7)].total_cost == 0

    def test_mid_period_switch_from_hourly_to_salary(self):
        employee = make_salary_employee(
            compensation_history=[
                CompensationChange(
                    effective_date=date(2025, 1, 1),
                    compensation_type="hourly",
                    amount_cents=1000,
                ),
                CompensationChange(
                    effective_date=date(2026, 1, 7),
                    compensation_type="salary",
                    amount_cents=70000,
                    pay_period_type="weekly",
                ),
            ],
        )
        punches = make_shift_punches("2026-01-05T09:00:00Z", "2026-01-05T17:00:00Z", "sal-1")
        start, end = date(2026, 1, 4), date(2026, 1, 10)

        labor = calculate_actual_labor_cost([employee], punches, start, end)
        payroll = calculate_payroll_period(start, end, [employee], {"sal-1": punches}, {})

        days = by_date(labor)
        assert days[date(2026, 1, 5)].hourly_cost == 8000
        assert days[date(2026, 1, 5)].salary_cost == 0
        assert [days[date(2026, 1, d)].salary_cost for d in range(7, 11)] == [10000] * 4
        assert labor.breakdown.hourly.cost == 8000
        assert labor.breakdown.salary.cost == 40000
        assert labor.breakdown.total == payroll.total_labor_cost == 48000

    def test_zero_punch_salary_included(self, hourly_employee, salary_employee):
        labor = calculate_actual_labor_cost([hourly_employee, salary_employee], [], START, END)

        assert labor.breakdown.salary.cost == 70000
        assert labor.breakdown.total == 70000
