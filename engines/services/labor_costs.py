"""
Labor Cost Aggregator

Day-bucketed labor cost for a restaurant over a date range, used by the
dashboard (actual and scheduled) and reconciled against payroll.

Every employee's cost comes from calculate_employee_pay, the same engine
the payroll run uses. This module only decides which day each cent lands
on, and it always hands out exactly the employee's total.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime, timedelta
from decimal import Decimal

from engines.schemas.employee import Employee
from engines.schemas.labor_cost import DailyLaborCost, LaborCostResult, Shift
from engines.schemas.overtime import OvertimeRules
from engines.schemas.time_punch import TimePunch
from engines.services.compensation import (
    compensation_by_day,
    daily_allocations,
    employed_days,
    iter_dates,
)
from engines.services.money import round_half_up
from engines.services.overtime_rules import WorkweekStart
from engines.services.pay_calculator import (
    calculate_employee_pay,
    hours_by_compensation_type,
    to_period_date,
    worked_hours_by_day,
)
from engines.services.tip_allocation import split_by_weights
from engines.services.work_period_parser import group_punches_by_employee

logger = logging.getLogger(__name__)


def generate_date_range(start: date | datetime, end: date | datetime) -> list[date]:
    """Every day from start to end, inclusive."""
    return list(iter_dates(to_period_date(start), to_period_date(end)))


def _spread(total: int, weights: Mapping[date, float | Decimal]) -> dict[date, int]:
    days = sorted(weights)
    return dict(zip(days, split_by_weights(total, [weights[d] for d in days])))


def calculate_actual_labor_cost(
    employees: Sequence[Employee],
    punches: Iterable[TimePunch],
    start: date | datetime,
    end: date | datetime,
    *,
    rules: OvertimeRules | None = None,
    workweek_start: WorkweekStart = "sunday",
    duplicate_window: timedelta | None = None,
    max_shift_hours: float | None = None,
) -> LaborCostResult:
    """
    Actual labor cost from punches for [start, end].

    Day attribution:
    - hourly pay (including overtime) is spread over worked days by hours
    - daily-rate pay lands on each worked day
    - salary and contractor pay is spread over employed days by accrual

    Salaried staff with no punches still get their allocation. Every day
    in the range is present, zero-valued if nothing was spent.
    """
    start_date = to_period_date(start)
    end_date = to_period_date(end)
    grouped = group_punches_by_employee(punches)

    buckets = {d: DailyLaborCost(date=d) for d in iter_dates(start_date, end_date)}
    result = LaborCostResult()
    breakdown = result.breakdown

    for employee in employees:
        employee_punches = grouped.get(employee.id, [])
        pay = calculate_employee_pay(
            employee,
            employee_punches,
            period_start=start_date,
            period_end=end_date,
            rules=rules,
            workweek_start=workweek_start,
            duplicate_window=duplicate_window,
            max_shift_hours=max_shift_hours,
        )
        daily_hours, _ = worked_hours_by_day(
            employee_punches, start_date, end_date, duplicate_window, max_shift_hours
        )
        result.incomplete_shifts.extend(pay.incomplete_shifts)

        for day, hours in daily_hours.items():
            buckets[day].hours_worked += hours

        by_type = hours_by_compensation_type(employee, daily_hours)

        hourly_days = by_type.get("hourly", {})
        if hourly_days:
            hourly_cost = pay.regular_pay + pay.overtime_pay
            for day, amount in _spread(hourly_cost, hourly_days).items():
                buckets[day].hourly_cost += amount
            breakdown.hourly.cost += hourly_cost
            breakdown.hourly.hours += sum(hourly_days.values())

        daily_rate_days = by_type.get("daily_rate", {})
        if daily_rate_days:
            for day, current in compensation_by_day(employee, daily_rate_days).items():
                buckets[day].daily_rate_cost += current.daily_rate_amount or 0
            breakdown.daily_rate.cost += pay.daily_rate_pay
            breakdown.daily_rate.days += len(daily_rate_days)
            if pay.daily_rate_pay:
                breakdown.daily_rate.employees += 1

        for kind in ("salary", "contractor"):
            amount = pay.salary_pay if kind == "salary" else pay.contractor_pay
            if not amount:
                continue
            accrual = daily_allocations(employee, start_date, end_date, kind)
            for day, cents in _spread(amount, accrual).items():
                if kind == "salary":
                    buckets[day].salary_cost += cents
                else:
                    buckets[day].contractor_cost += cents
            bucket = breakdown.salary if kind == "salary" else breakdown.contractor
            bucket.cost += amount
            bucket.days += len(accrual)
            bucket.employees += 1

    for bucket in buckets.values():
        bucket.total_cost = (
            bucket.hourly_cost + bucket.salary_cost + bucket.contractor_cost + bucket.daily_rate_cost
        )

    breakdown.total = (
        breakdown.hourly.cost
        + breakdown.salary.cost
        + breakdown.contractor.cost
        + breakdown.daily_rate.cost
    )
    result.daily_costs = list(buckets.values())

    logger.debug(
        "Labor cost %s..%s: %d cents across %d employees",
        start_date,
        end_date,
        breakdown.total,
        len(employees),
    )
    return result


def shifts_to_punches(shifts: Iterable[Shift]) -> list[TimePunch]:
    """
    Represent scheduled shifts as clock punches.

    The unpaid break is taken off the end of the shift, so a shift counts
    on the day it starts with (end - start) - break hours.
    """
    punches: list[TimePunch] = []
    for shift in shifts:
        clock_out = shift.start_time + timedelta(hours=shift.scheduled_hours)
        for punch_type, at in (("clock_in", shift.start_time), ("clock_out", clock_out)):
            punches.append(
                TimePunch(
                    id=f"{shift.id}:{punch_type}",
                    employee_id=shift.employee_id,
                    restaurant_id=shift.restaurant_id,
                    punch_type=punch_type,
                    punch_time=at,
                    shift_id=shift.id,
                )
            )
    return punches


def calculate_scheduled_labor_cost(
    shifts: Iterable[Shift],
    employees: Sequence[Employee],
    start: date | datetime,
    end: date | datetime,
    *,
    rules: OvertimeRules | None = None,
    workweek_start: WorkweekStart = "sunday",
    duplicate_window: timedelta | None = None,
    max_shift_hours: float | None = None,
) -> LaborCostResult:
    """
    Projected labor cost from the schedule.

    Shifts go through the same pay engine as real punches, so scheduled
    and actual figures are directly comparable.
    """
    return calculate_actual_labor_cost(
        employees,
        shifts_to_punches(shifts),
        start,
        end,
        rules=rules,
        workweek_start=workweek_start,
        duplicate_window=duplicate_window,
        max_shift_hours=max_shift_hours,
    )


def calculate_employee_period_cost(
    employee: Employee,
    start: date,
    end: date,
    hours_per_day: Mapping[date, float] | None = None,
) -> int:
    """
    Straight-time cost of one employee for a range, in cents.

    A quick estimate for planning screens; overtime is not applied.
    """
    hours_per_day = hours_per_day or {}
    in_range = {d: h for d, h in hours_per_day.items() if start <= d <= end and h > 0}

    employed = set(employed_days(employee, start, end))

    total = Decimal("0")
    for day, current in compensation_by_day(employee, in_range).items():
        if current.compensation_type == "hourly":
            total += Decimal(current.hourly_rate) * Decimal(str(in_range[day]))
        elif current.compensation_type == "daily_rate" and day in employed:
            total += current.daily_rate_amount or 0
    for kind in ("salary", "contractor"):
        total += sum(daily_allocations(employee, start, end, kind).values(), Decimal("0"))
    return round_half_up(total)
