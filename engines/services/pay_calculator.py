"""
Pay Calculator

Computes a single employee's pay for a period from punches, compensation,
tips, tip payouts, and manual payments.

This is the only place labor cost formulas live. The payroll run and the
dashboard labor views both call calculate_employee_pay, so the two can
never disagree by a cent.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime, timedelta
from decimal import Decimal

from engines.schemas.employee import CompensationType, Employee
from engines.schemas.overtime import OvertimeAdjustment, OvertimeRules, WeeklyOvertimeResult
from engines.schemas.payroll import (
    EmployeePayRequest,
    EmployeePayResult,
    ManualPayment,
    PayrollPeriod,
)
from engines.schemas.time_punch import IncompleteShift, TimePunch, as_utc
from engines.services.compensation import (
    calculate_contractor_for_period,
    calculate_salary_for_period,
    compensation_by_day,
)
from engines.services.money import round_half_up
from engines.services.overtime_rules import WorkweekStart, calculate_period_overtime
from engines.services.work_period_parser import daily_work_hours, parse_work_periods

logger = logging.getLogger(__name__)


def to_period_date(value: date | datetime | None) -> date | None:
    """Period bounds may be dates or timestamps; timestamps use their UTC date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return as_utc(value).date()
    return value


def _in_window(day: date, start: date | None, end: date | None) -> bool:
    if start and day < start:
        return False
    if end and day > end:
        return False
    return True


def worked_hours_by_day(
    punches: Iterable[TimePunch],
    period_start: date | datetime | None = None,
    period_end: date | datetime | None = None,
    duplicate_window: timedelta | None = None,
    max_shift_hours: float | None = None,
) -> tuple[dict[date, float], list[IncompleteShift]]:
    """
    Per-day worked hours inside a window, plus anomalies in the window.

    Punches are parsed as a whole before windowing so a shift crossing the
    window edge is not cut in half. A work period belongs to the UTC date
    it starts on.
    """
    start = to_period_date(period_start)
    end = to_period_date(period_end)

    parsed = parse_work_periods(punches, duplicate_window, max_shift_hours)
    periods = [p for p in parsed.work_periods if _in_window(p.start_time.date(), start, end)]
    incomplete = [
        s for s in parsed.incomplete_shifts if _in_window(s.punch_time.date(), start, end)
    ]
    return daily_work_hours(periods), incomplete


def hours_by_compensation_type(
    employee: Employee,
    daily_hours: Mapping[date, float],
) -> dict[CompensationType, dict[date, float]]:
    """Group worked days by the compensation type in effect on each day."""
    grouped: dict[CompensationType, dict[date, float]] = {}
    for day, current in compensation_by_day(employee, sorted(daily_hours)).items():
        grouped.setdefault(current.compensation_type, {})[day] = daily_hours[day]
    return grouped


def blended_hourly_rate(employee: Employee, hourly_days: Mapping[date, float]) -> Decimal:
    """
    Hourly rate for a set of worked days, in cents.

    One rate in effect across the days is used as is. After a mid-period
    rate change the rate is the hours-weighted average of each day's rate.
    """
    resolved = compensation_by_day(employee, hourly_days)
    rates = {day: current.hourly_rate for day, current in resolved.items()}
    if len(set(rates.values())) <= 1:
        return Decimal(next(iter(rates.values()), employee.hourly_rate))

    total_hours = sum(Decimal(str(h)) for h in hourly_days.values())
    if total_hours <= 0:
        return Decimal("0")
    earned = sum(Decimal(str(h)) * rates[day] for day, h in hourly_days.items())
    return earned / total_hours


def _overtime_pay(rate: Decimal, hours: WeeklyOvertimeResult, rules: OvertimeRules) -> int:
    weighted = (
        Decimal(str(hours.weekly_overtime_hours)) * Decimal(str(rules.weekly_ot_multiplier))
        + Decimal(str(hours.daily_overtime_hours)) * Decimal(str(rules.daily_ot_multiplier))
        + Decimal(str(hours.double_time_hours)) * Decimal(str(rules.daily_double_multiplier))
    )
    return round_half_up(rate * weighted)


def _pays_by_period(employee: Employee) -> bool:
    kinds = {employee.compensation_type}
    kinds.update(c.compensation_type for c in employee.compensation_history)
    return bool(kinds & {"salary", "contractor"})


def calculate_employee_pay(
    employee: Employee,
    punches: Iterable[TimePunch],
    tips_cents: int = 0,
    period_start: date | datetime | None = None,
    period_end: date | datetime | None = None,
    manual_payments: Sequence[ManualPayment] | None = None,
    tips_paid_out_cents: int | None = None,
    *,
    rules: OvertimeRules | None = None,
    adjustments: Iterable[OvertimeAdjustment] = (),
    workweek_start: WorkweekStart = "sunday",
    duplicate_window: timedelta | None = None,
    max_shift_hours: float | None = None,
) -> EmployeePayResult:
    """
    Calculate one employee's pay for a period.

    Every worked day is paid under the compensation in effect that day,
    so an employee who changes type mid-period is paid both ways.

    Formula by compensation type:
    - hourly: regular hours x rate, plus overtime at the rule multipliers.
      Overtime is evaluated per workweek over the hourly days only.
    - daily_rate: one daily amount per calendar day with any valid work
      period, however long
    - salary: salary accrued for each employed day in the window
    - contractor: like salary for interval contractors; per-job
      contractors are paid only through manual payments

    Manual payments in the window are always added on top. Tips already
    paid out in cash are subtracted from what is owed, never below zero:
    total_pay = gross_pay + max(0, tips - tips_paid_out).

    Salary and contractor pay need both window bounds; without them only
    punch-driven pay is calculated.
    """
    rules = rules or OvertimeRules()
    start = to_period_date(period_start)
    end = to_period_date(period_end)

    daily_hours, incomplete = worked_hours_by_day(
        punches, start, end, duplicate_window, max_shift_hours
    )
    total_hours = sum(daily_hours.values())

    result = EmployeePayResult(
        employee_id=employee.id,
        employee_name=employee.name,
        compensation_type=employee.compensation_type,
        regular_hours=total_hours,
        days_worked=len(daily_hours),
        incomplete_shifts=incomplete,
    )

    # Each worked day is paid under the compensation in effect that day
    by_type = hours_by_compensation_type(employee, daily_hours)

    hourly_days = by_type.get("hourly", {})
    if hourly_days:
        rate = blended_hourly_rate(employee, hourly_days)
        hours = calculate_period_overtime(hourly_days, rules, workweek_start, adjustments)
        other_hours = sum(
            h for kind, days in by_type.items() if kind != "hourly" for h in days.values()
        )
        result.regular_hours = hours.regular_hours + other_hours
        result.overtime_hours = hours.overtime_hours
        result.double_time_hours = hours.double_time_hours
        result.regular_pay = round_half_up(rate * Decimal(str(hours.regular_hours)))
        result.overtime_pay = _overtime_pay(rate, hours, rules)

    daily_rate_days = by_type.get("daily_rate", {})
    result.daily_rate_pay = sum(
        current.daily_rate_amount or 0
        for current in compensation_by_day(employee, daily_rate_days).values()
    )

    if start is None or end is None:
        if _pays_by_period(employee):
            logger.warning(
                "No pay window for %s employee %s; period pay not allocated",
                employee.compensation_type,
                employee.id,
            )
    else:
        result.salary_pay = calculate_salary_for_period(employee, start, end)
        result.contractor_pay = calculate_contractor_for_period(employee, start, end)

    # Manual payments
    payments = [p for p in (manual_payments or []) if _in_window(p.date, start, end)]
    result.manual_payments = payments
    result.manual_payments_total = sum(p.amount for p in payments)

    # Tips
    tips = max(0, tips_cents)
    paid_out = max(0, tips_paid_out_cents or 0)
    result.total_tips = tips
    result.tips_paid_out = paid_out
    result.tips_owed = max(0, tips - paid_out)

    result.gross_pay = result.labor_cost + result.manual_payments_total
    result.total_pay = result.gross_pay + result.tips_owed

    if incomplete:
        logger.info(
            "Employee %s has %d incomplete shifts in period", employee.id, len(incomplete)
        )

    return result


def calculate_employee_pay_for_request(
    request: EmployeePayRequest,
    rules: OvertimeRules | None = None,
    workweek_start: WorkweekStart = "sunday",
    duplicate_window: timedelta | None = None,
    max_shift_hours: float | None = None,
) -> EmployeePayResult:
    return calculate_employee_pay(
        request.employee,
        request.punches,
        request.tips_cents,
        request.period_start,
        request.period_end,
        request.manual_payments,
        request.tips_paid_out_cents,
        rules=rules,
        adjustments=request.adjustments,
        workweek_start=workweek_start,
        duplicate_window=duplicate_window,
        max_shift_hours=max_shift_hours,
    )


def calculate_payroll_period(
    start: date | datetime,
    end: date | datetime,
    employees: Sequence[Employee],
    punches_per_employee: Mapping[str, Sequence[TimePunch]],
    tips_per_employee: Mapping[str, int],
    manual_payments_per_employee: Mapping[str, Sequence[ManualPayment]] | None = None,
    tip_payouts_per_employee: Mapping[str, int] | None = None,
    *,
    rules: OvertimeRules | None = None,
    workweek_start: WorkweekStart = "sunday",
    duplicate_window: timedelta | None = None,
    max_shift_hours: float | None = None,
) -> PayrollPeriod:
    """
    Pay every employee for a period and total the run.

    Every employee is included, including salaried staff with no punches.
    One employee's bad punches only show up on that employee's result.
    """
    start_date = to_period_date(start)
    end_date = to_period_date(end)
    manual_payments_per_employee = manual_payments_per_employee or {}
    tip_payouts_per_employee = tip_payouts_per_employee or {}

    results = [
        calculate_employee_pay(
            employee,
            punches_per_employee.get(employee.id, []),
            tips_per_employee.get(employee.id, 0),
            start_date,
            end_date,
            manual_payments_per_employee.get(employee.id, []),
            tip_payouts_per_employee.get(employee.id, 0),
            rules=rules,
            workweek_start=workweek_start,
            duplicate_window=duplicate_window,
            max_shift_hours=max_shift_hours,
        )
        for employee in employees
    ]

    period = PayrollPeriod(
        start_date=start_date,
        end_date=end_date,
        employees=results,
        total_regular_hours=sum(r.regular_hours for r in results),
        total_overtime_hours=sum(r.overtime_hours for r in results),
        total_gross_pay=sum(r.gross_pay for r in results),
        total_tips=sum(r.total_tips for r in results),
        total_tips_paid_out=sum(r.tips_paid_out for r in results),
        total_tips_owed=sum(r.tips_owed for r in results),
        total_pay=sum(r.total_pay for r in results),
        incomplete_shift_count=sum(len(r.incomplete_shifts) for r in results),
    )

    logger.info(
        "Payroll %s..%s: %d employees, gross %d cents",
        start_date,
        end_date,
        len(results),
        period.total_gross_pay,
    )
    return period
