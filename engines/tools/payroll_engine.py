"""
Payroll Engine MCP Tools

Punch parsing, employee pay, payroll runs, and labor cost exposed as MCP tools.
"""

from datetime import date

from fastmcp import FastMCP

from engines.schemas.employee import Employee
from engines.schemas.labor_cost import Shift
from engines.schemas.overtime import OvertimeRules
from engines.schemas.payroll import EmployeePayRequest, ManualPayment
from engines.schemas.time_punch import TimePunch
from engines.services.labor_costs import (
    calculate_actual_labor_cost,
    calculate_scheduled_labor_cost,
)
from engines.services.pay_calculator import (
    calculate_employee_pay_for_request,
    calculate_payroll_period,
)
from engines.services.work_period_parser import group_punches_by_employee, parse_work_periods

# Initialize MCP server (will be started from server.py)
mcp = FastMCP(
    "Labor & Payroll Engines",
    instructions="""
Restaurant labor and payroll calculation engines.

1. **Payroll Engine** (parse_time_punches, calculate_pay, calculate_payroll, calculate_labor_cost)
   - Pairs raw clock punches into work/break periods and reports incomplete shifts
   - Applies daily and weekly overtime rules per workweek
   - Pays hourly, salary, daily-rate, and contractor staff from one shared formula
   - Day-bucketed labor cost that reconciles with payroll to the cent

2. **Tip Engine** (split_tips, rebalance_tip_shares, allocate_percentage_pools)
   - Even, hours-weighted, and role-weighted splits that always sum to the pool
   - Manual rebalancing with proportional redistribution
   - Percentage contribution pools with refunds for empty pools

All money is integer cents.
""",
)


def _rules(overtime_rules: dict | None) -> OvertimeRules:
    return OvertimeRules(**(overtime_rules or {}))


@mcp.tool()
async def parse_time_punches(punches: list[dict]) -> dict:
    """
    Pair one employee's clock punches into work and break periods.

    Duplicate taps within 5 minutes are collapsed (the later punch wins).
    Missing clock-ins/outs and spans over 16 hours are reported as
    incomplete shifts instead of being paid.

    Args:
        punches: TimePunch objects (id, employee_id, punch_type, punch_time)

    Returns:
        Dictionary with periods, incomplete_shifts, and total worked hours
    """
    parsed = parse_work_periods(TimePunch(**p) for p in punches)
    return {
        "periods": [p.model_dump(mode="json") for p in parsed.periods],
        "incomplete_shifts": [s.model_dump(mode="json") for s in parsed.incomplete_shifts],
        "total_hours": sum(p.hours for p in parsed.work_periods),
    }


@mcp.tool()
async def calculate_pay(
    employee: dict,
    punches: list[dict],
    period_start: str,
    period_end: str,
    tips_cents: int = 0,
    tips_paid_out_cents: int = 0,
    manual_payments: list[dict] | None = None,
    overtime_rules: dict | None = None,
) -> dict:
    """
    Calculate one employee's pay for a period.

    All money is integer cents.

    Args:
        employee: Employee record (compensation_type, hourly_rate, ...)
        punches: The employee's time punches
        period_start: Period start date (YYYY-MM-DD)
        period_end: Period end date (YYYY-MM-DD), inclusive
        tips_cents: Tips earned in the period
        tips_paid_out_cents: Tips already paid out in cash
        manual_payments: One-off payments (id, date, amount)
        overtime_rules: Optional OvertimeRules overrides

    Returns:
        EmployeePayResult as a dictionary

    Example:
        $10.00/hr, 08:00:00 to 14:09:43 -> 6.161944 hours -> regular_pay 6162
    """
    request = EmployeePayRequest(
        employee=Employee(**employee),
        punches=[TimePunch(**p) for p in punches],
        tips_cents=tips_cents,
        period_start=date.fromisoformat(period_start),
        period_end=date.fromisoformat(period_end),
        manual_payments=[ManualPayment(**m) for m in manual_payments or []],
        tips_paid_out_cents=tips_paid_out_cents,
    )
    result = calculate_employee_pay_for_request(request, rules=_rules(overtime_rules))
    return result.model_dump(mode="json")


@mcp.tool()
async def calculate_payroll(
    period_start: str,
    period_end: str,
    employees: list[dict],
    punches: list[dict],
    tips_per_employee: dict[str, int] | None = None,
    tip_payouts_per_employee: dict[str, int] | None = None,
    overtime_rules: dict | None = None,
) -> dict:
    """
    Run payroll for every employee over a period.

    Args:
        period_start: Period start date (YYYY-MM-DD)
        period_end: Period end date (YYYY-MM-DD), inclusive
        employees: Employee records
        punches: All punches for the restaurant; grouped by employee_id
        tips_per_employee: Tips earned per employee id (cents)
        tip_payouts_per_employee: Cash tip payouts per employee id (cents)
        overtime_rules: Optional OvertimeRules overrides

    Returns:
        PayrollPeriod as a dictionary
    """
    grouped = group_punches_by_employee(TimePunch(**p) for p in punches)
    period = calculate_payroll_period(
        date.fromisoformat(period_start),
        date.fromisoformat(period_end),
        [Employee(**e) for e in employees],
        grouped,
        tips_per_employee or {},
        tip_payouts_per_employee=tip_payouts_per_employee,
        rules=_rules(overtime_rules),
    )
    return period.model_dump(mode="json")


@mcp.tool()
async def calculate_labor_cost(
    period_start: str,
    period_end: str,
    employees: list[dict],
    punches: list[dict] | None = None,
    shifts: list[dict] | None = None,
    overtime_rules: dict | None = None,
) -> dict:
    """
    Day-by-day labor cost for the dashboard.

    Pass punches for actual cost or shifts for scheduled cost. Totals
    match the payroll run for the same inputs to the cent.

    Args:
        period_start: Range start date (YYYY-MM-DD)
        period_end: Range end date (YYYY-MM-DD), inclusive
        employees: Employee records
        punches: Time punches (actual cost)
        shifts: Scheduled shifts (scheduled cost)
        overtime_rules: Optional OvertimeRules overrides

    Returns:
        Breakdown by compensation type, daily costs, and incomplete shifts
    """
    start = date.fromisoformat(period_start)
    end = date.fromisoformat(period_end)
    staff = [Employee(**e) for e in employees]

    if shifts is not None:
        result = calculate_scheduled_labor_cost(
            [Shift(**s) for s in shifts], staff, start, end, rules=_rules(overtime_rules)
        )
    else:
        result = calculate_actual_labor_cost(
            staff, [TimePunch(**p) for p in punches or []], start, end, rules=_rules(overtime_rules)
        )
    return result.model_dump(mode="json")
