"""
Compensation Calculator

Per-day allocation of salary and contractor pay, employment windows,
and dated compensation changes.

Salaried and contractor staff are not punch-driven: their cost accrues
for every calendar day they are employed. Per-day amounts are kept
unrounded while summing a range and rounded once at the end, so a
weekly salary over its full week comes out exactly.
"""

import logging
from collections.abc import Iterable, Iterator
from datetime import date, timedelta
from decimal import Decimal

from engines.schemas.employee import ContractorType, Employee, PayPeriodType
from engines.services.money import round_half_up

logger = logging.getLogger(__name__)

# Average calendar days covered by each salary period
DAYS_PER_PAY_PERIOD: dict[str, Decimal] = {
    "weekly": Decimal("7"),
    "bi_weekly": Decimal("14"),
    "semi_monthly": Decimal("15.22"),  # 365 / 24
    "monthly": Decimal("30.44"),  # 365 / 12
}

DAYS_PER_CONTRACTOR_INTERVAL: dict[str, Decimal] = {
    "weekly": Decimal("7"),
    "bi_weekly": Decimal("14"),
    "monthly": Decimal("30.44"),
}

PERIODS_PER_YEAR = {
    "weekly": 52,
    "bi_weekly": 26,
    "semi_monthly": 24,
    "monthly": 12,
}

# Bi-weekly periods are counted from this Monday
BI_WEEKLY_ANCHOR = date(2024, 1, 1)

_AMOUNT_FIELD = {
    "hourly": "hourly_rate",
    "salary": "salary_amount",
    "contractor": "contractor_payment_amount",
    "daily_rate": "daily_rate_amount",
}


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Every calendar day from start to end, inclusive."""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def _daily_salary(salary_amount: int | None, pay_period_type: PayPeriodType | None) -> Decimal:
    if not salary_amount or pay_period_type is None:
        return Decimal("0")
    return Decimal(salary_amount) / DAYS_PER_PAY_PERIOD[pay_period_type]


def _daily_contractor(amount: int | None, contractor_type: ContractorType | None) -> Decimal:
    # Per-job contractors are paid only through manual payments
    if not amount or contractor_type is None or contractor_type == "per_job":
        return Decimal("0")
    return Decimal(amount) / DAYS_PER_CONTRACTOR_INTERVAL[contractor_type]


def calculate_daily_salary_allocation(salary_amount: int, pay_period_type: PayPeriodType) -> int:
    """
    Daily cost of a salary, in cents.

    Example: $1,000 weekly -> 14286 cents per day.
    """
    return round_half_up(_daily_salary(salary_amount, pay_period_type))


def calculate_daily_contractor_allocation(amount: int, contractor_type: ContractorType) -> int:
    """Daily cost of a contractor payment in cents; 0 for per-job."""
    return round_half_up(_daily_contractor(amount, contractor_type))


def calculate_effective_hourly_rate(
    salary_amount: int,
    pay_period_type: PayPeriodType,
    hours_per_week: float = 40,
) -> int:
    """Salary expressed as an hourly rate in cents, for reporting."""
    if hours_per_week <= 0:
        return 0
    annual = Decimal(salary_amount) * PERIODS_PER_YEAR[pay_period_type]
    return round_half_up(annual / (Decimal(str(hours_per_week)) * 52))


def resolve_compensation_for_date(employee: Employee, day: date) -> Employee:
    """
    Employee as paid on a given day.

    The latest compensation change effective on or before the day wins.
    Without an applicable change the employee record is used as is.
    """
    applicable = [c for c in employee.compensation_history if c.effective_date <= day]
    if not applicable:
        return employee

    change = max(applicable, key=lambda c: c.effective_date)
    update = {
        "compensation_type": change.compensation_type,
        _AMOUNT_FIELD[change.compensation_type]: change.amount_cents,
    }
    if change.pay_period_type is not None:
        update["pay_period_type"] = change.pay_period_type
    if change.contractor_type is not None:
        update["contractor_type"] = change.contractor_type
    return employee.model_copy(update=update)


def compensation_by_day(employee: Employee, days: Iterable[date]) -> dict[date, Employee]:
    return {day: resolve_compensation_for_date(employee, day) for day in days}


def is_employed_on(employee: Employee, day: date) -> bool:
    """
    Whether the day is inside the employment window.

    The termination date itself is still an employed day. A terminated
    employee with no termination date on file accrues nothing.
    """
    if employee.hire_date and day < employee.hire_date:
        return False
    if employee.termination_date:
        return day <= employee.termination_date
    return employee.status != "terminated"


def employed_days(employee: Employee, start: date, end: date) -> list[date]:
    return [d for d in iter_dates(start, end) if is_employed_on(employee, d)]


def daily_allocations(
    employee: Employee,
    start: date,
    end: date,
    kind: str,
) -> dict[date, Decimal]:
    """
    Unrounded per-day salary or contractor accrual for employed days.

    kind is "salary" or "contractor"; days paid under another
    compensation type accrue nothing.
    """
    allocations: dict[date, Decimal] = {}
    for day in employed_days(employee, start, end):
        current = resolve_compensation_for_date(employee, day)
        if current.compensation_type != kind:
            continue
        if kind == "salary":
            amount = _daily_salary(current.salary_amount, current.pay_period_type)
        else:
            amount = _daily_contractor(current.contractor_payment_amount, current.contractor_type)
        if amount > 0:
            allocations[day] = amount
    return allocations


def _period_allocation(employee: Employee, start: date, end: date, kind: str) -> int:
    return round_half_up(sum(daily_allocations(employee, start, end, kind).values(), Decimal("0")))


def calculate_salary_for_period(employee: Employee, start: date, end: date) -> int:
    """
    Salary earned between start and end (inclusive), in cents.

    Each employed day accrues salary / days-per-period using the pay in
    effect that day; the sum is rounded once.

    Example: $700 weekly, terminated on the 3rd day of a 7-day window
    -> 30000 cents.
    """
    return _period_allocation(employee, start, end, "salary")


def calculate_contractor_for_period(employee: Employee, start: date, end: date) -> int:
    """Interval-based contractor pay between start and end, in cents."""
    return _period_allocation(employee, start, end, "contractor")


def calculate_employee_daily_cost(employee: Employee, hours_worked: float | None = None) -> int:
    """
    Cost of one day of this employee, in cents.

    Hourly staff need hours_worked; without it their day costs 0.
    """
    if employee.compensation_type == "hourly":
        if hours_worked is None:
            logger.debug("No hours given for hourly employee %s", employee.id)
            return 0
        return round_half_up(Decimal(employee.hourly_rate) * Decimal(str(hours_worked)))
    if employee.compensation_type == "salary":
        return round_half_up(_daily_salary(employee.salary_amount, employee.pay_period_type))
    if employee.compensation_type == "contractor":
        return round_half_up(
            _daily_contractor(employee.contractor_payment_amount, employee.contractor_type)
        )
    return employee.daily_rate_amount or 0


def get_pay_period_dates(
    day: date,
    pay_period_type: PayPeriodType,
    week_start_day: int = 6,
) -> tuple[date, date]:
    """
    Start and end of the pay period containing day.

    week_start_day uses date.weekday() numbering (Monday=0, Sunday=6) and
    only applies to weekly periods. Bi-weekly periods count from a fixed
    anchor Monday; semi-monthly periods are the 1st-15th and 16th-end.
    """
    if pay_period_type == "weekly":
        start = day - timedelta(days=(day.weekday() - week_start_day) % 7)
        return start, start + timedelta(days=6)

    if pay_period_type == "bi_weekly":
        start = day - timedelta(days=(day - BI_WEEKLY_ANCHOR).days % 14)
        return start, start + timedelta(days=13)

    month_start = day.replace(day=1)
    next_month = (month_start + timedelta(days=32)).replace(day=1)
    month_end = next_month - timedelta(days=1)

    if pay_period_type == "semi_monthly":
        if day.day <= 15:
            return month_start, day.replace(day=15)
        return day.replace(day=16), month_end

    return month_start, month_end


def get_days_in_pay_period(start: date, end: date) -> int:
    """Number of days in an inclusive date range."""
    return abs((end - start).days) + 1


def validate_compensation_fields(employee: Employee) -> list[str]:
    """Validation messages for missing compensation data (empty when valid)."""
    errors: list[str] = []

    if employee.compensation_type == "hourly":
        if employee.hourly_rate <= 0:
            errors.append("Hourly rate must be greater than 0")
    elif employee.compensation_type == "salary":
        if not employee.salary_amount:
            errors.append("Salary amount must be greater than 0")
        if not employee.pay_period_type:
            errors.append("Pay period type is required for salaried employees")
    elif employee.compensation_type == "contractor":
        if not employee.contractor_payment_amount and employee.contractor_type != "per_job":
            errors.append("Payment amount must be greater than 0")
        if not employee.contractor_type:
            errors.append("Payment interval is required for contractors")
    elif employee.compensation_type == "daily_rate":
        if not employee.daily_rate_amount:
            errors.append("Daily rate must be greater than 0")

    return errors


def is_employee_compensation_valid(employee: Employee) -> bool:
    return not validate_compensation_fields(employee)


def requires_time_punches(employee: Employee) -> bool:
    """Hourly and daily-rate pay depend on punches; salary and contractor pay do not."""
    return employee.compensation_type in ("hourly", "daily_rate")
