"""
Payroll CSV Export

Renders a payroll run as CSV for accountants and payroll providers.
Tips earned, tips paid out in cash, and tips still owed are separate
columns so the owed figure can be reconciled against cash payouts.
"""

import csv
import io
import logging
import re
from datetime import datetime

from engines.schemas.payroll import PayrollPeriod
from engines.services.money import cents_to_dollars

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "Employee",
    "Compensation Type",
    "Regular Hours",
    "Overtime Hours",
    "Regular Pay",
    "Overtime Pay",
    "Salary Pay",
    "Contractor Pay",
    "Daily Rate Pay",
    "Manual Payments",
    "Gross Pay",
    "Tips Earned",
    "Tips Paid",
    "Tips Owed",
    "Total Pay",
    "Incomplete Shifts",
]


def format_csv_currency(cents: int) -> str:
    """$X.XX with no thousands separator, e.g. 123456 -> "$1234.56", -100 -> "-$1.00"."""
    dollars = cents_to_dollars(cents)
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars)}"


def payroll_period_to_csv(period: PayrollPeriod) -> str:
    """Render a payroll period as CSV text, one row per employee plus totals."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_COLUMNS)

    for emp in period.employees:
        writer.writerow([
            emp.employee_name,
            emp.compensation_type,
            f"{emp.regular_hours:.2f}",
            f"{emp.overtime_hours:.2f}",
            format_csv_currency(emp.regular_pay),
            format_csv_currency(emp.overtime_pay),
            format_csv_currency(emp.salary_pay),
            format_csv_currency(emp.contractor_pay),
            format_csv_currency(emp.daily_rate_pay),
            format_csv_currency(emp.manual_payments_total),
            format_csv_currency(emp.gross_pay),
            format_csv_currency(emp.total_tips),
            format_csv_currency(emp.tips_paid_out),
            format_csv_currency(emp.tips_owed),
            format_csv_currency(emp.total_pay),
            len(emp.incomplete_shifts),
        ])

    writer.writerow([
        "TOTAL",
        "",
        f"{period.total_regular_hours:.2f}",
        f"{period.total_overtime_hours:.2f}",
        format_csv_currency(sum(e.regular_pay for e in period.employees)),
        format_csv_currency(sum(e.overtime_pay for e in period.employees)),
        format_csv_currency(sum(e.salary_pay for e in period.employees)),
        format_csv_currency(sum(e.contractor_pay for e in period.employees)),
        format_csv_currency(sum(e.daily_rate_pay for e in period.employees)),
        format_csv_currency(sum(e.manual_payments_total for e in period.employees)),
        format_csv_currency(period.total_gross_pay),
        format_csv_currency(period.total_tips),
        format_csv_currency(period.total_tips_paid_out),
        format_csv_currency(period.total_tips_owed),
        format_csv_currency(period.total_pay),
        period.incomplete_shift_count,
    ])

    logger.info("Exported payroll CSV for %d employees", len(period.employees))
    return buffer.getvalue()


def generate_payroll_csv_filename(
    restaurant_name: str,
    period: PayrollPeriod,
    now: datetime | None = None,
) -> str:
    """e.g. payroll-main-street-grill-2026-01-04-to-2026-01-10-20260111-093000.csv"""
    sanitized = re.sub(r"[^a-zA-Z0-9]", "-", restaurant_name).lower()
    stamp = (now or datetime.now()).strftime("%Y%m%d-%H%M%S")
    return (
        f"payroll-{sanitized}-{period.start_date.isoformat()}"
        f"-to-{period.end_date.isoformat()}-{stamp}.csv"
    )
