"""
Payroll Schemas

Per-employee pay results and period-level payroll aggregates. All money is cents.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from engines.schemas.employee import CompensationType, Employee
from engines.schemas.overtime import OvertimeAdjustment
from engines.schemas.time_punch import IncompleteShift, TimePunch


class ManualPayment(BaseModel):
    """One-off payment entered by a manager (per-job work, bonuses)."""

    id: str
    date: date
    amount: int = Field(..., ge=0, description="Payment amount in cents")
    description: str | None = None


class EmployeePayRequest(BaseModel):
    """
    Inputs for a single employee's pay calculation.

    Optional inputs default to their neutral value: no tips, no payouts,
    no manual payments, no adjustments, whole punch history when the
    window is open-ended.
    """

    employee: Employee
    punches: list[TimePunch] = Field(default_factory=list)
    tips_cents: int = Field(default=0, ge=0)
    period_start: date | datetime | None = None
    period_end: date | datetime | None = None
    manual_payments: list[ManualPayment] = Field(default_factory=list)
    tips_paid_out_cents: int = Field(default=0, ge=0)
    adjustments: list[OvertimeAdjustment] = Field(default_factory=list)


class EmployeePayResult(BaseModel):
    """Pay for one employee over one period."""

    employee_id: str
    employee_name: str
    compensation_type: CompensationType

    # Hours
    regular_hours: float = 0.0
    overtime_hours: float = 0.0
    double_time_hours: float = 0.0
    days_worked: int = 0

    # Formula-driven pay
    regular_pay: int = 0
    overtime_pay: int = 0
    salary_pay: int = 0
    contractor_pay: int = 0
    daily_rate_pay: int = 0

    # Manual payments
    manual_payments: list[ManualPayment] = Field(default_factory=list)
    manual_payments_total: int = 0

    # Tips
    total_tips: int = 0
    tips_paid_out: int = 0
    tips_owed: int = 0

    gross_pay: int = 0
    total_pay: int = Field(default=0, description="gross_pay + tips_owed")

    incomplete_shifts: list[IncompleteShift] = Field(default_factory=list)

    @property
    def labor_cost(self) -> int:
        """Formula-driven wage cost, excluding tips and manual payments."""
        return (
            self.regular_pay
            + self.overtime_pay
            + self.salary_pay
            + self.contractor_pay
            + self.daily_rate_pay
        )


class PayrollPeriod(BaseModel):
    """Payroll run for a date range."""

    start_date: date
    end_date: date
    employees: list[EmployeePayResult] = Field(default_factory=list)

    total_regular_hours: float = 0.0
    total_overtime_hours: float = 0.0
    total_gross_pay: int = 0
    total_tips: int = 0
    total_tips_paid_out: int = 0
    total_tips_owed: int = 0
    total_pay: int = 0
    incomplete_shift_count: int = 0

    @property
    def total_labor_cost(self) -> int:
        return sum(e.labor_cost for e in self.employees)
