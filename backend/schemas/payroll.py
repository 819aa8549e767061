"""
Payroll Pydantic Schemas

API request models for payroll, punch parsing, and check printing endpoints.
"""

from datetime import date

from pydantic import BaseModel, Field

from engines.schemas.employee import Employee
from engines.schemas.overtime import OvertimeRules
from engines.schemas.payroll import ManualPayment
from engines.schemas.time_punch import IncompleteShift, TimePunch, WorkPeriod
from exports.check_pdf import CheckData, CheckSettings


class PayrollPeriodRequest(BaseModel):
    """Schema for running payroll over a period."""

    period_start: date = Field(..., description="First day of the pay period")
    period_end: date = Field(..., description="Last day of the pay period (inclusive)")
    employees: list[Employee] = Field(default_factory=list)
    punches: list[TimePunch] = Field(
        default_factory=list,
        description="All punches for the restaurant; grouped by employee_id",
    )
    tips_per_employee: dict[str, int] = Field(default_factory=dict)
    tip_payouts_per_employee: dict[str, int] = Field(default_factory=dict)
    manual_payments_per_employee: dict[str, list[ManualPayment]] = Field(default_factory=dict)
    overtime_rules: OvertimeRules | None = Field(
        default=None,
        description="Overrides the configured overtime rules",
    )


class PunchParseRequest(BaseModel):
    """Schema for pairing one employee's punches."""

    punches: list[TimePunch]


class PunchParseResponse(BaseModel):
    periods: list[WorkPeriod]
    incomplete_shifts: list[IncompleteShift]
    total_hours: float


class CheckPrintRequest(BaseModel):
    """Schema for printing one or more checks."""

    settings: CheckSettings | None = Field(
        default=None,
        description="Business details; defaults to the configured check settings",
    )
    checks: list[CheckData] = Field(..., min_length=1)
