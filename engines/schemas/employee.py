"""
Employee Schemas

Compensation records as supplied by the data source. All money is integer cents.
"""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

EmployeeStatus = Literal["active", "inactive", "terminated"]
CompensationType = Literal["hourly", "salary", "contractor", "daily_rate"]
PayPeriodType = Literal["weekly", "bi_weekly", "semi_monthly", "monthly"]
ContractorType = Literal["per_job", "weekly", "bi_weekly", "monthly"]


class CompensationChange(BaseModel):
    """A dated change to an employee's pay, e.g. a raise or a switch to salary."""

    effective_date: date = Field(..., description="First day the new pay applies")
    compensation_type: CompensationType
    amount_cents: int = Field(..., ge=0, description="Rate or amount in cents")
    pay_period_type: PayPeriodType | None = Field(
        default=None,
        description="Salary period the amount covers",
    )
    contractor_type: ContractorType | None = Field(
        default=None,
        description="Contractor interval the amount covers",
    )


class Employee(BaseModel):
    """Employee compensation profile."""

    id: str = Field(..., description="Unique employee identifier")
    restaurant_id: str = Field(default="", description="Owning restaurant")
    name: str = Field(default="", description="Display name")
    position: str | None = Field(default=None, description="Job title or role")
    status: EmployeeStatus = "active"
    compensation_type: CompensationType = "hourly"

    # Compensation amounts (cents)
    hourly_rate: int = Field(default=0, ge=0, description="Hourly rate in cents")
    salary_amount: int | None = Field(default=None, ge=0, description="Salary per pay period")
    pay_period_type: PayPeriodType | None = Field(
        default=None,
        description="Period the salary amount covers",
    )
    daily_rate_amount: int | None = Field(default=None, ge=0, description="Pay per day worked")
    contractor_payment_amount: int | None = Field(
        default=None,
        ge=0,
        description="Contractor payment per interval",
    )
    contractor_type: ContractorType | None = None

    # Tips
    tip_eligible: bool | None = Field(
        default=None,
        description="Explicit opt-out from tip pools; unset means eligible",
    )

    # Employment window
    hire_date: date | None = None
    termination_date: date | None = Field(
        default=None,
        description="Last employed day (inclusive)",
    )

    compensation_history: list[CompensationChange] = Field(default_factory=list)
