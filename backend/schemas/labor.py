"""
Labor Cost Pydantic Schemas

API request models for dashboard labor cost endpoints.
"""

from datetime import date

from pydantic import BaseModel, Field

from engines.schemas.employee import Employee
from engines.schemas.labor_cost import Shift
from engines.schemas.overtime import OvertimeRules
from engines.schemas.time_punch import TimePunch


class LaborCostRequestBase(BaseModel):
    """Fields shared by actual and scheduled labor cost requests."""

    start_date: date = Field(..., description="First day of the range")
    end_date: date = Field(..., description="Last day of the range (inclusive)")
    employees: list[Employee] = Field(default_factory=list)
    overtime_rules: OvertimeRules | None = None


class ActualLaborCostRequest(LaborCostRequestBase):
    """Schema for labor cost from recorded punches."""

    punches: list[TimePunch] = Field(default_factory=list)


class ScheduledLaborCostRequest(LaborCostRequestBase):
    """Schema for projected labor cost from the schedule."""

    shifts: list[Shift] = Field(default_factory=list)
