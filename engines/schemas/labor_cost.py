"""
Labor Cost Schemas

Day-bucketed labor cost models shared by the dashboard and payroll views.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field, computed_field, field_validator

from engines.schemas.time_punch import IncompleteShift, as_utc


class Shift(BaseModel):
    """A scheduled shift."""

    id: str
    employee_id: str
    restaurant_id: str = ""
    start_time: datetime
    end_time: datetime
    break_duration: int = Field(default=0, ge=0, description="Unpaid break in minutes")
    position: str | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def _normalize(cls, value: datetime) -> datetime:
        return as_utc(value)

    @property
    def scheduled_hours(self) -> float:
        worked = (self.end_time - self.start_time).total_seconds() / 3600 - self.break_duration / 60
        return max(0.0, worked)


class HourlyCost(BaseModel):
    cost: int = 0
    hours: float = 0.0


class AllocatedCost(BaseModel):
    """Cost from pay that is not punch-driven (or counted per day)."""

    cost: int = 0
    employees: int = 0
    days: int = Field(default=0, description="Employee-days allocated or worked")


class LaborCostBreakdown(BaseModel):
    hourly: HourlyCost = Field(default_factory=HourlyCost)
    salary: AllocatedCost = Field(default_factory=AllocatedCost)
    contractor: AllocatedCost = Field(default_factory=AllocatedCost)
    daily_rate: AllocatedCost = Field(default_factory=AllocatedCost)
    total: int = 0

    @computed_field
    @property
    def total_dollars(self) -> float:
        return self.total / 100


class DailyLaborCost(BaseModel):
    """Labor cost attributed to one calendar day (UTC)."""

    date: date
    hourly_cost: int = 0
    salary_cost: int = 0
    contractor_cost: int = 0
    daily_rate_cost: int = 0
    total_cost: int = 0
    hours_worked: float = 0.0


class LaborCostResult(BaseModel):
    breakdown: LaborCostBreakdown = Field(default_factory=LaborCostBreakdown)
    daily_costs: list[DailyLaborCost] = Field(default_factory=list)
    incomplete_shifts: list[IncompleteShift] = Field(default_factory=list)
