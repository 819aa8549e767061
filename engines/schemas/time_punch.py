"""
Time Punch Schemas

Input/output models for turning raw clock events into work periods.
"""

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

PunchType = Literal["clock_in", "clock_out", "break_start", "break_end"]
IncompleteShiftType = Literal["missing_clock_out", "missing_clock_in", "shift_too_long"]


def as_utc(value: datetime) -> datetime:
    """Naive timestamps are taken to be UTC; aware ones are converted."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class TimePunch(BaseModel):
    """
    A single clock event recorded by a terminal or the mobile app.

    Punches are owned by the data source and never modified here.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique punch identifier")
    employee_id: str = Field(..., description="Employee who punched")
    restaurant_id: str = Field(default="", description="Owning restaurant")
    punch_type: PunchType = Field(..., description="Kind of clock event")
    punch_time: datetime = Field(..., description="When the punch was recorded")
    shift_id: str | None = Field(default=None, description="Scheduled shift, if linked")
    notes: str | None = None

    @field_validator("punch_time")
    @classmethod
    def _normalize_punch_time(cls, value: datetime) -> datetime:
        return as_utc(value)


class WorkPeriod(BaseModel):
    """A derived work or break interval. Never persisted."""

    model_config = ConfigDict(frozen=True)

    start_time: datetime
    end_time: datetime
    hours: float = Field(..., gt=0, description="Interval length in hours, unrounded")
    is_break: bool = False


class IncompleteShift(BaseModel):
    """Anomaly record for punches that could not be paired into a period."""

    model_config = ConfigDict(frozen=True)

    type: IncompleteShiftType
    punch_type: PunchType
    punch_time: datetime
    employee_id: str | None = None
    message: str = ""


class ParsedWorkPeriods(BaseModel):
    """Work periods plus the anomalies found while building them."""

    periods: list[WorkPeriod] = Field(default_factory=list)
    incomplete_shifts: list[IncompleteShift] = Field(default_factory=list)

    @property
    def work_periods(self) -> list[WorkPeriod]:
        return [p for p in self.periods if not p.is_break]

    @property
    def break_periods(self) -> list[WorkPeriod]:
        return [p for p in self.periods if p.is_break]


class WorkedHoursResult(BaseModel):
    """Total worked hours with the anomalies that were excluded from it."""

    total_hours: float = 0.0
    incomplete_shifts: list[IncompleteShift] = Field(default_factory=list)
