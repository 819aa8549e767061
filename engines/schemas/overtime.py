"""
Overtime Schemas

Rule configuration and hour-split results for daily/weekly overtime.
"""

from typing import Literal

from pydantic import BaseModel, Field

AdjustmentType = Literal["regular_to_overtime", "overtime_to_regular"]


class OvertimeRules(BaseModel):
    """
    Overtime thresholds and multipliers for a restaurant.

    Defaults are the federal FLSA baseline: 40 hours per workweek at 1.5x,
    no daily overtime.
    """

    weekly_threshold_hours: float = Field(default=40.0, gt=0)
    weekly_ot_multiplier: float = Field(default=1.5, ge=1)

    # Daily rules (e.g. California); None disables the rule
    daily_threshold_hours: float | None = Field(default=None, gt=0)
    daily_ot_multiplier: float = Field(default=1.5, ge=1)
    daily_double_threshold_hours: float | None = Field(default=None, gt=0)
    daily_double_multiplier: float = Field(default=2.0, ge=1)

    exclude_tips_from_ot_rate: bool = Field(
        default=True,
        description="Tips are not part of the overtime rate base",
    )


class OvertimeAdjustment(BaseModel):
    """Manager correction moving hours between regular and overtime."""

    adjustment_type: AdjustmentType
    hours: float = Field(..., ge=0)
    reason: str | None = None


class DailyOvertimeResult(BaseModel):
    """Hour split for a single day."""

    regular_hours: float = 0.0
    daily_overtime_hours: float = 0.0
    double_time_hours: float = 0.0


class WeeklyOvertimeResult(BaseModel):
    """Hour split for a workweek (or the sum of several)."""

    regular_hours: float = 0.0
    weekly_overtime_hours: float = 0.0
    daily_overtime_hours: float = 0.0
    double_time_hours: float = 0.0

    @property
    def overtime_hours(self) -> float:
        """Overtime paid at the 1.5x tier (weekly plus daily)."""
        return self.weekly_overtime_hours + self.daily_overtime_hours

    @property
    def total_hours(self) -> float:
        return self.regular_hours + self.overtime_hours + self.double_time_hours


class RegularOvertimeHours(BaseModel):
    """Simple total-hours split when no per-day breakdown is available."""

    regular_hours: float
    overtime_hours: float
