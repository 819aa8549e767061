"""
Overtime Rule Engine

Applies daily and weekly overtime thresholds to per-day worked hours.

Daily overtime is evaluated first. Only the hours that stayed regular at
the daily level count toward the weekly threshold, so no hour is ever
paid as both daily and weekly overtime.
"""

from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import date, timedelta
from typing import Literal

from engines.schemas.overtime import (
    DailyOvertimeResult,
    OvertimeAdjustment,
    OvertimeRules,
    RegularOvertimeHours,
    WeeklyOvertimeResult,
)

# FLSA workweek threshold used when no rules are configured
FEDERAL_WEEKLY_THRESHOLD_HOURS = 40.0

WorkweekStart = Literal[
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"
]

_WEEKDAY_INDEX = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}


def calculate_daily_overtime(
    hours: float,
    daily_threshold: float | None,
    daily_double_threshold: float | None = None,
) -> DailyOvertimeResult:
    """
    Split one day's hours into regular, daily OT, and double time.

    Thresholds are exclusive: working exactly the threshold is all regular.
    """
    hours = max(0.0, hours)

    if daily_threshold is None:
        return DailyOvertimeResult(regular_hours=hours)

    regular = min(hours, daily_threshold)
    above = hours - regular

    if daily_double_threshold is None:
        return DailyOvertimeResult(regular_hours=regular, daily_overtime_hours=above)

    ot_band = max(0.0, daily_double_threshold - daily_threshold)
    daily_ot = min(above, ot_band)
    return DailyOvertimeResult(
        regular_hours=regular,
        daily_overtime_hours=daily_ot,
        double_time_hours=above - daily_ot,
    )


def calculate_weekly_overtime(
    daily_hours: Mapping[date, float],
    rules: OvertimeRules | None = None,
) -> WeeklyOvertimeResult:
    """
    Apply daily rules to each day, then the weekly threshold to the
    summed daily-regular hours.

    daily_hours should cover a single workweek; use calculate_period_overtime
    for longer ranges.
    """
    rules = rules or OvertimeRules()

    regular = 0.0
    daily_ot = 0.0
    double_time = 0.0
    for hours in daily_hours.values():
        day = calculate_daily_overtime(
            hours,
            rules.daily_threshold_hours,
            rules.daily_double_threshold_hours,
        )
        regular += day.regular_hours
        daily_ot += day.daily_overtime_hours
        double_time += day.double_time_hours

    weekly_ot = max(0.0, regular - rules.weekly_threshold_hours)

    return WeeklyOvertimeResult(
        regular_hours=min(regular, rules.weekly_threshold_hours),
        weekly_overtime_hours=weekly_ot,
        daily_overtime_hours=daily_ot,
        double_time_hours=double_time,
    )


def apply_overtime_adjustments(
    base: WeeklyOvertimeResult,
    adjustments: Iterable[OvertimeAdjustment],
) -> WeeklyOvertimeResult:
    """
    Apply manager adjustments in order.

    Each move is capped by the hours available in the source bucket, so
    neither regular nor weekly overtime can go negative.
    """
    regular = base.regular_hours
    weekly_ot = base.weekly_overtime_hours

    for adjustment in adjustments:
        if adjustment.adjustment_type == "regular_to_overtime":
            moved = min(adjustment.hours, regular)
            regular -= moved
            weekly_ot += moved
        elif adjustment.adjustment_type == "overtime_to_regular":
            moved = min(adjustment.hours, weekly_ot)
            weekly_ot -= moved
            regular += moved

    return base.model_copy(
        update={"regular_hours": regular, "weekly_overtime_hours": weekly_ot}
    )


def calculate_regular_and_overtime_hours(
    total_hours: float,
    threshold: float = FEDERAL_WEEKLY_THRESHOLD_HOURS,
) -> RegularOvertimeHours:
    """Simple weekly split used when there is no per-day breakdown."""
    total_hours = max(0.0, total_hours)
    return RegularOvertimeHours(
        regular_hours=min(total_hours, threshold),
        overtime_hours=max(0.0, total_hours - threshold),
    )


def week_start_for(day: date, workweek_start: WorkweekStart = "sunday") -> date:
    """First day of the workweek containing day."""
    offset = (day.weekday() - _WEEKDAY_INDEX[workweek_start]) % 7
    return day - timedelta(days=offset)


def split_into_workweeks(
    daily_hours: Mapping[date, float],
    workweek_start: WorkweekStart = "sunday",
) -> dict[date, dict[date, float]]:
    """Group per-day hours by workweek, keyed by each week's first day."""
    weeks: dict[date, dict[date, float]] = defaultdict(dict)
    for day, hours in sorted(daily_hours.items()):
        weeks[week_start_for(day, workweek_start)][day] = hours
    return dict(weeks)


def calculate_period_overtime(
    daily_hours: Mapping[date, float],
    rules: OvertimeRules | None = None,
    workweek_start: WorkweekStart = "sunday",
    adjustments: Iterable[OvertimeAdjustment] = (),
) -> WeeklyOvertimeResult:
    """
    Overtime for a pay period spanning one or more workweeks.

    Each workweek is evaluated on its own (FLSA does not allow averaging
    hours across weeks), the results are summed, and adjustments are
    applied to the period total.
    """
    rules = rules or OvertimeRules()
    total = WeeklyOvertimeResult()

    for week in split_into_workweeks(daily_hours, workweek_start).values():
        result = calculate_weekly_overtime(week, rules)
        total = WeeklyOvertimeResult(
            regular_hours=total.regular_hours + result.regular_hours,
            weekly_overtime_hours=total.weekly_overtime_hours + result.weekly_overtime_hours,
            daily_overtime_hours=total.daily_overtime_hours + result.daily_overtime_hours,
            double_time_hours=total.double_time_hours + result.double_time_hours,
        )

    return apply_overtime_adjustments(total, adjustments)
