"""
Work Period Parser

Turns an employee's raw clock events into work and break intervals.

Punches arrive unordered and are frequently messy: double taps on the
terminal, forgotten clock-outs, breaks that never end. Anything that
cannot be paired into a trustworthy interval is reported as an
IncompleteShift rather than raised, so payroll can still run and a
manager can fix the punches afterwards.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from engines.schemas.time_punch import (
    IncompleteShift,
    ParsedWorkPeriods,
    TimePunch,
    WorkedHoursResult,
    WorkPeriod,
)

logger = logging.getLogger(__name__)

# Same-type clock punches closer than this are terminal double taps
DUPLICATE_PUNCH_WINDOW = timedelta(minutes=5)

# A clock-in/clock-out span longer than this is a missed punch, not a shift
MAX_SHIFT_HOURS = 16.0

_DEDUPLICATED_TYPES = frozenset({"clock_in", "clock_out"})


def _hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600


def _make_period(start: datetime, end: datetime, is_break: bool) -> WorkPeriod | None:
    if end <= start:
        return None
    return WorkPeriod(
        start_time=start,
        end_time=end,
        hours=_hours_between(start, end),
        is_break=is_break,
    )


def deduplicate_punches(
    punches: Iterable[TimePunch],
    window: timedelta = DUPLICATE_PUNCH_WINDOW,
) -> list[TimePunch]:
    """
    Sort punches and collapse consecutive duplicate clock punches.

    Two clock_in (or two clock_out) punches in a row within the window
    are one event; the later punch wins.
    """
    ordered = sorted(punches, key=lambda p: p.punch_time)
    result: list[TimePunch] = []

    for punch in ordered:
        if result:
            previous = result[-1]
            if (
                punch.punch_type == previous.punch_type
                and punch.punch_type in _DEDUPLICATED_TYPES
                and punch.punch_time - previous.punch_time <= window
            ):
                result[-1] = punch
                continue
        result.append(punch)

    return result


class _ShiftState:
    """Open shift bookkeeping while walking punches."""

    def __init__(self, clock_in: TimePunch):
        self.clock_in = clock_in
        self.work_start: datetime | None = clock_in.punch_time
        self.break_start: datetime | None = None
        self.periods: list[WorkPeriod] = []

    @property
    def on_break(self) -> bool:
        return self.break_start is not None

    def close_work(self, at: datetime) -> None:
        if self.work_start is not None:
            period = _make_period(self.work_start, at, is_break=False)
            if period:
                self.periods.append(period)
        self.work_start = None

    def start_break(self, at: datetime) -> None:
        self.close_work(at)
        self.break_start = at

    def end_break(self, at: datetime) -> None:
        period = _make_period(self.break_start, at, is_break=True)
        if period:
            self.periods.append(period)
        self.break_start = None
        self.work_start = at


def _missing_clock_out(punch: TimePunch, message: str) -> IncompleteShift:
    return IncompleteShift(
        type="missing_clock_out",
        punch_type=punch.punch_type,
        punch_time=punch.punch_time,
        employee_id=punch.employee_id,
        message=message,
    )


def parse_work_periods(
    punches: Iterable[TimePunch],
    duplicate_window: timedelta | None = None,
    max_shift_hours: float | None = None,
) -> ParsedWorkPeriods:
    """
    Convert punches for one employee into work/break periods.

    Algorithm:
    1. Sort by punch time and drop duplicate clock taps (keep the later)
    2. Walk the punches tracking the open shift and any open break
    3. clock_out closes the shift; spans over max_shift_hours are rejected
    4. Unpaired clock_in / clock_out become IncompleteShift records

    break_start/break_end with nothing to close are ignored. A break still
    open at clock_out is dropped rather than guessed at. A clock_in during
    an open break ends the break (some terminals record it that way).
    """
    window = DUPLICATE_PUNCH_WINDOW if duplicate_window is None else duplicate_window
    max_hours = MAX_SHIFT_HOURS if max_shift_hours is None else max_shift_hours

    periods: list[WorkPeriod] = []
    incomplete: list[IncompleteShift] = []
    shift: _ShiftState | None = None

    for punch in deduplicate_punches(punches, window):
        at = punch.punch_time

        if punch.punch_type == "clock_in":
            if shift is None:
                shift = _ShiftState(punch)
            elif shift.on_break:
                shift.end_break(at)
            else:
                incomplete.append(
                    _missing_clock_out(
                        shift.clock_in,
                        "Clock-in without clock-out before the next clock-in",
                    )
                )
                shift = _ShiftState(punch)

        elif punch.punch_type == "clock_out":
            if shift is None:
                incomplete.append(
                    IncompleteShift(
                        type="missing_clock_in",
                        punch_type=punch.punch_type,
                        punch_time=at,
                        employee_id=punch.employee_id,
                        message="Clock-out without a preceding clock-in",
                    )
                )
                continue

            if not shift.on_break:
                shift.close_work(at)

            span = _hours_between(shift.clock_in.punch_time, at)
            if span > max_hours:
                incomplete.append(
                    _missing_clock_out(
                        shift.clock_in,
                        f"Excessive gap of {span:.1f} hours between clock-in and clock-out",
                    )
                )
            else:
                periods.extend(shift.periods)
            shift = None

        elif punch.punch_type == "break_start":
            if shift is not None and not shift.on_break:
                shift.start_break(at)

        elif punch.punch_type == "break_end":
            if shift is not None and shift.on_break:
                shift.end_break(at)

    if shift is not None:
        incomplete.append(_missing_clock_out(shift.clock_in, "Clock-in without clock-out"))

    if incomplete:
        logger.debug(
            "Parsed %d periods with %d incomplete shifts", len(periods), len(incomplete)
        )

    return ParsedWorkPeriods(periods=periods, incomplete_shifts=incomplete)


def calculate_worked_hours_with_anomalies(punches: Iterable[TimePunch]) -> WorkedHoursResult:
    """Worked (non-break) hours plus the anomalies excluded from the total."""
    parsed = parse_work_periods(punches)
    return WorkedHoursResult(
        total_hours=sum(p.hours for p in parsed.work_periods),
        incomplete_shifts=parsed.incomplete_shifts,
    )


def calculate_worked_hours(punches: Iterable[TimePunch]) -> float:
    return calculate_worked_hours_with_anomalies(punches).total_hours


def group_punches_by_employee(punches: Iterable[TimePunch]) -> dict[str, list[TimePunch]]:
    grouped: dict[str, list[TimePunch]] = defaultdict(list)
    for punch in punches:
        grouped[punch.employee_id].append(punch)
    return dict(grouped)


def daily_work_hours(periods: Iterable[WorkPeriod]) -> dict[date, float]:
    """
    Sum work hours per calendar day (UTC).

    A period counts entirely toward the day it starts on, so an overnight
    shift is not split at midnight.
    """
    hours: dict[date, float] = defaultdict(float)
    for period in periods:
        if not period.is_break:
            hours[period.start_time.date()] += period.hours
    return dict(sorted(hours.items()))
