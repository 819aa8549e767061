"""
Time Punch API Routes

Pairs raw punches into work periods so managers can review anomalies.
"""

from fastapi import APIRouter, Depends

from backend.config import Settings, get_settings
from backend.schemas.payroll import PunchParseRequest, PunchParseResponse
from engines.services.work_period_parser import parse_work_periods

router = APIRouter()


@router.post(
    "/parse",
    response_model=PunchParseResponse,
    summary="Parse time punches",
    description="Pair one employee's punches into work/break periods and report incomplete shifts.",
)
async def parse_punches(
    request: PunchParseRequest,
    settings: Settings = Depends(get_settings),
) -> PunchParseResponse:
    parsed = parse_work_periods(
        request.punches,
        duplicate_window=settings.duplicate_punch_window,
        max_shift_hours=settings.max_shift_hours,
    )
    return PunchParseResponse(
        periods=parsed.periods,
        incomplete_shifts=parsed.incomplete_shifts,
        total_hours=sum(p.hours for p in parsed.work_periods),
    )
