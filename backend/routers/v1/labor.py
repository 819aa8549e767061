"""
Labor Cost API Routes

Dashboard endpoints for actual and scheduled labor cost by day.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from backend.config import Settings, get_settings
from backend.schemas.labor import (
    ActualLaborCostRequest,
    LaborCostRequestBase,
    ScheduledLaborCostRequest,
)
from engines.schemas.labor_cost import LaborCostResult
from engines.services.labor_costs import (
    calculate_actual_labor_cost,
    calculate_scheduled_labor_cost,
)

router = APIRouter()


def _validate_range(request: LaborCostRequestBase) -> None:
    if request.end_date < request.start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="End date must be on or after start date",
        )


@router.post(
    "/actual",
    response_model=LaborCostResult,
    summary="Actual labor cost",
    description="Labor cost per day from recorded punches. Matches payroll to the cent.",
)
async def actual_labor_cost(
    request: ActualLaborCostRequest,
    settings: Settings = Depends(get_settings),
) -> LaborCostResult:
    """Calculate actual labor cost for a date range."""
    _validate_range(request)
    return calculate_actual_labor_cost(
        request.employees,
        request.punches,
        request.start_date,
        request.end_date,
        rules=request.overtime_rules or settings.overtime_rules(),
        workweek_start=settings.workweek_start,
        duplicate_window=settings.duplicate_punch_window,
        max_shift_hours=settings.max_shift_hours,
    )


@router.post(
    "/scheduled",
    response_model=LaborCostResult,
    summary="Scheduled labor cost",
    description="Projected labor cost per day from scheduled shifts.",
)
async def scheduled_labor_cost(
    request: ScheduledLaborCostRequest,
    settings: Settings = Depends(get_settings),
) -> LaborCostResult:
    """Calculate scheduled labor cost for a date range."""
    _validate_range(request)
    return calculate_scheduled_labor_cost(
        request.shifts,
        request.employees,
        request.start_date,
        request.end_date,
        rules=request.overtime_rules or settings.overtime_rules(),
        workweek_start=settings.workweek_start,
        duplicate_window=settings.duplicate_punch_window,
        max_shift_hours=settings.max_shift_hours,
    )
