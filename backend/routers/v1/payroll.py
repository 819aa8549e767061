"""
Payroll API Routes

Endpoints for single-employee pay, payroll runs, and payroll CSV export.
"""

import io
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from backend.config import Settings, get_settings
from backend.schemas.payroll import PayrollPeriodRequest
from engines.schemas.payroll import EmployeePayRequest, EmployeePayResult, PayrollPeriod
from engines.services.pay_calculator import (
    calculate_employee_pay_for_request,
    calculate_payroll_period,
    to_period_date,
)
from engines.services.work_period_parser import group_punches_by_employee
from exports.payroll_csv import generate_payroll_csv_filename, payroll_period_to_csv

logger = logging.getLogger(__name__)

router = APIRouter()


def _run_payroll(request: PayrollPeriodRequest, settings: Settings) -> PayrollPeriod:
    # Validate period
    if request.period_end < request.period_start:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Period end must be after period start",
        )

    return calculate_payroll_period(
        request.period_start,
        request.period_end,
        request.employees,
        group_punches_by_employee(request.punches),
        request.tips_per_employee,
        request.manual_payments_per_employee,
        request.tip_payouts_per_employee,
        rules=request.overtime_rules or settings.overtime_rules(),
        workweek_start=settings.workweek_start,
        duplicate_window=settings.duplicate_punch_window,
        max_shift_hours=settings.max_shift_hours,
    )


@router.post(
    "/employee-pay",
    response_model=EmployeePayResult,
    summary="Calculate employee pay",
    description="Calculate one employee's pay for a period from punches, tips, and manual payments.",
)
async def calculate_employee_pay_endpoint(
    request: EmployeePayRequest,
    settings: Settings = Depends(get_settings),
) -> EmployeePayResult:
    """Calculate pay for a single employee."""
    start = to_period_date(request.period_start)
    end = to_period_date(request.period_end)
    if start and end and end < start:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Period end must be after period start",
        )

    return calculate_employee_pay_for_request(
        request,
        rules=settings.overtime_rules(),
        workweek_start=settings.workweek_start,
        duplicate_window=settings.duplicate_punch_window,
        max_shift_hours=settings.max_shift_hours,
    )


@router.post(
    "/period",
    response_model=PayrollPeriod,
    summary="Run payroll",
    description="Calculate pay for every employee over a pay period.",
)
async def run_payroll_period(
    request: PayrollPeriodRequest,
    settings: Settings = Depends(get_settings),
) -> PayrollPeriod:
    """Run payroll for a period."""
    period = _run_payroll(request, settings)
    if period.incomplete_shift_count:
        logger.warning(
            "Payroll %s..%s has %d incomplete shifts",
            period.start_date,
            period.end_date,
            period.incomplete_shift_count,
        )
    return period


@router.post(
    "/period/csv",
    summary="Export payroll CSV",
    description="Run payroll and download it as CSV.",
)
async def export_payroll_csv(
    request: PayrollPeriodRequest,
    restaurant_name: str = "restaurant",
    settings: Settings = Depends(get_settings),
):
    """Run payroll and stream the result as a CSV attachment."""
    period = _run_payroll(request, settings)
    filename = generate_payroll_csv_filename(restaurant_name, period)

    return StreamingResponse(
        io.StringIO(payroll_period_to_csv(period)),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
