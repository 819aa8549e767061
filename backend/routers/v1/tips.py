"""
Tip API Routes

Endpoints for tip pool splits, manual rebalancing, and percentage pools.
"""

from fastapi import APIRouter

from backend.schemas.tips import (
    PercentagePoolRequest,
    TipEligibilityRequest,
    TipRebalanceRequest,
    TipSplitRequest,
    TipSplitResponse,
    TipSplitValidationRequest,
    TipSplitValidationResponse,
)
from engines.schemas.employee import Employee
from engines.schemas.tip_pool import PercentageAllocationResult, TipShare
from engines.services.tip_allocation import (
    calculate_percentage_pool_allocations,
    calculate_tip_split_by_hours,
    calculate_tip_split_by_role,
    calculate_tip_split_even,
    filter_tip_eligible,
    format_currency_from_cents,
    rebalance_allocations,
    validate_tip_split_for_approval,
)

router = APIRouter()

SPLIT_STRATEGIES = {
    "even": calculate_tip_split_even,
    "hours": calculate_tip_split_by_hours,
    "role": calculate_tip_split_by_role,
}


@router.post(
    "/split",
    response_model=TipSplitResponse,
    summary="Split a tip pool",
    description="Split tips evenly, by hours, or by role weight. Shares always sum to the total.",
)
async def split_tips(request: TipSplitRequest) -> TipSplitResponse:
    """Split a tip pool across participants."""
    shares = SPLIT_STRATEGIES[request.method](request.total_cents, request.participants)
    return TipSplitResponse(
        method=request.method,
        total_cents=request.total_cents,
        shares=shares,
        total_formatted=format_currency_from_cents(request.total_cents),
    )


@router.post(
    "/rebalance",
    response_model=list[TipShare],
    summary="Rebalance tip shares",
)
async def rebalance_tip_shares(request: TipRebalanceRequest) -> list[TipShare]:
    """Set one participant's share and redistribute the remainder."""
    return rebalance_allocations(
        request.total_cents,
        request.shares,
        request.employee_id,
        request.new_amount_cents,
    )


@router.post(
    "/validate",
    response_model=TipSplitValidationResponse,
    summary="Validate a tip split before saving",
)
async def validate_tip_split(request: TipSplitValidationRequest) -> TipSplitValidationResponse:
    error = validate_tip_split_for_approval(request.status, request.shares)
    return TipSplitValidationResponse(valid=error is None, error=error)


@router.post(
    "/eligible",
    response_model=list[Employee],
    summary="Filter tip-eligible employees",
)
async def tip_eligible_employees(request: TipEligibilityRequest) -> list[Employee]:
    return filter_tip_eligible(request.employees)


@router.post(
    "/percentage-pools",
    response_model=PercentageAllocationResult,
    summary="Allocate percentage contribution pools",
    description=(
        "Servers contribute a percentage of their tips to support-staff pools. "
        "Pools with no eligible workers are refunded."
    ),
)
async def allocate_percentage_pools(request: PercentagePoolRequest) -> PercentageAllocationResult:
    """Run percentage contribution pooling."""
    return calculate_percentage_pool_allocations(request.servers, request.pools, request.workers)
