"""
Tip Pydantic Schemas

API request/response models for tip pool endpoints.
"""

from typing import Literal

from pydantic import BaseModel, Field

from engines.schemas.employee import Employee
from engines.schemas.tip_pool import (
    ContributionPool,
    PoolWorker,
    ServerEarning,
    TipParticipant,
    TipShare,
    TipSplitStatus,
)


class TipSplitRequest(BaseModel):
    """Schema for splitting a tip pool."""

    total_cents: int = Field(..., ge=0)
    method: Literal["even", "hours", "role"] = "hours"
    participants: list[TipParticipant] = Field(..., min_length=1)


class TipSplitResponse(BaseModel):
    method: str
    total_cents: int
    shares: list[TipShare]
    total_formatted: str


class TipRebalanceRequest(BaseModel):
    """Schema for manually changing one participant's share."""

    total_cents: int = Field(..., ge=0)
    shares: list[TipShare] = Field(..., min_length=1)
    employee_id: str
    new_amount_cents: int = Field(..., description="Clamped to [0, total_cents]")


class TipSplitValidationRequest(BaseModel):
    """Schema for checking a tip split before saving."""

    status: TipSplitStatus = "draft"
    shares: list[TipShare] | None = None


class TipSplitValidationResponse(BaseModel):
    valid: bool
    error: str | None = None


class TipEligibilityRequest(BaseModel):
    employees: list[Employee]


class PercentagePoolRequest(BaseModel):
    """Schema for percentage contribution pooling."""

    servers: list[ServerEarning]
    pools: list[ContributionPool]
    workers: list[PoolWorker] = Field(default_factory=list)
