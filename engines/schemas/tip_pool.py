"""
Tip Pool Schemas

Participants, shares, and percentage-contribution pool models. Amounts are cents.
"""

from typing import Literal

from pydantic import BaseModel, Field

ShareMethod = Literal["hours", "role", "even"]
TipSplitStatus = Literal["draft", "approved", "archived"]


class TipParticipant(BaseModel):
    """Someone taking part in a tip split."""

    employee_id: str
    name: str = ""
    hours: float = Field(default=0.0, ge=0, description="Hours worked in the split window")
    role: str | None = None
    weight: float = Field(default=0.0, ge=0, description="Role weight for role-based splits")


class TipShare(BaseModel):
    """One participant's allocation. Shares of a split sum to the pool total."""

    employee_id: str
    name: str = ""
    amount_cents: int = Field(..., ge=0)
    hours: float | None = None
    role: str | None = None


# Percentage contribution pools


class ServerEarning(BaseModel):
    """Tips a server earned directly before contributing to pools."""

    employee_id: str
    name: str = ""
    earned_amount_cents: int = Field(..., ge=0)


class ContributionPool(BaseModel):
    """A pool funded by a fixed percentage of every server's tips."""

    id: str
    name: str
    contribution_percentage: float = Field(..., ge=0, le=100)
    share_method: ShareMethod = "hours"
    eligible_employee_ids: list[str] = Field(default_factory=list)
    role_weights: dict[str, float] = Field(default_factory=dict)


class PoolWorker(BaseModel):
    """A worker who was on shift during the pooled period."""

    employee_id: str
    name: str = ""
    hours_worked: float = Field(default=0.0, ge=0)
    role: str = ""


class PoolContribution(BaseModel):
    server_id: str
    pool_id: str
    amount_cents: int = Field(..., ge=0)


class PoolRefund(BaseModel):
    server_id: str
    pool_id: str
    refund_cents: int = Field(..., ge=0)


class ServerPoolResult(BaseModel):
    """What a server keeps after contributing and receiving refunds."""

    employee_id: str
    name: str = ""
    earned_amount_cents: int
    contributed_amount_cents: int
    refunded_amount_cents: int
    retained_amount_cents: int


class PoolResult(BaseModel):
    """Money in and out of one contribution pool."""

    pool_id: str
    pool_name: str
    total_contributed: int
    total_distributed: int
    total_refunded: int
    allocations: list[TipShare] = Field(default_factory=list)


class PercentageAllocationResult(BaseModel):
    """End-to-end result of percentage pooling."""

    server_results: list[ServerPoolResult] = Field(default_factory=list)
    pool_results: list[PoolResult] = Field(default_factory=list)
    split_items: list[TipShare] = Field(
        default_factory=list,
        description="Final per-employee amounts; sums to total server earnings",
    )
