"""
Tip Engine MCP Tools

Tip pool splitting, manual rebalancing, and percentage contribution pools.
"""

from typing import Literal

from engines.schemas.tip_pool import (
    ContributionPool,
    PoolWorker,
    ServerEarning,
    TipParticipant,
    TipShare,
)
from engines.services.tip_allocation import (
    calculate_percentage_pool_allocations,
    calculate_tip_split_by_hours,
    calculate_tip_split_by_role,
    calculate_tip_split_even,
    rebalance_allocations,
)
from engines.tools.payroll_engine import mcp

_STRATEGIES = {
    "even": calculate_tip_split_even,
    "hours": calculate_tip_split_by_hours,
    "role": calculate_tip_split_by_role,
}


@mcp.tool()
async def split_tips(
    total_cents: int,
    participants: list[dict],
    method: Literal["even", "hours", "role"] = "hours",
) -> dict:
    """
    Split a tip pool across participants.

    Shares always add up to total_cents; rounding leftovers go to the last
    participant. Hours and role splits fall back to an even split when
    nobody has any hours or weight.

    Args:
        total_cents: Pool total in cents
        participants: TipParticipant objects (employee_id, name, hours, role, weight)
        method: "even", "hours", or "role"

    Returns:
        Dictionary with shares and the total allocated

    Example:
        100 cents across 3 people evenly -> 33, 33, 34
    """
    shares = _STRATEGIES[method](total_cents, [TipParticipant(**p) for p in participants])
    return {
        "method": method,
        "shares": [s.model_dump(mode="json") for s in shares],
        "total_allocated": sum(s.amount_cents for s in shares),
    }


@mcp.tool()
async def rebalance_tip_shares(
    total_cents: int,
    shares: list[dict],
    employee_id: str,
    new_amount_cents: int,
) -> dict:
    """
    Set one participant's share and spread the difference over the others.

    Args:
        total_cents: Pool total in cents
        shares: Current TipShare objects
        employee_id: Participant being edited
        new_amount_cents: New amount; clamped to [0, total_cents]

    Returns:
        Dictionary with the rebalanced shares
    """
    rebalanced = rebalance_allocations(
        total_cents, [TipShare(**s) for s in shares], employee_id, new_amount_cents
    )
    return {"shares": [s.model_dump(mode="json") for s in rebalanced]}


@mcp.tool()
async def allocate_percentage_pools(
    servers: list[dict],
    pools: list[dict],
    workers: list[dict],
) -> dict:
    """
    Run percentage contribution pooling.

    Each server contributes a percentage of their tips to each pool. Pools
    are shared among eligible employees who worked; pools with nobody to
    receive them are refunded to the servers.

    Args:
        servers: ServerEarning objects (employee_id, name, earned_amount_cents)
        pools: ContributionPool objects
        workers: PoolWorker objects (employee_id, hours_worked, role)

    Returns:
        Server results, pool results, and final split items
    """
    result = calculate_percentage_pool_allocations(
        [ServerEarning(**s) for s in servers],
        [ContributionPool(**p) for p in pools],
        [PoolWorker(**w) for w in workers],
    )
    return result.model_dump(mode="json")
