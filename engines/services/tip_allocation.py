"""
Tip Allocation Engine

Splits a tip pool across participants. Every strategy returns shares that
sum exactly to the pool total; rounding leftovers go to the last
participant.

Also implements percentage contribution pools, where servers give a fixed
share of their own tips to support-staff pools (dish, bussers, kitchen).
"""

import logging
from collections.abc import Iterable, Sequence
from decimal import Decimal

from engines.schemas.employee import Employee
from engines.schemas.tip_pool import (
    ContributionPool,
    PercentageAllocationResult,
    PoolContribution,
    PoolRefund,
    PoolResult,
    PoolWorker,
    ServerEarning,
    ServerPoolResult,
    TipParticipant,
    TipShare,
    TipSplitStatus,
)
from engines.services.money import format_currency_from_cents, round_half_up

logger = logging.getLogger(__name__)

__all__ = [
    "calculate_tip_split_even",
    "calculate_tip_split_by_hours",
    "calculate_tip_split_by_role",
    "rebalance_allocations",
    "filter_tip_eligible",
    "split_by_weights",
    "calculate_percentage_contributions",
    "calculate_pool_refunds",
    "calculate_percentage_pool_allocations",
    "validate_tip_split_for_approval",
    "format_currency_from_cents",
]


def _share(participant: TipParticipant, amount: int) -> TipShare:
    return TipShare(
        employee_id=participant.employee_id,
        name=participant.name,
        amount_cents=amount,
        hours=participant.hours,
        role=participant.role,
    )


def split_evenly(total_cents: int, count: int) -> list[int]:
    """floor(total / count) each, remainder to the last."""
    if count <= 0:
        return []
    total_cents = max(0, total_cents)
    base = total_cents // count
    amounts = [base] * count
    amounts[-1] = total_cents - base * (count - 1)
    return amounts


def split_by_weights(total_cents: int, weights: Sequence[float]) -> list[int]:
    """
    Proportional split in whole cents.

    Non-last entries get round(total * weight / sum); the last gets
    whatever is left. All-zero weights fall back to an even split.
    """
    if not weights:
        return []
    total_cents = max(0, total_cents)
    weight_sum = sum(Decimal(str(w)) for w in weights)
    if weight_sum <= 0:
        return split_evenly(total_cents, len(weights))

    amounts: list[int] = []
    remaining = total_cents
    for weight in weights[:-1]:
        amount = round_half_up(Decimal(total_cents) * Decimal(str(weight)) / weight_sum)
        # Half-up rounding on several tiny weights can overshoot the total
        amount = min(max(0, amount), remaining)
        amounts.append(amount)
        remaining -= amount
    amounts.append(remaining)
    return amounts


def calculate_tip_split_even(
    total_cents: int,
    participants: Sequence[TipParticipant],
) -> list[TipShare]:
    amounts = split_evenly(total_cents, len(participants))
    return [_share(p, a) for p, a in zip(participants, amounts)]


def calculate_tip_split_by_hours(
    total_cents: int,
    participants: Sequence[TipParticipant],
) -> list[TipShare]:
    """
    Split by hours worked.

    If nobody has hours recorded the pool is split evenly instead of
    handing everyone zero.
    """
    amounts = split_by_weights(total_cents, [p.hours for p in participants])
    return [_share(p, a) for p, a in zip(participants, amounts)]


def calculate_tip_split_by_role(
    total_cents: int,
    participants: Sequence[TipParticipant],
) -> list[TipShare]:
    """Split by role weight (e.g. server 1.0, busser 0.5), even if all zero."""
    amounts = split_by_weights(total_cents, [p.weight for p in participants])
    return [_share(p, a) for p, a in zip(participants, amounts)]


def rebalance_allocations(
    total_cents: int,
    shares: Sequence[TipShare],
    employee_id: str,
    new_amount_cents: int,
) -> list[TipShare]:
    """
    Manually set one participant's share and redistribute the rest.

    The new amount is clamped to [0, total]. The remainder is spread over
    the other participants in proportion to their previous shares (evenly
    if those were all zero).
    """
    total_cents = max(0, total_cents)
    target = next((s for s in shares if s.employee_id == employee_id), None)
    if target is None:
        return list(shares)

    others = [s for s in shares if s.employee_id != employee_id]
    if not others:
        return [target.model_copy(update={"amount_cents": total_cents})]

    new_amount = min(max(0, new_amount_cents), total_cents)
    redistributed = split_by_weights(total_cents - new_amount, [s.amount_cents for s in others])
    updated = {s.employee_id: a for s, a in zip(others, redistributed)}
    updated[employee_id] = new_amount

    return [s.model_copy(update={"amount_cents": updated[s.employee_id]}) for s in shares]


def filter_tip_eligible(employees: Iterable[Employee]) -> list[Employee]:
    """
    Employees who can take part in a tip pool.

    Excludes terminated and salaried staff and anyone explicitly opted
    out. tip_eligible left unset counts as eligible.
    """
    return [
        e
        for e in employees
        if e.status != "terminated"
        and e.compensation_type != "salary"
        and e.tip_eligible is not False
    ]


def validate_tip_split_for_approval(
    status: TipSplitStatus,
    shares: Sequence[TipShare] | None,
) -> str | None:
    """
    Check a tip split before it is saved.

    Returns an error message, or None when the split may be saved. Drafts
    always pass so a manager can save work in progress.
    """
    if status != "approved":
        return None
    if not shares:
        return "Cannot approve tips without employee allocations"
    if sum(s.amount_cents for s in shares) == 0:
        return "Cannot approve tips with $0 total allocation"
    return None


# Percentage contribution pools


def calculate_percentage_contributions(
    servers: Sequence[ServerEarning],
    pools: Sequence[ContributionPool],
) -> list[PoolContribution]:
    """
    What each server gives to each pool.

    A server's combined contribution is round(earned * sum(pct) / 100),
    capped at what they earned, then split across the pools by percentage.
    Per-pool amounts therefore never add up to more than the server has.
    """
    if not pools:
        return []
    percentages = [pool.contribution_percentage for pool in pools]
    total_pct = sum(Decimal(str(p)) for p in percentages)

    contributions: list[PoolContribution] = []
    for server in servers:
        earned = max(0, server.earned_amount_cents)
        combined = min(earned, round_half_up(Decimal(earned) * total_pct / 100))
        amounts = split_by_weights(combined, percentages) if total_pct > 0 else [0] * len(pools)
        contributions.extend(
            PoolContribution(server_id=server.employee_id, pool_id=pool.id, amount_cents=a)
            for pool, a in zip(pools, amounts)
        )
    return contributions


def calculate_pool_refunds(
    pool_id: str,
    contributions: Sequence[PoolContribution],
    pool_total_cents: int,
) -> list[PoolRefund]:
    """Return an undistributable pool to its contributors pro rata."""
    pool_contributions = [c for c in contributions if c.pool_id == pool_id]
    amounts = split_by_weights(pool_total_cents, [c.amount_cents for c in pool_contributions])
    return [
        PoolRefund(server_id=c.server_id, pool_id=pool_id, refund_cents=a)
        for c, a in zip(pool_contributions, amounts)
    ]


def _distribute_pool(
    pool: ContributionPool,
    total_cents: int,
    recipients: Sequence[PoolWorker],
) -> list[TipShare]:
    if pool.share_method == "hours":
        weights = [w.hours_worked for w in recipients]
        amounts = split_by_weights(total_cents, weights)
    elif pool.share_method == "role":
        weights = [pool.role_weights.get(w.role, 1.0) for w in recipients]
        amounts = split_by_weights(total_cents, weights)
    else:
        amounts = split_evenly(total_cents, len(recipients))

    return [
        TipShare(
            employee_id=w.employee_id,
            name=w.name,
            amount_cents=a,
            hours=w.hours_worked,
            role=w.role or None,
        )
        for w, a in zip(recipients, amounts)
    ]


def calculate_percentage_pool_allocations(
    servers: Sequence[ServerEarning],
    pools: Sequence[ContributionPool],
    workers: Sequence[PoolWorker],
) -> PercentageAllocationResult:
    """
    Run percentage pooling end to end.

    1. Every server contributes a percentage of their tips to every pool
    2. Each pool is shared among its eligible employees who worked
    3. A pool with nobody to receive it is refunded to the servers
    4. Servers keep earned - contributed + refunded

    Money is conserved: split items sum to total server earnings.
    """
    contributions = calculate_percentage_contributions(servers, pools)

    contributed_by_server: dict[str, int] = {s.employee_id: 0 for s in servers}
    refunded_by_server: dict[str, int] = {s.employee_id: 0 for s in servers}
    for c in contributions:
        contributed_by_server[c.server_id] += c.amount_cents

    pool_results: list[PoolResult] = []
    for pool in pools:
        pool_total = sum(c.amount_cents for c in contributions if c.pool_id == pool.id)
        eligible = set(pool.eligible_employee_ids)
        recipients = [w for w in workers if w.employee_id in eligible]

        if recipients:
            allocations = _distribute_pool(pool, pool_total, recipients)
            pool_results.append(
                PoolResult(
                    pool_id=pool.id,
                    pool_name=pool.name,
                    total_contributed=pool_total,
                    total_distributed=pool_total,
                    total_refunded=0,
                    allocations=allocations,
                )
            )
            continue

        logger.info("No eligible workers for pool %s; refunding %d cents", pool.name, pool_total)
        for refund in calculate_pool_refunds(pool.id, contributions, pool_total):
            refunded_by_server[refund.server_id] += refund.refund_cents
        pool_results.append(
            PoolResult(
                pool_id=pool.id,
                pool_name=pool.name,
                total_contributed=pool_total,
                total_distributed=0,
                total_refunded=pool_total,
            )
        )

    server_results = [
        ServerPoolResult(
            employee_id=s.employee_id,
            name=s.name,
            earned_amount_cents=s.earned_amount_cents,
            contributed_amount_cents=contributed_by_server[s.employee_id],
            refunded_amount_cents=refunded_by_server[s.employee_id],
            retained_amount_cents=max(
                0,
                s.earned_amount_cents
                - contributed_by_server[s.employee_id]
                + refunded_by_server[s.employee_id],
            ),
        )
        for s in servers
    ]

    # Merge servers and pool recipients into one amount per employee
    totals: dict[str, int] = {}
    names: dict[str, str] = {}
    for sr in server_results:
        totals[sr.employee_id] = totals.get(sr.employee_id, 0) + sr.retained_amount_cents
        names[sr.employee_id] = sr.name
    for pr in pool_results:
        for share in pr.allocations:
            totals[share.employee_id] = totals.get(share.employee_id, 0) + share.amount_cents
            names.setdefault(share.employee_id, share.name)

    split_items = [
        TipShare(employee_id=emp_id, name=names[emp_id], amount_cents=amount)
        for emp_id, amount in totals.items()
        if amount > 0
    ]

    return PercentageAllocationResult(
        server_results=server_results,
        pool_results=pool_results,
        split_items=split_items,
    )
