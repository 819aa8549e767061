"""Pydantic API Schemas for Labor Ledger."""

from backend.schemas.labor import (
    ActualLaborCostRequest,
    ScheduledLaborCostRequest,
)
from backend.schemas.payroll import (
    CheckPrintRequest,
    PayrollPeriodRequest,
    PunchParseRequest,
    PunchParseResponse,
)
from backend.schemas.tips import (
    PercentagePoolRequest,
    TipRebalanceRequest,
    TipSplitRequest,
    TipSplitResponse,
)

__all__ = [
    "ActualLaborCostRequest",
    "ScheduledLaborCostRequest",
    "CheckPrintRequest",
    "PayrollPeriodRequest",
    "PunchParseRequest",
    "PunchParseResponse",
    "PercentagePoolRequest",
    "TipRebalanceRequest",
    "TipSplitRequest",
    "TipSplitResponse",
]
