from __future__ import annotations

from core.domain import (
    ContractType,
    FinancialLine,
    FinancialLineDraft,
    FinancialLineStatus,
    FundingAllocation,
    LocationType,
    MilestoneStatus,
    PaymentMilestone,
    Project,
    ProjectStatus,
    PurchaseOrder,
    PurchaseOrderStatus,
    RevenueMonth,
    UnitOfMeasure,
    generate_fl_number,
    generate_id,
)

__all__ = [
    "generate_id",
    "generate_fl_number",
    "ProjectStatus",
    "ContractType",
    "LocationType",
    "UnitOfMeasure",
    "FinancialLineStatus",
    "PurchaseOrderStatus",
    "MilestoneStatus",
    "Project",
    "PurchaseOrder",
    "FundingAllocation",
    "RevenueMonth",
    "PaymentMilestone",
    "FinancialLineDraft",
    "FinancialLine",
]
