from core.domain.enums import (
    ContractType,
    FinancialLineStatus,
    LocationType,
    MilestoneStatus,
    ProjectStatus,
    PurchaseOrderStatus,
    UnitOfMeasure,
)
from core.domain.financial_line import (
    FinancialLine,
    FinancialLineDraft,
    FundingAllocation,
    PaymentMilestone,
    RevenueMonth,
)
from core.domain.identifiers import generate_fl_number, generate_id, sequential_fl_number
from core.domain.project import Project
from core.domain.purchase_order import PurchaseOrder

__all__ = [
    "generate_id",
    "generate_fl_number",
    "sequential_fl_number",
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
