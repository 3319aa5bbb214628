from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date, datetime, timezone
from typing import Optional

from core.domain.enums import (
    ContractType,
    FinancialLineStatus,
    LocationType,
    MilestoneStatus,
    UnitOfMeasure,
)
from core.domain.identifiers import generate_id


@dataclass
class FundingAllocation:
    po_no: str = ""
    contract_no: str = ""
    project_currency: str = ""
    po_currency: str = ""
    unit_rate: float = 0.0
    funding_units: float = 0.0
    uom: UnitOfMeasure = UnitOfMeasure.DAY
    funding_value_project: float = 0.0
    funding_amount_po_currency: float = 0.0
    available_po_line_in_po: float = 0.0
    available_po_line_in_project: float = 0.0


@dataclass
class RevenueMonth:
    month: str  # YYYY-MM
    planned_units: float = 0.0
    planned_revenue: float = 0.0
    actual_units: float = 0.0
    actual_revenue: float = 0.0
    forecasted_units: float = 0.0
    forecasted_revenue: float = 0.0

    @property
    def has_user_data(self) -> bool:
        return bool(self.planned_units or self.planned_revenue)


@dataclass
class PaymentMilestone:
    milestone_name: str = ""
    due_date: Optional[date] = None
    amount: float = 0.0
    notes: str = ""
    status: MilestoneStatus = MilestoneStatus.PENDING


@dataclass
class FinancialLineDraft:
    """Aggregated wizard payload handed to the backend on submit."""
    fl_no: str
    project_id: str
    fl_name: str
    contract_type: ContractType
    location_type: LocationType
    execution_entity: str
    currency: str
    timesheet_approver: str
    schedule_start: date
    schedule_finish: date
    billing_rate: float
    rate_uom: UnitOfMeasure
    effort: float
    effort_uom: UnitOfMeasure
    revenue_amount: float
    expected_revenue: float
    funding: list[FundingAllocation] = field(default_factory=list)
    total_funding: float = 0.0
    revenue_planning: list[RevenueMonth] = field(default_factory=list)
    total_planned_revenue: float = 0.0
    payment_milestones: list[PaymentMilestone] = field(default_factory=list)
    status: FinancialLineStatus = FinancialLineStatus.DRAFT
    notes: str = ""


@dataclass
class FinancialLine(FinancialLineDraft):
    id: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @staticmethod
    def create(draft: FinancialLineDraft) -> "FinancialLine":
        now = datetime.now(timezone.utc)
        values = {f.name: getattr(draft, f.name) for f in fields(FinancialLineDraft)}
        return FinancialLine(id=generate_id(), created_at=now, updated_at=now, **values)

    def to_draft(self) -> FinancialLineDraft:
        return FinancialLineDraft(**{f.name: getattr(self, f.name) for f in fields(FinancialLineDraft)})


__all__ = [
    "FundingAllocation",
    "RevenueMonth",
    "PaymentMilestone",
    "FinancialLineDraft",
    "FinancialLine",
]
