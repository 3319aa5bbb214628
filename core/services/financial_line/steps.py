from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional

from core.models import (
    ContractType,
    FinancialLineDraft,
    FinancialLineStatus,
    FundingAllocation,
    LocationType,
    PaymentMilestone,
    RevenueMonth,
    UnitOfMeasure,
)


@dataclass
class Step1Data:
    """Basic and revenue details. Blank until the user (or project defaults) fill it in."""
    project_id: str = ""
    fl_name: str = ""
    contract_type: ContractType = ContractType.TIME_AND_MATERIALS
    location_type: LocationType = LocationType.OFFSHORE
    execution_entity: str = ""
    currency: str = ""
    timesheet_approver: str = ""
    schedule_start: Optional[date] = None
    schedule_finish: Optional[date] = None
    billing_rate: float = 0.0
    rate_uom: UnitOfMeasure = UnitOfMeasure.DAY
    effort: float = 0.0
    effort_uom: UnitOfMeasure = UnitOfMeasure.DAY
    revenue_amount: float = 0.0
    expected_revenue: float = 0.0
    notes: str = ""


@dataclass(frozen=True)
class Step2Data:
    funding: tuple[FundingAllocation, ...]
    total_funding: float
    total_units: float


@dataclass(frozen=True)
class Step3Data:
    revenue_planning: tuple[RevenueMonth, ...]
    total_planned_revenue: float


@dataclass(frozen=True)
class Step4Data:
    payment_milestones: tuple[PaymentMilestone, ...] = field(default_factory=tuple)


# Each stage only offers the next legal transition, so a payload cannot be
# built before every required step has produced validated data.

@dataclass(frozen=True)
class BasicStage:
    step1: Step1Data

    def with_funding(self, step2: Step2Data) -> "FundedStage":
        return FundedStage(self.step1, step2)


@dataclass(frozen=True)
class FundedStage:
    step1: Step1Data
    step2: Step2Data

    def with_revenue_plan(self, step3: Step3Data) -> "PlannedStage":
        return PlannedStage(self.step1, self.step2, step3)


@dataclass(frozen=True)
class PlannedStage:
    step1: Step1Data
    step2: Step2Data
    step3: Step3Data

    def with_milestones(self, step4: Step4Data) -> "CompleteStage":
        return CompleteStage(self.step1, self.step2, self.step3, step4)

    def without_milestones(self) -> "CompleteStage":
        return CompleteStage(self.step1, self.step2, self.step3, Step4Data())


@dataclass(frozen=True)
class CompleteStage:
    step1: Step1Data
    step2: Step2Data
    step3: Step3Data
    step4: Step4Data

    def build(self, fl_no: str, status: FinancialLineStatus = FinancialLineStatus.DRAFT) -> FinancialLineDraft:
        s1 = self.step1
        effort = self.step2.total_units if self.step2.total_units > 0 else s1.effort
        revenue = s1.billing_rate * effort
        return FinancialLineDraft(
            fl_no=fl_no,
            project_id=s1.project_id,
            fl_name=s1.fl_name,
            contract_type=s1.contract_type,
            location_type=s1.location_type,
            execution_entity=s1.execution_entity,
            currency=s1.currency,
            timesheet_approver=s1.timesheet_approver,
            schedule_start=s1.schedule_start,
            schedule_finish=s1.schedule_finish,
            billing_rate=s1.billing_rate,
            rate_uom=s1.rate_uom,
            effort=effort,
            effort_uom=s1.effort_uom,
            revenue_amount=revenue,
            expected_revenue=revenue,
            funding=[replace(row) for row in self.step2.funding],
            total_funding=self.step2.total_funding,
            revenue_planning=[replace(month) for month in self.step3.revenue_planning],
            total_planned_revenue=self.step3.total_planned_revenue,
            payment_milestones=[replace(m) for m in self.step4.payment_milestones],
            status=status,
            notes=s1.notes,
        )


WizardStage = BasicStage | FundedStage | PlannedStage


__all__ = [
    "Step1Data",
    "Step2Data",
    "Step3Data",
    "Step4Data",
    "BasicStage",
    "FundedStage",
    "PlannedStage",
    "CompleteStage",
    "WizardStage",
]
