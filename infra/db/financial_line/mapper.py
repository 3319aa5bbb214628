from __future__ import annotations

from typing import Sequence

from core.models import FinancialLine, FundingAllocation, PaymentMilestone, RevenueMonth
from infra.db.models import (
    FinancialLineORM,
    FundingAllocationORM,
    PaymentMilestoneORM,
    RevenueMonthORM,
)

# scalar columns shared one-to-one between FinancialLine and FinancialLineORM
_FL_COLUMNS = (
    "id",
    "fl_no",
    "project_id",
    "fl_name",
    "contract_type",
    "location_type",
    "execution_entity",
    "currency",
    "timesheet_approver",
    "schedule_start",
    "schedule_finish",
    "billing_rate",
    "rate_uom",
    "effort",
    "effort_uom",
    "revenue_amount",
    "expected_revenue",
    "total_funding",
    "total_planned_revenue",
    "status",
    "notes",
    "created_at",
    "updated_at",
)


def financial_line_to_orm(fl: FinancialLine) -> FinancialLineORM:
    return FinancialLineORM(**{name: getattr(fl, name) for name in _FL_COLUMNS})


def financial_line_values(fl: FinancialLine) -> dict:
    return {name: getattr(fl, name) for name in _FL_COLUMNS if name not in ("id", "created_at")}


def financial_line_from_orm(
    obj: FinancialLineORM,
    funding: Sequence[FundingAllocationORM] = (),
    revenue: Sequence[RevenueMonthORM] = (),
    milestones: Sequence[PaymentMilestoneORM] = (),
) -> FinancialLine:
    return FinancialLine(
        **{name: getattr(obj, name) for name in _FL_COLUMNS},
        funding=[funding_from_orm(row) for row in funding],
        revenue_planning=[revenue_month_from_orm(row) for row in revenue],
        payment_milestones=[milestone_from_orm(row) for row in milestones],
    )


def funding_to_orm(fl_id: str, position: int, row: FundingAllocation) -> FundingAllocationORM:
    return FundingAllocationORM(
        financial_line_id=fl_id,
        position=position,
        po_no=row.po_no,
        contract_no=row.contract_no,
        project_currency=row.project_currency,
        po_currency=row.po_currency,
        unit_rate=row.unit_rate,
        funding_units=row.funding_units,
        uom=row.uom,
        funding_value_project=row.funding_value_project,
        funding_amount_po_currency=row.funding_amount_po_currency,
        available_po_line_in_po=row.available_po_line_in_po,
        available_po_line_in_project=row.available_po_line_in_project,
    )


def funding_from_orm(obj: FundingAllocationORM) -> FundingAllocation:
    return FundingAllocation(
        po_no=obj.po_no,
        contract_no=obj.contract_no,
        project_currency=obj.project_currency,
        po_currency=obj.po_currency,
        unit_rate=obj.unit_rate,
        funding_units=obj.funding_units,
        uom=obj.uom,
        funding_value_project=obj.funding_value_project,
        funding_amount_po_currency=obj.funding_amount_po_currency,
        available_po_line_in_po=obj.available_po_line_in_po,
        available_po_line_in_project=obj.available_po_line_in_project,
    )


def revenue_month_to_orm(fl_id: str, position: int, month: RevenueMonth) -> RevenueMonthORM:
    return RevenueMonthORM(
        financial_line_id=fl_id,
        position=position,
        month=month.month,
        planned_units=month.planned_units,
        planned_revenue=month.planned_revenue,
        actual_units=month.actual_units,
        actual_revenue=month.actual_revenue,
        forecasted_units=month.forecasted_units,
        forecasted_revenue=month.forecasted_revenue,
    )


def revenue_month_from_orm(obj: RevenueMonthORM) -> RevenueMonth:
    return RevenueMonth(
        month=obj.month,
        planned_units=obj.planned_units,
        planned_revenue=obj.planned_revenue,
        actual_units=obj.actual_units,
        actual_revenue=obj.actual_revenue,
        forecasted_units=obj.forecasted_units,
        forecasted_revenue=obj.forecasted_revenue,
    )


def milestone_to_orm(fl_id: str, position: int, milestone: PaymentMilestone) -> PaymentMilestoneORM:
    return PaymentMilestoneORM(
        financial_line_id=fl_id,
        position=position,
        milestone_name=milestone.milestone_name,
        due_date=milestone.due_date,
        amount=milestone.amount,
        notes=milestone.notes,
        status=milestone.status,
    )


def milestone_from_orm(obj: PaymentMilestoneORM) -> PaymentMilestone:
    return PaymentMilestone(
        milestone_name=obj.milestone_name,
        due_date=obj.due_date,
        amount=obj.amount,
        notes=obj.notes,
        status=obj.status,
    )


__all__ = [
    "financial_line_to_orm",
    "financial_line_from_orm",
    "financial_line_values",
    "funding_to_orm",
    "revenue_month_to_orm",
    "milestone_to_orm",
]
