# infra/db/models.py
from __future__ import annotations
from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    Date,
    DateTime,
    Enum as SAEnum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from infra.db.base import Base
from core.models import (
    ContractType,
    FinancialLineStatus,
    LocationType,
    MilestoneStatus,
    ProjectStatus,
    PurchaseOrderStatus,
    UnitOfMeasure,
)


class ProjectORM(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_code: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    status: Mapped[ProjectStatus] = mapped_column(
        SAEnum(ProjectStatus), default=ProjectStatus.ACTIVE, nullable=False
    )

    legal_entity: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    currency: Mapped[Optional[str]] = mapped_column(String(8), nullable=True)  # EUR, USD, etc.
    billing_type: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    project_manager: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    delivery_manager: Mapped[Optional[str]] = mapped_column(String, nullable=True)


class PurchaseOrderORM(Base):
    __tablename__ = "purchase_orders"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    po_no: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    contract_no: Mapped[str] = mapped_column(String, default="")
    project_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    po_currency: Mapped[str] = mapped_column(String(8), nullable=False)
    po_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    status: Mapped[PurchaseOrderStatus] = mapped_column(
        SAEnum(PurchaseOrderStatus), default=PurchaseOrderStatus.ACTIVE, nullable=False
    )
    customer_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)

Index("idx_purchase_orders_project_id", PurchaseOrderORM.project_id)


class FinancialLineORM(Base):
    __tablename__ = "financial_lines"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    fl_no: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    project_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    fl_name: Mapped[str] = mapped_column(String, nullable=False)
    contract_type: Mapped[ContractType] = mapped_column(SAEnum(ContractType), nullable=False)
    location_type: Mapped[LocationType] = mapped_column(SAEnum(LocationType), nullable=False)
    execution_entity: Mapped[str] = mapped_column(String, default="")
    currency: Mapped[str] = mapped_column(String(8), nullable=False)
    timesheet_approver: Mapped[str] = mapped_column(String, default="")

    schedule_start: Mapped[date] = mapped_column(Date, nullable=False)
    schedule_finish: Mapped[date] = mapped_column(Date, nullable=False)

    billing_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    rate_uom: Mapped[UnitOfMeasure] = mapped_column(SAEnum(UnitOfMeasure), nullable=False)
    effort: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    effort_uom: Mapped[UnitOfMeasure] = mapped_column(SAEnum(UnitOfMeasure), nullable=False)
    revenue_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    expected_revenue: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    total_funding: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total_planned_revenue: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    status: Mapped[FinancialLineStatus] = mapped_column(
        SAEnum(FinancialLineStatus), default=FinancialLineStatus.DRAFT, nullable=False
    )
    notes: Mapped[str] = mapped_column(String, default="")

    created_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

Index("idx_financial_lines_project_id", FinancialLineORM.project_id)
Index("idx_financial_lines_status", FinancialLineORM.status)


class FundingAllocationORM(Base):
    __tablename__ = "fl_funding_allocations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    financial_line_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("financial_lines.id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    po_no: Mapped[str] = mapped_column(String, nullable=False)
    contract_no: Mapped[str] = mapped_column(String, default="")
    project_currency: Mapped[str] = mapped_column(String(8), default="")
    po_currency: Mapped[str] = mapped_column(String(8), default="")
    unit_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    funding_units: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    uom: Mapped[UnitOfMeasure] = mapped_column(SAEnum(UnitOfMeasure), nullable=False)
    funding_value_project: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    funding_amount_po_currency: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    available_po_line_in_po: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    available_po_line_in_project: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

Index("idx_fl_funding_fl", FundingAllocationORM.financial_line_id)
Index("idx_fl_funding_po_no", FundingAllocationORM.po_no)


class RevenueMonthORM(Base):
    __tablename__ = "fl_revenue_months"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    financial_line_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("financial_lines.id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    month: Mapped[str] = mapped_column(String(7), nullable=False)  # YYYY-MM
    planned_units: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    planned_revenue: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    actual_units: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    actual_revenue: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    forecasted_units: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    forecasted_revenue: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

Index("idx_fl_revenue_fl", RevenueMonthORM.financial_line_id)


class PaymentMilestoneORM(Base):
    __tablename__ = "fl_payment_milestones"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    financial_line_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("financial_lines.id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    milestone_name: Mapped[str] = mapped_column(String, nullable=False)
    due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    notes: Mapped[str] = mapped_column(String, default="")
    status: Mapped[MilestoneStatus] = mapped_column(
        SAEnum(MilestoneStatus), default=MilestoneStatus.PENDING, nullable=False
    )

Index("idx_fl_milestones_fl", PaymentMilestoneORM.financial_line_id)
