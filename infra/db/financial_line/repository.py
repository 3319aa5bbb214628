from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from core.interfaces import FinancialLineRepository
from core.models import FinancialLine
from infra.db.financial_line.mapper import (
    financial_line_from_orm,
    financial_line_to_orm,
    financial_line_values,
    funding_to_orm,
    milestone_to_orm,
    revenue_month_to_orm,
)
from infra.db.models import (
    FinancialLineORM,
    FundingAllocationORM,
    PaymentMilestoneORM,
    RevenueMonthORM,
)


class SqlAlchemyFinancialLineRepository(FinancialLineRepository):
    """Financial lines with their funding, revenue plan and milestone child rows."""

    def __init__(self, session: Session):
        self.session = session

    def add(self, fl: FinancialLine) -> None:
        self.session.add(financial_line_to_orm(fl))
        # children reference the parent row; flush it first so FK checks pass
        self.session.flush()
        self._add_children(fl)

    def update(self, fl: FinancialLine) -> None:
        obj = self.session.get(FinancialLineORM, fl.id)
        if obj is None:
            raise NotFoundError("Financial line not found.", code="FL_NOT_FOUND")
        for key, value in financial_line_values(fl).items():
            setattr(obj, key, value)
        self._delete_children(fl.id)
        self._add_children(fl)

    def delete(self, fl_id: str) -> None:
        self._delete_children(fl_id)
        self.session.execute(delete(FinancialLineORM).where(FinancialLineORM.id == fl_id))

    def get(self, fl_id: str) -> Optional[FinancialLine]:
        obj = self.session.get(FinancialLineORM, fl_id)
        return self._load(obj) if obj else None

    def get_by_fl_no(self, fl_no: str) -> Optional[FinancialLine]:
        stmt = select(FinancialLineORM).where(FinancialLineORM.fl_no == fl_no)
        obj = self.session.execute(stmt).scalars().first()
        return self._load(obj) if obj else None

    def list_all(self) -> List[FinancialLine]:
        stmt = select(FinancialLineORM).order_by(FinancialLineORM.fl_no)
        return [self._load(row) for row in self.session.execute(stmt).scalars().all()]

    def list_by_project(self, project_id: str) -> List[FinancialLine]:
        stmt = (
            select(FinancialLineORM)
            .where(FinancialLineORM.project_id == project_id)
            .order_by(FinancialLineORM.fl_no)
        )
        return [self._load(row) for row in self.session.execute(stmt).scalars().all()]

    def count_with_prefix(self, prefix: str) -> int:
        stmt = select(func.count()).select_from(FinancialLineORM).where(FinancialLineORM.fl_no.like(f"{prefix}%"))
        return int(self.session.execute(stmt).scalar_one())

    def _add_children(self, fl: FinancialLine) -> None:
        self.session.add_all([funding_to_orm(fl.id, i, row) for i, row in enumerate(fl.funding)])
        self.session.add_all([revenue_month_to_orm(fl.id, i, m) for i, m in enumerate(fl.revenue_planning)])
        self.session.add_all([milestone_to_orm(fl.id, i, m) for i, m in enumerate(fl.payment_milestones)])

    def _delete_children(self, fl_id: str) -> None:
        for model in (FundingAllocationORM, RevenueMonthORM, PaymentMilestoneORM):
            self.session.execute(delete(model).where(model.financial_line_id == fl_id))

    def _load(self, obj: FinancialLineORM) -> FinancialLine:
        def children(model):
            stmt = select(model).where(model.financial_line_id == obj.id).order_by(model.position)
            return self.session.execute(stmt).scalars().all()

        return financial_line_from_orm(
            obj,
            funding=children(FundingAllocationORM),
            revenue=children(RevenueMonthORM),
            milestones=children(PaymentMilestoneORM),
        )


__all__ = ["SqlAlchemyFinancialLineRepository"]
