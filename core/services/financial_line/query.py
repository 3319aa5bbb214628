from __future__ import annotations

from typing import List, Optional

from core.exceptions import NotFoundError
from core.interfaces import FinancialLineRepository, ProjectRepository, PurchaseOrderRepository
from core.models import (
    ContractType,
    FinancialLine,
    FinancialLineStatus,
    LocationType,
    Project,
    PurchaseOrder,
)
from core.services.financial_line.funding import sum_po_allocations
from core.services.financial_line.models import FinancialLineStats


class FinancialLineQueryMixin:
    _project_repo: ProjectRepository
    _po_repo: PurchaseOrderRepository
    _fl_repo: FinancialLineRepository

    def get_project(self, project_id: str) -> Project:
        project = self._project_repo.get(project_id)
        if project is None:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        return project

    def list_purchase_orders(self, project_id: str) -> List[PurchaseOrder]:
        return self._po_repo.list_by_project(project_id)

    def get_financial_line(self, fl_id: str) -> FinancialLine:
        fl = self._fl_repo.get(fl_id)
        if fl is None:
            raise NotFoundError("Financial line not found.", code="FL_NOT_FOUND")
        return fl

    def list_financial_lines(
        self,
        project_id: Optional[str] = None,
        *,
        status: Optional[FinancialLineStatus] = None,
        contract_type: Optional[ContractType] = None,
        location_type: Optional[LocationType] = None,
        search: Optional[str] = None,
    ) -> List[FinancialLine]:
        rows = self._fl_repo.list_by_project(project_id) if project_id else self._fl_repo.list_all()
        if status is not None:
            rows = [fl for fl in rows if fl.status == status]
        if contract_type is not None:
            rows = [fl for fl in rows if fl.contract_type == contract_type]
        if location_type is not None:
            rows = [fl for fl in rows if fl.location_type == location_type]
        needle = (search or "").strip().lower()
        if needle:
            rows = [
                fl
                for fl in rows
                if needle in fl.fl_no.lower()
                or needle in fl.fl_name.lower()
                or needle in (fl.timesheet_approver or "").lower()
            ]
        return rows

    def po_allocations(self, project_id: str) -> dict[str, float]:
        return sum_po_allocations(self._fl_repo.list_by_project(project_id))

    def get_stats(self, project_id: Optional[str] = None) -> FinancialLineStats:
        rows = self.list_financial_lines(project_id)

        def count(status: FinancialLineStatus) -> int:
            return sum(1 for fl in rows if fl.status == status)

        return FinancialLineStats(
            total=len(rows),
            draft=count(FinancialLineStatus.DRAFT),
            active=count(FinancialLineStatus.ACTIVE),
            completed=count(FinancialLineStatus.COMPLETED),
            cancelled=count(FinancialLineStatus.CANCELLED),
            total_funding=sum(fl.total_funding for fl in rows),
            total_planned_revenue=sum(fl.total_planned_revenue for fl in rows),
        )


__all__ = ["FinancialLineQueryMixin"]
