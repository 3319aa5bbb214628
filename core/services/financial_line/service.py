from __future__ import annotations

from sqlalchemy.orm import Session

from core.interfaces import FinancialLineRepository, ProjectRepository, PurchaseOrderRepository
from core.services.financial_line.lifecycle import FinancialLineLifecycleMixin
from core.services.financial_line.query import FinancialLineQueryMixin


class FinancialLineService(FinancialLineLifecycleMixin, FinancialLineQueryMixin):
    """
    Stores financial lines and serves the data the wizard needs.

    Implements the wizard backend protocol (get_project, list_purchase_orders,
    list_financial_lines, create_financial_line, update_financial_line).
    """

    def __init__(
        self,
        session: Session,
        project_repo: ProjectRepository,
        po_repo: PurchaseOrderRepository,
        fl_repo: FinancialLineRepository,
    ):
        self._session: Session = session
        self._project_repo: ProjectRepository = project_repo
        self._po_repo: PurchaseOrderRepository = po_repo
        self._fl_repo: FinancialLineRepository = fl_repo


__all__ = ["FinancialLineService"]
