from __future__ import annotations

import logging
from typing import List

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import NotFoundError, ValidationError
from core.interfaces import ProjectRepository, PurchaseOrderRepository
from core.models import PurchaseOrder, PurchaseOrderStatus
from core.services.financial_line.helpers import normalize_currency

logger = logging.getLogger(__name__)


class PurchaseOrderService:
    def __init__(
        self,
        session: Session,
        po_repo: PurchaseOrderRepository,
        project_repo: ProjectRepository,
    ):
        self._session: Session = session
        self._po_repo: PurchaseOrderRepository = po_repo
        self._project_repo: ProjectRepository = project_repo

    def create_purchase_order(
        self,
        project_id: str,
        po_no: str,
        contract_no: str,
        po_amount: float,
        po_currency: str | None = None,
        status: PurchaseOrderStatus = PurchaseOrderStatus.ACTIVE,
        customer_name: str | None = None,
    ) -> PurchaseOrder:
        project = self._project_repo.get(project_id)
        if project is None:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        if not po_no or not po_no.strip():
            raise ValidationError("PO number cannot be empty.", code="PO_NO_EMPTY", field="po_no")
        if self._po_repo.get_by_po_no(po_no.strip()) is not None:
            raise ValidationError("A purchase order with this number already exists.", code="PO_NO_DUPLICATE", field="po_no")
        if po_amount is None or float(po_amount) <= 0:
            raise ValidationError("PO amount must be greater than 0.", code="PO_AMOUNT_INVALID", field="po_amount")

        po = PurchaseOrder.create(
            po_no=po_no.strip(),
            contract_no=(contract_no or "").strip(),
            project_id=project_id,
            po_currency=normalize_currency(po_currency, project.currency),
            po_amount=float(po_amount),
            status=status,
            customer_name=(customer_name or "").strip() or None,
        )
        try:
            self._po_repo.add(po)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            raise e
        logger.info("Created purchase order %s for project %s", po.po_no, project_id)
        domain_events.purchase_orders_changed.emit(project_id)
        return po

    def list_purchase_orders(self, project_id: str) -> List[PurchaseOrder]:
        return self._po_repo.list_by_project(project_id)

    def get_purchase_order(self, po_no: str) -> PurchaseOrder:
        po = self._po_repo.get_by_po_no(po_no)
        if po is None:
            raise NotFoundError("Purchase order not found.", code="PO_NOT_FOUND")
        return po


__all__ = ["PurchaseOrderService"]
