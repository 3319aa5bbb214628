from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.interfaces import PurchaseOrderRepository
from core.models import PurchaseOrder
from infra.db.models import PurchaseOrderORM
from infra.db.purchase_order.mapper import purchase_order_from_orm, purchase_order_to_orm


class SqlAlchemyPurchaseOrderRepository(PurchaseOrderRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, po: PurchaseOrder) -> None:
        self.session.add(purchase_order_to_orm(po))

    def get(self, po_id: str) -> Optional[PurchaseOrder]:
        obj = self.session.get(PurchaseOrderORM, po_id)
        return purchase_order_from_orm(obj) if obj else None

    def get_by_po_no(self, po_no: str) -> Optional[PurchaseOrder]:
        stmt = select(PurchaseOrderORM).where(PurchaseOrderORM.po_no == po_no)
        obj = self.session.execute(stmt).scalars().first()
        return purchase_order_from_orm(obj) if obj else None

    def list_by_project(self, project_id: str) -> List[PurchaseOrder]:
        stmt = (
            select(PurchaseOrderORM)
            .where(PurchaseOrderORM.project_id == project_id)
            .order_by(PurchaseOrderORM.po_no)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [purchase_order_from_orm(row) for row in rows]


__all__ = ["SqlAlchemyPurchaseOrderRepository"]
