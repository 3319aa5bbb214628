from __future__ import annotations

from core.models import PurchaseOrder
from infra.db.models import PurchaseOrderORM


def purchase_order_to_orm(po: PurchaseOrder) -> PurchaseOrderORM:
    return PurchaseOrderORM(
        id=po.id,
        po_no=po.po_no,
        contract_no=po.contract_no,
        project_id=po.project_id,
        po_currency=po.po_currency,
        po_amount=po.po_amount,
        status=po.status,
        customer_name=po.customer_name,
    )


def purchase_order_from_orm(obj: PurchaseOrderORM) -> PurchaseOrder:
    return PurchaseOrder(
        id=obj.id,
        po_no=obj.po_no,
        contract_no=obj.contract_no,
        project_id=obj.project_id,
        po_currency=obj.po_currency,
        po_amount=obj.po_amount,
        status=obj.status,
        customer_name=obj.customer_name,
    )


__all__ = ["purchase_order_to_orm", "purchase_order_from_orm"]
