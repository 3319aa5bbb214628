from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.domain.enums import PurchaseOrderStatus
from core.domain.identifiers import generate_id


@dataclass
class PurchaseOrder:
    id: str
    po_no: str
    contract_no: str
    project_id: str
    po_currency: str
    po_amount: float
    status: PurchaseOrderStatus = PurchaseOrderStatus.ACTIVE
    customer_name: Optional[str] = None

    @staticmethod
    def create(
        po_no: str,
        contract_no: str,
        project_id: str,
        po_currency: str,
        po_amount: float,
        status: PurchaseOrderStatus = PurchaseOrderStatus.ACTIVE,
        customer_name: Optional[str] = None,
    ) -> "PurchaseOrder":
        return PurchaseOrder(
            id=generate_id(),
            po_no=po_no,
            contract_no=contract_no,
            project_id=project_id,
            po_currency=po_currency,
            po_amount=po_amount,
            status=status,
            customer_name=customer_name,
        )


__all__ = ["PurchaseOrder"]
