from .service import PurchaseOrderService

__all__ = ["PurchaseOrderService"]
