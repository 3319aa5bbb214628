from infra.db.purchase_order.mapper import purchase_order_from_orm, purchase_order_to_orm
from infra.db.purchase_order.repository import SqlAlchemyPurchaseOrderRepository

__all__ = [
    "purchase_order_to_orm",
    "purchase_order_from_orm",
    "SqlAlchemyPurchaseOrderRepository",
]
