# infra/db/repositories.py
from infra.db.financial_line.repository import SqlAlchemyFinancialLineRepository
from infra.db.project.repository import SqlAlchemyProjectRepository
from infra.db.purchase_order.repository import SqlAlchemyPurchaseOrderRepository

__all__ = [
    "SqlAlchemyProjectRepository",
    "SqlAlchemyPurchaseOrderRepository",
    "SqlAlchemyFinancialLineRepository",
]
