from .financial_line import FinancialLineService, FinancialLineWizard
from .project import ProjectService
from .purchase_order import PurchaseOrderService

__all__ = [
    "ProjectService",
    "PurchaseOrderService",
    "FinancialLineService",
    "FinancialLineWizard",
]
