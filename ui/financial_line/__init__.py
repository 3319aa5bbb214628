from .models import FinancialLineTableModel
from .tab import FinancialLinesTab
from .wizard_dialog import FinancialLineWizardDialog

__all__ = [
    "FinancialLinesTab",
    "FinancialLineTableModel",
    "FinancialLineWizardDialog",
]
