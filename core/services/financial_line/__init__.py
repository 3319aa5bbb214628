from .basic_details import defaults_from_project, derive_revenue, validate_basic_details
from .funding import FundingLedger, sum_po_allocations
from .milestones import MilestoneSchedule
from .models import FinancialLineStats
from .revenue import RevenuePlanGrid
from .service import FinancialLineService
from .steps import Step1Data, Step2Data, Step3Data, Step4Data
from .wizard import STEP_TITLES, FinancialLineWizard, WizardStep

__all__ = [
    "FinancialLineService",
    "FinancialLineStats",
    "FinancialLineWizard",
    "WizardStep",
    "STEP_TITLES",
    "FundingLedger",
    "RevenuePlanGrid",
    "MilestoneSchedule",
    "Step1Data",
    "Step2Data",
    "Step3Data",
    "Step4Data",
    "sum_po_allocations",
    "defaults_from_project",
    "derive_revenue",
    "validate_basic_details",
]
