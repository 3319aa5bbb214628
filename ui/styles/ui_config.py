from enum import Enum

from PySide6.QtCore import QSize, Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QSizePolicy

from ui.styles.theme import MUTED, PRIMARY

_OK = "#0F766E"
_ERROR = "#B42318"
_WARN = "#B45309"


class CurrencyType(str, Enum):
    """Project currencies offered in step 1; PO currencies come from the PO itself."""

    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    INR = "INR"
    JPY = "JPY"
    AUD = "AUD"
    CAD = "CAD"
    CHF = "CHF"
    SGD = "SGD"
    AED = "AED"


def _group_title_font() -> QFont:
    font = QFont()
    font.setPointSize(10)
    font.setBold(True)
    return font


class UIConfig:
    """Sizes, labels and inline styles shared by the console widgets."""

    GROUPBOX_TITLE_FONT = _group_title_font()

    # windows
    DEFAULT_WINDOW_SIZE = QSize(1200, 700)
    MIN_WINDOW_SIZE = QSize(800, 500)
    WIZARD_MIN_SIZE = QSize(960, 620)

    # layout
    SPACING_SM = 8
    SPACING_MD = 12
    SPACING_LG = 24
    MARGIN_MD = 12

    ALIGN_RIGHT = Qt.AlignRight
    ALIGN_CENTER = Qt.AlignVCenter
    ALIGN_TOP = Qt.AlignTop

    # controls
    BUTTON_HEIGHT = 28
    BUTTON_MIN_WIDTH_SM = 120
    BTN_FIXED_HEIGHT = QSizePolicy(QSizePolicy.Preferred, QSizePolicy.Fixed)
    INPUT_HEIGHT = 28
    INPUT_MIN_WIDTH = 160
    INPUT_POLICY = QSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
    COMBO_MAX_VISIBLE = 10
    COMBO_MIN_WIDTH_MD = 160
    TEXTEDIT_MIN_HEIGHT = 80
    TEXTEDIT_POLICY = QSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
    DATE_FORMAT = "yyyy-MM-dd"

    # money is entered in whole currency units with cents; effort in units of the UOM
    MONEY_DECIMALS = 2
    MONEY_MIN = 0.0
    MONEY_MAX = 1_000_000_000.0
    MONEY_STEP = 100.0
    RATE_STEP = 10.0
    UNITS_DECIMALS = 2
    UNITS_MAX = 1_000_000.0
    UNITS_STEP = 1.0

    # Financial Lines tab
    NEW_FINANCIAL_LINE_LABEL = "New financial line"
    EDIT_LABEL = "Edit"
    DELETE_LABEL = "Delete"
    REFRESH_BUTTON_LABEL = "Refresh"
    ALL_PROJECTS_LABEL = "All projects"
    ALL_STATUSES_LABEL = "All statuses"
    SEARCH_PLACEHOLDER = "Search FL no, name or approver..."
    FINANCIAL_LINE_HEADERS = [
        "FL No",
        "FL Name",
        "Contract",
        "Location",
        "Schedule",
        "Funding",
        "Planned Revenue",
        "Status",
    ]

    # wizard
    WIZARD_CREATE_TITLE = "Create Financial Line"
    WIZARD_EDIT_TITLE = "Edit Financial Line"
    BACK_LABEL = "Back"
    NEXT_LABEL = "Next"
    CANCEL_LABEL = "Cancel"
    SUBMIT_CREATE_LABEL = "Create FL"
    SUBMIT_UPDATE_LABEL = "Update FL"
    SAVING_LABEL = "Saving..."
    ADD_FUNDING_ROW_LABEL = "Add PO"
    ADD_MILESTONE_LABEL = "Add milestone"
    REMOVE_SELECTED_LABEL = "Remove selected"
    FUNDING_HEADERS = [
        "PO No",
        "Contract No",
        "PO Currency",
        "Unit Rate",
        "Units",
        "UOM",
        "Funding Value",
        "Amount (PO Cur.)",
        "Available in PO",
    ]
    # {unit} becomes the effort UOM label picked in step 1
    REVENUE_HEADERS_TEMPLATE = [
        "Month",
        "Planned {unit}",
        "Planned Revenue",
        "Actual {unit}",
        "Actual Revenue",
        "Forecast {unit}",
        "Forecast Revenue",
    ]
    MILESTONE_HEADERS = ["Milestone", "Due Date", "Amount", "Notes"]

    # inline styles
    INFO_TEXT_STYLE = f"color: {MUTED};"
    NOTE_STYLE_SHEET = f"color: {MUTED}; font-style: italic;"
    TITLE_LARGE_STYLE = f"font-size: 16px; font-weight: bold; color: {PRIMARY};"
    STEP_ACTIVE_STYLE = f"font-weight: bold; color: {PRIMARY}; padding: 4px 8px;"
    STEP_DONE_STYLE = f"color: {_OK}; padding: 4px 8px;"
    STEP_PENDING_STYLE = f"color: {MUTED}; padding: 4px 8px;"
    BALANCED_STYLE = f"color: {_OK}; font-weight: bold;"
    UNBALANCED_STYLE = f"color: {_ERROR}; font-weight: bold;"
    WARNING_TEXT_STYLE = f"color: {_WARN};"
    FIELD_ERROR_STYLE = f"color: {_ERROR};"
