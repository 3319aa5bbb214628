# ui/styles/theme.py

from __future__ import annotations
from PySide6.QtWidgets import QApplication

# console palette
PRIMARY = "#0F4C81"
PRIMARY_DARK = "#0B3A63"
SURFACE = "#F5F7FA"
BORDER = "#CBD5E1"
TEXT = "#1E293B"
MUTED = "#64748B"


def base_stylesheet() -> str:
    """
    Global QSS for the console.
    Table look lives here too, so grids built by style_table() and the
    wizard's editable QTableWidgets render the same.
    """
    return f"""
    QWidget {{
        font-family: "Segoe UI";
        font-size: 10pt;
        color: {TEXT};
    }}

    QMainWindow, QDialog {{
        background-color: {SURFACE};
    }}

    QTabWidget::pane {{
        border-top: 1px solid {BORDER};
        background: {SURFACE};
    }}
    QTabBar::tab {{
        background: #E2E8F0;
        border: 1px solid {BORDER};
        padding: 6px 14px;
        border-top-left-radius: 4px;
        border-top-right-radius: 4px;
    }}
    QTabBar::tab:selected {{
        background: #ffffff;
        color: {PRIMARY};
    }}

    QGroupBox {{
        border: 1px solid {BORDER};
        border-radius: 6px;
        margin-top: 10px;
        background-color: #ffffff;
    }}
    QGroupBox::title {{
        subcontrol-origin: margin;
        subcontrol-position: top left;
        padding: 2px 8px;
        color: {MUTED};
    }}

    QPushButton {{
        background-color: {PRIMARY};
        color: white;
        border-radius: 4px;
        padding: 4px 12px;
        border: 1px solid {PRIMARY_DARK};
    }}
    QPushButton:hover {{
        background-color: {PRIMARY_DARK};
    }}
    QPushButton:default {{
        font-weight: 600;
    }}
    QPushButton:disabled {{
        background-color: #CBD5E1;
        border-color: #94A3B8;
        color: {MUTED};
    }}

    QLineEdit, QComboBox, QDoubleSpinBox, QDateEdit, QTextEdit {{
        background-color: #ffffff;
        border-radius: 3px;
        border: 1px solid {BORDER};
        padding: 2px 4px;
    }}
    QLineEdit:focus, QComboBox:focus, QDoubleSpinBox:focus, QDateEdit:focus, QTextEdit:focus {{
        border: 1px solid {PRIMARY};
    }}

    QTableView, QTableWidget {{
        background-color: #ffffff;
        alternate-background-color: #F8FAFC;
        border: 1px solid {BORDER};
        gridline-color: #E2E8F0;
    }}
    QTableView::item:selected, QTableWidget::item:selected {{
        background-color: #DBEAFE;
        color: {TEXT};
    }}
    QHeaderView::section {{
        background-color: #EEF2F7;
        color: {MUTED};
        padding: 4px 6px;
        border: 0px;
        border-right: 1px solid {BORDER};
        font-weight: 600;
    }}
    /* editors embedded in funding/revenue/milestone grids */
    QTableWidget QDoubleSpinBox, QTableWidget QComboBox,
    QTableWidget QLineEdit, QTableWidget QDateEdit {{
        border: 0px;
        border-radius: 0px;
    }}
    """


def apply_app_style(app: QApplication) -> None:
    """Install the console stylesheet on the application. Call once in main()."""
    app.setStyleSheet(base_stylesheet())


__all__ = ["base_stylesheet", "apply_app_style"]
