from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from PySide6.QtCore import QDate
from PySide6.QtWidgets import QComboBox, QDateEdit, QDoubleSpinBox, QLineEdit

from ui.styles.ui_config import UIConfig as CFG


def money_spin(*, maximum: float = CFG.MONEY_MAX, step: float = CFG.MONEY_STEP) -> QDoubleSpinBox:
    spin = QDoubleSpinBox()
    spin.setMinimum(CFG.MONEY_MIN)
    spin.setMaximum(maximum)
    spin.setDecimals(CFG.MONEY_DECIMALS)
    spin.setSingleStep(step)
    spin.setAlignment(CFG.ALIGN_RIGHT)
    spin.setKeyboardTracking(False)
    return spin


def units_spin() -> QDoubleSpinBox:
    spin = QDoubleSpinBox()
    spin.setMinimum(0.0)
    spin.setMaximum(CFG.UNITS_MAX)
    spin.setDecimals(CFG.UNITS_DECIMALS)
    spin.setSingleStep(CFG.UNITS_STEP)
    spin.setAlignment(CFG.ALIGN_RIGHT)
    spin.setKeyboardTracking(False)
    return spin


def date_edit(value: Optional[date] = None) -> QDateEdit:
    edit = QDateEdit()
    edit.setCalendarPopup(True)
    edit.setDisplayFormat(CFG.DATE_FORMAT)
    set_date(edit, value or date.today())
    return edit


def set_date(edit: QDateEdit, value: Optional[date]) -> None:
    if value is None:
        return
    edit.setDate(QDate(value.year, value.month, value.day))


def read_date(edit: QDateEdit) -> date:
    qd = edit.date()
    return date(qd.year(), qd.month(), qd.day())


def enum_combo(values: Iterable, current=None) -> QComboBox:
    combo = QComboBox()
    for value in values:
        combo.addItem(value.value, userData=value)
    if current is not None:
        select_data(combo, current)
    return combo


def current_data(combo: QComboBox):
    idx = combo.currentIndex()
    if idx < 0:
        return None
    return combo.itemData(idx)


def select_data(combo: QComboBox, value) -> None:
    for i in range(combo.count()):
        if combo.itemData(i) == value:
            combo.setCurrentIndex(i)
            return


def sized(widget):
    widget.setSizePolicy(CFG.INPUT_POLICY)
    widget.setFixedHeight(CFG.INPUT_HEIGHT)
    if isinstance(widget, (QLineEdit, QComboBox)):
        widget.setMinimumWidth(CFG.INPUT_MIN_WIDTH)
    return widget


__all__ = [
    "money_spin",
    "units_spin",
    "date_edit",
    "set_date",
    "read_date",
    "enum_combo",
    "current_data",
    "select_data",
    "sized",
]
