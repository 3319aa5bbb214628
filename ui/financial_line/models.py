from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt

from core.models import FinancialLine
from ui.styles.formatting import fmt_date_range, fmt_money
from ui.styles.ui_config import UIConfig as CFG


class FinancialLineTableModel(QAbstractTableModel):
    HEADERS = CFG.FINANCIAL_LINE_HEADERS

    def __init__(self, financial_lines: list[FinancialLine] | None = None, parent=None):
        super().__init__(parent)
        self._financial_lines: list[FinancialLine] = financial_lines or []

    def set_financial_lines(self, financial_lines: list[FinancialLine]):
        self.beginResetModel()
        self._financial_lines = financial_lines
        self.endResetModel()

    def rowCount(self, parent=QModelIndex()):
        return len(self._financial_lines)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def data(self, index: QModelIndex, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        fl = self._financial_lines[index.row()]
        col = index.column()
        if role == Qt.TextAlignmentRole and col in (5, 6):
            return int(CFG.ALIGN_RIGHT | CFG.ALIGN_CENTER)
        if role != Qt.DisplayRole:
            return None
        if col == 0:
            return fl.fl_no
        if col == 1:
            return fl.fl_name
        if col == 2:
            return fl.contract_type.value
        if col == 3:
            return fl.location_type.value
        if col == 4:
            return fmt_date_range(fl.schedule_start, fl.schedule_finish)
        if col == 5:
            return fmt_money(fl.total_funding, fl.currency)
        if col == 6:
            return fmt_money(fl.total_planned_revenue, fl.currency)
        if col == 7:
            return fl.status.value
        return None

    def headerData(self, section: int, orientation, role=Qt.DisplayRole):
        if orientation == Qt.Horizontal and role == Qt.DisplayRole:
            return self.HEADERS[section]
        return super().headerData(section, orientation, role)

    def get_financial_line(self, row: int) -> Optional[FinancialLine]:
        if 0 <= row < len(self._financial_lines):
            return self._financial_lines[row]
        return None


__all__ = ["FinancialLineTableModel"]
