from __future__ import annotations

from typing import Any

from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)
from PySide6.QtCore import Qt

from core.models import FundingAllocation, UnitOfMeasure
from core.services.financial_line import FinancialLineWizard
from ui.financial_line.widgets import enum_combo, money_spin, select_data, units_spin
from ui.shared.guards import run_guarded_action
from ui.styles.formatting import fmt_float, fmt_money
from ui.styles.style_utils import style_table
from ui.styles.ui_config import UIConfig as CFG

COL_PO, COL_CONTRACT, COL_PO_CURRENCY, COL_RATE, COL_UNITS, COL_UOM, COL_VALUE, COL_AMOUNT_PO, COL_AVAILABLE = range(9)


class FundingPage(QWidget):
    """Step 2: PO funding rows. Every edit goes straight to the wizard's ledger."""

    def __init__(self, wizard: FinancialLineWizard, parent: QWidget | None = None):
        super().__init__(parent)
        self._wizard = wizard
        self._setup_ui()

    def _setup_ui(self) -> None:
        toolbar = QHBoxLayout()
        self.btn_add = QPushButton(CFG.ADD_FUNDING_ROW_LABEL)
        self.btn_remove = QPushButton(CFG.REMOVE_SELECTED_LABEL)
        for btn in (self.btn_add, self.btn_remove):
            btn.setSizePolicy(CFG.BTN_FIXED_HEIGHT)
            btn.setFixedHeight(CFG.BUTTON_HEIGHT)
        toolbar.addWidget(self.btn_add)
        toolbar.addWidget(self.btn_remove)
        toolbar.addStretch()

        self.table = QTableWidget(0, len(CFG.FUNDING_HEADERS))
        self.table.setHorizontalHeaderLabels(CFG.FUNDING_HEADERS)
        style_table(self.table, editable=True)

        self.total_label = QLabel()
        self.total_label.setStyleSheet(CFG.TITLE_LARGE_STYLE)
        self.warning_label = QLabel()
        self.warning_label.setStyleSheet(CFG.WARNING_TEXT_STYLE)
        self.warning_label.setWordWrap(True)
        self.empty_label = QLabel("No open purchase orders for this project.")
        self.empty_label.setStyleSheet(CFG.NOTE_STYLE_SHEET)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(CFG.SPACING_SM)
        layout.addLayout(toolbar)
        layout.addWidget(self.empty_label)
        layout.addWidget(self.table)
        layout.addWidget(self.warning_label)
        layout.addWidget(self.total_label, alignment=Qt.AlignRight)

        self.btn_add.clicked.connect(self.add_row)
        self.btn_remove.clicked.connect(self.remove_selected_row)

    def refresh(self) -> None:
        ledger = self._wizard.ledger
        if not ledger.rows:
            ledger.add_row()
        rows = ledger.rows
        self.empty_label.setVisible(not ledger.purchase_orders)
        self.table.setRowCount(len(rows))
        for idx, row in enumerate(rows):
            self._build_row(idx, row)
        self._update_summary()

    def commit(self) -> None:
        """Rows are already in the ledger."""

    def add_row(self) -> None:
        self._wizard.ledger.add_row()
        self.refresh()

    def remove_selected_row(self) -> None:
        idx = self.table.currentRow()
        if idx < 0:
            return
        run_guarded_action(
            self,
            title="Funding",
            callback_name="remove_funding_row",
            action=lambda: self._wizard.ledger.remove_row(idx),
        )
        self.refresh()

    def _build_row(self, idx: int, row: FundingAllocation) -> None:
        po_combo = QComboBox()
        po_combo.addItem("", userData="")
        for po in self._wizard.ledger.purchase_orders:
            po_combo.addItem(f"{po.po_no} ({fmt_money(po.po_amount, po.po_currency)})", userData=po.po_no)
        select_data(po_combo, row.po_no)
        po_combo.currentIndexChanged.connect(
            lambda _i, r=idx, c=po_combo: self._on_field_changed(r, "po_no", c.currentData())
        )
        self.table.setCellWidget(idx, COL_PO, po_combo)

        rate = money_spin(step=CFG.RATE_STEP)
        units = units_spin()
        value = money_spin()
        amount_po = money_spin()
        for spin, col, field in (
            (rate, COL_RATE, "unit_rate"),
            (units, COL_UNITS, "funding_units"),
            (value, COL_VALUE, "funding_value_project"),
            (amount_po, COL_AMOUNT_PO, "funding_amount_po_currency"),
        ):
            spin.setValue(getattr(row, field))
            spin.valueChanged.connect(lambda v, r=idx, f=field: self._on_field_changed(r, f, v))
            self.table.setCellWidget(idx, col, spin)

        uom = enum_combo(UnitOfMeasure, row.uom)
        uom.currentIndexChanged.connect(
            lambda _i, r=idx, c=uom: self._on_field_changed(r, "uom", c.currentData())
        )
        self.table.setCellWidget(idx, COL_UOM, uom)

        self._set_readonly_cells(idx, row)

    def _set_readonly_cells(self, idx: int, row: FundingAllocation) -> None:
        for col, text in (
            (COL_CONTRACT, row.contract_no),
            (COL_PO_CURRENCY, row.po_currency),
            (COL_AVAILABLE, fmt_money(row.available_po_line_in_po, row.po_currency) if row.po_no else "-"),
        ):
            item = QTableWidgetItem(text)
            item.setFlags(item.flags() & ~Qt.ItemIsEditable)
            self.table.setItem(idx, col, item)

    def _on_field_changed(self, idx: int, field: str, value: Any) -> None:
        ledger = self._wizard.ledger
        if field == "po_no" and not value:
            return
        run_guarded_action(
            self,
            title="Funding",
            callback_name="update_funding_row",
            action=lambda: ledger.update_field(idx, field, value),
        )
        rows = ledger.rows
        if 0 <= idx < len(rows):
            self._sync_row(idx, rows[idx])
        self._update_summary()

    def _sync_row(self, idx: int, row: FundingAllocation) -> None:
        for col, field in (
            (COL_RATE, "unit_rate"),
            (COL_UNITS, "funding_units"),
            (COL_VALUE, "funding_value_project"),
            (COL_AMOUNT_PO, "funding_amount_po_currency"),
        ):
            spin = self.table.cellWidget(idx, col)
            if spin is None:
                continue
            spin.blockSignals(True)
            spin.setValue(getattr(row, field))
            spin.blockSignals(False)
        self._set_readonly_cells(idx, row)

    def _update_summary(self) -> None:
        ledger = self._wizard.ledger
        currency = self._wizard.basic.currency
        self.total_label.setText(
            f"Total funding: {fmt_money(ledger.total(), currency)} "
            f"({fmt_float(ledger.total_units())} {self._wizard.basic.rate_uom.plural_label.lower()})"
        )
        over = ledger.over_allocated_rows()
        if over:
            rows = ", ".join(str(i + 1) for i in over)
            self.warning_label.setText(f"Row(s) {rows} exceed the available PO balance.")
        else:
            self.warning_label.clear()


__all__ = ["FundingPage"]
