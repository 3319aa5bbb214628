from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QTableWidget, QTableWidgetItem, QVBoxLayout, QWidget

from core.models import RevenueMonth
from core.services.financial_line import FinancialLineWizard
from ui.financial_line.widgets import units_spin
from ui.shared.guards import run_guarded_action
from ui.styles.formatting import fmt_float, fmt_money
from ui.styles.style_utils import style_table
from ui.styles.ui_config import UIConfig as CFG

COL_MONTH, COL_PLANNED_UNITS, COL_PLANNED_REVENUE = 0, 1, 2


class RevenuePlanPage(QWidget):
    """Step 3: planned units per month of the FL schedule."""

    def __init__(self, wizard: FinancialLineWizard, parent: QWidget | None = None):
        super().__init__(parent)
        self._wizard = wizard
        self._setup_ui()

    def _setup_ui(self) -> None:
        self.rate_label = QLabel()
        self.rate_label.setStyleSheet(CFG.INFO_TEXT_STYLE)
        self.empty_label = QLabel("The FL schedule does not cover any month.")
        self.empty_label.setStyleSheet(CFG.NOTE_STYLE_SHEET)

        self.table = QTableWidget(0, len(CFG.REVENUE_HEADERS_TEMPLATE))
        style_table(self.table, editable=True)

        self.funding_label = QLabel()
        self.planned_label = QLabel()
        self.planned_label.setStyleSheet(CFG.TITLE_LARGE_STYLE)
        self.remaining_label = QLabel()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(CFG.SPACING_SM)
        layout.addWidget(self.rate_label)
        layout.addWidget(self.empty_label)
        layout.addWidget(self.table)
        layout.addWidget(self.funding_label, alignment=Qt.AlignRight)
        layout.addWidget(self.planned_label, alignment=Qt.AlignRight)
        layout.addWidget(self.remaining_label, alignment=Qt.AlignRight)

    def refresh(self) -> None:
        grid = self._wizard.revenue_grid
        unit = grid.unit_label()
        self.table.setHorizontalHeaderLabels(
            [header.format(unit=unit) for header in CFG.REVENUE_HEADERS_TEMPLATE]
        )
        self.rate_label.setText(
            f"Billing rate: {fmt_money(grid.billing_rate, self._wizard.basic.currency)} "
            f"per {grid.rate_uom.value}"
        )
        months = grid.months
        self.empty_label.setVisible(not months)
        self.table.setRowCount(len(months))
        for idx, bucket in enumerate(months):
            self._build_row(idx, bucket)
        self._update_summary()

    def commit(self) -> None:
        """Units are already in the revenue grid."""

    def _build_row(self, idx: int, bucket: RevenueMonth) -> None:
        self._set_text(idx, COL_MONTH, bucket.month)
        spin = units_spin()
        spin.setValue(bucket.planned_units)
        spin.valueChanged.connect(lambda v, r=idx: self._on_units_changed(r, v))
        self.table.setCellWidget(idx, COL_PLANNED_UNITS, spin)
        self._set_amounts(idx, bucket)

    def _set_amounts(self, idx: int, bucket: RevenueMonth) -> None:
        currency = self._wizard.basic.currency
        self._set_text(idx, COL_PLANNED_REVENUE, fmt_money(bucket.planned_revenue, currency))
        self._set_text(idx, 3, fmt_float(bucket.actual_units))
        self._set_text(idx, 4, fmt_money(bucket.actual_revenue, currency))
        self._set_text(idx, 5, fmt_float(bucket.forecasted_units))
        self._set_text(idx, 6, fmt_money(bucket.forecasted_revenue, currency))

    def _set_text(self, idx: int, col: int, text: str) -> None:
        item = QTableWidgetItem(text)
        item.setFlags(item.flags() & ~Qt.ItemIsEditable)
        if col != COL_MONTH:
            item.setTextAlignment(CFG.ALIGN_RIGHT | CFG.ALIGN_CENTER)
        self.table.setItem(idx, col, item)

    def _on_units_changed(self, idx: int, units: float) -> None:
        bucket = run_guarded_action(
            self,
            title="Revenue plan",
            callback_name="update_revenue_month",
            action=lambda: self._wizard.revenue_grid.update_planned_units(idx, units),
        )
        if bucket is not None:
            self._set_amounts(idx, bucket)
        self._update_summary()

    def _total_funding(self) -> float:
        step2 = getattr(self._wizard.stage, "step2", None)
        return step2.total_funding if step2 is not None else self._wizard.ledger.total()

    def _update_summary(self) -> None:
        grid = self._wizard.revenue_grid
        currency = self._wizard.basic.currency
        funding = self._total_funding()
        remaining = grid.remaining(funding)
        self.funding_label.setText(f"Total funding: {fmt_money(funding, currency)}")
        self.planned_label.setText(
            f"Planned revenue: {fmt_money(grid.total(), currency)} "
            f"({fmt_float(grid.total_units())} {grid.unit_label().lower()})"
        )
        self.remaining_label.setText(f"Remaining: {fmt_money(remaining, currency)}")
        self.remaining_label.setStyleSheet(CFG.FIELD_ERROR_STYLE if remaining < 0 else CFG.INFO_TEXT_STYLE)


__all__ = ["RevenuePlanPage"]
