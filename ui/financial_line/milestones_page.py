from __future__ import annotations

from typing import Any

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QTableWidget,
    QVBoxLayout,
    QWidget,
)

from core.models import PaymentMilestone
from core.services.financial_line import FinancialLineWizard
from ui.financial_line.widgets import date_edit, money_spin, read_date
from ui.shared.guards import run_guarded_action
from ui.styles.formatting import fmt_date_range, fmt_money
from ui.styles.style_utils import style_table
from ui.styles.ui_config import UIConfig as CFG

COL_NAME, COL_DUE, COL_AMOUNT, COL_NOTES = range(4)


class MilestonesPage(QWidget):
    """Step 4: payment milestones that must add up to total funding."""

    def __init__(self, wizard: FinancialLineWizard, parent: QWidget | None = None):
        super().__init__(parent)
        self._wizard = wizard
        self._setup_ui()

    def _setup_ui(self) -> None:
        toolbar = QHBoxLayout()
        self.btn_add = QPushButton(CFG.ADD_MILESTONE_LABEL)
        self.btn_remove = QPushButton(CFG.REMOVE_SELECTED_LABEL)
        for btn in (self.btn_add, self.btn_remove):
            btn.setSizePolicy(CFG.BTN_FIXED_HEIGHT)
            btn.setFixedHeight(CFG.BUTTON_HEIGHT)
        toolbar.addWidget(self.btn_add)
        toolbar.addWidget(self.btn_remove)
        toolbar.addStretch()

        self.schedule_label = QLabel()
        self.schedule_label.setStyleSheet(CFG.INFO_TEXT_STYLE)

        self.table = QTableWidget(0, len(CFG.MILESTONE_HEADERS))
        self.table.setHorizontalHeaderLabels(CFG.MILESTONE_HEADERS)
        style_table(self.table, editable=True)

        self.total_label = QLabel()
        self.balance_label = QLabel()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(CFG.SPACING_SM)
        layout.addLayout(toolbar)
        layout.addWidget(self.schedule_label)
        layout.addWidget(self.table)
        layout.addWidget(self.total_label, alignment=Qt.AlignRight)
        layout.addWidget(self.balance_label, alignment=Qt.AlignRight)

        self.btn_add.clicked.connect(self.add_milestone)
        self.btn_remove.clicked.connect(self.remove_selected_milestone)

    def refresh(self) -> None:
        schedule = self._wizard.milestones
        basic = self._wizard.basic
        if not schedule.milestones:
            self._add_default_milestone()
        self.schedule_label.setText(
            f"Due dates must fall within {fmt_date_range(basic.schedule_start, basic.schedule_finish)}."
        )
        milestones = schedule.milestones
        self.table.setRowCount(len(milestones))
        for idx, milestone in enumerate(milestones):
            self._build_row(idx, milestone)
        self._update_summary()

    def commit(self) -> None:
        """Milestones are already in the schedule."""

    def add_milestone(self) -> None:
        self._add_default_milestone()
        self.refresh()

    def remove_selected_milestone(self) -> None:
        idx = self.table.currentRow()
        if idx < 0:
            return
        run_guarded_action(
            self,
            title="Payment milestones",
            callback_name="update_milestone",
            action=lambda: self._wizard.milestones.remove_milestone(idx),
        )
        self.refresh()

    def _add_default_milestone(self) -> None:
        schedule = self._wizard.milestones
        schedule.add_milestone()
        finish = self._wizard.basic.schedule_finish
        if finish is not None:
            schedule.update_field(len(schedule.milestones) - 1, "due_date", finish)

    def _build_row(self, idx: int, milestone: PaymentMilestone) -> None:
        name = QLineEdit(milestone.milestone_name)
        name.editingFinished.connect(lambda r=idx, w=name: self._on_field_changed(r, "milestone_name", w.text()))
        self.table.setCellWidget(idx, COL_NAME, name)

        due = date_edit(milestone.due_date)
        due.dateChanged.connect(lambda _d, r=idx, w=due: self._on_field_changed(r, "due_date", read_date(w)))
        self.table.setCellWidget(idx, COL_DUE, due)

        amount = money_spin()
        amount.setValue(milestone.amount)
        amount.valueChanged.connect(lambda v, r=idx: self._on_field_changed(r, "amount", v))
        self.table.setCellWidget(idx, COL_AMOUNT, amount)

        notes = QLineEdit(milestone.notes)
        notes.editingFinished.connect(lambda r=idx, w=notes: self._on_field_changed(r, "notes", w.text()))
        self.table.setCellWidget(idx, COL_NOTES, notes)

        if milestone.due_date is None:
            # date_edit shows today; keep the model in line with what the user sees
            self._wizard.milestones.update_field(idx, "due_date", read_date(due))

    def _on_field_changed(self, idx: int, field: str, value: Any) -> None:
        run_guarded_action(
            self,
            title="Payment milestones",
            callback_name="update_milestone",
            action=lambda: self._wizard.milestones.update_field(idx, field, value),
        )
        self._update_summary()

    def _total_funding(self) -> float:
        step2 = getattr(self._wizard.stage, "step2", None)
        return step2.total_funding if step2 is not None else self._wizard.ledger.total()

    def _update_summary(self) -> None:
        schedule = self._wizard.milestones
        currency = self._wizard.basic.currency
        funding = self._total_funding()
        self.total_label.setText(
            f"Milestones: {fmt_money(schedule.total(), currency)} of {fmt_money(funding, currency)}"
        )
        if schedule.is_balanced(funding):
            self.balance_label.setText("Balanced")
            self.balance_label.setStyleSheet(CFG.BALANCED_STYLE)
        else:
            self.balance_label.setText(f"Remaining: {fmt_money(schedule.remaining(funding), currency)}")
            self.balance_label.setStyleSheet(CFG.UNBALANCED_STYLE)


__all__ = ["MilestonesPage"]
