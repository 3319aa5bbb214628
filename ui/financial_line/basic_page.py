from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from core.models import ContractType, LocationType, Project, UnitOfMeasure
from core.services.financial_line import FinancialLineWizard, derive_revenue
from ui.financial_line.widgets import (
    current_data,
    date_edit,
    enum_combo,
    money_spin,
    read_date,
    select_data,
    set_date,
    sized,
    units_spin,
)
from ui.shared.guards import run_guarded_action
from ui.styles.formatting import fmt_money
from ui.styles.ui_config import UIConfig as CFG, CurrencyType


class BasicDetailsPage(QWidget):
    """Step 1: basic details, schedule and the rate/effort that drive revenue."""

    contract_type_changed = Signal()

    def __init__(
        self,
        wizard: FinancialLineWizard,
        projects: list[Project],
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self._wizard = wizard
        self._projects = projects
        self._loading = False
        self._setup_ui()

    def _setup_ui(self) -> None:
        self.project_combo = sized(QComboBox())
        for project in self._projects:
            self.project_combo.addItem(f"{project.project_code} - {project.name}", userData=project.id)
        self.project_combo.setCurrentIndex(-1)
        self.project_combo.setMaxVisibleItems(CFG.COMBO_MAX_VISIBLE)

        self.fl_name_edit = sized(QLineEdit())
        self.contract_combo = sized(enum_combo(ContractType))
        self.location_combo = sized(enum_combo(LocationType))
        self.entity_edit = sized(QLineEdit())
        self.currency_combo = sized(QComboBox())
        self.currency_combo.setEditable(True)
        for cur in CurrencyType:
            self.currency_combo.addItem(cur.value)
        self.approver_edit = sized(QLineEdit())

        self.start_edit = sized(date_edit())
        self.finish_edit = sized(date_edit())

        self.rate_spin = sized(money_spin(step=CFG.RATE_STEP))
        self.rate_uom_combo = sized(enum_combo(UnitOfMeasure, UnitOfMeasure.DAY))
        self.effort_spin = sized(units_spin())
        self.effort_uom_combo = sized(enum_combo(UnitOfMeasure, UnitOfMeasure.DAY))
        self.revenue_label = QLabel("-")
        self.revenue_label.setStyleSheet(CFG.TITLE_LARGE_STYLE)

        self.notes_edit = QTextEdit()
        self.notes_edit.setMinimumHeight(CFG.TEXTEDIT_MIN_HEIGHT)
        self.notes_edit.setSizePolicy(CFG.TEXTEDIT_POLICY)

        details = QGroupBox("Basic details")
        details.setFont(CFG.GROUPBOX_TITLE_FONT)
        form = self._form()
        form.addRow("Project:", self.project_combo)
        form.addRow("FL name:", self.fl_name_edit)
        form.addRow("Contract type:", self.contract_combo)
        form.addRow("Location:", self.location_combo)
        form.addRow("Execution entity:", self.entity_edit)
        form.addRow("Currency:", self.currency_combo)
        form.addRow("Timesheet approver:", self.approver_edit)
        form.addRow("Schedule start:", self.start_edit)
        form.addRow("Schedule finish:", self.finish_edit)
        details.setLayout(form)

        revenue = QGroupBox("Revenue")
        revenue.setFont(CFG.GROUPBOX_TITLE_FONT)
        rform = self._form()
        rate_row = QHBoxLayout()
        rate_row.addWidget(self.rate_spin)
        rate_row.addWidget(QLabel("per"))
        rate_row.addWidget(self.rate_uom_combo)
        effort_row = QHBoxLayout()
        effort_row.addWidget(self.effort_spin)
        effort_row.addWidget(self.effort_uom_combo)
        rform.addRow("Billing rate:", rate_row)
        rform.addRow("Effort:", effort_row)
        rform.addRow("Revenue:", self.revenue_label)
        rform.addRow("Notes:", self.notes_edit)
        revenue.setLayout(rform)

        columns = QHBoxLayout()
        columns.setSpacing(CFG.SPACING_LG)
        columns.addWidget(details)
        columns.addWidget(revenue)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addLayout(columns)
        layout.addStretch()

        self.project_combo.currentIndexChanged.connect(self._on_project_selected)
        self.contract_combo.currentIndexChanged.connect(self._on_contract_type_changed)
        self.rate_spin.valueChanged.connect(self._update_revenue_label)
        self.effort_spin.valueChanged.connect(self._update_revenue_label)
        self.currency_combo.currentTextChanged.connect(self._update_revenue_label)

    @staticmethod
    def _form() -> QFormLayout:
        form = QFormLayout()
        form.setLabelAlignment(CFG.ALIGN_RIGHT | CFG.ALIGN_CENTER)
        form.setFormAlignment(CFG.ALIGN_TOP)
        form.setHorizontalSpacing(CFG.SPACING_MD)
        form.setVerticalSpacing(CFG.SPACING_SM)
        form.setFieldGrowthPolicy(QFormLayout.ExpandingFieldsGrow)
        return form

    def refresh(self) -> None:
        """Load the wizard's step 1 values into the widgets."""
        data = self._wizard.basic
        self._loading = True
        try:
            select_data(self.project_combo, data.project_id)
            self.project_combo.setEnabled(not self._wizard.is_edit_mode)
            self.fl_name_edit.setText(data.fl_name)
            select_data(self.contract_combo, data.contract_type)
            select_data(self.location_combo, data.location_type)
            self.entity_edit.setText(data.execution_entity)
            self.currency_combo.setCurrentText(data.currency)
            self.approver_edit.setText(data.timesheet_approver)
            project = self._wizard.project
            set_date(self.start_edit, data.schedule_start or (project.start_date if project else None))
            set_date(self.finish_edit, data.schedule_finish or (project.end_date if project else None))
            self.rate_spin.setValue(data.billing_rate)
            select_data(self.rate_uom_combo, data.rate_uom)
            self.effort_spin.setValue(data.effort)
            select_data(self.effort_uom_combo, data.effort_uom)
            self.notes_edit.setPlainText(data.notes)
        finally:
            self._loading = False
        self._update_revenue_label()

    def commit(self) -> None:
        """Push the widget values into the wizard before it validates step 1."""
        self._wizard.update_basic(
            project_id=current_data(self.project_combo) or "",
            fl_name=self.fl_name_edit.text(),
            contract_type=current_data(self.contract_combo) or ContractType.TIME_AND_MATERIALS,
            location_type=current_data(self.location_combo) or LocationType.OFFSHORE,
            execution_entity=self.entity_edit.text(),
            currency=self.currency_combo.currentText(),
            timesheet_approver=self.approver_edit.text(),
            schedule_start=read_date(self.start_edit),
            schedule_finish=read_date(self.finish_edit),
            billing_rate=self.rate_spin.value(),
            rate_uom=current_data(self.rate_uom_combo) or UnitOfMeasure.DAY,
            effort=self.effort_spin.value(),
            effort_uom=current_data(self.effort_uom_combo) or UnitOfMeasure.DAY,
            notes=self.notes_edit.toPlainText(),
        )

    def _on_project_selected(self, _index: int) -> None:
        if self._loading:
            return
        project_id = current_data(self.project_combo)
        if not project_id:
            return
        project = run_guarded_action(
            self,
            title="Project",
            callback_name="select_project",
            action=lambda: self._wizard.select_project(project_id),
        )
        if project is not None:
            self.refresh()
            self.contract_type_changed.emit()

    def _on_contract_type_changed(self, _index: int) -> None:
        if self._loading:
            return
        contract_type = current_data(self.contract_combo)
        if contract_type is None:
            return
        self._wizard.update_basic(contract_type=contract_type)
        self.contract_type_changed.emit()

    def _update_revenue_label(self, *_args) -> None:
        revenue = derive_revenue(self.rate_spin.value(), self.effort_spin.value())
        self.revenue_label.setText(fmt_money(revenue, self.currency_combo.currentText().strip()))


__all__ = ["BasicDetailsPage"]
