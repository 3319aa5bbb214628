from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QTableView,
    QVBoxLayout,
    QWidget,
)

from core.events.domain_events import domain_events
from core.models import FinancialLine, FinancialLineStatus
from core.services.financial_line import FinancialLineService
from core.services.project import ProjectService
from ui.financial_line.models import FinancialLineTableModel
from ui.financial_line.wizard_dialog import FinancialLineWizardDialog
from ui.financial_line.widgets import current_data
from ui.settings.main_window_store import MainWindowSettingsStore
from ui.shared.guards import make_guarded_slot
from ui.styles.formatting import fmt_money
from ui.styles.style_utils import style_table
from ui.styles.ui_config import UIConfig as CFG


class FinancialLinesTab(QWidget):
    """
    Financial line list:
    - project/status filters and free-text search
    - create/edit through the FL wizard dialog
    - reloads when any financial line changes
    """

    def __init__(
        self,
        project_service: ProjectService,
        financial_line_service: FinancialLineService,
        parent: QWidget | None = None,
        *,
        settings_store: MainWindowSettingsStore | None = None,
    ):
        super().__init__(parent)
        self._project_service = project_service
        self._financial_line_service = financial_line_service
        self._settings_store = settings_store

        self._setup_ui()
        self.reload_projects()
        self.reload_financial_lines()
        domain_events.financial_lines_changed.connect(self._on_financial_lines_changed)
        domain_events.project_changed.connect(self._on_project_changed)

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setSpacing(CFG.SPACING_MD)
        layout.setContentsMargins(CFG.MARGIN_MD, CFG.MARGIN_MD, CFG.MARGIN_MD, CFG.MARGIN_MD)

        filters = QHBoxLayout()
        self.project_combo = QComboBox()
        self.project_combo.setMinimumWidth(CFG.COMBO_MIN_WIDTH_MD)
        self.status_combo = QComboBox()
        self.status_combo.addItem(CFG.ALL_STATUSES_LABEL, userData=None)
        for status in FinancialLineStatus:
            self.status_combo.addItem(status.value, userData=status)
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText(CFG.SEARCH_PLACEHOLDER)
        self.search_edit.setClearButtonEnabled(True)
        for widget in (self.project_combo, self.status_combo, self.search_edit):
            widget.setFixedHeight(CFG.INPUT_HEIGHT)
        filters.addWidget(QLabel("Project:"))
        filters.addWidget(self.project_combo)
        filters.addWidget(QLabel("Status:"))
        filters.addWidget(self.status_combo)
        filters.addWidget(self.search_edit, 1)
        layout.addLayout(filters)

        toolbar = QHBoxLayout()
        self.btn_new = QPushButton(CFG.NEW_FINANCIAL_LINE_LABEL)
        self.btn_edit = QPushButton(CFG.EDIT_LABEL)
        self.btn_delete = QPushButton(CFG.DELETE_LABEL)
        self.btn_refresh = QPushButton(CFG.REFRESH_BUTTON_LABEL)
        for btn in (self.btn_new, self.btn_edit, self.btn_delete, self.btn_refresh):
            btn.setSizePolicy(CFG.BTN_FIXED_HEIGHT)
            btn.setFixedHeight(CFG.BUTTON_HEIGHT)
        toolbar.addWidget(self.btn_new)
        toolbar.addWidget(self.btn_edit)
        toolbar.addWidget(self.btn_delete)
        toolbar.addStretch()
        toolbar.addWidget(self.btn_refresh)
        layout.addLayout(toolbar)

        self.table = QTableView()
        self.model = FinancialLineTableModel()
        self.table.setModel(self.model)
        style_table(self.table)
        hh = self.table.horizontalHeader()
        hh.setStretchLastSection(False)
        hh.setSectionResizeMode(QHeaderView.ResizeToContents)
        hh.setSectionResizeMode(1, QHeaderView.Stretch)
        layout.addWidget(self.table)

        self.stats_label = QLabel()
        self.stats_label.setStyleSheet(CFG.INFO_TEXT_STYLE)
        layout.addWidget(self.stats_label)

        self.project_combo.currentIndexChanged.connect(self.reload_financial_lines)
        self.project_combo.currentIndexChanged.connect(self._remember_project_filter)
        self.status_combo.currentIndexChanged.connect(self.reload_financial_lines)
        self.search_edit.textChanged.connect(self.reload_financial_lines)
        self.btn_refresh.clicked.connect(self.reload_financial_lines)
        self.btn_new.clicked.connect(
            make_guarded_slot(self, title="Financial lines", callback=self.create_financial_line)
        )
        self.btn_edit.clicked.connect(
            make_guarded_slot(self, title="Financial lines", callback=self.edit_financial_line)
        )
        self.btn_delete.clicked.connect(
            make_guarded_slot(self, title="Financial lines", callback=self.delete_financial_line)
        )
        self.table.doubleClicked.connect(
            make_guarded_slot(self, title="Financial lines", callback=self.edit_financial_line)
        )

    # ---- loading -------------------------------------------------------

    def reload_projects(self):
        selected = current_data(self.project_combo)
        if selected is None and self.project_combo.count() == 0 and self._settings_store is not None:
            selected = self._settings_store.load_project_filter()
        self.project_combo.blockSignals(True)
        self.project_combo.clear()
        self.project_combo.addItem(CFG.ALL_PROJECTS_LABEL, userData=None)
        for project in self._project_service.list_projects():
            self.project_combo.addItem(f"{project.project_code} - {project.name}", userData=project.id)
        idx = self.project_combo.findData(selected) if selected else 0
        self.project_combo.setCurrentIndex(max(idx, 0))
        self.project_combo.blockSignals(False)

    def reload_financial_lines(self, *_args):
        project_id = current_data(self.project_combo)
        rows = self._financial_line_service.list_financial_lines(
            project_id,
            status=current_data(self.status_combo),
            search=self.search_edit.text(),
        )
        self.model.set_financial_lines(rows)
        self._update_stats(project_id)

    def _update_stats(self, project_id: Optional[str]) -> None:
        stats = self._financial_line_service.get_stats(project_id)
        self.stats_label.setText(
            f"{stats.total} financial line(s): {stats.draft} draft, {stats.active} active, "
            f"{stats.completed} completed, {stats.cancelled} cancelled. "
            f"Funding {fmt_money(stats.total_funding)}, planned revenue {fmt_money(stats.total_planned_revenue)}."
        )

    def _remember_project_filter(self, *_args) -> None:
        if self._settings_store is not None:
            self._settings_store.save_project_filter(current_data(self.project_combo))

    def _on_financial_lines_changed(self, _project_id: str) -> None:
        self.reload_financial_lines()

    def _on_project_changed(self, _project_id: str) -> None:
        self.reload_projects()
        self.reload_financial_lines()

    def _get_selected_financial_line(self) -> Optional[FinancialLine]:
        indexes = self.table.selectionModel().selectedRows()
        if not indexes:
            return None
        return self.model.get_financial_line(indexes[0].row())

    # ---- actions -------------------------------------------------------

    def create_financial_line(self):
        projects = self._project_service.list_projects()
        if not projects:
            QMessageBox.information(self, "New financial line", "Please create a project first.")
            return
        dlg = FinancialLineWizardDialog(
            self._financial_line_service,
            projects,
            self,
            project_id=current_data(self.project_combo),
        )
        if dlg.exec() == QDialog.Accepted:
            self.reload_financial_lines()

    def edit_financial_line(self):
        fl = self._get_selected_financial_line()
        if not fl:
            QMessageBox.information(self, "Edit financial line", "Please select a financial line.")
            return
        dlg = FinancialLineWizardDialog(
            self._financial_line_service,
            self._project_service.list_projects(),
            self,
            financial_line=self._financial_line_service.get_financial_line(fl.id),
        )
        if dlg.exec() == QDialog.Accepted:
            self.reload_financial_lines()

    def delete_financial_line(self):
        fl = self._get_selected_financial_line()
        if not fl:
            QMessageBox.information(self, "Delete financial line", "Please select a financial line.")
            return
        confirm = QMessageBox.question(
            self,
            "Delete financial line",
            f"Delete financial line '{fl.fl_no} - {fl.fl_name}'?",
        )
        if confirm != QMessageBox.Yes:
            return
        self._financial_line_service.delete_financial_line(fl.id)
        self.reload_financial_lines()


__all__ = ["FinancialLinesTab"]
