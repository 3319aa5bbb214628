from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QMessageBox,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from core.exceptions import CalculationError
from core.models import FinancialLine, Project
from core.services.financial_line import FinancialLineService, FinancialLineWizard, WizardStep
from infra.operational_support import bind_trace_id, get_operational_support
from ui.financial_line.basic_page import BasicDetailsPage
from ui.financial_line.funding_page import FundingPage
from ui.financial_line.milestones_page import MilestonesPage
from ui.financial_line.revenue_page import RevenuePlanPage
from ui.shared.guards import run_guarded_action
from ui.styles.ui_config import UIConfig as CFG

logger = logging.getLogger(__name__)


class FinancialLineWizardDialog(QDialog):
    """
    Dialog shell around FinancialLineWizard:
    - one stacked page per step
    - step indicator built from the wizard's visible steps
    - Next validates through the wizard; the last step submits
    """

    def __init__(
        self,
        financial_line_service: FinancialLineService,
        projects: list[Project],
        parent: QWidget | None = None,
        *,
        project_id: Optional[str] = None,
        financial_line: Optional[FinancialLine] = None,
    ):
        super().__init__(parent)
        self._wizard = FinancialLineWizard(financial_line_service, confirm=self._confirm)
        self._wizard.calculation_failed.connect(self._on_calculation_failed)
        self._wizard.submitted.connect(self._on_submitted)
        self._result: Optional[FinancialLine] = None
        self._editing = financial_line is not None

        self.setWindowTitle(CFG.WIZARD_EDIT_TITLE if financial_line else CFG.WIZARD_CREATE_TITLE)
        self.setMinimumSize(CFG.WIZARD_MIN_SIZE)

        self.basic_page = BasicDetailsPage(self._wizard, projects)
        self.funding_page = FundingPage(self._wizard)
        self.revenue_page = RevenuePlanPage(self._wizard)
        self.milestones_page = MilestonesPage(self._wizard)
        self._pages = {
            WizardStep.BASIC: self.basic_page,
            WizardStep.FUNDING: self.funding_page,
            WizardStep.REVENUE: self.revenue_page,
            WizardStep.MILESTONES: self.milestones_page,
        }
        self._setup_ui()

        if financial_line is not None:
            run_guarded_action(
                self,
                title=CFG.WIZARD_EDIT_TITLE,
                callback_name="edit_financial_line",
                action=lambda: self._wizard.open_for_edit(financial_line),
            )
        else:
            self._wizard.open()
            if project_id:
                run_guarded_action(
                    self,
                    title=CFG.WIZARD_CREATE_TITLE,
                    callback_name="select_project",
                    action=lambda: self._wizard.select_project(project_id),
                )
        self._show_step()

    def _setup_ui(self) -> None:
        self.step_bar = QHBoxLayout()
        self.step_bar.setSpacing(CFG.SPACING_SM)
        self._step_labels: dict[WizardStep, QLabel] = {}
        for step in WizardStep:
            label = QLabel(f"{int(step)}. {step.title}")
            self._step_labels[step] = label
            self.step_bar.addWidget(label)
        self.step_bar.addStretch()

        self.stack = QStackedWidget()
        for page in self._pages.values():
            self.stack.addWidget(page)

        self.btn_back = QPushButton(CFG.BACK_LABEL)
        self.btn_next = QPushButton(CFG.NEXT_LABEL)
        self.btn_cancel = QPushButton(CFG.CANCEL_LABEL)
        for btn in (self.btn_back, self.btn_next, self.btn_cancel):
            btn.setSizePolicy(CFG.BTN_FIXED_HEIGHT)
            btn.setFixedHeight(CFG.BUTTON_HEIGHT)
            btn.setMinimumWidth(CFG.BUTTON_MIN_WIDTH_SM)
        self.btn_next.setDefault(True)

        buttons = QHBoxLayout()
        buttons.addWidget(self.btn_cancel)
        buttons.addStretch()
        buttons.addWidget(self.btn_back)
        buttons.addWidget(self.btn_next)

        layout = QVBoxLayout(self)
        layout.setSpacing(CFG.SPACING_MD)
        layout.setContentsMargins(CFG.MARGIN_MD, CFG.MARGIN_MD, CFG.MARGIN_MD, CFG.MARGIN_MD)
        layout.addLayout(self.step_bar)
        layout.addWidget(self.stack)
        layout.addLayout(buttons)

        self.btn_next.clicked.connect(self.go_next)
        self.btn_back.clicked.connect(self.go_back)
        self.btn_cancel.clicked.connect(self.reject)
        self.basic_page.contract_type_changed.connect(self._update_step_bar)

    @property
    def wizard(self) -> FinancialLineWizard:
        return self._wizard

    @property
    def financial_line(self) -> Optional[FinancialLine]:
        return self._result

    # ---- navigation ----------------------------------------------------

    def go_next(self) -> None:
        page = self._pages[self._wizard.current_step]
        title = self._wizard.current_step.title
        if self._is_last_step():
            self.btn_next.setText(CFG.SAVING_LABEL)
            self.btn_next.setEnabled(False)
            self.btn_back.setEnabled(False)

        def _advance():
            page.commit()
            return self._wizard.next()

        try:
            with bind_trace_id():
                run_guarded_action(self, title=title, callback_name="go_next", action=_advance)
        finally:
            self.btn_next.setEnabled(True)
        if self._wizard.is_open:
            self._show_step()

    def go_back(self) -> None:
        page = self._pages[self._wizard.current_step]

        def _back():
            page.commit()
            return self._wizard.back()

        run_guarded_action(self, title=CFG.BACK_LABEL, callback_name="go_back", action=_back)
        self._show_step()

    def reject(self) -> None:
        self._wizard.cancel()
        super().reject()

    def _confirm(self, message: str) -> bool:
        answer = QMessageBox.question(self, self._wizard.current_step.title, message)
        return answer == QMessageBox.Yes

    # ---- wizard callbacks ----------------------------------------------

    def _on_calculation_failed(self, error: CalculationError) -> None:
        QMessageBox.warning(self, "Calculation error", str(error))

    def _on_submitted(self, financial_line: FinancialLine) -> None:
        self._result = financial_line
        logger.info("Financial line %s submitted from the wizard", financial_line.fl_no)
        get_operational_support().record_financial_line_submission(financial_line, edited=self._editing)
        self.accept()

    # ---- rendering -----------------------------------------------------

    def _is_last_step(self) -> bool:
        return self._wizard.current_step == self._wizard.visible_steps[-1]

    def _show_step(self) -> None:
        step = self._wizard.current_step
        page = self._pages[step]
        page.refresh()
        self.stack.setCurrentWidget(page)
        self.btn_back.setEnabled(step != WizardStep.BASIC)
        self._update_step_bar()

    def _update_step_bar(self) -> None:
        current = self._wizard.current_step
        visible = self._wizard.visible_steps
        for step, label in self._step_labels.items():
            label.setVisible(step in visible)
            if step == current:
                label.setStyleSheet(CFG.STEP_ACTIVE_STYLE)
            elif step < current:
                label.setStyleSheet(CFG.STEP_DONE_STYLE)
            else:
                label.setStyleSheet(CFG.STEP_PENDING_STYLE)
        if self._wizard.is_submitting:
            self.btn_next.setText(CFG.SAVING_LABEL)
        elif self._is_last_step():
            self.btn_next.setText(CFG.SUBMIT_UPDATE_LABEL if self._wizard.is_edit_mode else CFG.SUBMIT_CREATE_LABEL)
        else:
            self.btn_next.setText(CFG.NEXT_LABEL)


__all__ = ["FinancialLineWizardDialog"]
