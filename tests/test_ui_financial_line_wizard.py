from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
FL_UI = ROOT / "ui" / "financial_line"


def _read(name: str) -> str:
    return (FL_UI / name).read_text(encoding="utf-8", errors="ignore")


def test_wizard_dialog_guards_navigation_with_incident_tracing():
    text = _read("wizard_dialog.py")
    assert "with bind_trace_id():" in text
    assert 'run_guarded_action(self, title=title, callback_name="go_next", action=_advance)' in text
    assert 'callback_name="go_back"' in text
    assert "page.commit()" in text
    assert "self._wizard.next()" in text


def test_wizard_dialog_confirms_through_message_box():
    text = _read("wizard_dialog.py")
    assert "FinancialLineWizard(financial_line_service, confirm=self._confirm)" in text
    assert "QMessageBox.question(" in text
    assert "return answer == QMessageBox.Yes" in text


def test_wizard_dialog_reports_calculation_errors_and_closes_on_submit():
    text = _read("wizard_dialog.py")
    assert "self._wizard.calculation_failed.connect(self._on_calculation_failed)" in text
    assert "self._wizard.submitted.connect(self._on_submitted)" in text
    assert "self.accept()" in text
    assert "self._wizard.cancel()" in text


def test_wizard_dialog_step_bar_follows_visible_steps():
    text = _read("wizard_dialog.py")
    assert "label.setVisible(step in visible)" in text
    assert "self.basic_page.contract_type_changed.connect(self._update_step_bar)" in text
    assert "CFG.SUBMIT_UPDATE_LABEL if self._wizard.is_edit_mode else CFG.SUBMIT_CREATE_LABEL" in text
    assert "if self._wizard.is_submitting:" in text


def test_funding_page_syncs_derived_values_without_feedback_loops():
    text = _read("funding_page.py")
    assert 'callback_name="update_funding_row"' in text
    assert "ledger.update_field(idx, field, value)" in text
    assert "spin.blockSignals(True)" in text
    assert "spin.blockSignals(False)" in text
    assert "ledger.over_allocated_rows()" in text


def test_revenue_page_labels_units_from_the_billing_unit():
    text = _read("revenue_page.py")
    assert "CFG.REVENUE_HEADERS_TEMPLATE" in text
    assert 'callback_name="update_revenue_month"' in text
    assert 'getattr(self._wizard.stage, "step2", None)' in text


def test_milestones_page_shows_balance_against_funding():
    text = _read("milestones_page.py")
    assert 'callback_name="update_milestone"' in text
    assert "schedule.is_balanced(funding)" in text
    assert 'getattr(self._wizard.stage, "step2", None)' in text


def test_basic_page_pushes_contract_type_changes_to_wizard():
    text = _read("basic_page.py")
    assert "contract_type_changed = Signal()" in text
    assert "self._wizard.update_basic(contract_type=contract_type)" in text
    assert 'callback_name="select_project"' in text
    assert "derive_revenue(" in text


def test_financial_lines_tab_reloads_on_domain_events():
    text = _read("tab.py")
    assert "domain_events.financial_lines_changed.connect(self._on_financial_lines_changed)" in text
    assert "domain_events.project_changed.connect(self._on_project_changed)" in text
    assert "make_guarded_slot(self, title=\"Financial lines\", callback=self.create_financial_line)" in text
    assert "if dlg.exec() == QDialog.Accepted:" in text


def test_guard_event_map_covers_wizard_callbacks():
    text = (ROOT / "ui" / "shared" / "guards.py").read_text(encoding="utf-8", errors="ignore")
    for callback in (
        "create_financial_line",
        "edit_financial_line",
        "delete_financial_line",
        "go_next",
        "go_back",
        "select_project",
        "update_funding_row",
        "remove_funding_row",
        "update_revenue_month",
        "update_milestone",
    ):
        assert f'"{callback}":' in text
