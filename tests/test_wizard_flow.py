from __future__ import annotations

import re
from datetime import date

import pytest

from core.exceptions import BackendError, BusinessRuleError, ValidationError
from core.models import ContractType, FinancialLine, UnitOfMeasure
from core.services.financial_line import Step1Data, Step2Data, WizardStep
from core.services.financial_line.steps import Step3Data
from core.services.financial_line.wizard import MAX_FL_NO_ATTEMPTS


def _to_revenue_step(wizard, fill_basic, fund, **basic):
    fill_basic(wizard, **basic)
    wizard.next()
    fund(wizard)
    wizard.next()
    assert wizard.current_step is WizardStep.REVENUE


def _plan(wizard, *units):
    for idx, value in enumerate(units):
        wizard.revenue_grid.update_planned_units(idx, value)


def test_step1_generates_month_buckets(make_wizard, fill_basic):
    wizard = make_wizard()
    fill_basic(wizard, schedule_start=date(2026, 1, 15), schedule_finish=date(2026, 3, 10))

    data = wizard.next()

    assert isinstance(data, Step1Data)
    assert wizard.current_step is WizardStep.FUNDING
    assert [m.month for m in wizard.revenue_grid.months] == ["2026-01", "2026-02", "2026-03"]


def test_opening_on_project_applies_defaults(make_wizard):
    wizard = make_wizard()
    wizard.open("p-fb")
    assert wizard.basic.currency == "EUR"
    assert wizard.basic.execution_entity == "RMG GmbH"
    assert wizard.basic.timesheet_approver == "Sam Patel"
    assert wizard.basic.contract_type is ContractType.FIXED_BID
    assert wizard.visible_steps == [
        WizardStep.BASIC,
        WizardStep.FUNDING,
        WizardStep.REVENUE,
        WizardStep.MILESTONES,
    ]


def test_funding_round_trip_through_wizard_ledger(make_wizard, fill_basic):
    wizard = make_wizard()
    fill_basic(wizard)
    wizard.next()

    ledger = wizard.ledger
    ledger.add_row()
    ledger.update_field(0, "po_no", "PO-1")
    ledger.update_field(0, "unit_rate", 100)
    row = ledger.update_field(0, "funding_units", 5)
    assert row.funding_value_project == pytest.approx(500.0)

    row = ledger.update_field(0, "funding_value_project", 750)
    assert row.funding_units == pytest.approx(7.5)


def test_zero_rate_guard_is_forwarded_by_wizard(make_wizard, fill_basic):
    wizard = make_wizard()
    errors = []
    wizard.calculation_failed.connect(errors.append)
    fill_basic(wizard)
    wizard.next()

    ledger = wizard.ledger
    ledger.add_row()
    ledger.update_field(0, "unit_rate", 0)
    row = ledger.update_field(0, "funding_value_project", 500)

    assert (row.funding_units, row.funding_value_project, row.funding_amount_po_currency) == (0.0, 0.0, 0.0)
    assert [e.code for e in errors] == ["ZERO_UNIT_RATE"]
    assert wizard.current_step is WizardStep.FUNDING


def test_contract_type_toggles_milestone_step_until_locked(make_wizard, fill_basic):
    wizard = make_wizard()
    fill_basic(wizard)
    assert len(wizard.visible_steps) == 3

    wizard.update_basic(contract_type=ContractType.FIXED_BID)
    assert len(wizard.visible_steps) == 4

    wizard.update_basic(contract_type=ContractType.TIME_AND_MATERIALS)
    assert len(wizard.visible_steps) == 3


def test_step_set_lock_survives_back_and_contract_change(make_wizard, fill_basic):
    wizard = make_wizard()
    fill_basic(wizard, contract_type=ContractType.FIXED_BID)
    wizard.next()
    assert wizard.show_payment_milestones

    assert wizard.back() is WizardStep.BASIC
    wizard.update_basic(contract_type=ContractType.TIME_AND_MATERIALS)

    assert wizard.show_payment_milestones
    assert WizardStep.MILESTONES in wizard.visible_steps
    wizard.next()
    assert len(wizard.visible_steps) == 4


def test_failed_step1_does_not_lock_step_set(make_wizard, fill_basic):
    wizard = make_wizard()
    fill_basic(wizard, fl_name="", contract_type=ContractType.FIXED_BID)
    with pytest.raises(ValidationError) as exc:
        wizard.next()
    assert exc.value.field == "fl_name"
    assert wizard.current_step is WizardStep.BASIC

    wizard.update_basic(contract_type=ContractType.TIME_AND_MATERIALS)
    assert len(wizard.visible_steps) == 3


def test_time_and_materials_end_to_end(make_wizard, fill_basic, fund, backend):
    wizard = make_wizard()
    submitted, closed = [], []
    wizard.submitted.connect(submitted.append)
    wizard.closed.connect(closed.append)

    fill_basic(wizard)
    assert isinstance(wizard.next(), Step1Data)
    fund(wizard, "PO-1", 10)
    step2 = wizard.next()
    assert isinstance(step2, Step2Data)
    assert step2.total_funding == pytest.approx(1_000.0)

    _plan(wizard, 4, 4)
    result = wizard.next()

    assert isinstance(result, FinancialLine)
    assert re.fullmatch(r"FL-2026-\d{4}", result.fl_no)
    assert result.contract_type is ContractType.TIME_AND_MATERIALS
    assert result.payment_milestones == []
    assert result.total_funding == pytest.approx(1_000.0)
    assert result.total_planned_revenue == pytest.approx(800.0)
    assert result.effort == pytest.approx(10.0)
    assert result.revenue_amount == pytest.approx(1_000.0)
    assert [m.month for m in result.revenue_planning] == ["2026-01", "2026-02", "2026-03"]
    assert submitted == [result]
    assert closed == [None]
    assert not wizard.is_open
    assert backend.financial_lines == [result]


def test_fixed_bid_end_to_end_with_milestone_date_check(make_wizard, fill_basic, fund, backend):
    wizard = make_wizard()
    wizard.open("p-fb")
    fill_basic(
        wizard,
        "p-fb",
        fl_name="Migration FL",
        schedule_start=date(2026, 2, 1),
        schedule_finish=date(2026, 4, 30),
        billing_rate=500.0,
    )
    wizard.next()
    fund(wizard, "PO-FB", 20)
    assert wizard.next().total_funding == pytest.approx(10_000.0)

    _plan(wizard, 4, 4, 4)
    step3 = wizard.next()
    assert isinstance(step3, Step3Data)
    assert wizard.current_step is WizardStep.MILESTONES

    schedule = wizard.milestones
    for idx, (name, due, amount) in enumerate(
        [
            ("Design sign-off", date(2026, 3, 1), 4_000.0),
            ("Go-live", date(2026, 5, 15), 6_000.0),
        ]
    ):
        schedule.add_milestone()
        schedule.update_field(idx, "milestone_name", name)
        schedule.update_field(idx, "due_date", due)
        schedule.update_field(idx, "amount", amount)

    with pytest.raises(ValidationError) as exc:
        wizard.next()
    assert exc.value.code == "MILESTONE_DATE_OUT_OF_RANGE"
    assert wizard.current_step is WizardStep.MILESTONES
    assert backend.created_drafts == []

    schedule.update_field(1, "due_date", date(2026, 4, 30))
    result = wizard.next()

    assert isinstance(result, FinancialLine)
    assert result.contract_type is ContractType.FIXED_BID
    assert result.currency == "EUR"
    assert [m.milestone_name for m in result.payment_milestones] == ["Design sign-off", "Go-live"]
    assert sum(m.amount for m in result.payment_milestones) == pytest.approx(result.total_funding)


def test_revenue_above_funding_keeps_wizard_on_step(make_wizard, fill_basic, fund, backend):
    wizard = make_wizard()
    _to_revenue_step(wizard, fill_basic, fund)
    _plan(wizard, 6, 6)

    with pytest.raises(ValidationError) as exc:
        wizard.next()

    assert exc.value.code == "REVENUE_EXCEEDS_FUNDING"
    assert wizard.current_step is WizardStep.REVENUE
    assert backend.created_drafts == []


def test_zero_revenue_plan_asks_for_confirmation(make_wizard, fill_basic, fund):
    prompts = []
    answers = iter([False, True])

    def _confirm(message):
        prompts.append(message)
        return next(answers)

    wizard = make_wizard(confirm=_confirm)
    _to_revenue_step(wizard, fill_basic, fund)

    with pytest.raises(ValidationError) as exc:
        wizard.next()
    assert exc.value.code == "REVENUE_PLAN_UNCONFIRMED"

    result = wizard.next()
    assert result.total_planned_revenue == 0
    assert len(prompts) == 2


def test_duplicate_fl_number_is_retried(make_wizard, fill_basic, fund, backend):
    backend.duplicate_responses = 2
    wizard = make_wizard()
    _to_revenue_step(wizard, fill_basic, fund)
    _plan(wizard, 1)

    result = wizard.next()

    assert isinstance(result, FinancialLine)
    assert len(backend.created_drafts) == 3


def test_duplicate_fl_number_gives_up_after_max_attempts(make_wizard, fill_basic, fund, backend):
    backend.duplicate_responses = MAX_FL_NO_ATTEMPTS
    wizard = make_wizard()
    _to_revenue_step(wizard, fill_basic, fund)
    _plan(wizard, 1)

    with pytest.raises(ValidationError) as exc:
        wizard.next()

    assert exc.value.code == "FL_NO_DUPLICATE"
    assert len(backend.created_drafts) == MAX_FL_NO_ATTEMPTS
    assert wizard.is_open
    assert not wizard.is_submitting


def test_backend_failure_keeps_step_and_data(make_wizard, fill_basic, fund, backend):
    backend.fail_with = RuntimeError("database is locked")
    wizard = make_wizard()
    _to_revenue_step(wizard, fill_basic, fund)
    _plan(wizard, 3)

    with pytest.raises(BackendError) as exc:
        wizard.next()

    assert str(exc.value) == "database is locked"
    assert exc.value.code == "BACKEND_FAILURE"
    assert wizard.current_step is WizardStep.REVENUE
    assert wizard.revenue_grid.months[0].planned_units == 3
    assert not wizard.is_submitting
    assert len(backend.created_drafts) == 1


def test_backend_failure_without_message_uses_fallback(make_wizard, fill_basic, fund, backend):
    backend.fail_with = RuntimeError()
    wizard = make_wizard()
    _to_revenue_step(wizard, fill_basic, fund)
    _plan(wizard, 3)

    with pytest.raises(BackendError) as exc:
        wizard.next()

    assert str(exc.value) == "Failed to create financial line"


def test_submit_cannot_run_twice(make_wizard, fill_basic, fund, backend):
    wizard = make_wizard()
    _to_revenue_step(wizard, fill_basic, fund)
    _plan(wizard, 2)

    seen = []
    real_create = backend.create_financial_line

    def _create(draft):
        seen.append(wizard.is_submitting)
        with pytest.raises(BusinessRuleError) as exc:
            wizard.next()
        seen.append(exc.value.code)
        return real_create(draft)

    backend.create_financial_line = _create
    wizard.next()

    assert seen == [True, "SUBMIT_IN_PROGRESS"]
    assert len(backend.financial_lines) == 1


def test_project_load_failure_is_wrapped(make_wizard, backend):
    backend.load_error = RuntimeError("timeout")
    wizard = make_wizard()
    with pytest.raises(BackendError) as exc:
        wizard.open("p-tm")
    assert str(exc.value) == "timeout"


def test_misuse_is_rejected(make_wizard, fill_basic):
    wizard = make_wizard()
    with pytest.raises(BusinessRuleError) as closed:
        wizard.next()
    assert closed.value.code == "WIZARD_CLOSED"

    fill_basic(wizard)
    with pytest.raises(BusinessRuleError) as first:
        wizard.back()
    assert first.value.code == "NO_PREVIOUS_STEP"

    with pytest.raises(ValidationError) as unknown:
        wizard.update_basic(colour="blue")
    assert unknown.value.code == "UNKNOWN_FIELD"


def test_cancel_resets_and_emits_once(make_wizard, fill_basic):
    wizard = make_wizard()
    closed = []
    wizard.closed.connect(closed.append)
    fill_basic(wizard)
    wizard.next()

    wizard.cancel()
    wizard.cancel()

    assert closed == [None]
    assert not wizard.is_open
    assert wizard.current_step is WizardStep.BASIC
    assert wizard.basic == Step1Data()


def test_existing_allocations_reduce_available_balance(make_wizard, fill_basic, fund):
    first = make_wizard()
    _to_revenue_step(first, fill_basic, fund)
    _plan(first, 1)
    first.next()

    second = make_wizard(seed=11)
    second.open("p-tm")
    assert second.ledger.available_balance("PO-1") == pytest.approx(99_000.0)


def test_edit_mode_updates_the_same_line(make_wizard, fill_basic, fund, backend):
    creator = make_wizard()
    _to_revenue_step(creator, fill_basic, fund)
    _plan(creator, 2, 3)
    created = creator.next()

    editor = make_wizard(seed=3)
    editor.open_for_edit(created)
    assert editor.is_edit_mode
    assert editor.basic.fl_name == "Support FL"
    assert editor.ledger.available_balance("PO-1") == pytest.approx(100_000.0)

    editor.update_basic(fl_name="Support FL (revised)")
    editor.next()
    editor.next()
    assert [m.planned_units for m in editor.revenue_grid.months] == [2, 3, 0]
    updated = editor.next()

    assert updated.id == created.id
    assert updated.fl_no == created.fl_no
    assert updated.fl_name == "Support FL (revised)"
    assert backend.updated[0][0] == created.id
    assert len(backend.created_drafts) == 1


def test_project_cannot_change_after_step1(make_wizard, fill_basic):
    wizard = make_wizard()
    fill_basic(wizard)
    wizard.next()

    for change in (
        lambda: wizard.select_project("p-fb"),
        lambda: wizard.update_basic(project_id="p-fb"),
        lambda: wizard.update_basic(fl_name="Renamed"),
    ):
        with pytest.raises(BusinessRuleError) as exc:
            change()
        assert exc.value.code == "STEP_OUT_OF_ORDER"

    assert wizard.project.id == "p-tm"
    assert {po.po_no for po in wizard.ledger.purchase_orders} == {"PO-1", "PO-2"}

    # going back re-opens step 1 for edits
    wizard.back()
    wizard.update_basic(project_id="p-fb")
    assert wizard.basic.project_id == "p-fb"
    assert [po.po_no for po in wizard.ledger.purchase_orders] == ["PO-FB"]


def test_step1_form_values_are_coerced(make_wizard, fill_basic):
    wizard = make_wizard()
    fill_basic(wizard)

    data = wizard.update_basic(
        contract_type="Fixed Bid",
        rate_uom="Hr",
        schedule_start="2026-01-20",
        billing_rate="125.5",
    )

    assert data.contract_type is ContractType.FIXED_BID
    assert data.rate_uom is UnitOfMeasure.HOUR
    assert data.schedule_start == date(2026, 1, 20)
    assert data.billing_rate == 125.5
    assert wizard.show_payment_milestones
    wizard.next()
    assert wizard.current_step is WizardStep.FUNDING


@pytest.mark.parametrize(
    "field, value, code",
    [
        ("contract_type", "Retainer", "INVALID_CHOICE"),
        ("effort_uom", "Week", "INVALID_CHOICE"),
        ("schedule_finish", "31/12/2026", "INVALID_DATE"),
        ("effort", "ten", "NOT_A_NUMBER"),
    ],
)
def test_step1_rejects_uncoercible_values(make_wizard, fill_basic, field, value, code):
    wizard = make_wizard()
    fill_basic(wizard)
    with pytest.raises(ValidationError) as exc:
        wizard.update_basic(**{field: value})
    assert exc.value.code == code
    assert exc.value.field == field
