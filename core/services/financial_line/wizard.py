from __future__ import annotations

import logging
import random
from dataclasses import fields, replace
from datetime import date
from enum import IntEnum
from typing import Any, Callable, List, Optional

from core.events.signal import Signal
from core.exceptions import (
    BackendError,
    BusinessRuleError,
    CalculationError,
    DomainError,
    ValidationError,
)
from core.interfaces import FinancialLineBackend
from core.models import FinancialLine, Project, generate_fl_number
from core.services.financial_line.basic_details import (
    coerce_basic_value,
    defaults_from_project,
    validate_basic_details,
)
from core.services.financial_line.funding import FundingLedger, sum_po_allocations
from core.services.financial_line.milestones import MilestoneSchedule
from core.services.financial_line.revenue import ConfirmCallback, RevenuePlanGrid
from core.services.financial_line.steps import (
    BasicStage,
    CompleteStage,
    FundedStage,
    PlannedStage,
    Step1Data,
    WizardStage,
)

logger = logging.getLogger(__name__)

MAX_FL_NO_ATTEMPTS = 5


class WizardStep(IntEnum):
    BASIC = 1
    FUNDING = 2
    REVENUE = 3
    MILESTONES = 4

    @property
    def title(self) -> str:
        return STEP_TITLES[self]


STEP_TITLES = {
    WizardStep.BASIC: "Form",
    WizardStep.FUNDING: "Funding",
    WizardStep.REVENUE: "Planned / Expected Revenue",
    WizardStep.MILESTONES: "Payment Milestone",
}

_STEP1_FIELDS = {f.name for f in fields(Step1Data)}


class FinancialLineWizard:
    """
    Drives the create/edit flow of one financial line.

    Each call to `next()` validates the current step and returns its data;
    the last step submits to the backend and returns the stored record.
    Whether the milestone step is part of the flow is decided once, when the
    user first leaves step 1, and does not change for the rest of the session.
    """

    def __init__(
        self,
        backend: FinancialLineBackend,
        *,
        confirm: Optional[ConfirmCallback] = None,
        today: Callable[[], date] = date.today,
        rng: Optional[random.Random] = None,
    ):
        self._backend = backend
        self._confirm = confirm
        self._today = today
        self._rng = rng
        self.submitted: Signal[FinancialLine] = Signal()
        self.closed: Signal[None] = Signal()
        self.calculation_failed: Signal[CalculationError] = Signal()
        self._is_open = False
        self._reset()

    # ---- lifecycle ---------------------------------------------------

    def open(self, project_id: Optional[str] = None) -> None:
        self._reset()
        self._is_open = True
        logger.info("Financial line wizard opened (project=%s)", project_id or "-")
        if project_id:
            self.select_project(project_id)

    def open_for_edit(self, fl: FinancialLine) -> None:
        self.open()
        self._editing = fl
        self._load_project(fl.project_id, exclude_fl_id=fl.id)
        self._basic = Step1Data(**{name: getattr(fl, name) for name in _STEP1_FIELDS})
        self._ledger = self._new_ledger(rows=fl.funding)
        self._grid = RevenuePlanGrid(
            billing_rate=fl.billing_rate,
            rate_uom=fl.rate_uom,
            months=fl.revenue_planning,
        )
        self._milestones = MilestoneSchedule(fl.payment_milestones)
        logger.info("Editing financial line %s", fl.fl_no)

    def cancel(self) -> None:
        if not self._is_open:
            return
        logger.info("Financial line wizard cancelled at step %s", int(self._step))
        self._is_open = False
        self._reset()
        self.closed.emit(None)

    close = cancel

    # ---- state -------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def is_edit_mode(self) -> bool:
        return self._editing is not None

    @property
    def current_step(self) -> WizardStep:
        return self._step

    @property
    def project(self) -> Optional[Project]:
        return self._project

    @property
    def basic(self) -> Step1Data:
        return self._basic

    @property
    def ledger(self) -> FundingLedger:
        return self._ledger

    @property
    def revenue_grid(self) -> RevenuePlanGrid:
        return self._grid

    @property
    def milestones(self) -> MilestoneSchedule:
        return self._milestones

    @property
    def stage(self) -> Optional[WizardStage]:
        return self._stages[-1] if self._stages else None

    @property
    def show_payment_milestones(self) -> bool:
        if self._milestones_locked is not None:
            return self._milestones_locked
        return self._basic.contract_type.requires_milestones

    @property
    def visible_steps(self) -> List[WizardStep]:
        steps = [WizardStep.BASIC, WizardStep.FUNDING, WizardStep.REVENUE]
        if self.show_payment_milestones:
            steps.append(WizardStep.MILESTONES)
        return steps

    # ---- step 1 inputs -------------------------------------------------

    def select_project(self, project_id: str) -> Project:
        self._ensure_open()
        self._ensure_on_basic_step()
        project = self._load_project(project_id)
        self._basic = defaults_from_project(project, self._basic)
        self._ledger = self._new_ledger()
        self._grid = RevenuePlanGrid(billing_rate=self._basic.billing_rate, rate_uom=self._basic.rate_uom)
        self._milestones = MilestoneSchedule()
        return project

    def update_basic(self, **changes: Any) -> Step1Data:
        self._ensure_open()
        self._ensure_on_basic_step()
        unknown = set(changes) - _STEP1_FIELDS
        if unknown:
            raise ValidationError(
                f"Unknown field(s): {', '.join(sorted(unknown))}",
                code="UNKNOWN_FIELD",
                field=sorted(unknown)[0],
            )
        project_id = changes.pop("project_id", None)
        if project_id and (self._project is None or project_id != self._project.id):
            self.select_project(project_id)
        self._basic = replace(
            self._basic,
            **{name: coerce_basic_value(name, value) for name, value in changes.items()},
        )
        return self._basic

    # ---- navigation ----------------------------------------------------

    def next(self):
        """Validate the current step and advance. Returns the step's data, or the stored FL on submit."""
        self._ensure_open()
        if self._step is WizardStep.BASIC:
            return self._complete_basic()
        if self._step is WizardStep.FUNDING:
            return self._complete_funding()
        if self._step is WizardStep.REVENUE:
            return self._complete_revenue()
        return self._complete_milestones()

    def back(self) -> WizardStep:
        self._ensure_open()
        if self._step is WizardStep.BASIC:
            raise BusinessRuleError("There is no step before the first one.", code="NO_PREVIOUS_STEP")
        self._stages.pop()
        self._step = WizardStep(self._step - 1)
        logger.debug("Wizard back to step %s", int(self._step))
        return self._step

    def _complete_basic(self) -> Step1Data:
        data = validate_basic_details(self._basic, self._project)
        self._basic = data
        if self._milestones_locked is None:
            self._milestones_locked = data.contract_type.requires_milestones
            logger.info(
                "Wizard step set locked: %s steps (contract type %s)",
                len(self.visible_steps),
                data.contract_type.value,
            )
        self._ledger.set_defaults(currency=data.currency, billing_rate=data.billing_rate, rate_uom=data.rate_uom)
        self._grid.set_billing_rate(data.billing_rate, data.rate_uom)
        self._grid.generate_buckets(data.schedule_start, data.schedule_finish)
        self._stages = [BasicStage(data)]
        self._step = WizardStep.FUNDING
        return data

    def _complete_funding(self):
        step2 = self._ledger.validate()
        over = self._ledger.over_allocated_rows()
        if over:
            logger.warning("Funding rows %s exceed available PO balance", over)
        stage = self._current(BasicStage)
        self._stages.append(stage.with_funding(step2))
        self._step = WizardStep.REVENUE
        return step2

    def _complete_revenue(self):
        stage = self._current(FundedStage)
        step3 = self._grid.validate(stage.step2.total_funding, self._confirm)
        planned = stage.with_revenue_plan(step3)
        if self._milestones_locked:
            self._stages.append(planned)
            self._step = WizardStep.MILESTONES
            return step3
        return self._submit(planned.without_milestones())

    def _complete_milestones(self) -> FinancialLine:
        stage = self._current(PlannedStage)
        step4 = self._milestones.validate(
            stage.step2.total_funding,
            stage.step1.schedule_start,
            stage.step1.schedule_finish,
        )
        return self._submit(stage.with_milestones(step4))

    # ---- submit --------------------------------------------------------

    def _submit(self, complete: CompleteStage) -> FinancialLine:
        if self._submitting:
            raise BusinessRuleError("A submission is already in progress.", code="SUBMIT_IN_PROGRESS")
        self._submitting = True
        try:
            if self._editing is not None:
                result = self._call_backend(
                    lambda: self._backend.update_financial_line(
                        self._editing.id,
                        complete.build(self._editing.fl_no, status=self._editing.status),
                    ),
                    "Failed to update financial line",
                )
            else:
                result = self._create_with_fresh_number(complete)
        finally:
            self._submitting = False

        logger.info("Financial line %s saved", result.fl_no)
        self._is_open = False
        self._reset()
        self.submitted.emit(result)
        self.closed.emit(None)
        return result

    def _create_with_fresh_number(self, complete: CompleteStage) -> FinancialLine:
        for attempt in range(1, MAX_FL_NO_ATTEMPTS + 1):
            fl_no = generate_fl_number(self._today(), self._rng)
            try:
                return self._call_backend(
                    lambda: self._backend.create_financial_line(complete.build(fl_no)),
                    "Failed to create financial line",
                )
            except ValidationError as exc:
                if exc.code != "FL_NO_DUPLICATE" or attempt == MAX_FL_NO_ATTEMPTS:
                    raise
                logger.warning("FL number %s already taken, retrying (%s/%s)", fl_no, attempt, MAX_FL_NO_ATTEMPTS)
        raise BackendError("Failed to create financial line", code="BACKEND_FAILURE")

    @staticmethod
    def _call_backend(call: Callable[[], FinancialLine], fallback: str) -> FinancialLine:
        try:
            return call()
        except DomainError:
            raise
        except Exception as exc:
            logger.exception("Financial line backend call failed")
            raise BackendError(str(exc) or fallback, code="BACKEND_FAILURE") from exc

    # ---- internals -----------------------------------------------------

    def _reset(self) -> None:
        self._step = WizardStep.BASIC
        self._stages: list[WizardStage] = []
        self._milestones_locked: Optional[bool] = None
        self._submitting = False
        self._editing: Optional[FinancialLine] = None
        self._project: Optional[Project] = None
        self._purchase_orders = []
        self._allocations: dict[str, float] = {}
        self._basic = Step1Data()
        self._ledger = self._new_ledger()
        self._grid = RevenuePlanGrid(billing_rate=0.0)
        self._milestones = MilestoneSchedule()

    def _load_project(self, project_id: str, *, exclude_fl_id: Optional[str] = None) -> Project:
        try:
            project = self._backend.get_project(project_id)
            purchase_orders = self._backend.list_purchase_orders(project_id)
            financial_lines = self._backend.list_financial_lines(project_id)
        except DomainError:
            raise
        except Exception as exc:
            logger.exception("Loading project %s for the wizard failed", project_id)
            raise BackendError(str(exc) or "Failed to load project data", code="BACKEND_FAILURE") from exc
        self._project = project
        self._purchase_orders = list(purchase_orders)
        self._allocations = sum_po_allocations(financial_lines, exclude_fl_id=exclude_fl_id)
        logger.debug(
            "Project %s loaded: %s PO(s), %s FL(s)",
            project_id,
            len(self._purchase_orders),
            len(financial_lines),
        )
        return project

    def _new_ledger(self, rows=()) -> FundingLedger:
        ledger = FundingLedger(
            project_id=self._project.id if self._project else "",
            currency=self._basic.currency,
            billing_rate=self._basic.billing_rate,
            rate_uom=self._basic.rate_uom,
            purchase_orders=self._purchase_orders,
            allocations=self._allocations,
            rows=rows,
        )
        ledger.calculation_failed.connect(self.calculation_failed.emit)
        return ledger

    def _current(self, expected: type):
        stage = self.stage
        if not isinstance(stage, expected):
            raise BusinessRuleError("Wizard steps are out of order.", code="STEP_OUT_OF_ORDER")
        return stage

    def _ensure_open(self) -> None:
        if not self._is_open:
            raise BusinessRuleError("The financial line wizard is closed.", code="WIZARD_CLOSED")

    def _ensure_on_basic_step(self) -> None:
        # step 2 onwards is built on the step 1 snapshot; go back() to change it
        if self._step is not WizardStep.BASIC:
            raise BusinessRuleError(
                "Basic details can only be changed on the first step.",
                code="STEP_OUT_OF_ORDER",
            )


__all__ = ["FinancialLineWizard", "WizardStep", "STEP_TITLES", "MAX_FL_NO_ATTEMPTS"]
