from __future__ import annotations

from core.exceptions import NotFoundError, ValidationError
from core.interfaces import FinancialLineRepository, ProjectRepository
from core.models import ContractType, FinancialLineDraft, Project
from core.services.financial_line.basic_details import DEFAULT_CURRENCY_CODE
from core.services.financial_line.helpers import amounts_match, exceeds, fmt_amount, normalize_currency


class FinancialLineValidationMixin:
    """Checks repeated on the storage side, whatever client produced the draft."""

    _project_repo: ProjectRepository
    _fl_repo: FinancialLineRepository

    def _require_project(self, project_id: str) -> Project:
        project = self._project_repo.get(project_id)
        if project is None:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        return project

    def _normalize_draft(self, draft: FinancialLineDraft, project: Project) -> None:
        if not (draft.fl_name or "").strip():
            raise ValidationError("FL name is required.", code="FIELD_REQUIRED", field="fl_name")
        draft.fl_name = draft.fl_name.strip()

        if not draft.contract_type:
            try:
                draft.contract_type = ContractType(project.billing_type)
            except ValueError:
                draft.contract_type = ContractType.TIME_AND_MATERIALS
        draft.currency = normalize_currency(
            draft.currency,
            normalize_currency(project.currency, DEFAULT_CURRENCY_CODE),
        )

    def _check_schedule(self, draft: FinancialLineDraft, project: Project) -> None:
        if draft.schedule_start is None or draft.schedule_finish is None:
            raise ValidationError("Schedule start and finish are required.", code="FIELD_REQUIRED", field="schedule_start")
        if draft.schedule_finish < draft.schedule_start:
            raise ValidationError(
                "Schedule finish must be on or after schedule start.",
                code="SCHEDULE_INVERTED",
                field="schedule_finish",
            )
        if not (project.contains(draft.schedule_start) and project.contains(draft.schedule_finish)):
            raise ValidationError(
                "FL schedule must be within project start and end dates.",
                code="SCHEDULE_OUT_OF_PROJECT",
                field="schedule_start",
            )

    def _check_totals(self, draft: FinancialLineDraft) -> None:
        if draft.payment_milestones:
            milestone_total = sum(m.amount for m in draft.payment_milestones)
            if not amounts_match(milestone_total, draft.total_funding):
                raise ValidationError(
                    f"Total milestone amount ({fmt_amount(milestone_total)}) must equal total funding "
                    f"({fmt_amount(draft.total_funding)}).",
                    code="MILESTONE_TOTAL_MISMATCH",
                )
        if exceeds(draft.total_planned_revenue, draft.total_funding):
            raise ValidationError(
                "Total planned revenue cannot exceed total funding.",
                code="REVENUE_EXCEEDS_FUNDING",
            )

    def _check_fl_no_unique(self, fl_no: str, *, current_id: str | None = None) -> None:
        existing = self._fl_repo.get_by_fl_no(fl_no)
        if existing is not None and existing.id != current_id:
            raise ValidationError(
                f"Financial line number {fl_no} already exists.",
                code="FL_NO_DUPLICATE",
                field="fl_no",
            )


__all__ = ["FinancialLineValidationMixin"]
