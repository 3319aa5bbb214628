from __future__ import annotations

from dataclasses import replace
from typing import Any

from core.exceptions import ValidationError
from core.models import ContractType, LocationType, Project, UnitOfMeasure
from core.services.financial_line.helpers import as_amount, as_date, normalize_currency
from core.services.financial_line.steps import Step1Data

DEFAULT_CURRENCY_CODE = "USD"
MIN_BILLING_RATE = 0.01

_REQUIRED_TEXT_FIELDS = (
    ("fl_name", "FL name is required."),
    ("project_id", "Project is required."),
    ("timesheet_approver", "Timesheet approver is required."),
    ("execution_entity", "Execution entity is required."),
    ("currency", "Currency is required."),
)
_CHOICE_FIELDS = {
    "contract_type": ContractType,
    "location_type": LocationType,
    "rate_uom": UnitOfMeasure,
    "effort_uom": UnitOfMeasure,
}
_DATE_FIELDS = ("schedule_start", "schedule_finish")
_AMOUNT_FIELDS = ("billing_rate", "effort", "revenue_amount", "expected_revenue")


def coerce_basic_value(field: str, value: Any) -> Any:
    """Turn a raw form value (enum value string, ISO date, numeric text) into its step 1 type."""
    if field in _CHOICE_FIELDS:
        choice = _CHOICE_FIELDS[field]
        try:
            return choice(value)
        except ValueError:
            raise ValidationError(f"{value!r} is not a valid {field}.", code="INVALID_CHOICE", field=field)
    if field in _DATE_FIELDS:
        return as_date(value, field=field)
    if field in _AMOUNT_FIELDS:
        return as_amount(value, field=field)
    return "" if value is None else str(value)


def derive_revenue(billing_rate: float, effort: float) -> float:
    return float(billing_rate or 0.0) * float(effort or 0.0)


def defaults_from_project(project: Project, data: Step1Data | None = None) -> Step1Data:
    """Pre-fill step 1 from the parent project (entity, currency, contract type, approver)."""
    base = data or Step1Data()
    contract_type = base.contract_type
    if project.billing_type:
        try:
            contract_type = ContractType(project.billing_type)
        except ValueError:
            pass
    approver = project.project_manager or project.delivery_manager or base.timesheet_approver
    return replace(
        base,
        project_id=project.id,
        execution_entity=project.legal_entity or base.execution_entity,
        currency=normalize_currency(project.currency, DEFAULT_CURRENCY_CODE),
        contract_type=contract_type,
        timesheet_approver=approver or "",
    )


def validate_basic_details(data: Step1Data, project: Project | None) -> Step1Data:
    cleaned = replace(
        data,
        fl_name=(data.fl_name or "").strip(),
        project_id=(data.project_id or "").strip(),
        execution_entity=(data.execution_entity or "").strip(),
        timesheet_approver=(data.timesheet_approver or "").strip(),
        currency=normalize_currency(data.currency, None),
        notes=(data.notes or "").strip(),
    )
    for field_name, message in _REQUIRED_TEXT_FIELDS:
        if not getattr(cleaned, field_name):
            raise ValidationError(message, code="FIELD_REQUIRED", field=field_name)

    if project is None or project.id != cleaned.project_id:
        raise ValidationError("Project not found.", code="PROJECT_NOT_FOUND", field="project_id")

    if cleaned.schedule_start is None:
        raise ValidationError("Schedule start is required.", code="FIELD_REQUIRED", field="schedule_start")
    if cleaned.schedule_finish is None:
        raise ValidationError("Schedule finish is required.", code="FIELD_REQUIRED", field="schedule_finish")
    if cleaned.schedule_finish < cleaned.schedule_start:
        raise ValidationError(
            "Schedule finish must be on or after schedule start.",
            code="SCHEDULE_INVERTED",
            field="schedule_finish",
        )
    if not project.contains(cleaned.schedule_start):
        raise ValidationError(
            "FL schedule start must be within project start and end dates.",
            code="SCHEDULE_OUT_OF_PROJECT",
            field="schedule_start",
        )
    if not project.contains(cleaned.schedule_finish):
        raise ValidationError(
            f"FL end date ({cleaned.schedule_finish:%b %d, %Y}) extends beyond project end date "
            f"({project.end_date:%b %d, %Y}). Please extend the project end date first.",
            code="SCHEDULE_OUT_OF_PROJECT",
            field="schedule_finish",
        )

    if float(cleaned.billing_rate or 0.0) < MIN_BILLING_RATE:
        raise ValidationError("Billing rate must be greater than 0.", code="BILLING_RATE_INVALID", field="billing_rate")
    if float(cleaned.effort or 0.0) < 0:
        raise ValidationError("Effort cannot be negative.", code="EFFORT_NEGATIVE", field="effort")

    revenue = derive_revenue(cleaned.billing_rate, cleaned.effort)
    return replace(cleaned, revenue_amount=revenue, expected_revenue=revenue)


__all__ = [
    "DEFAULT_CURRENCY_CODE",
    "coerce_basic_value",
    "derive_revenue",
    "defaults_from_project",
    "validate_basic_details",
]
