from __future__ import annotations

from datetime import date

from core.exceptions import ValidationError
from core.interfaces import ProjectRepository
from core.models import ContractType


class ProjectValidationMixin:
    _project_repo: ProjectRepository

    def _validate_project_code(self, project_code: str) -> None:
        if not project_code or not project_code.strip():
            raise ValidationError("Project code cannot be empty.", code="PROJECT_CODE_EMPTY", field="project_code")

        for project in self._project_repo.list_all():
            if project.project_code.strip().lower() == project_code.strip().lower():
                raise ValidationError(
                    "A project with this code already exists.",
                    code="PROJECT_CODE_DUPLICATE",
                    field="project_code",
                )

    def _validate_project_name(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Project name cannot be empty.", code="PROJECT_NAME_EMPTY", field="name")
        if len(name.strip()) < 3:
            raise ValidationError(
                "Project name must be at least 3 characters.",
                code="PROJECT_NAME_TOO_SHORT",
                field="name",
            )

    @staticmethod
    def _validate_dates(start_date: date | None, end_date: date | None) -> None:
        if start_date and end_date and end_date < start_date:
            raise ValidationError(
                "Project end date cannot be before start date.",
                code="PROJECT_DATES_INVERTED",
                field="end_date",
            )

    @staticmethod
    def _validate_billing_type(billing_type: str | None) -> None:
        if not billing_type:
            return
        allowed = {ct.value for ct in ContractType}
        if billing_type not in allowed:
            raise ValidationError(
                f"Billing type must be one of: {', '.join(sorted(allowed))}.",
                code="BILLING_TYPE_INVALID",
                field="billing_type",
            )


__all__ = ["ProjectValidationMixin"]
