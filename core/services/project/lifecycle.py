from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.interfaces import ProjectRepository
from core.models import Project, ProjectStatus
from core.services.project.validation import ProjectValidationMixin

logger = logging.getLogger(__name__)
DEFAULT_CURRENCY_CODE = "USD"


class ProjectLifecycleMixin(ProjectValidationMixin):
    _session: Session
    _project_repo: ProjectRepository

    def create_project(
        self,
        project_code: str,
        name: str,
        start_date: date | None = None,
        end_date: date | None = None,
        status: ProjectStatus = ProjectStatus.ACTIVE,
        legal_entity: str | None = None,
        currency: str | None = None,
        billing_type: str | None = None,
        project_manager: str | None = None,
        delivery_manager: str | None = None,
    ) -> Project:
        self._validate_project_code(project_code)
        self._validate_project_name(name)
        self._validate_dates(start_date, end_date)
        self._validate_billing_type(billing_type)

        project = Project.create(
            project_code=project_code.strip(),
            name=name.strip(),
            start_date=start_date,
            end_date=end_date,
            status=status,
            legal_entity=(legal_entity or "").strip() or None,
            currency=(currency or "").strip().upper() or DEFAULT_CURRENCY_CODE,
            billing_type=billing_type or None,
            project_manager=(project_manager or "").strip() or None,
            delivery_manager=(delivery_manager or "").strip() or None,
        )

        try:
            self._project_repo.add(project)
            self._session.commit()
            logger.info("Created project %s - %s", project.project_code, project.name)
            domain_events.project_changed.emit(project.id)
            return project
        except Exception as e:
            self._session.rollback()
            logger.error("Error creating project: %s", e)
            raise


__all__ = ["ProjectLifecycleMixin", "DEFAULT_CURRENCY_CODE"]
