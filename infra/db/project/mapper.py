from __future__ import annotations

from core.models import Project
from infra.db.models import ProjectORM


def project_to_orm(project: Project) -> ProjectORM:
    return ProjectORM(
        id=project.id,
        project_code=project.project_code,
        name=project.name,
        start_date=project.start_date,
        end_date=project.end_date,
        status=project.status,
        legal_entity=project.legal_entity,
        currency=project.currency,
        billing_type=project.billing_type,
        project_manager=project.project_manager,
        delivery_manager=project.delivery_manager,
    )


def project_from_orm(obj: ProjectORM) -> Project:
    return Project(
        id=obj.id,
        project_code=obj.project_code,
        name=obj.name,
        start_date=obj.start_date,
        end_date=obj.end_date,
        status=obj.status,
        legal_entity=obj.legal_entity,
        currency=obj.currency,
        billing_type=obj.billing_type,
        project_manager=obj.project_manager,
        delivery_manager=obj.delivery_manager,
    )


__all__ = ["project_to_orm", "project_from_orm"]
