from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.enums import ProjectStatus
from core.domain.identifiers import generate_id


@dataclass
class Project:
    id: str
    project_code: str
    name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    legal_entity: Optional[str] = None
    currency: Optional[str] = None
    billing_type: Optional[str] = None
    project_manager: Optional[str] = None
    delivery_manager: Optional[str] = None

    @staticmethod
    def create(project_code: str, name: str, **extra) -> "Project":
        return Project(
            id=generate_id(),
            project_code=project_code,
            name=name,
            **extra,
        )

    def contains(self, day: date) -> bool:
        if self.start_date is not None and day < self.start_date:
            return False
        if self.end_date is not None and day > self.end_date:
            return False
        return True


__all__ = ["Project"]
