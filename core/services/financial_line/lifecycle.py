from __future__ import annotations

import logging
from dataclasses import fields, replace
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import ValidationError
from core.interfaces import FinancialLineRepository
from core.models import FinancialLine, FinancialLineDraft
from core.domain.identifiers import sequential_fl_number
from core.services.financial_line.validation import FinancialLineValidationMixin

logger = logging.getLogger(__name__)


class FinancialLineLifecycleMixin(FinancialLineValidationMixin):
    _session: Session
    _fl_repo: FinancialLineRepository

    def create_financial_line(self, draft: FinancialLineDraft) -> FinancialLine:
        draft = replace(draft)
        project = self._require_project(draft.project_id)
        self._normalize_draft(draft, project)
        self._check_schedule(draft, project)
        self._check_totals(draft)

        draft.fl_no = (draft.fl_no or "").strip() or self._next_fl_no(draft)
        self._check_fl_no_unique(draft.fl_no)

        fl = FinancialLine.create(draft)
        try:
            self._fl_repo.add(fl)
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            raise ValidationError(
                f"Financial line number {fl.fl_no} already exists.",
                code="FL_NO_DUPLICATE",
                field="fl_no",
            ) from e
        except Exception as e:
            self._session.rollback()
            logger.error("Error creating financial line: %s", e)
            raise

        logger.info("Created financial line %s for project %s", fl.fl_no, fl.project_id)
        domain_events.financial_lines_changed.emit(fl.project_id)
        return fl

    def update_financial_line(self, fl_id: str, draft: FinancialLineDraft) -> FinancialLine:
        existing = self.get_financial_line(fl_id)
        draft = replace(draft)
        project = self._require_project(draft.project_id)
        self._normalize_draft(draft, project)
        self._check_schedule(draft, project)
        self._check_totals(draft)

        draft.fl_no = (draft.fl_no or "").strip() or existing.fl_no
        self._check_fl_no_unique(draft.fl_no, current_id=existing.id)

        values = {f.name: getattr(draft, f.name) for f in fields(FinancialLineDraft)}
        fl = FinancialLine(
            id=existing.id,
            created_at=existing.created_at,
            updated_at=datetime.now(timezone.utc),
            **values,
        )
        try:
            self._fl_repo.update(fl)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error updating financial line %s: %s", fl_id, e)
            raise

        logger.info("Updated financial line %s", fl.fl_no)
        domain_events.financial_lines_changed.emit(fl.project_id)
        if existing.project_id != fl.project_id:
            domain_events.financial_lines_changed.emit(existing.project_id)
        return fl

    def delete_financial_line(self, fl_id: str) -> None:
        fl = self.get_financial_line(fl_id)
        try:
            self._fl_repo.delete(fl_id)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            raise e
        logger.info("Deleted financial line %s", fl.fl_no)
        domain_events.financial_lines_changed.emit(fl.project_id)

    def _next_fl_no(self, draft: FinancialLineDraft) -> str:
        year = (draft.schedule_start or datetime.now(timezone.utc).date()).year
        count = self._fl_repo.count_with_prefix(f"FL-{year}-")
        fl_no = sequential_fl_number(year, count)
        while self._fl_repo.get_by_fl_no(fl_no) is not None:
            count += 1
            fl_no = sequential_fl_number(year, count)
        return fl_no


__all__ = ["FinancialLineLifecycleMixin"]
