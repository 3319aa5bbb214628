from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from PySide6.QtWidgets import QMessageBox, QWidget

from core.exceptions import DomainError
from ui.shared.incident_support import emit_error_event, message_with_incident

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

# Domain errors and bad user input get a warning; anything else is a defect.
_EXPECTED_ERRORS = (DomainError, ValueError)

_CALLBACK_ERROR_EVENT_MAP = {
    # list tab
    "create_financial_line": "business.financial_line.create.error",
    "edit_financial_line": "business.financial_line.update.error",
    "delete_financial_line": "business.financial_line.delete.error",
    # wizard navigation
    "go_next": "business.financial_line.wizard.error",
    "go_back": "business.financial_line.wizard.error",
    "select_project": "business.financial_line.wizard.error",
    # step grids
    "update_funding_row": "business.financial_line.funding.error",
    "remove_funding_row": "business.financial_line.funding.error",
    "update_revenue_month": "business.financial_line.revenue.error",
    "update_milestone": "business.financial_line.milestone.error",
}
_FALLBACK_EVENT = "ui.action.error"


def _report_failure(parent: QWidget | None, title: str, callback_name: str, exc: Exception) -> None:
    expected = isinstance(exc, _EXPECTED_ERRORS)
    details = {"callback": callback_name or "unknown", "known_error": expected}
    if isinstance(exc, DomainError):
        details["code"] = exc.code
        if exc.field:
            details["field"] = exc.field
    incident_id = emit_error_event(
        event_type=_CALLBACK_ERROR_EVENT_MAP.get(callback_name, _FALLBACK_EVENT),
        message=f"{title} action failed." if expected else f"{title} action failed with unexpected error.",
        parent=parent,
        error=exc,
        data=details,
    )
    text = message_with_incident(str(exc), incident_id)
    if expected:
        QMessageBox.warning(parent, title, text)
    else:
        logger.error("Unexpected error in %s [%s]", callback_name or title, incident_id, exc_info=exc)
        QMessageBox.critical(parent, title, text)


def run_guarded_action(
    parent: QWidget | None,
    *,
    title: str,
    action: Callable[[], _T],
    callback_name: str | None = None,
) -> _T | None:
    """Run `action`; on failure journal an incident, tell the user and return None."""
    try:
        return action()
    except Exception as exc:
        _report_failure(parent, title, (callback_name or "").strip(), exc)
        return None


def make_guarded_slot(
    parent: QWidget | None,
    *,
    title: str,
    callback: Callable[[], object],
) -> Callable[..., None]:
    """Adapt a no-arg handler to a Qt slot; signal arguments such as `checked` are dropped."""
    name = getattr(callback, "__name__", "") or ""

    def _slot(*_args, **_kwargs) -> None:
        run_guarded_action(parent, title=title, callback_name=name, action=callback)

    return _slot


__all__ = [
    "make_guarded_slot",
    "run_guarded_action",
]
