from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from PySide6.QtWidgets import QWidget

from infra.operational_support import create_incident_id, current_trace_id, get_operational_support

logger = logging.getLogger(__name__)

_SUPPORT_HINT = "Share this ID with support."


def resolve_incident_id() -> str:
    """Reuse the trace bound around the failing call so log lines and the dialog share one id."""
    return current_trace_id() or create_incident_id()


def message_with_incident(message: str, incident_id: str) -> str:
    body = (message or "").strip() or "Operation failed."
    return "\n\n".join((body, f"Incident ID: {incident_id}\n{_SUPPORT_HINT}"))


def emit_error_event(
    *,
    event_type: str,
    message: str,
    parent: QWidget | None = None,
    error: BaseException | None = None,
    data: Mapping[str, Any] | None = None,
    trace_id: str | None = None,
) -> str:
    """Journal a UI failure and return the incident id to show the user.

    A journal that cannot be written is logged and otherwise ignored; the
    dialog still shows the id so the log file can be searched instead.
    """
    incident_id = (trace_id or "").strip() or resolve_incident_id()
    context: dict[str, Any] = {}
    if parent is not None:
        context["widget"] = type(parent).__name__
    if error is not None:
        context["error_type"] = type(error).__name__
        context["error"] = str(error)
    context.update(data or {})
    try:
        get_operational_support().emit_event(
            event_type=(event_type or "").strip() or "ui.error",
            level="ERROR",
            trace_id=incident_id,
            message=message or "UI error.",
            data=context,
        )
    except OSError:
        logger.exception("Could not record support event %s [%s]", event_type, incident_id)
    return incident_id


__all__ = [
    "emit_error_event",
    "message_with_incident",
    "resolve_incident_id",
]
