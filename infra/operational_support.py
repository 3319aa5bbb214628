"""Support journal for the RMG console.

Every guarded UI failure, unhandled crash and wizard submission is appended
as one JSON object per line to ``support-events.jsonl`` under the log
directory. Users quote the incident id shown in error dialogs and support
looks the matching rows up with :meth:`OperationalSupport.read_events`.

Approvers and project managers are stored by e-mail, so payloads are
scrubbed before they reach disk.
"""
from __future__ import annotations

import json
import logging
import os
import re
import sys
import traceback
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import date, datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, Iterator, Mapping

from infra.path import log_dir
from infra.version import get_app_version

logger = logging.getLogger(__name__)

REDACTED = "<redacted>"
REDACTED_EMAIL = "<redacted-email>"
JOURNAL_FILE_NAME = "support-events.jsonl"

_active_trace: ContextVar[str | None] = ContextVar("rmg_trace_id", default=None)

_PRIVATE_FIELDS = ("password", "token", "secret", "authorization", "approver", "manager", "email")
_EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
_CREDENTIAL_RE = re.compile(r"(?i)\b(password|token|secret|authorization)\b\s*[:=]\s*([^\s,;]+)")
_MAX_NESTING = 8


def create_incident_id() -> str:
    return "inc-{}-{}".format(
        datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S"),
        uuid.uuid4().hex[:8],
    )


def current_trace_id() -> str | None:
    bound = _active_trace.get()
    if bound is None:
        return None
    return str(bound).strip() or None


@contextmanager
def bind_trace_id(trace_id: str | None = None) -> Iterator[str]:
    """Make `trace_id` (or a fresh incident id) current for log records and events."""
    resolved = (trace_id or "").strip() or create_incident_id()
    reset_token = _active_trace.set(resolved)
    try:
        yield resolved
    finally:
        _active_trace.reset(reset_token)


def scrub_text(text: object) -> str:
    masked = _EMAIL_RE.sub(REDACTED_EMAIL, str(text or ""))
    return _CREDENTIAL_RE.sub(lambda match: f"{match.group(1)}={REDACTED}", masked)


def _is_private(key: object) -> bool:
    name = str(key or "").lower().replace("-", "_")
    return any(part in name for part in _PRIVATE_FIELDS)


def scrub(value: Any, depth: int = 0) -> Any:
    """Return a JSON-safe copy of `value` with private fields and e-mails masked."""
    if depth >= _MAX_NESTING:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Mapping):
        cleaned = {}
        for key, item in value.items():
            cleaned[str(key)] = REDACTED if _is_private(key) else scrub(item, depth + 1)
        return cleaned
    if isinstance(value, (list, tuple, set)):
        return [scrub(item, depth + 1) for item in value]
    if hasattr(value, "value") and isinstance(getattr(value, "value"), str):
        # enums persist by value
        return scrub_text(value.value)
    return scrub_text(value)


class TraceIdLogFilter(logging.Filter):
    """Stamps ``record.trace_id`` so the log format can print the bound incident."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = current_trace_id() or "-"
        return True


class OperationalSupport:
    def __init__(self, events_path: str | Path | None = None) -> None:
        self._path = Path(events_path) if events_path else log_dir() / JOURNAL_FILE_NAME
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._write_lock = Lock()

    def _append(self, row: dict[str, Any]) -> None:
        encoded = json.dumps(row, ensure_ascii=True, sort_keys=True)
        with self._write_lock, self._path.open("a", encoding="utf-8") as journal:
            journal.write(encoded)
            journal.write("\n")

    def emit_event(
        self,
        *,
        event_type: str,
        message: str,
        level: str = "INFO",
        trace_id: str | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> str:
        """Append one event and return the trace id it was filed under."""
        trace = (trace_id or current_trace_id() or create_incident_id()).strip()
        row: dict[str, Any] = {
            "timestamp_utc": datetime.now(timezone.utc).isoformat(),
            "event_type": (event_type or "").strip() or "support.event",
            "level": (level or "INFO").strip().upper(),
            "trace_id": trace,
            "message": scrub_text(message),
            "app_version": get_app_version(),
            "pid": os.getpid(),
        }
        if data:
            row["data"] = scrub(dict(data))
        self._append(row)
        return trace

    def record_financial_line_submission(self, financial_line: Any, *, edited: bool = False) -> str:
        """Audit row for a wizard submit; carries totals only, never the child rows."""
        action = "updated" if edited else "created"
        return self.emit_event(
            event_type=f"business.financial_line.{action}",
            message=f"Financial line {financial_line.fl_no} {action} from the wizard",
            data={
                "fl_no": financial_line.fl_no,
                "project_id": financial_line.project_id,
                "contract_type": financial_line.contract_type,
                "currency": financial_line.currency,
                "total_funding": financial_line.total_funding,
                "total_planned_revenue": financial_line.total_planned_revenue,
                "funding_rows": len(financial_line.funding),
                "milestones": len(financial_line.payment_milestones),
            },
        )

    def capture_exception(
        self,
        *,
        exc_type: type[BaseException],
        exc_value: BaseException,
        exc_traceback: Any,
        context: str,
        trace_id: str | None = None,
    ) -> str:
        return self.emit_event(
            event_type="app.crash",
            level="ERROR",
            trace_id=trace_id,
            message=f"Unhandled exception in {context}: {exc_value}",
            data={
                "context": context,
                "exception_type": getattr(exc_type, "__name__", str(exc_type)),
                "stacktrace": "".join(traceback.format_exception(exc_type, exc_value, exc_traceback)),
            },
        )

    def read_events(self, *, trace_id: str | None = None) -> list[dict[str, Any]]:
        """Journal rows in write order, optionally only those filed under `trace_id`."""
        try:
            raw = self._path.read_text(encoding="utf-8", errors="ignore")
        except FileNotFoundError:
            return []
        wanted = (trace_id or "").strip()
        rows: list[dict[str, Any]] = []
        for line in raw.splitlines():
            try:
                row = json.loads(line)
            except json.JSONDecodeError:
                continue
            if isinstance(row, dict) and (not wanted or row.get("trace_id") == wanted):
                rows.append(row)
        return rows


_support: OperationalSupport | None = None
_previous_excepthook = None


def get_operational_support() -> OperationalSupport:
    global _support
    if _support is None:
        _support = OperationalSupport()
    return _support


def install_global_exception_hooks(support: OperationalSupport | None = None) -> None:
    """Journal uncaught exceptions from the Qt event loop before the default hook runs.

    The console does all of its work on the GUI thread, so only ``sys.excepthook``
    is chained. Calling this twice is a no-op.
    """
    global _previous_excepthook
    if _previous_excepthook is not None:
        return
    journal = support or get_operational_support()
    _previous_excepthook = sys.excepthook

    def _journal_crash(exc_type, exc_value, exc_tb) -> None:
        try:
            journal.capture_exception(
                exc_type=exc_type,
                exc_value=exc_value,
                exc_traceback=exc_tb,
                context="event-loop",
            )
        except OSError:
            logger.exception("Could not write crash event")
        _previous_excepthook(exc_type, exc_value, exc_tb)

    sys.excepthook = _journal_crash


__all__ = [
    "JOURNAL_FILE_NAME",
    "OperationalSupport",
    "REDACTED",
    "REDACTED_EMAIL",
    "TraceIdLogFilter",
    "bind_trace_id",
    "create_incident_id",
    "current_trace_id",
    "get_operational_support",
    "install_global_exception_hooks",
    "scrub",
    "scrub_text",
]
