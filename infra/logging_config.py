# infra/logging_config.py
from __future__ import annotations
import logging
import os
from logging.handlers import RotatingFileHandler

from infra.path import log_dir
from infra.operational_support import (
    TraceIdLogFilter,
    get_operational_support,
    install_global_exception_hooks,
)

LOG_LEVEL_ENV_VAR = "RMG_LOG_LEVEL"
_FILE_FORMAT = "%(asctime)s [%(levelname)s] trace=%(trace_id)s %(name)s - %(message)s"
_CONSOLE_FORMAT = "%(levelname)s [trace=%(trace_id)s]: %(message)s"


def resolve_log_level(default: int = logging.INFO) -> int:
    raw = (os.getenv(LOG_LEVEL_ENV_VAR) or "").strip().upper()
    level = logging.getLevelName(raw) if raw else default
    return level if isinstance(level, int) else default


def setup_logging(level: int | None = None):
    """
    Root logging for the console: rotating file in the user log dir plus stderr.
    Every record carries the trace id bound around the current wizard action.
    """
    log_file = log_dir() / "rmg_console.log"

    logger = logging.getLogger()
    logger.setLevel(level if level is not None else resolve_log_level())

    # Clear any existing handlers (important in PyInstaller single-process)
    logger.handlers.clear()

    trace_filter = TraceIdLogFilter()
    file_handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
    console = logging.StreamHandler()
    for handler, fmt in ((file_handler, _FILE_FORMAT), (console, _CONSOLE_FORMAT)):
        handler.addFilter(trace_filter)
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)

    # SQL echo stays off unless explicitly asked for
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logger.info("Logging initialized. Log file at %s", log_file)
    install_global_exception_hooks()
    get_operational_support().emit_event(
        event_type="app.logging.initialized",
        message=f"Logging initialized at {log_file}",
        data={"log_file": str(log_file)},
    )


__all__ = ["LOG_LEVEL_ENV_VAR", "resolve_log_level", "setup_logging"]
