from __future__ import annotations

import os
from pathlib import Path

_DEFAULT_APP_VERSION = "1.0.0"
# written by the release build next to this module
_VERSION_FILE = Path(__file__).with_name("app_version.txt")
_DISPLAY_NAME = "RMG Console"


def _read_version_file(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8").strip() or None
    except OSError:
        return None


def get_app_version() -> str:
    """RMG_APP_VERSION, then the bundled version file, then the default."""
    return (
        (os.getenv("RMG_APP_VERSION") or "").strip()
        or _read_version_file(_VERSION_FILE)
        or _DEFAULT_APP_VERSION
    )


def app_title() -> str:
    return f"{_DISPLAY_NAME} {get_app_version()}"


__all__ = ["get_app_version", "app_title"]
