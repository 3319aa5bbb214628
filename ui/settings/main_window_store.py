from __future__ import annotations

from PySide6.QtCore import QByteArray, QSettings

from infra.path import APP_NAME, COMPANY_NAME


class MainWindowSettingsStore:
    """QSettings-backed console state: window geometry, open tab and the FL project filter."""

    ORG_NAME = COMPANY_NAME
    APP_NAME = APP_NAME

    _KEY_TAB_INDEX = "ui/current_tab_index"
    _KEY_GEOMETRY = "ui/main_window_geometry"
    _KEY_FL_PROJECT_FILTER = "financial_lines/project_filter"

    def __init__(self, settings: QSettings | None = None) -> None:
        self._settings = settings or QSettings(self.ORG_NAME, self.APP_NAME)

    def _store(self, key: str, value: object) -> None:
        self._settings.setValue(key, value)
        self._settings.sync()

    def load_tab_index(self, default_index: int = 0) -> int:
        try:
            index = int(self._settings.value(self._KEY_TAB_INDEX, default_index))
        except (TypeError, ValueError):
            index = default_index
        return max(0, index)

    def save_tab_index(self, index: int) -> None:
        self._store(self._KEY_TAB_INDEX, max(0, int(index)))

    def load_geometry(self) -> QByteArray | None:
        raw = self._settings.value(self._KEY_GEOMETRY)
        if isinstance(raw, QByteArray) and not raw.isEmpty():
            return raw
        return None

    def save_geometry(self, geometry: QByteArray | None) -> None:
        if geometry is None or geometry.isEmpty():
            return
        self._store(self._KEY_GEOMETRY, geometry)

    def load_project_filter(self) -> str | None:
        """Project id last picked in the Financial Lines tab; None means all projects."""
        raw = self._settings.value(self._KEY_FL_PROJECT_FILTER, "")
        return str(raw or "").strip() or None

    def save_project_filter(self, project_id: str | None) -> None:
        self._store(self._KEY_FL_PROJECT_FILTER, (project_id or "").strip())


__all__ = ["MainWindowSettingsStore"]
