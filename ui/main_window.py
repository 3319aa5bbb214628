# ui/main_window.py
from __future__ import annotations

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QMainWindow, QTabWidget, QVBoxLayout, QWidget

from infra.version import app_title
from ui.financial_line.tab import FinancialLinesTab
from ui.settings.main_window_store import MainWindowSettingsStore
from ui.styles.ui_config import UIConfig as CFG


class MainWindow(QMainWindow):
    def __init__(
        self,
        services: dict[str, object],
        parent: QWidget | None = None,
        *,
        settings_store: MainWindowSettingsStore | None = None,
    ):
        super().__init__(parent)
        self.services: dict[str, object] = services
        self._settings_store = settings_store or MainWindowSettingsStore()

        self.setWindowTitle(app_title())
        self.resize(CFG.DEFAULT_WINDOW_SIZE)
        self.setMinimumSize(CFG.MIN_WINDOW_SIZE)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(CFG.MARGIN_MD, CFG.MARGIN_MD, CFG.MARGIN_MD, CFG.MARGIN_MD)
        layout.setSpacing(CFG.SPACING_SM)

        self.tabs = QTabWidget()
        layout.addWidget(self.tabs)
        self._build_tabs()
        self.tabs.currentChanged.connect(self._on_tab_changed)

        self.setCentralWidget(central)
        self._restore_persisted_state()

    def _build_tabs(self) -> None:
        financial_lines_tab = FinancialLinesTab(
            project_service=self.services["project_service"],
            financial_line_service=self.services["financial_line_service"],
            settings_store=self._settings_store,
        )
        self.tabs.addTab(financial_lines_tab, "Financial Lines")

    def _restore_persisted_state(self) -> None:
        geometry = self._settings_store.load_geometry()
        if geometry is not None:
            self.restoreGeometry(geometry)
        if self.tabs.count():
            saved_index = self._settings_store.load_tab_index(default_index=0)
            safe_index = max(0, min(saved_index, self.tabs.count() - 1))
            self.tabs.setCurrentIndex(safe_index)

    def _on_tab_changed(self, index: int) -> None:
        if index >= 0:
            self._settings_store.save_tab_index(index)

    def closeEvent(self, event: QCloseEvent) -> None:
        self._settings_store.save_tab_index(self.tabs.currentIndex())
        self._settings_store.save_geometry(self.saveGeometry())
        super().closeEvent(event)
