# main_qt.py
import sys
from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QFont

from infra.db.base import SessionLocal
from infra.logging_config import setup_logging
from infra.migrate import run_migrations
from infra.path import default_db_url
from infra.seed import seed_demo_data, seed_requested
from infra.services import build_service_graph

from ui.main_window import MainWindow
from ui.styles.theme import apply_app_style


def build_services() -> dict[str, object]:
    run_migrations(db_url=default_db_url())
    session = SessionLocal()
    graph = build_service_graph(session)
    if seed_requested():
        seed_demo_data(graph)
    return graph.as_dict()


def main():
    setup_logging()

    app = QApplication(sys.argv)
    app.setFont(QFont("Segoe UI", 9))
    apply_app_style(app)

    services = build_services()
    window = MainWindow(services)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
