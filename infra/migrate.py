from __future__ import annotations

import logging
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config

from infra.path import APP_NAME

logger = logging.getLogger(__name__)


def _app_dir() -> Path:
    """
    Directory the running app lives in:
    - PyInstaller onefile: the sys._MEIPASS extraction dir
    - PyInstaller onedir: the folder holding the executable
    - dev: the project root
    """
    if getattr(sys, "frozen", False):
        meipass = getattr(sys, "_MEIPASS", None)
        if meipass:
            return Path(meipass).resolve()
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]


def migration_candidates(app_dir: Path | None = None) -> list[Path]:
    root = app_dir or _app_dir()
    return [
        root / "migration",
        # some packagers move data files under '_internal'
        root / "_internal" / "migration",
        root / APP_NAME / "migration",
    ]


def alembic_config(db_url: str, app_dir: Path | None = None) -> Config:
    candidates = migration_candidates(app_dir)
    script_location = next((c for c in candidates if c.exists()), None)
    if script_location is None:
        raise RuntimeError(
            "Alembic script_location missing. Tried: " + ", ".join(str(p) for p in candidates)
        )

    alembic_ini = script_location / "alembic.ini"
    if not alembic_ini.exists():
        raise RuntimeError(f"Alembic config missing: {alembic_ini}")

    cfg = Config(str(alembic_ini))
    cfg.set_main_option("script_location", str(script_location))
    cfg.set_main_option("sqlalchemy.url", db_url)
    return cfg


def run_migrations(db_url: str) -> None:
    cfg = alembic_config(db_url)
    logger.info("Applying migrations from %s", cfg.get_main_option("script_location"))
    command.upgrade(cfg, "head")


__all__ = ["alembic_config", "migration_candidates", "run_migrations"]
