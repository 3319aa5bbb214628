from sqlalchemy import create_engine, inspect

from infra.db.base import Base
from infra.migrate import alembic_config, migration_candidates, run_migrations


def test_alembic_config_points_at_bundled_migration_dir():
    cfg = alembic_config("sqlite:///:memory:")
    assert cfg.get_main_option("script_location").endswith("migration")
    assert cfg.get_main_option("sqlalchemy.url") == "sqlite:///:memory:"


def test_alembic_config_reports_every_candidate_when_missing(tmp_path):
    try:
        alembic_config("sqlite:///:memory:", app_dir=tmp_path)
    except RuntimeError as exc:
        for candidate in migration_candidates(tmp_path):
            assert str(candidate) in str(exc)
    else:
        raise AssertionError("expected RuntimeError")


def test_migrations_create_the_mapped_tables(tmp_path):
    db_url = f"sqlite:///{(tmp_path / 'rmg.db').as_posix()}"
    run_migrations(db_url)

    engine = create_engine(db_url, future=True)
    try:
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()

    assert set(Base.metadata.tables) <= tables
    assert "alembic_version" in tables
