import logging
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from infra.db.base import Base
from infra.path import default_db_url
import infra.db.models  # noqa


config = context.config

# the desktop app configures logging before migrating; only the alembic CLI needs the ini setup
if config.config_file_name is not None and not logging.getLogger().handlers:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata

# the ini value is a dev placeholder; run_migrations() always passes the real URL
_INI_PLACEHOLDER_URL = "sqlite:///rmg_console.db"


def _db_url() -> str:
    url = config.get_main_option("sqlalchemy.url")
    if not url or url == _INI_PLACEHOLDER_URL:
        return default_db_url()
    return url


def _configure(**kwargs) -> None:
    # SQLite needs batch mode for ALTER TABLE; enums are stored as plain strings
    context.configure(
        target_metadata=target_metadata,
        render_as_batch=True,
        compare_type=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    _configure(url=_db_url(), literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = create_engine(_db_url(), future=True, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
