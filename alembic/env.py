"""Alembic environment for the users/sessions schema. DATABASE_URL comes from Settings (.env honoured)."""

from logging.config import fileConfig

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

load_dotenv()

from moltendocs.core.config import get_settings
from moltendocs.core.database import ensure_sqlite_directory
from moltendocs.models import Base, User, UserSession  # noqa: F401

config = context.config
if config.config_file_name is not None and config.has_section("loggers"):
    fileConfig(config.config_file_name)

target_metadata = Base.metadata
database_url = get_settings().DATABASE_URL

# SQLite cannot ALTER most constraints in place; batch mode rebuilds the table.
migration_options = {
    "target_metadata": target_metadata,
    "render_as_batch": database_url.startswith("sqlite"),
}


def run_migrations_offline() -> None:
    """Emit SQL to stdout without connecting."""
    context.configure(
        url=database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **migration_options,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations over a dedicated, unpooled connection."""
    connectable = create_engine(database_url, poolclass=NullPool)
    ensure_sqlite_directory(connectable)
    try:
        with connectable.connect() as connection:
            context.configure(connection=connection, **migration_options)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
