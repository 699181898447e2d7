"""Database engine construction (SQLite or PostgreSQL)."""

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from moltendocs.core.config import settings


def build_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine; SQLite connections may be shared across the request threadpool."""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(
        url,
        pool_pre_ping=True,
        echo=echo,
        connect_args=connect_args,
    )


def ensure_sqlite_directory(engine: Engine) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    if engine.url.get_backend_name() != "sqlite":
        return
    database = engine.url.database
    if not database or database == ":memory:":
        return
    Path(database).parent.mkdir(parents=True, exist_ok=True)


# Process-wide engine; the credential store binds its own sessionmaker to it.
engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
