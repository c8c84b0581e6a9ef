"""Database session configuration."""

from __future__ import annotations

import logging
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from threadline.core.settings import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import threadline.models  # noqa: E402,F401


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """Turn on foreign key enforcement for every SQLite connection of ``engine``."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection: Any, _record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class Database:
    """Lazily connected database handle held for the lifetime of the process.

    ``connect`` may be called at the top of every operation; only the first
    call creates the engine, later calls return it unchanged.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        self.echo = echo
        self._engine: Engine | None = None
        self._sessionmaker: sessionmaker[Session] | None = None

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    def connect(self) -> Engine:
        """Create the engine on first use and return it."""
        if self._engine is not None:
            return self._engine

        connect_args: dict[str, Any] = {}
        if self.url.startswith("sqlite"):
            connect_args["check_same_thread"] = False

        engine = create_engine(
            self.url,
            pool_pre_ping=True,
            echo=self.echo,
            connect_args=connect_args,
        )
        enable_sqlite_foreign_keys(engine)
        self._engine = engine
        self._sessionmaker = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        logger.info("Connected to database %s", engine.url.render_as_string(hide_password=True))
        return engine

    @property
    def engine(self) -> Engine:
        return self.connect()

    def session(self) -> Session:
        """Return a new session bound to the shared engine."""
        self.connect()
        assert self._sessionmaker is not None
        return self._sessionmaker()

    def dispose(self) -> None:
        """Close pooled connections; the next ``connect`` starts fresh."""
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Disposed database engine")
        self._engine = None
        self._sessionmaker = None


database = Database(settings.effective_database_url, echo=settings.sql_debug)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = database.session()
    try:
        yield db
    finally:
        db.close()

