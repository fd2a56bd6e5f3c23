"""Database configuration and session management.

This module provides SQLAlchemy 2.x ORM infrastructure including:
- A ``Database`` object owning one engine and its session factory
- A context manager giving one transaction per unit of work
- Table creation for all registered models
- An insert primitive that skips rows violating a unique constraint

A ``Database`` is built once at startup and handed to every repository;
there is no module-level engine.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event, insert, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from portfolio_cms.errors import ConfigurationError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Engine plus session factory for one database URL."""

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        self.engine: Engine = create_engine(url, echo=echo, future=True)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self._session_factory = sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,
        )

    def create_all(self) -> None:
        """Create all tables defined on the Base metadata."""
        # Import ORM models so their metadata is registered on Base before create_all.
        from portfolio_cms.data.models import (  # noqa: F401
            blog,
            certificate,
            education,
            experience,
            project,
            site,
            skill,
            testimonial,
        )

        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Provide a transactional scope around a series of operations."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ping(self) -> bool:
        """Return True if a trivial query succeeds."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.exception("Database ping failed")
            return False
        return True

    def dispose(self) -> None:
        self.engine.dispose()


def insert_ignoring_conflicts(
    session: Session,
    model: type[Base],
    rows: Iterable[dict[str, Any]],
    conflict_columns: Sequence[str],
) -> None:
    """Bulk insert ``rows``, silently dropping any that hit a unique conflict.

    Conflicts are resolved by the database (``ON CONFLICT DO NOTHING``), never
    by checking for existing rows first. Other rows in the batch are kept.

    Raises:
        ConfigurationError: The database has no insert-or-ignore form supported here.
    """
    rows = list(rows)
    if not rows:
        return

    dialect = session.get_bind().dialect.name
    if dialect == "sqlite":
        stmt = sqlite.insert(model).on_conflict_do_nothing(index_elements=list(conflict_columns))
    elif dialect == "postgresql":
        stmt = postgresql.insert(model).on_conflict_do_nothing(
            index_elements=list(conflict_columns)
        )
    elif dialect in ("mysql", "mariadb"):
        stmt = insert(model).prefix_with("IGNORE")
    else:
        raise ConfigurationError(f"Insert-or-ignore is not supported on {dialect!r} databases")
    session.execute(stmt, rows)
