"""SQLAlchemy engine and session factory for the host course database.

When DATABASE_URL is configured, provides:
- a synchronous engine against the host database
- a session factory for short-lived, read-only sessions

When DATABASE_URL is None, ``engine`` and ``session_factory`` are None and
callers must inject their own repository (tests use the in-memory one).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from activity_status.core.config import SETTINGS

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for the host table mappings."""


if SETTINGS.database_url:
    engine = create_engine(
        SETTINGS.database_url,
        echo=SETTINGS.is_dev,  # log SQL in dev only
        pool_pre_ping=True,
    )
    session_factory = sessionmaker(engine, expire_on_commit=False)
else:
    engine = None
    session_factory = None


@contextmanager
def session_scope() -> Iterator[Session]:
    """Yield a session for one snapshot build.

    Never commits: this component only reads.  Whatever transaction the
    queries opened is rolled back when the session closes.
    """
    if session_factory is None:
        raise RuntimeError(
            "DATABASE_URL is not configured, cannot create database session"
        )
    with session_factory() as session:
        yield session


def dispose_engine() -> None:
    """Release pooled connections at process shutdown."""
    if engine is None:
        return
    engine.dispose()
    logger.info("Database engine disposed")
