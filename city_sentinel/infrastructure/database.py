"""Database configuration and session management."""

from __future__ import annotations

import logging
from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

from city_sentinel.config import get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


class EntityStoreUnavailableError(RuntimeError):
    """Raised when the entity store cannot be reached."""


settings = get_settings()

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> Engine:
    """Create the SQLAlchemy engine for ``database_url``.

    SQLite connections are shared across the request thread and background
    tasks, so thread checks are disabled and in-memory databases keep a single
    connection alive.
    """

    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(database_url, pool_pre_ping=True)

    options: dict[str, object] = {"connect_args": {"check_same_thread": False}}
    if url.database in (None, "", ":memory:"):
        options["poolclass"] = StaticPool
    return create_engine(database_url, **options)


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database(bind: Engine | None = None) -> None:
    """Ensure all ORM models have corresponding database tables."""

    from city_sentinel.infrastructure import models  # noqa: F401  # ensure models are imported

    target = bind or engine
    try:
        Base.metadata.create_all(bind=target, checkfirst=True)
    except SQLAlchemyError as exc:
        logger.error("Unable to initialize the database schema: %s", exc)
        raise EntityStoreUnavailableError("Entity store is not reachable") from exc


def get_db() -> Generator:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


__all__ = [
    "Base",
    "EntityStoreUnavailableError",
    "SessionLocal",
    "build_engine",
    "engine",
    "get_db",
    "initialize_database",
]
