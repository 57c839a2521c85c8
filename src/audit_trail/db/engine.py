"""Database engine, session factory, and schema setup.

Uses SQLAlchemy 2.0 with a synchronous engine: every audit write is one
short transaction and the host already serializes calls.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from audit_trail.config import settings


def create_db_engine(database_url: str | None = None) -> Engine:
    """Build an engine for the configured (or given) database URL.

    In-memory SQLite gets a single shared connection, otherwise every
    session would see its own empty database.
    """
    url = database_url or settings.db.database_url
    kwargs: dict[str, Any] = {}
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["connect_args"] = {"check_same_thread": False}
        kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return create_engine(url, echo=settings.log_level == "DEBUG", **kwargs)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Session factory bound to ``engine``."""
    return sessionmaker(engine, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create the audit tables if they do not exist.

    In production the schema is expected to be managed out of band; this
    only creates tables outside production.
    """
    # Import here to ensure all models are registered with Base.metadata
    from audit_trail.models import Base

    if not settings.is_production:
        Base.metadata.create_all(engine)
