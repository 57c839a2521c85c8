"""FastAPI application entry point — wires settings, storage, and routes.

Usage:
    python -m audit_trail.main
"""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from audit_trail import __version__
from audit_trail.api import router as events_router
from audit_trail.audit.log import AuditLog
from audit_trail.audit.store import EventStore, InMemoryEventStore, SqlEventStore
from audit_trail.config import Settings, settings
from audit_trail.db.engine import create_db_engine, create_session_factory, init_db

# ── Logging setup ────────────────────────────────────────────────────

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    stream=sys.stdout,
)
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = logging.getLogger(__name__)


def build_audit_log(config: Settings = settings) -> AuditLog:
    """Create the AuditLog described by ``config``.

    Raises ValueError if no administrator principal is configured.
    """
    store: EventStore
    if config.db.storage_backend == "sql":
        engine = create_db_engine(config.db.database_url)
        init_db(engine)
        store = SqlEventStore(create_session_factory(engine))
        logger.info("Using SQL event store")
    else:
        store = InMemoryEventStore()
        logger.info("Using in-memory event store")

    if not config.audit.audit_admin_principal:
        msg = "AUDIT_ADMIN_PRINCIPAL not configured"
        raise ValueError(msg)

    return AuditLog(
        admin=config.audit.audit_admin_principal,
        authorized_writers=config.audit.authorized_writers,
        store=store,
    )


def create_app(audit_log: AuditLog | None = None) -> FastAPI:
    """Build the FastAPI app. Without ``audit_log`` one is built at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Starting audit trail (env=%s)", settings.environment)
        if getattr(app.state, "audit_log", None) is None:
            app.state.audit_log = build_audit_log()
        logger.info(
            "Audit log ready: %d writers allow-listed, %d events stored",
            len(app.state.audit_log.authorized_writers),
            app.state.audit_log.event_count,
        )
        yield
        logger.info("Audit trail shutdown complete")

    app = FastAPI(
        title="Audit Trail API",
        description="Append-only, access-controlled audit log",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.audit_log = audit_log
    app.include_router(events_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {
            "status": "ok",
            "environment": settings.environment,
        }

    return app


app = create_app()


# ── Entry point ──────────────────────────────────────────────────────

if __name__ == "__main__":
    uvicorn.run(
        "audit_trail.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )
