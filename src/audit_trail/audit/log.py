"""AuditLog — the append-only, access-controlled event trail.

Writes are allowed from a fixed allow-list of collaborator contracts or the
administrator. Reads are administrator-only. Every operation returns an
Ok / Err result; nothing here raises for a rejected call.

Checks always run in the same order: authorization, then input validity,
then existence. A rejected caller learns nothing about its input or about
which ids exist, and never advances the counter.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from audit_trail.audit.errors import ErrorCode
from audit_trail.audit.result import Err, Ok, Result
from audit_trail.audit.store import EventStore, InMemoryEventStore
from audit_trail.schemas.context import CallContext
from audit_trail.schemas.events import AuditEvent

logger = logging.getLogger(__name__)

# Collaborating contracts allowed to append events
AUTHORIZED_CONTRACTS: frozenset[str] = frozenset({
    ".patient-identity",
    ".provider-verification",
    ".record-access",
})


class AuditLog:
    """Owns the event store and enforces who may write and read it."""

    def __init__(
        self,
        admin: str,
        authorized_writers: Iterable[str] = AUTHORIZED_CONTRACTS,
        store: EventStore | None = None,
    ) -> None:
        if not admin:
            raise ValueError("Administrator principal must not be empty")
        writers = frozenset(authorized_writers)
        if not writers:
            raise ValueError("Authorized writer allow-list must not be empty")

        self._admin = admin
        self._authorized_writers = writers
        self._store: EventStore = store if store is not None else InMemoryEventStore()

    @property
    def admin(self) -> str:
        return self._admin

    @property
    def authorized_writers(self) -> frozenset[str]:
        return self._authorized_writers

    @property
    def event_count(self) -> int:
        """Number of events ever stored (equals the next event id)."""
        return self._store.next_id()

    # ── Authorization predicates ─────────────────────────────────────

    def is_administrator(self, ctx: CallContext) -> bool:
        return ctx.sender is not None and ctx.sender == self._admin

    def is_authorized_writer(self, ctx: CallContext) -> bool:
        return ctx.caller is not None and ctx.caller in self._authorized_writers

    # ── Writes ───────────────────────────────────────────────────────

    def record(
        self,
        ctx: CallContext,
        event_type: str,
        resource_id: str,
        actor: str,
    ) -> Result[int]:
        """Append an event without detail. Returns the new event id."""
        return self._append(ctx, event_type, resource_id, actor, detail=None)

    def record_with_detail(
        self,
        ctx: CallContext,
        event_type: str,
        resource_id: str,
        actor: str,
        detail: str,
    ) -> Result[int]:
        """Append an event carrying a free-text detail (which may be empty)."""
        return self._append(ctx, event_type, resource_id, actor, detail=detail)

    def _append(
        self,
        ctx: CallContext,
        event_type: str,
        resource_id: str,
        actor: str,
        detail: str | None,
    ) -> Result[int]:
        if not (self.is_authorized_writer(ctx) or self.is_administrator(ctx)):
            logger.warning(
                "Audit write denied: sender=%s contract_caller=%s",
                ctx.sender,
                ctx.contract_caller,
            )
            return Err(ErrorCode.UNAUTHORIZED)

        if not event_type:
            logger.info("Audit write rejected: empty event type (caller=%s)", ctx.caller)
            return Err(ErrorCode.INVALID_INPUT)

        event = AuditEvent(
            event_type=event_type,
            resource_id=resource_id,
            actor=actor,
            timestamp=ctx.block_time,
            detail=detail,
        )
        event_id = self._store.append(event)

        logger.info(
            "Audit event recorded: id=%d type=%s resource=%s caller=%s",
            event_id,
            event_type,
            resource_id,
            ctx.caller,
        )
        return Ok(event_id)

    # ── Reads ────────────────────────────────────────────────────────

    def fetch(self, ctx: CallContext, event_id: int) -> Result[AuditEvent]:
        """Return a stored event. Administrator only."""
        if not self.is_administrator(ctx):
            logger.warning("Audit read denied: sender=%s", ctx.sender)
            return Err(ErrorCode.UNAUTHORIZED)

        if not self._store.exists(event_id):
            logger.debug("Audit event not found: id=%s", event_id)
            return Err(ErrorCode.NOT_FOUND)

        # Events are never removed, so an id that exists stays readable
        return Ok(self._store.get(event_id))
