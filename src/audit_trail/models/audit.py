"""Audit tables — the persisted event map and its counter.

Both tables are append-only from the application's point of view: event
rows are inserted once and never updated, and the counter row only grows.
"""

from __future__ import annotations

from sqlalchemy import BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from audit_trail.models.base import Base


class AuditEventRow(Base):
    """Immutable audit trail entry keyed by its dense event id."""

    __tablename__ = "audit_events"

    event_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    event_type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    resource_id: Mapped[str] = mapped_column(String(256), nullable=False, index=True)
    actor: Mapped[str] = mapped_column(String(256), nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False, comment="Block time at write")
    detail: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<AuditEventRow id={self.event_id} type={self.event_type}>"


class AuditCounterRow(Base):
    """Named integer variable — holds the next event id to assign."""

    __tablename__ = "audit_counters"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<AuditCounterRow {self.name}={self.value}>"
