"""AuditEvent schema — a single entry in the audit trail.

Immutable once created. The timestamp is the host block time captured
when the event was written, not wall-clock time at read.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class AuditEvent(BaseModel):
    """One recorded event about a resource and the principal it concerns."""

    event_type: str = Field(min_length=1, description="Category label, e.g. REGISTER_PATIENT")
    resource_id: str = Field(description="Opaque identifier of the subject resource")
    actor: str = Field(description="Principal the event is about (not necessarily the caller)")
    timestamp: int = Field(description="Block time at write")
    detail: str | None = Field(default=None, description="Free-text annotation, detail writes only")

    model_config = {"frozen": True}
