"""SQLAlchemy ORM models — import all models here so Base.metadata sees them."""

from audit_trail.models.audit import AuditCounterRow, AuditEventRow
from audit_trail.models.base import Base

__all__ = [
    "AuditCounterRow",
    "AuditEventRow",
    "Base",
]
