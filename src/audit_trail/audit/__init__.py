from audit_trail.audit.errors import ErrorCode
from audit_trail.audit.log import AUTHORIZED_CONTRACTS, AuditLog
from audit_trail.audit.result import Err, Ok, Result
from audit_trail.audit.store import EventStore, InMemoryEventStore, SqlEventStore

__all__ = [
    "AUTHORIZED_CONTRACTS",
    "AuditLog",
    "Err",
    "ErrorCode",
    "EventStore",
    "InMemoryEventStore",
    "Ok",
    "Result",
    "SqlEventStore",
]
