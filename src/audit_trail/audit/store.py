"""Event storage — the host's atomic key-value map plus the id counter.

AuditLog talks to an ``EventStore``. ``append`` allocates the next id,
writes the event and advances the counter as one atomic step, so
concurrent writers never share an id and a failed write leaves both
untouched.
"""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from sqlalchemy.orm import Session, sessionmaker

from audit_trail.models.audit import AuditCounterRow, AuditEventRow
from audit_trail.schemas.events import AuditEvent

logger = logging.getLogger(__name__)

COUNTER_NAME = "event-counter"


class EventStore(Protocol):
    """Storage primitives consumed by AuditLog."""

    def next_id(self) -> int:
        """Return the counter: the id the next append will assign."""
        ...

    def exists(self, event_id: int) -> bool: ...

    def get(self, event_id: int) -> AuditEvent | None: ...

    def append(self, event: AuditEvent) -> int:
        """Store ``event`` under the next id, advance the counter, return the id."""
        ...


class InMemoryEventStore:
    """Dict-backed store. State lives as long as the process."""

    def __init__(self) -> None:
        self._events: dict[int, AuditEvent] = {}
        self._counter = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        return self._counter

    def exists(self, event_id: int) -> bool:
        return event_id in self._events

    def get(self, event_id: int) -> AuditEvent | None:
        return self._events.get(event_id)

    def append(self, event: AuditEvent) -> int:
        with self._lock:
            event_id = self._counter
            self._events[event_id] = event
            self._counter = event_id + 1
        return event_id

    def __len__(self) -> int:
        return len(self._events)


class SqlEventStore:
    """SQLAlchemy-backed store — events and counter survive restarts.

    Each ``append`` reads the counter, inserts the row and bumps the counter
    in one transaction; if anything fails the transaction is rolled back and
    neither table changes. Appends from this process are serialized by a
    lock, and the counter row is locked ``FOR UPDATE`` on databases that
    support it.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._session_factory() as session:
            counter = session.get(AuditCounterRow, COUNTER_NAME)
            return counter.value if counter is not None else 0

    def exists(self, event_id: int) -> bool:
        with self._session_factory() as session:
            return session.get(AuditEventRow, event_id) is not None

    def get(self, event_id: int) -> AuditEvent | None:
        with self._session_factory() as session:
            row = session.get(AuditEventRow, event_id)
            if row is None:
                return None
            return AuditEvent(
                event_type=row.event_type,
                resource_id=row.resource_id,
                actor=row.actor,
                timestamp=row.timestamp,
                detail=row.detail,
            )

    def append(self, event: AuditEvent) -> int:
        with self._lock, self._session_factory.begin() as session:
            counter = session.get(AuditCounterRow, COUNTER_NAME, with_for_update=True)
            if counter is None:
                counter = AuditCounterRow(name=COUNTER_NAME, value=0)
                session.add(counter)
            event_id = counter.value

            session.add(AuditEventRow(
                event_id=event_id,
                event_type=event.event_type,
                resource_id=event.resource_id,
                actor=event.actor,
                timestamp=event.timestamp,
                detail=event.detail,
            ))
            counter.value = event_id + 1

        logger.debug("Persisted audit event %d", event_id)
        return event_id
