"""Shared fixtures — a mock host supplying principals, block time, and callers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import pytest

from audit_trail.audit.log import AuditLog
from audit_trail.audit.store import InMemoryEventStore
from audit_trail.schemas.context import CallContext

BLOCK_TIME = 1617984000


@dataclass(frozen=True)
class Principals:
    admin: str = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
    provider: str = "ST2CY5V39NHDPWSXMW9QDT3HC3GD6Q6XX4CFRK9AG"
    patient: str = "ST2JHG361ZXG51QTKY2NQCVBPPRRE2KZB1HR05NNC"


@pytest.fixture
def principals() -> Principals:
    return Principals()


@pytest.fixture
def block_time() -> int:
    return BLOCK_TIME


@pytest.fixture
def store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def audit_log(principals, store) -> AuditLog:
    return AuditLog(admin=principals.admin, store=store)


@pytest.fixture
def make_context(block_time) -> Callable[..., CallContext]:
    """Factory for CallContext — defaults to the fixture block time."""

    def _make(
        sender: str | None = None,
        contract_caller: str | None = None,
        time: int = block_time,
    ) -> CallContext:
        return CallContext(sender=sender, contract_caller=contract_caller, block_time=time)

    return _make
