"""CallContext — what the host environment knows about the current call.

The host passes one of these into every AuditLog operation instead of the
log reading ambient globals, so callers and clocks are swappable in tests.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CallContext(BaseModel):
    """Caller identity and block time for a single operation."""

    sender: str | None = Field(default=None, description="Principal that originated the call")
    contract_caller: str | None = Field(
        default=None,
        description="Immediate calling contract, when the call arrives through one",
    )
    block_time: int = Field(default=0, ge=0, description="Current block time (Unix seconds)")

    model_config = {"frozen": True}

    @property
    def caller(self) -> str | None:
        """The immediate caller: the calling contract if any, else the sender."""
        return self.contract_caller or self.sender
