"""Tagged results — audit operations return these instead of raising.

Calling code branches on Ok / Err explicitly. ``to_dict`` gives the wire
shape shared with other components: ``{"ok": value}`` or ``{"err": code}``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from pydantic import BaseModel

from audit_trail.audit.errors import ErrorCode

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        value = self.value.model_dump() if isinstance(self.value, BaseModel) else self.value
        return {"ok": value}


@dataclass(frozen=True, slots=True)
class Err:
    """Failed outcome carrying a stable error code."""

    code: ErrorCode

    @property
    def is_ok(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        return {"err": int(self.code)}


Result = Union[Ok[T], Err]  # noqa: UP007
