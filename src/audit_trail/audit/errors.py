"""Stable numeric error codes returned by audit operations.

These values are part of the contract surface shared with the calling
contracts. Never renumber them.
"""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Failure codes carried by Err results."""

    UNAUTHORIZED = 1
    ALREADY_EXISTS = 2  # reserved, not returned by the audit operations
    NOT_FOUND = 3
    INVALID_INPUT = 4
