"""Audit HTTP surface — FastAPI router over AuditLog.

Caller identity comes from the ``X-Sender`` and ``X-Contract-Caller``
headers and block time from the host clock, standing in for what a ledger
runtime would supply. Bodies are always the tagged result
(``{"ok": ...}`` / ``{"err": code}``); the HTTP status mirrors the code.

Routes are ``async def`` so audit calls run one at a time on the event
loop, the same one-operation-at-a-time execution a ledger host gives.
"""
# ruff: noqa: B008  — Depends() in function defaults is standard FastAPI

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from audit_trail.audit.errors import ErrorCode
from audit_trail.audit.log import AuditLog
from audit_trail.audit.result import Err, Ok
from audit_trail.schemas.context import CallContext

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["audit"])

_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.UNAUTHORIZED: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.INVALID_INPUT: 422,
}


class RecordRequest(BaseModel):
    """Body of POST /events. A present ``detail`` selects the detail write."""

    event_type: str
    resource_id: str
    actor: str
    detail: str | None = Field(default=None)


# ── Dependencies ─────────────────────────────────────────────────────


async def get_audit_log(request: Request) -> AuditLog:
    """The AuditLog instance attached to the running app."""
    return request.app.state.audit_log


async def get_block_time() -> int:
    """Current block time — the host clock in whole Unix seconds."""
    return int(time.time())


async def get_call_context(
    x_sender: str | None = Header(default=None),
    x_contract_caller: str | None = Header(default=None),
    block_time: int = Depends(get_block_time),
) -> CallContext:
    """Build the CallContext for this request from headers and clock."""
    return CallContext(
        sender=x_sender or None,
        contract_caller=x_contract_caller or None,
        block_time=block_time,
    )


def _respond(result: Ok | Err) -> JSONResponse:
    if isinstance(result, Err):
        return JSONResponse(
            status_code=_STATUS_BY_CODE.get(result.code, 400),
            content=result.to_dict(),
        )
    return JSONResponse(content=result.to_dict())


# ── Routes ───────────────────────────────────────────────────────────


@router.post("")
async def record_event(
    body: RecordRequest,
    ctx: CallContext = Depends(get_call_context),
    audit_log: AuditLog = Depends(get_audit_log),
) -> JSONResponse:
    """Append an audit event. Allow-listed contracts or the administrator."""
    if body.detail is None:
        result = audit_log.record(ctx, body.event_type, body.resource_id, body.actor)
    else:
        result = audit_log.record_with_detail(
            ctx, body.event_type, body.resource_id, body.actor, body.detail,
        )
    return _respond(result)


@router.get("/{event_id}")
async def fetch_event(
    event_id: int,
    ctx: CallContext = Depends(get_call_context),
    audit_log: AuditLog = Depends(get_audit_log),
) -> JSONResponse:
    """Read one audit event. Administrator only."""
    return _respond(audit_log.fetch(ctx, event_id))
