from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from apps.registry_backend.deps import get_host
from apps.registry_backend.host import (
    ContractHost,
    HostError,
    InvalidArgs,
    ProhibitedInView,
    StateConflict,
    UnknownMethod,
)
from apps.registry_backend.state_store import receipts_for

router = APIRouter(prefix="/contract", tags=["contract"])

_STATUS = {
    UnknownMethod: 404,
    InvalidArgs: 422,
    ProhibitedInView: 400,
    StateConflict: 409,
}


class CallIn(BaseModel):
    signer_id: str = Field(min_length=1)
    args: dict[str, Any] = Field(default_factory=dict)


class ViewIn(BaseModel):
    args: dict[str, Any] = Field(default_factory=dict)


def _http_error(e: HostError) -> HTTPException:
    detail: Any = e.code
    if isinstance(e, InvalidArgs):
        detail = {"code": e.code, "errors": e.errors}
    return HTTPException(status_code=_STATUS.get(type(e), 400), detail=detail)


@router.post("/call/{method}")
def call(method: str, body: CallIn, host: ContractHost = Depends(get_host)):
    try:
        out = host.call(method, body.args, body.signer_id)
    except HostError as e:
        raise _http_error(e) from e
    return {"ok": True, "result": out.result, "logs": out.logs, "version": out.version}


@router.post("/view/{method}")
def view(method: str, body: ViewIn | None = None, host: ContractHost = Depends(get_host)):
    try:
        out = host.view(method, body.args if body else {})
    except HostError as e:
        raise _http_error(e) from e
    return {"ok": True, "result": out.result, "logs": out.logs, "version": out.version}


@router.get("/state")
def state(host: ContractHost = Depends(get_host)):
    current, version = host.state()
    return {
        "ok": True,
        "contract_id": host.contract_id,
        "version": version,
        "state": current.model_dump(mode="json"),
    }


@router.get("/receipts")
def receipts(limit: int = 100, host: ContractHost = Depends(get_host)):
    db = host.session_factory()
    try:
        rows = receipts_for(db, host.contract_id, limit=limit)
        return [
            {
                "id": r.id,
                "method": r.method,
                "signer_id": r.signer_id,
                "call_id": r.call_id,
                "version": r.version,
                "args": r.args_json,
                "logs": r.logs_json,
                "created_at_utc": r.created_at_utc.isoformat(),
            }
            for r in rows
        ]
    finally:
        db.close()
