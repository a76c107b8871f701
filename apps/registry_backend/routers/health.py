from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text

from apps.registry_backend.deps import get_host
from apps.registry_backend.host import ContractHost

router = APIRouter(tags=["health"])


@router.get("/health/live")
def live():
    return {"ok": True}


@router.get("/health/ready")
def ready(host: ContractHost = Depends(get_host)):
    """Store reachable and the contract state decodes."""
    db = host.session_factory()
    try:
        db.execute(text("SELECT 1"))
    finally:
        db.close()
    _, version = host.state()
    return {"ok": True, "contract_id": host.contract_id, "state_version": version}


@router.get("/healthz")
def healthz():
    return live()


@router.get("/readyz")
def readyz(host: ContractHost = Depends(get_host)):
    return ready(host)
