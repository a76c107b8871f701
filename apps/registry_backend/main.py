from __future__ import annotations

import logging
import os

from fastapi import FastAPI

from apps.registry_backend.init_db import init_registry_db
from apps.registry_backend.routers.contract import router as contract_router
from apps.registry_backend.routers.health import router as health_router
from common_core.call_id import CallIdMiddleware
from common_core.config import settings
from common_core.guardrails import validate_runtime_settings
from common_core.logging_setup import configure_logging

log = logging.getLogger("assetledger.api")

app = FastAPI(title="AssetLedger Registry")

app.add_middleware(CallIdMiddleware)

app.include_router(health_router)
app.include_router(contract_router)


@app.on_event("startup")
def startup() -> None:
    configure_logging(component="registry_backend")
    validate_runtime_settings()
    init_registry_db()
    log.info("registry_started", extra={"contract_id": settings.contract_id})


def run() -> None:
    import uvicorn

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=os.environ.get("LOG_LEVEL", "INFO").lower(),
    )


if __name__ == "__main__":
    run()
