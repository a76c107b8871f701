from __future__ import annotations

import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from common_core.logging_setup import call_id_ctx

CALL_ID_HEADER = "X-Call-Id"


class CallIdMiddleware(BaseHTTPMiddleware):
    """Tags each invocation with a call id, taken from the caller when supplied."""

    async def dispatch(self, request: Request, call_next):
        cid = (
            request.headers.get(CALL_ID_HEADER)
            or request.headers.get("X-Request-Id")
            or uuid.uuid4().hex
        )
        request.state.call_id = cid
        token = call_id_ctx.set(cid)
        try:
            resp: Response = await call_next(request)
            resp.headers[CALL_ID_HEADER] = cid
            return resp
        finally:
            call_id_ctx.reset(token)
