from __future__ import annotations

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from message_api.core.logging import log_info, request_id_ctx
from message_api.observability.metrics import record_request


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request on the way in and its outcome on the way out.

    The response itself is passed through untouched.
    """

    def __init__(self, app: ASGIApp) -> None:
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        req_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
        token = request_id_ctx.set(req_id)
        request.state.request_id = req_id
        client_ip = request.client.host if request.client else None
        start = time.perf_counter()
        try:
            log_info(
                "request received",
                method=request.method,
                path=request.url.path,
                client_ip=client_ip,
            )
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start) * 1000.0
            log_info(
                "request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                latency_ms=round(duration_ms, 2),
                client_ip=client_ip,
            )
        finally:
            request_id_ctx.reset(token)

        # Label metrics with the route template ("/api/v1/messages/{message_id}"),
        # not the concrete path, to keep label cardinality bounded.
        route = request.scope.get("route")
        path_template = getattr(route, "path", None) or request.url.path
        record_request(request.method, path_template, response.status_code, duration_ms)
        return response
