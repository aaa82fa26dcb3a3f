from __future__ import annotations

import logging
from typing import Any

import ddtrace.auto  # noqa: F401
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from message_api.api.messages import router as messages_router
from message_api.core.config import Settings, get_settings
from message_api.core.logging import request_id_ctx, setup_logging
from message_api.core.middleware import RequestLoggingMiddleware
from message_api.observability.metrics import metrics_response, stats
from message_api.observability.tracing import setup_tracing
from message_api.services.errors import ValidationError
from message_api.services.store import MessageStore


def create_app(store: MessageStore | None = None, settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    setup_tracing(settings)

    app = FastAPI(title="Message API", version=settings.dd_version)
    app.state.store = store if store is not None else MessageStore()

    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(messages_router)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/metrics")
    def metrics() -> PlainTextResponse:
        payload, content_type = metrics_response()
        return PlainTextResponse(content=payload.decode("utf-8"), media_type=content_type)

    @app.get("/stats")
    def stats_endpoint(request: Request) -> dict[str, Any]:
        return build_stats(request.app.state.store)

    register_exception_handlers(app)
    return app


def build_stats(store: MessageStore) -> dict[str, Any]:
    counters = stats.snapshot()

    messages = {
        "created": counters.get("messages.created", 0),
        "invalid": counters.get("messages.invalid", 0),
        "deleted": counters.get("messages.deleted", 0),
        "not_found": counters.get("messages.not_found", 0),
    }
    requests_by_method: dict[str, int] = {}
    requests_by_path: dict[str, int] = {}
    responses_by_status: dict[str, int] = {}
    for k, v in counters.items():
        if k.startswith("requests.by_method."):
            requests_by_method[k.removeprefix("requests.by_method.")] = v
        elif k.startswith("requests.by_path."):
            requests_by_path[k.removeprefix("requests.by_path.")] = v
        elif k.startswith("responses.by_status."):
            responses_by_status[k.removeprefix("responses.by_status.")] = v

    return {
        "messages": messages,
        "requests": {
            "total": counters.get("requests.total", 0),
            "by_method": requests_by_method,
            "by_path": requests_by_path,
            "responses_by_status": responses_by_status,
        },
        "store": {"messages_stored": store.count()},
        "counters": counters,
    }


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_exception_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        return error_payload(request, 400, "invalid_request", str(exc), exc.details)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = [err.get("msg", "Invalid request") for err in exc.errors()]
        return error_payload(
            request, 400, "invalid_request", "Request validation failed", details
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logging.getLogger(__name__).exception("unhandled error")
        return error_payload(request, 500, "internal_error", "Unexpected error")


def error_payload(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: list[str] | None = None,
) -> JSONResponse:
    # The context var is already reset when the server-error handler runs, so
    # fall back to the id the middleware left on the request state.
    req_id = request_id_ctx.get() or getattr(request.state, "request_id", None)
    payload = {
        "success": False,
        "message": message,
        "error_code": error_code,
        "details": details,
        "request_id": req_id,
    }
    return JSONResponse(status_code=status_code, content=payload)


app = create_app()
