from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

from ddtrace import tracer
from pythonjsonlogger import jsonlogger

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)

REQUEST_FIELDS = ("path", "method", "status_code", "latency_ms", "client_ip", "message_id")


class ContextFilter(logging.Filter):
    """Stamps every record with the request context and the active trace."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get()
        record.timestamp = datetime.now(timezone.utc).isoformat()
        for name in REQUEST_FIELDS:
            setattr(record, name, getattr(record, name, None))

        span = tracer.current_span()
        record.dd_trace_id = span.trace_id if span is not None else None
        record.dd_span_id = span.span_id if span is not None else None
        return True


def setup_logging(level: str) -> None:
    logger = logging.getLogger()
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    formatter = jsonlogger.JsonFormatter(
        "%(timestamp)s %(levelname)s %(name)s %(message)s %(request_id)s "
        "%(dd_trace_id)s %(dd_span_id)s %(method)s %(path)s %(status_code)s "
        "%(latency_ms)s %(client_ip)s %(message_id)s"
    )
    handler.setFormatter(formatter)
    handler.addFilter(ContextFilter())

    logger.handlers.clear()
    logger.addHandler(handler)


def log_info(message: str, **kwargs: Any) -> None:
    logging.getLogger("message_api").info(message, extra=kwargs)
