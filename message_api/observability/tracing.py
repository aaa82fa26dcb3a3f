from __future__ import annotations

from ddtrace import config as dd_config
from ddtrace import tracer

from message_api.core.config import Settings


def setup_tracing(settings: Settings) -> None:
    dd_config.logs_injection = True
    dd_config.fastapi["service_name"] = settings.dd_service
    tracer.set_tags({"env": settings.dd_env, "version": settings.dd_version})
