from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Fixed parts of the public contract; not read from the environment.
HOST = "0.0.0.0"
PORT = 3000
API_PREFIX = "/api/v1/messages"
MESSAGE_MIN_LENGTH = 10


class Settings(BaseSettings):
    model_config = SettingsConfigDict()

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    dd_service: str = Field(default="message-api", alias="DD_SERVICE")
    dd_env: str = Field(default="local", alias="DD_ENV")
    dd_version: str = Field(default="0.1.0", alias="DD_VERSION")
    dd_agent_host: str | None = Field(default=None, alias="DD_AGENT_HOST")
    dd_dogstatsd_port: int = Field(default=8125, alias="DD_DOGSTATSD_PORT")

    metrics_enabled: bool = Field(default=True, alias="METRICS_ENABLED")
    stats_enabled: bool = Field(default=True, alias="STATS_ENABLED")


@lru_cache
def get_settings() -> Settings:
    return Settings()
