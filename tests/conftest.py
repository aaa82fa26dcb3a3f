from __future__ import annotations

import os
from typing import Generator

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("DD_TRACE_ENABLED", "false")

from message_api.main import create_app  # noqa: E402
from message_api.observability.metrics import stats  # noqa: E402
from message_api.services.messages import MessageService  # noqa: E402
from message_api.services.store import MessageStore  # noqa: E402


@pytest.fixture(autouse=True)
def reset_stats() -> None:
    stats.counters.clear()


@pytest.fixture
def store() -> MessageStore:
    return MessageStore()


@pytest.fixture
def service(store: MessageStore) -> MessageService:
    return MessageService(store)


@pytest.fixture
def app_instance(store: MessageStore):
    return create_app(store=store)


@pytest.fixture
def client(app_instance) -> Generator[TestClient, None, None]:
    with TestClient(app_instance) as test_client:
        yield test_client
