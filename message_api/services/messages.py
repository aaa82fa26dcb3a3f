from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Generic, TypeVar

from ddtrace import tracer

from message_api.services.errors import NotFoundError, ValidationError
from message_api.services.store import MessageRecord, MessageStore
from message_api.services.validators import validate_message_payload

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a service call: a value, or the error explaining its absence."""

    value: T | None = None
    error: NotFoundError | ValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: NotFoundError | ValidationError) -> Result[T]:
        return cls(error=error)


@dataclass(frozen=True)
class MessageList:
    count: int
    data: list[MessageRecord]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_message_id() -> str:
    return str(uuid.uuid4())


class MessageService:
    def __init__(
        self,
        store: MessageStore,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_message_id,
    ) -> None:
        self.store = store
        self.clock = clock
        self.id_factory = id_factory

    def create(self, body: Any) -> Result[MessageRecord]:
        with tracer.trace("messages.create", resource="POST /api/v1/messages") as span:
            try:
                text = validate_message_payload(body)
            except ValidationError as exc:
                span.set_tag("validation.failed", True)
                return Result.failure(exc)

            span.set_metric("message.length", len(text))
            created_at = self.clock()
            record = self.store.insert_new(
                self.id_factory,
                lambda message_id: MessageRecord(
                    id=message_id, message=text, created_at=created_at
                ),
            )
            span.set_tag("message.id", record.id)
            logger.info("message created", extra={"message_id": record.id})
            return Result.success(record)

    def list_all(self) -> MessageList:
        with tracer.trace("messages.list", resource="GET /api/v1/messages") as span:
            records = self.store.values()
            span.set_metric("messages.count", len(records))
            return MessageList(count=len(records), data=records)

    def get_by_id(self, message_id: str) -> Result[MessageRecord]:
        with tracer.trace("messages.get", resource="GET /api/v1/messages/{message_id}") as span:
            record = self.store.get(message_id)
            if record is None:
                span.set_tag("message.found", False)
                return Result.failure(NotFoundError())
            span.set_tag("message.found", True)
            return Result.success(record)

    def delete_by_id(self, message_id: str) -> Result[MessageRecord]:
        with tracer.trace(
            "messages.delete", resource="DELETE /api/v1/messages/{message_id}"
        ) as span:
            record = self.store.pop(message_id)
            if record is None:
                span.set_tag("message.found", False)
                return Result.failure(NotFoundError())
            span.set_tag("message.found", True)
            logger.info("message deleted", extra={"message_id": message_id})
            return Result.success(record)
