from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from threading import Lock
from typing import Any, Callable


@dataclass(frozen=True)
class MessageRecord:
    id: str
    message: str
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "message": self.message,
            "createdAt": format_timestamp(self.created_at),
        }


def format_timestamp(value: datetime) -> str:
    # UTC, millisecond precision, "Z" suffix: 2026-10-19T08:15:30.123Z
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class MessageStore:
    """Process-local map of message id to record.

    All access goes through one lock, so concurrent requests see each
    operation as atomic. Nothing survives the process.
    """

    def __init__(self) -> None:
        self._records: dict[str, MessageRecord] = {}
        self._lock = Lock()

    def put(self, message_id: str, record: MessageRecord) -> None:
        with self._lock:
            self._records[message_id] = record

    def insert_new(
        self, id_factory: Callable[[], str], build: Callable[[str], MessageRecord]
    ) -> MessageRecord:
        """Draw ids until one is free, then store the record built for it."""
        with self._lock:
            message_id = id_factory()
            while message_id in self._records:
                message_id = id_factory()
            record = build(message_id)
            self._records[message_id] = record
            return record

    def has(self, message_id: str) -> bool:
        with self._lock:
            return message_id in self._records

    def get(self, message_id: str) -> MessageRecord | None:
        with self._lock:
            return self._records.get(message_id)

    def delete(self, message_id: str) -> bool:
        with self._lock:
            return self._records.pop(message_id, None) is not None

    def pop(self, message_id: str) -> MessageRecord | None:
        with self._lock:
            return self._records.pop(message_id, None)

    def values(self) -> list[MessageRecord]:
        with self._lock:
            return list(self._records.values())

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def __len__(self) -> int:
        return self.count()
