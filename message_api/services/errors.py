from __future__ import annotations

MESSAGE_NOT_FOUND = "Message not found"


class NotFoundError(Exception):
    def __init__(self, message: str = MESSAGE_NOT_FOUND) -> None:
        super().__init__(message)


class ValidationError(Exception):
    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []
