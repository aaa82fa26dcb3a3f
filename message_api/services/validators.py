from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as SchemaError

from message_api.core.config import MESSAGE_MIN_LENGTH
from message_api.services.errors import ValidationError

MESSAGE_TOO_SHORT = f"Message must be at least {MESSAGE_MIN_LENGTH} characters long."


def text_length(value: str) -> int:
    # UTF-16 code units: characters outside the BMP (emoji) count as two.
    return len(value.encode("utf-16-le")) // 2


class CreateMessageRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    message: str

    @field_validator("message")
    @classmethod
    def check_length(cls, value: str) -> str:
        if text_length(value) < MESSAGE_MIN_LENGTH:
            raise ValueError(MESSAGE_TOO_SHORT)
        return value


def validate_message_payload(body: Any) -> str:
    """Return the message text from a raw create body or raise ValidationError.

    Every way of failing the schema (no object, no field, wrong type, too
    short) reports the same user-facing text; the schema errors go in details.
    """
    try:
        payload = CreateMessageRequest.model_validate(body)
    except SchemaError as exc:
        details = [err.get("msg", "Invalid value") for err in exc.errors()]
        raise ValidationError(MESSAGE_TOO_SHORT, details) from exc
    return payload.message
