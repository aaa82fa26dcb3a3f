from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class MessageOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    message: str
    created_at: datetime = Field(alias="createdAt")


class MessageEnvelope(BaseModel):
    success: bool = True
    data: MessageOut


class MessageListEnvelope(BaseModel):
    success: bool = True
    count: int
    data: list[MessageOut]


class StatusEnvelope(BaseModel):
    success: bool
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error_code: str | None = None
    details: list[str] | None = None
    request_id: str | None = None
