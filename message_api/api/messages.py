from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from message_api.api.schemas import (
    ErrorResponse,
    MessageEnvelope,
    MessageListEnvelope,
    StatusEnvelope,
)
from message_api.core.config import API_PREFIX
from message_api.observability.metrics import (
    record_message_created,
    record_message_deleted,
    record_message_invalid,
    record_message_not_found,
)
from message_api.services.errors import MESSAGE_NOT_FOUND
from message_api.services.messages import MessageService
from message_api.services.store import MessageStore

router = APIRouter(prefix=API_PREFIX, tags=["messages"])

MESSAGE_DELETED = "Message deleted successfully"


def get_message_service(request: Request) -> MessageService:
    store: MessageStore = request.app.state.store
    return MessageService(store)


@router.post(
    "",
    response_model=MessageEnvelope,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
)
@router.post("/", status_code=201, include_in_schema=False)
def create_message(
    body: Any = Body(default=None),
    service: MessageService = Depends(get_message_service),
) -> JSONResponse:
    result = service.create(body)
    if not result.ok:
        record_message_invalid()
        # Formatted by the application's ValidationError handler.
        raise result.error
    record_message_created()
    return JSONResponse(status_code=201, content={"success": True, "data": result.value.to_dict()})


@router.get("", response_model=MessageListEnvelope)
@router.get("/", include_in_schema=False)
def read_messages(service: MessageService = Depends(get_message_service)) -> JSONResponse:
    listing = service.list_all()
    return JSONResponse(
        content={
            "success": True,
            "count": listing.count,
            "data": [record.to_dict() for record in listing.data],
        }
    )


@router.get(
    "/{message_id}",
    response_model=MessageEnvelope,
    responses={404: {"model": StatusEnvelope}},
)
def read_message(
    message_id: str, service: MessageService = Depends(get_message_service)
) -> JSONResponse:
    result = service.get_by_id(message_id)
    if not result.ok:
        record_message_not_found()
        return not_found_response()
    return JSONResponse(content={"success": True, "data": result.value.to_dict()})


@router.delete(
    "/{message_id}",
    response_model=StatusEnvelope,
    responses={404: {"model": StatusEnvelope}},
)
def delete_message(
    message_id: str, service: MessageService = Depends(get_message_service)
) -> JSONResponse:
    result = service.delete_by_id(message_id)
    if not result.ok:
        record_message_not_found()
        return not_found_response()
    record_message_deleted()
    return JSONResponse(content={"success": True, "message": MESSAGE_DELETED})


def not_found_response() -> JSONResponse:
    return JSONResponse(status_code=404, content={"success": False, "message": MESSAGE_NOT_FOUND})
