"""Ticket update API route - relays an RSS link into a UseDesk ticket field."""
from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from backend.config import Settings, get_settings
from backend.errors import ConfigurationError, InvalidInput, UpstreamError, UpstreamUnreachable
from backend.models.schemas import SuccessResponse, TicketUpdateRequest, UpdateCommand
from backend.usedesk.client import UNREACHABLE_MESSAGE, UpstreamResponse, UseDeskClient

logger = logging.getLogger(__name__)

router = APIRouter()

UPSTREAM_DETAILS_LIMIT = 200
SUCCESS_STATUSES = ("success", "ok")

MISSING_TOKEN_MESSAGE = "Не настроен USEDESK_API_TOKEN"
INVALID_JSON_MESSAGE = "Неверный JSON в теле запроса"
MISSING_PARAMS_MESSAGE = "Нужны параметры ticket_id и rss_url"
MISSING_FIELD_MESSAGE = (
    "Не указан id поля для RSS. Задайте USEDESK_RSS_FIELD_ID "
    "или передайте field_id в URL формы."
)
UPSTREAM_ERROR_MESSAGE = "UseDesk вернул ошибку"


def get_usedesk_client(settings: Settings = Depends(get_settings)) -> UseDeskClient:
    return UseDeskClient.from_settings(settings)


def parse_body(raw: bytes) -> Any:
    """Decode a JSON request body. An empty body is an empty object."""
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        raise InvalidInput(INVALID_JSON_MESSAGE)


def build_update_command(body: Any, default_field_id: str | None) -> UpdateCommand:
    """Validate the parsed body into an UpdateCommand.

    ``field_id`` from the body wins whenever it is present and not null, even
    if it trims to an empty string; otherwise the configured default is used.

    Raises:
        InvalidInput: If ticket_id, rss_url or the resolved field id is empty
    """
    if not isinstance(body, dict):
        raise InvalidInput(MISSING_PARAMS_MESSAGE)

    try:
        request = TicketUpdateRequest.model_validate(body)
    except ValidationError as e:
        details = "; ".join(f"{err['loc'][0]}: {err['msg']}" for err in e.errors())
        raise InvalidInput(MISSING_PARAMS_MESSAGE, details=details)

    if not request.ticket_id or not request.rss_url:
        raise InvalidInput(MISSING_PARAMS_MESSAGE)

    field_id = request.field_id if request.field_id is not None else default_field_id
    if not field_id:
        raise InvalidInput(MISSING_FIELD_MESSAGE)

    return UpdateCommand(
        ticket_id=request.ticket_id,
        rss_url=request.rss_url,
        field_id=field_id,
    )


def check_upstream_response(response: UpstreamResponse) -> None:
    """Raise UpstreamError unless UseDesk accepted the update.

    A 2xx body that is not JSON counts as success (plain-text "ok").
    """
    snippet = response.text[:UPSTREAM_DETAILS_LIMIT]

    if not response.is_success:
        raise UpstreamError(UPSTREAM_ERROR_MESSAGE, details=snippet)

    try:
        result = json.loads(response.text)
    except ValueError:
        return

    if not isinstance(result, dict):
        raise UpstreamError(snippet)

    if result.get("status") in SUCCESS_STATUSES:
        return

    message = result.get("message")
    raise UpstreamError(str(message) if message else snippet)


@router.post("/update-ticket", response_model=SuccessResponse)
async def update_ticket(
    request: Request,
    settings: Settings = Depends(get_settings),
    usedesk: UseDeskClient = Depends(get_usedesk_client),
):
    """Write an RSS link into a custom field of a UseDesk ticket.

    Body: ``{"ticket_id": ..., "rss_url": ..., "field_id": ...}``; ``field_id``
    falls back to USEDESK_RSS_FIELD_ID.
    """
    if not settings.is_configured:
        logger.warning("USEDESK_API_TOKEN is not set, rejecting ticket update")
        raise ConfigurationError(MISSING_TOKEN_MESSAGE)

    body = parse_body(await request.body())
    command = build_update_command(body, settings.default_field_id)

    try:
        response = await usedesk.update_ticket_field(settings.api_token, command)
        check_upstream_response(response)
    except UpstreamError as e:
        logger.warning("UseDesk rejected update of ticket %s: %s", command.ticket_id, e.message)
        raise
    except UpstreamUnreachable as e:
        logger.warning("UseDesk unreachable for ticket %s: %s", command.ticket_id, e.details)
        raise
    except Exception as e:
        logger.exception("Unexpected failure calling UseDesk for ticket %s", command.ticket_id)
        raise UpstreamUnreachable(UNREACHABLE_MESSAGE, details=str(e) or type(e).__name__) from e

    logger.info("Updated ticket %s field %s", command.ticket_id, command.field_id)
    return SuccessResponse()
