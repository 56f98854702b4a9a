"""Pydantic schemas for the ticket update API."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, field_validator


class TicketUpdateRequest(BaseModel):
    """Inbound JSON body. Every field is optional at this stage."""

    model_config = ConfigDict(extra="ignore")

    ticket_id: StrictStr | StrictInt | StrictFloat | None = None
    rss_url: StrictStr | None = None
    field_id: StrictStr | StrictInt | StrictFloat | None = None

    @field_validator("ticket_id", mode="before")
    @classmethod
    def _zero_ticket_is_missing(cls, value):
        # ticket ids start at 1; a numeric 0 means "not chosen"
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
            return None
        return value

    @field_validator("ticket_id", "rss_url", "field_id")
    @classmethod
    def _trim(cls, value):
        if value is None:
            return None
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return str(value).strip()


class UpdateCommand(BaseModel):
    """A validated request to write an RSS link into a ticket field."""

    model_config = ConfigDict(frozen=True)

    ticket_id: str = Field(min_length=1)
    rss_url: str = Field(min_length=1)
    field_id: str = Field(min_length=1)

    def form_data(self, api_token: str) -> dict[str, str]:
        """Form fields expected by POST /update/ticket."""
        return {
            "api_token": api_token,
            "ticket_id": self.ticket_id,
            "field_id": self.field_id,
            "field_value": self.rss_url,
        }


class SuccessResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
