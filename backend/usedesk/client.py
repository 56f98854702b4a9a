"""UseDesk HTTP client - Serverless-optimized."""
from __future__ import annotations

from dataclasses import dataclass

import httpx

from backend.config import Settings
from backend.errors import UpstreamUnreachable
from backend.models.schemas import UpdateCommand

UNREACHABLE_MESSAGE = "Ошибка при обращении к UseDesk"


@dataclass(frozen=True)
class UpstreamResponse:
    """Raw status and body of a UseDesk reply."""

    status_code: int
    text: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class UseDeskClient:
    """Sends ticket field updates to UseDesk.

    Opens a fresh connection per call, suitable for Vercel serverless functions.
    Pass ``transport`` to swap the network for a fake in tests.
    """

    def __init__(
        self,
        api_url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = api_url
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> UseDeskClient:
        return cls(api_url=settings.api_url, timeout_seconds=settings.timeout_seconds)

    async def update_ticket_field(self, api_token: str, command: UpdateCommand) -> UpstreamResponse:
        """POST one form-encoded field update.

        Args:
            api_token: UseDesk channel API token
            command: Validated ticket/field/value triple

        Returns:
            Upstream status code and body text, whatever the status

        Raises:
            UpstreamUnreachable: If the request could not be completed
        """
        try:
            async with httpx.AsyncClient(
                transport=self.transport,
                timeout=self.timeout_seconds,
            ) as client:
                # httpx sets application/x-www-form-urlencoded for data=
                response = await client.post(self.api_url, data=command.form_data(api_token))
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise UpstreamUnreachable(UNREACHABLE_MESSAGE, details=str(e) or type(e).__name__) from e

        return UpstreamResponse(status_code=response.status_code, text=response.text)
