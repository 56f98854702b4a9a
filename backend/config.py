"""Process configuration read from the environment."""
from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict

USEDESK_UPDATE_URL = "https://api.usedesk.ru/update/ticket"
DEFAULT_TIMEOUT_SECONDS = 10.0


class Settings(BaseModel):
    """UseDesk credentials and endpoint settings.

    Built once per process and injected into the handler, so tests can pass
    their own instance instead of touching the environment.
    """

    model_config = ConfigDict(frozen=True)

    api_token: str | None = None
    default_field_id: str | None = None
    api_url: str = USEDESK_UPDATE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def is_configured(self) -> bool:
        """Return True if the API token is set."""
        return bool(self.api_token)

    @classmethod
    def from_env(cls) -> Settings:
        """Read USEDESK_* env vars. Empty values count as unset."""
        timeout_raw = os.getenv("USEDESK_TIMEOUT_SECONDS")
        return cls(
            api_token=os.getenv("USEDESK_API_TOKEN") or None,
            default_field_id=(os.getenv("USEDESK_RSS_FIELD_ID") or "").strip() or None,
            api_url=os.getenv("USEDESK_API_URL") or USEDESK_UPDATE_URL,
            timeout_seconds=float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT_SECONDS,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
