"""Failure classes raised while relaying a ticket update.

Every class maps to one HTTP status. The exception handler in
``backend.main`` turns them into ``{"error": ..., "details": ...}`` bodies.
"""
from __future__ import annotations


class TicketUpdateError(Exception):
    status_code = 500

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class MethodNotAllowed(TicketUpdateError):
    status_code = 405


class ConfigurationError(TicketUpdateError):
    """Server is missing required configuration. Not the client's fault."""

    status_code = 500


class InvalidInput(TicketUpdateError):
    """Malformed JSON or missing required fields."""

    status_code = 400


class UpstreamUnreachable(TicketUpdateError):
    """Network-level failure talking to UseDesk."""

    status_code = 502


class UpstreamError(TicketUpdateError):
    """UseDesk answered, but reported a failure."""

    status_code = 502
