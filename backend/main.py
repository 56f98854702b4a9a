"""FastAPI application entry point - Serverless-optimized for Vercel."""
from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.config import Settings, get_settings
from backend.errors import MethodNotAllowed, TicketUpdateError
from backend.middleware.cors import CORS_HEADERS, CORSHeadersMiddleware
from backend.models.schemas import ErrorResponse
from backend.routes import tickets

logger = logging.getLogger(__name__)

VERSION = "0.1.0"

METHOD_NOT_ALLOWED_MESSAGE = "Метод не разрешён"
INTERNAL_ERROR_MESSAGE = "Внутренняя ошибка сервера"

# Create app
app = FastAPI(
    title="UseDesk RSS relay",
    description="Writes RSS links into UseDesk ticket fields",
    version=VERSION,
)

# Every response, errors and preflights included, carries permissive CORS headers
app.add_middleware(CORSHeadersMiddleware)

app.include_router(tickets.router, prefix="/api", tags=["tickets"])


def _error_response(status_code: int, error: str, details: str | None = None, headers=None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


@app.exception_handler(TicketUpdateError)
async def ticket_update_error_handler(request: Request, exc: TicketUpdateError):
    return _error_response(exc.status_code, exc.message, exc.details)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        error = MethodNotAllowed(METHOD_NOT_ALLOWED_MESSAGE)
        return _error_response(error.status_code, error.message, headers=exc.headers)
    return _error_response(exc.status_code, str(exc.detail), headers=exc.headers)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    # Runs outside the middleware stack, so CORS headers are added here
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(500, INTERNAL_ERROR_MESSAGE, headers=CORS_HEADERS)


@app.get("/api")
async def root():
    """API status endpoint."""
    return {"status": "ok", "service": "usedesk-rss-relay", "version": VERSION}


@app.get("/api/health")
async def health(settings: Settings = Depends(get_settings)):
    """Health check for load balancers. Never echoes the token."""
    return {
        "status": "healthy",
        "usedesk_configured": settings.is_configured,
        "default_field_configured": bool(settings.default_field_id),
    }


# Vercel will auto-detect the `app` export for FastAPI
