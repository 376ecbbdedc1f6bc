"""HTTP middleware for the venture AI API."""

import secrets
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ventureai.config import get_settings


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Attach a request ID to every request and bind it into the log context.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or secrets.token_hex(8)
        request.state.request_id = request_id

        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers["X-Request-ID"] = request_id
        return response


def get_cors_origins() -> list[str]:
    """
    Allowed CORS origins.

    Production uses only the configured origins; other environments also
    accept the usual local dev servers.
    """
    settings = get_settings()
    if settings.environment == "production":
        return settings.cors_origins

    dev_origins = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
    ]
    return list(dict.fromkeys([*settings.cors_origins, *dev_origins]))
