from __future__ import annotations

from typing import Any

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from ventureai.kernel.errors import VentureError

logger = structlog.get_logger()


def _get_request_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


def _error_response(request: Request, status_code: int, payload: dict[str, Any]) -> Response:
    request_id = _get_request_id(request)
    if request_id:
        payload["request_id"] = request_id
    return JSONResponse(status_code=status_code, content=payload)


def register_exception_handlers(app: FastAPI) -> None:
    """Register workspace-wide exception handlers on a FastAPI app.

    Every error body carries `detail` (FastAPI-compatible), a stable `code`
    and, when the request-ID middleware is installed, `request_id`.
    """

    @app.exception_handler(VentureError)
    async def _venture_error_handler(request: Request, exc: VentureError) -> Response:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_public_dict(request_id=_get_request_id(request)),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        return _error_response(
            request,
            exc.status_code,
            {"detail": exc.detail, "code": f"http.{exc.status_code}"},
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
        return _error_response(
            request,
            422,
            {"detail": exc.errors(), "code": "http.validation_error"},
        )

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception) -> Response:
        logger.exception("Unhandled exception", request_id=_get_request_id(request), error=str(exc))
        return _error_response(
            request,
            500,
            {"detail": "Internal Server Error", "code": "internal.unhandled"},
        )
