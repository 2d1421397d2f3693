"""JSON envelopes and global exception handlers.

Game endpoints answer with ``{"success": true, ...}`` or ``{"error": msg}``.
Every failure a game endpoint catches becomes a 400; no failure is mapped to
any other status on those routes. Anything that escapes a route entirely is
turned into a JSON 500 by ``handle_unexpected_error``.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from triviyay.errors import TriviYayError, error_message

logger = logging.getLogger(__name__)


def to_jsonable(value: Any) -> Any:
    # Pydantic read models dump with their wire aliases
    dump = getattr(value, "model_dump", None)
    return dump(by_alias=True) if callable(dump) else value


def success_response(headers: Mapping[str, str], **payload: Any) -> JSONResponse:
    return JSONResponse({"success": True, **payload}, status_code=200, headers=dict(headers))


def preflight_response(headers: Mapping[str, str]) -> JSONResponse:
    return JSONResponse({}, status_code=200, headers=dict(headers))


def error_response(exc: BaseException, operation: str, headers: Mapping[str, str]) -> JSONResponse:
    """Map any failure to ``400 {"error": message}`` with the given headers."""
    message = error_message(exc, operation)
    if isinstance(exc, TriviYayError):
        logger.info("%s.rejected error=%s kind=%s", operation, message, type(exc).__name__)
    else:
        logger.error("%s.failed error=%s", operation, message, exc_info=exc)
    return JSONResponse({"error": message}, status_code=400, headers=dict(headers))


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:  # noqa: D401
    return JSONResponse(
        {"error": str(exc.detail)},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: D401
    return JSONResponse({"error": "Request validation failed", "errors": jsonable_encoder(exc.errors())}, status_code=422)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    logger.error("unexpected_error path=%s", request.url.path, exc_info=exc)
    return JSONResponse({"error": "Internal Server Error"}, status_code=500)


__all__ = [
    "to_jsonable",
    "success_response",
    "preflight_response",
    "error_response",
    "handle_http_exception",
    "handle_request_validation_error",
    "handle_unexpected_error",
]
