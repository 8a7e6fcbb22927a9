"""Exception handlers mapping the error taxonomy onto HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from quillpost.core.errors import BlogError, InvalidInput
from quillpost.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


def _client_info(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for") or request.headers.get("x-real-ip")
    client_ip = forwarded.split(",")[0].strip() if forwarded else None
    if client_ip is None and request.client is not None:
        client_ip = request.client.host
    user_agent = (request.headers.get("user-agent") or "unknown")[:50]
    return f"IP={client_ip or 'unknown'}, UA={user_agent}"


def _error_response(
    status_code: int,
    code: str,
    detail: str,
    errors: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(code=code, detail=detail, errors=errors)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


async def handle_blog_error(request: Request, exc: BlogError) -> JSONResponse:
    logger.warning(
        "%s %s -> %s (%s): %s",
        request.method,
        request.url.path,
        exc.code,
        _client_info(request),
        exc.message,
    )
    return _error_response(exc.status_code, exc.code, exc.message)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        errors[field or "body"] = error.get("msg", "Invalid value")
    logger.warning("Validation failed (%s): %s", _client_info(request), errors)
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        InvalidInput.code,
        "Request validation failed",
        errors,
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s (%s)",
        request.method,
        request.url.path,
        _client_info(request),
        exc_info=exc,
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "Internal server error",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BlogError, handle_blog_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
