"""Translate exceptions into the JSON error envelope shared by every endpoint."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from signature_studio.core.errors import ApiError, DuplicateRecordError, RateLimitExceededError, RelationConstraintError

logger = logging.getLogger(__name__)


def error_response(
    request: Request,
    *,
    status_code: int,
    message: str,
    code: str,
    details: Optional[Any] = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    body: dict[str, Any] = {
        "error": message,
        "code": code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": request.url.path,
        "method": request.method,
    }
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body), headers=headers)


def _client(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed with %s", request.method, request.url.path, exc.code, exc_info=exc)
    else:
        logger.warning("%s %s from %s rejected: %s", request.method, request.url.path, _client(request), exc.code)
    headers = None
    if isinstance(exc, RateLimitExceededError):
        headers = {"Retry-After": str(exc.retry_after)}
    return error_response(
        request,
        status_code=exc.status_code,
        message=exc.message,
        code=exc.code,
        details=exc.details,
        headers=headers,
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    logger.warning("%s %s from %s failed validation", request.method, request.url.path, _client(request))
    return error_response(
        request,
        status_code=status.HTTP_400_BAD_REQUEST,
        message="Validation failed",
        code="VALIDATION_ERROR",
        details=details,
    )


async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    text = str(exc.orig).lower()
    if "foreign key" in text:
        error: ApiError = RelationConstraintError()
    else:
        error = DuplicateRecordError()
    logger.warning("%s %s hit integrity error: %s", request.method, request.url.path, error.code)
    return error_response(request, status_code=error.status_code, message=error.message, code=error.code)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return error_response(
            request,
            status_code=exc.status_code,
            message=f"Route {request.method} {request.url.path} not found",
            code="ROUTE_NOT_FOUND",
        )
    return error_response(
        request,
        status_code=exc.status_code,
        message=str(exc.detail),
        code="HTTP_ERROR",
        headers=getattr(exc, "headers", None),
    )


def make_unhandled_handler(debug: bool):
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        details = {"type": type(exc).__name__, "message": str(exc)} if debug else None
        return error_response(
            request,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="Internal server error",
            code="INTERNAL_ERROR",
            details=details,
        )

    return handle_unexpected


def register_exception_handlers(app: FastAPI, *, debug: bool = False) -> None:
    app.add_exception_handler(ApiError, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, make_unhandled_handler(debug))


__all__ = ["error_response", "register_exception_handlers"]
