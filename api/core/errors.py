"""
Error taxonomy and the top-level exception handlers.

Every failure leaves the API as:

    {"error": {"message": "...", "status": 404}}

Services raise the typed errors below; FastAPI's handlers registered in
`register_error_handlers` render them. Details of unexpected failures are
logged, never returned.
"""

from __future__ import annotations

import logging
from typing import Any

import asyncpg
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error."

# Most specific first.
_CLIENT_STORE_MESSAGES = (
    (asyncpg.ForeignKeyViolationError, "The record refers to a missing entry or is still referenced."),
    (asyncpg.UniqueViolationError, "A record with the same value already exists."),
    (asyncpg.NotNullViolationError, "A mandatory value is missing."),
    (asyncpg.CheckViolationError, "A value is out of the allowed range."),
    (asyncpg.IntegrityConstraintViolationError, "The record conflicts with existing data."),
    (asyncpg.DataError, "A value has an invalid format."),
)


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        self.message = message
        # Logged only, never sent to the client.
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class DependencyCreateFailed(AppError):
    """
    A prerequisite insert of a composite write returned no row.
    """

    status_code = status.HTTP_404_NOT_FOUND


class StoreFailure(AppError):
    @classmethod
    def from_postgres(cls, exc: asyncpg.PostgresError) -> "StoreFailure":
        detail = str(exc) or exc.__class__.__name__
        # Bad foreign keys, duplicates and malformed values are the caller's fault.
        for error_type, message in _CLIENT_STORE_MESSAGES:
            if isinstance(exc, error_type):
                return cls(message, status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
        return cls(INTERNAL_ERROR_MESSAGE, detail=detail)


def error_body(message: str, status_code: int) -> dict[str, Any]:
    return {"error": {"message": message, "status": status_code}}


def _field_name(loc: tuple | list) -> str:
    parts = [str(part) for part in loc[1:] if not isinstance(part, int)]
    return ".".join(parts) or "body"


def validation_message(exc: RequestValidationError) -> str:
    """
    Turn pydantic's first error into a short message naming the field.
    """
    problems = exc.errors()
    if not problems:
        return "Invalid request."

    first = problems[0]
    loc = tuple(first.get("loc") or ())
    field = _field_name(loc)
    if loc and loc[0] == "path":
        return f"{field} is mandatory and must be a valid number"
    if first.get("type") == "missing":
        return f"{field} is mandatory"
    return f"{field} is invalid"


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "request_failed method=%s path=%s status=%s error=%s",
                request.method,
                request.url.path,
                exc.status_code,
                exc.detail or exc.message,
            )
            message = INTERNAL_ERROR_MESSAGE
        else:
            logger.warning(
                "request_rejected method=%s path=%s status=%s error=%s",
                request.method,
                request.url.path,
                exc.status_code,
                exc.detail or exc.message,
            )
            message = exc.message
        return JSONResponse(status_code=exc.status_code, content=error_body(message, exc.status_code))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = validation_message(exc)
        logger.warning(
            "request_rejected method=%s path=%s status=400 error=%s",
            request.method,
            request.url.path,
            message,
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(message, status.HTTP_400_BAD_REQUEST),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail), exc.status_code),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("request_crashed method=%s path=%s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(INTERNAL_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR),
        )
