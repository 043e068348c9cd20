"""
Application errors and the FastAPI handlers that render them.

Services raise `AppError` subclasses and never build responses. Every
error leaves the API in the same envelope:

    {"success": false, "message": "..."}
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """
    Base application error. Carries the HTTP status it maps to.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        if status_code is not None:
            self.status_code = status_code
        self.message = message
        super().__init__(message)


class ValidationFailed(AppError):
    """User-correctable input or business-rule error."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(AppError):
    """A unique name, email or username is already in use."""

    status_code = status.HTTP_409_CONFLICT


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class PersistenceError(AppError):
    """A write returned nothing. Not retried."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(message: str) -> dict:
    return {"success": False, "message": message}


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Request validation failed"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    message = str(first.get("msg") or "Invalid value")
    return f"{field}: {message}" if field else message


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(AppError)
    async def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(asyncpg.UniqueViolationError)
    async def unique_violation_handler(_: Request, exc: asyncpg.UniqueViolationError) -> JSONResponse:
        # A concurrent writer took the value between the check and the write.
        logger.warning("unique_violation constraint=%s", getattr(exc, "constraint_name", None))
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=error_body("Resource already exists"))

    @app.exception_handler(asyncpg.ForeignKeyViolationError)
    async def foreign_key_violation_handler(_: Request, exc: asyncpg.ForeignKeyViolationError) -> JSONResponse:
        logger.warning("foreign_key_violation constraint=%s", getattr(exc, "constraint_name", None))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("Referenced record does not exist or is still in use"),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(_first_validation_message(exc)),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal server error"),
        )
