"""Error types and handlers for API responses.

Every error body has the same shape: ``{"error": "<message>"}``.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


def build_error_payload(message: str) -> dict:
    return {"error": message}


class AppError(Exception):
    """Application-scoped error carrying an HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RequestError(AppError):
    """Invalid input: missing title, invalid status, malformed body."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class StorageError(AppError):
    """The store failed while running a statement."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def describe_validation_error(errors) -> str:
    """Message lisible pour la première erreur pydantic."""
    if not errors:
        return "invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "malformed JSON body"
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    msg = first.get("msg", "invalid value")
    return f"{'.'.join(loc)}: {msg}" if loc else msg


async def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=build_error_payload(exc.message))


async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=build_error_payload(describe_validation_error(exc.errors())),
    )


async def storage_error_handler(_: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Unhandled storage error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=build_error_payload("internal storage error"),
    )


def register_error_handlers(app) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
