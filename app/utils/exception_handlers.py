"""Centralized exception handlers for FastAPI application."""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import Settings
from app.exceptions import (
    DatabaseConnectionError,
    DocumentValidationError,
    OperationFailedError,
    RecordNotFoundError,
)
from app.schemas.error import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)

# Status codes used when STRICT_ERRORS is enabled; otherwise every
# operation failure is reported as 400.
STRICT_STATUS_CODES: dict[type[Exception], int] = {
    RecordNotFoundError: status.HTTP_404_NOT_FOUND,
    DatabaseConnectionError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _status_for(exc: OperationFailedError, settings: Settings) -> int:
    """Pick the status code for a failed operation."""
    if settings.strict_errors:
        for exc_type, status_code in STRICT_STATUS_CODES.items():
            if isinstance(exc.cause, exc_type):
                return status_code
    return status.HTTP_400_BAD_REQUEST


def _describe(exc: Exception) -> ErrorDetail:
    """Build the ``error`` member of the envelope."""
    details = None
    if isinstance(exc, DocumentValidationError):
        details = jsonable_encoder(exc.errors)
    elif isinstance(exc, RequestValidationError):
        details = jsonable_encoder(exc.errors())
    return ErrorDetail(name=type(exc).__name__, message=str(exc), details=details)


def _envelope(message: str, error: ErrorDetail | None = None) -> dict[str, Any]:
    return ErrorResponse(message=message, error=error).model_dump(exclude_none=True)


async def operation_failed_handler(
    request: Request, exc: OperationFailedError
) -> JSONResponse:
    """Handle a failed subject operation with the ``{message, error}`` envelope."""
    status_code = _status_for(exc, request.app.state.settings)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        f"{exc.message}: {type(exc.cause).__name__}: {exc.cause}",
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=status_code,
        content=_envelope(exc.message, _describe(exc.cause)),
    )


async def not_found_handler(request: Request, exc: RecordNotFoundError) -> JSONResponse:
    """Handle a missing record with 404 and ``{message}``."""
    logger.info(
        f"{exc.model_name} not found",
        extra={"path": request.url.path, "record_id": exc.record_id},
    )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=_envelope(f"{exc.model_name} not found"),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request bodies that could not be decoded."""
    logger.warning(f"Validation error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope("Invalid request data", _describe(exc)),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "message": "An unexpected error occurred. Please try again later.",
            "error": {"name": "InternalServerError", "message": "Internal Server Error"},
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(OperationFailedError, operation_failed_handler)
    app.add_exception_handler(RecordNotFoundError, not_found_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
