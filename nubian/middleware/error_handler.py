"""Global exception handler for consistent error responses."""

import traceback
from datetime import datetime, timezone
from typing import Any, Optional, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError

from nubian.config import get_settings
from nubian.exceptions import BaseAPIException, DatabaseError
from nubian.schemas.errors import ErrorDetail, ErrorResponse
from nubian.utils.logger import get_logger, get_request_id

log = get_logger(__name__)


def _error_response(
    status_code: int, code: str, message: str, details: Optional[dict[str, Any]] = None
) -> JSONResponse:
    error_response = ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details),
        request_id=get_request_id(),
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(status_code=status_code, content=error_response.model_dump(mode="json"))


async def base_exception_handler(request: Request, exc: BaseAPIException) -> JSONResponse:
    """Handle custom API exceptions."""
    log_method = log.error if exc.status_code >= 500 else log.warning
    log_method(
        "api exception",
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
    )
    return _error_response(exc.status_code, exc.error_code, exc.message, exc.details)


async def validation_exception_handler(
    request: Request, exc: Union[RequestValidationError, PydanticValidationError]
) -> JSONResponse:
    """Handle Pydantic validation errors from request parsing."""
    log.warning("validation error", errors=exc.errors())

    # exc.errors() may contain non-serializable objects (e.g. ValueError in ctx),
    # so strip the ctx key which can hold raw exception instances.
    errors = [
        {k: v for k, v in e.items() if k not in ("ctx", "input")} for e in exc.errors()
    ]

    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        "Request validation failed",
        {"errors": errors},
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle SQLAlchemy database errors."""
    log.error("database error", error=str(exc), traceback=traceback.format_exc())

    db_error = DatabaseError()
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, db_error.error_code, db_error.message
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    formatted = traceback.format_exc()
    log.critical(
        "unhandled exception",
        error_type=type(exc).__name__,
        error=str(exc),
        traceback=formatted,
    )

    details = None
    if get_settings().debug:
        details = {"error_type": type(exc).__name__, "traceback": formatted}

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred",
        details,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI application."""
    app.add_exception_handler(BaseAPIException, base_exception_handler)  # type: ignore[invalid-argument-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[invalid-argument-type]
    app.add_exception_handler(PydanticValidationError, validation_exception_handler)  # type: ignore[invalid-argument-type]
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)  # type: ignore[invalid-argument-type]
    app.add_exception_handler(Exception, generic_exception_handler)  # type: ignore[invalid-argument-type]

    log.info("exception handlers registered")
