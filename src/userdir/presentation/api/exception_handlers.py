"""Centralized exception handlers for the FastAPI application.

Domain exceptions, request validation failures and unhandled errors are
all mapped to one response shape.

Error Response Format:
    {
        "timestamp": "2024-01-01T12:00:00Z",
        "status": 409,
        "error": "Conflict",
        "message": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE",
        "details": {"field": "message"},     # validation failures only
        "path": "/api/v1/users"
    }

Usage:
    from userdir.presentation.api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from userdir.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    PersistenceError,
    ValidationError,
)
from userdir.presentation.api.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error occurred"
REQUEST_VALIDATION_MESSAGE = "Validation failed"


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    # 400 Bad Request - validation errors
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    # 404 Not Found
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 409 Conflict - already exists
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_EMAIL: status.HTTP_409_CONFLICT,
    # 500 Internal Server Error
    ErrorCode.PERSISTENCE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _get_status_for_exception(exc: DomainException) -> int:
    """Determine HTTP status code for a domain exception.

    Uses the error code mapping, with fallback based on exception type.
    """
    if exc.code in ERROR_CODE_TO_STATUS:
        return ERROR_CODE_TO_STATUS[exc.code]

    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, PersistenceError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR

    # Default to 400 for domain exceptions
    return status.HTTP_400_BAD_REQUEST


def _field_name(loc: tuple[Any, ...]) -> str:
    """Reduce a pydantic error location to the offending field name."""
    parts = [str(part) for part in loc if part not in ("body", "query", "path")]
    return ".".join(parts) if parts else str(loc[0]) if loc else "request"


def _create_error_response(
    request: Request,
    status_code: int,
    message: str,
    code: str | None = None,
    details: dict[str, str] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    body = ErrorResponse(
        status=status_code,
        error=HTTPStatus(status_code).phrase,
        message=message,
        code=code,
        details=details,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Report every invalid field of the request at once."""
        details: dict[str, str] = {}
        for error in exc.errors():
            details.setdefault(_field_name(tuple(error.get("loc", ()))), error["msg"])

        logger.warning(
            "Request validation failed on %s %s: %s",
            request.method,
            request.url.path,
            details,
        )
        return _create_error_response(
            request,
            status_code=status.HTTP_400_BAD_REQUEST,
            message=REQUEST_VALIDATION_MESSAGE,
            code=ErrorCode.VALIDATION_ERROR.value,
            details=details,
        )

    @app.exception_handler(PersistenceError)
    async def persistence_exception_handler(
        request: Request,
        exc: PersistenceError,
    ) -> JSONResponse:
        """Hide storage failures from the caller but keep the full trace."""
        logger.error(
            "Persistence failure on %s %s: %s (details=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.details,
            exc_info=exc,
        )
        return _create_error_response(
            request,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=INTERNAL_ERROR_MESSAGE,
            code=exc.code.value,
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle all domain exceptions with structured response."""
        status_code = _get_status_for_exception(exc)

        logger.warning(
            "Domain exception on %s %s: %s (code=%s, details=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
            exc.details,
        )

        field_errors = exc.field_errors if isinstance(exc, ValidationError) else None
        return _create_error_response(
            request,
            status_code=status_code,
            message=exc.message,
            code=exc.code.value,
            details=field_errors,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Keep routing errors (unknown path, wrong method) in the same shape."""
        response = _create_error_response(
            request,
            status_code=exc.status_code,
            message=str(exc.detail),
        )
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format."""
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            request,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=INTERNAL_ERROR_MESSAGE,
            code=ErrorCode.INTERNAL_ERROR.value,
        )
