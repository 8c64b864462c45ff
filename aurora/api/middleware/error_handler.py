"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from aurora.application.dto.responses import ErrorResponse
from aurora.config import get_logger
from aurora.core.exceptions import (
    AuroraError,
    ConcurrencyError,
    ConfigurationError,
    ConflictError,
    DatabaseError,
    DuplicateDocumentError,
    IllegalTransitionError,
    IndeterminateError,
    InventoryError,
    NotFoundError,
    StorageError,
    StoreTimeoutError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes; first match wins, so subclasses go first
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InventoryError: status.HTTP_409_CONFLICT,
    IllegalTransitionError: status.HTTP_409_CONFLICT,
    ConcurrencyError: status.HTTP_409_CONFLICT,
    ConflictError: status.HTTP_409_CONFLICT,
    DuplicateDocumentError: status.HTTP_409_CONFLICT,
    IndeterminateError: status.HTTP_504_GATEWAY_TIMEOUT,
    StoreTimeoutError: status.HTTP_504_GATEWAY_TIMEOUT,
    DatabaseError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValueError: status.HTTP_400_BAD_REQUEST,
}

# Hint messages per error code / exception type
HINT_MAP: dict[str, str] = {
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "NOT_FOUND": "Check the ID and list the collection to find valid records.",
    "INSUFFICIENT_STOCK": "Restock the lot or allocate no more than its available quantity.",
    "OVER_RELEASE": "Release no more than the quantity currently allocated on the lot.",
    "ILLEGAL_TRANSITION": "Move the record through the intermediate statuses first.",
    "CONCURRENCY_ERROR": "The record is busy. Retry the whole operation.",
    "VERSION_CONFLICT": "The record changed since it was read. Re-read and retry.",
    "DUPLICATE_DOCUMENT": "A record with this ID already exists.",
    "INDETERMINATE_WRITE": "The write may or may not have applied. Re-read the record before retrying.",
    "STORE_TIMEOUT": "The store did not answer in time. Nothing was written; retry later.",
    "DATABASE_ERROR": "A database operation failed. Check server logs.",
    "UNAUTHORIZED": "Send the acting user in the X-User-Id header.",
    "ValueError": "A parameter value is invalid. Check the request.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    401: "Identify the acting user.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The request conflicts with the current state of the record.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
    504: "The operation timed out.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _format_details(exc: Exception) -> str | None:
    if isinstance(exc, AuroraError) and exc.details:
        return "; ".join(f"{key}={value}" for key, value in exc.details.items())
    return None


def error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert an exception to a standardized JSON response."""
    status_code = _status_for(exc)

    # Prefer AuroraError.code, fall back to class name
    if isinstance(exc, AuroraError):
        error_code = exc.code
        message = exc.message
    else:
        error_code = exc.__class__.__name__
        message = str(exc)

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "request_error",
        request_id=getattr(request.state, "request_id", None),
        path=request.url.path,
        error_type=error_code,
        error=message,
        traceback=traceback.format_exc() if status_code >= 500 else None,
    )

    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error_code=error_code,
            message=message,
            hint=_get_hint(error_code, status_code),
            detail=_format_details(exc),
            path=request.url.path,
        ).model_dump(mode="json"),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Converts exceptions to standardized JSON error responses.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)
        except Exception as e:
            return error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(AuroraError)
    async def aurora_exception_handler(request: Request, exc: AuroraError) -> JSONResponse:
        """Handle domain errors raised by use cases."""
        return error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint="Check the request body fields and types.",
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code)

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=exc.detail or "An error occurred",
                hint=_get_hint(error_code, exc.status_code),
                path=request.url.path,
            ).model_dump(mode="json"),
        )


def _infer_error_code(status_code: int) -> str:
    """Infer a machine-readable error code from an HTTP status."""
    return {
        400: "BAD_REQUEST",
        401: "UNAUTHORIZED",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        422: "UNPROCESSABLE_ENTITY",
    }.get(status_code, "HTTP_ERROR")
