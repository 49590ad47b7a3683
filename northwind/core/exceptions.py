"""
Exception handling for the Northwind API.

Endpoints run through ``guarded``: intentional outcomes (``AppError``) pass
through untouched, anything else is logged with the operation name and
replaced by a generic 500. ``global_exception_handler`` renders every
``AppError`` into the same ``{"error": {...}}`` envelope.
"""

import functools
from typing import Any, Callable, Dict, Optional, TypeVar

import structlog
from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class AppError(Exception):
    """Base class for all application exceptions."""

    code: str = "AppError"

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.headers = headers
        super().__init__(self.message)


class EntityNotFoundException(AppError):
    """Resource not found error."""

    code = "EntityNotFoundException"

    def __init__(
        self,
        message: str = "Entity not found",
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details, headers)


class StoreUnavailableException(AppError):
    """A read failed against the store and reads are configured as strict."""

    code = "StoreUnavailableException"

    def __init__(self, message: str = "The data store is unavailable.", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_503_SERVICE_UNAVAILABLE, details)


class OperationFailedException(AppError):
    """Opaque failure of an endpoint operation; the cause is only logged."""

    code = "InternalServerError"

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"An unexpected error occurred while processing {operation}.")


def guarded(operation: str) -> Callable[[F], F]:
    """Run an endpoint body, turning unexpected exceptions into a generic 500."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (AppError, HTTPException):
                raise
            except Exception:
                logger.exception("Operation failed", operation=operation)
                raise OperationFailedException(operation) from None

        return wrapper  # type: ignore[return-value]

    return decorator


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render application errors; anything unrecognized becomes an opaque 500."""
    if isinstance(exc, AppError):
        return JSONResponse(
            status_code=exc.status_code,
            headers=exc.headers,
            content={
                "error": {
                    "code": exc.code,
                    "message": exc.message,
                    "details": exc.details,
                    "path": request.url.path,
                }
            },
        )

    logger.error("Unhandled exception", path=request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "InternalServerError",
                "message": "An unexpected error occurred. Please try again later.",
                "path": request.url.path,
            }
        },
    )
