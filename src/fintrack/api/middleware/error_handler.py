"""Global error handling.

This module provides consistent error responses across all API endpoints.
Every failure is returned as JSON with at least `success`, `error_code` and
`message`; nothing internal (SQL, stack traces, hashes) reaches the client.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from fintrack.config import settings
from fintrack.core.errors import get_error
from fintrack.core.exceptions import (
    AuthorizationError,
    FinanceTrackerError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _error_content(exc: FinanceTrackerError) -> dict:
    content = {
        "success": False,
        "error_code": exc.error_code,
        "message": get_error(exc.error_code)["user_message"],
    }
    if isinstance(exc, AuthorizationError):
        content["reason"] = exc.kind.value
    if isinstance(exc, ValidationError) and "error" in exc.details:
        content["error"] = exc.details["error"]
    return content


async def handle_tracker_error(request: Request, exc: FinanceTrackerError) -> JSONResponse:
    """Handle the application's own exception hierarchy.

    Args:
        request: The incoming request
        exc: The raised application exception

    Returns:
        JSONResponse with the catalog message and the exception's status
    """
    extra = {"error_code": exc.error_code, "path": request.url.path, "method": request.method}
    if settings.debug:
        extra["details"] = exc.details

    if exc.http_status >= 500:
        logger.error(f"Request failed: {exc.error_code}", extra=extra)
    else:
        logger.warning(f"Request rejected: {exc.error_code}", extra=extra)

    return JSONResponse(status_code=exc.http_status, content=_error_content(exc))


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic request validation errors.

    Only the first violated rule is reported, as `error`.

    Args:
        request: The incoming request
        exc: The validation error

    Returns:
        JSONResponse with status 400
    """
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(x) for x in first.get("loc", []) if x != "body")
    msg = first.get("msg", "Invalid value")

    extra = {"path": request.url.path, "method": request.method}
    if settings.debug:
        # Never echo submitted values; they can include passwords.
        extra["errors"] = [{"loc": e.get("loc"), "msg": e.get("msg")} for e in errors]
    logger.warning(f"Validation error on {request.url.path}", extra=extra)

    error = ValidationError("VAL_001", details={"error": f"{field}: {msg}" if field else msg})
    return JSONResponse(status_code=error.http_status, content=_error_content(error))


async def handle_integrity_error(
    request: Request, exc: IntegrityError
) -> JSONResponse:
    """Handle database integrity errors.

    Args:
        request: The incoming request
        exc: The integrity error

    Returns:
        JSONResponse with error details
    """
    # Do not log str(exc): it can include SQL + bound parameters.
    logger.error(
        f"Database integrity error on {request.url.path}",
        extra={"path": request.url.path, "method": request.method},
    )

    error_msg = str(exc).lower()
    if "unique" in error_msg or "duplicate" in error_msg:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={
                "success": False,
                "error_code": "DB_002",
                "message": "This record already exists",
            },
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error_code": "DB_001",
            "message": "A database error occurred",
        },
    )


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    Args:
        request: The incoming request
        exc: The unexpected exception

    Returns:
        JSONResponse with generic error message
    """
    extra = {
        "error_type": type(exc).__name__,
        "path": request.url.path,
        "method": request.method,
    }
    # In non-debug: do not log str(exc) or traceback (may include sensitive data).
    if settings.debug:
        logger.exception(f"Unexpected error on {request.url.path}", extra=extra)
    else:
        logger.error(f"Unexpected error on {request.url.path}", extra=extra)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error_code": "SYS_001",
            "message": "Internal Server Error",
        },
    )
