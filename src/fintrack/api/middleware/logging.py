"""Request logging middleware with PII filtering.

This module provides structured logging for all API requests with:
- Unique request IDs for tracing
- Request duration tracking
- User context (when the session guard authenticated the request)
- PII filtering so emails and session tokens never reach the logs
"""

import json
import logging
import re
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


# PII patterns to filter from logs
PII_PATTERNS = [
    # JWTs (three base64url segments, header always starts with eyJ)
    (re.compile(r'\beyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]*'), '[TOKEN]'),
    # Email addresses
    (re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b'), '[EMAIL]'),
    # Phone numbers (international format)
    (re.compile(r'\+\d{1,3}[-.\s]?\(?\d{2,4}\)?[-.\s]?\d{3,4}[-.\s]?\d{4,5}'), '[PHONE]'),
    # password=... / "password": "..."
    (re.compile(r'("?password"?\s*[:=]\s*)("[^"]*"|\S+)', re.I), r'\1[REDACTED]'),
]

EXTRA_FIELDS = (
    "request_id",
    "user_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "error_code",
    "error_type",
    "client_ip",
)


def filter_pii(text: str) -> str:
    """Remove PII from text using regex patterns.

    Args:
        text: Input text that may contain PII

    Returns:
        Text with PII replaced by placeholders
    """
    if not text:
        return text

    filtered = text
    for pattern, replacement in PII_PATTERNS:
        filtered = pattern.sub(replacement, filtered)

    return filtered


def _user_id(request: Request) -> str | None:
    user = getattr(request.state, "user", None)
    user_id = getattr(user, "id", None)
    return str(user_id) if user_id else None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests with PII filtering."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and log details.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware or route handler

        Returns:
            HTTP response
        """
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()

        logger.info(
            "Request started",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": filter_pii(str(request.url.path)),
                "client_ip": request.client.host if request.client else None,
            },
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = int((time.time() - start_time) * 1000)
            logger.error(
                "Request failed",
                extra={
                    "request_id": request_id,
                    "user_id": _user_id(request),
                    "method": request.method,
                    "path": filter_pii(str(request.url.path)),
                    "duration_ms": duration_ms,
                    "error_type": type(exc).__name__,
                },
            )
            raise

        duration_ms = int((time.time() - start_time) * 1000)

        response.headers["X-Request-ID"] = request_id

        # The session guard sets request.state.user during call_next.
        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "user_id": _user_id(request),
                "method": request.method,
                "path": filter_pii(str(request.url.path)),
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )

        return response


class JSONLogFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": filter_pii(record.getMessage()),
        }

        for field in EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value

        if record.exc_info:
            log_data["exception"] = filter_pii(self.formatException(record.exc_info))

        return json.dumps(log_data, default=str)


class PIIFilter(logging.Filter):
    """Scrub PII from the rendered message before any formatter sees it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = filter_pii(record.getMessage())
        record.args = None
        return True
