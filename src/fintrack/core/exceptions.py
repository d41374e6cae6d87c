"""Custom exception classes for the finance tracker API.

Each exception carries an error_code that maps to the catalog in
errors.py and an HTTP status used by the global exception handler.
"""

from enum import Enum
from typing import Any


class FinanceTrackerError(Exception):
    """Base exception for all handled API errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "AUTH_001")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return
    """

    default_status = 500

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int | None = None,
    ):
        """Initialize the exception.

        Args:
            error_code: Error code from errors.py
            details: Additional error context (not shown to users)
            http_status: HTTP status code (defaults to the class status)
        """
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status or self.default_status
        super().__init__(error_code)


class ValidationError(FinanceTrackerError):
    """Raised when a payload fails a schema rule outside request parsing."""

    default_status = 400


class NotFoundError(FinanceTrackerError):
    """Raised when an owned resource does not exist for the current user."""

    default_status = 404


class ConflictError(FinanceTrackerError):
    """Raised when a write would violate a uniqueness rule."""

    default_status = 409


class DuplicateIdentityError(ConflictError):
    """Raised by the credential store when the email is already registered."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__("USER_001", details=details)


class AuthenticationError(FinanceTrackerError):
    """Raised on login with an unknown email or a wrong password."""

    default_status = 403


class UnauthorizedKind(str, Enum):
    """Why the session guard rejected a request."""

    NO_TOKEN = "NoToken"
    INVALID_TOKEN = "InvalidToken"
    USER_GONE = "UserGone"


_KIND_CODES = {
    UnauthorizedKind.NO_TOKEN: "AUTH_001",
    UnauthorizedKind.INVALID_TOKEN: "AUTH_002",
    UnauthorizedKind.USER_GONE: "AUTH_003",
}


class AuthorizationError(FinanceTrackerError):
    """Raised by the session guard when a request has no valid session.

    Covers a missing cookie, a token with a bad signature or past its
    expiry, and a token whose subject was deleted after issuance.
    """

    default_status = 401

    def __init__(self, kind: UnauthorizedKind, details: dict[str, Any] | None = None):
        self.kind = kind
        super().__init__(_KIND_CODES[kind], details=details)


class InternalError(FinanceTrackerError):
    """Raised when hashing or signing infrastructure fails."""

    default_status = 500
