"""Error codes and user-facing messages.

This module defines the error catalog for the API.
Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: Message returned to the client
- retry_allowed: Whether the request can be retried as-is
"""

# Error catalog for authentication and ledger operations
ERROR_CATALOG: dict[str, dict] = {
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request payload failed schema validation",
        "user_message": "bad request",
        "retry_allowed": False,
    },
    "AUTH_001": {
        "code": "AUTH_001",
        "message": "No session token on request",
        "user_message": "Unauthorized: No token provided",
        "retry_allowed": False,
    },
    "AUTH_002": {
        "code": "AUTH_002",
        "message": "Session token failed signature or expiry check",
        "user_message": "Unauthorized: Invalid token",
        "retry_allowed": False,
    },
    "AUTH_003": {
        "code": "AUTH_003",
        "message": "Session token references a user that no longer exists",
        "user_message": "Unauthorized: User not found",
        "retry_allowed": False,
    },
    "AUTH_004": {
        "code": "AUTH_004",
        "message": "Login attempted for unknown email",
        "user_message": "You must have an account",
        "retry_allowed": False,
    },
    "AUTH_005": {
        "code": "AUTH_005",
        "message": "Login attempted with wrong password",
        "user_message": "Incorrect password or email",
        "retry_allowed": True,
    },
    "USER_001": {
        "code": "USER_001",
        "message": "Signup attempted with an already registered email",
        "user_message": "You already have an account. Please login.",
        "retry_allowed": False,
    },
    "SEC_001": {
        "code": "SEC_001",
        "message": "Password hashing backend failed",
        "user_message": "Error hashing password",
        "retry_allowed": True,
    },
    "SEC_002": {
        "code": "SEC_002",
        "message": "Password hashing timed out",
        "user_message": "Error hashing password",
        "retry_allowed": True,
    },
    "TXN_001": {
        "code": "TXN_001",
        "message": "Income not found or owned by a different user",
        "user_message": "Income not found",
        "retry_allowed": False,
    },
    "TXN_002": {
        "code": "TXN_002",
        "message": "Expense not found or owned by a different user",
        "user_message": "Expense not found",
        "retry_allowed": False,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details; a generic definition for unknown codes
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def get_user_message(error_code: str) -> str:
    """Get user-facing message for an error code."""
    return get_error(error_code)["user_message"]


def is_retryable(error_code: str) -> bool:
    """Check if an error is retryable."""
    return get_error(error_code)["retry_allowed"]
