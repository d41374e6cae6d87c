"""Security utilities for password hashing and session token management."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID

import anyio.to_thread
from jose import JWTError, jwt
from passlib.context import CryptContext

from fintrack.core.exceptions import AuthorizationError, InternalError, UnauthorizedKind

logger = logging.getLogger(__name__)

# Password hashing with Argon2
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

ALGORITHM = "HS256"
SESSION_TOKEN_EXPIRE_HOURS = 24


def hash_password(password: str) -> str:
    """
    Hash a password using Argon2 with a random salt.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        plain_password: Password to verify
        hashed_password: Stored password hash

    Returns:
        True if password matches, False otherwise (including malformed hashes)
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        logger.warning("Stored password hash could not be parsed")
        return False


class PasswordHasher:
    """Runs hashing off the event loop with an upper bound on wall time."""

    def __init__(self, timeout_seconds: float = 10.0):
        self.timeout_seconds = timeout_seconds

    async def hash(self, password: str) -> str:
        """Hash a password in the threadpool.

        Raises:
            InternalError: If the backend fails or exceeds the timeout
        """
        return await self._run(hash_password, password)

    async def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password in the threadpool.

        Raises:
            InternalError: If the backend fails or exceeds the timeout
        """
        return await self._run(verify_password, password, password_hash)

    async def _run(self, func, *args):
        try:
            with anyio.fail_after(self.timeout_seconds):
                # Abandon the worker thread on timeout; the request fails immediately.
                return await anyio.to_thread.run_sync(func, *args, abandon_on_cancel=True)
        except TimeoutError:
            logger.error("Password hashing timed out", extra={"timeout": self.timeout_seconds})
            raise InternalError("SEC_002", details={"timeout": self.timeout_seconds})
        except Exception as exc:
            logger.error("Password hashing failed", extra={"error_type": type(exc).__name__})
            raise InternalError("SEC_001", details={"error_type": type(exc).__name__}) from exc


@dataclass(frozen=True)
class SessionClaims:
    """Verified contents of a session token."""

    user_id: UUID
    email: str
    issued_at: datetime
    expires_at: datetime


class SessionTokenIssuer:
    """Mints signed, time-limited session tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = ALGORITHM,
        ttl: timedelta = timedelta(hours=SESSION_TOKEN_EXPIRE_HOURS),
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, user_id: UUID, email: str, now: datetime | None = None) -> str:
        """
        Create a session token for a user.

        The payload is signed, not encrypted; it must not carry secrets.

        Args:
            user_id: User ID to encode as the subject
            email: User email to embed
            now: Issuance time (defaults to the current UTC time)

        Returns:
            Encoded JWT string
        """
        issued_at = now or datetime.now(timezone.utc)
        to_encode = {
            "sub": str(user_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)


class SessionTokenVerifier:
    """Checks signature and expiry of session tokens."""

    def __init__(self, secret: str, algorithm: str = ALGORITHM):
        self.secret = secret
        self.algorithm = algorithm

    def verify(self, token: str) -> SessionClaims:
        """
        Decode and verify a session token.

        Args:
            token: JWT string from the session cookie

        Returns:
            Verified claims

        Raises:
            AuthorizationError: kind InvalidToken if the token is malformed,
                tampered with, expired, or missing required claims
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_sub": True, "require_iat": True},
            )
            return SessionClaims(
                user_id=UUID(payload["sub"]),
                email=payload.get("email", ""),
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (JWTError, ValueError, TypeError) as exc:
            raise AuthorizationError(
                UnauthorizedKind.INVALID_TOKEN, details={"error_type": type(exc).__name__}
            ) from exc
