"""Authentication service with business logic."""

import logging

from fintrack.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DuplicateIdentityError,
    UnauthorizedKind,
)
from fintrack.core.security import PasswordHasher, SessionTokenIssuer, SessionTokenVerifier
from fintrack.models.user import User
from fintrack.repositories.user import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Service for signup, login and session resolution."""

    def __init__(
        self,
        user_repo: UserRepository,
        hasher: PasswordHasher,
        issuer: SessionTokenIssuer,
        verifier: SessionTokenVerifier,
    ):
        """
        Initialize authentication service.

        Args:
            user_repo: Credential store
            hasher: Password hasher
            issuer: Session token issuer
            verifier: Session token verifier
        """
        self.user_repo = user_repo
        self.hasher = hasher
        self.issuer = issuer
        self.verifier = verifier

    async def signup(self, name: str, email: str, password: str) -> User:
        """
        Register a new user.

        Args:
            name: Display name
            email: User email address
            password: Plain text password

        Returns:
            Created user object

        Raises:
            DuplicateIdentityError: If email already exists
            InternalError: If hashing fails
        """
        if await self.user_repo.email_exists(email):
            logger.info("Signup rejected: email already registered")
            raise DuplicateIdentityError()

        password_hash = await self.hasher.hash(password)

        user = User(name=name, email=email, password_hash=password_hash)
        created_user = await self.user_repo.create(user)
        logger.info("User signed up", extra={"user_id": str(created_user.id)})
        return created_user

    async def login(self, email: str, password: str) -> str:
        """
        Authenticate user and mint a session token.

        Args:
            email: User email address
            password: Plain text password

        Returns:
            Signed session token

        Raises:
            AuthenticationError: If the email is unknown or the password is wrong
        """
        user = await self.user_repo.get_by_email(email)
        if user is None:
            logger.warning("Login failed: unknown email")
            raise AuthenticationError("AUTH_004")

        if not await self.hasher.verify(password, user.password_hash):
            logger.warning("Login failed: wrong password", extra={"user_id": str(user.id)})
            raise AuthenticationError("AUTH_005")

        logger.info("User logged in", extra={"user_id": str(user.id)})
        return self.issuer.issue(user.id, user.email)

    async def resolve_session(self, token: str | None) -> User:
        """
        Resolve the user behind a session token.

        Args:
            token: Raw cookie value, or None if the cookie is absent

        Returns:
            The authenticated user

        Raises:
            AuthorizationError: NoToken, InvalidToken or UserGone
        """
        if not token:
            raise AuthorizationError(UnauthorizedKind.NO_TOKEN)

        claims = self.verifier.verify(token)

        user = await self.user_repo.get_by_id(claims.user_id)
        if user is None:
            raise AuthorizationError(
                UnauthorizedKind.USER_GONE, details={"user_id": str(claims.user_id)}
            )
        return user
