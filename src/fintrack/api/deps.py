"""FastAPI dependency injection for authentication and database."""

from datetime import timedelta
from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.config import settings
from fintrack.core.security import PasswordHasher, SessionTokenIssuer, SessionTokenVerifier
from fintrack.db.session import get_db
from fintrack.repositories.ledger import ExpenseRepository, IncomeRepository
from fintrack.repositories.user import UserRepository
from fintrack.schemas.auth import CurrentUser
from fintrack.services.auth import AuthService


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Process-wide password hasher."""
    return PasswordHasher(timeout_seconds=settings.hash_timeout_seconds)


@lru_cache
def get_token_issuer() -> SessionTokenIssuer:
    """Process-wide token issuer bound to the configured secret."""
    return SessionTokenIssuer(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(hours=settings.session_ttl_hours),
    )


@lru_cache
def get_token_verifier() -> SessionTokenVerifier:
    """Process-wide token verifier bound to the configured secret."""
    return SessionTokenVerifier(secret=settings.jwt_secret, algorithm=settings.jwt_algorithm)


async def get_user_repository(
    db: AsyncSession = Depends(get_db),
) -> UserRepository:
    """
    Get user repository instance.

    Args:
        db: Database session

    Returns:
        UserRepository instance
    """
    return UserRepository(db)


async def get_income_repository(db: AsyncSession = Depends(get_db)) -> IncomeRepository:
    return IncomeRepository(db)


async def get_expense_repository(db: AsyncSession = Depends(get_db)) -> ExpenseRepository:
    return ExpenseRepository(db)


async def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    issuer: SessionTokenIssuer = Depends(get_token_issuer),
    verifier: SessionTokenVerifier = Depends(get_token_verifier),
) -> AuthService:
    """
    Get authentication service instance.

    Returns:
        AuthService wired to the credential store, hasher and token services
    """
    return AuthService(user_repo, hasher, issuer, verifier)


async def get_current_user(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> CurrentUser:
    """
    Session guard: resolve the user from the session cookie.

    Args:
        request: Incoming request carrying the cookie jar
        auth_service: Authentication service

    Returns:
        Authenticated user identity, also stored on request.state.user

    Raises:
        AuthorizationError: If the cookie is missing, the token is invalid or
            expired, or the user no longer exists
    """
    token = request.cookies.get(settings.session_cookie_name)
    user = await auth_service.resolve_session(token)

    current_user = CurrentUser.from_user(user)
    request.state.user = current_user
    return current_user
