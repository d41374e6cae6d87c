"""Authentication endpoints for signup, login, logout and session checks."""

from fastapi import APIRouter, Depends, Request, Response, status

from fintrack.api.deps import get_auth_service, get_current_user
from fintrack.config import settings
from fintrack.schemas.auth import (
    CurrentUser,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    VerifyResponse,
)
from fintrack.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["authentication"])


def _cookie_secure(request: Request) -> bool:
    if settings.cookie_secure is not None:
        return settings.cookie_secure
    return request.url.scheme == "https"


@router.post(
    "/signup",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create account",
    description="Create a new user account with name, email and password.",
)
async def signup(
    data: SignupRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """
    Register a new user account.

    Raises:
        400: Validation error
        409: Email already registered
        500: Password hashing failed
    """
    await auth_service.signup(name=data.name, email=data.email, password=data.password)
    return MessageResponse(message="Sign up successful")


@router.post(
    "/login",
    response_model=MessageResponse,
    summary="User login",
    description="Authenticate with email and password; the session token is set as an HTTP-only cookie.",
)
async def login(
    data: LoginRequest,
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """
    Authenticate user and set the session cookie.

    Raises:
        400: Validation error
        403: Unknown email or wrong password
    """
    token = await auth_service.login(email=data.email, password=data.password)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_hours * 60 * 60,
        httponly=True,
        samesite="lax",
        secure=_cookie_secure(request),
    )
    return MessageResponse(message="Login success")


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="User logout",
    description="Clear the session cookie. The token itself stays valid until it expires.",
)
async def logout(
    request: Request,
    response: Response,
    current_user: CurrentUser = Depends(get_current_user),
) -> MessageResponse:
    """
    Clear the session cookie for the authenticated user.

    Raises:
        401: Not authenticated
    """
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=_cookie_secure(request),
    )
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/verify",
    response_model=VerifyResponse,
    summary="Check session",
    description="Return the authenticated user's identity if the session cookie is valid.",
)
async def verify(
    current_user: CurrentUser = Depends(get_current_user),
) -> VerifyResponse:
    """
    Confirm the caller is logged in.

    Raises:
        401: NoToken, InvalidToken or UserGone
    """
    return VerifyResponse(user=current_user)
