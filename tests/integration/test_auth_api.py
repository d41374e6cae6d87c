"""Integration tests for authentication API endpoints."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, Mock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.api.deps import get_password_hasher
from fintrack.config import settings
from fintrack.core.security import PasswordHasher, SessionTokenIssuer, verify_password
from fintrack.main import app
from fintrack.models.user import User
from fintrack.repositories.user import UserRepository

ANN = {"name": "Ann", "email": "ann@x.com", "password": "abcd"}


class TestSignup:
    """Test signup endpoint."""

    @pytest.mark.asyncio
    async def test_signup_success(self, client: AsyncClient, db_session: AsyncSession):
        response = await client.post("/api/v1/auth/signup", json=ANN)

        assert response.status_code == 201
        assert response.json() == {"message": "Sign up successful", "success": True}

        user = await UserRepository(db_session).get_by_email("ann@x.com")
        assert user is not None
        assert user.name == "Ann"
        assert user.password_hash != "abcd"
        assert verify_password("abcd", user.password_hash) is True

    @pytest.mark.asyncio
    async def test_signup_duplicate_email(self, client: AsyncClient, db_session: AsyncSession):
        first = await client.post("/api/v1/auth/signup", json=ANN)
        assert first.status_code == 201

        second = await client.post(
            "/api/v1/auth/signup",
            json={"name": "Impostor", "email": "ann@x.com", "password": "zzzz"},
        )

        assert second.status_code == 409
        body = second.json()
        assert body["success"] is False
        assert body["error_code"] == "USER_001"

        # The original credential is untouched.
        user = await UserRepository(db_session).get_by_email("ann@x.com")
        assert user.name == "Ann"
        assert verify_password("abcd", user.password_hash) is True
        assert verify_password("zzzz", user.password_hash) is False

    @pytest.mark.asyncio
    async def test_signup_short_password(self, client: AsyncClient, db_session: AsyncSession):
        response = await client.post(
            "/api/v1/auth/signup", json={**ANN, "password": "abc"}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "bad request"
        assert body["error"].startswith("password")
        assert await UserRepository(db_session).get_by_email("ann@x.com") is None

    @pytest.mark.asyncio
    async def test_signup_short_password_skips_hashing(self, client: AsyncClient):
        hasher = Mock(spec=PasswordHasher)
        hasher.hash = AsyncMock(return_value="hashed")
        app.dependency_overrides[get_password_hasher] = lambda: hasher

        response = await client.post("/api/v1/auth/signup", json={**ANN, "password": "abc"})

        assert response.status_code == 400
        hasher.hash.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_signup_invalid_email(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/signup", json={**ANN, "email": "not-an-email"})

        assert response.status_code == 400
        assert response.json()["error_code"] == "VAL_001"

    @pytest.mark.asyncio
    async def test_signup_short_name(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/signup", json={**ANN, "name": "An"})

        assert response.status_code == 400


class TestLogin:
    """Test login endpoint."""

    @pytest.mark.asyncio
    async def test_login_sets_session_cookie(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": test_user.email, "password": "password123"},
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Login success", "success": True}
        assert "token" in response.cookies

        set_cookie = response.headers["set-cookie"].lower()
        assert "httponly" in set_cookie
        assert "samesite=lax" in set_cookie
        assert "max-age=86400" in set_cookie
        # Served over plain HTTP in tests.
        assert "secure" not in set_cookie

    @pytest.mark.asyncio
    async def test_login_over_https_sets_secure_cookie(self, client: AsyncClient, test_user: User):
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="https://test"
        ) as https_client:
            response = await https_client.post(
                "/api/v1/auth/login",
                json={"email": test_user.email, "password": "password123"},
            )

        assert response.status_code == 200
        assert "; secure" in response.headers["set-cookie"].lower()

    @pytest.mark.asyncio
    async def test_login_secure_cookie_forced_by_config(
        self, client: AsyncClient, test_user: User, monkeypatch
    ):
        monkeypatch.setattr(settings, "cookie_secure", True)

        response = await client.post(
            "/api/v1/auth/login",
            json={"email": test_user.email, "password": "password123"},
        )

        assert response.status_code == 200
        assert "; secure" in response.headers["set-cookie"].lower()

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": test_user.email, "password": "wrong"},
        )

        assert response.status_code == 403
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Incorrect password or email"
        assert "set-cookie" not in response.headers

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": "password123"},
        )

        assert response.status_code == 403
        assert response.json()["message"] == "You must have an account"
        assert "set-cookie" not in response.headers

    @pytest.mark.asyncio
    async def test_login_password_too_short(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": test_user.email, "password": "ab"},
        )

        assert response.status_code == 400


class TestVerifyAndLogout:
    """Test the session guard through /verify and /logout."""

    @pytest.mark.asyncio
    async def test_verify_without_cookie(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/verify")

        assert response.status_code == 401
        body = response.json()
        assert body["success"] is False
        assert body["reason"] == "NoToken"

    @pytest.mark.asyncio
    async def test_verify_with_invalid_token(self, client: AsyncClient):
        client.cookies.set("token", "invalid.token.here")

        response = await client.get("/api/v1/auth/verify")

        assert response.status_code == 401
        assert response.json()["reason"] == "InvalidToken"

    @pytest.mark.asyncio
    async def test_verify_with_expired_token(
        self, client: AsyncClient, test_user: User, token_issuer: SessionTokenIssuer
    ):
        issued = datetime.now(timezone.utc) - timedelta(hours=25)
        client.cookies.set("token", token_issuer.issue(test_user.id, test_user.email, now=issued))

        response = await client.get("/api/v1/auth/verify")

        assert response.status_code == 401
        assert response.json()["reason"] == "InvalidToken"

    @pytest.mark.asyncio
    async def test_verify_token_ignores_authorization_header(
        self, client: AsyncClient, test_user: User, token_issuer: SessionTokenIssuer
    ):
        token = token_issuer.issue(test_user.id, test_user.email)

        response = await client.get(
            "/api/v1/auth/verify", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        assert response.json()["reason"] == "NoToken"

    @pytest.mark.asyncio
    async def test_verify_returns_identity(self, auth_client: AsyncClient, test_user: User):
        response = await auth_client.get("/api/v1/auth/verify")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["user"]["id"] == str(test_user.id)
        assert body["user"]["name"] == "Test User"
        assert body["user"]["email"] == test_user.email
        assert body["user"]["incomes"] == []
        assert body["user"]["expenses"] == []
        assert "password_hash" not in body["user"]
        assert "password" not in body["user"]

    @pytest.mark.asyncio
    async def test_verify_after_user_deleted(
        self, auth_client: AsyncClient, test_user: User, db_session: AsyncSession
    ):
        assert await UserRepository(db_session).delete(test_user.id) is True

        response = await auth_client.get("/api/v1/auth/verify")

        assert response.status_code == 401
        assert response.json()["reason"] == "UserGone"

    @pytest.mark.asyncio
    async def test_logout_requires_session(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/logout")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_logout_clears_cookie(self, auth_client: AsyncClient):
        response = await auth_client.post("/api/v1/auth/logout")

        assert response.status_code == 200
        assert response.json()["success"] is True
        set_cookie = response.headers["set-cookie"].lower()
        assert set_cookie.startswith("token=")
        assert "max-age=0" in set_cookie


class TestEndToEnd:
    @pytest.mark.asyncio
    async def test_signup_login_verify_logout(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/signup", json=ANN)
        assert response.status_code == 201

        response = await client.post(
            "/api/v1/auth/login", json={"email": "ann@x.com", "password": "abcd"}
        )
        assert response.status_code == 200
        assert client.cookies.get("token")

        response = await client.get("/api/v1/auth/verify")
        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["user"]["email"] == "ann@x.com"

        response = await client.post("/api/v1/auth/logout")
        assert response.status_code == 200

        response = await client.get("/api/v1/auth/verify")
        assert response.status_code == 401
        assert response.json()["reason"] == "NoToken"
