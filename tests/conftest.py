import os
import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.append(str(Path(__file__).parents[1] / "src"))

ENV_TEST_PATH = Path(__file__).parents[1] / ".env.test"


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key, value)


_load_env_file(ENV_TEST_PATH)

# Settings are read at import time, so these must be in place before the app loads.
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fintrack.db.session import get_db  # noqa: E402
from fintrack.main import app  # noqa: E402

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")

TEST_SECRET = os.environ["JWT_SECRET"]


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # One shared connection so the in-memory database survives across sessions.
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    return {}


@pytest.fixture(scope="function")
async def test_engine():
    """Create tables for tests that need the database, and drop them after.

    This fixture is intentionally NOT autouse so pure unit tests can run
    without any database.
    """
    from fintrack.models.base import Base

    engine = create_async_engine(TEST_DATABASE_URL, echo=False, **_engine_kwargs(TEST_DATABASE_URL))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db_session(test_engine):
    """Provide test database session with fresh connection per test."""
    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def test_user(db_session: AsyncSession):
    """Create a test user for authentication tests."""
    from fintrack.core.security import hash_password
    from fintrack.models.user import User
    from fintrack.repositories.user import UserRepository

    repo = UserRepository(db_session)
    user = User(
        name="Test User",
        email="testuser@example.com",
        password_hash=hash_password("password123"),
    )
    return await repo.create(user)


@pytest.fixture
def token_issuer():
    from fintrack.core.security import SessionTokenIssuer

    return SessionTokenIssuer(secret=TEST_SECRET)


@pytest.fixture
async def client(db_session: AsyncSession):
    """Provide test client with database override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def auth_client(client: AsyncClient, test_user, token_issuer):
    """Client whose cookie jar already holds a valid session for test_user."""
    client.cookies.set("token", token_issuer.issue(test_user.id, test_user.email))
    return client
