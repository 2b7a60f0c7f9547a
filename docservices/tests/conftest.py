"""
Shared fixtures for the docservices test suite.

The user-directory app runs against an isolated in-memory SQLite database;
the authentication app gets its collaborators through dependency overrides.
"""
import os

# Must be set before docservices.base_microservice builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from docservices.auth import router as auth_router_module
from docservices.auth.directory_client import get_directory_client
from docservices.auth.jwt import TokenIssuer, get_token_issuer
from docservices.auth.main import app as auth_app
from docservices.auth.schemas import DirectoryUser
from docservices.base_microservice import Base, get_db_session
from docservices.errors import NotFoundError
from docservices.passwords import PasswordHasher
from docservices.users import router as users_router_module
from docservices.users.main import app as users_app

TEST_SECRET = "test-secret-key-with-at-least-32-bytes"


class FakeDirectory:
    """In-process stand-in for UserDirectoryClient."""

    def __init__(self, users=None, error: Exception = None):
        self.users = {u.email: u for u in (users or [])}
        self.error = error
        self.lookups = []

    async def lookup_by_email(self, email: str) -> DirectoryUser:
        self.lookups.append(email)
        if self.error is not None:
            raise self.error
        if email not in self.users:
            raise NotFoundError("User not found.")
        return self.users[email]


@pytest.fixture
def hasher():
    # Minimum bcrypt cost keeps the suite fast
    return PasswordHasher(rounds=4)


@pytest.fixture
def issuer():
    return TokenIssuer(secret_key=TEST_SECRET, expire_minutes=5)


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    await engine.dispose()


@pytest_asyncio.fixture
async def users_client(session_factory, hasher):
    async def override_session():
        async with session_factory() as session:
            yield session

    users_app.dependency_overrides[get_db_session] = override_session
    users_app.dependency_overrides[users_router_module.get_password_hasher] = lambda: hasher
    transport = ASGITransport(app=users_app)
    async with AsyncClient(base_url="http://users", transport=transport) as ac:
        yield ac
    users_app.dependency_overrides.clear()


@pytest.fixture
def fake_directory():
    return FakeDirectory()


@pytest_asyncio.fixture
async def auth_client(fake_directory, issuer, hasher):
    auth_app.dependency_overrides[get_directory_client] = lambda: fake_directory
    auth_app.dependency_overrides[get_token_issuer] = lambda: issuer
    auth_app.dependency_overrides[auth_router_module.get_password_hasher] = lambda: hasher
    transport = ASGITransport(app=auth_app)
    async with AsyncClient(base_url="http://auth", transport=transport) as ac:
        yield ac
    auth_app.dependency_overrides.clear()
