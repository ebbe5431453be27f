"""Pytest configuration and shared fixtures"""

import os

# Settings are read at import time; point them at SQLite before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_scafflow.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-scafflow-test-suite")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
import pytest_asyncio
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from scafflow.main import app
from scafflow.database import Base, get_db
from scafflow.models import User, UserRole, Project
from scafflow.services.auth_service import AuthService
from scafflow.services.ownership_policy import Identity
from scafflow.services.redis_service import RedisService


TEST_DATABASE_URL = os.environ["DATABASE_URL"]
TEST_PASSWORD = "TestPassword123"


@pytest.fixture(scope="session")
def password_hash() -> str:
    """One bcrypt hash shared by every fixture user"""
    return AuthService.hash_password(TEST_PASSWORD)


@pytest.fixture(autouse=True)
def mock_redis(request, monkeypatch):
    """
    Replace every Redis round trip with an AsyncMock.

    Tests marked redis_client keep the real RedisService methods and only
    get the mocked client, so they can assert on the commands it receives.
    """
    client = MagicMock()
    for command in ("ping", "get", "set", "exists", "incr", "expire", "delete"):
        setattr(client, command, AsyncMock())
    client.ping.return_value = True
    client.get.return_value = None
    client.exists.return_value = 0

    mocks = {"get_client": AsyncMock(return_value=client)}
    if request.node.get_closest_marker("redis_client") is None:
        mocks.update({
            "is_token_revoked": AsyncMock(return_value=False),
            "revoke_token": AsyncMock(return_value=True),
            "is_login_throttled": AsyncMock(return_value=False),
            "record_failed_login": AsyncMock(return_value=1),
            "clear_failed_logins": AsyncMock(),
        })
    for name, mock in mocks.items():
        monkeypatch.setattr(RedisService, name, mock)
    mocks["client"] = client
    return mocks


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=NullPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for testing"""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def async_client(db_session: AsyncSession):
    """Create async test client with database override"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


async def _create_user(session: AsyncSession, name: str, email: str, role: str, password_hash: str) -> User:
    user = User(name=name, email=email, role=role, password_hash=password_hash)
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def owner_user(db_session: AsyncSession, password_hash: str) -> User:
    """Site engineer who owns sample_project"""
    return await _create_user(
        db_session, "Olivia Owner", "owner@example.com", UserRole.SITE_ENGINEER.value, password_hash
    )


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession, password_hash: str) -> User:
    """Architect who owns nothing in sample_project"""
    return await _create_user(
        db_session, "Oscar Other", "other@example.com", UserRole.ARCHITECT.value, password_hash
    )


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession, password_hash: str) -> User:
    """Read-only administrator"""
    return await _create_user(
        db_session, "Ada Admin", "admin@example.com", UserRole.ADMIN.value, password_hash
    )


@pytest_asyncio.fixture
async def sample_project(db_session: AsyncSession, owner_user: User) -> Project:
    """Create a sample project for testing"""
    project = Project(
        owner_id=owner_user.id,
        name="Test Project",
        description="A test project",
        location="Test Site",
        status="active",
        budget_total=1000,
        budget_spent=0,
        budget_variance=1000,
    )
    db_session.add(project)
    await db_session.commit()
    await db_session.refresh(project)
    return project


def identity_for(user: User) -> Identity:
    return Identity(id=user.id, role=user.role, email=user.email)


@pytest.fixture
def owner_identity(owner_user: User) -> Identity:
    return identity_for(owner_user)


@pytest.fixture
def other_identity(other_user: User) -> Identity:
    return identity_for(other_user)


@pytest.fixture
def admin_identity(admin_user: User) -> Identity:
    return identity_for(admin_user)


def headers_for(user: User) -> dict:
    token = AuthService.create_access_token(
        user_id=str(user.id),
        email=user.email,
        role=user.role
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def owner_headers(owner_user: User) -> dict:
    """Authentication headers for the project owner"""
    return headers_for(owner_user)


@pytest.fixture
def other_headers(other_user: User) -> dict:
    """Authentication headers for a non-owner"""
    return headers_for(other_user)


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    """Authentication headers for the admin"""
    return headers_for(admin_user)
