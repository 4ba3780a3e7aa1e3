"""Pytest fixtures for API integration tests.

Each test gets its own SQLite database file. Schema setup and seeding run
in a fresh event loop so they never clash with the TestClient's loop.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from userhub.application.services import AuthenticationService, UserRoleService
from userhub.config import Settings
from userhub.infrastructure.persistence.sqlalchemy import (
    Base,
    UserRepositorySQLAlchemy,
    UserRoleRepositorySQLAlchemy,
)
from userhub.presentation.api.app import API_V1_PREFIX, create_app
from userhub.presentation.api.dependencies import get_api_settings, get_db_session

from tests.shared.fixtures.factories import TEST_PASSWORD


def _run(coro):
    """Run a coroutine to completion in a fresh event loop."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled."""
    return Settings(
        jwt_secret_key=SecretStr("test-jwt-secret-for-testing-only"),
        api_host="127.0.0.1",
        api_port=8000,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        api_cookie_secure=False,  # Allow HTTP in tests
        bcrypt_rounds=4,
        registration_open=True,
    )


@pytest.fixture
def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path}/api.db",
        echo=False,
        poolclass=NullPool,
    )

    async def _setup():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    _run(_setup())
    yield engine
    _run(engine.dispose())


@pytest.fixture
def test_session_maker(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def test_client(api_settings, test_session_maker):
    """Create a test client whose requests use the per-test database."""
    app = create_app(settings=api_settings)

    async def override_get_db_session():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_api_settings] = lambda: api_settings

    return TestClient(app)


@pytest.fixture
def grant_role(test_session_maker):
    """Grant a role to a registered user directly in the database."""

    def _grant(email: str, role_name: str) -> None:
        async def _do():
            async with test_session_maker() as session:
                user_repo = UserRepositorySQLAlchemy(session)
                role_service = UserRoleService(UserRoleRepositorySQLAlchemy(session))
                user = await user_repo.find_by_email(
                    AuthenticationService.normalize_name(email),
                )
                assert user is not None, f"No user {email}"
                await role_service.add_role(user, role_name)
                await session.commit()

        _run(_do())

    return _grant


@pytest.fixture
def register(test_client, api_v1_prefix):
    """Register a user through the API and return the auth response body."""

    def _register(
        email: str,
        password: str = TEST_PASSWORD,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> dict:
        response = test_client.post(
            f"{api_v1_prefix}/auth/register",
            json={
                "email": email,
                "password": password,
                "first_name": first_name,
                "last_name": last_name,
            },
        )
        assert response.status_code == 201, (
            f"Registration failed: {response.status_code} - {response.text}"
        )
        return response.json()

    return _register


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(register) -> dict:
    """Auth headers for a regular user."""
    body = register("api-user@example.com", first_name="Regular", last_name="User")
    return _bearer(body["access_token"])


@pytest.fixture
def admin_headers(register, grant_role) -> dict:
    """Auth headers for a user holding the admin role."""
    body = register("api-admin@example.com", first_name="Ada", last_name="Admin")
    grant_role("api-admin@example.com", "admin")
    return _bearer(body["access_token"])
