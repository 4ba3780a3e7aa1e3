"""FastAPI dependency injection for the userhub API.

Provides dependencies for:
- Database sessions (one per request)
- Services and the identity store adapter
- Authentication (current user from JWT)
"""

import logging
from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from userhub.application.services import (
    AuthenticationService,
    UserRoleService,
    UserService,
)
from userhub.config import Settings, get_settings
from userhub.domain.user import User
from userhub.exceptions import InvalidTokenError
from userhub.identity import PasswordHasher, TokenIssuer, UserStore
from userhub.infrastructure.persistence.sqlalchemy import (
    Base,
    UserRepositorySQLAlchemy,
    UserRoleRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)


@lru_cache()
def get_database_url() -> str:
    """Get database URL from application settings."""
    settings = get_settings()
    url = settings.database_url

    # Ensure data directory exists for file-based SQLite
    if settings.database_type == "sqlite" and ":memory:" not in url:
        db_path = url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return url


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """Get the shared async database engine (singleton)."""
    return create_async_engine(
        get_database_url(),
        echo=False,
        pool_pre_ping=True,
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Get the shared async session maker (singleton)."""
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Each request owns its session exclusively; it is never shared
    across concurrent requests.
    """
    async with get_session_maker()() as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]


async def create_tables() -> None:
    """Create all database tables (idempotent)."""
    engine = get_engine()
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema is up to date")


# -----------------------------------------------------------------------------
# Services
# -----------------------------------------------------------------------------


def get_api_settings() -> Settings:
    """Get settings from centralized configuration."""
    return get_settings()


SettingsDep = Annotated[Settings, Depends(get_api_settings)]


def get_token_issuer(settings: SettingsDep) -> TokenIssuer:
    """Get the token issuer configured with API settings."""
    return TokenIssuer(
        settings.jwt_secret_key.get_secret_value(),
        access_lifetime=timedelta(hours=settings.jwt_access_token_expire_hours),
        refresh_lifetime=timedelta(days=settings.jwt_refresh_token_expire_days),
    )


def get_password_hasher(settings: SettingsDep) -> PasswordHasher:
    """Get the bcrypt hasher with the configured work factor."""
    return PasswordHasher(rounds=settings.bcrypt_rounds)


def get_user_role_service(session: DBSession) -> UserRoleService:
    """Get the role collaborator for this request."""
    return UserRoleService(role_repository=UserRoleRepositorySQLAlchemy(session))


RoleServiceDep = Annotated[UserRoleService, Depends(get_user_role_service)]


def get_user_service(session: DBSession, role_service: RoleServiceDep) -> UserService:
    """Get the user service for this request."""
    return UserService(
        user_repository=UserRepositorySQLAlchemy(session),
        user_role_service=role_service,
    )


UserServiceDep = Annotated[UserService, Depends(get_user_service)]


def get_user_store(
    user_service: UserServiceDep,
    role_service: RoleServiceDep,
) -> UserStore:
    """Get the identity store adapter for this request."""
    return UserStore(user_service=user_service, user_role_service=role_service)


UserStoreDep = Annotated[UserStore, Depends(get_user_store)]


def get_authentication_service(
    user_store: UserStoreDep,
    token_issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
    password_hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> AuthenticationService:
    """Get authentication service with all dependencies."""
    return AuthenticationService(
        user_store=user_store,
        password_hasher=password_hasher,
        token_issuer=token_issuer,
    )


AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


# -----------------------------------------------------------------------------
# Current User (JWT Authentication)
# -----------------------------------------------------------------------------


async def get_current_user(
    auth_service: AuthService,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User:
    """
    Resolve the authenticated user from the Authorization header.

    Raises
    ------
    HTTPException
        401 if token is missing, invalid, or user not found
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return await auth_service.resolve_user(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning("Invalid token: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


CurrentUser = Annotated[User, Depends(get_current_user)]


async def require_admin(user: CurrentUser, auth_service: AuthService) -> User:
    """Require admin user."""
    if not await auth_service.is_admin(user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


AdminUser = Annotated[User, Depends(require_admin)]
