"""Authentication router for registration, sign-in, sign-out and tokens."""

import logging
from typing import Annotated

from fastapi import APIRouter, Cookie, HTTPException, Response, status

from userhub.config import Settings
from userhub.domain.user import EmailAlreadyExistsError, User
from userhub.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    WeakPasswordError,
)
from userhub.identity import TokenPair
from userhub.presentation.api.dependencies import (
    AuthService,
    CurrentUser,
    DBSession,
    SettingsDep,
)
from userhub.presentation.api.schemas.auth import (
    AuthResponse,
    CurrentAccountResponse,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Cookie name for refresh token
REFRESH_TOKEN_COOKIE = "userhub_refresh_token"  # NOQA: S105
REFRESH_TOKEN_COOKIE_PATH = "/api/v1/auth"


def _set_refresh_token_cookie(
    response: Response,
    token: str,
    settings: Settings,
) -> None:
    """Set the refresh token as an HttpOnly cookie.

    This cookie is:
    - HttpOnly: Not accessible to JavaScript
    - Secure: Only sent over HTTPS (when cookie_secure=True)
    - Path restricted: Only sent to /api/v1/auth endpoints
    """
    max_age_seconds = settings.jwt_refresh_token_expire_days * 24 * 60 * 60

    response.set_cookie(
        key=REFRESH_TOKEN_COOKIE,
        value=token,
        httponly=True,
        secure=settings.api_cookie_secure,
        samesite=settings.api_cookie_samesite,
        max_age=max_age_seconds,
        path=REFRESH_TOKEN_COOKIE_PATH,
        domain=settings.api_cookie_domain,
    )


def _clear_refresh_token_cookie(response: Response, settings: Settings) -> None:
    """Clear the refresh token cookie (for sign-out)."""
    response.delete_cookie(
        key=REFRESH_TOKEN_COOKIE,
        path=REFRESH_TOKEN_COOKIE_PATH,
        domain=settings.api_cookie_domain,
    )


def _current_account(user: User) -> CurrentAccountResponse:
    return CurrentAccountResponse(
        user_id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        is_authenticated=True,
        is_admin=user.is_admin,
    )


def _create_auth_response(user: User, tokens: TokenPair) -> AuthResponse:
    return AuthResponse(
        user=_current_account(user),
        access_token=tokens.access_token,
        expires_in=tokens.expires_in,
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered successfully"},
        400: {"description": "Invalid input (weak password)"},
        403: {"description": "Registration disabled"},
        409: {"description": "Email already registered"},
    },
)
async def register(
    request: RegisterRequest,
    response: Response,
    auth_service: AuthService,
    session: DBSession,
    settings: SettingsDep,
) -> AuthResponse:
    if not settings.registration_open:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Registration is disabled. Contact an administrator.",
        )

    try:
        user, tokens = await auth_service.register(
            email=request.email,
            password=request.password,
            first_name=request.first_name,
            last_name=request.last_name,
        )
        await session.commit()
    except EmailAlreadyExistsError as e:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email address is already registered",
        ) from e
    except WeakPasswordError as e:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Password does not meet security requirements",
        ) from e

    _set_refresh_token_cookie(response, tokens.refresh_token, settings)

    logger.info("New user registered: %s", user.email)
    return _create_auth_response(user, tokens)


@router.post(
    "/login",
    summary="Authenticate user",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials"},
    },
)
async def login(
    request: LoginRequest,
    response: Response,
    auth_service: AuthService,
    session: DBSession,
    settings: SettingsDep,
) -> AuthResponse:
    """
    Authenticate with email and password.

    Returns an access token on successful authentication.
    The refresh token is set as an HttpOnly cookie.
    """
    try:
        user, tokens = await auth_service.login(
            email=request.email,
            password=request.password,
        )
        # Persists a rehashed password, if any
        await session.commit()
    except InvalidCredentialsError as e:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        ) from e

    _set_refresh_token_cookie(response, tokens.refresh_token, settings)

    return _create_auth_response(user, tokens)


@router.post(
    "/refresh",
    summary="Refresh access token",
    responses={
        200: {"description": "Tokens refreshed successfully"},
        401: {"description": "Invalid or expired refresh token"},
    },
)
async def refresh_token(
    response: Response,
    auth_service: AuthService,
    settings: SettingsDep,
    request: RefreshRequest | None = None,
    refresh_token_cookie: Annotated[
        str | None,
        Cookie(alias=REFRESH_TOKEN_COOKIE),
    ] = None,
) -> TokenResponse:
    """
    Get a new access token using a valid refresh token.

    The refresh token is read from the request body or, if absent there,
    from the HttpOnly cookie. A new refresh token replaces the cookie.
    """
    token = None
    if request and request.refresh_token:
        token = request.refresh_token
    elif refresh_token_cookie:
        token = refresh_token_cookie

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No refresh token provided",
        )

    try:
        tokens = await auth_service.refresh_token(token)
    except InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        ) from e

    _set_refresh_token_cookie(response, tokens.refresh_token, settings)

    return TokenResponse(
        access_token=tokens.access_token,
        expires_in=tokens.expires_in,
    )


@router.get(
    "/me",
    summary="Get current account",
    responses={
        200: {"description": "Current account"},
        401: {"description": "Not authenticated"},
    },
)
async def get_me(user: CurrentUser) -> CurrentAccountResponse:
    """Get the signed-in account with its admin flag."""
    return _current_account(user)


@router.post(
    "/sign-out",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Sign out",
    responses={
        204: {"description": "Signed out successfully"},
    },
)
async def sign_out(
    response: Response,
    settings: SettingsDep,
) -> None:
    """Sign out by clearing the refresh token cookie."""
    _clear_refresh_token_cookie(response, settings)
    logger.debug("User signed out (refresh token cookie cleared)")
