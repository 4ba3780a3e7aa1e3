"""Request and response schemas for the API."""

from userhub.presentation.api.schemas.auth import (
    AuthResponse,
    CurrentAccountResponse,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
)
from userhub.presentation.api.schemas.common import ErrorResponse, HealthResponse
from userhub.presentation.api.schemas.profile import (
    ProfileResponse,
    UpdateProfileRequest,
)
from userhub.presentation.api.schemas.users import (
    UpdateUserRequest,
    UserListItemResponse,
    UserResponse,
)

__all__ = [
    "AuthResponse",
    "CurrentAccountResponse",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "ProfileResponse",
    "RefreshRequest",
    "RegisterRequest",
    "TokenResponse",
    "UpdateProfileRequest",
    "UpdateUserRequest",
    "UserListItemResponse",
    "UserResponse",
]
