"""Authentication schemas for request/response models."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegisterRequest(BaseModel):
    """Request schema for user registration."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(
        ...,
        min_length=8,
        max_length=72,
        description="Password (8-72 characters, at most 72 bytes as UTF-8)",
    )
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "securepassword123",
                "first_name": "Ada",
                "last_name": "Lovelace",
            },
        },
    )


class LoginRequest(BaseModel):
    """Request schema for user login."""

    email: EmailStr
    password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "securepassword123",
            },
        },
    )


class RefreshRequest(BaseModel):
    """Request schema for token refresh.

    The refresh_token field is optional - if not provided in the request body,
    the server will read it from the HttpOnly cookie instead.
    """

    refresh_token: str | None = Field(
        default=None,
        description="Refresh token (optional - can also be sent via HttpOnly cookie)",
    )


class CurrentAccountResponse(BaseModel):
    """The signed-in account as shown in page headers."""

    user_id: UUID
    first_name: str | None = None
    last_name: str | None = None
    is_authenticated: bool = True
    is_admin: bool = False


class TokenResponse(BaseModel):
    """Response schema for token data.

    The refresh token is only sent as an HttpOnly cookie.
    """

    access_token: str
    token_type: str = Field(default="bearer")
    expires_in: int


class AuthResponse(TokenResponse):
    """Response schema for register and login."""

    user: CurrentAccountResponse
