"""User administration schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserListItemResponse(BaseModel):
    """One row of the user list, roles joined into a single string."""

    user_id: UUID
    first_name: str | None = None
    last_name: str | None = None
    email: str
    roles: str = ""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "user_id": "550e8400-e29b-41d4-a716-446655440000",
                "first_name": "Ada",
                "last_name": "Lovelace",
                "email": "ada@example.com",
                "roles": "admin, editor",
            },
        },
    )


class UserResponse(BaseModel):
    """A single user as shown on the edit form."""

    user_id: UUID
    first_name: str | None = None
    last_name: str | None = None
    email: str

    model_config = ConfigDict(from_attributes=True)


class UpdateUserRequest(BaseModel):
    """Request schema for editing a user's names."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
