"""Profile schemas for the signed-in user."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class ProfileResponse(BaseModel):
    """Profile of the current user."""

    user_id: UUID
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class UpdateProfileRequest(BaseModel):
    """Request schema for editing the current user's profile.

    Omitted fields keep their current value.
    """

    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    email: EmailStr | None = None
