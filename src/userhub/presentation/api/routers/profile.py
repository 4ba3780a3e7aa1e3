"""Profile router for the signed-in user."""

import logging

from fastapi import APIRouter, HTTPException, status

from userhub.domain.user import EmailAlreadyExistsError
from userhub.presentation.api.dependencies import (
    AuthService,
    CurrentUser,
    DBSession,
    UserStoreDep,
)
from userhub.presentation.api.schemas.profile import (
    ProfileResponse,
    UpdateProfileRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    summary="Get own profile",
    responses={
        200: {"description": "Profile of the current user"},
        401: {"description": "Not authenticated"},
    },
)
async def get_profile(user: CurrentUser) -> ProfileResponse:
    return ProfileResponse.model_validate(user)


@router.put(
    "",
    summary="Update own profile",
    responses={
        200: {"description": "Profile updated"},
        401: {"description": "Not authenticated"},
        409: {"description": "Email already registered"},
    },
)
async def update_profile(
    request: UpdateProfileRequest,
    user: CurrentUser,
    user_store: UserStoreDep,
    auth_service: AuthService,
    session: DBSession,
) -> ProfileResponse:
    """
    Update the current user's names and email.

    A new email becomes the login name, so it is stored normalized.
    """
    fields = request.model_dump(exclude_unset=True, exclude={"email"})
    user.rename(
        fields.get("first_name", user.first_name),
        fields.get("last_name", user.last_name),
    )

    if request.email is not None:
        normalized_email = auth_service.normalize_name(request.email)
        if normalized_email != user.email:
            existing = await user_store.find_by_name(normalized_email)
            if existing is not None:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="Email address is already registered",
                )
            await user_store.set_normalized_user_name(user, normalized_email)

    try:
        await user_store.update(user)
        await session.commit()
    except EmailAlreadyExistsError:
        await session.rollback()
        raise

    logger.info("Profile updated for user: %s", user.id)
    return ProfileResponse.model_validate(user)
