"""User administration router."""

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from userhub.domain.user import CannotDeleteSelfError, UserKey
from userhub.presentation.api.dependencies import (
    AdminUser,
    DBSession,
    UserServiceDep,
    UserStoreDep,
)
from userhub.presentation.api.schemas.users import (
    UpdateUserRequest,
    UserListItemResponse,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _user_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="User not found",
    )


@router.get(
    "",
    summary="List all users",
    responses={
        200: {"description": "List of all users with their roles"},
        403: {"description": "Admin access required"},
    },
)
async def list_users(
    _admin: AdminUser,
    user_service: UserServiceDep,
) -> list[UserListItemResponse]:
    """List all users with their role names joined into one string."""
    users = await user_service.get_users()
    return [
        UserListItemResponse(
            user_id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            roles=", ".join(user.role_names),
        )
        for user in users
    ]


@router.get(
    "/{user_id}",
    summary="Get a user",
    responses={
        200: {"description": "User details"},
        403: {"description": "Admin access required"},
        404: {"description": "User not found"},
    },
)
async def get_user(
    user_id: UUID,
    _admin: AdminUser,
    user_service: UserServiceDep,
) -> UserResponse:
    user = await user_service.get_user(UserKey(user_id=user_id))
    if user is None:
        raise _user_not_found()
    return UserResponse.model_validate(user)


@router.put(
    "/{user_id}",
    summary="Update a user's names",
    responses={
        200: {"description": "User updated"},
        403: {"description": "Admin access required"},
        404: {"description": "User not found"},
    },
)
async def update_user(
    user_id: UUID,
    request: UpdateUserRequest,
    admin: AdminUser,
    user_service: UserServiceDep,
    session: DBSession,
) -> UserResponse:
    user = await user_service.get_user(UserKey(user_id=user_id))
    if user is None:
        raise _user_not_found()

    user.rename(request.first_name, request.last_name)
    await user_service.update_user(user)
    await session.commit()

    logger.info("Admin %s updated user: %s", admin.email, user_id)
    return UserResponse.model_validate(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
    responses={
        204: {"description": "User deleted successfully"},
        400: {"description": "Cannot delete yourself"},
        403: {"description": "Admin access required"},
        404: {"description": "User not found"},
    },
)
async def delete_user(
    user_id: UUID,
    admin: AdminUser,
    user_store: UserStoreDep,
    session: DBSession,
) -> None:
    """Delete a user and its role memberships through the identity store."""
    if user_id == admin.id:
        raise CannotDeleteSelfError

    user = await user_store.find_by_id(str(user_id))
    if user is None:
        raise _user_not_found()

    try:
        await user_store.delete(user)
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    logger.info("Admin %s deleted user: %s", admin.email, user_id)
