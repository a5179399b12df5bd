"""User endpoints."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from blog_api.api.deps import (
    PageParams,
    get_current_user,
    get_db,
    get_page_params,
    require_role,
)
from blog_api.core.exceptions import NotFoundException
from blog_api.crud import crud_user
from blog_api.models.role import RoleName
from blog_api.models.user import User
from blog_api.schemas.common import APIResponse, build_pagination
from blog_api.schemas.user import (
    UserData,
    UserListData,
    UserProfileUpdate,
    UserResponse,
    UserStatusData,
    UserStatusResponse,
    UserStatusUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


@router.get(
    "/me",
    response_model=APIResponse[UserData],
    status_code=status.HTTP_200_OK,
    summary="Get current user profile",
)
def get_profile(
    current_user: User = Depends(get_current_user),
) -> APIResponse[UserData]:
    return APIResponse(data=UserData(user=UserResponse.model_validate(current_user)))


@router.put(
    "/me",
    response_model=APIResponse[UserData],
    status_code=status.HTTP_200_OK,
    summary="Update current user profile",
)
def update_profile(
    profile_in: UserProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> APIResponse[UserData]:
    """
    Update name, bio or avatar of the current user.

    Email, password, role and active flag cannot be changed here.
    """
    user = crud_user.update_profile(db, user=current_user, profile_in=profile_in)
    logger.info(f"Profile updated for user_id={user.id}")
    return APIResponse(
        message="Profile updated successfully",
        data=UserData(user=UserResponse.model_validate(user)),
    )


@router.get(
    "",
    response_model=APIResponse[UserListData],
    status_code=status.HTTP_200_OK,
    summary="List all users",
)
def list_users(
    page_params: PageParams = Depends(get_page_params),
    current_user: User = Depends(require_role(RoleName.ADMIN.value)),
    db: Session = Depends(get_db),
) -> APIResponse[UserListData]:
    """Get all users, newest first (admin only)."""
    users, total = crud_user.list_users(db, page=page_params.page, limit=page_params.limit)
    return APIResponse(
        count=len(users),
        pagination=build_pagination(page_params.page, page_params.limit, total),
        data=UserListData(users=[UserResponse.model_validate(user) for user in users]),
    )


@router.get(
    "/{user_id}",
    response_model=APIResponse[UserData],
    status_code=status.HTTP_200_OK,
    summary="Get user by ID",
)
def get_user(
    user_id: int,
    current_user: User = Depends(require_role(RoleName.ADMIN.value)),
    db: Session = Depends(get_db),
) -> APIResponse[UserData]:
    """Get a single user (admin only)."""
    user = crud_user.get(db, user_id)
    if not user:
        raise NotFoundException("User")
    return APIResponse(data=UserData(user=UserResponse.model_validate(user)))


@router.patch(
    "/{user_id}/status",
    response_model=APIResponse[UserStatusData],
    status_code=status.HTTP_200_OK,
    summary="Activate or deactivate user",
)
def update_user_status(
    user_id: int,
    status_in: UserStatusUpdate,
    current_user: User = Depends(require_role(RoleName.ADMIN.value)),
    db: Session = Depends(get_db),
) -> APIResponse[UserStatusData]:
    """
    Toggle a user's active flag (admin only).

    Deactivated users cannot log in and their existing tokens stop working.
    """
    user = crud_user.get(db, user_id)
    if not user:
        raise NotFoundException("User")

    user = crud_user.set_active(db, user=user, is_active=status_in.is_active)
    state = "activated" if user.is_active else "deactivated"
    logger.info(f"User id={user.id} {state} by admin id={current_user.id}")
    return APIResponse(
        message=f"User {state} successfully",
        data=UserStatusData(user=UserStatusResponse.model_validate(user)),
    )


__all__ = ["router"]
