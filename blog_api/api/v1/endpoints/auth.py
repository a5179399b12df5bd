"""Authentication endpoints."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog_api.api.deps import get_current_user, get_db
from blog_api.core.exceptions import ConflictException, InvalidCredentialsException
from blog_api.core.security import create_user_token
from blog_api.crud import crud_user
from blog_api.models.user import User
from blog_api.schemas.common import APIResponse
from blog_api.schemas.user import (
    AuthData,
    UserCreate,
    UserData,
    UserLogin,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
)


@router.post(
    "/register",
    response_model=APIResponse[AuthData],
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
)
def register(
    user_in: UserCreate,
    db: Session = Depends(get_db),
) -> APIResponse[AuthData]:
    """
    Register a new user with the default `user` role.

    Args:
        user_in: name, email and password
        db: Database session

    Returns:
        Created user and an access token

    Raises:
        ConflictException: 409 if email already registered
    """
    if crud_user.get_by_email(db, user_in.email):
        raise ConflictException(detail="User already exists with this email")

    try:
        db_user = crud_user.create_user(db, user_in=user_in)
    except IntegrityError:
        # Lost a race with another registration for the same email
        raise ConflictException(detail="User already exists with this email")

    logger.info(f"Registered user id={db_user.id}")
    return APIResponse(
        message="User registered successfully",
        data=AuthData(
            user=UserResponse.model_validate(db_user),
            token=create_user_token(db_user.id),
        ),
    )


@router.post(
    "/login",
    response_model=APIResponse[AuthData],
    status_code=status.HTTP_200_OK,
    summary="Login user",
)
def login(
    login_data: UserLogin,
    db: Session = Depends(get_db),
) -> APIResponse[AuthData]:
    """
    Login with email and password.

    Raises:
        InvalidCredentialsException: 401 if credentials invalid or account inactive
    """
    user = crud_user.authenticate(db, email=login_data.email, password=login_data.password)

    if not user:
        raise InvalidCredentialsException()

    if not user.is_active:
        raise InvalidCredentialsException(detail="User account is inactive")

    return APIResponse(
        message="Login successful",
        data=AuthData(
            user=UserResponse.model_validate(user),
            token=create_user_token(user.id),
        ),
    )


@router.get(
    "/me",
    response_model=APIResponse[UserData],
    status_code=status.HTTP_200_OK,
    summary="Get current user info",
)
def get_me(
    current_user: User = Depends(get_current_user),
) -> APIResponse[UserData]:
    """Get current authenticated user information."""
    return APIResponse(data=UserData(user=UserResponse.model_validate(current_user)))


__all__ = ["router"]
