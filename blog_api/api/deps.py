"""FastAPI dependency injection functions for authentication, authorization and database access."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Depends, Query, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from blog_api.core.exceptions import ForbiddenException, NotFoundException, UnauthenticatedException
from blog_api.core.security import get_token_subject
from blog_api.crud import crud_user
from blog_api.crud.base import CRUDBase
from blog_api.database import get_db
from blog_api.models.user import User

logger = logging.getLogger(__name__)

# OAuth2 Bearer token scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def _resolve_principal(db: Session, token: Optional[str]) -> Optional[User]:
    """Map a bearer token to an active user, or None for any failure."""
    if not token:
        return None

    user_id = get_token_subject(token)
    if user_id is None:
        logger.warning("[AUTH] Token rejected (invalid, expired or without subject)")
        return None

    user = crud_user.get(db, user_id)
    if user is None:
        logger.warning(f"[AUTH] No user for token subject {user_id}")
        return None
    if not user.is_active:
        logger.warning(f"[AUTH] Deactivated user id={user_id} presented a token")
        return None

    return user


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Dependency to get the current authenticated, active user from the JWT token.

    Missing, malformed, expired or revoked credentials all produce the same
    401 so a caller learns nothing about why.

    Raises:
        UnauthenticatedException: 401 on any failure
    """
    user = _resolve_principal(db, token)
    if user is None:
        raise UnauthenticatedException()

    logger.debug(f"[AUTH] User authenticated: id={user.id}, role={user.role_name}")
    return user


def get_optional_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """
    Dependency to optionally get current authenticated user.
    Returns None if no valid token provided.

    Useful for public endpoints that show more to owners and admins.
    """
    return _resolve_principal(db, token)


def require_role(*allowed_roles: str) -> Callable:
    """
    Factory function to create role-based access control dependency.

    Args:
        *allowed_roles: Role names allowed to access the endpoint

    Raises:
        ForbiddenException: 403 if user role not in allowed_roles

    Example:
        @router.get("/users")
        def list_users(current_user: User = Depends(require_role("admin"))):
            ...
    """
    def role_checker(
        current_user: User = Depends(get_current_user)
    ) -> User:
        if current_user.role_name not in allowed_roles:
            logger.info(f"[AUTH] user id={current_user.id} with role {current_user.role_name} denied")
            raise ForbiddenException(
                detail=f"User role {current_user.role_name} is not authorized to access this route"
            )
        return current_user

    return role_checker


def require_owner(crud: CRUDBase, *, id_param: str, label: str) -> Callable:
    """
    Factory for the ownership guard.

    Loads the resource named by the `id_param` path parameter exactly once and
    returns it, so the handler works on the same object instead of fetching
    it again. Admins pass for every resource; other users only for resources
    whose `author_id` is their own id.

    Raises:
        NotFoundException: 404 if the resource does not exist
        ForbiddenException: 403 if the principal is neither author nor admin
    """
    def owner_checker(
        request: Request,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
    ):
        try:
            resource_id = int(request.path_params[id_param])
        except (KeyError, TypeError, ValueError):
            raise NotFoundException(label)

        resource = crud.get(db, resource_id)
        if resource is None:
            raise NotFoundException(label)

        if resource.author_id != current_user.id and not current_user.is_admin:
            logger.info(f"[AUTH] user id={current_user.id} is not the owner of {label} id={resource_id}")
            raise ForbiddenException(detail=f"Not authorized to modify this {label.lower()}")

        return resource

    return owner_checker


@dataclass
class PageParams:
    page: int
    limit: int


def get_page_params(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
) -> PageParams:
    return PageParams(page=page, limit=limit)


__all__ = [
    "oauth2_scheme",
    "get_db",
    "get_current_user",
    "get_optional_current_user",
    "require_role",
    "require_owner",
    "PageParams",
    "get_page_params",
]
