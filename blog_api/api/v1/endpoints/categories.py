"""Category endpoints."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog_api.api.deps import get_db, require_role
from blog_api.core.exceptions import ConflictException, NotFoundException
from blog_api.crud import crud_category
from blog_api.models.role import RoleName
from blog_api.models.user import User
from blog_api.schemas.category import (
    CategoryCreate,
    CategoryData,
    CategoryListData,
    CategoryResponse,
    CategoryUpdate,
)
from blog_api.schemas.common import APIResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
)

DUPLICATE_CATEGORY = "Category with this name already exists"


@router.get(
    "",
    response_model=APIResponse[CategoryListData],
    status_code=status.HTTP_200_OK,
    summary="List categories",
)
def list_categories(
    db: Session = Depends(get_db),
) -> APIResponse[CategoryListData]:
    """List active categories."""
    categories = crud_category.get_all_active(db)
    return APIResponse(
        count=len(categories),
        data=CategoryListData(categories=[CategoryResponse.model_validate(c) for c in categories]),
    )


@router.get(
    "/{category_id}",
    response_model=APIResponse[CategoryData],
    status_code=status.HTTP_200_OK,
    summary="Get category",
)
def get_category(
    category_id: int,
    db: Session = Depends(get_db),
) -> APIResponse[CategoryData]:
    category = crud_category.get(db, category_id)
    if not category or not category.is_active:
        raise NotFoundException("Category")
    return APIResponse(data=CategoryData(category=CategoryResponse.model_validate(category)))


@router.post(
    "",
    response_model=APIResponse[CategoryData],
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
)
def create_category(
    category_in: CategoryCreate,
    current_user: User = Depends(require_role(RoleName.ADMIN.value)),
    db: Session = Depends(get_db),
) -> APIResponse[CategoryData]:
    """
    Create a category (admin only). The slug is derived from the name.

    Raises:
        ConflictException: 409 if the name (or its slug) is taken
    """
    if crud_category.get_by_name(db, category_in.name):
        raise ConflictException(detail=DUPLICATE_CATEGORY)

    try:
        category = crud_category.create(db, obj_in=category_in)
    except IntegrityError:
        raise ConflictException(detail=DUPLICATE_CATEGORY)

    logger.info(f"Category id={category.id} slug={category.slug} created by admin id={current_user.id}")
    return APIResponse(
        message="Category created successfully",
        data=CategoryData(category=CategoryResponse.model_validate(category)),
    )


@router.put(
    "/{category_id}",
    response_model=APIResponse[CategoryData],
    status_code=status.HTTP_200_OK,
    summary="Update category",
)
def update_category(
    category_id: int,
    category_in: CategoryUpdate,
    current_user: User = Depends(require_role(RoleName.ADMIN.value)),
    db: Session = Depends(get_db),
) -> APIResponse[CategoryData]:
    """Update a category (admin only). Renaming recomputes the slug."""
    category = crud_category.get(db, category_id)
    if not category:
        raise NotFoundException("Category")

    update_data = category_in.model_dump(exclude_unset=True)
    for field in ("name", "is_active"):
        if update_data.get(field) is None:
            update_data.pop(field, None)

    if "name" in update_data:
        existing = crud_category.get_by_name(db, update_data["name"])
        if existing and existing.id != category.id:
            raise ConflictException(detail=DUPLICATE_CATEGORY)

    try:
        category = crud_category.update(db, db_obj=category, obj_in=update_data)
    except IntegrityError:
        raise ConflictException(detail=DUPLICATE_CATEGORY)

    return APIResponse(
        message="Category updated successfully",
        data=CategoryData(category=CategoryResponse.model_validate(category)),
    )


@router.delete(
    "/{category_id}",
    response_model=APIResponse[None],
    status_code=status.HTTP_200_OK,
    summary="Delete category",
)
def delete_category(
    category_id: int,
    current_user: User = Depends(require_role(RoleName.ADMIN.value)),
    db: Session = Depends(get_db),
) -> APIResponse[None]:
    """
    Deactivate a category (admin only).

    Posts keep their category; it just stops being listed.
    """
    category = crud_category.get(db, category_id)
    if not category or not category.is_active:
        raise NotFoundException("Category")

    crud_category.delete(db, db_obj=category)
    logger.info(f"Category id={category_id} deactivated by admin id={current_user.id}")
    return APIResponse(message="Category deleted successfully")


__all__ = ["router"]
