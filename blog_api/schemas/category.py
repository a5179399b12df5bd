"""Pydantic schemas for Category."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from blog_api.models.category import slugify


def _clean_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Please provide a category name")
    if not slugify(v):
        raise ValueError("Category name must contain at least one letter or digit")
    return v


class CategoryCreate(BaseModel):
    """Schema for creating a new category."""
    name: str = Field(..., min_length=1, max_length=50, description="Category name")
    description: Optional[str] = Field(None, max_length=200, description="Category description")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _clean_name(v)


class CategoryUpdate(BaseModel):
    """Schema for updating a category."""
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=200)
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _clean_name(v)


class CategoryResponse(BaseModel):
    """Schema for Category response."""
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CategoryData(BaseModel):
    category: CategoryResponse


class CategoryListData(BaseModel):
    categories: List[CategoryResponse]
