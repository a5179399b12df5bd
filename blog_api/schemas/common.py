"""Response envelope and pagination shared by every endpoint."""

import math
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field


DataT = TypeVar("DataT")


class Pagination(BaseModel):
    """Page metadata; `pages` is ceil(total / limit)."""
    current: int = Field(..., ge=1, description="Current page (1-indexed)")
    pages: int = Field(..., ge=0, description="Total number of pages")
    total: int = Field(..., ge=0, description="Total number of matching items")


class FieldError(BaseModel):
    field: Optional[str] = None
    message: str


class APIResponse(BaseModel, Generic[DataT]):
    """Envelope: `{success, message?, data?, errors?, count?, pagination?}`."""
    success: bool = True
    message: Optional[str] = None
    count: Optional[int] = None
    pagination: Optional[Pagination] = None
    data: Optional[DataT] = None
    errors: Optional[List[FieldError]] = None


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    return Pagination(current=page, pages=math.ceil(total / limit) if limit else 0, total=total)


class AuthorSummary(BaseModel):
    """Author fields embedded in posts and comments."""
    id: int
    name: str
    avatar: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AuthorDetail(AuthorSummary):
    """Author fields shown on a single post."""
    bio: Optional[str] = None


class CategorySummary(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)
