"""Pydantic schemas for Post."""

from datetime import datetime
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

from blog_api.models.post import PostStatus
from blog_api.schemas.common import AuthorDetail, AuthorSummary, CategorySummary


def _clean_tags(tags: Optional[List[str]]) -> Optional[List[str]]:
    if tags is None:
        return None
    return [tag.strip() for tag in tags if tag and tag.strip()]


class PostCreate(BaseModel):
    """Schema for creating a new post."""
    title: str = Field(..., min_length=5, max_length=100, description="Post title")
    content: str = Field(..., min_length=10, description="Post body")
    excerpt: Optional[str] = Field(None, max_length=200)
    category: Union[int, str] = Field(..., description="Category id or name")
    tags: List[str] = Field(default_factory=list)
    featured_image: Optional[str] = Field("", max_length=500)
    status: PostStatus = PostStatus.PUBLISHED

    @field_validator("title", "content", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: Union[int, str]) -> str:
        v = str(v).strip()
        if not v:
            raise ValueError("Category is required")
        return v

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: List[str]) -> List[str]:
        return _clean_tags(v)


class PostUpdate(BaseModel):
    """Schema for updating a post; only provided fields change."""
    title: Optional[str] = Field(None, min_length=5, max_length=100)
    content: Optional[str] = Field(None, min_length=10)
    excerpt: Optional[str] = Field(None, max_length=200)
    category: Optional[Union[int, str]] = None
    tags: Optional[List[str]] = None
    featured_image: Optional[str] = Field(None, max_length=500)
    status: Optional[PostStatus] = None

    @field_validator("title", "content", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: Optional[Union[int, str]]) -> Optional[str]:
        if v is None:
            return v
        v = str(v).strip()
        if not v:
            raise ValueError("Category cannot be empty")
        return v

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _clean_tags(v)


class PostCommentPreview(BaseModel):
    """Approved comment embedded in a post response."""
    id: int
    text: str
    author: AuthorSummary
    parent_comment_id: Optional[int] = None
    created_at: datetime


class PostResponse(BaseModel):
    """Schema for Post response."""
    id: int
    title: str
    content: str
    excerpt: Optional[str] = None
    author: AuthorSummary
    category: CategorySummary
    tags: List[str] = []
    featured_image: Optional[str] = ""
    status: PostStatus
    view_count: int
    is_featured: bool
    comments_count: int = 0
    comments: List[PostCommentPreview] = []
    created_at: datetime
    updated_at: datetime


class PostDetailResponse(PostResponse):
    """Single post; the author carries a bio."""
    author: AuthorDetail


class TrendingPostResponse(BaseModel):
    """Post entry of the trending ranking."""
    id: int
    title: str
    content: str
    excerpt: Optional[str] = None
    author: AuthorSummary
    category: CategorySummary
    tags: List[str] = []
    featured_image: Optional[str] = ""
    view_count: int
    is_featured: bool
    comments_count: int
    created_at: datetime


class CategoryInfo(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class PostData(BaseModel):
    post: PostResponse


class PostDetailData(BaseModel):
    post: PostDetailResponse


class PostListData(BaseModel):
    posts: List[PostResponse]


class PostCategoryListData(BaseModel):
    category: CategoryInfo
    posts: List[PostResponse]


class TrendingPostListData(BaseModel):
    posts: List[TrendingPostResponse]
