"""Pydantic schemas for Comment."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from blog_api.schemas.common import AuthorSummary


class CommentCreate(BaseModel):
    """Schema for creating a comment or a reply."""
    text: str = Field(..., min_length=1, max_length=1000, description="Comment text")
    post: int = Field(..., gt=0, description="Post ID")
    parent_comment: Optional[int] = Field(None, gt=0, description="Parent comment ID for replies")

    @field_validator("text", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class CommentUpdate(BaseModel):
    text: str = Field(..., min_length=1, max_length=1000)

    @field_validator("text", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class CommentApproval(BaseModel):
    is_approved: bool


class ReplyResponse(BaseModel):
    """A direct reply to a comment."""
    id: int
    text: str
    author: AuthorSummary
    likes: int
    is_edited: bool
    created_at: datetime
    updated_at: datetime


class CommentResponse(BaseModel):
    """Schema for a comment with its reply tree one level deep."""
    id: int
    text: str
    author: AuthorSummary
    post: int
    parent_comment: Optional[int] = None
    likes: int
    replies_count: int = 0
    replies: List[ReplyResponse] = []
    is_approved: bool
    is_edited: bool
    created_at: datetime
    updated_at: datetime


class CommentLikeResponse(BaseModel):
    likes: int
    is_liked: bool


class CommentApprovalResponse(BaseModel):
    id: int
    is_approved: bool


class CommentData(BaseModel):
    comment: CommentResponse


class CommentListData(BaseModel):
    comments: List[CommentResponse]


class ReplyListData(BaseModel):
    replies: List[ReplyResponse]


class CommentApprovalData(BaseModel):
    comment: CommentApprovalResponse
