"""
SQLAlchemy Models for the Blog API
"""

from ..database import Base
from .role import Role, RoleName, Permission
from .user import User
from .category import Category
from .post import Post, PostStatus
from .comment import Comment
from .comment_like import CommentLike

# Export all models
__all__ = [
    "Base",
    "Role",
    "RoleName",
    "Permission",
    "User",
    "Category",
    "Post",
    "PostStatus",
    "Comment",
    "CommentLike",
]
