"""CRUD operations package - exports singleton instances for all models."""

from .base import CRUDBase, paginate
from .role import crud_role
from .user import crud_user
from .category import crud_category
from .post import crud_post, PostQuery
from .comment import crud_comment, ParentCommentNotFound
from .comment_like import crud_comment_like


__all__ = [
    # Base
    "CRUDBase",
    "paginate",
    # CRUD instances
    "crud_role",
    "crud_user",
    "crud_category",
    "crud_post",
    "crud_comment",
    "crud_comment_like",
    # Query helpers
    "PostQuery",
    "ParentCommentNotFound",
]
