"""CRUD operations for Comment and its reply tree."""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from blog_api.crud.base import CRUDBase, paginate
from blog_api.models.comment import Comment
from blog_api.models.comment_like import CommentLike
from blog_api.models.post import Post

logger = logging.getLogger(__name__)


class ParentCommentNotFound(LookupError):
    """Raised when a reply names a parent that does not exist on the post."""


class CRUDComment(CRUDBase[Comment, dict, dict]):
    """CRUD operations for Comment."""

    def create_comment(
        self,
        db: Session,
        *,
        post: Post,
        author_id: int,
        text: str,
        parent_comment_id: Optional[int] = None
    ) -> Comment:
        """Create a comment, or a reply when `parent_comment_id` is given.

        The parent must already exist on the same post, so a new comment can
        never become its own ancestor.
        """
        if parent_comment_id is not None:
            parent = db.get(Comment, parent_comment_id)
            if not parent or parent.post_id != post.id:
                raise ParentCommentNotFound(parent_comment_id)

        comment = Comment(
            post_id=post.id,
            author_id=author_id,
            text=text,
            parent_comment_id=parent_comment_id,
        )
        return self.save(db, comment)

    def get_replies(
        self, db: Session, *, comment_id: int, approved_only: bool = True
    ) -> List[Comment]:
        """Direct replies of a comment, oldest first."""
        stmt = select(Comment).where(Comment.parent_comment_id == comment_id)
        if approved_only:
            stmt = stmt.where(Comment.is_approved == True)
        stmt = stmt.order_by(Comment.created_at.asc(), Comment.id.asc())
        return list(db.scalars(stmt).all())

    def get_reply_ids(self, db: Session, *, comment_id: int) -> List[int]:
        """Ids of every direct reply regardless of approval."""
        stmt = select(Comment.id).where(Comment.parent_comment_id == comment_id).order_by(Comment.id)
        return list(db.scalars(stmt).all())

    def list_top_level(
        self, db: Session, *, post_id: int, page: int, limit: int
    ) -> Tuple[List[Comment], int]:
        """Approved top-level comments of a post, newest first."""
        stmt = (
            select(Comment)
            .where(
                Comment.post_id == post_id,
                Comment.parent_comment_id.is_(None),
                Comment.is_approved == True,
            )
            .order_by(desc(Comment.created_at), desc(Comment.id))
        )
        return paginate(db, stmt, page=page, limit=limit)

    def update_text(self, db: Session, *, comment: Comment, text: str) -> Comment:
        comment.text = text
        comment.is_edited = True
        return self.save(db, comment)

    def set_approval(self, db: Session, *, comment: Comment, is_approved: bool) -> Comment:
        comment.is_approved = is_approved
        return self.save(db, comment)

    def delete_comment(self, db: Session, *, comment: Comment) -> Comment:
        """Delete one comment.

        Deleting a reply detaches it from its parent. The comment's own replies
        are kept: they still point at the deleted id and drop out of public
        reads.
        """
        orphaned = self.get_reply_ids(db, comment_id=comment.id)
        if orphaned:
            logger.info(f"Deleting comment id={comment.id} leaves replies {orphaned} without a parent")
        return self.delete(db, db_obj=comment)

    def count_likes(self, db: Session, *, comment_id: int) -> int:
        stmt = select(func.count(CommentLike.id)).where(CommentLike.comment_id == comment_id)
        return db.scalar(stmt) or 0

    def count_likes_for(self, db: Session, comment_ids: Iterable[int]) -> Dict[int, int]:
        """Like counts keyed by comment id, zero for comments without likes."""
        ids = list(comment_ids)
        if not ids:
            return {}
        stmt = (
            select(CommentLike.comment_id, func.count(CommentLike.id))
            .where(CommentLike.comment_id.in_(ids))
            .group_by(CommentLike.comment_id)
        )
        counts = {comment_id: 0 for comment_id in ids}
        counts.update({comment_id: count for comment_id, count in db.execute(stmt).all()})
        return counts


# Singleton instance
crud_comment = CRUDComment(Comment)
