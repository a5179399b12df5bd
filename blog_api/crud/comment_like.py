"""CRUD operations for CommentLike."""

from typing import Optional, Tuple
from sqlalchemy import select, and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog_api.crud.base import CRUDBase
from blog_api.crud.comment import crud_comment
from blog_api.models.comment import Comment
from blog_api.models.comment_like import CommentLike


class CRUDCommentLike(CRUDBase[CommentLike, dict, dict]):
    """CRUD operations for CommentLike."""

    def toggle_like(
        self,
        db: Session,
        *,
        comment: Comment,
        user_id: int
    ) -> Tuple[bool, int]:
        """
        Toggle the user's like on a comment.

        A concurrent duplicate like trips the unique constraint and is
        reported as liked.

        Returns:
            (is_liked: bool, like_count: int)
        """
        existing_like = self.get_like(db, comment_id=comment.id, user_id=user_id)

        try:
            if existing_like:
                db.delete(existing_like)
                is_liked = False
            else:
                db.add(CommentLike(comment_id=comment.id, user_id=user_id))
                is_liked = True
            db.commit()
        except IntegrityError:
            db.rollback()
            is_liked = True
        except Exception:
            db.rollback()
            raise

        return is_liked, crud_comment.count_likes(db, comment_id=comment.id)

    def get_like(
        self,
        db: Session,
        *,
        comment_id: int,
        user_id: int
    ) -> Optional[CommentLike]:
        """Get like record if exists."""
        stmt = select(CommentLike).where(
            and_(
                CommentLike.comment_id == comment_id,
                CommentLike.user_id == user_id
            )
        )
        return db.scalars(stmt).first()


# Singleton instance
crud_comment_like = CRUDCommentLike(CommentLike)
