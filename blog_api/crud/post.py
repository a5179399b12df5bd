"""CRUD operations for Post."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import desc, func, or_, select, update
from sqlalchemy.orm import Session

from blog_api.crud.base import CRUDBase, paginate
from blog_api.models.category import Category
from blog_api.models.comment import Comment
from blog_api.models.post import Post, PostStatus
from blog_api.schemas.post import PostCreate, PostUpdate

TRENDING_LIMIT = 5


@dataclass
class PostQuery:
    """Supported post filters.

    - status: exact match; public paths always use PUBLISHED
    - category_id: exact match on the post's category
    - search: case-insensitive substring of title OR content
    """
    status: Optional[PostStatus] = PostStatus.PUBLISHED
    category_id: Optional[int] = None
    search: Optional[str] = None
    page: int = 1
    limit: int = 10


class CRUDPost(CRUDBase[Post, PostCreate, PostUpdate]):
    """CRUD operations for Post."""

    def create_post(
        self,
        db: Session,
        *,
        author_id: int,
        category: Category,
        post_in: PostCreate
    ) -> Post:
        """Create a new post in an already resolved category."""
        post = Post(
            author_id=author_id,
            category_id=category.id,
            title=post_in.title,
            content=post_in.content,
            excerpt=post_in.excerpt,
            tags=post_in.tags or [],
            featured_image=post_in.featured_image or "",
            status=post_in.status,
            view_count=0,
        )
        return self.save(db, post)

    def update_post(
        self,
        db: Session,
        *,
        post: Post,
        post_in: PostUpdate,
        category: Optional[Category] = None
    ) -> Post:
        update_data: Dict[str, Any] = post_in.model_dump(exclude_unset=True)
        update_data.pop("category", None)
        # title, content and status are required columns
        for field in ("title", "content", "status"):
            if update_data.get(field) is None:
                update_data.pop(field, None)
        if category is not None:
            update_data["category_id"] = category.id
        return self.update(db, db_obj=post, obj_in=update_data)

    def build_statement(self, query: PostQuery):
        stmt = select(Post)
        if query.status is not None:
            stmt = stmt.where(Post.status == query.status)
        if query.category_id is not None:
            stmt = stmt.where(Post.category_id == query.category_id)
        if query.search:
            stmt = stmt.where(
                or_(
                    Post.title.icontains(query.search, autoescape=True),
                    Post.content.icontains(query.search, autoescape=True),
                )
            )
        return stmt.order_by(desc(Post.created_at), desc(Post.id))

    def list_posts(self, db: Session, query: PostQuery) -> Tuple[List[Post], int]:
        """Return one page of posts matching `query` (newest first) and the total."""
        return paginate(db, self.build_statement(query), page=query.page, limit=query.limit)

    def increment_view_count(self, db: Session, *, post: Post) -> Post:
        """Add one view with a single atomic UPDATE, then reload the post."""
        try:
            db.execute(
                update(Post)
                .where(Post.id == post.id)
                .values(view_count=Post.view_count + 1)
                .execution_options(synchronize_session=False)
            )
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(post)
        return post

    def count_approved_comments(self, db: Session, *, post_id: int) -> int:
        stmt = select(func.count(Comment.id)).where(
            Comment.post_id == post_id,
            Comment.is_approved == True,
        )
        return db.scalar(stmt) or 0

    def get_approved_comments(
        self, db: Session, *, post_id: int, limit: Optional[int] = None
    ) -> List[Comment]:
        """Approved comments of a post (replies included), oldest first."""
        stmt = (
            select(Comment)
            .where(Comment.post_id == post_id, Comment.is_approved == True)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(db.scalars(stmt).all())

    def get_trending(self, db: Session, *, limit: int = TRENDING_LIMIT) -> List[Tuple[Post, int]]:
        """Rank published posts by comment count, then view count.

        Computed from scratch on every call; cost grows with posts x comments.

        Returns:
            [(post, comments_count), ...] best first, at most `limit` entries
        """
        comments_count = func.count(Comment.id).label("comments_count")
        stmt = (
            select(Post, comments_count)
            .outerjoin(Comment, Comment.post_id == Post.id)
            .where(Post.status == PostStatus.PUBLISHED)
            .group_by(Post.id)
            .order_by(desc(comments_count), desc(Post.view_count), Post.id)
            .limit(limit)
        )
        return [(post, count) for post, count in db.execute(stmt).all()]


# Singleton instance
crud_post = CRUDPost(Post)
