"""Post model for blog articles."""

from enum import Enum
from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, ForeignKey, Index, Boolean, JSON, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class PostStatus(str, Enum):
    """Publication states. Only PUBLISHED posts are publicly listed."""
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys
    author_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    category_id = Column(
        Integer,
        ForeignKey("categories.id"),
        nullable=False,
        index=True
    )

    # Post Content
    title = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)
    excerpt = Column(String(200))
    tags = Column(JSON, nullable=False, default=list)
    featured_image = Column(String(500), default="")

    # Metadata
    status = Column(
        SQLEnum(PostStatus, name="post_status"),
        nullable=False,
        default=PostStatus.PUBLISHED,
        index=True
    )
    view_count = Column(Integer, nullable=False, default=0)
    is_featured = Column(Boolean, default=False)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_post_status_created', 'status', 'created_at'),
        Index('idx_post_category_created', 'category_id', 'created_at'),
    )

    # Relationships
    author = relationship("User", foreign_keys=[author_id])
    category = relationship("Category", back_populates="posts")
    comments = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.created_at.asc()"
    )
