"""Comment model for post comments and nested replies."""

from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, Index, Boolean
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Comment(Base):
    """Comment on a post; replies point at their parent through `parent_comment_id`.

    `parent_comment_id` carries no foreign key: deleting a comment leaves its
    replies in place with a dangling parent reference.
    """

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys
    post_id = Column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    author_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    parent_comment_id = Column(Integer, nullable=True, index=True)

    # Comment Content
    text = Column(Text, nullable=False)

    # Moderation
    is_approved = Column(Boolean, nullable=False, default=True, index=True)
    is_edited = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_comment_post_created', 'post_id', 'created_at'),
        Index('idx_comment_author_created', 'author_id', 'created_at'),
    )

    # Relationships
    post = relationship("Post", back_populates="comments")
    author = relationship("User", foreign_keys=[author_id])
    likes = relationship(
        "CommentLike",
        back_populates="comment",
        cascade="all, delete-orphan"
    )
