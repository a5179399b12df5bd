"""Category model for grouping posts."""

import re

from sqlalchemy import Column, Integer, String, TIMESTAMP, Boolean
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, validates
from ..database import Base


_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """Lowercase, collapse non-alphanumeric runs into one hyphen, trim hyphens.

    >>> slugify("Tech Notes!!")
    'tech-notes'
    """
    return _NON_ALNUM.sub("-", name.lower()).strip("-")


class Category(Base):
    """Blog post category; the slug is derived from the name."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False, unique=True, index=True)
    slug = Column(String(60), nullable=False, unique=True, index=True)
    description = Column(String(200), nullable=True)
    is_active = Column(Boolean, default=True, index=True)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    # Relationships
    posts = relationship("Post", back_populates="category")

    @validates("name")
    def _sync_slug(self, key, value):
        # Slug follows the name on every assignment
        self.slug = slugify(value)
        return value
