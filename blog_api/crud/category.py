"""CRUD operations for Category."""

from typing import List, Optional
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from blog_api.crud.base import CRUDBase
from blog_api.models.category import Category
from blog_api.schemas.category import CategoryCreate, CategoryUpdate


class CRUDCategory(CRUDBase[Category, CategoryCreate, CategoryUpdate]):
    """CRUD operations for Category."""

    def get_all_active(self, db: Session) -> List[Category]:
        """Get all active categories, alphabetically."""
        stmt = select(Category).where(Category.is_active == True).order_by(Category.name)
        return list(db.scalars(stmt).all())

    def get_by_name(self, db: Session, name: str) -> Optional[Category]:
        """Get category by exact name, ignoring case."""
        stmt = select(Category).where(func.lower(Category.name) == name.strip().lower()).limit(1)
        return db.scalars(stmt).first()

    def resolve(self, db: Session, ref: str) -> Optional[Category]:
        """Find a category from a reference that is either its id or its name."""
        ref = str(ref).strip()
        # isdigit() alone accepts characters such as "²" that int() rejects
        if ref.isascii() and ref.isdigit():
            category = self.get(db, int(ref))
            if category:
                return category
        return self.get_by_name(db, ref)


# Singleton instance
crud_category = CRUDCategory(Category)
