"""CRUD operations for `User` model."""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from blog_api.core.security import get_password_hash, verify_password
from blog_api.crud.base import CRUDBase, paginate
from blog_api.crud.role import crud_role
from blog_api.models.role import RoleName
from blog_api.models.user import User
from blog_api.schemas.user import UserCreate, UserProfileUpdate


class CRUDUser(CRUDBase[User, UserCreate, UserProfileUpdate]):
    def get_by_email(self, db: Session, email: Optional[str]) -> Optional[User]:
        if not email:
            return None
        stmt = select(User).where(User.email == email.strip().lower()).limit(1)
        return db.scalars(stmt).first()

    def create_user(
        self, db: Session, *, user_in: UserCreate, role_name: str = RoleName.USER.value
    ) -> User:
        """Create a user with a hashed password.

        Raises:
            sqlalchemy.exc.IntegrityError: if the email is already taken
        """
        user_data = user_in.model_dump(exclude_unset=True)
        raw_password = user_data.pop("password")
        user_data["password_hash"] = get_password_hash(raw_password)

        role = crud_role.get_by_name(db, role_name) if role_name != RoleName.USER.value else None
        role = role or crud_role.get_default(db)
        user_data["role_id"] = role.id

        return self.save(db, User(**user_data))

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(db, email)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    def list_users(self, db: Session, *, page: int, limit: int) -> Tuple[List[User], int]:
        """Users newest first, one page at a time."""
        stmt = select(User).order_by(desc(User.created_at), desc(User.id))
        return paginate(db, stmt, page=page, limit=limit)

    def update_profile(self, db: Session, *, user: User, profile_in: UserProfileUpdate) -> User:
        update_data = profile_in.model_dump(exclude_unset=True)
        # name cannot be cleared, bio/avatar can
        if update_data.get("name") is None:
            update_data.pop("name", None)
        return self.update(db, db_obj=user, obj_in=update_data)

    def set_active(self, db: Session, *, user: User, is_active: bool) -> User:
        user.is_active = is_active
        return self.save(db, user)


# Singleton instance
crud_user = CRUDUser(User)
