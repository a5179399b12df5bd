"""CRUD operations for Role."""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from blog_api.crud.base import CRUDBase
from blog_api.models.role import DEFAULT_ROLES, Role, RoleName

logger = logging.getLogger(__name__)


class CRUDRole(CRUDBase[Role, dict, dict]):
    def get_by_name(self, db: Session, name: str) -> Optional[Role]:
        stmt = select(Role).where(Role.name == name).limit(1)
        return db.scalars(stmt).first()

    def ensure_defaults(self, db: Session) -> List[Role]:
        """Create the `user` and `admin` roles when they are missing."""
        roles = []
        for role_name, attrs in DEFAULT_ROLES.items():
            role = self.get_by_name(db, role_name.value)
            if role is None:
                role = self.create(db, obj_in={"name": role_name.value, **attrs})
                logger.info(f"Created default role '{role.name}'")
            roles.append(role)
        return roles

    def get_default(self, db: Session) -> Role:
        """Role given to newly registered users."""
        role = self.get_by_name(db, RoleName.USER.value)
        if role is None:
            role = self.ensure_defaults(db)[0]
        return role


# Singleton instance
crud_role = CRUDRole(Role)
