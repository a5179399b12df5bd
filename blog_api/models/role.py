"""Role model: reference data for authorization."""

from enum import Enum
from sqlalchemy import Column, Integer, String, TIMESTAMP, JSON, CheckConstraint
from sqlalchemy.sql import func
from ..database import Base


class RoleName(str, Enum):
    """Role names a user can hold."""
    USER = "user"
    ADMIN = "admin"


class Permission(str, Enum):
    READ = "read"
    WRITE = "write"
    DELETE = "delete"
    ADMIN = "admin"


DEFAULT_ROLES = {
    RoleName.USER: {
        "description": "Regular user with basic permissions",
        "permissions": [Permission.READ.value, Permission.WRITE.value],
    },
    RoleName.ADMIN: {
        "description": "Administrator with full permissions",
        "permissions": [p.value for p in Permission],
    },
}


class Role(Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(20), nullable=False, unique=True, index=True, default=RoleName.USER.value)
    description = Column(String(255), nullable=False)
    permissions = Column(JSON, nullable=False, default=list)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("name IN ('user', 'admin')", name="check_role_name"),
    )
