from sqlalchemy import Column, Integer, String, Text, Boolean, TIMESTAMP, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base
from .role import RoleName


class User(Base):
    __tablename__ = "users"

    # Primary Key
    id = Column(Integer, primary_key=True, index=True)

    # Authentication
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(50), nullable=False)

    # Role & Authorization
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False, index=True)

    # Profile
    bio = Column(Text)
    avatar = Column(String(500), default="")

    # Account Status
    is_active = Column(Boolean, default=True, index=True)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    # Relationships
    role = relationship("Role", lazy="joined")

    @property
    def role_name(self) -> str:
        return self.role.name if self.role else RoleName.USER.value

    @property
    def permissions(self) -> list:
        return list(self.role.permissions or []) if self.role else []

    @property
    def is_admin(self) -> bool:
        return self.role_name == RoleName.ADMIN.value
