"""User model"""

import enum
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from scafflow.models.base import BaseModel


class UserRole(str, enum.Enum):
    """User roles; every role except admin is an owner role"""
    ADMIN = "admin"
    SITE_ENGINEER = "site_engineer"
    ARCHITECT = "architect"
    VENDOR = "vendor"


OWNER_ROLES = (UserRole.SITE_ENGINEER, UserRole.ARCHITECT, UserRole.VENDOR)


class User(BaseModel):
    """
    User model representing application users.
    The role is fixed at signup; admins get read-only access to every project.
    """

    __tablename__ = "users"

    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        String(50), default=UserRole.SITE_ENGINEER.value, nullable=False
    )  # admin, site_engineer, architect, vendor
    avatar_url = Column(String(255), nullable=True)

    # Relationships
    projects = relationship("Project", back_populates="owner")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
