# ================================
# USER MODELS (models/user.py)
# ================================

from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship
from typing import Set
from resource_admin.models.base import Base


class User(Base):
    """Admin user; permissions are granted through roles"""
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(200), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    user_roles = relationship("UserRole", back_populates="user", cascade="all, delete-orphan")
    column_preferences = relationship("UserColumnPreference", back_populates="user", cascade="all, delete-orphan")

    def get_all_permissions(self) -> Set[str]:
        """Names of all permissions granted through the user's roles"""
        return {
            role_permission.permission.name
            for user_role in self.user_roles
            for role_permission in user_role.role.role_permissions
        }

    def has_permission(self, name: str) -> bool:
        return name in self.get_all_permissions()

    def __repr__(self):
        return f"<User(email='{self.email}')>"
