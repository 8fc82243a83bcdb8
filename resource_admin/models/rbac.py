# ================================
# RBAC MODELS (models/rbac.py)
# ================================

from sqlalchemy import Column, String, Text, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from resource_admin.models.base import Base


class Permission(Base):
    """Permission Model"""
    __tablename__ = "permissions"

    # e.g. 'view_any_post', 'create_post'
    name = Column(String(150), nullable=False, unique=True)
    description = Column(Text, nullable=True)

    # Relationships
    role_permissions = relationship("RolePermission", back_populates="permission", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Permission(name='{self.name}')>"


class Role(Base):
    """Role Model"""
    __tablename__ = "roles"

    name = Column(String(100), nullable=False, unique=True)
    description = Column(Text, nullable=True)

    # Relationships
    role_permissions = relationship("RolePermission", back_populates="role", cascade="all, delete-orphan")
    user_roles = relationship("UserRole", back_populates="role", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Role(name='{self.name}')>"


class RolePermission(Base):
    """Role-Permission Association"""
    __tablename__ = "role_permissions"

    role_id = Column(Uuid(as_uuid=True), ForeignKey('roles.id', ondelete='CASCADE'), nullable=False)
    permission_id = Column(Uuid(as_uuid=True), ForeignKey('permissions.id', ondelete='CASCADE'), nullable=False)

    # Relationships
    role = relationship("Role", back_populates="role_permissions")
    permission = relationship("Permission", back_populates="role_permissions")

    __table_args__ = (
        UniqueConstraint('role_id', 'permission_id', name='uq_role_permission'),
    )


class UserRole(Base):
    """User-Role Association"""
    __tablename__ = "user_roles"

    user_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    role_id = Column(Uuid(as_uuid=True), ForeignKey('roles.id', ondelete='CASCADE'), nullable=False)

    # Relationships
    user = relationship("User", back_populates="user_roles")
    role = relationship("Role", back_populates="user_roles")

    __table_args__ = (
        UniqueConstraint('user_id', 'role_id', name='uq_user_role'),
    )
