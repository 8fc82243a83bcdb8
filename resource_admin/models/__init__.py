# ================================
# DATABASE INITIALIZATION (models/__init__.py)
# ================================

"""
Database Models Package

Imports all bundled models so Base.metadata knows every table
"""

from resource_admin.models.base import Base, SoftDeleteMixin, is_soft_deletable, delete_instance
from resource_admin.models.rbac import Permission, Role, RolePermission, UserRole
from resource_admin.models.user import User
from resource_admin.models.column_preference import UserColumnPreference
from resource_admin.models.menu import MenuGroup, MenuItem

__all__ = [
    "Base",
    "SoftDeleteMixin",
    "is_soft_deletable",
    "delete_instance",
    "Permission",
    "Role",
    "RolePermission",
    "UserRole",
    "User",
    "UserColumnPreference",
    "MenuGroup",
    "MenuItem",
]
