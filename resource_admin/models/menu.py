# ================================
# MENU MODELS (models/menu.py)
# ================================

from sqlalchemy import Column, String, Boolean, Integer, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from resource_admin.models.base import Base


class MenuGroup(Base):
    """Top-level navigation section"""
    __tablename__ = "menu_groups"

    key = Column(String(100), nullable=False, unique=True)
    label = Column(String(150), nullable=False)
    icon = Column(String(100), nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    menu_items = relationship(
        "MenuItem",
        back_populates="menu_group",
        cascade="all, delete-orphan",
        order_by="MenuItem.sort_order"
    )

    def __repr__(self):
        return f"<MenuGroup(key='{self.key}')>"


class MenuItem(Base):
    """Navigation entry; parent_id nests items under other items"""
    __tablename__ = "menu_items"

    menu_group_id = Column(Uuid(as_uuid=True), ForeignKey('menu_groups.id', ondelete='CASCADE'), nullable=False)
    parent_id = Column(Uuid(as_uuid=True), ForeignKey('menu_items.id', ondelete='CASCADE'), nullable=True)

    key = Column(String(100), nullable=False)
    label = Column(String(150), nullable=False)
    icon = Column(String(100), nullable=True)

    # Named route wins over the literal url when it resolves
    route = Column(String(200), nullable=True)
    url = Column(String(500), nullable=True)

    # NULL: governed by MENU_SHOW_ITEMS_WITHOUT_PERMISSION
    permission_name = Column(String(150), nullable=True)

    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    menu_group = relationship("MenuGroup", back_populates="menu_items")
    parent = relationship("MenuItem", remote_side="MenuItem.id", back_populates="children")
    children = relationship("MenuItem", back_populates="parent", order_by="MenuItem.sort_order")

    def __repr__(self):
        return f"<MenuItem(key='{self.key}')>"
