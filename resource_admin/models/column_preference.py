# ================================
# COLUMN PREFERENCE MODEL (models/column_preference.py)
# ================================

from sqlalchemy import Column, String, JSON, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from resource_admin.models.base import Base


class UserColumnPreference(Base):
    """Per-user column order and visibility for one resource table"""
    __tablename__ = "user_column_preferences"

    user_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    resource_slug = Column(String(100), nullable=False)

    # {"order": ["title", "status"], "hidden": ["created_at"]}
    preferences = Column(JSON, nullable=False, default=dict)

    # Relationships
    user = relationship("User", back_populates="column_preferences")

    __table_args__ = (
        UniqueConstraint('user_id', 'resource_slug', name='uq_user_column_preference'),
    )
