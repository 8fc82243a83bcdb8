# ================================
# BASE MODEL (models/base.py)
# ================================

from sqlalchemy import Column, DateTime, Uuid, func
from sqlalchemy.orm import as_declarative, declared_attr
from datetime import datetime, timezone
import uuid


@as_declarative()
class Base:
    """Base model with shared columns"""

    # Table names derived from class names
    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower() + "s"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class SoftDeleteMixin:
    """Soft delete support: rows with deleted_at are hidden by default"""

    @declared_attr
    def deleted_at(cls):
        return Column(DateTime(timezone=True), nullable=True, index=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        self.deleted_at = datetime.now(timezone.utc)

    def restore(self) -> None:
        self.deleted_at = None


def is_soft_deletable(model) -> bool:
    """True for models (or instances) carrying the soft delete mixin"""
    cls = model if isinstance(model, type) else type(model)
    return issubclass(cls, SoftDeleteMixin)


def delete_instance(db, instance) -> None:
    """Soft delete when supported, hard delete otherwise"""
    if is_soft_deletable(instance):
        instance.soft_delete()
    else:
        db.delete(instance)
