# ================================
# COLUMN PREFERENCE SERVICE (services/column_preference_service.py)
# ================================

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type
import logging

from sqlalchemy.orm import Session

from resource_admin.core.exceptions import AppException

logger = logging.getLogger(__name__)


class ColumnPreferenceRepository(ABC):
    """Per-user, per-resource column order and hidden set"""

    @abstractmethod
    def get_preferences_for_resource(self, user: Any, resource_slug: str) -> Optional[Dict[str, List[str]]]:
        """{"order": [...], "hidden": [...]} or None when nothing is stored"""

    @abstractmethod
    def save_preferences_for_resource(self, user: Any, resource_slug: str, preferences: Dict[str, List[str]]) -> None:
        """Insert or replace the stored preferences"""

    @abstractmethod
    def delete_preferences_for_resource(self, user: Any, resource_slug: str) -> None:
        """Forget the stored preferences; a no-op when there are none"""


class SQLAlchemyColumnPreferenceRepository(ColumnPreferenceRepository):
    """Repository over a model with user_id, resource_slug and a JSON preferences column"""

    def __init__(self, db: Session, model: Type):
        self.db = db
        self.model = model

    def _find(self, user: Any, resource_slug: str):
        return self.db.query(self.model).filter(
            self.model.user_id == user.id,
            self.model.resource_slug == resource_slug
        ).first()

    def get_preferences_for_resource(self, user: Any, resource_slug: str) -> Optional[Dict[str, List[str]]]:
        if user is None or getattr(user, "id", None) is None:
            return None

        preference = self._find(user, resource_slug)
        return preference.preferences if preference and preference.preferences else None

    def save_preferences_for_resource(self, user: Any, resource_slug: str, preferences: Dict[str, List[str]]) -> None:
        if user is None or getattr(user, "id", None) is None:
            return

        stored = {
            "order": list(preferences.get("order", [])),
            "hidden": list(preferences.get("hidden", [])),
        }

        try:
            preference = self._find(user, resource_slug)
            if preference is None:
                preference = self.model(user_id=user.id, resource_slug=resource_slug, preferences=stored)
                self.db.add(preference)
            else:
                preference.preferences = stored
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to save column preferences for '{resource_slug}': {e}")
            raise AppException("Failed to save column preferences", status_code=500)

        logger.info(f"Saved column preferences for user {user.id} on '{resource_slug}'")

    def delete_preferences_for_resource(self, user: Any, resource_slug: str) -> None:
        if user is None or getattr(user, "id", None) is None:
            return

        try:
            self.db.query(self.model).filter(
                self.model.user_id == user.id,
                self.model.resource_slug == resource_slug
            ).delete(synchronize_session=False)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to reset column preferences for '{resource_slug}': {e}")
            raise AppException("Failed to reset column preferences", status_code=500)

        logger.info(f"Reset column preferences for user {user.id} on '{resource_slug}'")
