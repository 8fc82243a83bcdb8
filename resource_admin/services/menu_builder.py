# ================================
# MENU BUILDER (services/menu_builder.py)
# ================================

"""
Database-backed sidebar menu: MenuGroup -> MenuItem -> children.

Nesting is rendered up to three levels. Items carrying a permission_name are
shown only to users holding it; items without one follow
MENU_SHOW_ITEMS_WITHOUT_PERMISSION.
"""

from typing import Any, Dict, Iterable, List, Set
import logging

from fastapi import FastAPI
from sqlalchemy.orm import Session

from resource_admin.config import Settings
from resource_admin.services.navigation_service import route_url, user_permissions
from resource_admin.utils.imports import resolve_optional

logger = logging.getLogger(__name__)

MAX_DEPTH = 3


class MenuBuilder:

    def __init__(self, db: Session, app: FastAPI, settings: Settings):
        self.db = db
        self.app = app
        self.settings = settings

    def build(self, user: Any) -> List[Dict[str, Any]]:
        group_model = resolve_optional(self.settings.MENU_GROUP_MODEL)
        item_model = resolve_optional(self.settings.MENU_ITEM_MODEL)
        if group_model is None or item_model is None:
            logger.debug("Menu models not configured, menu is empty")
            return []

        if user is None:
            return []

        permissions = user_permissions(user)

        groups = self.db.query(group_model).filter(
            group_model.is_active == True
        ).order_by(group_model.sort_order).all()

        menu = []
        for group in groups:
            top_level = self.db.query(item_model).filter(
                item_model.menu_group_id == group.id,
                item_model.parent_id.is_(None),
                item_model.is_active == True
            ).order_by(item_model.sort_order).all()

            items = self._build_items(top_level, permissions, depth=1)
            if items:
                menu.append({
                    "key": group.key,
                    "label": group.label,
                    "icon": group.icon,
                    "items": items,
                })
        return menu

    def _is_allowed(self, item: Any, permissions: Set[str]) -> bool:
        if item.permission_name:
            return item.permission_name in permissions
        return self.settings.MENU_SHOW_ITEMS_WITHOUT_PERMISSION

    def _url(self, item: Any) -> str:
        if item.route:
            url = route_url(self.app, item.route)
            if url is not None:
                return url
        return item.url or "#"

    def _build_items(self, items: Iterable[Any], permissions: Set[str], depth: int) -> List[Dict[str, Any]]:
        result = []
        seen: Set[str] = set()

        for item in items:
            if item.key in seen or not self._is_allowed(item, permissions):
                continue
            seen.add(item.key)

            entry: Dict[str, Any] = {
                "key": item.key,
                "label": item.label,
                "icon": item.icon,
                "url": self._url(item),
            }

            if depth < MAX_DEPTH:
                children = sorted(
                    (child for child in item.children if child.is_active),
                    key=lambda child: child.sort_order
                )
                if children:
                    entry["children"] = self._build_items(children, permissions, depth + 1)

            result.append(entry)
        return result
