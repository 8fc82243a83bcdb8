# ================================
# NAVIGATION SERVICE (services/navigation_service.py)
# ================================

"""
Permission-filtered sidebar navigation built from registered resources.
"""

from typing import Any, Dict, Iterable, List, Optional, Set
import logging

from fastapi import FastAPI
from starlette.routing import NoMatchFound

from resource_admin.config import Settings
from resource_admin.utils.imports import resolve_optional
from resource_admin.utils.strings import snake_case

logger = logging.getLogger(__name__)


def route_url(app: FastAPI, name: str, **params: Any) -> Optional[str]:
    """Path of a named route, None when it does not exist or needs other params"""
    try:
        return str(app.url_path_for(name, **params))
    except NoMatchFound:
        return None


def user_permissions(user: Any) -> Set[str]:
    """Permission names held by the principal; empty when it exposes none"""
    get_all = getattr(user, "get_all_permissions", None)
    if callable(get_all):
        return {
            permission if isinstance(permission, str) else getattr(permission, "name", str(permission))
            for permission in get_all()
        }
    return set()


def is_customer(user: Any, settings: Settings) -> bool:
    customer_model = resolve_optional(settings.CUSTOMER_MODEL)
    return customer_model is not None and isinstance(user, customer_model)


class NavigationService:
    """Sidebar groups for the resources the current user may list"""

    @staticmethod
    def get(user: Any, resources: Iterable[Any], app: FastAPI, settings: Settings) -> List[Dict[str, Any]]:
        if user is None or is_customer(user, settings):
            return []

        permissions = user_permissions(user)

        items: List[Dict[str, Any]] = []
        seen: Set[str] = set()

        for resource in resources:
            model = resource.get_model()
            if model is None:
                continue

            slug = resource.get_slug()
            if slug in seen:
                continue

            route_name = f"{settings.ROUTE_PREFIX}.{slug}.index"
            url = route_url(app, route_name)
            if url is None:
                logger.debug(f"Navigation skips '{slug}': route '{route_name}' not registered")
                continue

            snake = snake_case(model.__name__)
            if not (f"view_any_{snake}" in permissions
                    or f"view_any_{snake.replace('_', '::')}" in permissions):
                continue

            seen.add(slug)
            items.append({
                "name": slug,
                "label": resource.get_navigation_label(),
                "url": url,
                "icon": resource.get_navigation_icon(),
                "group": resource.get_navigation_group(),
                "sort": resource.get_navigation_sort(),
            })

        groups: Dict[str, List[Dict[str, Any]]] = {}
        for item in items:
            groups.setdefault(item["group"], []).append(item)

        result = [
            {"label": label, "items": sorted(group_items, key=lambda item: item["sort"])}
            for label, group_items in groups.items()
        ]
        result.sort(key=lambda group: group["items"][0]["sort"] if group["items"] else 999)
        return result
