# ================================
# NAVIGATION API (api/v1/navigation.py)
# ================================

from typing import Any, Optional
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from resource_admin.config import Settings
from resource_admin.dependencies import get_current_user_optional, get_db, get_registry, get_settings
from resource_admin.resources.registry import ResourceRegistry
from resource_admin.services.menu_builder import MenuBuilder
from resource_admin.services.navigation_service import NavigationService

router = APIRouter(tags=["navigation"])


@router.get("/navigation", name="navigation.index")
async def get_navigation(
    request: Request,
    current_user: Optional[Any] = Depends(get_current_user_optional),
    registry: ResourceRegistry = Depends(get_registry),
    settings: Settings = Depends(get_settings)
):
    """Resource navigation grouped for the sidebar"""
    resources = registry.all()
    external = getattr(request.app.state, "external_registry", None)
    if external is not None:
        resources += external.all()

    return {"navigation": NavigationService.get(current_user, resources, request.app, settings)}


@router.get("/menu", name="menu.index")
async def get_menu(
    request: Request,
    current_user: Optional[Any] = Depends(get_current_user_optional),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Database-backed menu tree"""
    return {"menu": MenuBuilder(db, request.app, settings).build(current_user)}
