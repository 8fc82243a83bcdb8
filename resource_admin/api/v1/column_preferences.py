# ================================
# COLUMN PREFERENCES API (api/v1/column_preferences.py)
# ================================

from typing import Any, Optional
from fastapi import APIRouter, Depends

from resource_admin.core.exceptions import NotConfiguredError
from resource_admin.dependencies import get_current_user, get_preference_repository
from resource_admin.schemas.base import MessageResponse
from resource_admin.schemas.column_preferences import ColumnPreferenceResponse, ColumnPreferences
from resource_admin.services.column_preference_service import ColumnPreferenceRepository

router = APIRouter(prefix="/column-preferences", tags=["column-preferences"])


def require_repository(
    repository: Optional[ColumnPreferenceRepository] = Depends(get_preference_repository)
) -> ColumnPreferenceRepository:
    if repository is None:
        raise NotConfiguredError("Column preferences not configured")
    return repository


@router.get("/{resource_slug}", name="column_preferences.show", response_model=ColumnPreferenceResponse)
async def get_column_preferences(
    resource_slug: str,
    current_user: Any = Depends(get_current_user),
    repository: ColumnPreferenceRepository = Depends(require_repository)
):
    """Stored column order and hidden set, null when nothing is stored"""
    preferences = repository.get_preferences_for_resource(current_user, resource_slug)
    return ColumnPreferenceResponse(preferences=preferences)


@router.post("/{resource_slug}", name="column_preferences.store", response_model=ColumnPreferenceResponse)
async def save_column_preferences(
    resource_slug: str,
    preferences: ColumnPreferences,
    current_user: Any = Depends(get_current_user),
    repository: ColumnPreferenceRepository = Depends(require_repository)
):
    """Upsert the column preferences of the current user"""
    repository.save_preferences_for_resource(current_user, resource_slug, preferences.model_dump())
    stored = repository.get_preferences_for_resource(current_user, resource_slug)
    return ColumnPreferenceResponse(preferences=stored)


@router.delete("/{resource_slug}", name="column_preferences.destroy", response_model=MessageResponse)
async def reset_column_preferences(
    resource_slug: str,
    current_user: Any = Depends(get_current_user),
    repository: ColumnPreferenceRepository = Depends(require_repository)
):
    repository.delete_preferences_for_resource(current_user, resource_slug)
    return MessageResponse(message="Preferences reset successfully")
