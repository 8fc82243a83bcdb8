# ================================
# API V1 INITIALIZATION (api/v1/__init__.py)
# ================================

from fastapi import APIRouter

from resource_admin.api.v1 import column_preferences, navigation
from resource_admin.api.v1.resources import build_resource_router

# JSON endpoints mounted under API_PREFIX
v1_router = APIRouter()

v1_router.include_router(
    column_preferences.router,
    responses={
        401: {"description": "Authentication required"},
        404: {"description": "Column preferences not configured"}
    }
)

v1_router.include_router(navigation.router)

__all__ = ["v1_router", "build_resource_router"]
