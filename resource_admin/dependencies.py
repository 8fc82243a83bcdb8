# ================================
# DEPENDENCIES (dependencies.py)
# ================================

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Any, Optional
import logging

from resource_admin.config import Settings
from resource_admin.core.exceptions import AuthenticationError
from resource_admin.core.security import verify_token
from resource_admin.resources.registry import ResourceRegistry
from resource_admin.services.column_preference_service import (
    ColumnPreferenceRepository,
    SQLAlchemyColumnPreferenceRepository,
)
from resource_admin.services.search import NullSearchQueryBuilder, SearchQueryBuilder
from resource_admin.utils.imports import resolve_optional

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

# ================================
# BASIC DEPENDENCIES
# ================================

def get_db(request: Request) -> Session:
    """Database session opened by the middleware"""
    return request.state.db

def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_registry(request: Request) -> ResourceRegistry:
    return request.app.state.registry

def get_request_id(request: Request) -> str:
    return getattr(request.state, 'request_id', 'unknown')

def get_search_builder(request: Request) -> SearchQueryBuilder:
    return getattr(request.app.state, 'search_builder', None) or NullSearchQueryBuilder()

def get_preference_repository(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> Optional[ColumnPreferenceRepository]:
    """Configured repository, or None when column preferences are not available"""
    factory = getattr(request.app.state, 'preference_repository_factory', None)
    if factory is not None:
        return factory(db)

    model = resolve_optional(settings.COLUMN_PREFERENCE_MODEL)
    if model is None:
        return None
    return SQLAlchemyColumnPreferenceRepository(db, model)

# ================================
# USER AUTHENTICATION DEPENDENCIES
# ================================

def _principal_model(payload: dict, settings: Settings):
    """User model, or the customer model for tokens issued to the customer guard"""
    if payload.get("guard") == "customer":
        if not settings.USE_CUSTOMERS:
            return None
        return resolve_optional(settings.CUSTOMER_MODEL)
    return resolve_optional(settings.USER_MODEL)

async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> Optional[Any]:
    """Principal from the bearer token, None when absent or invalid"""
    if credentials is None:
        return None

    payload = verify_token(credentials.credentials, settings)
    if not payload:
        return None

    principal_id = payload.get("sub")
    model = _principal_model(payload, settings)
    if not principal_id or model is None:
        return None

    try:
        principal = db.get(model, model.id.type.python_type(principal_id))
    except (TypeError, ValueError, NotImplementedError):
        logger.debug(f"Token subject '{principal_id}' is not a valid id")
        return None

    if principal is None or not getattr(principal, 'is_active', True):
        return None
    return principal

async def get_current_user(
    user: Optional[Any] = Depends(get_current_user_optional)
) -> Any:
    """Principal required; 401 otherwise"""
    if user is None:
        raise AuthenticationError("Unauthenticated")
    return user
