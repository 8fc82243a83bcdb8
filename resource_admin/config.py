# ================================
# CONFIGURATION (config.py)
# ================================

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Dict, List
import secrets


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./resource_admin.db"
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 10

    # Security
    SECRET_KEY: str = secrets.token_urlsafe(32)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Principal models (dotted import paths)
    USER_MODEL: str = "resource_admin.models.user.User"
    USE_CUSTOMERS: bool = False
    CUSTOMER_MODEL: Optional[str] = None  # Only consulted when USE_CUSTOMERS is on

    # Optional persistence features
    COLUMN_PREFERENCE_MODEL: Optional[str] = "resource_admin.models.column_preference.UserColumnPreference"
    MENU_GROUP_MODEL: Optional[str] = "resource_admin.models.menu.MenuGroup"
    MENU_ITEM_MODEL: Optional[str] = "resource_admin.models.menu.MenuItem"

    # True: menu items without permission_name are shown to everyone
    # False: menu items without permission_name are hidden from everyone
    MENU_SHOW_ITEMS_WITHOUT_PERMISSION: bool = True

    # Modules imported at startup so their resources register themselves
    RESOURCE_MODULES: List[str] = []
    # Resources managed by an external admin (listed in navigation only)
    EXTERNAL_RESOURCE_MODULES: List[str] = []

    # Default page components, overridable per resource
    DEFAULT_PAGES: Dict[str, str] = {
        "index": "Resources/Index",
        "create": "Resources/Create",
        "edit": "Resources/Edit",
        "show": "Resources/Show",
    }

    # Routing
    ROUTE_PREFIX: str = "admin"
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = []

    # Listing / export
    PER_PAGE: int = 15
    EXPORT_CHUNK_SIZE: int = 500

    # App Settings
    APP_NAME: str = "Resource Admin"
    ASSET_VERSION: Optional[str] = None
    DEBUG: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",  # Ignore extra fields from .env
    )

    def default_page(self, name: str) -> str:
        """Default page component for index/create/edit/show"""
        return self.DEFAULT_PAGES.get(name, f"Resources/{name.title()}")


settings = Settings()
