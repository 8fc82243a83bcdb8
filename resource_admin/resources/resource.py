# ================================
# RESOURCE DEFINITION (resources/resource.py)
# ================================

"""
Base class for admin resources.

A resource is a pure declaration: ``table()`` and ``form()`` are re-evaluated on
every call, so they may read nothing but static configuration.

Example::

    @registry.register
    class PostResource(Resource):
        model = Post
        title = "Posts"

        @classmethod
        def table(cls):
            return {
                "columns": [TextColumn.make("title", "Title").sortable()],
                "filters": [SelectFilter.make("status", "Status")],
                "preset_views": {"drafts": {"label": "Drafts", "query": only_drafts}},
            }

        @classmethod
        def form(cls):
            return [TextField.make("title", "Title").required()]

Relationship column keys must use the snake_case attribute name of the relation
(``author.name``), and the relation must be eager loaded through
``get_eager_loads``.
"""

from typing import Any, Dict, List, Optional, Type
import logging

from sqlalchemy.orm import Session

from resource_admin.config import Settings
from resource_admin.models.base import delete_instance
from resource_admin.resources.actions import serialize_action
from resource_admin.resources.columns import serialize_column
from resource_admin.resources.fields import serialize_field
from resource_admin.resources.filters import CustomFilter, serialize_filter
from resource_admin.resources.presets import PresetView, group_presets, normalize_presets
from resource_admin.utils.imports import resolve_optional
from resource_admin.utils.strings import kebab_case, pluralize, snake_case, title_case

logger = logging.getLogger(__name__)


def apply_column_preferences(
    columns: List[Dict[str, Any]], preferences: Optional[Dict[str, Any]]
) -> List[Dict[str, Any]]:
    """
    Reorder and hide columns per stored preferences.

    Keys listed in ``order`` come first, remaining declared columns follow in
    declared order, then keys in ``hidden`` are dropped. Columns without a key
    are always kept.
    """
    if not preferences:
        return columns

    order = preferences.get("order") or []
    hidden = set(preferences.get("hidden") or [])

    if order:
        by_key = {column["key"]: column for column in columns if column.get("key")}
        ordered = [by_key.pop(key) for key in order if key in by_key]
        ordered.extend(
            column for column in columns
            if not column.get("key") or column["key"] in by_key
        )
    else:
        ordered = list(columns)

    return [
        column for column in ordered
        if not column.get("key") or column["key"] not in hidden
    ]


class Resource:
    """Declarative CRUD resource over one SQLAlchemy model"""

    model: Optional[Type] = None
    title: Optional[str] = None
    slug: Optional[str] = None

    navigation_group: Optional[str] = None
    navigation_icon: Optional[str] = None
    navigation_sort: Optional[int] = None
    navigation_label: Optional[str] = None

    # None falls back to Settings.DEFAULT_PAGES
    index_page: Optional[str] = None
    create_page: Optional[str] = None
    edit_page: Optional[str] = None
    show_page: Optional[str] = None

    # ================================
    # DECLARATIONS
    # ================================

    @classmethod
    def table(cls) -> Dict[str, Any]:
        return {}

    @classmethod
    def form(cls) -> List[Any]:
        return []

    @classmethod
    def base_query(cls, db: Session):
        return db.query(cls.model)

    @classmethod
    def get_eager_loads(cls) -> List[Any]:
        """Loader options for relationships shown in the table, e.g. [joinedload(Post.author)]"""
        return []

    # ================================
    # METADATA
    # ================================

    @classmethod
    def get_model(cls) -> Optional[Type]:
        return cls.model

    @classmethod
    def get_slug(cls) -> str:
        if cls.slug:
            return cls.slug
        if cls.model is not None:
            return kebab_case(pluralize(cls.model.__name__))
        return kebab_case(cls.__name__.replace("Resource", "") or cls.__name__)

    @classmethod
    def get_title(cls) -> str:
        if cls.title:
            return cls.title
        if cls.model is not None:
            return title_case(pluralize(snake_case(cls.model.__name__)))
        return title_case(cls.get_slug())

    @classmethod
    def get_navigation_group(cls) -> str:
        return cls.navigation_group or "Other"

    @classmethod
    def get_navigation_icon(cls) -> str:
        return cls.navigation_icon or "heroicon-o-cube"

    @classmethod
    def get_navigation_sort(cls) -> int:
        return cls.navigation_sort if cls.navigation_sort is not None else 999

    @classmethod
    def get_navigation_label(cls) -> str:
        if cls.navigation_label:
            return cls.navigation_label
        if cls.title:
            return cls.title
        if cls.model is not None:
            return pluralize(cls.model.__name__)
        return cls.get_title()

    @classmethod
    def get_index_page(cls, settings: Settings) -> str:
        return cls.index_page or settings.default_page("index")

    @classmethod
    def get_create_page(cls, settings: Settings) -> str:
        return cls.create_page or settings.default_page("create")

    @classmethod
    def get_edit_page(cls, settings: Settings) -> str:
        return cls.edit_page or settings.default_page("edit")

    @classmethod
    def get_show_page(cls, settings: Settings) -> str:
        return cls.show_page or settings.default_page("show")

    # ================================
    # TABLE ACCESSORS
    # ================================

    @classmethod
    def get_column_objects(cls) -> List[Any]:
        return list(cls.table().get("columns", []))

    @classmethod
    def get_all_columns(cls) -> List[Dict[str, Any]]:
        return [serialize_column(column) for column in cls.get_column_objects()]

    @classmethod
    def get_columns(cls, user: Any = None, preferences: Any = None) -> List[Dict[str, Any]]:
        """
        Serialized columns, personalized for the user.

        Args:
            user: Current principal or None
            preferences: ColumnPreferenceRepository or None when not configured
        """
        columns = cls.get_all_columns()

        if user is None or preferences is None:
            return columns

        stored = preferences.get_preferences_for_resource(user, cls.get_slug())
        if stored:
            columns = apply_column_preferences(columns, stored)
        return columns

    @classmethod
    def get_unsortable_columns(cls) -> List[str]:
        """Column keys never used for sorting (e.g. computed or relation columns)"""
        return []

    @classmethod
    def get_actions(cls) -> List[Dict[str, Any]]:
        return [serialize_action(action) for action in cls.table().get("actions", [])]

    @classmethod
    def get_bulk_actions(cls) -> List[Dict[str, Any]]:
        config = cls.table()
        actions = config.get("bulk_actions", config.get("bulkActions", []))
        return [serialize_action(action) for action in actions]

    @classmethod
    def get_filter_objects(cls) -> List[Any]:
        """Raw filter objects, callbacks included"""
        return list(cls.table().get("filters", []))

    @classmethod
    def get_filters(cls) -> List[Dict[str, Any]]:
        return [serialize_filter(filter_) for filter_ in cls.get_filter_objects()]

    @classmethod
    def get_custom_filter_objects(cls) -> List[CustomFilter]:
        return list(cls.table().get("custom_filters", []))

    @classmethod
    def get_custom_filters(cls) -> List[Dict[str, Any]]:
        return [serialize_filter(filter_) for filter_ in cls.get_custom_filter_objects()]

    # ================================
    # PRESET VIEWS
    # ================================

    @classmethod
    def get_preset_view_definitions(cls) -> Dict[str, PresetView]:
        return normalize_presets(cls.table().get("preset_views"))

    @classmethod
    def get_preset_views(cls) -> List[Dict[str, Any]]:
        return group_presets(cls.get_preset_view_definitions())

    @classmethod
    def find_preset_definition(cls, key: Optional[str]) -> Optional[PresetView]:
        if not key:
            return None
        return cls.get_preset_view_definitions().get(key)

    # ================================
    # FORM ACCESSORS
    # ================================

    @classmethod
    def get_form_field_objects(cls) -> List[Any]:
        return list(cls.form())

    @classmethod
    def get_form_fields(cls) -> List[Dict[str, Any]]:
        return [serialize_field(field) for field in cls.get_form_field_objects()]

    @classmethod
    def get_validation_rules(cls) -> Dict[str, List[str]]:
        return {
            field["name"]: field["rules"]
            for field in cls.get_form_fields()
            if field.get("rules")
        }

    # ================================
    # HOOKS
    # ================================

    @classmethod
    def handle_bulk_action(cls, action: str, records: List[Any], db: Session) -> None:
        """Built-in "delete"; other actions are handled by overriding this"""
        if action == "delete":
            for record in records:
                delete_instance(db, record)
        else:
            logger.debug(f"Bulk action '{action}' has no handler on {cls.__name__}")

    @classmethod
    def get_tab_data(cls, record: Any, tab: str, db: Session) -> Dict[str, Any]:
        """Extra data for a tab on the show page"""
        return {}

    @classmethod
    def can_view_in_navigation(cls, user: Any, settings: Settings) -> bool:
        if user is None or not callable(getattr(user, "has_permission", None)):
            return False

        customer_model = resolve_optional(settings.CUSTOMER_MODEL)
        if customer_model is not None and isinstance(user, customer_model):
            return False

        if cls.model is None:
            return True

        return bool(user.has_permission(f"view_any_{snake_case(cls.model.__name__)}"))

    def __repr__(self):
        return f"<{type(self).__name__}(slug='{self.get_slug()}')>"
