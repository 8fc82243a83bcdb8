# ================================
# RESOURCE QUERY SERVICE (services/resource_query.py)
# ================================

"""
Index query pipeline for a resource.

Phases run in a fixed order: filters, preset views, search, sort, paginate.
Filter and preset transforms receive a ``ResourceQuery`` and return one; the
wrapper tracks the soft-delete scope so the Trashed filter can widen it.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence
import logging
import math

from fastapi import Request
from sqlalchemy import false, inspect as sa_inspect
from sqlalchemy.orm import Query, Session

from resource_admin.models.base import is_soft_deletable
from resource_admin.resources.filters import CustomFilter, Filter

logger = logging.getLogger(__name__)

TRUE_STRINGS = {"1", "true", "on", "yes"}
FALSE_STRINGS = {"0", "false", "off", "no"}


# ================================
# QUERY WRAPPER
# ================================

class ResourceQuery:
    """Generative wrapper around a SQLAlchemy Query with a trashed scope"""

    WITHOUT_TRASHED = "without"
    WITH_TRASHED = "with"
    ONLY_TRASHED = "only"

    def __init__(self, query: Query, model: Any, trashed: str = WITHOUT_TRASHED,
                 loader_options: Sequence[Any] = ()):
        self.query = query
        self.model = model
        self.trashed = trashed
        self.loader_options = list(loader_options)

    def _replace(self, query: Query = None, trashed: str = None,
                 loader_options: Sequence[Any] = None) -> "ResourceQuery":
        return ResourceQuery(
            self.query if query is None else query,
            self.model,
            self.trashed if trashed is None else trashed,
            self.loader_options if loader_options is None else loader_options,
        )

    def filter(self, *criteria) -> "ResourceQuery":
        return self._replace(query=self.query.filter(*criteria))

    def filter_by(self, **kwargs) -> "ResourceQuery":
        return self._replace(query=self.query.filter_by(**kwargs))

    def where(self, name: str, value: Any) -> "ResourceQuery":
        """Equality on a model column (IN for lists); unknown names leave the query unchanged"""
        column = model_column(self.model, name)
        if column is None:
            logger.debug(f"Ignoring filter on unknown column '{name}' of {self.model.__name__}")
            return self
        if isinstance(value, (list, tuple)):
            return self.filter(column.in_([coerce_value(column, item) for item in value]))
        return self.filter(column == coerce_value(column, value))

    def join(self, *args, **kwargs) -> "ResourceQuery":
        return self._replace(query=self.query.join(*args, **kwargs))

    def outerjoin(self, *args, **kwargs) -> "ResourceQuery":
        return self._replace(query=self.query.outerjoin(*args, **kwargs))

    def order_by(self, *clauses) -> "ResourceQuery":
        return self._replace(query=self.query.order_by(*clauses))

    def options(self, *options) -> "ResourceQuery":
        """Loader options, applied when fetching records but not when plucking ids"""
        return self._replace(loader_options=self.loader_options + list(options))

    def with_trashed(self) -> "ResourceQuery":
        return self._replace(trashed=self.WITH_TRASHED)

    def only_trashed(self) -> "ResourceQuery":
        return self._replace(trashed=self.ONLY_TRASHED)

    def _scoped(self) -> Query:
        query = self.query
        if is_soft_deletable(self.model):
            if self.trashed == self.ONLY_TRASHED:
                query = query.filter(self.model.deleted_at.isnot(None))
            elif self.trashed != self.WITH_TRASHED:
                query = query.filter(self.model.deleted_at.is_(None))
        return query

    def build(self) -> Query:
        """Final Query with trashed scope and loader options applied"""
        query = self._scoped()
        if self.loader_options:
            query = query.options(*self.loader_options)
        return query

    def pluck_ids(self) -> List[Any]:
        pk = primary_key(self.model)
        return [row[0] for row in self._scoped().with_entities(pk).order_by(None).all()]

    def count(self) -> int:
        return self._scoped().order_by(None).count()

    def all(self) -> List[Any]:
        return self.build().all()

    def to_sql(self) -> Optional[str]:
        """Compiled SQL with literal binds, for debugging"""
        try:
            statement = self.build().statement
            return str(statement.compile(compile_kwargs={"literal_binds": True}))
        except Exception as e:
            logger.debug(f"Could not render SQL: {e}")
            return None


def _as_resource_query(result: Any, original: ResourceQuery) -> ResourceQuery:
    """Accept a ResourceQuery, a bare Query, or None from user callbacks"""
    if isinstance(result, ResourceQuery):
        return result
    if isinstance(result, Query):
        return original._replace(query=result)
    return original


# ================================
# MODEL HELPERS
# ================================

def primary_key(model: Any):
    return sa_inspect(model).primary_key[0]


def model_column(model: Any, name: str):
    """Mapped column attribute by name, or None"""
    mapper = sa_inspect(model)
    if name not in mapper.column_attrs:
        return None
    return getattr(model, name)


def coerce_value(column: Any, value: Any) -> Any:
    """Convert a request string to the column's Python type where possible"""
    if not isinstance(value, str):
        return value

    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return value

    if python_type is bool:
        lowered = value.strip().lower()
        if lowered in TRUE_STRINGS:
            return True
        if lowered in FALSE_STRINGS:
            return False
        return value

    if python_type in (int, float):
        try:
            return python_type(value)
        except ValueError:
            return value

    if python_type is not str:
        try:
            return python_type(value)
        except (TypeError, ValueError):
            return value

    return value


def coerce_id(model: Any, value: Any) -> Any:
    """Path id -> primary key type; raises ValueError when it cannot match any row"""
    pk = primary_key(model)
    try:
        python_type = pk.type.python_type
    except NotImplementedError:
        return value
    if isinstance(value, python_type):
        return value
    return python_type(value)


# ================================
# REQUEST HELPERS
# ================================

def request_value(request: Request, name: str, default: Any = None) -> Any:
    """Query parameter by name; repeated (name[]) parameters come back as lists"""
    params = request.query_params
    if name in params:
        return params.get(name)
    array_name = f"{name}[]"
    if array_name in params:
        return params.getlist(array_name)
    return default


def is_blank(value: Any) -> bool:
    return value is None or value == "" or value == []


# ================================
# PIPELINE
# ================================

class ResourceQueryService:
    """Runs the index pipeline for one resource class"""

    def __init__(self, resource_cls: Any, db: Session, search_builder: Any = None):
        self.resource = resource_cls
        self.db = db
        self.search_builder = search_builder

    def new_query(self) -> ResourceQuery:
        query = ResourceQuery(self.resource.base_query(self.db), self.resource.model)
        eager = self.resource.get_eager_loads()
        return query.options(*eager) if eager else query

    # Presets

    def resolve_active_presets(self, request: Request) -> List[str]:
        """presets[] (or presets) wins over the legacy single preset param"""
        params = request.query_params
        if "presets[]" in params:
            raw: Any = params.getlist("presets[]")
        elif "presets" in params:
            raw = params.getlist("presets")
        else:
            raw = params.get("preset")

        if isinstance(raw, str):
            candidates = [raw] if raw else []
        elif isinstance(raw, list):
            candidates = [key for key in raw if isinstance(key, str) and key]
        else:
            candidates = []

        active: List[str] = []
        for key in candidates:
            if self.resource.find_preset_definition(key) is None:
                logger.debug(f"Dropping unknown preset '{key}' for {self.resource.get_slug()}")
                continue
            if key not in active:
                active.append(key)
        return active

    def apply_presets(self, query: ResourceQuery, request: Request,
                      active_presets: List[str]) -> ResourceQuery:
        if not active_presets:
            return query

        if len(active_presets) == 1:
            preset = self.resource.find_preset_definition(active_presets[0])
            if preset is None:
                return query
            return _as_resource_query(preset.apply(query, request), query)

        # Several presets: union of ids, each evaluated on a fresh filtered query
        union: List[Any] = []
        seen = set()
        for key in active_presets:
            preset = self.resource.find_preset_definition(key)
            if preset is None:
                continue
            preset_query = self.apply_filters(self.new_query(), request)
            preset_query = _as_resource_query(preset.apply(preset_query, request), preset_query)
            for record_id in preset_query.pluck_ids():
                if record_id not in seen:
                    seen.add(record_id)
                    union.append(record_id)

        if not union:
            return query.filter(false())
        return query.filter(primary_key(self.resource.model).in_(union))

    # Filters

    def apply_filters(self, query: ResourceQuery, request: Request) -> ResourceQuery:
        for filter_ in self.resource.get_filter_objects():
            if isinstance(filter_, CustomFilter):
                continue

            if isinstance(filter_, Filter):
                name = filter_.name
            elif isinstance(filter_, dict) and filter_.get("type") != "custom":
                name = filter_.get("name")
            else:
                continue

            if not name:
                continue

            value = request_value(request, name)
            if is_blank(value):
                continue

            if isinstance(filter_, Filter) and filter_.has_query_callback:
                query = _as_resource_query(filter_.apply_query(query, value), query)
            else:
                query = query.where(name, value)

        return query

    def hydrate_custom_filters(self, request: Request) -> List[Dict[str, Any]]:
        """Serialized custom filters with current output values from the request"""
        hydrated = []
        for filter_ in self.resource.get_custom_filters():
            values: Dict[str, Any] = {}
            outputs = []
            for output in filter_.get("outputs", []):
                output = dict(output)
                name = output.get("name")
                if name:
                    current = request_value(request, name, output.get("default"))
                    output["value"] = current
                    values[name] = current
                outputs.append(output)
            if outputs:
                filter_["outputs"] = outputs
            filter_["values"] = values
            hydrated.append(filter_)
        return hydrated

    def collect_filter_values(self, request: Request, filters: List[Dict[str, Any]],
                              custom_filters: List[Dict[str, Any]],
                              active_presets: List[str]) -> Dict[str, Any]:
        values: Dict[str, Any] = {}

        for filter_ in filters:
            name = filter_.get("name")
            value = request_value(request, name) if name else None
            if not is_blank(value):
                values[name] = value

        for filter_ in custom_filters:
            for output in filter_.get("outputs", []):
                name = output.get("name")
                if name and not is_blank(output.get("value")):
                    values[name] = output["value"]

        if active_presets:
            values["presets"] = active_presets
        return values

    # Search & sort

    def apply_search(self, query: ResourceQuery, request: Request) -> ResourceQuery:
        search = (request.query_params.get("search") or "").strip()
        if not search or self.search_builder is None:
            return query
        return _as_resource_query(
            self.search_builder.apply(query, request, search, self.resource), query
        )

    def apply_sort(self, query: ResourceQuery, request: Request,
                   unsortable: Iterable[str] = ()) -> ResourceQuery:
        sort_column = request.query_params.get("sort_column")
        if not sort_column:
            return query

        if sort_column in set(unsortable):
            logger.info(f"Skipping sort on unsortable column '{sort_column}'")
            return query

        column = model_column(self.resource.model, sort_column)
        if column is None:
            logger.debug(f"Ignoring sort on unknown column '{sort_column}'")
            return query

        direction = (request.query_params.get("sort_direction") or "asc").lower()
        return query.order_by(column.desc() if direction == "desc" else column.asc())

    # Whole pipeline

    def build(self, request: Request, active_presets: List[str],
              for_export: bool = False) -> ResourceQuery:
        query = self.new_query()
        query = self.apply_filters(query, request)
        query = self.apply_presets(query, request, active_presets)
        query = self.apply_search(query, request)
        unsortable = self.resource.get_unsortable_columns() if for_export else ()
        return self.apply_sort(query, request, unsortable)


# ================================
# PAGINATION
# ================================

def _page_window(current: int, last: int, on_each_side: int = 3) -> List[Optional[int]]:
    """Page numbers for the link bar; None marks an elided range"""
    if last < on_each_side * 2 + 8:
        return list(range(1, last + 1))

    window = on_each_side * 2
    if current <= window:
        return list(range(1, window + 3)) + [None, last - 1, last]
    if current > last - window:
        return [1, 2, None] + list(range(last - (window + 2), last + 1))
    return (
        [1, 2, None]
        + list(range(current - on_each_side, current + on_each_side + 1))
        + [None, last - 1, last]
    )


def paginate(query: ResourceQuery, request: Request, per_page: int,
             serializer: Callable[[Any], Dict[str, Any]]) -> Dict[str, Any]:
    """
    Paginate and render a length-aware paginator payload.

    Page links keep the rest of the query string.
    """
    try:
        page = max(int(request.query_params.get("page", 1)), 1)
    except ValueError:
        page = 1

    total = query.count()
    last_page = max(math.ceil(total / per_page), 1)
    offset = (page - 1) * per_page
    records = query.build().offset(offset).limit(per_page).all()

    def page_url(number: int) -> str:
        return str(request.url.include_query_params(page=number))

    links = [{
        "url": page_url(page - 1) if page > 1 else None,
        "label": "&laquo; Previous",
        "active": False,
    }]
    for number in _page_window(page, last_page):
        if number is None:
            links.append({"url": None, "label": "...", "active": False})
        else:
            links.append({"url": page_url(number), "label": str(number), "active": number == page})
    links.append({
        "url": page_url(page + 1) if page < last_page else None,
        "label": "Next &raquo;",
        "active": False,
    })

    return {
        "current_page": page,
        "data": [serializer(record) for record in records],
        "first_page_url": page_url(1),
        "from": offset + 1 if records else None,
        "last_page": last_page,
        "last_page_url": page_url(last_page),
        "links": links,
        "next_page_url": page_url(page + 1) if page < last_page else None,
        "path": str(request.url.replace(query="")),
        "per_page": per_page,
        "prev_page_url": page_url(page - 1) if page > 1 else None,
        "to": offset + len(records) if records else None,
        "total": total,
    }
