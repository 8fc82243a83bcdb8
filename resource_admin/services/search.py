# ================================
# SEARCH STRATEGIES (services/search.py)
# ================================

"""
Free-text search strategies for the index pipeline.

The application holds one strategy on ``app.state.search_builder``; the default
performs no search at all.
"""

from abc import ABC, abstractmethod
from typing import Any
import logging

from fastapi import Request
from sqlalchemy import or_

from resource_admin.resources.columns import TextColumn

logger = logging.getLogger(__name__)


class SearchQueryBuilder(ABC):
    """Applies a search term to a resource query"""

    @abstractmethod
    def apply(self, query: Any, request: Request, search: str, resource: Any) -> Any:
        """Return the narrowed ResourceQuery"""


class NullSearchQueryBuilder(SearchQueryBuilder):
    def apply(self, query: Any, request: Request, search: str, resource: Any) -> Any:
        return query


class ColumnSearchQueryBuilder(SearchQueryBuilder):
    """Case-insensitive LIKE over the resource's searchable text columns, OR-combined"""

    def apply(self, query: Any, request: Request, search: str, resource: Any) -> Any:
        model = resource.model
        criteria = []
        for column in resource.get_column_objects():
            if not isinstance(column, TextColumn) or not column.is_searchable:
                continue
            attribute = getattr(model, column.key, None) if "." not in column.key else None
            if attribute is None:
                logger.debug(f"Searchable column '{column.key}' is not a model attribute, skipped")
                continue
            criteria.append(attribute.ilike(f"%{search}%"))

        if not criteria:
            return query
        return query.filter(or_(*criteria))
