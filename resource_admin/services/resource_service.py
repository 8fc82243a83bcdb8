# ================================
# RESOURCE SERVICE (services/resource_service.py)
# ================================

"""
Page payloads and writes for one resource.

The service builds the props of each Inertia page and performs
store / update / destroy / bulk writes; the router turns them into responses.
"""

from typing import Any, Dict, List, Optional
import logging

from fastapi import Request
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Session

from resource_admin.config import Settings
from resource_admin.core.exceptions import AppException, NotFoundError
from resource_admin.models.base import delete_instance, is_soft_deletable
from resource_admin.services.resource_query import ResourceQueryService, coerce_id, paginate, primary_key
from resource_admin.services.serialization import serialize_record
from resource_admin.services.validation import validate_payload

logger = logging.getLogger(__name__)


class ResourceService:
    """CRUD operations of one resource class"""

    def __init__(
        self,
        resource_cls: Any,
        db: Session,
        settings: Settings,
        search_builder: Any = None,
        preferences: Any = None,
    ):
        self.resource = resource_cls
        self.db = db
        self.settings = settings
        self.preferences = preferences
        self.queries = ResourceQueryService(resource_cls, db, search_builder)

    # ================================
    # READ PAGES
    # ================================

    def index_props(self, request: Request, user: Any = None) -> Dict[str, Any]:
        """Props of the index page, pipeline phases in fixed order"""
        resource = self.resource
        filters = resource.get_filters()
        active_presets = self.queries.resolve_active_presets(request)

        query = self.queries.build(request, active_presets)

        custom_filters = self.queries.hydrate_custom_filters(request)
        filter_values = self.queries.collect_filter_values(
            request, filters, custom_filters, active_presets
        )

        raw_sql = query.to_sql() if self.settings.DEBUG else None

        props = {
            "data": paginate(query, request, self.settings.PER_PAGE, serialize_record),
            "columns": resource.get_columns(user, self.preferences),
            "allColumns": resource.get_columns(None),
            "filters": filters,
            "customFilters": custom_filters,
            "filterValues": filter_values,
            "actions": resource.get_actions(),
            "bulkActions": resource.get_bulk_actions(),
            "presetViews": resource.get_preset_views(),
            "activePresets": active_presets,
            "resourceSlug": resource.get_slug(),
            "title": resource.get_title(),
        }
        if raw_sql is not None:
            props["rawSql"] = raw_sql
        return props

    def create_props(self) -> Dict[str, Any]:
        return {
            "fields": self.resource.get_form_fields(),
            "resourceSlug": self.resource.get_slug(),
            "title": self.resource.get_title(),
        }

    def show_props(self, record_id: Any, current_tab: Optional[str] = None) -> Dict[str, Any]:
        record = self.get_record(record_id, with_trashed=True)
        current_tab = current_tab or "overview"
        return {
            "item": serialize_record(record),
            "fields": self.resource.get_form_fields(),
            "resourceSlug": self.resource.get_slug(),
            "title": self.resource.get_title(),
            "current_tab": current_tab,
            "tab_data": self.resource.get_tab_data(record, current_tab, self.db) or {},
        }

    def edit_props(self, record_id: Any) -> Dict[str, Any]:
        record = self.get_record(record_id)
        return {
            "item": serialize_record(record),
            "fields": self.resource.get_form_fields(),
            "resourceSlug": self.resource.get_slug(),
            "title": self.resource.get_title(),
        }

    # ================================
    # LOOKUP
    # ================================

    def get_record(self, record_id: Any, with_trashed: bool = False) -> Any:
        """Record by primary key; soft-deleted rows only when with_trashed"""
        model = self.resource.model
        try:
            record_id = coerce_id(model, record_id)
        except (TypeError, ValueError):
            raise NotFoundError(f"{self.resource.get_title()} record not found")

        query = self.db.query(model).filter(primary_key(model) == record_id)
        if is_soft_deletable(model) and not with_trashed:
            query = query.filter(model.deleted_at.is_(None))

        record = query.first()
        if record is None:
            raise NotFoundError(f"{self.resource.get_title()} record not found")
        return record

    def get_records(self, record_ids: List[Any]) -> List[Any]:
        model = self.resource.model
        ids = []
        for record_id in record_ids:
            try:
                ids.append(coerce_id(model, record_id))
            except (TypeError, ValueError):
                logger.debug(f"Skipping invalid id '{record_id}' for {self.resource.get_slug()}")
        if not ids:
            return []

        query = self.db.query(model).filter(primary_key(model).in_(ids))
        if is_soft_deletable(model):
            query = query.filter(model.deleted_at.is_(None))
        return query.all()

    # ================================
    # WRITES
    # ================================

    def _writable(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Keep values that map to model columns (the primary key excluded)"""
        mapper = sa_inspect(self.resource.model)
        pk_names = {column.key for column in mapper.primary_key}
        return {
            key: value for key, value in values.items()
            if key in mapper.column_attrs and key not in pk_names
        }

    def store(self, data: Dict[str, Any]) -> Any:
        values = validate_payload(self.resource.get_form_field_objects(), data)
        record = self.resource.model(**self._writable(values))

        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create {self.resource.get_slug()} record: {e}")
            raise AppException("Failed to create record", status_code=500)

        logger.info(f"Created {self.resource.get_slug()} record {record.id}")
        return record

    def update(self, record_id: Any, data: Dict[str, Any]) -> Any:
        record = self.get_record(record_id)
        values = validate_payload(self.resource.get_form_field_objects(), data)

        for key, value in self._writable(values).items():
            setattr(record, key, value)

        try:
            self.db.commit()
            self.db.refresh(record)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update {self.resource.get_slug()} record {record_id}: {e}")
            raise AppException("Failed to update record", status_code=500)

        logger.info(f"Updated {self.resource.get_slug()} record {record.id}")
        return record

    def destroy(self, record_id: Any) -> None:
        record = self.get_record(record_id)

        try:
            delete_instance(self.db, record)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete {self.resource.get_slug()} record {record_id}: {e}")
            raise AppException("Failed to delete record", status_code=500)

        logger.info(f"Deleted {self.resource.get_slug()} record {record_id}")

    def bulk_action(self, action: str, record_ids: List[Any]) -> int:
        """Run a bulk action; returns the number of records it received"""
        records = self.get_records(record_ids)

        try:
            self.resource.handle_bulk_action(action, records, self.db)
            self.db.commit()
        except AppException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"Bulk action '{action}' failed on {self.resource.get_slug()}: {e}")
            raise AppException("Bulk action failed", status_code=500)

        logger.info(f"Bulk action '{action}' applied to {len(records)} {self.resource.get_slug()} records")
        return len(records)
