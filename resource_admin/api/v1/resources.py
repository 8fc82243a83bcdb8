# ================================
# RESOURCE CRUD API (api/v1/resources.py)
# ================================

"""
Router factory for registered resources.

Each resource gets the conventional admin routes under
``/{ROUTE_PREFIX}/{slug}``, named ``{ROUTE_PREFIX}.{slug}.{action}``.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Type
import logging

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, StreamingResponse
from sqlalchemy.orm import Session

from resource_admin.config import Settings
from resource_admin.core.inertia import render_page
from resource_admin.dependencies import (
    get_current_user,
    get_current_user_optional,
    get_db,
    get_preference_repository,
    get_search_builder,
    get_settings,
)
from resource_admin.resources.resource import Resource
from resource_admin.schemas.base import BulkActionResponse, WriteResponse
from resource_admin.schemas.bulk_action import BulkActionRequest
from resource_admin.services.export_service import stream_csv
from resource_admin.services.resource_service import ResourceService

logger = logging.getLogger(__name__)


def build_resource_router(resource_cls: Type[Resource], settings: Settings) -> APIRouter:
    """APIRouter with index/create/store/show/edit/update/destroy/bulk_action/export"""
    slug = resource_cls.get_slug()
    prefix = settings.ROUTE_PREFIX
    name = f"{prefix}.{slug}"

    router = APIRouter(prefix=f"/{prefix}/{slug}", tags=[slug])

    def get_service(
        db: Session = Depends(get_db),
        app_settings: Settings = Depends(get_settings),
        search_builder=Depends(get_search_builder),
        preferences=Depends(get_preference_repository)
    ) -> ResourceService:
        return ResourceService(resource_cls, db, app_settings, search_builder, preferences)

    def index_url(request: Request) -> str:
        return str(request.app.url_path_for(f"{name}.index"))

    @router.get("", name=f"{name}.index")
    async def index(
        request: Request,
        service: ResourceService = Depends(get_service),
        current_user: Optional[Any] = Depends(get_current_user_optional),
        app_settings: Settings = Depends(get_settings)
    ):
        """Filtered, preset-narrowed, searched, sorted and paginated listing"""
        props = service.index_props(request, current_user)
        return render_page(request, resource_cls.get_index_page(app_settings), props, app_settings)

    @router.get("/create", name=f"{name}.create")
    async def create(
        request: Request,
        service: ResourceService = Depends(get_service),
        app_settings: Settings = Depends(get_settings)
    ):
        return render_page(request, resource_cls.get_create_page(app_settings), service.create_props(), app_settings)

    @router.get("/export", name=f"{name}.export")
    async def export(
        request: Request,
        service: ResourceService = Depends(get_service),
        current_user: Optional[Any] = Depends(get_current_user_optional),
        app_settings: Settings = Depends(get_settings)
    ):
        """CSV download of the current index query"""
        active_presets = service.queries.resolve_active_presets(request)
        query = service.queries.build(request, active_presets, for_export=True)
        columns = resource_cls.get_columns(current_user, service.preferences)

        filename = f"{resource_cls.get_title()}_{datetime.now().strftime('%Y-%m-%d_%H%M%S')}.csv"
        logger.info(f"Exporting {slug} to {filename}")

        return StreamingResponse(
            stream_csv(query, columns, request.app.state.session_factory, app_settings.EXPORT_CHUNK_SIZE),
            media_type="text/csv; charset=UTF-8",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @router.post("/bulk-action", name=f"{name}.bulk_action", response_model=BulkActionResponse)
    async def bulk_action(
        request: Request,
        payload: BulkActionRequest,
        service: ResourceService = Depends(get_service),
        current_user: Any = Depends(get_current_user)
    ):
        """Apply a bulk action to the selected ids"""
        count = service.bulk_action(payload.action, payload.ids)
        return BulkActionResponse(
            message="Bulk action completed successfully.",
            redirect=index_url(request),
            count=count,
        )

    @router.post("", name=f"{name}.store", status_code=201, response_model=WriteResponse)
    async def store(
        request: Request,
        data: Dict[str, Any] = Body(...),
        service: ResourceService = Depends(get_service)
    ):
        record = service.store(data)
        return WriteResponse(
            message="Record created successfully.",
            redirect=index_url(request),
            id=jsonable_encoder(record.id),
        )

    @router.get("/{record_id}", name=f"{name}.show")
    async def show(
        request: Request,
        record_id: str,
        current_tab: Optional[str] = Query(None),
        service: ResourceService = Depends(get_service),
        app_settings: Settings = Depends(get_settings)
    ):
        props = service.show_props(record_id, current_tab)
        return render_page(request, resource_cls.get_show_page(app_settings), props, app_settings)

    @router.get("/{record_id}/edit", name=f"{name}.edit")
    async def edit(
        request: Request,
        record_id: str,
        service: ResourceService = Depends(get_service),
        app_settings: Settings = Depends(get_settings)
    ):
        props = service.edit_props(record_id)
        return render_page(request, resource_cls.get_edit_page(app_settings), props, app_settings)

    @router.put("/{record_id}", name=f"{name}.update", response_model=WriteResponse)
    async def update(
        request: Request,
        record_id: str,
        data: Dict[str, Any] = Body(...),
        service: ResourceService = Depends(get_service)
    ):
        record = service.update(record_id, data)
        return WriteResponse(
            message="Record updated successfully.",
            redirect=index_url(request),
            id=jsonable_encoder(record.id),
        )

    @router.delete("/{record_id}", name=f"{name}.destroy")
    async def destroy(
        request: Request,
        record_id: str,
        service: ResourceService = Depends(get_service)
    ):
        service.destroy(record_id)
        return JSONResponse({"message": "Record deleted successfully.", "redirect": index_url(request)})

    return router
