# ================================
# INERTIA RESPONSES (core/inertia.py)
# ================================

from typing import Any, Dict
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from resource_admin.config import Settings


def page_url(request: Request) -> str:
    """Path plus query string of the current request"""
    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"
    return url


def render_page(request: Request, component: str, props: Dict[str, Any], settings: Settings) -> JSONResponse:
    """Inertia page object {component, props, url, version} as JSON"""
    page = {
        "component": component,
        "props": props,
        "url": page_url(request),
        "version": settings.ASSET_VERSION,
    }
    return JSONResponse(
        content=jsonable_encoder(page),
        headers={"X-Inertia": "true", "Vary": "X-Inertia"},
    )
