# ================================
# MAIN APPLICATION (main.py)
# ================================

from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import sessionmaker

from resource_admin.api.v1 import build_resource_router, v1_router
from resource_admin.config import Settings, settings as default_settings
from resource_admin.core.database import create_session_factory
from resource_admin.core.exceptions import AppException, ValidationFailedError
from resource_admin.core.middleware import AuditMiddleware, DatabaseSessionMiddleware
from resource_admin.dependencies import get_request_id
from resource_admin.resources.registry import ResourceRegistry, registry as default_registry
from resource_admin.services.search import SearchQueryBuilder
from resource_admin.utils import setup_logging

logger = logging.getLogger(__name__)

# ================================
# REGISTRY LOADING
# ================================

def load_external_resources(module_paths) -> ResourceRegistry:
    """
    Collect externally managed resources into their own registry.

    Each module lists its resource classes in ``RESOURCES``; they show up in
    navigation without getting CRUD routes.
    """
    external = ResourceRegistry()
    for module_path in module_paths:
        external.register_module(module_path)
    return external

# ================================
# EXCEPTION HANDLERS
# ================================

def _error_content(request: Request, detail, error_code: Optional[str] = None) -> dict:
    return {
        "detail": detail,
        "error_code": error_code,
        "request_id": get_request_id(request)
    }


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        """Render AppException subclasses with their status and error code"""
        content = _error_content(request, exc.detail, exc.error_code)
        if isinstance(exc, ValidationFailedError):
            content["field_errors"] = exc.field_errors
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        field_errors = {}
        for error in exc.errors():
            loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
            field_errors.setdefault(".".join(loc) or "body", []).append(error.get("msg"))

        content = _error_content(request, "The given data was invalid.", "VALIDATION_ERROR")
        content["field_errors"] = field_errors
        return JSONResponse(status_code=422, content=content)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_content(request, exc.detail)
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Last-resort handler for unhandled exceptions"""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        app_settings = request.app.state.settings
        return JSONResponse(
            status_code=500,
            content=_error_content(
                request,
                str(exc) if app_settings.DEBUG else "Internal server error",
                "INTERNAL_ERROR"
            )
        )

# ================================
# APPLICATION FACTORY
# ================================

def create_app(
    settings: Optional[Settings] = None,
    session_factory: Optional[sessionmaker] = None,
    registry: Optional[ResourceRegistry] = None,
    search_builder: Optional[SearchQueryBuilder] = None,
) -> FastAPI:
    """FastAPI application serving every registered resource"""
    settings = settings or default_settings
    registry = registry if registry is not None else default_registry

    setup_logging("DEBUG" if settings.DEBUG else "INFO")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.APP_NAME} with {len(app.state.registry)} resources")
        yield
        logger.info(f"Shutting down {settings.APP_NAME}")

    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan
    )

    registry.load_modules(settings.RESOURCE_MODULES)
    external_registry = load_external_resources(settings.EXTERNAL_RESOURCE_MODULES)

    app.state.settings = settings
    app.state.session_factory = session_factory or create_session_factory(settings)
    app.state.registry = registry
    app.state.external_registry = external_registry
    app.state.search_builder = search_builder

    # Middleware: the last one added runs first
    app.add_middleware(AuditMiddleware)
    app.add_middleware(DatabaseSessionMiddleware)

    if settings.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"]
        )

    register_exception_handlers(app)

    for resource_cls in registry.all():
        app.include_router(build_resource_router(resource_cls, settings))
        logger.debug(f"Mounted resource routes for '{resource_cls.get_slug()}'")

    app.include_router(v1_router, prefix=settings.API_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Basic health check endpoint"""
        return {
            "status": "healthy",
            "service": settings.APP_NAME,
            "resources": len(registry)
        }

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "resource_admin.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=default_settings.DEBUG
    )
