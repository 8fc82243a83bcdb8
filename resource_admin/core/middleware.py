# ================================
# MIDDLEWARE (core/middleware.py)
# ================================

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import time
import uuid
import logging

logger = logging.getLogger(__name__)


class DatabaseSessionMiddleware(BaseHTTPMiddleware):
    """Opens one database session per request on request.state.db"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        # Request ID for logging
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        db = request.app.state.session_factory()
        request.state.db = db

        try:
            response = await call_next(request)

            process_time = time.time() - start_time
            response.headers["X-Process-Time"] = str(process_time)
            response.headers["X-Request-ID"] = request_id

            return response

        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


class AuditMiddleware(BaseHTTPMiddleware):
    """Request / response logging"""

    async def dispatch(self, request: Request, call_next):
        await self._log_request(request)

        response = await call_next(request)

        await self._log_response(request, response)

        return response

    async def _log_request(self, request: Request):
        logger.info(
            f"Request: {request.method} {request.url.path}",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "method": request.method,
                "path": request.url.path,
                "query_params": str(request.query_params),
                "user_agent": request.headers.get("User-Agent"),
                "ip_address": request.client.host if request.client else None
            }
        )

    async def _log_response(self, request: Request, response: Response):
        logger.info(
            f"Response: {response.status_code}",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "status_code": response.status_code,
                "process_time": response.headers.get("X-Process-Time")
            }
        )
