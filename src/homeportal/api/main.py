"""homeportal API.

Serves the list of applications visible to the requesting user and the web UI.

Endpoints:
- GET /api/apps: enabled applications filtered by the caller's groups
- GET /health: liveness probe
"""

from __future__ import annotations

import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..config import Settings, build_portal_config
from ..core.exceptions import SourceException
from ..core.models import Application
from ..service import PortalService
from .schemas import ApplicationResponse, ErrorResponse, HealthResponse


def configure_logging(level: str) -> None:
    """Replace loguru's default sink with one at the configured level."""
    logger.remove()
    logger.add(sys.stderr, level=level)


def get_service(request: Request) -> PortalService:
    """Portal service built at startup."""
    return request.app.state.service


def create_app(settings: Optional[Settings] = None, service: Optional[PortalService] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or Settings()
    if service is None:
        service = PortalService(build_portal_config(settings))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.LOG_LEVEL)
        logger.info(f"Portal server started (DEMO_MODE={settings.DEMO_MODE} DEBUG={settings.debug})")
        yield
        logger.info("Portal server shutting down")

    app = FastAPI(
        title="homeportal",
        description="Applications exposed by annotated ingresses, filtered by user group",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.service = service

    @app.exception_handler(SourceException)
    async def source_error_handler(request: Request, exc: SourceException):
        logger.error(f"ERROR fetching apps: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error="failed to fetch apps").model_dump(),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            return JSONResponse(status_code=exc.status_code, content=ErrorResponse(error="method not allowed").model_dump())
        return JSONResponse(status_code=exc.status_code, content=ErrorResponse(error=str(exc.detail)).model_dump())

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health_check() -> HealthResponse:
        """Liveness probe, no dependency checks."""
        return HealthResponse()

    # Sync handler: the Kubernetes client blocks, so this runs in the threadpool
    @app.get("/api/apps", response_model=list[ApplicationResponse], tags=["apps"])
    def list_apps(request: Request, portal: PortalService = Depends(get_service)) -> list[Application]:
        for key, value in request.headers.items():
            logger.debug(f"Request header {key}: {value}")

        caller_groups = portal.caller_groups(request.headers.get(portal.config.groups_header))
        remote_addr = request.client.host if request.client else "-"
        logger.info(f"Apps request: user_groups={caller_groups} remote_addr={remote_addr}")
        return portal.list_applications(caller_groups)

    # Mount static files (must be last)
    static_dir = Path(settings.STATIC_DIR)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")
    else:
        logger.debug(f"Static directory {static_dir} not found, UI not served")

    return app


def run(settings: Optional[Settings] = None, reload: bool = False):
    """Run the server."""
    import uvicorn

    settings = settings or Settings()
    configure_logging(settings.LOG_LEVEL)
    logger.info(f"Starting portal server on {settings.HOST}:{settings.PORT} (DEMO_MODE={settings.DEMO_MODE})")
    uvicorn.run(
        "homeportal.api.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=reload,
    )


if __name__ == "__main__":
    run()
