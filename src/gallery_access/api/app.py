"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from gallery_access.api.admin import router as admin_router
from gallery_access.api.client import router as client_router
from gallery_access.app_logging import configure_logging
from gallery_access.containers import AppContainer
from gallery_access.domain.errors import (
    AnalyticsSessionNotFoundError,
    DownloadsDisabledError,
    GalleryAccessError,
    GalleryNotFoundError,
    ImageNotInGalleryError,
    SessionRequiredError,
)

_ERROR_STATUS: list[tuple[type[GalleryAccessError], int]] = [
    (SessionRequiredError, 401),
    (DownloadsDisabledError, 403),
    (GalleryNotFoundError, 404),
    (ImageNotInGalleryError, 404),
    (AnalyticsSessionNotFoundError, 404),
]


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(client_router)
    app.include_router(admin_router)

    @app.exception_handler(GalleryAccessError)
    async def gallery_access_error(
        request: Request, exc: GalleryAccessError
    ) -> JSONResponse:
        status_code = _status_for(exc)
        response = JSONResponse({"error": str(exc)}, status_code=status_code)
        if isinstance(exc, SessionRequiredError):
            response.delete_cookie(
                container.settings.session_cookie_name,
                httponly=True,
                secure=container.settings.session_cookie_secure,
            )
        return response

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error while serving request",
            extra={"path": request.url.path},
        )
        return JSONResponse({"error": "Service unavailable"}, status_code=503)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _status_for(exc: GalleryAccessError) -> int:
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 400
