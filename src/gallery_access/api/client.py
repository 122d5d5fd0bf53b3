"""Client-facing endpoints: authentication, session and engagement."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from gallery_access.adapters.cookie_session_storage import CookieSessionStorage
from gallery_access.api.models import (
    AnalyticsStartRequest,
    AnalyticsUpdateRequest,
    ClientAuthRequest,
    ImageRequest,
)
from gallery_access.containers import AppContainer
from gallery_access.domain.errors import SessionRequiredError
from gallery_access.domain.galleries import ClientCredentials
from gallery_access.domain.sessions import GallerySession
from gallery_access.services.engagement import serialize_analytics
from gallery_access.services.galleries import serialize_gallery

router = APIRouter(prefix="/client", tags=["client"])

_AUTH_FAILURE_STATUS = {
    "validation": 400,
    "invalid": 401,
    "store": 503,
}


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def session_storage(request: Request) -> CookieSessionStorage:
    """Build the cookie-backed storage for the current request."""
    container = _container(request)
    settings = container.settings
    return CookieSessionStorage(
        secret=settings.session_secret,
        cookies=request.cookies,
        secure=settings.session_cookie_secure,
        max_age_seconds=int(container.session_service.ttl.total_seconds()),
    )


async def current_session(request: Request) -> GallerySession:
    """Return the caller's session or raise SessionRequiredError."""
    container = _container(request)
    session = container.session_service.get_session(session_storage(request))
    if session is None:
        raise SessionRequiredError("Session expired or missing")
    return session


@router.post("/auth")
async def authenticate(payload: ClientAuthRequest, request: Request) -> JSONResponse:
    """Validate client credentials and issue a session cookie."""
    container = _container(request)
    storage = session_storage(request)
    result = container.auth_service.authenticate(
        ClientCredentials(code=payload.code or "", email=payload.email, slug=payload.slug),
        storage,
    )
    if not result.success or result.gallery is None or result.session is None:
        return JSONResponse(
            {"success": False, "error": result.error},
            status_code=_AUTH_FAILURE_STATUS.get(result.reason or "", 401),
        )
    response = JSONResponse(
        {
            "success": True,
            "gallery": serialize_gallery(result.gallery),
            "session": result.session.to_payload(),
        }
    )
    storage.apply(response)
    return response


@router.get("/session")
async def get_session(
    session: GallerySession = Depends(current_session),
) -> dict[str, object]:
    """Return the caller's active session."""
    return {"session": session.to_payload()}


@router.delete("/session")
async def clear_session(request: Request) -> JSONResponse:
    """Discard the caller's session."""
    storage = session_storage(request)
    _container(request).session_service.clear_session(storage)
    response = JSONResponse({"status": "ok"})
    storage.apply(response)
    return response


@router.get("/gallery")
async def get_gallery(
    request: Request, session: GallerySession = Depends(current_session)
) -> dict[str, object]:
    """Return the gallery the session grants access to."""
    gallery = _container(request).gallery_service.get_gallery(session.gallery_id)
    return {"gallery": serialize_gallery(gallery)}


@router.get("/favorites")
async def list_favorites(
    request: Request, session: GallerySession = Depends(current_session)
) -> dict[str, object]:
    """Return the caller's favorite image ids."""
    favorites = _container(request).engagement_service.list_favorites(session)
    return {"favorites": [favorite.image_id for favorite in favorites]}


@router.post("/favorites")
async def add_favorite(
    payload: ImageRequest,
    request: Request,
    session: GallerySession = Depends(current_session),
) -> dict[str, object]:
    """Mark an image as favorite."""
    favorite = _container(request).engagement_service.add_favorite(
        session, payload.image_id
    )
    return {"status": "ok", "image_id": favorite.image_id}


@router.delete("/favorites/{image_id}")
async def remove_favorite(
    image_id: str,
    request: Request,
    session: GallerySession = Depends(current_session),
) -> dict[str, str]:
    """Remove an image from the caller's favorites."""
    _container(request).engagement_service.remove_favorite(session, image_id)
    return {"status": "ok"}


@router.post("/downloads")
async def record_download(
    payload: ImageRequest,
    request: Request,
    session: GallerySession = Depends(current_session),
) -> dict[str, object]:
    """Record an image download."""
    download = _container(request).engagement_service.record_download(
        session, payload.image_id
    )
    return {
        "id": str(download.id),
        "image_id": download.image_id,
        "downloaded_at": download.downloaded_at.isoformat(),
    }


@router.post("/analytics")
async def start_analytics(
    payload: AnalyticsStartRequest,
    request: Request,
    session: GallerySession = Depends(current_session),
) -> dict[str, object]:
    """Open an analytics session for the caller."""
    entry = _container(request).engagement_service.start_analytics_session(
        session,
        user_agent=request.headers.get("user-agent"),
        ip_address=request.client.host if request.client else None,
        images_viewed=payload.images_viewed,
    )
    return serialize_analytics(entry)


@router.patch("/analytics/{analytics_id}")
async def end_analytics(
    analytics_id: UUID,
    payload: AnalyticsUpdateRequest,
    request: Request,
    session: GallerySession = Depends(current_session),
) -> dict[str, object]:
    """Close an analytics session."""
    entry = _container(request).engagement_service.end_analytics_session(
        session,
        analytics_id,
        images_viewed=payload.images_viewed,
        session_end=payload.session_end,
    )
    return serialize_analytics(entry)
