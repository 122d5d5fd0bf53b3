"""Admin API endpoints with simple token auth."""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status

from gallery_access.api.models import (
    ExtendExpirationRequest,
    GalleryCreateRequest,
    GalleryUpdateRequest,
)
from gallery_access.domain.galleries import GalleryDraft, GalleryRecord
from gallery_access.services.engagement import serialize_analytics
from gallery_access.services.galleries import serialize_gallery
from gallery_access.services.identifiers import (
    DEFAULT_CODE_LENGTH,
    generate_access_code,
)

if TYPE_CHECKING:
    from gallery_access.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or not secrets.compare_digest(x_admin_token, admin_token):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/galleries", dependencies=[Depends(require_admin)])
async def list_galleries(request: Request) -> dict[str, object]:
    """Return all client galleries."""
    container: AppContainer = request.app.state.container
    galleries = container.gallery_service.list_galleries()
    return {"galleries": [_admin_view(gallery) for gallery in galleries]}


@router.post(
    "/galleries",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_201_CREATED,
)
async def create_gallery(
    payload: GalleryCreateRequest, request: Request
) -> dict[str, object]:
    """Create a gallery with generated slug and access code."""
    container: AppContainer = request.app.state.container
    gallery = container.gallery_service.create_gallery(
        GalleryDraft(**payload.model_dump())
    )
    return {"gallery": _admin_view(gallery)}


@router.get("/galleries/{gallery_id}", dependencies=[Depends(require_admin)])
async def get_gallery(gallery_id: UUID, request: Request) -> dict[str, object]:
    """Return a single gallery."""
    container: AppContainer = request.app.state.container
    return {"gallery": _admin_view(container.gallery_service.get_gallery(gallery_id))}


@router.patch("/galleries/{gallery_id}", dependencies=[Depends(require_admin)])
async def update_gallery(
    gallery_id: UUID, payload: GalleryUpdateRequest, request: Request
) -> dict[str, object]:
    """Apply operator edits to a gallery."""
    container: AppContainer = request.app.state.container
    try:
        gallery = container.gallery_service.update_gallery(
            gallery_id, payload.model_dump(exclude_unset=True)
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return {"gallery": _admin_view(gallery)}


@router.delete("/galleries/{gallery_id}", dependencies=[Depends(require_admin)])
async def delete_gallery(gallery_id: UUID, request: Request) -> dict[str, str]:
    """Delete a gallery."""
    container: AppContainer = request.app.state.container
    container.gallery_service.delete_gallery(gallery_id)
    return {"status": "ok"}


@router.get("/galleries/{gallery_id}/stats", dependencies=[Depends(require_admin)])
async def gallery_stats(gallery_id: UUID, request: Request) -> dict[str, object]:
    """Return the engagement snapshot for a gallery."""
    container: AppContainer = request.app.state.container
    return container.metrics_service.get_gallery_stats(gallery_id).to_dict()


@router.post("/galleries/{gallery_id}/extend", dependencies=[Depends(require_admin)])
async def extend_expiration(
    gallery_id: UUID, payload: ExtendExpirationRequest, request: Request
) -> dict[str, object]:
    """Extend a gallery's expiration by a number of days."""
    container: AppContainer = request.app.state.container
    gallery = container.expiration_service.extend_expiration(gallery_id, payload.days)
    return {"gallery": _admin_view(gallery)}


@router.get(
    "/galleries/{gallery_id}/analytics", dependencies=[Depends(require_admin)]
)
async def gallery_analytics(gallery_id: UUID, request: Request) -> dict[str, object]:
    """Return analytics sessions for a gallery, newest first."""
    container: AppContainer = request.app.state.container
    entries = container.engagement_service.list_analytics(gallery_id)
    return {"analytics": [serialize_analytics(entry) for entry in entries]}


@router.get("/identifiers/slug", dependencies=[Depends(require_admin)])
async def preview_slug(
    request: Request,
    name_a: str = Query(min_length=1),
    name_b: str = Query(min_length=1),
) -> dict[str, str]:
    """Return the slug a new gallery for the names would receive."""
    container: AppContainer = request.app.state.container
    return {"slug": container.identifier_service.generate_unique_slug(name_a, name_b)}


@router.get("/identifiers/access-code", dependencies=[Depends(require_admin)])
async def new_access_code(
    length: int = Query(default=DEFAULT_CODE_LENGTH, ge=4, le=64),
) -> dict[str, str]:
    """Return a freshly generated access code."""
    return {"access_code": generate_access_code(length)}


def _admin_view(gallery: GalleryRecord) -> dict[str, object]:
    return {**serialize_gallery(gallery), "access_password": gallery.access_password}
