"""Gallery persistence contract and administrative operations."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID

from gallery_access.domain.errors import GalleryNotFoundError
from gallery_access.domain.galleries import (
    GALLERY_STATUSES,
    STATUS_ACTIVE,
    GalleryDraft,
    GalleryRecord,
)
from gallery_access.services.identifiers import (
    IdentifierService,
    SlugRepository,
    generate_access_code,
    generate_random_password,
)

logger = logging.getLogger(__name__)

# Fields an operator may change after creation. Slug, id and the
# access counters are owned by the access subsystem.
UPDATABLE_FIELDS = frozenset(
    {
        "client_email",
        "bride_name",
        "groom_name",
        "wedding_date",
        "cover_image",
        "images",
        "status",
        "access_code",
        "access_password",
        "allow_downloads",
        "expiration_date",
    }
)
NULLABLE_FIELDS = frozenset({"wedding_date", "cover_image", "access_password"})


class GalleryRepository(SlugRepository, Protocol):
    """Persistence interface for gallery records."""

    def get_gallery(self, gallery_id: UUID) -> GalleryRecord | None:
        """Return a gallery by id, if present."""

    def get_by_slug(self, slug: str) -> GalleryRecord | None:
        """Return a gallery by slug, if present."""

    def find_for_credentials(
        self,
        code: str,
        now: datetime,
        email: str | None = None,
        slug: str | None = None,
    ) -> GalleryRecord | None:
        """Return the active, unexpired gallery matching the credentials."""

    def list_galleries(self) -> list[GalleryRecord]:
        """Return all galleries, newest first."""

    def create_gallery(self, payload: dict[str, object]) -> GalleryRecord:
        """Insert a gallery row and return it."""

    def update_gallery(
        self, gallery_id: UUID, payload: dict[str, object]
    ) -> GalleryRecord | None:
        """Update a gallery row and return it, or None when missing."""

    def delete_gallery(self, gallery_id: UUID) -> None:
        """Delete a gallery row."""

    def increment_view_count(self, gallery_id: UUID, accessed_at: datetime) -> int:
        """Atomically add one view, stamp the access time, return the new count."""


@dataclass
class GalleryService:
    """Administrative lifecycle operations for client galleries."""

    repository: GalleryRepository
    identifiers: IdentifierService
    default_expiration_days: int = 30
    access_code_length: int = 8

    def list_galleries(self) -> list[GalleryRecord]:
        return self.repository.list_galleries()

    def get_gallery(self, gallery_id: UUID) -> GalleryRecord:
        """Return a gallery or raise GalleryNotFoundError."""
        gallery = self.repository.get_gallery(gallery_id)
        if gallery is None:
            raise GalleryNotFoundError(gallery_id)
        return gallery

    def get_gallery_by_slug(self, slug: str) -> GalleryRecord | None:
        return self.repository.get_by_slug(slug)

    def create_gallery(self, draft: GalleryDraft) -> GalleryRecord:
        """Create a gallery with a unique slug and freshly generated credentials."""
        slug = self.identifiers.generate_unique_slug(draft.bride_name, draft.groom_name)
        expiration = draft.expiration_date or datetime.now(tz=UTC) + timedelta(
            days=self.default_expiration_days
        )
        payload: dict[str, object] = {
            "client_email": draft.client_email.strip().lower(),
            "bride_name": draft.bride_name,
            "groom_name": draft.groom_name,
            "wedding_date": draft.wedding_date.isoformat()
            if draft.wedding_date
            else None,
            "cover_image": draft.cover_image,
            "images": list(draft.images),
            "gallery_slug": slug,
            "access_code": generate_access_code(self.access_code_length),
            "access_password": draft.access_password or generate_random_password(),
            "allow_downloads": draft.allow_downloads,
            "status": STATUS_ACTIVE,
            "expiration_date": expiration.isoformat(),
            "view_count": 0,
        }
        gallery = self.repository.create_gallery(payload)
        logger.info(
            "Created client gallery",
            extra={"gallery_id": str(gallery.id), "gallery_slug": slug},
        )
        return gallery

    def update_gallery(
        self, gallery_id: UUID, updates: dict[str, object]
    ) -> GalleryRecord:
        """Apply operator edits, ignoring fields the access subsystem owns."""
        payload = {
            key: _serialize_value(value)
            for key, value in updates.items()
            if key in UPDATABLE_FIELDS
        }
        cleared = sorted(
            key
            for key, value in payload.items()
            if value is None and key not in NULLABLE_FIELDS
        )
        if cleared:
            raise ValueError(f"Fields cannot be null: {', '.join(cleared)}")
        status = payload.get("status")
        if status is not None and status not in GALLERY_STATUSES:
            raise ValueError(f"Unknown gallery status: {status}")
        if isinstance(payload.get("client_email"), str):
            payload["client_email"] = str(payload["client_email"]).strip().lower()
        if isinstance(payload.get("access_code"), str):
            payload["access_code"] = str(payload["access_code"]).strip().upper()
        if not payload:
            return self.get_gallery(gallery_id)
        gallery = self.repository.update_gallery(gallery_id, payload)
        if gallery is None:
            raise GalleryNotFoundError(gallery_id)
        return gallery

    def delete_gallery(self, gallery_id: UUID) -> None:
        self.get_gallery(gallery_id)
        self.repository.delete_gallery(gallery_id)
        logger.info("Deleted client gallery", extra={"gallery_id": str(gallery_id)})


def _serialize_value(value: object) -> object:
    if isinstance(value, date):
        return value.isoformat()
    return value


def serialize_gallery(gallery: GalleryRecord) -> dict[str, object]:
    """Return the JSON-compatible view of a gallery record."""
    return {
        "id": str(gallery.id),
        "client_email": gallery.client_email,
        "gallery_slug": gallery.gallery_slug,
        "access_code": gallery.access_code,
        "status": gallery.status,
        "expiration_date": gallery.expiration_date.isoformat(),
        "view_count": gallery.view_count,
        "last_accessed_at": gallery.last_accessed_at.isoformat()
        if gallery.last_accessed_at
        else None,
        "images": list(gallery.images),
        "bride_name": gallery.bride_name,
        "groom_name": gallery.groom_name,
        "wedding_date": gallery.wedding_date.isoformat()
        if gallery.wedding_date
        else None,
        "cover_image": gallery.cover_image,
        "allow_downloads": gallery.allow_downloads,
        "created_at": gallery.created_at.isoformat() if gallery.created_at else None,
    }
