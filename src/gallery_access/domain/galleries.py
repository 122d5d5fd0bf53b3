"""Domain models for client galleries."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"
STATUS_ARCHIVED = "archived"

GALLERY_STATUSES = frozenset({STATUS_ACTIVE, STATUS_INACTIVE, STATUS_ARCHIVED})


@dataclass(frozen=True)
class GalleryRecord:
    """Represents a client gallery and its access-control metadata."""

    id: UUID
    client_email: str
    gallery_slug: str
    access_code: str
    status: str
    expiration_date: datetime
    view_count: int = 0
    last_accessed_at: datetime | None = None
    images: list[str] = field(default_factory=list)
    bride_name: str | None = None
    groom_name: str | None = None
    wedding_date: date | None = None
    cover_image: str | None = None
    access_password: str | None = None
    allow_downloads: bool = True
    created_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status == STATUS_ACTIVE


@dataclass(frozen=True)
class GalleryDraft:
    """Fields supplied by an operator when creating a gallery."""

    client_email: str
    bride_name: str
    groom_name: str
    expiration_date: datetime | None = None
    wedding_date: date | None = None
    cover_image: str | None = None
    images: list[str] = field(default_factory=list)
    access_password: str | None = None
    allow_downloads: bool = True


@dataclass(frozen=True)
class ClientCredentials:
    """Credential pair submitted by a client."""

    code: str
    email: str | None = None
    slug: str | None = None
