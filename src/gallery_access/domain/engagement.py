"""Domain models for client engagement events."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class FavoriteRecord:
    """An image marked as favorite by a client."""

    gallery_id: UUID
    client_email: str
    image_id: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class DownloadRecord:
    """A single image download."""

    id: UUID
    gallery_id: UUID
    client_email: str
    image_id: str
    downloaded_at: datetime


@dataclass(frozen=True)
class AnalyticsSession:
    """A viewing session recorded for gallery analytics."""

    id: UUID
    gallery_id: UUID
    client_email: str
    session_start: datetime
    images_viewed: int
    user_agent: str | None
    ip_address: str | None = None
    session_end: datetime | None = None
    session_duration_seconds: int | None = None
