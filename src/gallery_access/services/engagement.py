"""Favorites, downloads and analytics sessions recorded for a gallery."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from gallery_access.domain.engagement import (
    AnalyticsSession,
    DownloadRecord,
    FavoriteRecord,
)
from gallery_access.domain.errors import (
    AnalyticsSessionNotFoundError,
    DownloadsDisabledError,
    GalleryNotFoundError,
    ImageNotInGalleryError,
)
from gallery_access.domain.galleries import GalleryRecord
from gallery_access.domain.sessions import GallerySession
from gallery_access.services.galleries import GalleryRepository

logger = logging.getLogger(__name__)


class EngagementRepository(Protocol):
    """Persistence interface for engagement events."""

    def add_favorite(self, gallery_id: UUID, client_email: str, image_id: str) -> None:
        """Insert a favorite, ignoring an existing identical tuple."""

    def remove_favorite(
        self, gallery_id: UUID, client_email: str, image_id: str
    ) -> None:
        """Delete a favorite if present."""

    def list_favorites(
        self, gallery_id: UUID, client_email: str
    ) -> list[FavoriteRecord]:
        """Return a client's favorites for a gallery."""

    def count_favorites(self, gallery_id: UUID) -> int:
        """Return the number of favorites for a gallery."""

    def create_download(
        self,
        gallery_id: UUID,
        client_email: str,
        image_id: str,
        downloaded_at: datetime,
    ) -> DownloadRecord:
        """Append a download row and return it."""

    def count_downloads(self, gallery_id: UUID) -> int:
        """Return the number of downloads for a gallery."""

    def create_analytics_session(  # noqa: PLR0913
        self,
        gallery_id: UUID,
        client_email: str,
        session_start: datetime,
        images_viewed: int,
        user_agent: str | None,
        ip_address: str | None,
    ) -> AnalyticsSession:
        """Insert an analytics session row and return it."""

    def get_analytics_session(self, analytics_id: UUID) -> AnalyticsSession | None:
        """Return an analytics session by id, if present."""

    def update_analytics_session(
        self, analytics_id: UUID, payload: dict[str, object]
    ) -> None:
        """Update an analytics session row."""

    def list_analytics_sessions(self, gallery_id: UUID) -> list[AnalyticsSession]:
        """Return analytics sessions for a gallery, newest first."""

    def count_analytics_sessions(self, gallery_id: UUID) -> int:
        """Return the number of analytics sessions for a gallery."""


@dataclass
class EngagementService:
    """Records client engagement against the gallery named by a session."""

    gallery_repository: GalleryRepository
    repository: EngagementRepository

    def add_favorite(self, session: GallerySession, image_id: str) -> FavoriteRecord:
        """Mark an image as favorite; repeating the call is a no-op."""
        self._require_image(session, image_id)
        self.repository.add_favorite(session.gallery_id, session.client_email, image_id)
        return FavoriteRecord(
            gallery_id=session.gallery_id,
            client_email=session.client_email,
            image_id=image_id,
        )

    def remove_favorite(self, session: GallerySession, image_id: str) -> None:
        self.repository.remove_favorite(
            session.gallery_id, session.client_email, image_id
        )

    def list_favorites(self, session: GallerySession) -> list[FavoriteRecord]:
        return self.repository.list_favorites(session.gallery_id, session.client_email)

    def record_download(self, session: GallerySession, image_id: str) -> DownloadRecord:
        """Append a download event when the gallery allows downloads."""
        gallery = self._require_image(session, image_id)
        if not gallery.allow_downloads:
            raise DownloadsDisabledError("Downloads are disabled for this gallery")
        return self.repository.create_download(
            gallery_id=session.gallery_id,
            client_email=session.client_email,
            image_id=image_id,
            downloaded_at=datetime.now(tz=UTC),
        )

    def start_analytics_session(
        self,
        session: GallerySession,
        user_agent: str | None,
        ip_address: str | None = None,
        images_viewed: int = 0,
    ) -> AnalyticsSession:
        """Open an analytics session for the client behind the session."""
        return self.repository.create_analytics_session(
            gallery_id=session.gallery_id,
            client_email=session.client_email,
            session_start=datetime.now(tz=UTC),
            images_viewed=max(0, images_viewed),
            user_agent=user_agent,
            ip_address=ip_address,
        )

    def end_analytics_session(
        self,
        session: GallerySession,
        analytics_id: UUID,
        images_viewed: int | None = None,
        session_end: datetime | None = None,
    ) -> AnalyticsSession:
        """Close an analytics session and record its duration."""
        current = self.repository.get_analytics_session(analytics_id)
        if current is None or current.gallery_id != session.gallery_id:
            raise AnalyticsSessionNotFoundError(
                f"Analytics session not found: {analytics_id}"
            )
        ended_at = session_end or datetime.now(tz=UTC)
        if ended_at.tzinfo is None:
            ended_at = ended_at.replace(tzinfo=UTC)
        duration = max(0, int((ended_at - current.session_start).total_seconds()))
        payload: dict[str, object] = {
            "session_end": ended_at.isoformat(),
            "session_duration_seconds": duration,
        }
        if images_viewed is not None:
            payload["images_viewed"] = max(0, images_viewed)
        self.repository.update_analytics_session(analytics_id, payload)
        return AnalyticsSession(
            id=current.id,
            gallery_id=current.gallery_id,
            client_email=current.client_email,
            session_start=current.session_start,
            images_viewed=int(payload.get("images_viewed", current.images_viewed)),
            user_agent=current.user_agent,
            ip_address=current.ip_address,
            session_end=ended_at,
            session_duration_seconds=duration,
        )

    def list_analytics(self, gallery_id: UUID) -> list[AnalyticsSession]:
        return self.repository.list_analytics_sessions(gallery_id)

    def _require_image(self, session: GallerySession, image_id: str) -> GalleryRecord:
        gallery = self.gallery_repository.get_gallery(session.gallery_id)
        if gallery is None:
            raise GalleryNotFoundError(session.gallery_id)
        if image_id not in gallery.images:
            raise ImageNotInGalleryError(f"Image {image_id} is not in this gallery")
        return gallery


def serialize_analytics(entry: AnalyticsSession) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "gallery_id": str(entry.gallery_id),
        "client_email": entry.client_email,
        "session_start": entry.session_start.isoformat(),
        "session_end": entry.session_end.isoformat() if entry.session_end else None,
        "session_duration_seconds": entry.session_duration_seconds,
        "images_viewed": entry.images_viewed,
        "user_agent": entry.user_agent,
    }
