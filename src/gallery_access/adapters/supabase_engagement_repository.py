"""Supabase repository for favorites, downloads and analytics sessions."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from gallery_access.domain.engagement import (
    AnalyticsSession,
    DownloadRecord,
    FavoriteRecord,
)
from gallery_access.services.engagement import EngagementRepository

_FAVORITES = "client_gallery_favorites"
_DOWNLOADS = "client_gallery_downloads"
_ANALYTICS = "client_gallery_analytics"
_ANALYTICS_COLUMNS = (
    "id, gallery_id, client_email, session_start, session_end, "
    "session_duration_seconds, images_viewed, user_agent, ip_address"
)


@dataclass
class SupabaseEngagementRepository(EngagementRepository):
    """Supabase implementation for engagement events."""

    client: Client

    def add_favorite(self, gallery_id: UUID, client_email: str, image_id: str) -> None:
        """Insert a favorite, ignoring an existing identical tuple."""
        self.client.table(_FAVORITES).upsert(
            {
                "gallery_id": str(gallery_id),
                "client_email": client_email,
                "image_id": image_id,
            },
            on_conflict="gallery_id,client_email,image_id",
            ignore_duplicates=True,
        ).execute()

    def remove_favorite(
        self, gallery_id: UUID, client_email: str, image_id: str
    ) -> None:
        """Delete a favorite if present."""
        self.client.table(_FAVORITES).delete().eq("gallery_id", str(gallery_id)).eq(
            "client_email", client_email
        ).eq("image_id", image_id).execute()

    def list_favorites(
        self, gallery_id: UUID, client_email: str
    ) -> list[FavoriteRecord]:
        """Return a client's favorites for a gallery."""
        response = (
            self.client.table(_FAVORITES)
            .select("gallery_id, client_email, image_id, created_at")
            .eq("gallery_id", str(gallery_id))
            .eq("client_email", client_email)
            .order("created_at", desc=False)
            .execute()
        )
        return [
            FavoriteRecord(
                gallery_id=UUID(str(row["gallery_id"])),
                client_email=str(row["client_email"]),
                image_id=str(row["image_id"]),
                created_at=_parse_instant(row.get("created_at")),
            )
            for row in response.data or []
        ]

    def count_favorites(self, gallery_id: UUID) -> int:
        """Return the number of favorites for a gallery."""
        return self._count(_FAVORITES, gallery_id)

    def create_download(
        self,
        gallery_id: UUID,
        client_email: str,
        image_id: str,
        downloaded_at: datetime,
    ) -> DownloadRecord:
        """Append a download row and return it."""
        response = (
            self.client.table(_DOWNLOADS)
            .insert(
                {
                    "gallery_id": str(gallery_id),
                    "client_email": client_email,
                    "image_id": image_id,
                    "downloaded_at": downloaded_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to record download")
        row = response.data[0]
        return DownloadRecord(
            id=UUID(str(row["id"])),
            gallery_id=gallery_id,
            client_email=client_email,
            image_id=image_id,
            downloaded_at=_parse_instant(row.get("downloaded_at")) or downloaded_at,
        )

    def count_downloads(self, gallery_id: UUID) -> int:
        """Return the number of downloads for a gallery."""
        return self._count(_DOWNLOADS, gallery_id)

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
        response = (
            self.client.table(_ANALYTICS)
            .insert(
                {
                    "gallery_id": str(gallery_id),
                    "client_email": client_email,
                    "session_start": session_start.isoformat(),
                    "images_viewed": images_viewed,
                    "user_agent": user_agent,
                    "ip_address": ip_address,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create analytics session")
        return _parse_analytics(response.data[0])

    def get_analytics_session(self, analytics_id: UUID) -> AnalyticsSession | None:
        """Return an analytics session by id, if present."""
        response = (
            self.client.table(_ANALYTICS)
            .select(_ANALYTICS_COLUMNS)
            .eq("id", str(analytics_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_analytics(response.data[0])

    def update_analytics_session(
        self, analytics_id: UUID, payload: dict[str, object]
    ) -> None:
        """Update an analytics session row."""
        self.client.table(_ANALYTICS).update(payload).eq(
            "id", str(analytics_id)
        ).execute()

    def list_analytics_sessions(self, gallery_id: UUID) -> list[AnalyticsSession]:
        """Return analytics sessions for a gallery, newest first."""
        response = (
            self.client.table(_ANALYTICS)
            .select(_ANALYTICS_COLUMNS)
            .eq("gallery_id", str(gallery_id))
            .order("session_start", desc=True)
            .execute()
        )
        return [_parse_analytics(row) for row in response.data or []]

    def count_analytics_sessions(self, gallery_id: UUID) -> int:
        """Return the number of analytics sessions for a gallery."""
        return self._count(_ANALYTICS, gallery_id)

    def _count(self, table: str, gallery_id: UUID) -> int:
        response = (
            self.client.table(table)
            .select("id", count="exact", head=True)
            .eq("gallery_id", str(gallery_id))
            .execute()
        )
        return int(response.count or 0)


def _parse_instant(raw: object) -> datetime | None:
    if not isinstance(raw, str) or not raw:
        return None
    value = datetime.fromisoformat(raw)
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _parse_analytics(row: dict[str, object]) -> AnalyticsSession:
    duration = row.get("session_duration_seconds")
    return AnalyticsSession(
        id=UUID(str(row["id"])),
        gallery_id=UUID(str(row["gallery_id"])),
        client_email=str(row.get("client_email") or ""),
        session_start=_parse_instant(row.get("session_start"))
        or datetime.min.replace(tzinfo=UTC),
        images_viewed=int(row.get("images_viewed") or 0),
        user_agent=row.get("user_agent"),
        ip_address=row.get("ip_address"),
        session_end=_parse_instant(row.get("session_end")),
        session_duration_seconds=int(duration) if duration is not None else None,
    )
