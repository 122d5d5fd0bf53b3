"""Supabase-backed gallery repository."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from gallery_access.domain.galleries import STATUS_ACTIVE, GalleryRecord
from gallery_access.services.galleries import GalleryRepository

_TABLE = "client_galleries"
_COLUMNS = (
    "id, client_email, gallery_slug, access_code, status, expiration_date, "
    "view_count, last_accessed_at, images, bride_name, groom_name, wedding_date, "
    "cover_image, access_password, allow_downloads, created_at"
)
_INCREMENT_VIEWS_RPC = "increment_gallery_view_count"


@dataclass
class SupabaseGalleryRepository(GalleryRepository):
    """Supabase implementation for client gallery records."""

    client: Client

    def get_gallery(self, gallery_id: UUID) -> GalleryRecord | None:
        """Return a gallery by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("id", str(gallery_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_gallery(response.data[0])

    def get_by_slug(self, slug: str) -> GalleryRecord | None:
        """Return a gallery by slug, if present."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("gallery_slug", slug)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_gallery(response.data[0])

    def slug_exists(self, slug: str) -> bool:
        """Return true when a gallery already uses the slug."""
        response = (
            self.client.table(_TABLE)
            .select("id")
            .eq("gallery_slug", slug)
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def find_for_credentials(
        self,
        code: str,
        now: datetime,
        email: str | None = None,
        slug: str | None = None,
    ) -> GalleryRecord | None:
        """Return the active, unexpired gallery matching the credentials."""
        query = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("status", STATUS_ACTIVE)
            .gt("expiration_date", now.isoformat())
            .eq("access_code", code)
        )
        if email is not None:
            query = query.eq("client_email", email)
        else:
            query = query.eq("gallery_slug", slug)
        response = query.limit(1).execute()
        if not response.data:
            return None
        return _parse_gallery(response.data[0])

    def list_galleries(self) -> list[GalleryRecord]:
        """Return all galleries, newest first."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_gallery(row) for row in response.data or []]

    def create_gallery(self, payload: dict[str, object]) -> GalleryRecord:
        """Insert a gallery row and return it."""
        response = self.client.table(_TABLE).insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create client gallery")
        return _parse_gallery(response.data[0])

    def update_gallery(
        self, gallery_id: UUID, payload: dict[str, object]
    ) -> GalleryRecord | None:
        """Update a gallery row and return it, or None when missing."""
        response = (
            self.client.table(_TABLE)
            .update({**payload, "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("id", str(gallery_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_gallery(response.data[0])

    def delete_gallery(self, gallery_id: UUID) -> None:
        """Delete a gallery row."""
        self.client.table(_TABLE).delete().eq("id", str(gallery_id)).execute()

    def increment_view_count(self, gallery_id: UUID, accessed_at: datetime) -> int:
        """Increment views server-side in one statement and return the new count."""
        response = self.client.rpc(
            _INCREMENT_VIEWS_RPC,
            {
                "target_gallery_id": str(gallery_id),
                "accessed_at": accessed_at.isoformat(),
            },
        ).execute()
        data = response.data
        if isinstance(data, list):
            data = data[0] if data else None
        if isinstance(data, dict):
            data = data.get(_INCREMENT_VIEWS_RPC, data.get("view_count"))
        if data is None:
            raise RuntimeError(f"Gallery not found for view increment: {gallery_id}")
        return int(data)


def _parse_instant(raw: object) -> datetime | None:
    if not isinstance(raw, str) or not raw:
        return None
    value = datetime.fromisoformat(raw)
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _parse_gallery(row: dict[str, object]) -> GalleryRecord:
    """Parse a client_galleries row into a domain model."""
    wedding_raw = row.get("wedding_date")
    allow_downloads = row.get("allow_downloads")
    expiration = _parse_instant(row.get("expiration_date"))
    return GalleryRecord(
        id=UUID(str(row["id"])),
        client_email=str(row.get("client_email") or ""),
        gallery_slug=str(row.get("gallery_slug") or ""),
        access_code=str(row.get("access_code") or ""),
        status=str(row.get("status") or ""),
        expiration_date=expiration or datetime.min.replace(tzinfo=UTC),
        view_count=int(row.get("view_count") or 0),
        last_accessed_at=_parse_instant(row.get("last_accessed_at")),
        images=[str(image) for image in row.get("images") or []],
        bride_name=row.get("bride_name"),
        groom_name=row.get("groom_name"),
        wedding_date=date.fromisoformat(wedding_raw[:10])
        if isinstance(wedding_raw, str) and wedding_raw
        else None,
        cover_image=row.get("cover_image"),
        access_password=row.get("access_password"),
        allow_downloads=True if allow_downloads is None else bool(allow_downloads),
        created_at=_parse_instant(row.get("created_at")),
    )
