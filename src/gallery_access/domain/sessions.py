"""Domain models for client gallery sessions."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID


@dataclass(frozen=True)
class GallerySession:
    """Client-held proof of a prior successful authentication."""

    gallery_id: UUID
    client_email: str
    code: str
    accessed_at: datetime
    expires_at: datetime
    gallery_slug: str | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now

    def to_payload(self) -> dict[str, object]:
        """Serialize into the JSON-compatible storage layout."""
        return {
            "gallery_id": str(self.gallery_id),
            "gallery_slug": self.gallery_slug,
            "client_email": self.client_email,
            "code": self.code,
            "accessed_at": self.accessed_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
        }

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> "GallerySession":
        """Parse a stored payload; raises KeyError or ValueError when malformed."""
        slug = payload.get("gallery_slug")
        return cls(
            gallery_id=UUID(str(payload["gallery_id"])),
            gallery_slug=str(slug) if slug else None,
            client_email=str(payload.get("client_email") or ""),
            code=str(payload["code"]),
            accessed_at=_parse_instant(payload["accessed_at"]),
            expires_at=_parse_instant(payload["expires_at"]),
        )


def _parse_instant(raw: object) -> datetime:
    value = datetime.fromisoformat(str(raw))
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
