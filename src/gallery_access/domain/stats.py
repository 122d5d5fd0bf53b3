"""Domain models for gallery statistics."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class GalleryStats:
    """Derived, non-persisted engagement snapshot for a gallery."""

    total_views: int
    total_sessions: int
    total_downloads: int
    total_favorites: int
    last_accessed: datetime | None
    days_until_expiration: int

    def to_dict(self) -> dict[str, object]:
        return {
            "totalViews": self.total_views,
            "totalSessions": self.total_sessions,
            "totalDownloads": self.total_downloads,
            "totalFavorites": self.total_favorites,
            "lastAccessed": self.last_accessed.isoformat()
            if self.last_accessed
            else None,
            "daysUntilExpiration": self.days_until_expiration,
        }
