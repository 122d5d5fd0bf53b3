"""View accounting and engagement statistics."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from gallery_access.domain.errors import GalleryNotFoundError
from gallery_access.domain.stats import GalleryStats
from gallery_access.services.engagement import EngagementRepository
from gallery_access.services.expiration import days_until_expiration
from gallery_access.services.galleries import GalleryRepository

logger = logging.getLogger(__name__)


@dataclass
class MetricsService:
    """Counts gallery views and aggregates engagement into snapshots."""

    gallery_repository: GalleryRepository
    engagement_repository: EngagementRepository

    def increment_view_count(
        self, gallery_id: UUID, accessed_at: datetime | None = None
    ) -> int:
        """Record one view with a single atomic store call and return the total."""
        return self.gallery_repository.increment_view_count(
            gallery_id, accessed_at or datetime.now(tz=UTC)
        )

    def get_gallery_stats(
        self, gallery_id: UUID, now: datetime | None = None
    ) -> GalleryStats:
        """Return a best-effort snapshot; failed sub-counts are reported as zero."""
        gallery = self.gallery_repository.get_gallery(gallery_id)
        if gallery is None:
            raise GalleryNotFoundError(gallery_id)
        repository = self.engagement_repository
        return GalleryStats(
            total_views=gallery.view_count,
            total_sessions=_safe_count(
                "analytics", gallery_id, repository.count_analytics_sessions
            ),
            total_downloads=_safe_count(
                "downloads", gallery_id, repository.count_downloads
            ),
            total_favorites=_safe_count(
                "favorites", gallery_id, repository.count_favorites
            ),
            last_accessed=gallery.last_accessed_at,
            days_until_expiration=days_until_expiration(gallery, now),
        )


def _safe_count(
    name: str, gallery_id: UUID, counter: Callable[[UUID], int]
) -> int:
    try:
        return counter(gallery_id)
    except Exception:
        logger.exception(
            "Failed to count gallery %s",
            name,
            extra={"gallery_id": str(gallery_id)},
        )
        return 0
