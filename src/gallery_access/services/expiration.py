"""Expiration window checks and extensions."""

import logging
import math
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

from gallery_access.domain.errors import GalleryNotFoundError
from gallery_access.domain.galleries import GalleryRecord
from gallery_access.services.galleries import GalleryRepository

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86_400


def is_expired(gallery: GalleryRecord, now: datetime | None = None) -> bool:
    """Return true once the gallery's expiration instant has been reached."""
    current = now or datetime.now(tz=UTC)
    return gallery.expiration_date <= current


def days_until_expiration(gallery: GalleryRecord, now: datetime | None = None) -> int:
    """Return whole days left, rounded up and floored at zero."""
    current = now or datetime.now(tz=UTC)
    remaining = (gallery.expiration_date - current).total_seconds()
    return max(0, math.ceil(remaining / SECONDS_PER_DAY))


@dataclass
class ExpirationService:
    """Administrative changes to a gallery's expiration window."""

    repository: GalleryRepository

    def extend_expiration(self, gallery_id: UUID, days: int) -> GalleryRecord:
        """Push the expiration forward by a number of days and return the record."""
        if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
            raise ValueError("days must be a positive integer")
        gallery = self.repository.get_gallery(gallery_id)
        if gallery is None:
            raise GalleryNotFoundError(gallery_id)
        extended = gallery.expiration_date + timedelta(days=days)
        updated = self.repository.update_gallery(
            gallery_id, {"expiration_date": extended.isoformat()}
        )
        if updated is None:
            raise GalleryNotFoundError(gallery_id)
        logger.info(
            "Extended gallery expiration",
            extra={
                "gallery_id": str(gallery_id),
                "days": days,
                "expiration_date": extended.isoformat(),
            },
        )
        return updated
