"""Domain errors for gallery access."""

from uuid import UUID


class GalleryAccessError(Exception):
    """Base class for gallery access failures."""


class GalleryNotFoundError(GalleryAccessError):
    """Raised when a gallery id does not resolve to a record."""

    def __init__(self, gallery_id: UUID | str) -> None:
        super().__init__(f"Gallery not found: {gallery_id}")
        self.gallery_id = gallery_id


class ImageNotInGalleryError(GalleryAccessError):
    """Raised when an image id is not part of the gallery."""


class DownloadsDisabledError(GalleryAccessError):
    """Raised when downloads are turned off for a gallery."""


class SessionRequiredError(GalleryAccessError):
    """Raised when a client action arrives without a valid session."""


class AnalyticsSessionNotFoundError(GalleryAccessError):
    """Raised when an analytics session does not belong to the caller."""
