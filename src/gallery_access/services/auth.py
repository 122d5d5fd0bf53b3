"""Client authentication against stored gallery credentials."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime

from gallery_access.domain.galleries import ClientCredentials, GalleryRecord
from gallery_access.domain.sessions import GallerySession
from gallery_access.services.expiration import is_expired
from gallery_access.services.galleries import GalleryRepository
from gallery_access.services.metrics import MetricsService
from gallery_access.services.sessions import SessionService, SessionStorage

logger = logging.getLogger(__name__)

MISSING_CREDENTIALS = "Missing credentials"
INVALID_CREDENTIALS = "Invalid credentials or gallery expired"
AUTHENTICATION_FAILED = "Authentication failed"


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a client authentication attempt."""

    success: bool
    gallery: GalleryRecord | None = None
    session: GallerySession | None = None
    error: str | None = None
    reason: str | None = None


def normalize_credentials(credentials: ClientCredentials) -> ClientCredentials | None:
    """Return trimmed, case-normalized credentials or None when incomplete.

    Exactly one of email and slug must accompany a non-blank code.
    """
    code = (credentials.code or "").strip().upper()
    email = (credentials.email or "").strip().lower() or None
    slug = (credentials.slug or "").strip() or None
    if not code or (email is None) == (slug is None):
        return None
    return ClientCredentials(code=code, email=email, slug=slug)


@dataclass
class AuthenticationService:
    """Validates a credential pair and opens a client session."""

    gallery_repository: GalleryRepository
    metrics_service: MetricsService
    session_service: SessionService

    def authenticate(
        self,
        credentials: ClientCredentials,
        storage: SessionStorage,
        now: datetime | None = None,
    ) -> AuthResult:
        """Authenticate a client and write a session into its storage.

        Every failed predicate yields the same error so callers cannot tell
        a wrong code from an expired or inactive gallery.
        """
        normalized = normalize_credentials(credentials)
        if normalized is None:
            return AuthResult(
                success=False, error=MISSING_CREDENTIALS, reason="validation"
            )

        checked_at = now or datetime.now(tz=UTC)
        try:
            gallery = self.gallery_repository.find_for_credentials(
                code=normalized.code,
                now=checked_at,
                email=normalized.email,
                slug=normalized.slug,
            )
        except Exception:
            logger.exception(
                "Gallery lookup failed during authentication",
                extra={"gallery_slug": normalized.slug},
            )
            return AuthResult(success=False, error=AUTHENTICATION_FAILED, reason="store")

        if gallery is None or not _matches(gallery, normalized, checked_at):
            logger.info(
                "Rejected client credentials", extra={"gallery_slug": normalized.slug}
            )
            return AuthResult(
                success=False, error=INVALID_CREDENTIALS, reason="invalid"
            )

        gallery = self._record_view(gallery, checked_at)
        session = self.session_service.create_session(
            storage, gallery, normalized.code, now=checked_at
        )
        logger.info(
            "Client authenticated", extra={"gallery_id": str(gallery.id)}
        )
        return AuthResult(success=True, gallery=gallery, session=session)

    def _record_view(
        self, gallery: GalleryRecord, accessed_at: datetime
    ) -> GalleryRecord:
        try:
            view_count = self.metrics_service.increment_view_count(
                gallery.id, accessed_at
            )
        except Exception:
            logger.exception(
                "Failed to increment gallery views",
                extra={"gallery_id": str(gallery.id)},
            )
            return gallery
        return replace(gallery, view_count=view_count, last_accessed_at=accessed_at)


def _matches(
    gallery: GalleryRecord, credentials: ClientCredentials, now: datetime
) -> bool:
    if not gallery.is_active or is_expired(gallery, now):
        return False
    if gallery.access_code.strip().upper() != credentials.code:
        return False
    if credentials.email is not None:
        return gallery.client_email.strip().lower() == credentials.email
    return gallery.gallery_slug == credentials.slug
