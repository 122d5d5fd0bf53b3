"""Client-held gallery sessions."""

import json
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol

from gallery_access.domain.galleries import GalleryRecord
from gallery_access.domain.sessions import GallerySession

logger = logging.getLogger(__name__)

SESSION_KEY = "client_gallery_session"
SESSION_TTL = timedelta(hours=2)


class SessionStorage(Protocol):
    """Client-side key/value storage that holds the session."""

    def get_item(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""

    def set_item(self, key: str, value: str) -> None:
        """Store a value under a key, replacing any previous value."""

    def remove_item(self, key: str) -> None:
        """Remove the value stored under a key."""


@dataclass
class InMemorySessionStorage(SessionStorage):
    """Dictionary-backed storage for a single client context."""

    items: dict[str, str] = field(default_factory=dict)

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


@dataclass
class SessionService:
    """Issues, reads and clears the single session of a client context.

    Sessions are never refreshed by use and there is no server-side
    revocation list: a stored session stays valid until ``expires_at``.
    """

    ttl: timedelta = SESSION_TTL
    key: str = SESSION_KEY

    def create_session(
        self,
        storage: SessionStorage,
        gallery: GalleryRecord,
        code: str,
        now: datetime | None = None,
    ) -> GallerySession:
        """Write a new session for the gallery, overwriting any prior one."""
        accessed_at = now or datetime.now(tz=UTC)
        session = GallerySession(
            gallery_id=gallery.id,
            gallery_slug=gallery.gallery_slug,
            client_email=gallery.client_email,
            code=code,
            accessed_at=accessed_at,
            expires_at=accessed_at + self.ttl,
        )
        storage.set_item(self.key, json.dumps(session.to_payload()))
        return session

    def get_session(
        self, storage: SessionStorage, now: datetime | None = None
    ) -> GallerySession | None:
        """Return the stored session, clearing it when expired or unreadable."""
        raw = storage.get_item(self.key)
        if raw is None:
            return None
        try:
            session = GallerySession.from_payload(json.loads(raw))
        except (AttributeError, KeyError, TypeError, ValueError):
            logger.warning("Discarding unreadable gallery session")
            storage.remove_item(self.key)
            return None
        if session.is_expired(now or datetime.now(tz=UTC)):
            storage.remove_item(self.key)
            return None
        return session

    def clear_session(self, storage: SessionStorage) -> None:
        storage.remove_item(self.key)
