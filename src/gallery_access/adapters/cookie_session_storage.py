"""Signed-cookie session storage for HTTP clients."""

from collections.abc import Mapping
from dataclasses import dataclass, field

import jwt
from fastapi import Response

from gallery_access.services.sessions import SESSION_TTL, SessionStorage

_ALGORITHM = "HS256"


@dataclass
class CookieSessionStorage(SessionStorage):
    """Keeps session values in HS256-signed cookies held by the browser.

    Writes are buffered and flushed onto the outgoing response with
    :meth:`apply`. A cookie whose signature does not verify reads as absent.
    """

    secret: str
    cookies: Mapping[str, str]
    secure: bool = True
    max_age_seconds: int = int(SESSION_TTL.total_seconds())
    _pending: dict[str, str | None] = field(default_factory=dict)

    def get_item(self, key: str) -> str | None:
        if key in self._pending:
            return self._pending[key]
        raw = self.cookies.get(key)
        if not raw:
            return None
        try:
            payload = jwt.decode(raw, self.secret, algorithms=[_ALGORITHM])
        except jwt.InvalidTokenError:
            return None
        value = payload.get("value")
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        self._pending[key] = value

    def remove_item(self, key: str) -> None:
        self._pending[key] = None

    def apply(self, response: Response) -> None:
        """Write buffered changes as Set-Cookie headers."""
        for key, value in self._pending.items():
            if value is None:
                response.delete_cookie(key, httponly=True, secure=self.secure)
                continue
            token = jwt.encode({"value": value}, self.secret, algorithm=_ALGORITHM)
            response.set_cookie(
                key,
                token,
                max_age=self.max_age_seconds,
                httponly=True,
                secure=self.secure,
                samesite="lax",
            )
        self._pending.clear()
