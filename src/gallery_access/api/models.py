"""Pydantic models for API request payloads."""

from datetime import date, datetime

from pydantic import BaseModel, Field


class ClientAuthRequest(BaseModel):
    """Credential pair submitted by a client."""

    code: str | None = None
    email: str | None = None
    slug: str | None = None


class ImageRequest(BaseModel):
    """Payload naming a single gallery image."""

    image_id: str = Field(min_length=1)


class AnalyticsStartRequest(BaseModel):
    """Payload for opening an analytics session."""

    images_viewed: int = Field(default=0, ge=0)


class AnalyticsUpdateRequest(BaseModel):
    """Payload for closing an analytics session."""

    images_viewed: int | None = Field(default=None, ge=0)
    session_end: datetime | None = None


class GalleryCreateRequest(BaseModel):
    """Operator payload for creating a gallery."""

    client_email: str = Field(min_length=3)
    bride_name: str = Field(min_length=1)
    groom_name: str = Field(min_length=1)
    expiration_date: datetime | None = None
    wedding_date: date | None = None
    cover_image: str | None = None
    images: list[str] = Field(default_factory=list)
    access_password: str | None = None
    allow_downloads: bool = True


class GalleryUpdateRequest(BaseModel):
    """Operator payload for editing a gallery."""

    client_email: str | None = None
    bride_name: str | None = None
    groom_name: str | None = None
    expiration_date: datetime | None = None
    wedding_date: date | None = None
    cover_image: str | None = None
    images: list[str] | None = None
    status: str | None = None
    access_code: str | None = None
    access_password: str | None = None
    allow_downloads: bool | None = None


class ExtendExpirationRequest(BaseModel):
    """Operator payload for extending a gallery's expiration."""

    days: int = Field(gt=0, le=3650)
