"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from gallery_access.adapters.supabase_engagement_repository import (
    SupabaseEngagementRepository,
)
from gallery_access.adapters.supabase_gallery_repository import (
    SupabaseGalleryRepository,
)
from gallery_access.config import Settings
from gallery_access.services.auth import AuthenticationService
from gallery_access.services.engagement import (
    EngagementRepository,
    EngagementService,
)
from gallery_access.services.expiration import ExpirationService
from gallery_access.services.galleries import GalleryRepository, GalleryService
from gallery_access.services.identifiers import IdentifierService
from gallery_access.services.metrics import MetricsService
from gallery_access.services.sessions import SessionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    identifier_service: IdentifierService
    gallery_service: GalleryService
    session_service: SessionService
    metrics_service: MetricsService
    auth_service: AuthenticationService
    expiration_service: ExpirationService
    engagement_service: EngagementService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    gallery_repository = SupabaseGalleryRepository(supabase_client)
    engagement_repository = SupabaseEngagementRepository(supabase_client)

    async def close_resources() -> None:
        return None

    return wire_services(
        resolved_settings,
        gallery_repository=gallery_repository,
        engagement_repository=engagement_repository,
        close_resources=close_resources,
    )


def wire_services(
    settings: Settings,
    gallery_repository: GalleryRepository,
    engagement_repository: EngagementRepository,
    close_resources: Callable[[], Awaitable[None]],
) -> AppContainer:
    """Build services on top of the given repositories."""
    identifier_service = IdentifierService(gallery_repository)
    session_service = SessionService(key=settings.session_cookie_name)
    metrics_service = MetricsService(
        gallery_repository=gallery_repository,
        engagement_repository=engagement_repository,
    )
    return AppContainer(
        settings=settings,
        identifier_service=identifier_service,
        gallery_service=GalleryService(
            repository=gallery_repository,
            identifiers=identifier_service,
            default_expiration_days=settings.default_expiration_days,
            access_code_length=settings.access_code_length,
        ),
        session_service=session_service,
        metrics_service=metrics_service,
        auth_service=AuthenticationService(
            gallery_repository=gallery_repository,
            metrics_service=metrics_service,
            session_service=session_service,
        ),
        expiration_service=ExpirationService(gallery_repository),
        engagement_service=EngagementService(
            gallery_repository=gallery_repository,
            repository=engagement_repository,
        ),
        close_resources=close_resources,
    )
