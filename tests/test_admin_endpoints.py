"""Tests for admin endpoints."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from fastapi.testclient import TestClient

from gallery_access.api.app import create_app
from gallery_access.containers import AppContainer
from tests.conftest import (
    InMemoryEngagementRepository,
    InMemoryGalleryRepository,
    make_gallery,
)

HEADERS = {"X-Admin-Token": "admin-token"}


def test_create_and_list_galleries(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    created = client.post(
        "/admin/galleries",
        json={
            "client_email": "Anna@Example.com",
            "bride_name": "Anna",
            "groom_name": "Ben",
            "images": ["img-1"],
        },
        headers=HEADERS,
    )
    listed = client.get("/admin/galleries", headers=HEADERS)

    assert created.status_code == 201
    gallery = created.json()["gallery"]
    assert gallery["gallery_slug"] == "anna-ben"
    assert gallery["client_email"] == "anna@example.com"
    assert gallery["status"] == "active"
    assert gallery["access_password"]
    assert listed.json()["galleries"][0]["id"] == gallery["id"]


def test_update_gallery(
    container: AppContainer, gallery_repository: InMemoryGalleryRepository
) -> None:
    gallery = gallery_repository.add(make_gallery())
    client = TestClient(create_app(container))

    updated = client.patch(
        f"/admin/galleries/{gallery.id}",
        json={"status": "inactive", "allow_downloads": False},
        headers=HEADERS,
    )
    invalid = client.patch(
        f"/admin/galleries/{gallery.id}", json={"status": "gone"}, headers=HEADERS
    )

    assert updated.status_code == 200
    assert updated.json()["gallery"]["status"] == "inactive"
    assert updated.json()["gallery"]["allow_downloads"] is False
    assert invalid.status_code == 422


def test_update_gallery_rejects_null_required_fields(
    container: AppContainer, gallery_repository: InMemoryGalleryRepository
) -> None:
    gallery = gallery_repository.add(make_gallery(cover_image="cover.jpg"))
    client = TestClient(create_app(container))

    rejected = client.patch(
        f"/admin/galleries/{gallery.id}",
        json={"expiration_date": None, "status": None, "client_email": None},
        headers=HEADERS,
    )
    cleared = client.patch(
        f"/admin/galleries/{gallery.id}",
        json={"cover_image": None},
        headers=HEADERS,
    )

    assert rejected.status_code == 422
    stored = gallery_repository.galleries[gallery.id]
    assert stored.expiration_date == gallery.expiration_date
    assert stored.status == gallery.status
    assert stored.client_email == gallery.client_email
    assert cleared.status_code == 200
    assert gallery_repository.galleries[gallery.id].cover_image is None


def test_missing_gallery_returns_404(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get(f"/admin/galleries/{uuid4()}", headers=HEADERS)

    assert response.status_code == 404


def test_delete_gallery(
    container: AppContainer, gallery_repository: InMemoryGalleryRepository
) -> None:
    gallery = gallery_repository.add(make_gallery())
    client = TestClient(create_app(container))

    response = client.delete(f"/admin/galleries/{gallery.id}", headers=HEADERS)

    assert response.status_code == 200
    assert gallery_repository.galleries == {}


def test_gallery_stats(
    container: AppContainer,
    gallery_repository: InMemoryGalleryRepository,
    engagement_repository: InMemoryEngagementRepository,
) -> None:
    gallery = gallery_repository.add(make_gallery(view_count=5))
    for image_id in ("img-1", "img-2"):
        engagement_repository.create_download(
            gallery.id, gallery.client_email, image_id, datetime.now(tz=UTC)
        )
    client = TestClient(create_app(container))

    response = client.get(f"/admin/galleries/{gallery.id}/stats", headers=HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert data["totalViews"] == 5
    assert data["totalSessions"] == 0
    assert data["totalDownloads"] == 2
    assert data["totalFavorites"] == 0
    assert data["lastAccessed"] is None
    assert data["daysUntilExpiration"] == 10


def test_gallery_stats_degrades_failed_counts(
    container: AppContainer,
    gallery_repository: InMemoryGalleryRepository,
    engagement_repository: InMemoryEngagementRepository,
) -> None:
    gallery = gallery_repository.add(make_gallery(view_count=5))
    engagement_repository.add_favorite(gallery.id, gallery.client_email, "img-1")
    engagement_repository.failing_counts.add("downloads")
    client = TestClient(create_app(container))

    response = client.get(f"/admin/galleries/{gallery.id}/stats", headers=HEADERS)

    assert response.status_code == 200
    assert response.json()["totalDownloads"] == 0
    assert response.json()["totalFavorites"] == 1


def test_extend_expiration(
    container: AppContainer, gallery_repository: InMemoryGalleryRepository
) -> None:
    expiration = datetime(2025, 1, 1, tzinfo=UTC)
    gallery = gallery_repository.add(make_gallery(expiration_date=expiration))
    client = TestClient(create_app(container))

    extended = client.post(
        f"/admin/galleries/{gallery.id}/extend", json={"days": 30}, headers=HEADERS
    )
    rejected = client.post(
        f"/admin/galleries/{gallery.id}/extend", json={"days": 0}, headers=HEADERS
    )

    assert extended.status_code == 200
    assert gallery_repository.galleries[
        gallery.id
    ].expiration_date == expiration + timedelta(days=30)
    assert rejected.status_code == 422


def test_identifier_previews(
    container: AppContainer, gallery_repository: InMemoryGalleryRepository
) -> None:
    gallery_repository.add(make_gallery(gallery_slug="anna-ben"))
    client = TestClient(create_app(container))

    slug = client.get(
        "/admin/identifiers/slug",
        params={"name_a": "Anna", "name_b": "Ben"},
        headers=HEADERS,
    )
    code = client.get(
        "/admin/identifiers/access-code", params={"length": 12}, headers=HEADERS
    )

    assert slug.json() == {"slug": "anna-ben-1"}
    assert len(code.json()["access_code"]) == 12
