"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from villa_gallery.adapters.cloudinary_client import CloudinaryError, MediaClient
from villa_gallery.config import Settings
from villa_gallery.containers import AppContainer
from villa_gallery.services.photos import PhotoService


def make_resource(  # noqa: PLR0913
    public_id: str,
    created_at: str = "2024-05-01T10:00:00Z",
    original_filename: str | None = None,
    context: object = None,
    secure_url: str | None = None,
) -> dict[str, object]:
    """Build a raw upstream resource payload."""
    resource: dict[str, object] = {
        "public_id": public_id,
        "secure_url": secure_url
        or f"https://res.cloudinary.com/demo/image/upload/{public_id}.jpg",
        "created_at": created_at,
        "format": "jpg",
        "resource_type": "image",
    }
    if original_filename is not None:
        resource["original_filename"] = original_filename
    if context is not None:
        resource["context"] = context
    return resource


@dataclass
class FakeMediaClient(MediaClient):
    """In-memory media client for tests."""

    resources: dict[str, dict[str, object]] = field(default_factory=dict)
    list_error: Exception | None = None
    get_error: Exception | None = None
    destroy_error: Exception | None = None
    list_calls: list[tuple[str, int]] = field(default_factory=list)
    destroyed: list[str] = field(default_factory=list)

    def add(self, resource: dict[str, object]) -> None:
        self.resources[str(resource["public_id"])] = resource

    async def list_resources(self, prefix: str, max_results: int) -> dict[str, object]:
        self.list_calls.append((prefix, max_results))
        if self.list_error is not None:
            raise self.list_error
        matching = [
            resource
            for public_id, resource in self.resources.items()
            if public_id.startswith(prefix)
        ]
        return {"resources": matching[:max_results]}

    async def get_resource(self, public_id: str) -> dict[str, object]:
        if self.get_error is not None:
            raise self.get_error
        resource = self.resources.get(public_id)
        if resource is None:
            raise CloudinaryError(f"Resource not found - {public_id}", 404)
        return resource

    async def destroy(self, public_id: str) -> dict[str, object]:
        if self.destroy_error is not None:
            raise self.destroy_error
        if self.resources.pop(public_id, None) is None:
            return {"result": "not found"}
        self.destroyed.append(public_id)
        return {"result": "ok"}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        cloudinary_cloud_name="demo",
        cloudinary_api_key="api-key",
        cloudinary_api_secret="api-secret",
    )


@pytest.fixture
def media_client() -> FakeMediaClient:
    return FakeMediaClient()


@pytest.fixture
def photo_service(settings: Settings, media_client: FakeMediaClient) -> PhotoService:
    return PhotoService(
        client=media_client,
        prefix=settings.gallery_prefix,
        max_results=settings.max_results,
    )


@pytest.fixture
def container(
    settings: Settings,
    media_client: FakeMediaClient,
    photo_service: PhotoService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        media_client=media_client,
        photo_service=photo_service,
        close_resources=close_resources,
    )
