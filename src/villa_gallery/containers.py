"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from villa_gallery.adapters.cloudinary_client import HttpxCloudinaryClient, MediaClient
from villa_gallery.config import Settings
from villa_gallery.services.photos import PhotoService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    media_client: MediaClient
    photo_service: PhotoService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    media_client = HttpxCloudinaryClient.create(
        cloud_name=resolved_settings.cloudinary_cloud_name,
        api_key=resolved_settings.cloudinary_api_key,
        api_secret=resolved_settings.cloudinary_api_secret,
        base_url=resolved_settings.cloudinary_base_url,
        timeout=resolved_settings.upstream_timeout_seconds,
    )
    photo_service = PhotoService(
        client=media_client,
        prefix=resolved_settings.gallery_prefix,
        max_results=resolved_settings.max_results,
    )

    async def close_resources() -> None:
        await media_client.close()

    return AppContainer(
        settings=resolved_settings,
        media_client=media_client,
        photo_service=photo_service,
        close_resources=close_resources,
    )
