"""Photo gallery service backed by the media-hosting API."""

from dataclasses import dataclass

from villa_gallery.adapters.cloudinary_client import MediaClient
from villa_gallery.domain.photos import PhotoRecord, UpstreamResource
from villa_gallery.services.metadata import normalize_resource


@dataclass
class PhotoService:
    """Application service for listing, fetching and deleting photos."""

    client: MediaClient
    prefix: str
    max_results: int = 100

    async def list_photos(self) -> list[PhotoRecord]:
        """Return gallery photos, newest first."""
        raw = await self.client.list_resources(self.prefix, self.max_results)
        resources = raw.get("resources") or []
        photos = [
            normalize_resource(UpstreamResource.model_validate(item))
            for item in resources
        ]
        return sorted(photos, key=lambda photo: photo.upload_date, reverse=True)

    async def get_photo(self, public_id: str) -> PhotoRecord:
        """Return a single photo by public id."""
        raw = await self.client.get_resource(public_id)
        return normalize_resource(UpstreamResource.model_validate(raw))

    async def delete_photo(self, public_id: str) -> bool:
        """Delete a photo, returning true when the upstream reports success."""
        raw = await self.client.destroy(public_id)
        return raw.get("result") == "ok"
