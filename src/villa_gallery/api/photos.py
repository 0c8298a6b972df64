"""Gallery photo endpoints."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from villa_gallery.adapters.cloudinary_client import CloudinaryError

if TYPE_CHECKING:
    from villa_gallery.containers import AppContainer
    from villa_gallery.domain.photos import PhotoRecord

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/photos", tags=["photos"])


@router.get("")
async def list_photos(request: Request) -> JSONResponse:
    """Return every gallery photo, newest first."""
    container: AppContainer = request.app.state.container
    logger.info("Fetching photos from Cloudinary")
    try:
        photos = await container.photo_service.list_photos()
    except Exception as exc:
        logger.exception("Failed to fetch photos")
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch photos", exc
        )
    logger.info("Found %d photos", len(photos))
    return JSONResponse(
        {
            "success": True,
            "photos": [photo_payload(photo) for photo in photos],
            "count": len(photos),
        }
    )


@router.get("/{photo_id:path}")
async def get_photo(photo_id: str, request: Request) -> JSONResponse:
    """Return a single photo by its public id."""
    _require_photo_id(photo_id)
    container: AppContainer = request.app.state.container
    logger.info("Fetching photo: %s", photo_id)
    try:
        photo = await container.photo_service.get_photo(photo_id)
    except Exception as exc:
        if isinstance(exc, CloudinaryError) and exc.is_not_found:
            logger.info("Photo not found: %s", photo_id)
            return _error_response(status.HTTP_404_NOT_FOUND, "Photo not found", exc)
        logger.exception("Failed to fetch photo", extra={"photo_id": photo_id})
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch photo", exc
        )
    return JSONResponse({"success": True, "photo": photo_payload(photo)})


@router.delete("/{photo_id:path}")
async def delete_photo(photo_id: str, request: Request) -> JSONResponse:
    """Delete a photo by its public id."""
    _require_photo_id(photo_id)
    container: AppContainer = request.app.state.container
    logger.info("Deleting photo: %s", photo_id)
    try:
        deleted = await container.photo_service.delete_photo(photo_id)
    except Exception as exc:
        logger.exception("Failed to delete photo", extra={"photo_id": photo_id})
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to delete photo", exc
        )
    if not deleted:
        logger.warning("Photo not found or already deleted: %s", photo_id)
        return JSONResponse(
            {
                "success": False,
                "error": "Photo not found or already deleted",
                "photoId": photo_id,
            },
            status_code=status.HTTP_404_NOT_FOUND,
        )
    logger.info("Successfully deleted photo: %s", photo_id)
    return JSONResponse(
        {
            "success": True,
            "message": "Photo deleted successfully",
            "photoId": photo_id,
        }
    )


def photo_payload(photo: PhotoRecord) -> dict[str, str]:
    """Serialize a photo record into the gallery JSON shape."""
    return {
        "id": photo.id,
        "title": photo.title,
        "category": photo.category,
        "imageUrl": photo.image_url,
        "uploadDate": format_timestamp(photo.upload_date),
        "fileName": photo.file_name,
        "publicId": photo.public_id,
    }


def format_timestamp(value: datetime) -> str:
    """Format a datetime as UTC ISO-8601 with millisecond precision."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return (
        value.astimezone(UTC)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def _require_photo_id(photo_id: str) -> None:
    if not photo_id:
        raise StarletteHTTPException(status_code=status.HTTP_404_NOT_FOUND)


def _error_response(status_code: int, error: str, exc: Exception) -> JSONResponse:
    return JSONResponse(
        {"success": False, "error": error, "message": str(exc)},
        status_code=status_code,
    )
