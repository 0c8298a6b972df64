"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from villa_gallery.api.photos import format_timestamp
from villa_gallery.api.photos import router as photos_router
from villa_gallery.app_logging import configure_logging
from villa_gallery.config import parse_allowed_origins
from villa_gallery.containers import AppContainer

_UNMATCHED_STATUSES = {
    status.HTTP_404_NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)
    allowed_origins = parse_allowed_origins(container.settings.frontend_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        settings = app.state.container.settings
        logger.info("Zenith Villa Backend API running on port %d", settings.port)
        logger.info("Cloudinary configured for: %s", settings.cloudinary_cloud_name)
        logger.info("CORS enabled for: %s", ", ".join(allowed_origins))
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Zenith Villa Gallery API", lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(photos_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {
            "status": "OK",
            "message": "Zenith Villa Backend API is running",
            "timestamp": format_timestamp(datetime.now(tz=UTC)),
        }

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code in _UNMATCHED_STATUSES:
            return JSONResponse(
                {
                    "success": False,
                    "error": "Endpoint not found",
                    "path": _original_url(request),
                },
                status_code=status.HTTP_404_NOT_FOUND,
            )
        return JSONResponse(
            {"success": False, "error": str(exc.detail)},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", extra={"path": request.url.path})
        return JSONResponse(
            {
                "success": False,
                "error": "Internal server error",
                "message": str(exc),
            },
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return app


def _original_url(request: Request) -> str:
    """Return the raw request target, query string included."""
    raw_path = request.scope.get("raw_path")
    if raw_path:
        path = raw_path.split(b"?", maxsplit=1)[0].decode("latin-1")
    else:
        path = request.url.path
    query = request.scope.get("query_string", b"").decode("latin-1")
    if query:
        return f"{path}?{query}"
    return path
