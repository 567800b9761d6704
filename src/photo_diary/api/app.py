"""FastAPI application factory."""

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, File, Request, UploadFile, status
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.types import Scope

from photo_diary.api.auth import require_admin
from photo_diary.app_logging import configure_logging
from photo_diary.containers import AppContainer
from photo_diary.domain.errors import (
    NoCandidatesError,
    PhotoDiaryError,
    ServerMisconfiguredError,
    StoreUnwritableError,
    UnauthorizedError,
    UploadDirectoryUnreadableError,
    UploadMissingError,
    UploadRejectedTypeError,
    UploadTooLargeError,
)
from photo_diary.domain.photos import PhotoFilter
from photo_diary.services.uploads import UploadRoute

IMMUTABLE_CACHE_CONTROL = "public, max-age=31536000, immutable"

_ERROR_STATUS: tuple[tuple[type[PhotoDiaryError], int], ...] = (
    (NoCandidatesError, status.HTTP_404_NOT_FOUND),
    (UploadMissingError, status.HTTP_400_BAD_REQUEST),
    (UploadRejectedTypeError, status.HTTP_400_BAD_REQUEST),
    (UploadTooLargeError, 413),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (ServerMisconfiguredError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (StoreUnwritableError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (UploadDirectoryUnreadableError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


class ImmutableStaticFiles(StaticFiles):
    """Static files served with long-lived cache headers."""

    def file_response(
        self,
        full_path: str | os.PathLike[str],
        stat_result: os.stat_result,
        scope: Scope,
        status_code: int = 200,
    ) -> Response:
        response = super().file_response(full_path, stat_result, scope, status_code)
        response.headers["Cache-Control"] = IMMUTABLE_CACHE_CONTROL
        return response


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)
    settings = container.settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Photo Diary backend running on http://%s:%s", settings.host, settings.port
        )
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(PhotoDiaryError)
    async def photo_diary_error_handler(
        request: Request, exc: PhotoDiaryError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=_status_for(exc), content={"error": exc.message}
        )

    @app.get("/api/health")
    async def health() -> dict[str, bool]:
        """Simple health check endpoint."""
        return {"ok": True}

    @app.get("/api/photos")
    async def list_photos(request: Request) -> list[object]:
        """Return the full stored photo list."""
        state_container: AppContainer = request.app.state.container
        return state_container.photo_service.list_photos()

    @app.get("/api/photos/random")
    async def random_photo(request: Request) -> dict[str, object]:
        """Return one stored photo record chosen at random."""
        state_container: AppContainer = request.app.state.container
        return state_container.photo_service.random_photo().to_dict()

    @app.get("/random-photo")
    async def random_filtered_photo(
        request: Request, month: str | None = None, year: str | None = None
    ) -> dict[str, object]:
        """Return a random photo, optionally limited to a month and year."""
        state_container: AppContainer = request.app.state.container
        photo_filter = PhotoFilter.from_query(month=month, year=year)
        selected = state_container.photo_service.random_filtered_photo(photo_filter)
        return selected.to_dict()

    if not settings.uploads_enabled:
        logger.info("Uploads disabled; upload endpoints are not registered")
    else:
        public_dependencies = (
            [Depends(require_admin)] if settings.public_upload_requires_auth else []
        )
        if not settings.public_upload_requires_auth:
            logger.warning("Public upload endpoint accepts unauthenticated uploads")

        @app.post(
            "/api/photos/upload",
            status_code=status.HTTP_201_CREATED,
            dependencies=[Depends(require_admin)],
        )
        async def admin_upload(
            request: Request, photo: UploadFile | None = File(default=None)
        ) -> dict[str, object]:
            """Store an uploaded photo and return its record."""
            state_container: AppContainer = request.app.state.container
            record = await state_container.upload_service.accept(
                photo, UploadRoute.ADMIN
            )
            return record.to_dict()

        @app.post("/upload", dependencies=public_dependencies)
        async def public_upload(
            request: Request, photo: UploadFile | None = File(default=None)
        ) -> dict[str, object]:
            """Store an uploaded photo using the legacy response shape."""
            state_container: AppContainer = request.app.state.container
            record = await state_container.upload_service.accept(
                photo, UploadRoute.PUBLIC
            )
            return {
                "message": "Photo uploaded!",
                "photo": {
                    "filename": record.filename,
                    "dateUploaded": record.date_uploaded,
                },
            }

    app.mount(
        "/uploads",
        ImmutableStaticFiles(directory=settings.uploads_dir),
        name="uploads",
    )
    app.mount("/photos", StaticFiles(directory=settings.uploads_dir), name="photos")

    return app


def _status_for(exc: PhotoDiaryError) -> int:
    """Map a domain error to its HTTP status."""
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR
