"""Upload reconciliation: turn a stored file into a persisted record."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Protocol

from photo_diary.domain.errors import UploadMissingError
from photo_diary.domain.photos import (
    PHOTOS_URL_PREFIX,
    UPLOADS_URL_PREFIX,
    PhotoRecord,
    photo_url,
)
from photo_diary.services.photos import PhotoRepository

logger = logging.getLogger(__name__)


class UploadRoute(Enum):
    """Upload entry points and their record conventions."""

    ADMIN = "admin"
    PUBLIC = "public"

    @property
    def url_prefix(self) -> str:
        return UPLOADS_URL_PREFIX if self is UploadRoute.ADMIN else PHOTOS_URL_PREFIX

    @property
    def writes_legacy_timestamp(self) -> bool:
        return self is UploadRoute.PUBLIC


class IncomingUpload(Protocol):
    """The subset of a multipart file the storage needs."""

    filename: str | None
    content_type: str | None

    async def read(self, size: int = -1) -> bytes:
        """Read up to size bytes of the file body."""


@dataclass(frozen=True)
class StoredUpload:
    """A file durably written under a generated name."""

    filename: str
    size: int


class UploadStorage(Protocol):
    """Durable storage for uploaded image files."""

    async def store(self, upload: IncomingUpload) -> StoredUpload:
        """Validate and write the upload, returning its generated name."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _isoformat(moment: datetime) -> str:
    """Return an ISO-8601 UTC timestamp with millisecond precision and Z suffix."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


@dataclass
class UploadService:
    """Service that stores uploads and appends their records."""

    repository: PhotoRepository
    storage: UploadStorage
    clock: Callable[[], datetime] = field(default=_utc_now)

    def reconcile(self, saved_filename: str, route: UploadRoute) -> PhotoRecord:
        """Append a record for a file already saved under saved_filename."""
        now = _isoformat(self.clock())
        record = PhotoRecord(
            filename=saved_filename,
            url=photo_url(saved_filename, route.url_prefix),
            uploaded_at=now,
            date_uploaded=now if route.writes_legacy_timestamp else None,
        )
        self.repository.append(record)
        return record

    async def accept(
        self, upload: IncomingUpload | None, route: UploadRoute
    ) -> PhotoRecord:
        """Store an incoming upload and record it."""
        if upload is None or not upload.filename:
            logger.info("Upload rejected", extra={"reason": "missing"})
            raise UploadMissingError()
        stored = await self.storage.store(upload)
        record = self.reconcile(stored.filename, route)
        logger.info(
            "Photo uploaded",
            extra={"photo_filename": stored.filename, "size": stored.size},
        )
        return record
