"""Photo listing and random selection."""

import logging
import random
from dataclasses import dataclass, field
from datetime import UTC, tzinfo
from typing import Protocol

from photo_diary.domain.errors import (
    EmptyStoreError,
    NoFilterMatchError,
    UploadDirectoryUnreadableError,
)
from photo_diary.domain.photos import (
    PhotoFilter,
    PhotoRecord,
    SelectedPhoto,
    photo_url,
)

logger = logging.getLogger(__name__)


class PhotoRepository(Protocol):
    """Persistence interface for the ordered photo record list."""

    def load_entries(self) -> list[object]:
        """Return the stored entries as persisted, including unparseable ones."""

    def load(self) -> list[PhotoRecord]:
        """Return all records, or an empty list when storage is unusable."""

    def save(self, records: list[PhotoRecord]) -> None:
        """Replace the persisted list."""

    def append(self, record: PhotoRecord) -> None:
        """Add one record to the end of the persisted list."""


class UploadDirectory(Protocol):
    """Read access to the image files on disk."""

    def list_image_files(self) -> list[str]:
        """Return the names of image files in the upload directory."""


def select_random(
    records: list[PhotoRecord],
    photo_filter: PhotoFilter,
    rng: random.Random,
    timezone: tzinfo = UTC,
) -> PhotoRecord:
    """Pick one record uniformly among those matching the filter.

    Raises EmptyStoreError for an empty list and NoFilterMatchError when the
    list is non-empty but nothing matches.
    """
    if not records:
        raise EmptyStoreError()
    candidates = [
        record for record in records if photo_filter.matches(record, timezone)
    ]
    if not candidates:
        raise NoFilterMatchError()
    return rng.choice(candidates)


@dataclass
class PhotoService:
    """Application service for reading photos."""

    repository: PhotoRepository
    upload_directory: UploadDirectory
    timezone: tzinfo = UTC
    rng: random.Random = field(default_factory=random.Random)

    def list_photos(self) -> list[object]:
        """Return every stored entry in insertion order, as persisted."""
        return self.repository.load_entries()

    def random_photo(self) -> PhotoRecord:
        """Return one stored record chosen uniformly, ignoring dates."""
        records = self.repository.load()
        if not records:
            raise EmptyStoreError("No photos")
        return self.rng.choice(records)

    def random_filtered_photo(self, photo_filter: PhotoFilter) -> SelectedPhoto:
        """Return a random photo matching the filter.

        An empty store falls back to picking any image file from the upload
        directory; that path has no timestamps, so the filter is ignored.
        """
        records = self.repository.load()
        if records:
            record = select_random(records, photo_filter, self.rng, self.timezone)
            return SelectedPhoto.from_record(record)
        return self._random_from_directory()

    def _random_from_directory(self) -> SelectedPhoto:
        try:
            files = self.upload_directory.list_image_files()
        except OSError as exc:
            logger.exception("Failed to list upload directory")
            raise UploadDirectoryUnreadableError() from exc
        if not files:
            raise EmptyStoreError("No photos yet")
        filename = self.rng.choice(files)
        return SelectedPhoto(filename=filename, url=photo_url(filename))
