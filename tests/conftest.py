"""Shared test fixtures."""

import random
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

import pytest

from photo_diary.adapters.json_photo_repository import JsonPhotoRepository
from photo_diary.adapters.local_upload_storage import LocalUploadStorage
from photo_diary.config import Settings
from photo_diary.containers import AppContainer
from photo_diary.domain.photos import PhotoRecord
from photo_diary.services.access import AccessGuard
from photo_diary.services.photos import PhotoRepository, PhotoService, UploadDirectory
from photo_diary.services.uploads import UploadService

FIXED_NOW = datetime(2024, 3, 5, 12, 30, tzinfo=UTC)


@dataclass
class InMemoryPhotoRepository(PhotoRepository):
    """In-memory photo repository for tests."""

    records: list[PhotoRecord] = field(default_factory=list)
    saves: int = 0

    def load_entries(self) -> list[object]:
        return [record.to_dict() for record in self.records]

    def load(self) -> list[PhotoRecord]:
        return list(self.records)

    def save(self, records: list[PhotoRecord]) -> None:
        self.saves += 1
        self.records = list(records)

    def append(self, record: PhotoRecord) -> None:
        self.save([*self.load(), record])


@dataclass
class FakeUploadDirectory(UploadDirectory):
    """Upload directory returning a fixed listing."""

    files: list[str] = field(default_factory=list)
    error: OSError | None = None

    def list_image_files(self) -> list[str]:
        if self.error is not None:
            raise self.error
        return list(self.files)


@dataclass
class FakeUpload:
    """Minimal stand-in for a multipart upload."""

    filename: str | None
    content_type: str | None
    content: bytes = b"fake-image-bytes"
    _offset: int = 0

    async def read(self, size: int = -1) -> bytes:
        if size < 0:
            size = len(self.content) - self._offset
        chunk = self.content[self._offset : self._offset + size]
        self._offset += len(chunk)
        return chunk


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        admin_token="admin-token",
        uploads_dir=tmp_path / "uploads",
        photos_json_path=tmp_path / "photos.json",
    )


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def container(settings: Settings, rng: random.Random) -> AppContainer:
    repository = JsonPhotoRepository(settings.photos_json_path)
    repository.ensure_initialized()
    storage = LocalUploadStorage(
        directory=settings.uploads_dir, max_bytes=settings.max_upload_bytes
    )
    storage.ensure_directory()
    return AppContainer(
        settings=settings,
        photo_service=PhotoService(
            repository=repository, upload_directory=storage, rng=rng
        ),
        upload_service=UploadService(
            repository=repository, storage=storage, clock=lambda: FIXED_NOW
        ),
        access_guard=AccessGuard(secret=settings.admin_token),
    )
