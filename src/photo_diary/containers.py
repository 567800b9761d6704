"""Dependency container wiring for the application."""

from dataclasses import dataclass
from zoneinfo import ZoneInfo

from photo_diary.adapters.json_photo_repository import JsonPhotoRepository
from photo_diary.adapters.local_upload_storage import LocalUploadStorage
from photo_diary.config import Settings, resolve_admin_token
from photo_diary.services.access import AccessGuard
from photo_diary.services.photos import PhotoService
from photo_diary.services.uploads import UploadService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    photo_service: PhotoService
    upload_service: UploadService
    access_guard: AccessGuard


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    repository = JsonPhotoRepository(resolved_settings.photos_json_path)
    repository.ensure_initialized()
    storage = LocalUploadStorage(
        directory=resolved_settings.uploads_dir,
        max_bytes=resolved_settings.max_upload_bytes,
    )
    storage.ensure_directory()
    photo_service = PhotoService(
        repository=repository,
        upload_directory=storage,
        timezone=ZoneInfo(resolved_settings.photo_timezone),
    )
    upload_service = UploadService(repository=repository, storage=storage)
    access_guard = AccessGuard(
        secret=resolve_admin_token(resolved_settings.admin_token)
    )
    return AppContainer(
        settings=resolved_settings,
        photo_service=photo_service,
        upload_service=upload_service,
        access_guard=access_guard,
    )
