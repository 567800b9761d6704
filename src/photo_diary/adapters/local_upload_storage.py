"""Local disk storage for uploaded images."""

import logging
import re
import secrets
from dataclasses import dataclass
from pathlib import Path

from photo_diary.config import MAX_UPLOAD_BYTES
from photo_diary.domain.errors import UploadRejectedTypeError, UploadTooLargeError
from photo_diary.services.photos import UploadDirectory
from photo_diary.services.uploads import IncomingUpload, StoredUpload, UploadStorage

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".avif")
DEFAULT_EXTENSION = ".jpg"
CHUNK_SIZE = 1024 * 1024
IMAGE_FILE_PATTERN = re.compile(r"\.(jpe?g|png|gif|webp|avif)$", re.IGNORECASE)


def safe_extension(original_name: str | None) -> str:
    """Return the lower-cased extension if allowed, otherwise .jpg."""
    extension = Path(original_name or "").suffix.lower()
    return extension if extension in ALLOWED_EXTENSIONS else DEFAULT_EXTENSION


def generate_filename(original_name: str | None) -> str:
    """Return a random storage name keeping a normalized image extension."""
    return secrets.token_hex(12) + safe_extension(original_name)


@dataclass
class LocalUploadStorage(UploadStorage, UploadDirectory):
    """Writes uploads into a directory under random names."""

    directory: Path
    max_bytes: int = MAX_UPLOAD_BYTES

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    async def store(self, upload: IncomingUpload) -> StoredUpload:
        """Stream an image upload to disk, enforcing type and size limits."""
        content_type = upload.content_type or ""
        if not content_type.startswith("image/"):
            logger.info(
                "Upload rejected",
                extra={"reason": "type", "content_type": content_type},
            )
            raise UploadRejectedTypeError()
        filename = generate_filename(upload.filename)
        target = self.directory / filename
        size = 0
        try:
            with target.open("wb") as handle:
                while chunk := await upload.read(CHUNK_SIZE):
                    size += len(chunk)
                    if size > self.max_bytes:
                        logger.info("Upload rejected", extra={"reason": "size"})
                        raise UploadTooLargeError(
                            f"File too large (max {self.max_bytes // (1024 * 1024)}MB)"
                        )
                    handle.write(chunk)
        except BaseException:
            target.unlink(missing_ok=True)
            raise
        return StoredUpload(filename=filename, size=size)

    def list_image_files(self) -> list[str]:
        """Return image file names in the directory, sorted."""
        return sorted(
            entry.name
            for entry in self.directory.iterdir()
            if entry.is_file() and IMAGE_FILE_PATTERN.search(entry.name)
        )
