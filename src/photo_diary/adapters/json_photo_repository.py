"""JSON file-backed photo repository."""

import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass, field
from pathlib import Path

from photo_diary.domain.errors import StoreUnreadableError, StoreUnwritableError
from photo_diary.domain.photos import PhotoRecord
from photo_diary.services.photos import PhotoRepository

logger = logging.getLogger(__name__)


@dataclass
class JsonPhotoRepository(PhotoRepository):
    """Stores the photo list as a single JSON array file.

    Writes go through a temporary file and an atomic rename, and appends are
    serialized with a lock so concurrent uploads in one process are not lost.
    Appends extend the stored array as-is, so entries that do not parse as
    records are kept on disk and only skipped when records are loaded.
    Several processes writing the same file are not coordinated.
    """

    path: Path
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def ensure_initialized(self) -> None:
        """Create an empty list file when none exists."""
        with self._lock:
            if not self.path.exists():
                self._write([])

    def load_entries(self) -> list[object]:
        """Return the stored entries unparsed; unreadable storage is empty."""
        try:
            return self._read()
        except StoreUnreadableError as exc:
            logger.warning("Photo list unusable, treating as empty: %s", exc)
            return []

    def load(self) -> list[PhotoRecord]:
        """Return all valid records in stored order."""
        payload = self.load_entries()
        records: list[PhotoRecord] = []
        for index, entry in enumerate(payload):
            if not isinstance(entry, dict):
                logger.warning("Skipping non-object photo entry at index %d", index)
                continue
            try:
                records.append(PhotoRecord.from_dict(entry))
            except ValueError:
                logger.warning("Skipping malformed photo entry at index %d", index)
        return records

    def save(self, records: list[PhotoRecord]) -> None:
        """Replace the persisted list."""
        with self._lock:
            self._write([record.to_dict() for record in records])

    def append(self, record: PhotoRecord) -> None:
        """Append one record under the store lock."""
        with self._lock:
            self._write([*self.load_entries(), record.to_dict()])

    def _read(self) -> list[object]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise StoreUnreadableError(f"{self.path} does not exist") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise StoreUnreadableError(str(exc)) from exc
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StoreUnreadableError(f"invalid JSON: {exc}") from exc
        if not isinstance(payload, list):
            raise StoreUnreadableError("photo list is not a JSON array")
        return payload

    def _write(self, entries: list[object]) -> None:
        content = json.dumps(entries, indent=2)
        directory = self.path.parent
        tmp_name: str | None = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(content)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            logger.exception(
                "Failed to write photo list", extra={"path": str(self.path)}
            )
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise StoreUnwritableError() from exc
