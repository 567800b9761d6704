"""Domain models for photo records and selection filters."""

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime, tzinfo

PHOTOS_URL_PREFIX = "/photos"
UPLOADS_URL_PREFIX = "/uploads"
EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
LAST_ZERO_BASED_MONTH = 11

_KNOWN_KEYS = {"filename", "url", "uploadedAt", "dateUploaded"}
_TIMESTAMP_KEYS = {"uploadedAt", "dateUploaded"}
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

Timestamp = str | int | float


def photo_url(filename: str, prefix: str = PHOTOS_URL_PREFIX) -> str:
    """Return the served URL for a stored file name."""
    return f"{prefix}/{filename}"


@dataclass(frozen=True)
class PhotoRecord:
    """Metadata for one uploaded photo as persisted in the record store."""

    filename: str
    url: str | None = None
    uploaded_at: Timestamp | None = None
    date_uploaded: Timestamp | None = None
    extra: dict[str, object] = field(default_factory=dict)

    @property
    def resolved_url(self) -> str:
        """Return the stored URL, or the derived /photos URL when absent."""
        return self.url or photo_url(self.filename)

    @property
    def timestamp(self) -> Timestamp | None:
        """Return the raw upload timestamp, preferring uploadedAt."""
        return self.uploaded_at or self.date_uploaded

    @classmethod
    def from_dict(cls, payload: dict[str, object]) -> "PhotoRecord":
        """Build a record from its persisted JSON object."""
        filename = payload.get("filename")
        if not isinstance(filename, str) or not filename:
            raise ValueError("Photo record requires a non-empty filename")
        extra = {key: value for key, value in payload.items() if key not in _KNOWN_KEYS}
        fields: dict[str, Timestamp | None] = {}
        for key, attr in (
            ("url", "url"),
            ("uploadedAt", "uploaded_at"),
            ("dateUploaded", "date_uploaded"),
        ):
            value = payload.get(key)
            if value is None or isinstance(value, str):
                fields[attr] = value
            elif key in _TIMESTAMP_KEYS and _is_epoch_millis(value):
                fields[attr] = value
            else:
                extra[key] = value
        return cls(filename=filename, extra=extra, **fields)

    def to_dict(self) -> dict[str, object]:
        """Return the persisted JSON object for this record."""
        payload: dict[str, object] = {"filename": self.filename}
        if self.url is not None:
            payload["url"] = self.url
        if self.uploaded_at is not None:
            payload["uploadedAt"] = self.uploaded_at
        if self.date_uploaded is not None:
            payload["dateUploaded"] = self.date_uploaded
        payload.update(self.extra)
        return payload


@dataclass(frozen=True)
class SelectedPhoto:
    """A photo picked for display."""

    filename: str
    url: str
    uploaded_at: Timestamp | None = None

    @classmethod
    def from_record(cls, record: PhotoRecord) -> "SelectedPhoto":
        return cls(
            filename=record.filename,
            url=record.resolved_url,
            uploaded_at=record.timestamp,
        )

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"filename": self.filename, "url": self.url}
        if self.uploaded_at:
            payload["uploadedAt"] = self.uploaded_at
        return payload


def effective_timestamp(record: PhotoRecord) -> datetime | None:
    """Return the timestamp used for filtering.

    Falls back from uploadedAt to dateUploaded to the Unix epoch; empty
    values fall through like absent ones. Strings are ISO-8601 (naive values
    read as UTC), numbers are milliseconds since the epoch. Returns None when
    a value is present but cannot be parsed, so such records never match a
    date filter.
    """
    raw = record.timestamp
    if not raw:
        return EPOCH
    if not isinstance(raw, str):
        try:
            return datetime.fromtimestamp(raw / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    try:
        parsed = datetime.fromisoformat(raw.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _is_epoch_millis(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def normalize_month(month: int) -> int:
    """Return a zero-based month index.

    Months are accepted in either the 0-11 or the 1-12 convention. Values
    greater than 11 are interpreted as 1-12 and normalized by subtracting 1;
    values 0-11 pass through unchanged. So 12 selects December (index 11)
    while 1 selects February (index 1).
    """
    if month > LAST_ZERO_BASED_MONTH:
        return month - 1
    return month


def parse_query_int(raw: str | None) -> tuple[int | None, bool]:
    """Parse a loose integer query value.

    Returns ``(value, valid)``. Blank or absent input means no value. Leading
    digits are read the way legacy clients expect (``"3abc"`` is 3); input
    without leading digits is reported as invalid.
    """
    if raw is None or raw == "":
        return None, True
    match = _LEADING_INT.match(raw)
    if match is None:
        return None, False
    return int(match.group(1)), True


@dataclass(frozen=True)
class PhotoFilter:
    """Optional calendar constraints applied conjunctively."""

    month: int | None = None
    year: int | None = None
    unmatchable: bool = False

    @classmethod
    def from_query(cls, month: str | None, year: str | None) -> "PhotoFilter":
        """Build a filter from raw query-string values."""
        parsed_month, month_valid = parse_query_int(month)
        parsed_year, year_valid = parse_query_int(year)
        return cls(
            month=parsed_month,
            year=parsed_year,
            unmatchable=not (month_valid and year_valid),
        )

    @property
    def is_empty(self) -> bool:
        return self.month is None and self.year is None and not self.unmatchable

    def matches(self, record: PhotoRecord, timezone: tzinfo = UTC) -> bool:
        """Return True when the record's calendar date satisfies the filter."""
        if self.unmatchable:
            return False
        if self.month is None and self.year is None:
            return True
        moment = effective_timestamp(record)
        if moment is None:
            return False
        local = moment.astimezone(timezone)
        if self.year is not None and local.year != self.year:
            return False
        return self.month is None or local.month - 1 == normalize_month(self.month)
