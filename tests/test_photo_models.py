"""Tests for photo domain models."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pytest

from photo_diary.domain.photos import (
    EPOCH,
    PhotoFilter,
    PhotoRecord,
    SelectedPhoto,
    effective_timestamp,
    normalize_month,
    parse_query_int,
)


def test_record_round_trips_known_and_unknown_keys() -> None:
    payload = {
        "filename": "a.jpg",
        "url": "/uploads/a.jpg",
        "uploadedAt": "2024-03-05T00:00:00Z",
        "caption": "beach",
    }

    record = PhotoRecord.from_dict(payload)

    assert record.uploaded_at == "2024-03-05T00:00:00Z"
    assert record.extra == {"caption": "beach"}
    assert record.to_dict() == payload


def test_record_requires_filename() -> None:
    with pytest.raises(ValueError):
        PhotoRecord.from_dict({"url": "/photos/x.jpg"})
    with pytest.raises(ValueError):
        PhotoRecord.from_dict({"filename": ""})


def test_resolved_url_falls_back_to_photos_path() -> None:
    assert PhotoRecord(filename="a.jpg").resolved_url == "/photos/a.jpg"
    assert PhotoRecord(filename="a.jpg", url="/uploads/a.jpg").resolved_url == (
        "/uploads/a.jpg"
    )


def test_effective_timestamp_prefers_uploaded_at() -> None:
    record = PhotoRecord(
        filename="a.jpg",
        uploaded_at="2024-03-05T00:00:00Z",
        date_uploaded="2020-01-01T00:00:00Z",
    )

    assert effective_timestamp(record) == datetime(2024, 3, 5, tzinfo=UTC)


def test_effective_timestamp_uses_legacy_alias_then_epoch() -> None:
    legacy = PhotoRecord(filename="a.jpg", date_uploaded="2021-07-01T10:00:00.000Z")

    assert effective_timestamp(legacy) == datetime(2021, 7, 1, 10, tzinfo=UTC)
    assert effective_timestamp(PhotoRecord(filename="b.jpg")) == EPOCH


def test_effective_timestamp_unparseable_is_none() -> None:
    record = PhotoRecord(filename="a.jpg", uploaded_at="soon")

    assert effective_timestamp(record) is None


def test_normalize_month_boundary() -> None:
    assert normalize_month(0) == 0
    assert normalize_month(1) == 1
    assert normalize_month(11) == 11
    assert normalize_month(12) == 11
    assert normalize_month(13) == 12


def test_parse_query_int_is_loose() -> None:
    assert parse_query_int(None) == (None, True)
    assert parse_query_int("") == (None, True)
    assert parse_query_int("2024") == (2024, True)
    assert parse_query_int("3abc") == (3, True)
    assert parse_query_int("abc") == (None, False)


def test_filter_matches_year_and_month() -> None:
    record = PhotoRecord(filename="a.jpg", uploaded_at="2024-03-05T00:00:00Z")

    assert PhotoFilter(year=2024, month=2).matches(record)
    assert PhotoFilter(month=2).matches(record)
    assert not PhotoFilter(year=2023).matches(record)
    assert not PhotoFilter(year=2024, month=3).matches(record)


def test_filter_month_twelve_selects_december() -> None:
    december = PhotoRecord(filename="d.jpg", uploaded_at="2024-12-24T12:00:00Z")
    february = PhotoRecord(filename="f.jpg", uploaded_at="2024-02-10T12:00:00Z")

    assert PhotoFilter(month=12).matches(december)
    assert not PhotoFilter(month=12).matches(february)
    assert PhotoFilter(month=1).matches(february)
    assert not PhotoFilter(month=13).matches(december)


def test_filter_uses_configured_timezone() -> None:
    record = PhotoRecord(filename="a.jpg", uploaded_at="2024-01-01T02:00:00Z")
    new_york = ZoneInfo("America/New_York")

    assert PhotoFilter(year=2024, month=0).matches(record)
    assert PhotoFilter(year=2023, month=11).matches(record, new_york)


def test_unparseable_query_filter_matches_nothing() -> None:
    record = PhotoRecord(filename="a.jpg", uploaded_at="2024-03-05T00:00:00Z")
    photo_filter = PhotoFilter.from_query(month="march", year=None)

    assert photo_filter.unmatchable
    assert not photo_filter.matches(record)


def test_empty_filter_matches_records_without_timestamp() -> None:
    photo_filter = PhotoFilter.from_query(month=None, year="")

    assert photo_filter.is_empty
    assert photo_filter.matches(PhotoRecord(filename="a.jpg", uploaded_at="soon"))


def test_selected_photo_omits_missing_timestamp() -> None:
    selected = SelectedPhoto.from_record(PhotoRecord(filename="a.jpg"))

    assert selected.to_dict() == {"filename": "a.jpg", "url": "/photos/a.jpg"}


def test_empty_timestamps_fall_back_to_epoch() -> None:
    record = PhotoRecord(filename="a.jpg", uploaded_at="", date_uploaded="")

    assert effective_timestamp(record) == EPOCH
    assert PhotoFilter(year=1970, month=0).matches(record)


def test_empty_uploaded_at_falls_back_to_legacy_alias() -> None:
    record = PhotoRecord(
        filename="a.jpg", uploaded_at="", date_uploaded="2022-08-01T00:00:00Z"
    )

    assert PhotoFilter(year=2022, month=7).matches(record)


def test_numeric_timestamps_are_epoch_milliseconds() -> None:
    payload = {"filename": "a.jpg", "uploadedAt": 1709596800000}

    record = PhotoRecord.from_dict(payload)

    assert record.uploaded_at == 1709596800000
    assert record.extra == {}
    assert record.to_dict() == payload
    assert effective_timestamp(record) == datetime(2024, 3, 5, tzinfo=UTC)
    assert PhotoFilter(year=2024, month=2).matches(record)


def test_boolean_timestamp_is_not_a_date() -> None:
    record = PhotoRecord.from_dict({"filename": "a.jpg", "dateUploaded": True})

    assert record.date_uploaded is None
    assert record.extra == {"dateUploaded": True}
    assert effective_timestamp(record) == EPOCH
