"""Tests for note date resolution."""

import logging
from datetime import date, datetime, timedelta, timezone

from doc_timeline.dates.resolver import DateSource, parse_date, resolve_date

CREATED = datetime(2022, 2, 2, 12, 0, tzinfo=timezone.utc)
NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _now():
    return NOW


class TestParseDate:
    """Tests for parse_date()."""

    def test_date_object(self):
        assert parse_date(date(2023, 6, 1)) == datetime(2023, 6, 1, tzinfo=timezone.utc)

    def test_naive_datetime_is_utc(self):
        assert parse_date(datetime(2023, 6, 1, 8, 30)) == datetime(2023, 6, 1, 8, 30, tzinfo=timezone.utc)

    def test_aware_datetime_converted(self):
        plus_two = timezone(timedelta(hours=2))
        parsed = parse_date(datetime(2023, 6, 1, 10, 0, tzinfo=plus_two))
        assert parsed == datetime(2023, 6, 1, 8, 0, tzinfo=timezone.utc)
        assert parsed.tzinfo == timezone.utc

    def test_iso_strings(self):
        assert parse_date("2023-06-01") == datetime(2023, 6, 1, tzinfo=timezone.utc)
        assert parse_date("2023-06-01T10:30:00Z") == datetime(2023, 6, 1, 10, 30, tzinfo=timezone.utc)
        assert parse_date(" 2023-06-01 10:30 ") == datetime(2023, 6, 1, 10, 30, tzinfo=timezone.utc)

    def test_invalid_values(self):
        assert parse_date("not a date") is None
        assert parse_date("2023-13-45") is None
        assert parse_date("") is None
        assert parse_date(2023) is None
        assert parse_date(True) is None
        assert parse_date(None) is None
        assert parse_date(["2023-01-01"]) is None


class TestResolveDate:
    """Tests for the resolve_date() fallback cascade."""

    def test_metadata_wins(self):
        result = resolve_date({"creation_date": date(2023, 6, 1)}, "creation_date", CREATED, now=_now)
        assert result.date == datetime(2023, 6, 1, tzinfo=timezone.utc)
        assert result.source == DateSource.METADATA

    def test_falls_back_to_created(self):
        result = resolve_date({}, "creation_date", CREATED, now=_now)
        assert result.date == CREATED
        assert result.source == DateSource.CREATED

    def test_unparseable_metadata_falls_back(self):
        result = resolve_date({"creation_date": "someday"}, "creation_date", CREATED, now=_now)
        assert result.date == CREATED
        assert result.source == DateSource.CREATED

    def test_unparseable_metadata_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="doc_timeline.dates.resolver"):
            result = resolve_date({"creation_date": "2023/06/01"}, "creation_date", CREATED, now=_now)
        assert result.source == DateSource.CREATED
        assert "2023/06/01" in caplog.text

    def test_falls_back_to_now(self):
        result = resolve_date({"creation_date": "someday"}, "creation_date", None, now=_now)
        assert result.date == NOW
        assert result.source == DateSource.NOW

    def test_empty_property_skips_metadata(self):
        result = resolve_date({"": "2023-01-01", "date": "2023-01-01"}, "", CREATED, now=_now)
        assert result.source == DateSource.CREATED

    def test_other_property_name(self):
        result = resolve_date({"date": "2021-03-04"}, "date", None, now=_now)
        assert result.date == datetime(2021, 3, 4, tzinfo=timezone.utc)

    def test_default_clock_is_aware(self):
        result = resolve_date({}, "creation_date", None)
        assert result.source == DateSource.NOW
        assert result.date.tzinfo is not None
