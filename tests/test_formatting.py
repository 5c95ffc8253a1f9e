# =============================================================================
# tests/test_formatting.py - Date, Phone and Size Formatting Tests
# =============================================================================
# Run with: pytest tests/test_formatting.py -v
# =============================================================================

from datetime import date, datetime, timezone

import pytest

from lib.formatting import (
    format_file_size,
    format_phone,
    korean_date,
    korean_spaced_date,
    month_label,
    month_options,
    parse_date,
    parse_datetime,
    short_date,
)


class TestParseDatetime:
    """Tests for parse_datetime()."""

    @pytest.mark.parametrize("value,expected", [
        ("2025-07-01", datetime(2025, 7, 1)),
        ("2025-07-01T03:00:00", datetime(2025, 7, 1, 3)),
        ("25년07월01일", datetime(2025, 7, 1)),
        ("25년 07월 01일", datetime(2025, 7, 1)),
        ("01.03.15", datetime(2001, 3, 15)),
        ("2025.7.1", datetime(2025, 7, 1)),
        ("99.03.02", datetime(1999, 3, 2)),
        ("2025년07월01일", datetime(2025, 7, 1)),
        ("2025/07/01", datetime(2025, 7, 1)),
        (date(2025, 7, 1), datetime(2025, 7, 1)),
    ])
    def test_accepted_formats(self, value, expected):
        assert parse_datetime(value) == expected

    def test_offset_timestamp_is_converted_to_kst(self):
        assert parse_datetime("2025-07-01T09:00:00+09:00") == datetime(2025, 7, 1, 9)
        assert parse_datetime("2025-07-01T00:00:00+00:00") == datetime(2025, 7, 1, 9)

    def test_utc_is_converted_to_kst(self):
        assert parse_datetime("2025-06-30T16:00:00Z") == datetime(2025, 7, 1, 1)
        aware = datetime(2025, 6, 30, 16, tzinfo=timezone.utc)
        assert parse_datetime(aware) == datetime(2025, 7, 1, 1)

    @pytest.mark.parametrize("value", [None, "", "  ", "미정", "25년13월01일", 20250701, "2025/02/30", "3월", "1", "07.01"])
    def test_unparseable_returns_none(self, value):
        assert parse_datetime(value) is None

    def test_parse_date(self):
        assert parse_date("2025-07-01T10:00:00Z") == date(2025, 7, 1)
        assert parse_date("nope") is None


class TestLabels:
    """Tests for month and Korean date labels."""

    def test_month_label(self):
        assert month_label("2025-07-01") == "25년07월"
        assert month_label("2009-12-31") == "09년12월"
        assert month_label(None) is None

    def test_korean_dates(self):
        assert korean_date("2025-07-01") == "25년07월01일"
        assert korean_spaced_date(date(2025, 3, 4)) == "25년 03월 04일"
        assert short_date(date(2001, 3, 15)) == "01.03.15"
        assert korean_date("bad") == ""

    def test_month_options_cross_year(self):
        assert month_options((2024, 11), (2025, 1)) == ["24년11월", "24년12월", "25년01월"]

    def test_default_month_options(self):
        options = month_options()
        assert options[0] == "24년11월"
        assert options[-1] == "26년12월"
        assert len(options) == 26


class TestFormatPhone:
    """Tests for format_phone()."""

    @pytest.mark.parametrize("raw,expected", [
        ("01012345678", "010-1234-5678"),
        ("010-1234-5678", "010-1234-5678"),
        ("010 1234 5678 99", "010-1234-5678"),
        ("0101234", "010-1234-"),
        ("0101", "010-1"),
        ("01", "01"),
        ("", ""),
        (None, ""),
    ])
    def test_format(self, raw, expected):
        assert format_phone(raw) == expected


class TestFormatFileSize:
    @pytest.mark.parametrize("size,expected", [
        (0, "0 Bytes"),
        (None, "0 Bytes"),
        (500, "500 Bytes"),
        (1536, "1.5 KB"),
        (1048576, "1 MB"),
    ])
    def test_format(self, size, expected):
        assert format_file_size(size) == expected
