# =============================================================================
# lib/formatting.py - Date, Phone and Size Formatting
# =============================================================================
# Conventions used by the application form and the admin screens:
# - Month buckets "25년07월" and Korean dates "25년07월01일"
# - Form dates stored as "25.07.01" (birth date) and "25년 07월 01일"
# - Phone numbers "010-1234-5678"
#
# Parsing never raises: malformed stored values come back as None so that
# list filters can exclude the row instead of failing the whole screen.
# =============================================================================

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone
from typing import Any

import pandas as pd

# Korea has no DST, so a fixed offset is exact.
KST = timezone(timedelta(hours=9), "KST")

# Form-written dates, tried in order (2-digit years first)
KOREAN_DATE_FORMATS = ("%y년%m월%d일", "%Y년%m월%d일")
DOTTED_DATE_FORMATS = ("%y.%m.%d", "%Y.%m.%d")

_DOTTED_DATE = re.compile(r"^\d{2,4}\.\d{1,2}\.\d{1,2}\.?$")
# The lenient "mixed" parser only sees text that starts like an ISO date
_ISO_LIKE = re.compile(r"^\d{4}[-/]\d{1,2}[-/]\d{1,2}")


def parse_datetime(value: Any) -> datetime | None:
    """
    Parse a stored date or timestamp into a naive KST wall-clock datetime.

    Accepts:
        - date / datetime objects
        - ISO dates and timestamps ("2025-07-01", "2025-07-01T03:00:00Z")
        - "25년07월01일", "25년 07월 01일", "25.07.01", "2025.07.01"

    Two-digit years follow strptime: 00-68 are 20xx, 69-99 are 19xx.

    Timezone-aware values are converted to KST before the tz is dropped, so
    a row created at 2025-06-30T16:00:00Z belongs to July 1st.

    Returns:
        datetime, or None for empty or unparseable input
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        parsed = _parse_text(text)
        if parsed is None:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(KST).replace(tzinfo=None)
    return parsed


def _coerce(text: str, date_format: str) -> datetime | None:
    parsed = pd.to_datetime(text, format=date_format, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.to_pydatetime()


def _parse_text(text: str) -> datetime | None:
    if "년" in text:
        compact = re.sub(r"\s+", "", text)
        formats = KOREAN_DATE_FORMATS
    elif _DOTTED_DATE.match(text):
        compact = text.rstrip(".")
        formats = DOTTED_DATE_FORMATS
    elif _ISO_LIKE.match(text):
        return _coerce(text, "mixed")
    else:
        return None

    for date_format in formats:
        parsed = _coerce(compact, date_format)
        if parsed is not None:
            return parsed
    return None


def parse_date(value: Any) -> date | None:
    """Calendar date of a stored value, or None."""
    parsed = parse_datetime(value)
    return parsed.date() if parsed else None


def month_label(value: Any) -> str | None:
    """
    Month bucket label of a stored date.

    Example:
        month_label("2025-07-01") -> "25년07월"
    """
    parsed = parse_datetime(value)
    if parsed is None:
        return None
    return f"{parsed.year % 100:02d}년{parsed.month:02d}월"


def korean_date(value: Any) -> str:
    """"2025-07-01" -> "25년07월01일" ("" when unparseable)."""
    parsed = parse_datetime(value)
    if parsed is None:
        return ""
    return f"{parsed.year % 100:02d}년{parsed.month:02d}월{parsed.day:02d}일"


def korean_spaced_date(value: Any) -> str:
    """"2025-07-01" -> "25년 07월 01일", the form's preferred-practice-date format."""
    parsed = parse_datetime(value)
    if parsed is None:
        return ""
    return f"{parsed.year % 100:02d}년 {parsed.month:02d}월 {parsed.day:02d}일"


def short_date(value: Any) -> str:
    """"2001-03-15" -> "01.03.15", the form's birth-date format."""
    parsed = parse_datetime(value)
    if parsed is None:
        return ""
    return f"{parsed.year % 100:02d}.{parsed.month:02d}.{parsed.day:02d}"


def month_options(
    start: tuple[int, int] = (2024, 11),
    end: tuple[int, int] = (2026, 12),
) -> list[str]:
    """
    Month bucket labels offered by the payment-date filter, inclusive.

    Example:
        month_options((2024, 11), (2025, 1)) -> ["24년11월", "24년12월", "25년01월"]
    """
    labels = []
    year, month = start
    while (year, month) <= end:
        labels.append(f"{year % 100:02d}년{month:02d}월")
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return labels


def format_phone(raw: str | None) -> str:
    """
    Normalize a phone number to the dashed mobile format.

    Keeps digits only, truncates to 11, then inserts dashes:
        "01012345678" -> "010-1234-5678"
        "0101234"     -> "010-1234-"
        "0101"        -> "010-1"
    """
    digits = re.sub(r"\D", "", raw or "")[:11]
    if len(digits) >= 7:
        return f"{digits[:3]}-{digits[3:7]}-{digits[7:]}"
    if len(digits) >= 3:
        return f"{digits[:3]}-{digits[3:]}"
    return digits


def format_file_size(size: int | None) -> str:
    """1536 -> "1.5 KB"."""
    if not size:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB", "TB"]
    scaled = float(size)
    index = 0
    while scaled >= 1024 and index < len(units) - 1:
        scaled /= 1024
        index += 1
    return f"{round(scaled, 2):g} {units[index]}"
