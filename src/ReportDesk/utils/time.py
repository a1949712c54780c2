# ============================================================================
# ReportDesk - Time Utilities
#
# Purpose: Calendar helpers shared by the calculator and instance defaults
# Inputs: Reference dates, ISO strings
# Outputs: Dates, ISO strings, locale-free month names
# Dependencies: datetime
# Usage: day = parse_iso_date("2026-10-18")
#
# Changelog:
#   2026-09-04: Initial time utilities
#   2026-09-15: Fixed English month tables so labels never depend on locale
# ============================================================================

from datetime import date, datetime, timezone
from typing import Any, Optional

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

MONTH_ABBREVIATIONS = tuple(name[:3] for name in MONTH_NAMES)


def get_utc_timestamp() -> str:
    """
    Get current UTC timestamp in ISO-8601 format.

    Returns:
        ISO-8601 formatted timestamp string (e.g., "2026-10-18T15:22:08Z")
    """
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_iso_date(value: Any) -> Optional[date]:
    """
    Parse a date-like value into a date.

    Accepts date, datetime and ``YYYY-MM-DD`` strings (a time suffix is
    ignored). Blank or unparseable input returns None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()[:10]
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def month_name(month: int) -> str:
    """English month name for a 1-based month number."""
    return MONTH_NAMES[month - 1]


def month_number(name: str) -> Optional[int]:
    """1-based month number for an English month name, or None."""
    lowered = name.strip().lower()
    for index, candidate in enumerate(MONTH_NAMES, start=1):
        if candidate.lower() == lowered:
            return index
    return None
