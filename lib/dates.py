# =============================================================================
# lib/dates.py - Dashboard Date Formatting
# =============================================================================
# Workshop event dates and membership expiration dates are shown as
# "Jan 3, 2026" in the ranch's local timezone.
#
# Plain dates ("2026-01-03") are anchored at noon UTC before converting, so
# the Pacific offset never pushes them into the previous day.
# =============================================================================

from __future__ import annotations

import re
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "America/Los_Angeles"

_DATE_ONLY = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

# Fixed English abbreviations; strftime("%b") depends on the process locale
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _parse(value: str) -> datetime | None:
    match = _DATE_ONLY.match(value)
    try:
        if match:
            year, month, day = (int(part) for part in match.groups())
            return datetime(year, month, day, 12, 0, 0, tzinfo=timezone.utc)

        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_workshop_date(value: str | None, tz: str = DEFAULT_TIMEZONE) -> str | None:
    """
    Format a date string for display in the given timezone.

    Args:
        value: "YYYY-MM-DD" or an ISO-8601 datetime
        tz: IANA timezone name to display in

    Returns:
        "Mon D, YYYY", None for empty input, or the input unchanged if it
        cannot be parsed.

    Example:
        >>> format_workshop_date("2026-01-03")
        'Jan 3, 2026'
        >>> format_workshop_date("next tuesday")
        'next tuesday'
    """
    if not value:
        return None

    parsed = _parse(value)
    if parsed is None:
        return value

    local = parsed.astimezone(ZoneInfo(tz))
    return f"{_MONTHS[local.month - 1]} {local.day}, {local.year}"
