"""
Time-of-day parsing and timezone normalization.

Schedules store times as minutes since midnight, parsed once at load time.
The caller resolves "now" into a weekday + minute-of-day pair here, so the
query engine itself never reads the clock or depends on the system locale.
"""

from __future__ import annotations

import re
from datetime import datetime
from zoneinfo import ZoneInfo

MINUTES_PER_DAY = 24 * 60

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

_HHMM_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


def parse_time_of_day(value: str) -> int:
    """Parse an `HH:MM` string into minutes since midnight (0..1439)."""
    match = _HHMM_RE.match(value)
    if not match:
        raise ValueError(f"Invalid time of day '{value}'; expected HH:MM")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Time of day '{value}' is out of range 00:00..23:59")
    return hours * 60 + minutes


def format_time_of_day(minutes: int) -> str:
    """Render minutes since midnight as `HH:MM`."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def ensure_tz(dt: datetime, timezone: str) -> datetime:
    """Ensure `dt` has tzinfo; attach `timezone` if naive."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=ZoneInfo(timezone))
    return dt


def parse_datetime(value: str, timezone: str) -> datetime:
    """Parse ISO-8601 datetime string and ensure tzinfo is present.

    Notes:
    - Accepts a trailing `Z` (UTC) and converts it to `+00:00` for `fromisoformat`.
    - If the parsed value is naive, the provided `timezone` is attached.
    """
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    dt = datetime.fromisoformat(value)
    return ensure_tz(dt, timezone)


def local_weekday_and_minutes(dt: datetime, timezone: str) -> tuple[str, int]:
    """Return (weekday name, minutes since midnight) of `dt` in the campus timezone."""
    local = ensure_tz(dt, timezone).astimezone(ZoneInfo(timezone))
    return WEEKDAY_NAMES[local.weekday()], local.hour * 60 + local.minute
