"""Lateness detection — is a post outside the author's local workday?

Pure domain logic: depends only on its inputs, never on the wall clock.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from gohome.config import WorkdayWindow

DEFAULT_UTC_OFFSET_MINUTES = -240

Offset = Optional[Union[int, float, str]]


def resolve_offset_minutes(utc_offset_seconds: Offset, default_minutes: int) -> float:
    """Convert a directory tz offset (seconds) to minutes.

    Absent, non-numeric or non-finite values, and offsets of a whole day or
    more, fall back to ``default_minutes``.
    """
    if utc_offset_seconds is None or isinstance(utc_offset_seconds, bool):
        return default_minutes
    try:
        seconds = float(utc_offset_seconds)
    except (TypeError, ValueError):
        return default_minutes
    # datetime.timezone only accepts offsets strictly inside one day
    if not math.isfinite(seconds) or abs(seconds) >= 86400:
        return default_minutes
    return seconds / 60


def local_time(timestamp: Union[int, float, str], offset_minutes: float) -> datetime:
    tz = timezone(timedelta(minutes=offset_minutes))
    return datetime.fromtimestamp(float(timestamp), tz)


def is_late(
    timestamp: Union[int, float, str],
    utc_offset_seconds: Offset = None,
    window: Optional[WorkdayWindow] = None,
    default_offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES,
) -> bool:
    """Return True if ``timestamp`` falls outside the local workday window.

    Args:
        timestamp: epoch seconds, e.g. 1530071118.000184
        utc_offset_seconds: author's UTC offset, e.g. -14400
        window: working hours; defaults to 07:00 for 12 hours
        default_offset_minutes: used when the offset is missing or invalid

    The window is closed-open: ``day_start`` itself is in hours, ``day_end``
    is late.
    """
    window = window or WorkdayWindow()
    offset = resolve_offset_minutes(utc_offset_seconds, default_offset_minutes)
    now = local_time(timestamp, offset)
    day_start = now.replace(hour=window.start_hour, minute=0, second=0, microsecond=0)
    day_end = day_start + timedelta(hours=window.duration_hours)
    return not (day_start <= now < day_end)
