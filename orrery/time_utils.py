"""Julian date helpers for driving the engine from calendar time."""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

from orrery.constants import DAYS_PER_YEAR, J2000_JD, UNIX_EPOCH_JD

# J2000.0 = JD 2451545.0  (2000 Jan 1.5 TT ~ 2000 Jan 1 12:00 UTC)
_J2000_DATETIME = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def datetime_to_jd(dt: datetime) -> float:
    """Convert datetime (UTC; naive values are taken as UTC) to Julian date."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = dt - _J2000_DATETIME
    return J2000_JD + delta.total_seconds() / 86400.0


def jd_to_datetime(jd: float) -> datetime:
    """Convert Julian date to an aware UTC datetime.

    Raises:
        ValueError: if jd is not finite.
        OverflowError: if the date falls outside datetime's year range 1..9999.
    """
    if not math.isfinite(jd):
        raise ValueError(f"Julian date must be finite, got {jd}")
    return _J2000_DATETIME + timedelta(days=jd - J2000_JD)


def year_offset_to_jd(years: float) -> float:
    """Julian date `years` Julian years after J2000.0 (negative for earlier)."""
    return J2000_JD + years * DAYS_PER_YEAR


def jd_to_year_offset(jd: float) -> float:
    """Julian years elapsed since J2000.0."""
    return (jd - J2000_JD) / DAYS_PER_YEAR


def jd_to_date_string(jd: float) -> str:
    """Format a Julian date as 'YYYY-MM-DD' (UTC).

    Dates outside the calendar range 1..9999 (or non-finite input) fall back
    to an approximate 'Year N' label.
    """
    try:
        dt = jd_to_datetime(jd)
    except (ValueError, OverflowError):
        dt = None

    if dt is None:
        if not math.isfinite(jd):
            return 'Year ?'
        return f'Year {math.floor(2000 + jd_to_year_offset(jd))}'
    return f'{dt.year:04d}-{dt.month:02d}-{dt.day:02d}'


def unix_time_to_jd(seconds: float) -> float:
    """Convert seconds since the Unix epoch to Julian date."""
    return UNIX_EPOCH_JD + seconds / 86400.0
