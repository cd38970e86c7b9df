# app/utils/timeutils.py
"""
Small helpers for the UTC / wall-clock conversions the engine does everywhere.

All instants are stored and compared as UTC. Some drivers (SQLite) hand back
naive datetimes for timezone-aware columns; ``as_utc`` normalises those.
"""

import re
from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_HHMM = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def as_utc(value: datetime | None) -> datetime | None:
    """Return ``value`` as an aware UTC datetime (naive values are taken as UTC)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_utc(value: datetime) -> str:
    """Format an instant as ``YYYY-MM-DDTHH:MM:SSZ``."""
    return as_utc(value).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_hhmm(value: str) -> time:
    """Parse a ``HH:MM`` wall-clock string."""
    match = _HHMM.match(value or "")
    if not match:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return time(int(match.group(1)), int(match.group(2)))


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def get_zone(name: str) -> ZoneInfo:
    """Resolve an IANA timezone name, raising ValueError for unknown names."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone '{name}'") from e


def local_to_utc(day: date, wall_clock: time, tz: ZoneInfo) -> datetime | None:
    """
    Convert a wall-clock time on ``day`` in ``tz`` to UTC.

    Returns None for a local time that does not exist (DST spring-forward
    gap). Ambiguous local times (DST fall-back) resolve to the earlier
    instant, i.e. ``fold=0``.
    """
    local = datetime.combine(day, wall_clock).replace(tzinfo=tz, fold=0)
    utc = local.astimezone(timezone.utc)
    if utc.astimezone(tz).replace(tzinfo=None) != local.replace(tzinfo=None):
        return None
    return utc


def local_date_of(instant: datetime, tz: ZoneInfo) -> date:
    """Calendar date of a UTC instant as seen in ``tz``."""
    return as_utc(instant).astimezone(tz).date()


def parse_date(value: str) -> date:
    """Parse ``YYYY-MM-DD``; raises ValueError on anything else."""
    if not re.match(r"^\d{4}-\d{2}-\d{2}$", value or ""):
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD")
    return date.fromisoformat(value)
