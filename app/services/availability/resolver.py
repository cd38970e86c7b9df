"""
Override resolution: which open windows does an event have on a given date?

Resolution order for an event-local calendar date:
- an override with ``is_unavailable`` blocks the whole day
- an override carrying ``override_config`` replaces the day: only that map's
  entry for the date's weekday is used, a missing entry means closed
- otherwise the recurring ``event.config`` entry for the weekday applies

Capacity per window: ``override_max_participants`` if set, else the window's
own ``max_participants``, else ``event.max_participants``.
"""

from dataclasses import dataclass, field
from datetime import date, time
from typing import Optional

from app.constants.booking import WEEKDAYS
from app.utils.timeutils import parse_hhmm


@dataclass(frozen=True)
class ResolvedWindow:
    start: time
    end: time
    capacity: int


@dataclass
class ResolvedDay:
    day: date
    windows: list[ResolvedWindow] = field(default_factory=list)
    location: Optional[str] = None

    @property
    def is_closed(self) -> bool:
        return not self.windows


def weekday_key(day: date) -> str:
    return WEEKDAYS[day.weekday()]


def resolve_day(event, day: date, override=None) -> ResolvedDay:
    """
    Resolve ``event``'s windows for ``day`` with an optional override row.

    ``event`` needs ``config``, ``max_participants`` and ``location``;
    ``override`` needs ``is_unavailable``, ``override_config``,
    ``override_max_participants`` and ``location``.
    """
    location = event.location
    if override is not None and override.location:
        location = override.location

    if override is not None and override.is_unavailable:
        return ResolvedDay(day=day, windows=[], location=location)

    key = weekday_key(day)
    if override is not None and override.override_config is not None:
        raw_windows = override.override_config.get(key) or []
    else:
        raw_windows = (event.config or {}).get(key) or []

    capacity_override = override.override_max_participants if override is not None else None

    windows = []
    for raw in raw_windows:
        start = parse_hhmm(raw["start"])
        end = parse_hhmm(raw["end"])
        if start >= end:
            continue
        capacity = (
            capacity_override
            or raw.get("max_participants")
            or event.max_participants
        )
        windows.append(ResolvedWindow(start=start, end=end, capacity=int(capacity)))

    windows.sort(key=lambda w: w.start)
    return ResolvedDay(day=day, windows=windows, location=location)
