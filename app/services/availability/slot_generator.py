"""
Expansion of resolved windows into discrete UTC candidate slots.

Slots step through each window in wall-clock minutes. A slot fits when
``start + duration <= window end``. Local times are converted with the event's
IANA zone; a time inside a DST gap is skipped and an ambiguous time maps to
its earlier instant (see ``app.utils.timeutils.local_to_utc``).
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from app.services.availability.resolver import ResolvedWindow
from app.utils.timeutils import as_utc, local_to_utc, minutes_of_day


@dataclass(frozen=True)
class CandidateSlot:
    start: datetime              # UTC
    end: datetime                # UTC
    capacity: int
    session_id: Optional[str] = None
    location: Optional[str] = None

    @property
    def slot_key(self) -> str:
        """Identity of the slot for locking: session id or UTC start."""
        if self.session_id:
            return self.session_id
        return self.start.strftime("%Y-%m-%dT%H:%M:%SZ")


def generate_slots(
    windows: Iterable[ResolvedWindow],
    day: date,
    *,
    duration_min: int,
    interval_min: int,
    tz: ZoneInfo,
    location: Optional[str] = None,
) -> list[CandidateSlot]:
    """Ascending, de-duplicated candidate slots for ``day``."""
    if duration_min <= 0 or interval_min <= 0:
        raise ValueError("duration_min and interval_min must be positive")

    slots: dict[datetime, CandidateSlot] = {}
    duration = timedelta(minutes=duration_min)

    for window in windows:
        window_end = minutes_of_day(window.end)
        cursor = minutes_of_day(window.start)
        while cursor + duration_min <= window_end:
            wall_clock = time(cursor // 60, cursor % 60)
            start = local_to_utc(day, wall_clock, tz)
            # First window wins when two windows produce the same instant
            if start is not None and start not in slots:
                slots[start] = CandidateSlot(
                    start=start,
                    end=start + duration,
                    capacity=window.capacity,
                    location=location,
                )
            cursor += interval_min

    return [slots[start] for start in sorted(slots)]


def session_slots(sessions, *, default_location: Optional[str] = None) -> list[CandidateSlot]:
    """Candidates for a MANUAL event: one per session, ordered by start."""
    slots = [
        CandidateSlot(
            start=as_utc(s.start_time),
            end=as_utc(s.end_time),
            capacity=s.max_participants,
            session_id=s.id,
            location=s.location or default_location,
        )
        for s in sessions
    ]
    return sorted(slots, key=lambda slot: slot.start)
