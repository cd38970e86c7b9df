# app/services/availability/service.py
"""
Read path of the availability engine.

``candidates_for_date`` is the single source of truth for which slots exist on
a date; listings and the admission path both go through it, so a slot that is
shown can be booked and vice versa (capacity and notice permitting).
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from app import crud
from app.constants.booking import AccessMode, ScheduleType
from app.core.config import settings
from app.core.errors import SlotUnavailable, ValidationError
from app.models.event import Event
from app.services.availability.cache import SlotCache
from app.services.availability.capacity import filter_bookable
from app.services.availability.lead_time import NoticePolicy, apply_lead_time
from app.services.availability.resolver import resolve_day
from app.services.availability.slot_generator import (
    CandidateSlot,
    generate_slots,
    session_slots,
)
from app.utils.timeutils import (
    as_utc,
    format_utc,
    get_zone,
    local_date_of,
    local_to_utc,
    parse_date,
    parse_hhmm,
)

logger = logging.getLogger(__name__)


def local_day_bounds(day: date, tz) -> tuple[datetime, datetime]:
    """UTC instants bounding the local calendar ``day``, as ``[start, end)``."""
    start = datetime.combine(day, datetime.min.time()).replace(tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), datetime.min.time()).replace(tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def parse_date_range(start: str, end: str, max_days: Optional[int] = None) -> Optional[List[date]]:
    """
    Dates from ``start`` to ``end`` inclusive, or None when the range is
    malformed, inverted or longer than ``max_days``.
    """
    max_days = max_days or settings.MAX_DATE_RANGE_DAYS
    try:
        first = parse_date(start)
        last = parse_date(end)
    except (TypeError, ValueError):
        return None
    span = (last - first).days + 1
    if span < 1 or span > max_days:
        return None
    return [first + timedelta(days=i) for i in range(span)]


class AvailabilityService:
    def __init__(self, db: Session, cache: Optional[SlotCache] = None):
        self.db = db
        self.cache = cache or SlotCache(None)

    def candidates_for_date(self, event: Event, day: date) -> List[CandidateSlot]:
        """Every slot the event's schedule defines on ``day``, before any filtering."""
        tz = get_zone(event.timezone)

        if event.schedule_type == ScheduleType.MANUAL:
            day_start, day_end = local_day_bounds(day, tz)
            sessions = crud.event_session.get_starting_between(
                self.db, event_id=event.id, start=day_start, end=day_end
            )
            return session_slots(sessions, default_location=event.location)

        override = crud.event_override.get_for_date(self.db, event_id=event.id, day=day)
        resolved = resolve_day(event, day, override)
        if resolved.is_closed:
            return []
        return generate_slots(
            resolved.windows,
            day,
            duration_min=event.duration_min,
            interval_min=event.interval_min,
            tz=tz,
            location=resolved.location,
        )

    def bookable_slots(
        self,
        event: Event,
        day: date,
        *,
        now: datetime,
        exclude_booking_id: Optional[str] = None,
    ) -> List[CandidateSlot]:
        """Candidates that pass the notice, active-range and capacity checks."""
        if event.access_mode == AccessMode.CLOSED or event.is_archived:
            return []

        candidates = self.candidates_for_date(event, day)
        if not candidates:
            return []

        earliest = crud.booking.earliest_confirmed_start(
            self.db, event_id=event.id, exclude_booking_id=exclude_booking_id
        )
        candidates = apply_lead_time(
            candidates, NoticePolicy.for_event(event), now=now, earliest_booking=earliest
        )
        if not candidates:
            return []

        session_ids = [c.session_id for c in candidates if c.session_id]
        counts_by_session = crud.event_session.booked_counts(self.db, session_ids=session_ids)
        counts_by_start = crud.booking.active_counts_between(
            self.db,
            event_id=event.id,
            start=candidates[0].start,
            end=candidates[-1].start + timedelta(seconds=1),
        )
        return filter_bookable(
            candidates, counts_by_start=counts_by_start, counts_by_session=counts_by_session
        )

    def list_slots(self, event: Event, day: date, *, now: datetime) -> List[str]:
        """Bookable slot starts on ``day`` as ``YYYY-MM-DDTHH:MM:SSZ`` strings."""
        cached = self.cache.get(event_id=event.id, version=event.version, day=day)
        if cached is not None:
            return cached

        # Sessions sharing a start instant are offered once
        slots = list(
            dict.fromkeys(format_utc(s.start) for s in self.bookable_slots(event, day, now=now))
        )
        self.cache.set(event_id=event.id, version=event.version, day=day, slots=slots)
        return slots

    def list_dates(self, event: Event, start: str, end: str, *, now: datetime) -> List[str]:
        """Dates in ``[start, end]`` with at least one bookable slot."""
        if event.access_mode == AccessMode.CLOSED or event.is_archived:
            return []

        days = parse_date_range(start, end)
        if days is None:
            logger.info(f"Ignoring invalid date range {start!r}..{end!r} for event {event.id}")
            return []

        return [d.isoformat() for d in days if self.list_slots(event, d, now=now)]

    def slots_at(self, event: Event, day: date, start: datetime) -> List[CandidateSlot]:
        """
        Candidates starting at ``start``. Recurring schedules yield at most
        one; MANUAL events may run several sessions at the same instant.
        """
        return [c for c in self.candidates_for_date(event, day) if c.start == start]


def resolve_requested_start(event: Event, day_value: str, time_value: str) -> tuple[date, datetime]:
    """
    Turn a ``{date, time}`` selection into ``(local date, UTC start)``.

    ``time_value`` is ``HH:MM`` on ``day_value`` in the event timezone, or a UTC
    ISO instant whose local date must equal ``day_value``.
    """
    try:
        day = parse_date(day_value)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    tz = get_zone(event.timezone)
    if len(time_value) == 5 and ":" in time_value:
        try:
            wall_clock = parse_hhmm(time_value)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        start = local_to_utc(day, wall_clock, tz)
        if start is None:
            raise SlotUnavailable(f"{time_value} does not exist on {day_value} in {event.timezone}")
        return day, start

    try:
        instant = datetime.fromisoformat(time_value.replace("Z", "+00:00"))
    except ValueError as e:
        raise ValidationError(f"Invalid time '{time_value}'") from e
    if instant.tzinfo is None:
        raise ValidationError("Time instants must carry a UTC offset")
    start = as_utc(instant)
    if local_date_of(start, tz) != day:
        raise ValidationError(f"{time_value} is not on {day_value} in {event.timezone}")
    return day, start
