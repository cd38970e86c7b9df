# app/services/booking/admission.py
"""
Write path of the availability engine: admitting a booking into a slot.

Admission re-derives the slot from the event's schedule instead of trusting
what the client saw, then takes the slot's lock and recounts before
inserting. On PostgreSQL the lock is a ``SELECT ... FOR UPDATE`` on the slot's
lock row (or on the session row for MANUAL events); on SQLite the whole
transaction is serialised by ``BEGIN IMMEDIATE``. Either way the count read
under the lock is the count the insert is checked against, so concurrent
requests can never push a slot above capacity.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from app import crud
from app.constants.booking import AccessMode, BookingStatus, InviteeStatus
from app.core.errors import (
    BookingEngineError,
    EventClosed,
    InvalidToken,
    OutsideActiveRange,
    OutsideNotice,
    SlotFull,
    SlotUnavailable,
    TokenAlreadyUsed,
)
from app.models.booking import Booking
from app.models.event import Event
from app.models.invitee import Invitee
from app.schemas.booking import BookingRequest
from app.services.availability.cache import SlotCache
from app.services.availability.lead_time import (
    REASON_AFTER_ACTIVE,
    REASON_BEFORE_ACTIVE,
    NoticePolicy,
)
from app.services.availability.service import AvailabilityService, resolve_requested_start
from app.services.availability.slot_generator import CandidateSlot
from app.services.booking.notifications import BookingNotifier
from app.utils.timeutils import as_utc, get_zone, local_date_of
from app.utils.tokens import generate_management_token

logger = logging.getLogger(__name__)


@dataclass
class SlotCheck:
    day: date
    # Every candidate at the requested start, in seat-filling order
    slots: List[CandidateSlot]


class BookingAdmission:
    def __init__(
        self,
        db: Session,
        cache: Optional[SlotCache] = None,
        notifier: Optional[BookingNotifier] = None,
    ):
        self.db = db
        self.cache = cache or SlotCache(None)
        self.notifier = notifier or BookingNotifier(None)
        self.availability = AvailabilityService(db, self.cache)

    # -- shared checks, also used by reschedule ---------------------------

    def check_slot(
        self,
        event: Event,
        day_value: str,
        time_value: str,
        *,
        now: datetime,
        exclude_booking_id: Optional[str] = None,
    ) -> SlotCheck:
        """Validate a requested slot against the event's schedule and policy."""
        if event.access_mode == AccessMode.CLOSED or event.is_archived:
            raise EventClosed()

        day, start = resolve_requested_start(event, day_value, time_value)
        slots = self.availability.slots_at(event, day, start)
        if not slots:
            raise SlotUnavailable()

        earliest = crud.booking.earliest_confirmed_start(
            self.db, event_id=event.id, exclude_booking_id=exclude_booking_id
        )
        reason = NoticePolicy.for_event(event).rejection_reason(
            slots[0], now=now, earliest_booking=earliest
        )
        if reason in (REASON_BEFORE_ACTIVE, REASON_AFTER_ACTIVE):
            raise OutsideActiveRange()
        if reason is not None:
            raise OutsideNotice()

        return SlotCheck(day=day, slots=slots)

    def lock_slot(self, event: Event, slot: CandidateSlot) -> None:
        if slot.session_id:
            session = crud.event_session.get_for_update(
                self.db, event_id=event.id, session_id=slot.session_id
            )
            if session is None:
                raise SlotUnavailable()
        else:
            crud.slot_lock.acquire(self.db, event_id=event.id, slot_key=slot.slot_key)

    def lock_slots(self, event: Event, slots: List[CandidateSlot]) -> None:
        # Always in candidate order, so concurrent requests can't deadlock
        for slot in slots:
            self.lock_slot(event, slot)

    def booked_count(
        self, event: Event, slot: CandidateSlot, exclude_booking_id: Optional[str] = None
    ) -> int:
        if slot.session_id:
            return crud.booking.count_active_for_session(
                self.db, session_id=slot.session_id, exclude_booking_id=exclude_booking_id
            )
        return crud.booking.count_active_at(
            self.db,
            event_id=event.id,
            start_time=slot.start,
            exclude_booking_id=exclude_booking_id,
        )

    def pick_slot(
        self,
        event: Event,
        slots: List[CandidateSlot],
        exclude_booking_id: Optional[str] = None,
    ) -> CandidateSlot:
        """
        Recount under the slot locks and return the first candidate with a
        free seat; raises SlotFull when every one is taken.
        """
        for slot in slots:
            booked = self.booked_count(event, slot, exclude_booking_id)
            if booked < slot.capacity:
                return slot
            logger.info(
                f"Slot {slot.slot_key} of event {event.id} at capacity "
                f"({booked}/{slot.capacity})"
            )
        raise SlotFull()

    def _claim_invitee(self, event: Event, token: Optional[str]) -> Optional[Invitee]:
        if event.access_mode != AccessMode.RESTRICTED:
            return None
        if not token or not token.strip():
            raise InvalidToken()

        invitee = crud.invitee.get_by_token(
            self.db, event_id=event.id, token=token, for_update=True
        )
        if invitee is None or invitee.status == InviteeStatus.REVOKED:
            raise InvalidToken()
        if invitee.status == InviteeStatus.USED:
            raise TokenAlreadyUsed()
        return invitee

    def invalidate(self, event: Event, *instants: datetime) -> None:
        tz = get_zone(event.timezone)
        self.cache.invalidate(
            event_id=event.id,
            version=event.version,
            days=[local_date_of(i, tz) for i in instants],
        )

    # -- admission ----------------------------------------------------------

    def admit(self, event: Event, request: BookingRequest, *, now: datetime) -> Booking:
        """
        Book ``request`` into its slot, atomically.

        Raises a ``BookingEngineError`` subclass on rejection; nothing is
        written in that case.
        """
        event_id = event.id
        try:
            checked = self.check_slot(event, request.date, request.time, now=now)

            self.lock_slots(event, checked.slots)
            invitee = self._claim_invitee(event, request.token)
            slot = self.pick_slot(event, checked.slots)

            booking = Booking(
                tenant_id=event.tenant_id,
                event_id=event.id,
                session_id=slot.session_id,
                invitee_id=invitee.id if invitee else None,
                start_time=slot.start,
                end_time=slot.end,
                customer_name=request.name,
                customer_email=request.email,
                customer_note=request.notes,
                location=slot.location,
                token=invitee.token if invitee else None,
                status=BookingStatus.CONFIRMED,
                management_token=generate_management_token(),
            )
            self.db.add(booking)
            if invitee is not None:
                crud.invitee.mark_used(self.db, invitee=invitee)

            self.db.commit()
            self.db.refresh(booking)

        except BookingEngineError as e:
            self.db.rollback()
            logger.info(
                f"Booking rejected for event {event_id} at {request.date} {request.time}: {e.code}"
            )
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(
                f"Failed to admit booking for event {event_id}: {str(e)}",
                exc_info=True,
                extra={"event_id": event_id, "date": request.date, "time": request.time},
            )
            raise

        logger.info(
            f"Booking {booking.id} confirmed for event {event.id} at {slot.slot_key}"
        )
        self.notifier.booking_confirmed(booking, event)
        self.invalidate(event, as_utc(booking.start_time))
        return booking
