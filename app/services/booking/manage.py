# app/services/booking/manage.py
"""Customer self-service and admin changes to an existing booking."""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from app import crud
from app.constants.booking import BookingStatus
from app.core.errors import AccessDenied, BookingEngineError, NotFound, StaleBooking
from app.models.booking import Booking
from app.models.event import Event
from app.schemas.booking import RescheduleRequest
from app.services.availability.cache import SlotCache
from app.services.booking.admission import BookingAdmission
from app.services.booking.notifications import BookingNotifier
from app.utils.timeutils import as_utc

logger = logging.getLogger(__name__)


class BookingManager:
    def __init__(
        self,
        db: Session,
        cache: Optional[SlotCache] = None,
        notifier: Optional[BookingNotifier] = None,
    ):
        self.db = db
        self.admission = BookingAdmission(db, cache=cache, notifier=notifier)
        self.notifier = self.admission.notifier

    def _event_of(self, booking: Booking) -> Event:
        event = self.db.get(Event, booking.event_id)
        if event is None:
            raise NotFound("Event not found")
        return event

    def get_by_token(self, management_token: str) -> tuple[Booking, Event]:
        booking = crud.booking.get_by_management_token(
            self.db, management_token=management_token
        )
        if booking is None:
            raise NotFound("Booking not found")
        return booking, self._event_of(booking)

    def cancel(self, booking: Booking, *, by_customer: bool) -> Booking:
        """
        Cancel ``booking``. Cancelling twice is a no-op that returns the
        already-cancelled booking, so capacity is only ever freed once.
        """
        booking_id = booking.id
        try:
            # Re-read under lock; a concurrent cancel may have won
            booking = crud.booking.get(self.db, booking_id=booking_id, for_update=True)
            if booking is None:
                raise NotFound("Booking not found")
            event = self._event_of(booking)

            if by_customer and not event.allow_customer_cancel:
                raise AccessDenied("This booking can not be cancelled online")

            if booking.status == BookingStatus.CANCELLED:
                self.db.rollback()
                return booking

            crud.booking.mark_cancelled(self.db, booking=booking)
            self.db.commit()
            self.db.refresh(booking)

        except BookingEngineError:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to cancel booking {booking_id}: {str(e)}", exc_info=True)
            raise

        logger.info(f"Booking {booking_id} cancelled ({'customer' if by_customer else 'admin'})")
        self.notifier.booking_cancelled(booking, event)
        self.admission.invalidate(event, as_utc(booking.start_time))
        return booking

    def cancel_by_token(self, management_token: str) -> Booking:
        booking, _ = self.get_by_token(management_token)
        return self.cancel(booking, by_customer=True)

    def reschedule(
        self, management_token: str, request: RescheduleRequest, *, now: datetime
    ) -> Booking:
        """
        Move a CONFIRMED booking to another slot of the same event.

        The new slot goes through the same checks as a fresh admission, with
        the booking itself left out of the counts. On any failure the
        booking keeps its original slot.
        """
        try:
            booking = crud.booking.get_by_management_token(
                self.db, management_token=management_token, for_update=True
            )
            if booking is None:
                raise NotFound("Booking not found")
            booking_id = booking.id
            event = self._event_of(booking)

            if booking.status != BookingStatus.CONFIRMED:
                raise StaleBooking()
            if not event.allow_customer_reschedule:
                raise AccessDenied("This booking can not be rescheduled online")

            checked = self.admission.check_slot(
                event,
                request.date,
                request.time,
                now=now,
                exclude_booking_id=booking_id,
            )
            previous_start = as_utc(booking.start_time)

            if any(
                s.start == previous_start and s.session_id == booking.session_id
                for s in checked.slots
            ):
                self.db.rollback()
                return booking

            self.admission.lock_slots(event, checked.slots)
            slot = self.admission.pick_slot(
                event, checked.slots, exclude_booking_id=booking_id
            )

            booking.start_time = slot.start
            booking.end_time = slot.end
            booking.session_id = slot.session_id
            booking.location = slot.location
            self.db.add(booking)
            self.db.commit()
            self.db.refresh(booking)

        except BookingEngineError as e:
            self.db.rollback()
            logger.info(f"Reschedule rejected: {e.code}")
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to reschedule booking: {str(e)}", exc_info=True)
            raise

        logger.info(f"Booking {booking_id} rescheduled from {previous_start.isoformat()}")
        self.notifier.booking_rescheduled(booking, event, previous_start)
        self.admission.invalidate(event, previous_start, as_utc(booking.start_time))
        return booking
