# app/crud/crud_booking.py
"""
Queries over bookings used by the availability engine and the admin API.

Only non-CANCELLED bookings occupy capacity. Writes made here are not
committed; the admission and cancellation services own the transaction.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.constants.booking import BookingStatus
from app.models.booking import Booking
from app.utils.timeutils import as_utc


class CRUDBooking:
    def get(self, db: Session, *, booking_id: str, for_update: bool = False) -> Optional[Booking]:
        query = db.query(Booking).filter(Booking.id == booking_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_for_tenant(
        self, db: Session, *, tenant_id: str, booking_id: str, for_update: bool = False
    ) -> Optional[Booking]:
        query = db.query(Booking).filter(
            Booking.id == booking_id, Booking.tenant_id == tenant_id
        )
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_by_management_token(
        self, db: Session, *, management_token: str, for_update: bool = False
    ) -> Optional[Booking]:
        query = db.query(Booking).filter(Booking.management_token == management_token)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_multi_by_tenant(
        self, db: Session, *, tenant_id: str, skip: int = 0, limit: int = 500
    ) -> List[Booking]:
        return (
            db.query(Booking)
            .filter(Booking.tenant_id == tenant_id)
            .order_by(Booking.start_time.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_multi_by_event(self, db: Session, *, event_id: str) -> List[Booking]:
        return (
            db.query(Booking)
            .filter(Booking.event_id == event_id)
            .order_by(Booking.start_time.asc())
            .all()
        )

    def count_active_at(
        self,
        db: Session,
        *,
        event_id: str,
        start_time: datetime,
        exclude_booking_id: Optional[str] = None,
    ) -> int:
        """Count non-cancelled bookings of an event starting exactly at ``start_time``."""
        query = db.query(func.count(Booking.id)).filter(
            Booking.event_id == event_id,
            Booking.start_time == as_utc(start_time),
            Booking.status != BookingStatus.CANCELLED,
        )
        if exclude_booking_id:
            query = query.filter(Booking.id != exclude_booking_id)
        return query.scalar() or 0

    def count_active_for_session(
        self, db: Session, *, session_id: str, exclude_booking_id: Optional[str] = None
    ) -> int:
        query = db.query(func.count(Booking.id)).filter(
            Booking.session_id == session_id,
            Booking.status != BookingStatus.CANCELLED,
        )
        if exclude_booking_id:
            query = query.filter(Booking.id != exclude_booking_id)
        return query.scalar() or 0

    def active_counts_between(
        self, db: Session, *, event_id: str, start: datetime, end: datetime
    ) -> Dict[datetime, int]:
        """Non-cancelled booking counts per start instant in ``[start, end)``."""
        rows = (
            db.query(Booking.start_time, func.count(Booking.id))
            .filter(
                Booking.event_id == event_id,
                Booking.start_time >= as_utc(start),
                Booking.start_time < as_utc(end),
                Booking.status != BookingStatus.CANCELLED,
            )
            .group_by(Booking.start_time)
            .all()
        )
        return {as_utc(start_time): count for start_time, count in rows}

    def earliest_confirmed_start(
        self, db: Session, *, event_id: str, exclude_booking_id: Optional[str] = None
    ) -> Optional[datetime]:
        """
        Start of the event's earliest CONFIRMED booking.

        A slot later than this instant has an earlier booking and so only
        needs the general notice period.
        """
        query = db.query(func.min(Booking.start_time)).filter(
            Booking.event_id == event_id,
            Booking.status == BookingStatus.CONFIRMED,
        )
        if exclude_booking_id:
            query = query.filter(Booking.id != exclude_booking_id)
        return as_utc(query.scalar())

    def has_active_for_session(self, db: Session, *, session_id: str) -> bool:
        return self.count_active_for_session(db, session_id=session_id) > 0

    def mark_cancelled(self, db: Session, *, booking: Booking) -> Booking:
        booking.status = BookingStatus.CANCELLED
        booking.cancelled_at = datetime.now(timezone.utc)
        db.add(booking)
        return booking


booking = CRUDBooking()
