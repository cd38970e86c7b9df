# app/crud/crud_event_session.py
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from .base import CRUDBase
from app.constants.booking import BookingStatus
from app.crud.crud_event import event as event_crud
from app.models.booking import Booking
from app.models.event import Event
from app.models.event_session import EventSession
from app.schemas.event_session import EventSessionCreate, EventSessionUpdate


class CRUDEventSession(CRUDBase[EventSession, EventSessionCreate, EventSessionUpdate]):
    def get_for_event(self, db: Session, *, event_id: str, session_id: str) -> Optional[EventSession]:
        return (
            db.query(self.model)
            .filter(self.model.id == session_id, self.model.event_id == event_id)
            .first()
        )

    def get_multi_by_event(self, db: Session, *, event_id: str) -> List[EventSession]:
        return (
            db.query(self.model)
            .filter(self.model.event_id == event_id)
            .order_by(self.model.start_time.asc())
            .all()
        )

    def get_starting_between(
        self, db: Session, *, event_id: str, start: datetime, end: datetime
    ) -> List[EventSession]:
        """Sessions with ``start <= start_time < end``, ordered by start."""
        return (
            db.query(self.model)
            .filter(
                self.model.event_id == event_id,
                self.model.start_time >= start,
                self.model.start_time < end,
            )
            .order_by(self.model.start_time.asc(), self.model.id.asc())
            .all()
        )

    def get_for_update(self, db: Session, *, event_id: str, session_id: str) -> Optional[EventSession]:
        """Load and row-lock a session for the admission critical section."""
        return (
            db.query(self.model)
            .filter(self.model.id == session_id, self.model.event_id == event_id)
            .with_for_update()
            .first()
        )

    def booked_counts(self, db: Session, *, session_ids: List[str]) -> dict:
        if not session_ids:
            return {}
        rows = (
            db.query(Booking.session_id, func.count(Booking.id))
            .filter(
                Booking.session_id.in_(session_ids),
                Booking.status != BookingStatus.CANCELLED,
            )
            .group_by(Booking.session_id)
            .all()
        )
        return {session_id: count for session_id, count in rows}

    def create_with_event(self, db: Session, *, obj_in: EventSessionCreate, event: Event) -> EventSession:
        db_obj = self.model(**obj_in.model_dump(), event_id=event.id)
        db.add(db_obj)
        event_crud.bump_version(db, db_obj=event)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update_with_event(
        self, db: Session, *, db_obj: EventSession, obj_in: EventSessionUpdate, event: Event
    ) -> EventSession:
        update_data = {
            k: v
            for k, v in obj_in.model_dump(exclude_unset=True).items()
            if v is not None or k in ("location", "host_name")
        }
        if "start_time" in update_data or "end_time" in update_data:
            # Bookings of a manual session follow the session when it moves
            db.query(Booking).filter(Booking.session_id == db_obj.id).update(
                {
                    "start_time": update_data.get("start_time", db_obj.start_time),
                    "end_time": update_data.get("end_time", db_obj.end_time),
                },
                synchronize_session="fetch",
            )
        event_crud.bump_version(db, db_obj=event)
        return super().update(db, db_obj=db_obj, obj_in=update_data)

    def remove_with_event(self, db: Session, *, db_obj: EventSession, event: Event) -> None:
        db.delete(db_obj)
        event_crud.bump_version(db, db_obj=event)
        db.commit()


event_session = CRUDEventSession(EventSession)
