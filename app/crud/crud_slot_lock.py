# app/crud/crud_slot_lock.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.slot_lock import SlotLock

logger = logging.getLogger(__name__)


class CRUDSlotLock:
    """Per-slot lock rows for the booking admission critical section."""

    def _locked(self, db: Session, *, event_id: str, slot_key: str):
        return (
            db.query(SlotLock)
            .filter(SlotLock.event_id == event_id, SlotLock.slot_key == slot_key)
            .with_for_update()
            .first()
        )

    def acquire(self, db: Session, *, event_id: str, slot_key: str) -> SlotLock:
        """
        Lock the slot's row for the rest of the current transaction, creating
        it on first use.

        Two requests may both find no row and try to insert it; the unique
        constraint lets one win, the loser's savepoint is rolled back and it
        then waits on the winner's lock like every later request.
        """
        lock = self._locked(db, event_id=event_id, slot_key=slot_key)
        if lock:
            return lock

        try:
            with db.begin_nested():
                db.add(SlotLock(event_id=event_id, slot_key=slot_key))
        except IntegrityError:
            logger.info(f"Slot lock for {event_id}/{slot_key} created concurrently")

        return self._locked(db, event_id=event_id, slot_key=slot_key)


slot_lock = CRUDSlotLock()
