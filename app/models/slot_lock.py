# app/models/slot_lock.py
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from app.db.base_class import Base


class SlotLock(Base):
    """
    Lock row for one bookable slot.

    Admission locks this row (SELECT ... FOR UPDATE) before counting the
    slot's bookings, so concurrent requests for the same slot are serialised.
    ``slot_key`` is the UTC start instant for recurring slots and the session
    id for manual sessions.
    """

    __tablename__ = "slot_locks"

    id = Column(String, primary_key=True, default=lambda: f"slk_{uuid.uuid4().hex[:12]}")
    event_id = Column(String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    slot_key = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("event_id", "slot_key", name="unique_slot_lock_event_key"),
    )
