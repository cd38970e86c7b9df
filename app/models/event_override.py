# app/models/event_override.py
import uuid
from sqlalchemy import Column, String, Date, Boolean, Integer, JSON, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class EventOverride(Base):
    """
    Date-specific change to an event's availability.

    ``date`` is a calendar day in the event's timezone. A blackout sets
    ``is_unavailable``; otherwise ``override_config`` (same shape as
    ``Event.config``) replaces that weekday's windows for this date only.
    """

    __tablename__ = "event_overrides"

    id = Column(String, primary_key=True, default=lambda: f"ovr_{uuid.uuid4().hex[:12]}")
    event_id = Column(String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    is_unavailable = Column(Boolean, nullable=False, default=False)
    override_config = Column(JSON, nullable=True)
    location = Column(String, nullable=True)
    override_max_participants = Column(Integer, nullable=True)

    event = relationship("Event", back_populates="overrides")

    __table_args__ = (
        UniqueConstraint("event_id", "date", name="unique_event_override_date"),
    )
