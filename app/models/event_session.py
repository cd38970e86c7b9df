# app/models/event_session.py
import uuid
from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base_class import Base


class EventSession(Base):
    """An explicitly scheduled session of a MANUAL event."""

    __tablename__ = "event_sessions"

    id = Column(String, primary_key=True, default=lambda: f"ses_{uuid.uuid4().hex[:12]}")
    event_id = Column(String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    start_time = Column(DateTime(timezone=True), nullable=False, index=True)
    end_time = Column(DateTime(timezone=True), nullable=False)
    max_participants = Column(Integer, nullable=False, default=1)
    location = Column(String, nullable=True)
    host_name = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    event = relationship("Event", back_populates="sessions")

    __table_args__ = (
        CheckConstraint("max_participants >= 1", name="check_session_capacity_positive"),
        CheckConstraint("start_time < end_time", name="check_session_time_order"),
    )
