# app/models/booking.py
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, Index
from sqlalchemy.sql import func

from app.db.base_class import Base


class Booking(Base):
    """
    A customer's reservation of one slot.

    Bookings are never deleted by the engine; cancellation flips ``status``
    and frees the seat because capacity only counts CONFIRMED rows.
    """

    __tablename__ = "bookings"

    id = Column(String, primary_key=True, default=lambda: f"bkg_{uuid.uuid4().hex[:12]}")
    tenant_id = Column(String, nullable=False, index=True)
    event_id = Column(String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    session_id = Column(String, ForeignKey("event_sessions.id", ondelete="SET NULL"), nullable=True, index=True)
    invitee_id = Column(String, ForeignKey("invitees.id", ondelete="SET NULL"), nullable=True)
    label_id = Column(String, ForeignKey("booking_labels.id", ondelete="SET NULL"), nullable=True)

    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_note = Column(String, nullable=True)
    location = Column(String, nullable=True)
    token = Column(String, nullable=True)
    status = Column(String(20), nullable=False, server_default="CONFIRMED", default="CONFIRMED")
    management_token = Column(String, nullable=False, unique=True, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )
    cancelled_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("idx_bookings_event_start_status", "event_id", "start_time", "status"),
    )
