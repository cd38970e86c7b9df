# app/models/invitee.py
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.sql import func

from app.db.base_class import Base


class Invitee(Base):
    """Single-use access token for a RESTRICTED event."""

    __tablename__ = "invitees"

    id = Column(String, primary_key=True, default=lambda: f"inv_{uuid.uuid4().hex[:12]}")
    event_id = Column(String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    token = Column(String, nullable=False, unique=True, index=True)
    email = Column(String, nullable=True)
    status = Column(String(20), nullable=False, server_default="ACTIVE", default="ACTIVE")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
