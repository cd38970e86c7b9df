# app/models/booking_label.py
import uuid
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func

from app.db.base_class import Base


class BookingLabel(Base):
    __tablename__ = "booking_labels"

    id = Column(String, primary_key=True, default=lambda: f"lbl_{uuid.uuid4().hex[:12]}")
    tenant_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    color = Column(String(20), nullable=False, default="#9e9e9e")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
