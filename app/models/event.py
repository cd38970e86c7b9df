# app/models/event.py
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Boolean,
    JSON,
    UniqueConstraint,
    CheckConstraint,
    text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base_class import Base
import uuid


class Event(Base):
    """
    A bookable event of one tenant.

    RECURRING events expose slots from the weekly ``config`` template;
    MANUAL events expose their explicit ``sessions`` instead.
    """

    __tablename__ = "events"

    id = Column(
        String, primary_key=True, default=lambda: f"evt_{uuid.uuid4().hex[:12]}"
    )
    tenant_id = Column(String, nullable=False, index=True)
    slug = Column(String, nullable=False)
    version = Column(Integer, nullable=False, server_default=text("1"), default=1)

    title_en = Column(String, nullable=False)
    title_de = Column(String, nullable=True)
    desc_en = Column(String, nullable=True)
    desc_de = Column(String, nullable=True)
    location = Column(String, nullable=True)
    host_name = Column(String, nullable=True)
    image_url = Column(String, nullable=True)

    timezone = Column(String, nullable=False, default="UTC")
    schedule_type = Column(String(20), nullable=False, default="RECURRING")
    duration_min = Column(Integer, nullable=False, default=30)
    interval_min = Column(Integer, nullable=False, default=30)
    max_participants = Column(Integer, nullable=False, default=1)
    min_notice_general = Column(Integer, nullable=False, default=0)
    min_notice_first = Column(Integer, nullable=False, default=0)
    active_start = Column(DateTime(timezone=True), nullable=True)
    active_end = Column(DateTime(timezone=True), nullable=True)
    access_mode = Column(String(20), nullable=False, default="OPEN")
    # { "monday": [{"start": "09:00", "end": "17:00", "max_participants": 2}], ... }
    config = Column(JSON, nullable=False, default=dict)

    allow_customer_cancel = Column(Boolean, nullable=False, default=True)
    allow_customer_reschedule = Column(Boolean, nullable=False, default=True)
    is_archived = Column(Boolean, nullable=False, server_default=text("false"), default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    overrides = relationship(
        "EventOverride", back_populates="event", cascade="all, delete-orphan"
    )
    sessions = relationship(
        "EventSession", back_populates="event", cascade="all, delete-orphan"
    )

    __table_args__ = (
        UniqueConstraint("tenant_id", "slug", name="unique_event_tenant_slug"),
        CheckConstraint("duration_min > 0", name="check_event_duration_positive"),
        CheckConstraint("interval_min > 0", name="check_event_interval_positive"),
        CheckConstraint("max_participants >= 1", name="check_event_capacity_positive"),
    )
