# app/models/__init__.py
# Import all models to ensure SQLAlchemy can resolve relationships
# Order matters for dependencies - import base models first

from app.db.base_class import Base
from app.models.event import Event
from app.models.event_override import EventOverride
from app.models.event_session import EventSession
from app.models.booking_label import BookingLabel
from app.models.invitee import Invitee
from app.models.booking import Booking
from app.models.slot_lock import SlotLock
