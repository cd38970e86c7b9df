# app/crud/__init__.py

from .crud_booking import booking
from .crud_booking_label import booking_label
from .crud_event import event
from .crud_event_override import event_override
from .crud_event_session import event_session
from .crud_invitee import invitee
from .crud_slot_lock import slot_lock
