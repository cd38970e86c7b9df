# app/constants/booking.py
"""
Constants for booking engine status and mode values.

Provides type-safe constants to replace hardcoded strings throughout the codebase.
"""


class BookingStatus:
    """Booking status values."""
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class InviteeStatus:
    """Invitee token status values."""
    ACTIVE = "ACTIVE"
    USED = "USED"
    REVOKED = "REVOKED"


class AccessMode:
    """Who may book an event."""
    OPEN = "OPEN"
    RESTRICTED = "RESTRICTED"
    CLOSED = "CLOSED"


class ScheduleType:
    """How an event's bookable times are defined."""
    RECURRING = "RECURRING"
    MANUAL = "MANUAL"


# Weekday keys used in availability configs, indexed by date.weekday()
WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)
