# app/core/errors.py
"""
Domain errors raised by the availability engine and booking admission path.

Every error carries the HTTP status it maps to and a stable machine-readable
``code`` so clients can tell a full slot from a used token without parsing
messages. ``app.main`` registers a single handler for ``BookingEngineError``.
"""

from fastapi import status


class BookingEngineError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "BookingEngineError"
    default_message: str = "Request could not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code}


class ValidationError(BookingEngineError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "ValidationError"
    default_message = "Invalid request"


class NotFound(BookingEngineError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NotFound"
    default_message = "Resource not found"


class AccessDenied(BookingEngineError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "AccessDenied"
    default_message = "Access denied"


class EventClosed(AccessDenied):
    code = "EventClosed"
    default_message = "This event is not accepting bookings"


class InvalidToken(AccessDenied):
    code = "InvalidToken"
    default_message = "A valid access token is required for this event"


class Conflict(BookingEngineError):
    status_code = status.HTTP_409_CONFLICT
    code = "Conflict"
    default_message = "Request conflicts with the current state"


class SlotFull(Conflict):
    code = "SlotFull"
    default_message = "This time slot is fully booked"


class TokenAlreadyUsed(Conflict):
    code = "TokenAlreadyUsed"
    default_message = "This access token has already been used"


class StaleBooking(Conflict):
    code = "StaleBooking"
    default_message = "This booking can no longer be changed"


class DuplicateSlug(Conflict):
    code = "DuplicateSlug"
    default_message = "An event with this slug already exists"


class PolicyViolation(BookingEngineError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "PolicyViolation"
    default_message = "Booking policy violated"


class OutsideNotice(PolicyViolation):
    code = "OutsideNotice"
    default_message = "This time slot is too close to book"


class OutsideActiveRange(PolicyViolation):
    code = "OutsideActiveRange"
    default_message = "This time slot is outside the bookable period"


class SlotUnavailable(PolicyViolation):
    code = "SlotUnavailable"
    default_message = "This time slot is not offered"
