# app/api/v1/endpoints/manage.py
"""
Customer self-service for a booking, addressed by its management token.
"""
from datetime import datetime

from fastapi import APIRouter, Depends

from app.api import deps
from app.schemas.booking import ManagedBooking, RescheduleRequest
from app.services.booking.manage import BookingManager

router = APIRouter(prefix="/bookings/manage", tags=["Manage Booking"])


@router.get("/{token}", response_model=ManagedBooking)
def get_managed_booking(
    token: str, manager: BookingManager = Depends(deps.get_booking_manager)
):
    booking, event = manager.get_by_token(token)
    return {"booking": booking, "event": event}


@router.post("/{token}/cancel", response_model=ManagedBooking)
def cancel_managed_booking(
    token: str, manager: BookingManager = Depends(deps.get_booking_manager)
):
    """Cancel the booking. Cancelling an already cancelled booking is a no-op."""
    booking = manager.cancel_by_token(token)
    _, event = manager.get_by_token(token)
    return {"booking": booking, "event": event}


@router.post("/{token}/reschedule", response_model=ManagedBooking)
def reschedule_managed_booking(
    token: str,
    reschedule_in: RescheduleRequest,
    manager: BookingManager = Depends(deps.get_booking_manager),
    now: datetime = Depends(deps.get_now),
):
    booking = manager.reschedule(token, reschedule_in, now=now)
    _, event = manager.get_by_token(token)
    return {"booking": booking, "event": event}
