# app/api/v1/endpoints/public_booking.py
"""
Unauthenticated endpoints behind the public booking page.
"""
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from app.api import deps
from app.core.config import settings
from app.core.limiter import limiter
from app.db.session import get_db
from app.schemas.availability import SlotsResponse
from app.schemas.booking import BookingConfirmation, BookingRequest
from app.schemas.event import PublicEvent
from app.services.availability.service import AvailabilityService
from app.services.booking.admission import BookingAdmission
from app.utils.timeutils import parse_date

router = APIRouter(tags=["Public Booking"])


@router.get("/{tenant}/events/{slug}", response_model=PublicEvent)
def get_public_event(tenant: str, slug: str, db: Session = Depends(get_db)):
    """Event details for rendering the booking page."""
    return deps.get_tenant_event(db, tenant, slug)


@router.get("/{tenant}/events/{slug}/dates", response_model=List[str])
def list_available_dates(
    tenant: str,
    slug: str,
    start: str = Query(..., description="First date, YYYY-MM-DD"),
    end: str = Query(..., description="Last date, YYYY-MM-DD, inclusive"),
    db: Session = Depends(get_db),
    availability: AvailabilityService = Depends(deps.get_availability_service),
    now: datetime = Depends(deps.get_now),
):
    """Dates with at least one bookable slot. Bad ranges yield an empty list."""
    event = deps.get_tenant_event(db, tenant, slug)
    return availability.list_dates(event, start, end, now=now)


@router.get("/{tenant}/events/{slug}/slots", response_model=SlotsResponse)
def list_available_slots(
    tenant: str,
    slug: str,
    date: str = Query(..., description="Event-local date, YYYY-MM-DD"),
    db: Session = Depends(get_db),
    availability: AvailabilityService = Depends(deps.get_availability_service),
    now: datetime = Depends(deps.get_now),
):
    event = deps.get_tenant_event(db, tenant, slug)
    try:
        day = parse_date(date)
    except ValueError:
        return {"slots": []}
    return {"slots": availability.list_slots(event, day, now=now)}


@router.post(
    "/{tenant}/events/{slug}/book",
    response_model=BookingConfirmation,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.BOOKING_RATE_LIMIT)
def book_slot(
    request: Request,
    tenant: str,
    slug: str,
    booking_in: BookingRequest,
    db: Session = Depends(get_db),
    admission: BookingAdmission = Depends(deps.get_admission),
    now: datetime = Depends(deps.get_now),
):
    """Book a slot. Capacity, notice and access are checked atomically."""
    event = deps.get_tenant_event(db, tenant, slug)
    return admission.admit(event, booking_in, now=now)
