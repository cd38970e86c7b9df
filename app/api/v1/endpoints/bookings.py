# app/api/v1/endpoints/bookings.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app import crud
from app.api import deps
from app.core.errors import NotFound
from app.db.session import get_db
from app.schemas.booking import Booking as BookingSchema, BookingUpdate
from app.schemas.token import TokenPayload
from app.services.booking.manage import BookingManager

router = APIRouter(tags=["Admin Bookings"])


def _get_booking(db: Session, tenant: str, booking_id: str):
    booking = crud.booking.get_for_tenant(db, tenant_id=tenant, booking_id=booking_id)
    if booking is None:
        raise NotFound("Booking not found")
    return booking


@router.get("/{tenant}/bookings", response_model=List[BookingSchema])
def list_bookings(
    tenant: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
    skip: int = Query(0, ge=0),
    limit: int = Query(500, ge=1, le=1000),
):
    deps.ensure_tenant(current_user, tenant)
    return crud.booking.get_multi_by_tenant(db, tenant_id=tenant, skip=skip, limit=limit)


@router.get("/{tenant}/events/{slug}/bookings", response_model=List[BookingSchema])
def list_event_bookings(
    tenant: str,
    slug: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.ensure_tenant(current_user, tenant)
    event = deps.get_tenant_event(db, tenant, slug)
    return crud.booking.get_multi_by_event(db, event_id=event.id)


@router.put("/{tenant}/bookings/{booking_id}", response_model=BookingSchema)
def update_booking(
    tenant: str,
    booking_id: str,
    booking_in: BookingUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Set a booking's label, access token note or customer note. Empty strings clear."""
    deps.ensure_tenant(current_user, tenant)
    booking = _get_booking(db, tenant, booking_id)

    update_data = booking_in.model_dump(exclude_unset=True)
    if update_data.get("label_id"):
        if not crud.booking_label.get_for_tenant(
            db, tenant_id=tenant, label_id=update_data["label_id"]
        ):
            raise NotFound("Label not found")

    for field, value in update_data.items():
        setattr(booking, field, value or None)
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking


@router.post("/{tenant}/bookings/{booking_id}/cancel", response_model=BookingSchema)
def cancel_booking(
    tenant: str,
    booking_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
    manager: BookingManager = Depends(deps.get_booking_manager),
):
    """Cancel on the customer's behalf, regardless of the event's self-service settings."""
    deps.ensure_tenant(current_user, tenant)
    booking = _get_booking(db, tenant, booking_id)
    return manager.cancel(booking, by_customer=False)
