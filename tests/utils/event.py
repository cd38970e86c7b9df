from datetime import datetime

from sqlalchemy.orm import Session

from app import crud
from app.constants.booking import BookingStatus
from app.models.booking import Booking
from app.models.event import Event
from app.schemas.event import EventCreate
from app.utils.tokens import generate_management_token

MONDAY_9_TO_17 = {"monday": [{"start": "09:00", "end": "17:00"}]}


def create_test_event(
    db: Session, *, tenant_id: str = "acme", slug: str = "consultation", **kwargs
) -> Event:
    """
    Creates a Berlin-time event with hourly slots on Mondays 09:00-17:00 and
    room for one participant per slot, unless told otherwise.
    """
    data = {
        "title_en": "Consultation",
        "slug": slug,
        "timezone": "Europe/Berlin",
        "duration_min": 60,
        "interval_min": 60,
        "max_participants": 1,
        "config": MONDAY_9_TO_17,
        "location": "Main office",
    }
    data.update(kwargs)
    return crud.event.create_with_tenant(db, obj_in=EventCreate(**data), tenant_id=tenant_id)


def create_test_booking(
    db: Session,
    event: Event,
    start: datetime,
    end: datetime,
    *,
    status: str = BookingStatus.CONFIRMED,
    session_id: str = None,
    email: str = "guest@example.com",
) -> Booking:
    """Inserts a booking directly, bypassing admission checks."""
    booking = Booking(
        tenant_id=event.tenant_id,
        event_id=event.id,
        session_id=session_id,
        start_time=start,
        end_time=end,
        customer_name="Guest",
        customer_email=email,
        status=status,
        management_token=generate_management_token(),
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking
