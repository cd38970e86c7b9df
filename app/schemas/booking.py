# app/schemas/booking.py
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.schemas.common import UTCDateTime
from app.schemas.event import PublicEvent


class SlotSelection(BaseModel):
    """
    A requested slot: ``date`` is the event-local calendar day, ``time`` is
    either local ``HH:MM`` on that day or a UTC ISO instant from the slot list.
    """

    date: str = Field(..., json_schema_extra={"example": "2026-11-02"})
    time: str = Field(..., json_schema_extra={"example": "2026-11-02T09:00:00Z"})


class BookingRequest(SlotSelection):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    notes: Optional[str] = Field(default=None, max_length=5000)
    token: Optional[str] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value


class RescheduleRequest(SlotSelection):
    pass


class BookingConfirmation(BaseModel):
    id: str
    start_time: UTCDateTime
    end_time: UTCDateTime
    location: Optional[str] = None
    status: str
    management_token: str

    model_config = {"from_attributes": True}


class Booking(BaseModel):
    id: str
    tenant_id: str
    event_id: str
    session_id: Optional[str] = None
    invitee_id: Optional[str] = None
    label_id: Optional[str] = None
    start_time: UTCDateTime
    end_time: UTCDateTime
    customer_name: str
    customer_email: str
    customer_note: Optional[str] = None
    location: Optional[str] = None
    token: Optional[str] = None
    status: str
    management_token: str
    created_at: Optional[UTCDateTime] = None
    cancelled_at: Optional[UTCDateTime] = None

    model_config = {"from_attributes": True}


class BookingUpdate(BaseModel):
    # Empty strings clear the field, matching what the admin UI sends
    label_id: Optional[str] = None
    token: Optional[str] = None
    customer_note: Optional[str] = None


class ManagedBooking(BaseModel):
    booking: Booking
    event: PublicEvent
