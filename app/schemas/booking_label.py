# app/schemas/booking_label.py
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.common import UTCDateTime


class BookingLabelCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    color: str = Field(default="#9e9e9e", pattern=r"^#[0-9a-fA-F]{6}$")


class BookingLabel(BaseModel):
    id: str
    tenant_id: str
    name: str
    color: str
    created_at: Optional[UTCDateTime] = None

    model_config = {"from_attributes": True}
