# app/schemas/event_session.py
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from app.schemas.common import UTCDateTime


class EventSessionCreate(BaseModel):
    start_time: UTCDateTime
    end_time: UTCDateTime
    max_participants: int = Field(default=1, ge=1)
    location: Optional[str] = None
    host_name: Optional[str] = None

    @model_validator(mode="after")
    def check_order(self):
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class EventSessionUpdate(BaseModel):
    start_time: Optional[UTCDateTime] = None
    end_time: Optional[UTCDateTime] = None
    max_participants: Optional[int] = Field(default=None, ge=1)
    location: Optional[str] = None
    host_name: Optional[str] = None


class EventSession(BaseModel):
    id: str
    event_id: str
    start_time: UTCDateTime
    end_time: UTCDateTime
    max_participants: int
    location: Optional[str] = None
    host_name: Optional[str] = None
    booked_count: Optional[int] = None

    model_config = {"from_attributes": True}
