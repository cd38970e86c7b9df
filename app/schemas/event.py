# app/schemas/event.py
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.schemas.availability import WeeklyConfig, validate_weekly_config
from app.schemas.common import UTCDateTime
from app.utils.timeutils import get_zone

ScheduleTypeField = Literal["RECURRING", "MANUAL"]
AccessModeField = Literal["OPEN", "RESTRICTED", "CLOSED"]


def _check_timezone(value: Optional[str]) -> Optional[str]:
    if value is not None:
        get_zone(value)
    return value


class EventBase(BaseModel):
    title_en: str = Field(..., json_schema_extra={"example": "Consultation"})
    title_de: Optional[str] = None
    desc_en: Optional[str] = None
    desc_de: Optional[str] = None
    location: Optional[str] = None
    host_name: Optional[str] = None
    image_url: Optional[str] = None


class EventCreate(EventBase):
    slug: str = Field(..., pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$", max_length=100)
    timezone: str = "UTC"
    schedule_type: ScheduleTypeField = "RECURRING"
    duration_min: int = Field(default=30, gt=0, le=24 * 60)
    interval_min: int = Field(default=30, gt=0, le=24 * 60)
    max_participants: int = Field(default=1, ge=1)
    min_notice_general: int = Field(default=0, ge=0)
    min_notice_first: int = Field(default=0, ge=0)
    active_start: Optional[UTCDateTime] = None
    active_end: Optional[UTCDateTime] = None
    access_mode: AccessModeField = "OPEN"
    config: WeeklyConfig = {}
    allow_customer_cancel: bool = True
    allow_customer_reschedule: bool = True

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, value):
        return _check_timezone(value)

    @field_validator("config")
    @classmethod
    def check_config(cls, value: WeeklyConfig) -> WeeklyConfig:
        return validate_weekly_config(value)

    @model_validator(mode="after")
    def check_active_range(self):
        if self.active_start and self.active_end and self.active_start >= self.active_end:
            raise ValueError("active_start must be before active_end")
        return self


class EventUpdate(BaseModel):
    title_en: Optional[str] = None
    title_de: Optional[str] = None
    desc_en: Optional[str] = None
    desc_de: Optional[str] = None
    location: Optional[str] = None
    host_name: Optional[str] = None
    image_url: Optional[str] = None
    timezone: Optional[str] = None
    schedule_type: Optional[ScheduleTypeField] = None
    duration_min: Optional[int] = Field(default=None, gt=0, le=24 * 60)
    interval_min: Optional[int] = Field(default=None, gt=0, le=24 * 60)
    max_participants: Optional[int] = Field(default=None, ge=1)
    min_notice_general: Optional[int] = Field(default=None, ge=0)
    min_notice_first: Optional[int] = Field(default=None, ge=0)
    active_start: Optional[UTCDateTime] = None
    active_end: Optional[UTCDateTime] = None
    access_mode: Optional[AccessModeField] = None
    config: Optional[WeeklyConfig] = None
    allow_customer_cancel: Optional[bool] = None
    allow_customer_reschedule: Optional[bool] = None

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, value):
        return _check_timezone(value)

    @field_validator("config")
    @classmethod
    def check_config(cls, value: Optional[WeeklyConfig]) -> Optional[WeeklyConfig]:
        if value is None:
            return value
        return validate_weekly_config(value)


class PublicEvent(EventBase):
    """What the booking page needs to render an event."""

    id: str
    tenant_id: str
    slug: str
    timezone: str
    schedule_type: str
    duration_min: int
    interval_min: int
    max_participants: int
    access_mode: str
    active_start: Optional[UTCDateTime] = None
    active_end: Optional[UTCDateTime] = None
    allow_customer_cancel: bool
    allow_customer_reschedule: bool

    model_config = {"from_attributes": True}


class Event(PublicEvent):
    min_notice_general: int
    min_notice_first: int
    config: dict = {}
    version: int
    is_archived: bool
    created_at: Optional[UTCDateTime] = None
    updated_at: Optional[UTCDateTime] = None
