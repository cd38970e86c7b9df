# app/schemas/override.py
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.schemas.availability import WeeklyConfig, validate_weekly_config


class OverrideCreate(BaseModel):
    date: date
    is_unavailable: bool = False
    config: Optional[WeeklyConfig] = None
    location: Optional[str] = None
    override_max_participants: Optional[int] = Field(default=None, ge=1)

    @field_validator("config")
    @classmethod
    def check_config(cls, value: Optional[WeeklyConfig]) -> Optional[WeeklyConfig]:
        if value is None:
            return value
        return validate_weekly_config(value)


class Override(BaseModel):
    id: str
    event_id: str
    date: date
    is_unavailable: bool
    override_config: Optional[dict] = None
    location: Optional[str] = None
    override_max_participants: Optional[int] = None

    model_config = {"from_attributes": True}
