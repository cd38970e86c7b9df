# app/schemas/availability.py
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.constants.booking import WEEKDAYS
from app.utils.timeutils import minutes_of_day, parse_hhmm


class TimeWindow(BaseModel):
    """An open interval of local wall-clock time on one weekday."""

    start: str = Field(..., json_schema_extra={"example": "09:00"})
    end: str = Field(..., json_schema_extra={"example": "17:00"})
    max_participants: Optional[int] = Field(default=None, ge=1)

    @field_validator("start", "end")
    @classmethod
    def check_hhmm(cls, value: str) -> str:
        parse_hhmm(value)
        return value

    @model_validator(mode="after")
    def check_order(self):
        if parse_hhmm(self.start) >= parse_hhmm(self.end):
            raise ValueError(f"Window start {self.start} must be before end {self.end}")
        return self


WeeklyConfig = Dict[str, List[TimeWindow]]


def validate_weekly_config(config: WeeklyConfig) -> WeeklyConfig:
    """Reject unknown weekday keys and overlapping windows on the same day."""
    for day, windows in config.items():
        if day not in WEEKDAYS:
            raise ValueError(f"Unknown weekday '{day}'")
        ordered = sorted(windows, key=lambda w: minutes_of_day(parse_hhmm(w.start)))
        for previous, current in zip(ordered, ordered[1:]):
            if parse_hhmm(current.start) < parse_hhmm(previous.end):
                raise ValueError(
                    f"Overlapping windows on {day}: "
                    f"{previous.start}-{previous.end} and {current.start}-{current.end}"
                )
    return config


def dump_weekly_config(config: Optional[WeeklyConfig]) -> Optional[dict]:
    """Serialise a validated config for the JSON column."""
    if config is None:
        return None
    return {
        day: [w.model_dump(exclude_none=True) for w in windows]
        for day, windows in config.items()
    }


class SlotsResponse(BaseModel):
    slots: List[str] = []
