# app/crud/crud_event_override.py
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.event import Event
from app.models.event_override import EventOverride
from app.schemas.availability import dump_weekly_config
from app.schemas.override import OverrideCreate
from app.crud.crud_event import event as event_crud


class CRUDEventOverride:
    """Per-date availability overrides, one row per (event, date)."""

    def get_for_date(self, db: Session, *, event_id: str, day: date) -> Optional[EventOverride]:
        return (
            db.query(EventOverride)
            .filter(EventOverride.event_id == event_id, EventOverride.date == day)
            .first()
        )

    def get_for_range(
        self, db: Session, *, event_id: str, start: date, end: date
    ) -> List[EventOverride]:
        return (
            db.query(EventOverride)
            .filter(
                EventOverride.event_id == event_id,
                EventOverride.date >= start,
                EventOverride.date <= end,
            )
            .order_by(EventOverride.date.asc())
            .all()
        )

    def upsert(self, db: Session, *, event: Event, obj_in: OverrideCreate) -> EventOverride:
        """Create the override for ``obj_in.date`` or replace the existing one."""
        override = self.get_for_date(db, event_id=event.id, day=obj_in.date)
        if override is None:
            override = EventOverride(event_id=event.id, date=obj_in.date)

        override.is_unavailable = obj_in.is_unavailable
        override.override_config = (
            None if obj_in.is_unavailable else dump_weekly_config(obj_in.config)
        )
        override.location = obj_in.location
        override.override_max_participants = (
            None if obj_in.is_unavailable else obj_in.override_max_participants
        )
        db.add(override)
        event_crud.bump_version(db, db_obj=event)
        db.commit()
        db.refresh(override)
        return override

    def delete_for_date(self, db: Session, *, event: Event, day: date) -> bool:
        """Delete a date's override so the recurring template applies again."""
        override = self.get_for_date(db, event_id=event.id, day=day)
        if not override:
            return False
        db.delete(override)
        event_crud.bump_version(db, db_obj=event)
        db.commit()
        return True


event_override = CRUDEventOverride()
