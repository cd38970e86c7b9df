# app/crud/crud_event.py
from typing import List, Optional

from sqlalchemy.orm import Session

from .base import CRUDBase
from app.core.errors import DuplicateSlug
from app.models.event import Event
from app.schemas.availability import dump_weekly_config
from app.schemas.event import EventCreate, EventUpdate

# Changing any of these changes which slots exist, so cached listings
# keyed on the old version must stop being served.
AVAILABILITY_FIELDS = {
    "timezone",
    "schedule_type",
    "duration_min",
    "interval_min",
    "max_participants",
    "min_notice_general",
    "min_notice_first",
    "active_start",
    "active_end",
    "access_mode",
    "config",
}


class CRUDEvent(CRUDBase[Event, EventCreate, EventUpdate]):
    def get_by_slug(
        self,
        db: Session,
        *,
        tenant_id: str,
        slug: str,
        include_archived: bool = False,
    ) -> Optional[Event]:
        query = db.query(self.model).filter(
            self.model.tenant_id == tenant_id, self.model.slug == slug
        )
        if not include_archived:
            query = query.filter(self.model.is_archived == False)  # noqa: E712
        return query.first()

    def get_multi_by_tenant(
        self, db: Session, *, tenant_id: str, skip: int = 0, limit: int = 100
    ) -> List[Event]:
        return (
            db.query(self.model)
            .filter(self.model.tenant_id == tenant_id, self.model.is_archived == False)  # noqa: E712
            .order_by(self.model.created_at.asc(), self.model.slug.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def create_with_tenant(self, db: Session, *, obj_in: EventCreate, tenant_id: str) -> Event:
        if self.get_by_slug(db, tenant_id=tenant_id, slug=obj_in.slug, include_archived=True):
            raise DuplicateSlug(f"Event slug '{obj_in.slug}' is already in use")

        obj_in_data = obj_in.model_dump(exclude={"config"})
        db_obj = self.model(
            **obj_in_data,
            tenant_id=tenant_id,
            config=dump_weekly_config(obj_in.config) or {},
            version=1,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(self, db: Session, *, db_obj: Event, obj_in: EventUpdate) -> Event:
        update_data = obj_in.model_dump(exclude_unset=True, exclude={"config"})
        if obj_in.config is not None:
            update_data["config"] = dump_weekly_config(obj_in.config)

        if AVAILABILITY_FIELDS.intersection(update_data):
            update_data["version"] = (db_obj.version or 1) + 1

        return super().update(db, db_obj=db_obj, obj_in=update_data)

    def bump_version(self, db: Session, *, db_obj: Event) -> Event:
        """Invalidate cached availability after an override/session change."""
        db_obj.version = (db_obj.version or 1) + 1
        db.add(db_obj)
        return db_obj

    def archive(self, db: Session, *, db_obj: Event) -> Event:
        db_obj.is_archived = True
        db_obj.version = (db_obj.version or 1) + 1
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


event = CRUDEvent(Event)
