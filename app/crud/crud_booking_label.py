# app/crud/crud_booking_label.py
from typing import List, Optional

from sqlalchemy.orm import Session

from .base import CRUDBase
from app.models.booking import Booking
from app.models.booking_label import BookingLabel
from app.schemas.booking_label import BookingLabelCreate


class CRUDBookingLabel(CRUDBase[BookingLabel, BookingLabelCreate, BookingLabelCreate]):
    def get_for_tenant(self, db: Session, *, tenant_id: str, label_id: str) -> Optional[BookingLabel]:
        return (
            db.query(self.model)
            .filter(self.model.id == label_id, self.model.tenant_id == tenant_id)
            .first()
        )

    def get_multi_by_tenant(self, db: Session, *, tenant_id: str) -> List[BookingLabel]:
        return (
            db.query(self.model)
            .filter(self.model.tenant_id == tenant_id)
            .order_by(self.model.name.asc())
            .all()
        )

    def create_with_tenant(self, db: Session, *, obj_in: BookingLabelCreate, tenant_id: str) -> BookingLabel:
        db_obj = self.model(**obj_in.model_dump(), tenant_id=tenant_id)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def remove_for_tenant(self, db: Session, *, db_obj: BookingLabel) -> None:
        # Detach bookings first; SQLite does not enforce ON DELETE SET NULL
        db.query(Booking).filter(Booking.label_id == db_obj.id).update(
            {"label_id": None}, synchronize_session="fetch"
        )
        db.delete(db_obj)
        db.commit()


booking_label = CRUDBookingLabel(BookingLabel)
