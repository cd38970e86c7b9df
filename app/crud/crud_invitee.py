# app/crud/crud_invitee.py
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.constants.booking import InviteeStatus
from app.models.event import Event
from app.models.invitee import Invitee
from app.schemas.invitee import InviteeUpdate
from app.utils.tokens import generate_invitee_token

logger = logging.getLogger(__name__)


class CRUDInvitee:
    """Invitee tokens for RESTRICTED events."""

    def get_by_token(
        self, db: Session, *, event_id: str, token: str, for_update: bool = False
    ) -> Optional[Invitee]:
        query = db.query(Invitee).filter(
            Invitee.event_id == event_id, Invitee.token == token.strip().upper()
        )
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_for_tenant(self, db: Session, *, tenant_id: str, invitee_id: str) -> Optional[Invitee]:
        return (
            db.query(Invitee)
            .join(Event, Event.id == Invitee.event_id)
            .filter(Invitee.id == invitee_id, Event.tenant_id == tenant_id)
            .first()
        )

    def get_multi_by_event(self, db: Session, *, event_id: str) -> List[Invitee]:
        return (
            db.query(Invitee)
            .filter(Invitee.event_id == event_id)
            .order_by(Invitee.created_at.asc(), Invitee.token.asc())
            .all()
        )

    def _unique_token(self, db: Session) -> str:
        while True:
            token = generate_invitee_token()
            if not db.query(Invitee.id).filter(Invitee.token == token).first():
                return token
            logger.debug("Invitee token collision, regenerating")

    def _build(self, db: Session, *, event_id: str, email: Optional[str]) -> Invitee:
        invitee = Invitee(
            event_id=event_id,
            token=self._unique_token(db),
            email=email.strip().lower() if email else None,
            status=InviteeStatus.ACTIVE,
        )
        db.add(invitee)
        # Flush so the next token's uniqueness check sees this one
        db.flush()
        return invitee

    def create_for_event(self, db: Session, *, event_id: str, email: Optional[str] = None) -> Invitee:
        invitee = self._build(db, event_id=event_id, email=email)
        db.commit()
        db.refresh(invitee)
        return invitee

    def import_emails(self, db: Session, *, event_id: str, emails: List[str]) -> List[Invitee]:
        """Create one ACTIVE invitee per distinct, non-empty email."""
        seen = set()
        invitees = []
        for raw in emails:
            email = raw.strip().lower()
            if not email or email in seen:
                continue
            seen.add(email)
            invitees.append(self._build(db, event_id=event_id, email=email))
        db.commit()
        for invitee in invitees:
            db.refresh(invitee)
        return invitees

    def update(self, db: Session, *, db_obj: Invitee, obj_in: InviteeUpdate) -> Invitee:
        update_data = obj_in.model_dump(exclude_unset=True)
        if "status" in update_data and update_data["status"] is not None:
            db_obj.status = update_data["status"]
        if "email" in update_data:
            email = update_data["email"]
            db_obj.email = email.strip().lower() if email else None
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def mark_used(self, db: Session, *, invitee: Invitee) -> Invitee:
        invitee.status = InviteeStatus.USED
        db.add(invitee)
        return invitee

    def remove(self, db: Session, *, db_obj: Invitee) -> None:
        db.delete(db_obj)
        db.commit()


invitee = CRUDInvitee()
