# app/api/v1/endpoints/sessions.py
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app import crud
from app.api import deps
from app.core.errors import Conflict, NotFound, ValidationError
from app.db.session import get_db
from app.schemas.event_session import (
    EventSession as EventSessionSchema,
    EventSessionCreate,
    EventSessionUpdate,
)
from app.schemas.token import TokenPayload
from app.utils.timeutils import as_utc

router = APIRouter(tags=["Admin Sessions"])


def _with_counts(db: Session, sessions) -> List[EventSessionSchema]:
    counts = crud.event_session.booked_counts(db, session_ids=[s.id for s in sessions])
    return [
        EventSessionSchema.model_validate(s).model_copy(
            update={"booked_count": counts.get(s.id, 0)}
        )
        for s in sessions
    ]


@router.get("/{tenant}/events/{slug}/sessions", response_model=List[EventSessionSchema])
def list_sessions(
    tenant: str,
    slug: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.ensure_tenant(current_user, tenant)
    event = deps.get_tenant_event(db, tenant, slug)
    return _with_counts(db, crud.event_session.get_multi_by_event(db, event_id=event.id))


@router.post(
    "/{tenant}/events/{slug}/sessions",
    response_model=EventSessionSchema,
    status_code=status.HTTP_201_CREATED,
)
def create_session(
    tenant: str,
    slug: str,
    session_in: EventSessionCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.ensure_tenant(current_user, tenant)
    event = deps.get_tenant_event(db, tenant, slug)
    return crud.event_session.create_with_event(db, obj_in=session_in, event=event)


@router.put("/{tenant}/events/{slug}/sessions/{session_id}", response_model=EventSessionSchema)
def update_session(
    tenant: str,
    slug: str,
    session_id: str,
    session_in: EventSessionUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Update a session. Moving it moves its bookings along with it."""
    deps.ensure_tenant(current_user, tenant)
    event = deps.get_tenant_event(db, tenant, slug)
    session = crud.event_session.get_for_event(db, event_id=event.id, session_id=session_id)
    if session is None:
        raise NotFound("Session not found")

    start = session_in.start_time or as_utc(session.start_time)
    end = session_in.end_time or as_utc(session.end_time)
    if start >= end:
        raise ValidationError("start_time must be before end_time")

    if session_in.max_participants is not None:
        booked = crud.booking.count_active_for_session(db, session_id=session.id)
        if session_in.max_participants < booked:
            raise Conflict(
                f"Session already has {booked} bookings; capacity can not go below that"
            )

    session = crud.event_session.update_with_event(
        db, db_obj=session, obj_in=session_in, event=event
    )
    return _with_counts(db, [session])[0]


@router.delete(
    "/{tenant}/events/{slug}/sessions/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_session(
    tenant: str,
    slug: str,
    session_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.ensure_tenant(current_user, tenant)
    event = deps.get_tenant_event(db, tenant, slug)
    session = crud.event_session.get_for_event(db, event_id=event.id, session_id=session_id)
    if session is None:
        raise NotFound("Session not found")
    if crud.booking.has_active_for_session(db, session_id=session.id):
        raise Conflict("Cancel the session's bookings before deleting it")

    crud.event_session.remove_with_event(db, db_obj=session, event=event)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
