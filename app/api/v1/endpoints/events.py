# app/api/v1/endpoints/events.py
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app import crud
from app.api import deps
from app.db.session import get_db
from app.schemas.event import Event as EventSchema, EventCreate, EventUpdate
from app.schemas.token import TokenPayload

router = APIRouter(tags=["Admin Events"])


@router.post(
    "/{tenant}/events",
    response_model=EventSchema,
    status_code=status.HTTP_201_CREATED,
)
def create_event(
    tenant: str,
    event_in: EventCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Creates a new event for the tenant. Slugs are unique per tenant."""
    deps.ensure_tenant(current_user, tenant)
    return crud.event.create_with_tenant(db, obj_in=event_in, tenant_id=tenant)


@router.get("/{tenant}/events", response_model=List[EventSchema])
def list_events(
    tenant: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    deps.ensure_tenant(current_user, tenant)
    return crud.event.get_multi_by_tenant(db, tenant_id=tenant, skip=skip, limit=limit)


@router.get("/{tenant}/events/{slug}", response_model=EventSchema)
def get_event(
    tenant: str,
    slug: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.ensure_tenant(current_user, tenant)
    return deps.get_tenant_event(db, tenant, slug)


@router.put("/{tenant}/events/{slug}", response_model=EventSchema)
def update_event(
    tenant: str,
    slug: str,
    event_in: EventUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Partially update an event; availability changes drop cached slot listings."""
    deps.ensure_tenant(current_user, tenant)
    event = deps.get_tenant_event(db, tenant, slug)
    return crud.event.update(db, db_obj=event, obj_in=event_in)


@router.delete("/{tenant}/events/{slug}", response_model=EventSchema)
def archive_event(
    tenant: str,
    slug: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Archive an event. Existing bookings are kept; no new slots are offered."""
    deps.ensure_tenant(current_user, tenant)
    event = deps.get_tenant_event(db, tenant, slug)
    return crud.event.archive(db, db_obj=event)
