# app/api/v1/endpoints/overrides.py
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app import crud
from app.api import deps
from app.core.errors import NotFound, ValidationError
from app.db.session import get_db
from app.schemas.override import Override, OverrideCreate
from app.schemas.token import TokenPayload
from app.utils.timeutils import parse_date

router = APIRouter(tags=["Admin Overrides"])


@router.get("/{tenant}/events/{slug}/overrides", response_model=List[Override])
def list_overrides(
    tenant: str,
    slug: str,
    start: str = Query(...),
    end: str = Query(...),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.ensure_tenant(current_user, tenant)
    event = deps.get_tenant_event(db, tenant, slug)
    try:
        first, last = parse_date(start), parse_date(end)
    except ValueError as e:
        raise ValidationError(str(e))
    return crud.event_override.get_for_range(db, event_id=event.id, start=first, end=last)


@router.post("/{tenant}/events/{slug}/overrides", response_model=Override)
def upsert_override(
    tenant: str,
    slug: str,
    override_in: OverrideCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Block a date or replace its windows. Posting the same date again replaces it."""
    deps.ensure_tenant(current_user, tenant)
    event = deps.get_tenant_event(db, tenant, slug)
    return crud.event_override.upsert(db, event=event, obj_in=override_in)


@router.delete(
    "/{tenant}/events/{slug}/overrides/{day}", status_code=status.HTTP_204_NO_CONTENT
)
def delete_override(
    tenant: str,
    slug: str,
    day: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.ensure_tenant(current_user, tenant)
    event = deps.get_tenant_event(db, tenant, slug)
    try:
        parsed = parse_date(day)
    except ValueError as e:
        raise ValidationError(str(e))
    if not crud.event_override.delete_for_date(db, event=event, day=parsed):
        raise NotFound("No override for this date")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
