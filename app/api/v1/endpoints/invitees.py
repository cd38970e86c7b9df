# app/api/v1/endpoints/invitees.py
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app import crud
from app.api import deps
from app.core.errors import NotFound
from app.db.session import get_db
from app.schemas.invitee import (
    Invitee as InviteeSchema,
    InviteeCreate,
    InviteeImport,
    InviteeImportResult,
    InviteeUpdate,
)
from app.schemas.token import TokenPayload

router = APIRouter(tags=["Admin Invitees"])


@router.get("/{tenant}/events/{slug}/invitees", response_model=List[InviteeSchema])
def list_invitees(
    tenant: str,
    slug: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.ensure_tenant(current_user, tenant)
    event = deps.get_tenant_event(db, tenant, slug)
    return crud.invitee.get_multi_by_event(db, event_id=event.id)


@router.post(
    "/{tenant}/events/{slug}/invitees",
    response_model=InviteeSchema,
    status_code=status.HTTP_201_CREATED,
)
def create_invitee(
    tenant: str,
    slug: str,
    invitee_in: InviteeCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Issue a single access token for a RESTRICTED event."""
    deps.ensure_tenant(current_user, tenant)
    event = deps.get_tenant_event(db, tenant, slug)
    return crud.invitee.create_for_event(db, event_id=event.id, email=invitee_in.email)


@router.post(
    "/{tenant}/events/{slug}/invitees/import",
    response_model=InviteeImportResult,
    status_code=status.HTTP_201_CREATED,
)
def import_invitees(
    tenant: str,
    slug: str,
    import_in: InviteeImport,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """One token per distinct email address; repeats are skipped."""
    deps.ensure_tenant(current_user, tenant)
    event = deps.get_tenant_event(db, tenant, slug)
    invitees = crud.invitee.import_emails(db, event_id=event.id, emails=import_in.emails)
    return {"imported": len(invitees), "invitees": invitees}


@router.put("/{tenant}/invitees/{invitee_id}", response_model=InviteeSchema)
def update_invitee(
    tenant: str,
    invitee_id: str,
    invitee_in: InviteeUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.ensure_tenant(current_user, tenant)
    invitee = crud.invitee.get_for_tenant(db, tenant_id=tenant, invitee_id=invitee_id)
    if invitee is None:
        raise NotFound("Invitee not found")
    return crud.invitee.update(db, db_obj=invitee, obj_in=invitee_in)


@router.delete("/{tenant}/invitees/{invitee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_invitee(
    tenant: str,
    invitee_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.ensure_tenant(current_user, tenant)
    invitee = crud.invitee.get_for_tenant(db, tenant_id=tenant, invitee_id=invitee_id)
    if invitee is None:
        raise NotFound("Invitee not found")
    crud.invitee.remove(db, db_obj=invitee)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
