# app/api/v1/endpoints/labels.py
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app import crud
from app.api import deps
from app.core.errors import NotFound
from app.db.session import get_db
from app.schemas.booking_label import BookingLabel as BookingLabelSchema, BookingLabelCreate
from app.schemas.token import TokenPayload

router = APIRouter(tags=["Admin Labels"])


@router.get("/{tenant}/labels", response_model=List[BookingLabelSchema])
def list_labels(
    tenant: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.ensure_tenant(current_user, tenant)
    return crud.booking_label.get_multi_by_tenant(db, tenant_id=tenant)


@router.post(
    "/{tenant}/labels",
    response_model=BookingLabelSchema,
    status_code=status.HTTP_201_CREATED,
)
def create_label(
    tenant: str,
    label_in: BookingLabelCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.ensure_tenant(current_user, tenant)
    return crud.booking_label.create_with_tenant(db, obj_in=label_in, tenant_id=tenant)


@router.delete("/{tenant}/labels/{label_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_label(
    tenant: str,
    label_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Delete a label; bookings carrying it are left unlabelled."""
    deps.ensure_tenant(current_user, tenant)
    label = crud.booking_label.get_for_tenant(db, tenant_id=tenant, label_id=label_id)
    if label is None:
        raise NotFound("Label not found")
    crud.booking_label.remove_for_tenant(db, db_obj=label)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
