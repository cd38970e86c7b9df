# app/schemas/invitee.py
from typing import List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field

from app.schemas.common import UTCDateTime


class InviteeCreate(BaseModel):
    email: Optional[EmailStr] = None


class InviteeImport(BaseModel):
    emails: List[EmailStr] = Field(..., min_length=1, max_length=1000)


class InviteeUpdate(BaseModel):
    status: Optional[Literal["ACTIVE", "USED", "REVOKED"]] = None
    email: Optional[EmailStr] = None


class Invitee(BaseModel):
    id: str
    event_id: str
    token: str
    email: Optional[str] = None
    status: str
    created_at: Optional[UTCDateTime] = None

    model_config = {"from_attributes": True}


class InviteeImportResult(BaseModel):
    imported: int
    invitees: List[Invitee]
