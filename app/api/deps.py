# app/api/deps.py
from datetime import datetime
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from redis import Redis
from sqlalchemy.orm import Session

from app import crud
from app.core.config import settings
from app.core.errors import AccessDenied, NotFound
from app.db.redis import redis_client
from app.db.session import get_db
from app.models.event import Event
from app.schemas.token import TokenPayload
from app.services.availability.cache import SlotCache
from app.services.availability.service import AvailabilityService
from app.services.booking.admission import BookingAdmission
from app.services.booking.manage import BookingManager
from app.services.booking.notifications import BookingNotifier
from app.utils.timeutils import utc_now

# This tells FastAPI where to look for the token.
# The `tokenUrl` doesn't have to be a real endpoint in this service,
# it's just for the OpenAPI documentation.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")


def get_current_user(token: str = Depends(oauth2_scheme)) -> TokenPayload:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        token_data = TokenPayload(**payload)
    except (JWTError, ValueError):
        # Catches any error from jose or Pydantic validation
        raise credentials_exception

    return token_data


def ensure_tenant(current_user: TokenPayload, tenant: str) -> None:
    """Admin routes only ever touch the caller's own tenant."""
    if current_user.tenant_id != tenant:
        raise AccessDenied("Not authorized for this tenant")


def get_redis() -> Optional[Redis]:
    return redis_client


def get_now() -> datetime:
    """The request's notion of "now"; overridden in tests."""
    return utc_now()


def get_slot_cache(redis: Optional[Redis] = Depends(get_redis)) -> SlotCache:
    return SlotCache(redis)


def get_notifier(redis: Optional[Redis] = Depends(get_redis)) -> BookingNotifier:
    return BookingNotifier(redis)


def get_availability_service(
    db: Session = Depends(get_db), cache: SlotCache = Depends(get_slot_cache)
) -> AvailabilityService:
    return AvailabilityService(db, cache)


def get_admission(
    db: Session = Depends(get_db),
    cache: SlotCache = Depends(get_slot_cache),
    notifier: BookingNotifier = Depends(get_notifier),
) -> BookingAdmission:
    return BookingAdmission(db, cache=cache, notifier=notifier)


def get_booking_manager(
    db: Session = Depends(get_db),
    cache: SlotCache = Depends(get_slot_cache),
    notifier: BookingNotifier = Depends(get_notifier),
) -> BookingManager:
    return BookingManager(db, cache=cache, notifier=notifier)


def get_tenant_event(db: Session, tenant: str, slug: str) -> Event:
    event = crud.event.get_by_slug(db, tenant_id=tenant, slug=slug)
    if event is None:
        raise NotFound("Event not found")
    return event
