# app/api/v1/api.py

from fastapi import APIRouter
from app.api.v1.endpoints import (
    bookings,
    events,
    health,
    invitees,
    labels,
    manage,
    overrides,
    public_booking,
    sessions,
)

# This is the main router for the v1 API.
api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(manage.router)
api_router.include_router(public_booking.router)

# Admin routes share path shapes with the public ones, so they live under /admin
admin_router = APIRouter(prefix="/admin")
admin_router.include_router(events.router)
admin_router.include_router(overrides.router)
admin_router.include_router(sessions.router)
admin_router.include_router(invitees.router)
admin_router.include_router(bookings.router)
admin_router.include_router(labels.router)

api_router.include_router(admin_router)
