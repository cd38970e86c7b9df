# app/core/limiter.py
"""
Rate limiter for the public booking surface.
Kept in its own module so endpoints and main can share it without cycles.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from app.core.config import settings


def tenant_client_key(request: Request) -> str:
    # One bucket per client per tenant, so a busy tenant page can't starve another.
    tenant = request.path_params.get("tenant", "-")
    return f"{tenant}:{get_remote_address(request)}"


# Counters live in Redis when it is configured so every worker shares them.
limiter = Limiter(
    key_func=tenant_client_key,
    storage_uri=settings.REDIS_URL or "memory://",
)
