# app/api/v1/endpoints/health.py
"""
Health check endpoints for monitoring system status.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from redis import Redis
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.api import deps
from app.db.session import get_db

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_check():
    """Basic health check - API is responding."""
    return {"status": "healthy", "service": "slot-booking-service"}


@router.get("/db")
def database_health(db: Session = Depends(get_db)):
    """Check database connectivity."""
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy", "component": "database"}
    except Exception as e:
        raise HTTPException(status_code=503, detail=f"Database unhealthy: {str(e)}")


@router.get("/redis")
def redis_health(redis: Optional[Redis] = Depends(deps.get_redis)):
    """Check Redis connectivity. An unconfigured Redis is reported, not failed."""
    if redis is None:
        return {"status": "disabled", "component": "redis"}
    try:
        redis.ping()
        return {"status": "healthy", "component": "redis"}
    except Exception as e:
        raise HTTPException(status_code=503, detail=f"Redis unhealthy: {str(e)}")
