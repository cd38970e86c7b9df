import logging

import redis
from app.core.config import settings

logger = logging.getLogger(__name__)


def get_redis_client() -> redis.Redis | None:
    """
    Creates and returns a new Redis client instance, or None when no Redis URL
    is configured (slot caching and notifications are then skipped).
    """
    if not settings.REDIS_URL:
        logger.info("REDIS_URL not configured; slot cache and notifications disabled")
        return None
    return redis.from_url(settings.REDIS_URL, decode_responses=True)


# A single, shared instance that request dependencies hand out.
redis_client = get_redis_client()
