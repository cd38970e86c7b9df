# app/services/availability/cache.py
import json
import logging
from datetime import date
from typing import List, Optional

from redis import Redis

from app.core.config import settings

logger = logging.getLogger(__name__)


class SlotCache:
    """
    Short-lived cache of per-date slot listings in Redis.

    Keys carry the event ``version``, so any change to the event's
    availability makes older entries unreachable; booking writes delete the
    affected date's key directly. The cache is advisory: every Redis failure
    is logged and treated as a miss.
    """

    def __init__(self, redis_client: Optional[Redis], ttl_seconds: Optional[int] = None):
        self.redis = redis_client
        self.ttl = ttl_seconds or settings.SLOT_CACHE_TTL_SECONDS

    @staticmethod
    def key(event_id: str, version: int, day: date) -> str:
        return f"slots:{event_id}:v{version}:{day.isoformat()}"

    def get(self, *, event_id: str, version: int, day: date) -> Optional[List[str]]:
        if self.redis is None:
            return None
        try:
            data = self.redis.get(self.key(event_id, version, day))
            if data is None:
                return None
            return json.loads(data)
        except Exception as e:
            logger.warning(f"Slot cache read failed for {event_id} on {day}: {str(e)}")
            return None

    def set(self, *, event_id: str, version: int, day: date, slots: List[str]) -> None:
        if self.redis is None:
            return
        try:
            self.redis.setex(self.key(event_id, version, day), self.ttl, json.dumps(slots))
        except Exception as e:
            logger.warning(f"Slot cache write failed for {event_id} on {day}: {str(e)}")

    def invalidate(self, *, event_id: str, version: int, days: List[date]) -> None:
        if self.redis is None or not days:
            return
        try:
            self.redis.delete(*[self.key(event_id, version, d) for d in set(days)])
        except Exception as e:
            logger.warning(f"Slot cache invalidation failed for {event_id}: {str(e)}")
