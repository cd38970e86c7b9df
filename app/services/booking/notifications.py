# app/services/booking/notifications.py
import json
import logging
from typing import Optional

from redis import Redis

from app.core.config import settings
from app.models.booking import Booking
from app.models.event import Event
from app.utils.timeutils import format_utc

logger = logging.getLogger(__name__)

BOOKING_CONFIRMED = "BOOKING_CONFIRMED"
BOOKING_CANCELLED = "BOOKING_CANCELLED"
BOOKING_RESCHEDULED = "BOOKING_RESCHEDULED"


class BookingNotifier:
    """
    Publishes booking lifecycle messages on a Redis channel for the
    notification worker. Publishing happens after commit and never fails the
    request that triggered it.
    """

    def __init__(self, redis_client: Optional[Redis], channel: Optional[str] = None):
        self.redis = redis_client
        self.channel = channel or settings.NOTIFICATION_CHANNEL

    def publish(self, kind: str, booking: Booking, event: Event, **extra) -> bool:
        if self.redis is None:
            return False

        payload = {
            "type": kind,
            "bookingId": booking.id,
            "tenantId": booking.tenant_id,
            "eventId": event.id,
            "eventSlug": event.slug,
            "startTime": format_utc(booking.start_time),
            "endTime": format_utc(booking.end_time),
            "customerName": booking.customer_name,
            "customerEmail": booking.customer_email,
            "location": booking.location,
            "managementToken": booking.management_token,
            "status": booking.status,
        }
        payload.update(extra)

        try:
            self.redis.publish(self.channel, json.dumps(payload))
            logger.info(f"Published {kind} for booking {booking.id}")
            return True
        except Exception as e:
            logger.error(
                f"Failed to publish {kind} for booking {booking.id}: {str(e)}",
                exc_info=True,
            )
            return False

    def booking_confirmed(self, booking: Booking, event: Event) -> bool:
        return self.publish(BOOKING_CONFIRMED, booking, event)

    def booking_cancelled(self, booking: Booking, event: Event) -> bool:
        return self.publish(BOOKING_CANCELLED, booking, event)

    def booking_rescheduled(self, booking: Booking, event: Event, previous_start) -> bool:
        return self.publish(
            BOOKING_RESCHEDULED, booking, event, previousStartTime=format_utc(previous_start)
        )
