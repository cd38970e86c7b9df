"""
Minimum-notice and active-range filtering.

Notice rule: a candidate needs ``min_notice_general`` minutes of notice when
the event already has a CONFIRMED booking starting strictly before it, and
``min_notice_first`` minutes otherwise. The earlier-booking test only needs
the event's earliest confirmed booking start.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional

from app.services.availability.slot_generator import CandidateSlot
from app.utils.timeutils import as_utc

REASON_BEFORE_ACTIVE = "before_active_start"
REASON_AFTER_ACTIVE = "after_active_end"
REASON_NOTICE = "insufficient_notice"


@dataclass(frozen=True)
class NoticePolicy:
    min_notice_general: int
    min_notice_first: int
    active_start: Optional[datetime] = None
    active_end: Optional[datetime] = None

    @classmethod
    def for_event(cls, event) -> "NoticePolicy":
        return cls(
            min_notice_general=event.min_notice_general or 0,
            min_notice_first=event.min_notice_first or 0,
            active_start=as_utc(event.active_start),
            active_end=as_utc(event.active_end),
        )

    def notice_for(self, slot_start: datetime, earliest_booking: Optional[datetime]) -> timedelta:
        if earliest_booking is not None and earliest_booking < slot_start:
            return timedelta(minutes=self.min_notice_general)
        return timedelta(minutes=self.min_notice_first)

    def rejection_reason(
        self,
        slot: CandidateSlot,
        *,
        now: datetime,
        earliest_booking: Optional[datetime],
    ) -> Optional[str]:
        """Why ``slot`` may not be booked at ``now``, or None if it may."""
        if self.active_start is not None and slot.start < self.active_start:
            return REASON_BEFORE_ACTIVE
        if self.active_end is not None and slot.start > self.active_end:
            return REASON_AFTER_ACTIVE
        if slot.start < now + self.notice_for(slot.start, earliest_booking):
            return REASON_NOTICE
        return None


def apply_lead_time(
    slots: Iterable[CandidateSlot],
    policy: NoticePolicy,
    *,
    now: datetime,
    earliest_booking: Optional[datetime],
) -> list[CandidateSlot]:
    return [
        slot
        for slot in slots
        if policy.rejection_reason(slot, now=now, earliest_booking=earliest_booking) is None
    ]
