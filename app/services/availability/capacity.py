"""Capacity check: a slot is bookable while its active bookings < capacity."""

from datetime import datetime
from typing import Iterable, Mapping

from app.services.availability.slot_generator import CandidateSlot


def has_capacity(slot: CandidateSlot, booked_count: int) -> bool:
    return booked_count < slot.capacity


def filter_bookable(
    slots: Iterable[CandidateSlot],
    *,
    counts_by_start: Mapping[datetime, int],
    counts_by_session: Mapping[str, int],
) -> list[CandidateSlot]:
    """
    Drop slots that are full. Recurring slots are matched on exact start
    instant; manual sessions on session id.
    """
    bookable = []
    for slot in slots:
        if slot.session_id:
            booked = counts_by_session.get(slot.session_id, 0)
        else:
            booked = counts_by_start.get(slot.start, 0)
        if has_capacity(slot, booked):
            bookable.append(slot)
    return bookable
