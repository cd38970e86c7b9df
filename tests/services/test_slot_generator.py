"""
Tests for slot generation.

Verifies that generate_slots:
- Steps through windows by interval while the slot still fits
- Converts wall-clock times through the IANA zone on both sides of DST
- Skips local times that do not exist and maps ambiguous ones to the earlier instant
- De-duplicates on UTC start, keeping the first window's capacity
"""

from datetime import date, datetime, time, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from app.services.availability.resolver import ResolvedWindow
from app.services.availability.slot_generator import generate_slots, session_slots
from app.utils.timeutils import get_zone

BERLIN = get_zone("Europe/Berlin")
UTC = timezone.utc


def utc(*args):
    return datetime(*args, tzinfo=UTC)


def window(start, end, capacity=1):
    h1, m1 = start
    h2, m2 = end
    return ResolvedWindow(start=time(h1, m1), end=time(h2, m2), capacity=capacity)


class TestGenerateSlots:
    def test_hourly_slots_in_monday_window(self):
        slots = generate_slots(
            [window((9, 0), (17, 0))],
            date(2026, 11, 2),
            duration_min=60,
            interval_min=60,
            tz=BERLIN,
        )

        assert len(slots) == 8
        # CET is UTC+1 in November
        assert slots[0].start == utc(2026, 11, 2, 8, 0)
        assert slots[-1].start == utc(2026, 11, 2, 15, 0)
        assert slots[0].end == utc(2026, 11, 2, 9, 0)

    def test_slot_must_fit_inside_window(self):
        slots = generate_slots(
            [window((9, 0), (10, 30))],
            date(2026, 11, 2),
            duration_min=60,
            interval_min=30,
            tz=BERLIN,
        )
        # 09:00 and 09:30 fit, 10:00 would end at 11:00
        assert [s.start for s in slots] == [utc(2026, 11, 2, 8, 0), utc(2026, 11, 2, 8, 30)]

    def test_utc_offset_changes_across_spring_transition(self):
        before = generate_slots(
            [window((9, 0), (17, 0))], date(2026, 3, 27), duration_min=60, interval_min=60, tz=BERLIN
        )
        after = generate_slots(
            [window((9, 0), (17, 0))], date(2026, 3, 30), duration_min=60, interval_min=60, tz=BERLIN
        )

        assert before[0].start == utc(2026, 3, 27, 8, 0)
        assert after[0].start == utc(2026, 3, 30, 7, 0)
        assert len(before) == len(after) == 8
        # Same wall-clock times, one hour less offset after the switch to CEST
        for b, a in zip(before, after):
            assert (a.start - b.start) == timedelta(days=3, hours=-1)

    def test_utc_offset_changes_across_autumn_transition(self):
        before = generate_slots(
            [window((9, 0), (17, 0))], date(2026, 10, 23), duration_min=60, interval_min=60, tz=BERLIN
        )
        after = generate_slots(
            [window((9, 0), (17, 0))], date(2026, 10, 26), duration_min=60, interval_min=60, tz=BERLIN
        )

        assert before[0].start == utc(2026, 10, 23, 7, 0)
        assert after[0].start == utc(2026, 10, 26, 8, 0)

    def test_nonexistent_local_times_are_skipped(self):
        # 2026-03-29: clocks jump from 02:00 to 03:00 in Berlin
        slots = generate_slots(
            [window((1, 0), (4, 0))], date(2026, 3, 29), duration_min=30, interval_min=30, tz=BERLIN
        )

        assert [s.start for s in slots] == [
            utc(2026, 3, 29, 0, 0),   # 01:00 CET
            utc(2026, 3, 29, 0, 30),  # 01:30 CET
            utc(2026, 3, 29, 1, 0),   # 03:00 CEST
            utc(2026, 3, 29, 1, 30),  # 03:30 CEST
        ]

    def test_end_across_spring_forward_is_start_plus_duration(self):
        # 01:30 CET + 60 minutes ends at 03:30 CEST, not in the 02:00-03:00 gap
        slots = generate_slots(
            [window((1, 30), (4, 0))], date(2026, 3, 29), duration_min=60, interval_min=60, tz=BERLIN
        )

        assert [(s.start, s.end) for s in slots] == [
            (utc(2026, 3, 29, 0, 30), utc(2026, 3, 29, 1, 30)),
        ]

    def test_ambiguous_local_times_use_earlier_instant(self):
        # 2026-10-25: 02:00-03:00 happens twice in Berlin
        slots = generate_slots(
            [window((2, 0), (3, 0))], date(2026, 10, 25), duration_min=30, interval_min=30, tz=BERLIN
        )

        assert [s.start for s in slots] == [utc(2026, 10, 25, 0, 0), utc(2026, 10, 25, 0, 30)]

    def test_duplicate_instants_keep_first_window_capacity(self):
        slots = generate_slots(
            [window((9, 0), (10, 0), capacity=2), window((9, 30), (10, 30), capacity=5)],
            date(2026, 11, 2),
            duration_min=30,
            interval_min=30,
            tz=BERLIN,
        )

        assert [(s.start, s.capacity) for s in slots] == [
            (utc(2026, 11, 2, 8, 0), 2),
            (utc(2026, 11, 2, 8, 30), 2),
            (utc(2026, 11, 2, 9, 0), 5),
        ]

    def test_location_and_slot_key(self):
        slots = generate_slots(
            [window((9, 0), (10, 0))],
            date(2026, 11, 2),
            duration_min=60,
            interval_min=60,
            tz=BERLIN,
            location="Room 4",
        )
        assert slots[0].location == "Room 4"
        assert slots[0].slot_key == "2026-11-02T08:00:00Z"

    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError):
            generate_slots([window((9, 0), (10, 0))], date(2026, 11, 2), duration_min=30, interval_min=0, tz=BERLIN)


class TestSessionSlots:
    def test_sessions_become_ordered_candidates(self):
        late = MagicMock(
            id="ses_b", start_time=datetime(2026, 11, 2, 14, 0), end_time=datetime(2026, 11, 2, 15, 0),
            max_participants=4, location=None,
        )
        early = MagicMock(
            id="ses_a", start_time=utc(2026, 11, 2, 9, 0), end_time=utc(2026, 11, 2, 10, 0),
            max_participants=2, location="Hall",
        )

        slots = session_slots([late, early], default_location="Main office")

        assert [s.session_id for s in slots] == ["ses_a", "ses_b"]
        assert slots[0].capacity == 2
        assert slots[0].location == "Hall"
        # Naive values from the driver are read as UTC
        assert slots[1].start == utc(2026, 11, 2, 14, 0)
        assert slots[1].location == "Main office"
        assert slots[1].slot_key == "ses_b"
