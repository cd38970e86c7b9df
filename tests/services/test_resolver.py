"""
Tests for override resolution.

Verifies that resolve_day:
- Uses the recurring weekday template when there is no override
- Blocks the whole day for an unavailable override
- Replaces the day's windows (and only that weekday's entry) with an override config
- Applies the capacity precedence override > window > event
"""

from datetime import date, time
from unittest.mock import MagicMock

from app.services.availability.resolver import resolve_day, weekday_key

MONDAY = date(2026, 11, 2)
TUESDAY = date(2026, 11, 3)


def make_event(config=None, max_participants=3, location="Main office"):
    return MagicMock(config=config or {}, max_participants=max_participants, location=location)


def make_override(**kwargs):
    values = {
        "is_unavailable": False,
        "override_config": None,
        "override_max_participants": None,
        "location": None,
    }
    values.update(kwargs)
    return MagicMock(**values)


class TestResolveDay:
    def setup_method(self):
        self.event = make_event(
            config={
                "monday": [
                    {"start": "13:00", "end": "17:00"},
                    {"start": "09:00", "end": "12:00", "max_participants": 5},
                ]
            }
        )

    def test_weekday_key(self):
        assert weekday_key(MONDAY) == "monday"
        assert weekday_key(date(2026, 11, 8)) == "sunday"

    def test_recurring_windows_are_sorted_with_capacity(self):
        resolved = resolve_day(self.event, MONDAY)

        assert [(w.start, w.end, w.capacity) for w in resolved.windows] == [
            (time(9, 0), time(12, 0), 5),
            (time(13, 0), time(17, 0), 3),
        ]
        assert resolved.location == "Main office"

    def test_missing_weekday_is_closed(self):
        resolved = resolve_day(self.event, TUESDAY)
        assert resolved.is_closed

    def test_unavailable_override_blocks_day(self):
        override = make_override(is_unavailable=True, override_config={"monday": [{"start": "08:00", "end": "09:00"}]})
        assert resolve_day(self.event, MONDAY, override).is_closed

    def test_override_config_replaces_windows(self):
        override = make_override(
            override_config={"monday": [{"start": "18:00", "end": "20:00"}]},
            location="Annex",
        )
        resolved = resolve_day(self.event, MONDAY, override)

        assert [(w.start, w.end) for w in resolved.windows] == [(time(18, 0), time(20, 0))]
        assert resolved.location == "Annex"

    def test_override_config_without_weekday_entry_closes_day(self):
        # Only the date's own weekday key is consulted; no fallback to the template
        override = make_override(override_config={"tuesday": [{"start": "09:00", "end": "10:00"}]})
        assert resolve_day(self.event, MONDAY, override).is_closed

    def test_empty_override_config_closes_day(self):
        override = make_override(override_config={})
        assert resolve_day(self.event, MONDAY, override).is_closed

    def test_override_capacity_wins_over_window_and_event(self):
        override = make_override(override_max_participants=10)
        resolved = resolve_day(self.event, MONDAY, override)
        assert [w.capacity for w in resolved.windows] == [10, 10]

    def test_override_without_config_keeps_template(self):
        override = make_override(location="Annex")
        resolved = resolve_day(self.event, MONDAY, override)
        assert len(resolved.windows) == 2
        assert resolved.location == "Annex"
