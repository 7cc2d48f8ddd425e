"""Tests for scheduling conflict detection."""

from datetime import date, datetime

import pytest

from cadence.core.events import Event, EventTemplate, RepeatRule, RepeatType
from cadence.core.overlap import (
    OverlapPolicy,
    find_overlapping_events,
    is_overlapping,
    legacy_lookahead_end,
    lookahead_end,
    recurring_instances,
    to_interval,
)


@pytest.fixture
def make_event():
    """Factory for stored events."""
    def _make(
        event_id: str,
        start: str,
        end: str,
        on: str = "2025-10-15",
        repeat: RepeatRule | None = None,
    ) -> Event:
        return Event(
            id=event_id,
            title=f"Event {event_id}",
            date=date.fromisoformat(on),
            start_time=start,
            end_time=end,
            repeat=repeat or RepeatRule(),
        )
    return _make


@pytest.fixture
def make_template():
    def _make(start: str, end: str, on: str = "2025-10-15", repeat: RepeatRule | None = None):
        return EventTemplate(
            title="Candidate",
            date=date.fromisoformat(on),
            start_time=start,
            end_time=end,
            repeat=repeat or RepeatRule(),
        )
    return _make


class TestIsOverlapping:
    def test_to_interval(self, make_event):
        interval = to_interval(make_event("1", "09:00", "10:30"))
        assert interval.start == datetime(2025, 10, 15, 9, 0)
        assert interval.end == datetime(2025, 10, 15, 10, 30)

    def test_partial_overlap(self, make_event):
        a = make_event("1", "09:00", "10:30")
        b = make_event("2", "10:00", "11:00")
        assert is_overlapping(a, b) is True
        assert is_overlapping(b, a) is True

    def test_back_to_back_do_not_overlap(self, make_event):
        a = make_event("1", "09:00", "10:00")
        b = make_event("2", "10:00", "11:00")
        assert is_overlapping(a, b) is False
        assert is_overlapping(b, a) is False

    def test_containment(self, make_event):
        outer = make_event("1", "09:00", "12:00")
        inner = make_event("2", "10:00", "11:00")
        assert is_overlapping(outer, inner) is True

    def test_different_dates(self, make_event):
        a = make_event("1", "09:00", "10:00", on="2025-10-15")
        b = make_event("2", "09:00", "10:00", on="2025-10-16")
        assert is_overlapping(a, b) is False

    def test_malformed_time_has_no_interval(self, make_event):
        assert to_interval(make_event("1", "", "10:00")) is None
        assert to_interval(make_event("2", "9am", "10am")) is None

    def test_malformed_time_overlaps_nothing(self, make_event):
        broken = make_event("1", "", "")
        other = make_event("2", "00:00", "23:59")
        assert is_overlapping(broken, other) is False
        assert is_overlapping(other, broken) is False


class TestLookahead:
    def test_one_year(self):
        assert lookahead_end(date(2025, 8, 25)) == date(2026, 8, 25)

    def test_leap_day(self):
        assert lookahead_end(date(2024, 2, 29)) == date(2025, 2, 28)

    def test_legacy_leap_day_rolls_to_march(self):
        assert legacy_lookahead_end(date(2024, 2, 29)) == date(2025, 3, 1)
        assert legacy_lookahead_end(date(2025, 8, 25)) == date(2026, 8, 25)


class TestRecurringInstances:
    def test_none_has_no_instances(self, make_template):
        assert recurring_instances(make_template("09:00", "10:00")) == []

    def test_full_policy_uses_expansion_rules(self, make_template):
        candidate = make_template(
            "09:00", "10:00", on="2025-01-31", repeat=RepeatRule(RepeatType.MONTHLY)
        )
        instances = recurring_instances(candidate)
        assert [i.date.isoformat() for i in instances] == [
            "2025-03-31",
            "2025-05-31",
            "2025-07-31",
            "2025-08-31",
            "2025-10-31",
            "2025-12-31",
            "2026-01-31",
        ]

    def test_weekly_only_policy_ignores_other_types(self, make_template):
        candidate = make_template("09:00", "10:00", repeat=RepeatRule(RepeatType.DAILY))
        assert recurring_instances(candidate, OverlapPolicy.WEEKLY_ONLY) == []

    def test_weekly_only_policy_steps_seven_days(self, make_template):
        candidate = make_template(
            "09:00", "10:00", on="2025-01-01", repeat=RepeatRule(RepeatType.WEEKLY, interval=2)
        )
        instances = recurring_instances(candidate, OverlapPolicy.WEEKLY_ONLY)
        assert instances[0].date == date(2025, 1, 8)
        assert instances[-1].date == date(2025, 12, 31)
        assert len(instances) == 52

    def test_full_policy_honours_weekly_interval(self, make_template):
        candidate = make_template(
            "09:00", "10:00", on="2025-01-01", repeat=RepeatRule(RepeatType.WEEKLY, interval=2)
        )
        instances = recurring_instances(candidate)
        assert instances[0].date == date(2025, 1, 15)
        assert len(instances) == 26


class TestFindOverlappingEvents:
    def test_no_events(self, make_template):
        assert find_overlapping_events(make_template("09:00", "10:00"), []) == []

    def test_returns_conflicts(self, make_event, make_template):
        existing = [
            make_event("1", "09:00", "10:00"),
            make_event("2", "11:00", "12:00"),
            make_event("3", "09:30", "11:30"),
        ]
        result = find_overlapping_events(make_template("09:45", "10:15"), existing)
        assert [e.id for e in result] == ["1", "3"]

    def test_back_to_back_is_clean(self, make_event, make_template):
        existing = [make_event("1", "09:00", "10:00")]
        assert find_overlapping_events(make_template("10:00", "11:00"), existing) == []

    def test_excludes_itself_when_editing(self, make_event):
        original = make_event("1", "09:00", "10:00")
        edited = make_event("1", "09:30", "10:30")
        other = make_event("2", "10:00", "11:00")
        result = find_overlapping_events(edited, [original, other])
        assert [e.id for e in result] == ["2"]

    def test_edit_with_no_other_events(self, make_event):
        original = make_event("1", "09:00", "10:00")
        edited = make_event("1", "09:00", "11:00")
        assert find_overlapping_events(edited, [original]) == []

    def test_recurring_candidate_conflicts_later(self, make_event, make_template):
        candidate = make_template(
            "09:00", "10:00", on="2025-10-01", repeat=RepeatRule(RepeatType.WEEKLY)
        )
        existing = [make_event("1", "09:30", "10:30", on="2025-10-22")]
        result = find_overlapping_events(candidate, existing)
        assert [e.id for e in result] == ["1"]

    def test_returns_first_conflicting_occurrence_only(self, make_event, make_template):
        candidate = make_template(
            "09:00", "10:00", on="2025-10-01", repeat=RepeatRule(RepeatType.WEEKLY)
        )
        existing = [
            make_event("late", "09:00", "10:00", on="2025-10-15"),
            make_event("early", "09:00", "10:00", on="2025-10-08"),
        ]
        result = find_overlapping_events(candidate, existing)
        assert [e.id for e in result] == ["early"]

    def test_candidate_date_checked_first(self, make_event, make_template):
        candidate = make_template(
            "09:00", "10:00", on="2025-10-01", repeat=RepeatRule(RepeatType.DAILY)
        )
        existing = [
            make_event("tomorrow", "09:00", "10:00", on="2025-10-02"),
            make_event("today", "09:00", "10:00", on="2025-10-01"),
        ]
        result = find_overlapping_events(candidate, existing)
        assert [e.id for e in result] == ["today"]

    def test_beyond_one_year_is_not_checked(self, make_event, make_template):
        candidate = make_template(
            "09:00", "10:00", on="2025-10-01", repeat=RepeatRule(RepeatType.WEEKLY)
        )
        existing = [make_event("1", "09:00", "10:00", on="2026-10-07")]
        assert find_overlapping_events(candidate, existing) == []

    def test_monthly_candidate_policies_differ(self, make_event, make_template):
        candidate = make_template(
            "09:00", "10:00", on="2025-10-15", repeat=RepeatRule(RepeatType.MONTHLY)
        )
        existing = [make_event("1", "09:00", "10:00", on="2025-12-15")]

        full = find_overlapping_events(candidate, existing, OverlapPolicy.FULL)
        legacy = find_overlapping_events(candidate, existing, OverlapPolicy.WEEKLY_ONLY)

        assert [e.id for e in full] == ["1"]
        assert legacy == []

    def test_stored_event_with_blank_times_is_skipped(self, make_template):
        stored = Event.from_dict({"id": "1", "date": "2025-10-15", "startTime": None, "endTime": ""})
        assert find_overlapping_events(make_template("09:00", "10:00"), [stored]) == []

    def test_malformed_candidate_has_no_conflicts(self, make_event, make_template):
        existing = [make_event("1", "09:00", "10:00")]
        assert find_overlapping_events(make_template("", "10:00"), existing) == []

    def test_accepts_any_iterable(self, make_event, make_template):
        existing = (e for e in [make_event("1", "09:00", "10:00")])
        result = find_overlapping_events(make_template("09:30", "10:30"), existing)
        assert len(result) == 1
