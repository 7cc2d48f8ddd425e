"""Scheduling conflict detection - no I/O dependencies."""

import logging
from datetime import date, timedelta
from enum import Enum
from typing import Iterable

from .events import Event, EventTemplate, RepeatType, TimeInterval, event_id
from .recurrence import generate_recurring_events

logger = logging.getLogger(__name__)


class OverlapPolicy(Enum):
    """Which occurrences of a repeating candidate are screened."""

    FULL = "full"  # Same rules as generate_recurring_events
    WEEKLY_ONLY = "weekly_only"  # Legacy: only weekly candidates, 7-day steps


def to_interval(event: EventTemplate) -> TimeInterval | None:
    """Reduce an event to its single-day time interval, or None if its times are malformed."""
    try:
        return event.interval()
    except ValueError:
        logger.debug(f"Cannot build a time interval for {event.title!r} on {event.date}")
        return None


def is_overlapping(a: EventTemplate, b: EventTemplate) -> bool:
    """
    Strict half-open overlap. Back-to-back events do not conflict.

    An event whose interval cannot be built overlaps nothing.
    """
    interval_a = to_interval(a)
    interval_b = to_interval(b)
    if interval_a is None or interval_b is None:
        return False
    return interval_a.overlaps(interval_b)


def lookahead_end(start: date) -> date:
    """Same calendar day one year later (Feb 29 maps to Feb 28)."""
    try:
        return start.replace(year=start.year + 1)
    except ValueError:
        return start.replace(year=start.year + 1, day=28)


def legacy_lookahead_end(start: date) -> date:
    """One year later, rolling Feb 29 over to Mar 1 as the weekly-only check always has."""
    try:
        return start.replace(year=start.year + 1)
    except ValueError:
        return date(start.year + 1, 3, 1)


def _weekly_instances(candidate: EventTemplate, until: date) -> list[EventTemplate]:
    instances = []
    if candidate.repeat.type is not RepeatType.WEEKLY:
        return instances
    current = candidate.date + timedelta(days=7)
    while current <= until:
        instances.append(candidate.on(current))
        current += timedelta(days=7)
    return instances


def recurring_instances(
    candidate: EventTemplate,
    policy: OverlapPolicy = OverlapPolicy.FULL,
) -> list[EventTemplate]:
    """Future occurrences of a candidate within a one-year lookahead."""
    if not candidate.repeat.repeats:
        return []
    if policy is OverlapPolicy.WEEKLY_ONLY:
        return _weekly_instances(candidate, legacy_lookahead_end(candidate.date))
    return generate_recurring_events(candidate, lookahead_end(candidate.date))[1:]


def find_overlapping_events(
    candidate: EventTemplate,
    events: Iterable[Event],
    policy: OverlapPolicy = OverlapPolicy.FULL,
) -> list[Event]:
    """
    Find existing events that conflict with a candidate.

    The candidate is checked first, then each of its future occurrences in
    date order. The first non-empty set of conflicts is returned; conflicts
    are not merged across occurrences. An existing event with the same id as
    the candidate (the stored original of an event being edited) is never
    reported.

    Pure function - no I/O.
    """
    existing = list(events)
    for instance in [candidate, *recurring_instances(candidate, policy)]:
        own_id = event_id(instance)
        overlapping = [
            e for e in existing if e.id != own_id and is_overlapping(e, instance)
        ]
        if overlapping:
            return overlapping
    return []
