"""Event reminder selection - pure logic, no I/O."""

from datetime import datetime
from typing import Iterable

from .events import Event
from .overlap import to_interval


def minutes_until_start(event: Event, now: datetime) -> float | None:
    """Minutes from now until the event starts (negative once started), None if its time is malformed."""
    interval = to_interval(event)
    if interval is None:
        return None
    return (interval.start - now).total_seconds() / 60


def get_upcoming_events(
    events: Iterable[Event],
    now: datetime,
    notified_ids: set[str] | frozenset[str] = frozenset(),
) -> list[Event]:
    """
    Events due for a reminder.

    An event is due when it has not started yet, starts within its own
    notification_time minutes, and has not been notified already. Events
    with malformed times are never due.
    """
    upcoming = []
    for event in events:
        if event.id in notified_ids:
            continue
        remaining = minutes_until_start(event, now)
        if remaining is not None and 0 < remaining <= event.notification_time:
            upcoming.append(event)
    return upcoming


def create_notification_message(event: Event) -> str:
    return f"{event.title} starts in {event.notification_time} minutes"
