"""Functional core - pure scheduling logic with no I/O."""

from .events import Event, EventTemplate, RepeatRule, RepeatType, TimeInterval
from .recurrence import generate_recurring_events, parse_boundary
from .overlap import OverlapPolicy, find_overlapping_events, is_overlapping
from .filtering import get_filtered_events, search_events, get_week_dates
from .notifications import get_upcoming_events, create_notification_message

__all__ = [
    # Events
    "Event",
    "EventTemplate",
    "RepeatRule",
    "RepeatType",
    "TimeInterval",
    # Recurrence
    "generate_recurring_events",
    "parse_boundary",
    # Overlap
    "OverlapPolicy",
    "find_overlapping_events",
    "is_overlapping",
    # Filtering
    "get_filtered_events",
    "search_events",
    "get_week_dates",
    # Notifications
    "get_upcoming_events",
    "create_notification_message",
]
