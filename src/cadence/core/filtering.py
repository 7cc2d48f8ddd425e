"""Search and calendar-view filtering of stored events."""

import calendar
from datetime import date, timedelta

from .events import Event

SUNDAY = 6


def contains_term(target: str, term: str) -> bool:
    return term.lower() in target.lower()


def search_events(events: list[Event], term: str) -> list[Event]:
    """Events whose title, description or location contains term."""
    return [
        e
        for e in events
        if contains_term(e.title, term)
        or contains_term(e.description, term)
        or contains_term(e.location, term)
    ]


def get_week_dates(current_date: date, week_start: int = SUNDAY) -> list[date]:
    """
    The seven dates of the week containing current_date.

    week_start uses date.weekday() numbering (0 = Monday, 6 = Sunday).
    """
    offset = (current_date.weekday() - week_start) % 7
    first = current_date - timedelta(days=offset)
    return [first + timedelta(days=i) for i in range(7)]


def get_month_range(current_date: date) -> tuple[date, date]:
    """First and last day of current_date's month."""
    last_day = calendar.monthrange(current_date.year, current_date.month)[1]
    return current_date.replace(day=1), current_date.replace(day=last_day)


def filter_events_by_date_range(events: list[Event], start: date, end: date) -> list[Event]:
    """Events dated within [start, end], inclusive."""
    return [e for e in events if start <= e.date <= end]


def get_filtered_events(
    events: list[Event],
    search_term: str,
    current_date: date,
    view: str | None,
    week_start: int = SUNDAY,
) -> list[Event]:
    """
    Apply the search term, then restrict to the visible week or month.

    Any view other than "week" or "month" leaves the date range unrestricted.
    Input order is preserved.
    """
    searched = search_events(events, search_term)

    if view == "week":
        week = get_week_dates(current_date, week_start)
        return filter_events_by_date_range(searched, week[0], week[-1])

    if view == "month":
        start, end = get_month_range(current_date)
        return filter_events_by_date_range(searched, start, end)

    return searched
