"""Recurrence expansion - turns one repeat rule into concrete occurrences.

Pure functions, no I/O. Dates are calendar dates; month and year stepping
use explicit calendar-field arithmetic and skip target dates that do not
exist (Jan 31 + 1 month is Mar 31, never Feb 28).
"""

import calendar
import logging
from datetime import date, datetime, timedelta
from typing import Callable, Iterator

from .events import EventTemplate, RepeatType

logger = logging.getLogger(__name__)

# (start, inclusive boundary) -> occurrence dates after start
Stepper = Callable[[date, date], Iterator[date]]


def parse_boundary(value: date | datetime | str | None) -> date | None:
    """
    Parse a recurrence end boundary.

    Accepts a date, a datetime or an ISO date string (a time part is
    dropped), or None. Anything unparseable resolves to None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text.split("T")[0].split(" ")[0])
    except ValueError:
        logger.debug(f"Ignoring unparseable repeat end date: {value!r}")
        return None


def add_months(year: int, month: int, months: int) -> tuple[int, int]:
    """Shift a (year, month) pair by a number of months."""
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def day_exists(year: int, month: int, day: int) -> bool:
    """True if the day-of-month exists in that month."""
    return day <= calendar.monthrange(year, month)[1]


def _daily(interval: int) -> Stepper:
    def step(start: date, boundary: date) -> Iterator[date]:
        current = start
        while True:
            try:
                current += timedelta(days=interval)
            except OverflowError:
                return
            if current > boundary:
                return
            yield current

    return step


def _weekly(interval: int) -> Stepper:
    return _daily(7 * interval)


def _monthly(interval: int) -> Stepper:
    def step(start: date, boundary: date) -> Iterator[date]:
        year, month, day = start.year, start.month, start.day
        while True:
            year, month = add_months(year, month, interval)
            if (year, month) > (boundary.year, boundary.month):
                return
            if not day_exists(year, month, day):
                # No such day this month: skip it entirely
                continue
            candidate = date(year, month, day)
            if candidate > boundary:
                return
            yield candidate

    return step


def _yearly(interval: int) -> Stepper:
    def step(start: date, boundary: date) -> Iterator[date]:
        year = start.year
        while True:
            year += interval
            if year > boundary.year:
                return
            if not day_exists(year, start.month, start.day):
                continue
            candidate = date(year, start.month, start.day)
            if candidate > boundary:
                return
            yield candidate

    return step


_STEPPERS: dict[RepeatType, Callable[[int], Stepper]] = {
    RepeatType.DAILY: _daily,
    RepeatType.WEEKLY: _weekly,
    RepeatType.MONTHLY: _monthly,
    RepeatType.YEARLY: _yearly,
}


def iter_occurrence_dates(
    start: date,
    repeat_type: RepeatType,
    interval: int,
    boundary: date,
) -> Iterator[date]:
    """
    Yield occurrence dates after start, up to and including boundary.

    Unknown repeat types yield nothing.
    """
    make_stepper = _STEPPERS.get(repeat_type)
    if make_stepper is None:
        logger.warning(f"Unsupported repeat type {repeat_type!r}, not expanding")
        return
    yield from make_stepper(interval)(start, boundary)


def generate_recurring_events(
    template: EventTemplate,
    repeat_end_date: date | str | None,
) -> list[EventTemplate]:
    """
    Expand a template into its occurrences.

    Pure function - no I/O.

    Args:
        template: The event to expand. repeat.type drives the behavior.
        repeat_end_date: Inclusive boundary supplied by the caller (date or
            ISO string). Absent, unparseable, or earlier than the start date
            means no occurrences beyond the template itself.

    Returns:
        Occurrences ascending by date. The first element is always the
        template at its own date.
    """
    repeat = template.repeat
    if repeat.type is RepeatType.NONE:
        return [template]

    occurrences = [template]

    boundary = parse_boundary(repeat_end_date)
    if boundary is None or boundary < template.date:
        return occurrences

    for occurrence_date in iter_occurrence_dates(
        template.date, repeat.type, repeat.interval, boundary
    ):
        occurrences.append(template.on(occurrence_date))

    logger.debug(
        f"Expanded {template.title!r} ({repeat.type.value}/{repeat.interval}) "
        f"to {len(occurrences)} occurrences through {boundary.isoformat()}"
    )
    return occurrences
