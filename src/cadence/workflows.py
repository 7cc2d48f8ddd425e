"""Shared workflow layer between the CLI and the reminder loop.

Each function composes the pure core with an EventRepository: screen the
candidate for conflicts, expand repeats, and persist the results.
"""

import logging
import uuid
from dataclasses import replace
from datetime import date, timedelta

from .adapters import ApiEventRepository, EventNotFoundError, FileEventStore
from .config import Config
from .core.events import Event, EventTemplate
from .core.overlap import find_overlapping_events
from .core.recurrence import generate_recurring_events, parse_boundary
from .ports import EventRepository

logger = logging.getLogger(__name__)


class ScheduleConflictError(RuntimeError):
    """Raised when a candidate collides with stored events."""

    def __init__(self, conflicts: list[Event]):
        titles = ", ".join(f"{e.title} ({e.date} {e.start_time}-{e.end_time})" for e in conflicts)
        super().__init__(f"Conflicts with: {titles}")
        self.conflicts = conflicts


def get_repository(config: Config) -> EventRepository:
    """Resolve the event store from config."""
    if config.api_base_url:
        return ApiEventRepository(config.api_base_url)
    return FileEventStore(config.events_path)


def resolve_repeat_end(
    template: EventTemplate,
    config: Config,
    repeat_end_date: date | str | None = None,
) -> date | None:
    """
    Boundary for expanding a template.

    Explicit argument first, then the rule's own end date, then the
    configured default horizon. The defaults only apply when no explicit
    end date was given: an unparseable one resolves to None, so nothing
    beyond the template itself is expanded.
    """
    if repeat_end_date is not None and str(repeat_end_date).strip():
        return parse_boundary(repeat_end_date)
    if template.repeat.end_date:
        return template.repeat.end_date
    if not template.repeat.repeats:
        return None
    if config.default_repeat_end:
        return config.default_repeat_end
    return template.date + timedelta(days=config.repeat_horizon_days)


def check_conflicts(
    repo: EventRepository,
    candidate: EventTemplate,
    config: Config,
) -> list[Event]:
    """Stored events the candidate collides with, empty if none."""
    return find_overlapping_events(candidate, repo.fetch_events(), config.overlap_policy)


def preview_occurrences(
    template: EventTemplate,
    config: Config,
    repeat_end_date: date | str | None = None,
) -> list[EventTemplate]:
    """Occurrences that saving the template would create."""
    return generate_recurring_events(template, resolve_repeat_end(template, config, repeat_end_date))


def save_event(
    repo: EventRepository,
    candidate: EventTemplate,
    config: Config,
    repeat_end_date: date | str | None = None,
    force: bool = False,
) -> list[Event]:
    """
    Check, expand and persist a candidate.

    A stored Event is updated in place. A new repeating template is expanded
    and every occurrence is stored as its own record sharing a series id.

    Raises:
        ScheduleConflictError: if the candidate overlaps stored events and
            force is False.
    """
    conflicts = check_conflicts(repo, candidate, config)
    if conflicts:
        if not force:
            raise ScheduleConflictError(conflicts)
        logger.info(f"Saving {candidate.title!r} despite {len(conflicts)} conflict(s)")

    if isinstance(candidate, Event):
        return [repo.update_event(candidate)]

    if not candidate.repeat.repeats:
        return [repo.create_event(candidate)]

    if not candidate.series_id:
        candidate = replace(candidate, series_id=str(uuid.uuid4()))
    occurrences = preview_occurrences(candidate, config, repeat_end_date)
    logger.info(f"Saving {len(occurrences)} occurrence(s) of {candidate.title!r}")
    return repo.create_events(occurrences)


def delete_event(repo: EventRepository, event_id: str) -> None:
    repo.delete_event(event_id)


def delete_series(repo: EventRepository, event_id: str) -> list[str]:
    """
    Delete an event and every record sharing its series id.

    Events without a series id are deleted alone. Returns deleted ids.
    """
    events = repo.fetch_events()
    target = next((e for e in events if e.id == event_id), None)
    if target is None:
        raise EventNotFoundError(event_id)

    if target.series_id:
        ids = [e.id for e in events if e.series_id == target.series_id]
    else:
        ids = [target.id]
    repo.delete_events(ids)
    return ids
