"""Cadence CLI - recurring events and scheduling conflicts."""

import json
import logging
import sys
from datetime import date

import click

from .adapters import RepositoryError
from .config import load_config
from .core.events import Event, EventTemplate, RepeatRule, RepeatType
from .core.filtering import get_filtered_events
from .notifier import run_notifier
from .workflows import (
    ScheduleConflictError,
    check_conflicts,
    delete_event,
    delete_series,
    get_repository,
    preview_occurrences,
    save_event,
)


@click.group()
@click.version_option(package_name="cadence")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """Cadence - recurring events and scheduling conflicts."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


def _event_options(func):
    """Options describing a candidate event."""
    options = [
        click.option("--title", required=True, help="Event title"),
        click.option("--date", "event_date", required=True, type=click.DateTime(["%Y-%m-%d"]), help="YYYY-MM-DD"),
        click.option("--start", "start_time", required=True, help="Start time HH:MM"),
        click.option("--end", "end_time", required=True, help="End time HH:MM"),
        click.option("--description", default="", help="Description"),
        click.option("--location", default="", help="Location"),
        click.option("--category", default="", help="Category"),
        click.option(
            "--repeat",
            "repeat_type",
            type=click.Choice([t.value for t in RepeatType]),
            default="none",
            show_default=True,
        ),
        click.option("--interval", type=click.IntRange(min=1), default=1, show_default=True),
        click.option(
            "--until",
            "repeat_end",
            type=click.DateTime(["%Y-%m-%d"]),
            default=None,
            help="Repeat end date YYYY-MM-DD",
        ),
        click.option("--notify", "notification_time", type=int, default=10, show_default=True, help="Reminder minutes"),
        click.option("--id", "event_id", default=None, help="Id of the stored event being edited"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_candidate(
    title, event_date, start_time, end_time, description, location, category,
    repeat_type, interval, repeat_end, notification_time, event_id,
) -> EventTemplate:
    repeat = RepeatRule(type=RepeatType(repeat_type), interval=interval)
    fields = dict(
        title=title,
        date=event_date.date(),
        start_time=start_time,
        end_time=end_time,
        description=description,
        location=location,
        category=category,
        repeat=repeat,
        notification_time=notification_time,
    )
    if event_id:
        return Event(id=event_id, **fields)
    return EventTemplate(**fields)


def _show_events(events: list, as_json: bool, empty_msg: str = "No events.") -> None:
    """Shared event display logic."""
    if as_json:
        click.echo(json.dumps([e.to_dict() for e in events], indent=2, ensure_ascii=False))
        return

    if not events:
        click.echo(empty_msg)
        return

    current_date = None
    for event in events:
        if event.date != current_date:
            if current_date is not None:
                click.echo()
            click.echo(f"### {event.date.strftime('%A, %B %d %Y')}")
            current_date = event.date

        time_str = f"{event.start_time}-{event.end_time}"
        loc = f" @ {event.location}" if event.location else ""
        ident = f" [{event.id}]" if getattr(event, "id", "") else ""
        click.echo(f"  {time_str:12} {event.title}{loc}{ident}")


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


@main.command("list")
@click.option("--view", type=click.Choice(["week", "month", "all"]), default="all", show_default=True)
@click.option("--date", "ref_date", type=click.DateTime(["%Y-%m-%d"]), default=None, help="Reference date")
@click.option("--search", default="", help="Search title, description and location")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_events(view: str, ref_date, search: str, as_json: bool):
    """List stored events."""
    config = load_config()
    try:
        events = get_repository(config).fetch_events()
    except RepositoryError as e:
        _fail(e)

    current = ref_date.date() if ref_date else date.today()
    filtered = get_filtered_events(events, search, current, view, config.week_start)
    _show_events(sorted(filtered, key=lambda e: (e.date, e.start_time)), as_json)


@main.command()
@_event_options
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def expand(as_json: bool, repeat_end, **fields):
    """Preview the occurrences an event would create."""
    config = load_config()
    candidate = _build_candidate(repeat_end=repeat_end, **fields)
    _show_events(preview_occurrences(candidate, config, repeat_end), as_json)


@main.command()
@_event_options
def check(repeat_end, **fields):
    """Report stored events that collide with an event."""
    config = load_config()
    candidate = _build_candidate(repeat_end=repeat_end, **fields)
    try:
        conflicts = check_conflicts(get_repository(config), candidate, config)
    except RepositoryError as e:
        _fail(e)

    if not conflicts:
        click.echo("No conflicts.")
        return
    click.echo("Conflicts with:")
    _show_events(conflicts, as_json=False)
    sys.exit(2)


@main.command()
@_event_options
@click.option("--force", is_flag=True, help="Save even if it conflicts")
def add(repeat_end, force: bool, **fields):
    """Save an event, expanding repeats into separate records."""
    config = load_config()
    candidate = _build_candidate(repeat_end=repeat_end, **fields)
    try:
        saved = save_event(get_repository(config), candidate, config, repeat_end, force=force)
    except (ScheduleConflictError, RepositoryError) as e:
        _fail(e)

    click.echo(f"Saved {len(saved)} event(s).")
    _show_events(saved, as_json=False)


@main.command()
@click.argument("event_id")
@click.option("--series", is_flag=True, help="Delete every occurrence of the event's series")
def delete(event_id: str, series: bool):
    """Delete an event."""
    config = load_config()
    repo = get_repository(config)
    try:
        if series:
            deleted = delete_series(repo, event_id)
        else:
            delete_event(repo, event_id)
            deleted = [event_id]
    except RepositoryError as e:
        _fail(e)

    click.echo(f"Deleted {len(deleted)} event(s).")


@main.command()
def remind():
    """Run the reminder loop, printing reminders as events approach."""
    run_notifier(click.echo)
