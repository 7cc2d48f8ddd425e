"""Event repository interface."""

from typing import Protocol

from cadence.core.events import Event, EventTemplate


class EventRepository(Protocol):
    """Interface for storing events. Implementations assign ids."""

    def fetch_events(self) -> list[Event]:
        """Fetch every stored event."""
        ...

    def create_event(self, template: EventTemplate) -> Event:
        """Store one event and return it with its new id."""
        ...

    def create_events(self, templates: list[EventTemplate]) -> list[Event]:
        """Store several events, each receiving its own id."""
        ...

    def update_event(self, event: Event) -> Event:
        """Replace the stored event with the same id."""
        ...

    def delete_event(self, event_id: str) -> None:
        """Delete one event by id."""
        ...

    def delete_events(self, event_ids: list[str]) -> None:
        """Delete several events by id."""
        ...
