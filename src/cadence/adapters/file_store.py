"""File-based event storage adapter."""

import json
import logging
import uuid
from pathlib import Path

from cadence.core.events import Event, EventTemplate

from .errors import EventNotFoundError, RepositoryError

logger = logging.getLogger(__name__)


class FileEventStore:
    """
    JSON file event storage.

    Implements EventRepository protocol. All events live in a single
    document of the form {"events": [...]}.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def _load(self) -> list[dict]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as e:
            raise RepositoryError(f"Corrupt event file {self.path}: {e}") from e
        return data.get("events", [])

    def _save(self, records: list[dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"events": records}, indent=2, ensure_ascii=False))

    @staticmethod
    def _new_id() -> str:
        return str(uuid.uuid4())

    def fetch_events(self) -> list[Event]:
        """Read all stored events."""
        events = []
        for record in self._load():
            try:
                events.append(Event.from_dict(record))
            except (KeyError, ValueError) as e:
                logger.warning(f"Skipping malformed event record {record.get('id')}: {e}")
        return events

    def create_event(self, template: EventTemplate) -> Event:
        return self.create_events([template])[0]

    def create_events(self, templates: list[EventTemplate]) -> list[Event]:
        """Store templates, each under a freshly generated id."""
        records = self._load()
        created = [Event.from_template(t, self._new_id()) for t in templates]
        records.extend(e.to_dict() for e in created)
        self._save(records)
        logger.info(f"Stored {len(created)} event(s) in {self.path}")
        return created

    def update_event(self, event: Event) -> Event:
        records = self._load()
        for i, record in enumerate(records):
            if str(record.get("id")) == event.id:
                records[i] = event.to_dict()
                self._save(records)
                return event
        raise EventNotFoundError(event.id)

    def delete_event(self, event_id: str) -> None:
        self.delete_events([event_id])

    def delete_events(self, event_ids: list[str]) -> None:
        """Delete events by id. Every id must exist."""
        records = self._load()
        stored = {str(r.get("id")) for r in records}
        for event_id in event_ids:
            if event_id not in stored:
                raise EventNotFoundError(event_id)
        wanted = set(event_ids)
        self._save([r for r in records if str(r.get("id")) not in wanted])
        logger.info(f"Deleted {len(wanted)} event(s) from {self.path}")
