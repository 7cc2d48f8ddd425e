"""Calendar HTTP API adapter - REST client for event storage."""

import logging

import requests

from cadence.core.events import Event, EventTemplate

from .errors import EventNotFoundError, RepositoryError

logger = logging.getLogger(__name__)


class ApiEventRepository:
    """
    Calendar server API adapter.

    Implements EventRepository protocol. The server assigns ids.
    No business logic - just I/O.
    """

    def __init__(self, base_url: str, timeout: int = 10, session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """Make an API request, translating HTTP failures to RepositoryError."""
        url = f"{self.base_url}/api{endpoint}"
        try:
            resp = self._session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise RepositoryError(f"{method} {url} failed: {e}") from e
        if not resp.ok:
            logger.warning(f"{method} {url} returned {resp.status_code}")
            raise RepositoryError(
                f"{method} {url} returned {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
            )
        return resp

    def fetch_events(self) -> list[Event]:
        data = self._request("GET", "/events").json()
        return [Event.from_dict(item) for item in data.get("events", [])]

    def create_event(self, template: EventTemplate) -> Event:
        data = self._request("POST", "/events", json=template.to_dict()).json()
        return Event.from_dict(data)

    def create_events(self, templates: list[EventTemplate]) -> list[Event]:
        """Store several events in one request."""
        payload = {"events": [t.to_dict() for t in templates]}
        data = self._request("POST", "/events-list", json=payload).json()
        return [Event.from_dict(item) for item in data.get("events", [])]

    def update_event(self, event: Event) -> Event:
        try:
            data = self._request("PUT", f"/events/{event.id}", json=event.to_dict()).json()
        except RepositoryError as e:
            if e.status_code == 404:
                raise EventNotFoundError(event.id) from e
            raise
        return Event.from_dict(data)

    def delete_event(self, event_id: str) -> None:
        try:
            self._request("DELETE", f"/events/{event_id}")
        except RepositoryError as e:
            if e.status_code == 404:
                raise EventNotFoundError(event_id) from e
            raise

    def delete_events(self, event_ids: list[str]) -> None:
        self._request("DELETE", "/events-list", json={"eventIds": event_ids})
