"""Errors raised by storage adapters."""


class RepositoryError(Exception):
    """Raised when the event store cannot complete a request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class EventNotFoundError(RepositoryError):
    """Raised when an event id does not exist in the store."""

    def __init__(self, event_id: str):
        super().__init__(f"Event not found: {event_id}", status_code=404)
        self.event_id = event_id
