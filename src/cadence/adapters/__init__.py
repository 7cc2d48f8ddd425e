"""Adapters - I/O implementations of ports."""

from .errors import RepositoryError, EventNotFoundError
from .file_store import FileEventStore
from .http_api import ApiEventRepository

__all__ = [
    "RepositoryError",
    "EventNotFoundError",
    "FileEventStore",
    "ApiEventRepository",
]
