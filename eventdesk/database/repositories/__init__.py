"""Repositories for the event data access layer."""

from .base import BaseRepository
from .event_store import InMemoryEventStore

__all__ = [
    "BaseRepository",
    "InMemoryEventStore",
]
