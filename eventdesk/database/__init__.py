"""Storage package for the eventdesk service."""

from .repositories import BaseRepository, InMemoryEventStore

__all__ = [
    "BaseRepository",
    "InMemoryEventStore",
]
