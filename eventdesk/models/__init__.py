"""Data models for the eventdesk service."""

from .config import EventDeskConfig
from .event import Coordinates, DispatchAction, Event, EventFields, EventPatch

__all__ = [
    "EventDeskConfig",
    "Coordinates",
    "DispatchAction",
    "Event",
    "EventFields",
    "EventPatch",
]
