"""Exception types raised by the event store, handlers and integrations."""

from typing import Any, Dict, List, Optional


class EventDeskError(Exception):
    """Base class for eventdesk errors"""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(EventDeskError):
    """Raised when a request is missing required fields or carries malformed ones"""
    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.errors = errors or []
        super().__init__(message)


class NotFoundError(EventDeskError):
    """Raised when an operation references an event id that does not exist"""
    def __init__(self, event_id: int, message: str = "Event not found."):
        self.event_id = event_id
        super().__init__(message)


class IntegrationError(EventDeskError):
    """Raised by an external capability (email, calendar) when delivery fails"""
    def __init__(self, message: str, provider: str):
        self.provider = provider
        super().__init__(message)
