"""Interfaces for the external capabilities the dispatcher calls."""

from abc import ABC, abstractmethod

from eventdesk.models.event import DispatchAction, Event


class EmailProvider(ABC):
    """Sends a plain-text email."""

    name: str = "email"

    @abstractmethod
    async def send(self, to: str, from_address: str, subject: str, body: str) -> bool:
        """
        Send a message.

        Returns:
            True if the provider accepted the message, False otherwise

        Raises:
            IntegrationError: If the provider could not be reached
        """


class CalendarProvider(ABC):
    """Mirrors events into an external calendar."""

    name: str = "calendar"

    @abstractmethod
    async def upsert_or_delete(self, event: Event, action: DispatchAction) -> bool:
        """
        Create, update or remove the calendar entry for an event.

        Returns:
            True if the calendar was updated, False otherwise
        """
