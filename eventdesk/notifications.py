"""
Notification Dispatcher

Turns event lifecycle transitions into email and calendar side effects.
Delivery is best-effort: provider failures are retried, logged and
swallowed, never surfaced to the caller that mutated the event.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Union

import structlog

from eventdesk.integrations import (
    CalendarProvider,
    EmailProvider,
    LoggingCalendarProvider,
    LoggingEmailProvider,
    SendGridEmailProvider,
)
from eventdesk.models.config import EventDeskConfig
from eventdesk.models.event import DispatchAction, Event


logger = structlog.get_logger(__name__)


SUBJECT_TEMPLATES = {
    DispatchAction.CREATED: "NEW EVENT CREATED: {title}",
    DispatchAction.UPDATED: "EVENT UPDATED: {title}",
    DispatchAction.DELETED: "EVENT DELETED: {title}",
}

BODY_TEMPLATES = {
    DispatchAction.CREATED: (
        "A new event has been scheduled:\n\n"
        "Title: {title}\n"
        "Date: {date}\n"
        "Location: {location}\n"
        "Staff Count: {staff}\n\n"
        "Check the dashboard for details."
    ),
    DispatchAction.UPDATED: (
        "Event #{id} ({title}) has been updated. Please review the changes:\n\n"
        "New Date: {date}\n"
        "New Location: {location}\n\n"
        "Check the dashboard for details."
    ),
    DispatchAction.DELETED: "Event #{id} ({title}) was permanently deleted from the schedule.",
}


@dataclass
class NotificationMessage:
    """Rendered subject and body for one notification"""
    subject: str
    body: str


def render_notification(event: Event, action: DispatchAction) -> NotificationMessage:
    """Fill the templates for an action with the event's fields."""
    values = {
        "id": event.id,
        "title": event.title,
        "date": event.event_date.strftime("%Y-%m-%d %H:%M UTC"),
        "location": event.location_name,
        "staff": event.staff_member_count,
    }
    return NotificationMessage(
        subject=SUBJECT_TEMPLATES[action].format(**values),
        body=BODY_TEMPLATES[action].format(**values),
    )


class NotificationDispatcher:
    """Sends notifications for event lifecycle transitions"""

    def __init__(
        self,
        email_provider: EmailProvider,
        calendar_provider: Optional[CalendarProvider] = None,
        recipient: str = "admin@yourcompany.com",
        sender: str = "verified-sender@yourdomain.com",
        max_retries: int = 2,
        retry_delay: float = 0.5,
    ):
        """
        Initialize the dispatcher

        Args:
            email_provider: Capability used to send email
            calendar_provider: Capability used to sync the calendar, if any
            recipient: Address notifications are sent to
            sender: Address notifications are sent from
            max_retries: Extra attempts per channel after a failure
            retry_delay: Seconds to wait between attempts
        """
        self.logger = logger.bind(component="notification_dispatcher")
        self.email_provider = email_provider
        self.calendar_provider = calendar_provider
        self.recipient = recipient
        self.sender = sender
        self.max_retries = max_retries
        self.retry_delay = retry_delay

    async def notify(self, event: Event, action: Union[DispatchAction, str]) -> Dict[str, bool]:
        """
        Deliver the notification for an event transition.

        Never raises. Unknown actions are ignored.

        Args:
            event: The created, updated or deleted event
            action: Which transition happened

        Returns:
            Delivery outcome per channel, empty for unknown actions
        """
        try:
            action = DispatchAction(action)
        except ValueError:
            self.logger.warning("Ignoring unknown notification action", action=str(action), event_id=event.id)
            return {}

        message = render_notification(event, action)
        outcome: Dict[str, bool] = {}

        if self.calendar_provider is not None:
            provider = self.calendar_provider
            outcome["calendar"] = await self._deliver(
                "calendar", provider.name, event, action,
                lambda: provider.upsert_or_delete(event, action),
            )

        outcome["email"] = await self._deliver(
            "email", self.email_provider.name, event, action,
            lambda: self.email_provider.send(self.recipient, self.sender, message.subject, message.body),
        )

        self.logger.info(
            "Notification dispatched",
            event_id=event.id,
            action=action.value,
            **outcome
        )
        return outcome

    async def _deliver(
        self,
        channel: str,
        provider_name: str,
        event: Event,
        action: DispatchAction,
        call: Callable[[], Awaitable[Any]],
    ) -> bool:
        """Run one channel's delivery with bounded retries"""
        attempts = self.max_retries + 1

        for attempt in range(1, attempts + 1):
            try:
                if await call():
                    self.logger.debug(
                        "Delivery succeeded",
                        channel=channel,
                        provider=provider_name,
                        event_id=event.id,
                        action=action.value,
                        attempt=attempt
                    )
                    return True

                self.logger.warning(
                    "Provider reported delivery failure",
                    channel=channel,
                    provider=provider_name,
                    event_id=event.id,
                    action=action.value,
                    attempt=attempt
                )
            except Exception as e:
                self.logger.error(
                    "Delivery failed",
                    channel=channel,
                    provider=provider_name,
                    event_id=event.id,
                    action=action.value,
                    attempt=attempt,
                    error=str(e)
                )

            if attempt < attempts and self.retry_delay > 0:
                await asyncio.sleep(self.retry_delay)

        self.logger.error(
            "Giving up on delivery",
            channel=channel,
            provider=provider_name,
            event_id=event.id,
            action=action.value,
            attempts=attempts
        )
        return False


def build_dispatcher(config: EventDeskConfig) -> NotificationDispatcher:
    """Create a dispatcher wired to the providers the configuration selects"""
    if config.sendgrid_api_key:
        email_provider: EmailProvider = SendGridEmailProvider(
            config.sendgrid_api_key, timeout=config.sendgrid_timeout
        )
    else:
        logger.warning("SENDGRID_API_KEY is not set, email notifications will only be logged")
        email_provider = LoggingEmailProvider()

    calendar_provider = LoggingCalendarProvider() if config.calendar_sync_enabled else None

    return NotificationDispatcher(
        email_provider=email_provider,
        calendar_provider=calendar_provider,
        recipient=config.admin_email,
        sender=config.sender_email,
        max_retries=config.notification_max_retries,
        retry_delay=config.notification_retry_delay,
    )
