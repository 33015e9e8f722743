"""Calendar providers."""

import structlog

from eventdesk.integrations.base import CalendarProvider
from eventdesk.models.event import DispatchAction, Event


logger = structlog.get_logger(__name__)

# Calendar API verb for each lifecycle transition
CALENDAR_OPERATIONS = {
    DispatchAction.CREATED: "CREATE",
    DispatchAction.UPDATED: "UPDATE",
    DispatchAction.DELETED: "DELETE",
}


class LoggingCalendarProvider(CalendarProvider):
    """Stand-in that logs calendar changes instead of syncing them."""

    name = "log_calendar"

    def __init__(self):
        self.logger = logger.bind(component="log_calendar_provider")

    async def upsert_or_delete(self, event: Event, action: DispatchAction) -> bool:
        self.logger.info(
            "Calendar sync (not performed)",
            operation=CALENDAR_OPERATIONS[action],
            event_id=event.id,
            title=event.title,
            event_date=event.event_date.isoformat(),
        )
        return True
