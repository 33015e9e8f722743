"""Request handlers for the event API.

The handlers are independent of the web framework: they take the raw id
and JSON payload of a request and return a status code, a response body
and the notification the caller should dispatch once the response is on
its way.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from eventdesk.database.repositories import BaseRepository
from eventdesk.exceptions import NotFoundError, ValidationError
from eventdesk.models.event import DispatchAction, Event

logger = logging.getLogger(__name__)


@dataclass
class HandlerResult:
    """Outcome of handling one request."""

    status_code: int
    body: Dict[str, Any]
    notification: Optional[Tuple[Event, DispatchAction]] = None


def parse_event_id(raw_id: Any) -> int:
    """Parse a path id into an integer."""
    if isinstance(raw_id, bool):
        raise ValidationError(f"Invalid event id: {raw_id!r}.")
    if isinstance(raw_id, int):
        return raw_id
    try:
        return int(str(raw_id).strip())
    except ValueError:
        raise ValidationError(f"Invalid event id: {raw_id!r}.")


def require_object(payload: Any) -> Dict[str, Any]:
    """Ensure the request body is a JSON object."""
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object.")
    return payload


def sort_for_display(events: List[Event]) -> List[Event]:
    """Order events chronologically, oldest first."""
    return sorted(events, key=lambda event: (event.event_date, event.id))


class EventRequestHandler:
    """Handles create, read, update and delete requests for events."""

    def __init__(self, store: BaseRepository[Event]):
        self.store = store

    async def create(self, payload: Any) -> HandlerResult:
        return await self._handle("creation", self._create, payload)

    async def list_events(self) -> HandlerResult:
        return await self._handle("listing", self._list)

    async def get(self, raw_id: Any) -> HandlerResult:
        return await self._handle("lookup", self._get, raw_id)

    async def update(self, raw_id: Any, payload: Any) -> HandlerResult:
        return await self._handle("update", self._update, raw_id, payload)

    async def delete(self, raw_id: Any) -> HandlerResult:
        return await self._handle("deletion", self._delete, raw_id)

    async def _create(self, payload: Any) -> HandlerResult:
        event = await self.store.create(require_object(payload))
        return HandlerResult(
            status_code=201,
            body={
                "message": "Event created successfully and integrations triggered.",
                "event": event.to_wire(),
            },
            notification=(event, DispatchAction.CREATED),
        )

    async def _list(self) -> HandlerResult:
        events = sort_for_display(await self.store.list())
        return HandlerResult(
            status_code=200,
            body={
                "message": f"Found {len(events)} events.",
                "events": [event.to_wire() for event in events],
            },
        )

    async def _get(self, raw_id: Any) -> HandlerResult:
        event = await self.store.get(parse_event_id(raw_id))
        return HandlerResult(
            status_code=200,
            body={"message": "Event found.", "event": event.to_wire()},
        )

    async def _update(self, raw_id: Any, payload: Any) -> HandlerResult:
        event_id = parse_event_id(raw_id)
        event = await self.store.update(event_id, require_object(payload))
        return HandlerResult(
            status_code=200,
            body={
                "message": "Event updated successfully and notification triggered.",
                "event": event.to_wire(),
            },
            notification=(event, DispatchAction.UPDATED),
        )

    async def _delete(self, raw_id: Any) -> HandlerResult:
        deleted = await self.store.delete(parse_event_id(raw_id))
        return HandlerResult(
            status_code=200,
            body={
                "message": "Event deleted successfully and notification triggered.",
                "deletedEvent": deleted.to_wire(),
            },
            notification=(deleted, DispatchAction.DELETED),
        )

    async def _handle(
        self, operation: str, func: Callable[..., Awaitable[HandlerResult]], *args: Any
    ) -> HandlerResult:
        """Run a handler and map store errors onto status codes."""
        try:
            return await func(*args)
        except ValidationError as e:
            logger.info(f"Rejected event {operation}: {e.message}")
            return HandlerResult(status_code=400, body={"message": e.message})
        except NotFoundError as e:
            logger.info(f"Event {e.event_id} not found during {operation}")
            return HandlerResult(status_code=404, body={"message": e.message})
        except Exception as e:
            logger.error(f"Error during event {operation}: {e}", exc_info=True)
            return HandlerResult(
                status_code=500,
                body={"message": f"Internal server error during event {operation}."},
            )
