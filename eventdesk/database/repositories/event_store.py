"""In-memory event store."""

import asyncio
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Tuple

import structlog
from pydantic import ValidationError as PydanticValidationError

from eventdesk.database.repositories.base import BaseRepository
from eventdesk.exceptions import NotFoundError, ValidationError
from eventdesk.models.event import REQUIRED_FIELDS, Event, EventFields, EventPatch, utcnow


logger = structlog.get_logger(__name__)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def wire_location(loc: Tuple[Any, ...]) -> str:
    """Render an error location with the API's field names."""
    parts = []
    for index, part in enumerate(loc):
        field_info = EventFields.model_fields.get(part) if index == 0 else None
        parts.append(field_info.alias if field_info is not None and field_info.alias else str(part))
    return ".".join(parts)


def to_validation_error(exc: PydanticValidationError, operation: str) -> ValidationError:
    """Translate pydantic errors into a client-facing ValidationError."""
    missing: List[str] = []
    invalid: List[str] = []
    errors: List[Dict[str, Any]] = []

    for error in exc.errors():
        field = wire_location(error.get("loc", ()))
        errors.append({"field": field, "message": error.get("msg", "")})

        if field in REQUIRED_FIELDS and (error.get("type") == "missing" or _is_blank(error.get("input"))):
            if field not in missing:
                missing.append(field)
        else:
            invalid.append(f"{field} ({error.get('msg', 'invalid')})")

    if missing:
        message = f"Missing required event fields: {', '.join(missing)}."
    else:
        message = f"Invalid event fields for {operation}: {'; '.join(invalid)}."
    return ValidationError(message, errors=errors)


class InMemoryEventStore(BaseRepository[Event]):
    """Process-local event store.

    Ids come from a counter that only moves forward, so an id is never
    handed out twice even after its event is deleted. Every operation runs
    under a single lock and works on copies, so callers can neither see a
    half-applied change nor mutate stored records.
    """

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        """
        Initialize the event store.

        Args:
            clock: Source of creation/update timestamps
        """
        super().__init__("events")
        self.logger = logger.bind(component="event_store")
        self._events: Dict[int, Event] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()
        self._clock = clock

    async def create(self, fields: Mapping[str, Any]) -> Event:
        try:
            validated = EventFields.model_validate(dict(fields))
        except PydanticValidationError as e:
            error = to_validation_error(e, "create")
            self.logger.info("Rejected event creation", reason=error.message)
            raise error from e

        async with self._lock:
            now = self._clock()
            event = Event(
                id=self._next_id,
                created_at=now,
                updated_at=now,
                **validated.editable_fields(),
            )
            self._next_id += 1
            self._events[event.id] = event

        self.logger.info("Event created", event_id=event.id, title=event.title)
        return event.model_copy(deep=True)

    async def get(self, record_id: int) -> Event:
        async with self._lock:
            event = self._events.get(record_id)
            if event is None:
                raise NotFoundError(record_id)
            return event.model_copy(deep=True)

    async def list(self) -> List[Event]:
        async with self._lock:
            return [event.model_copy(deep=True) for event in self._events.values()]

    async def count(self) -> int:
        async with self._lock:
            return len(self._events)

    async def update(self, record_id: int, fields: Mapping[str, Any]) -> Event:
        async with self._lock:
            existing = self._events.get(record_id)
            if existing is None:
                self.logger.info("Update of unknown event", event_id=record_id)
                raise NotFoundError(record_id)

            try:
                changes = EventPatch.model_validate(dict(fields)).changes()
                merged = EventFields.model_validate({**existing.editable_fields(), **changes})
            except PydanticValidationError as e:
                error = to_validation_error(e, "update")
                self.logger.info("Rejected event update", event_id=record_id, reason=error.message)
                raise error from e

            updated = Event(
                id=existing.id,
                created_at=existing.created_at,
                updated_at=max(self._clock(), existing.updated_at),
                **merged.editable_fields(),
            )
            self._events[record_id] = updated

        self.logger.info("Event updated", event_id=record_id, fields=sorted(changes))
        return updated.model_copy(deep=True)

    async def delete(self, record_id: int) -> Event:
        async with self._lock:
            event = self._events.pop(record_id, None)
            if event is None:
                self.logger.info("Delete of unknown event", event_id=record_id)
                raise NotFoundError(record_id)

        self.logger.info("Event deleted", event_id=record_id, title=event.title)
        return event
