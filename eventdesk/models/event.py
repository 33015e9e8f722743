"""Event-related data models."""

from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


DEFAULT_CO_INFLUENCER = "None"

# Wire names of the fields a create request cannot do without
REQUIRED_FIELDS = ("title", "eventDate", "locationName")


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def normalize_timestamp(value: datetime) -> datetime:
    """Convert a datetime to UTC, treating naive values as UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_event_date(value: Any) -> Any:
    """Parse ISO-8601 strings (date-only and minute precision included)."""
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("must not be empty")
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"'{value}' is not an ISO-8601 timestamp")
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    return value


class DispatchAction(str, Enum):
    """Lifecycle transition that triggers a notification."""

    CREATED = "Created"
    UPDATED = "Updated"
    DELETED = "Deleted"


class Coordinates(BaseModel):
    """Geographic position of an event location."""

    lat: float = 0.0
    lng: float = 0.0


class EventFields(BaseModel):
    """Client-editable attributes of an event."""

    title: str = Field(..., description="Event title")
    description: str = Field(default="", description="Free-form description")
    event_date: datetime = Field(..., description="When the event takes place (UTC)")
    staff_member_count: int = Field(default=0, ge=0, description="Staff assigned to the event")
    co_influencer: str = Field(default=DEFAULT_CO_INFLUENCER, description="Co-hosting influencer")
    location_name: str = Field(..., description="Venue name")
    location_coordinates: Coordinates = Field(default_factory=Coordinates)

    class Config:
        """Pydantic configuration."""

        alias_generator = to_camel
        populate_by_name = True
        extra = "ignore"

    @field_validator("title", "location_name")
    @classmethod
    def require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("co_influencer", mode="before")
    @classmethod
    def default_co_influencer(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_CO_INFLUENCER
        return value

    @field_validator("staff_member_count", mode="before")
    @classmethod
    def default_staff_member_count(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("location_coordinates", mode="before")
    @classmethod
    def default_coordinates(cls, value: Any) -> Any:
        return Coordinates() if value is None else value

    @field_validator("event_date", mode="before")
    @classmethod
    def parse_date(cls, value: Any) -> Any:
        return parse_event_date(value)

    @field_validator("event_date")
    @classmethod
    def normalize_event_date(cls, value: datetime) -> datetime:
        return normalize_timestamp(value)

    def editable_fields(self) -> Dict[str, Any]:
        """Return the client-editable fields keyed by attribute name."""
        return {name: getattr(self, name) for name in EventFields.model_fields}


class Event(EventFields):
    """A stored event record."""

    id: int = Field(..., description="Store-assigned identifier")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    def to_wire(self) -> Dict[str, Any]:
        """Serialize to the camelCase JSON shape used by the API."""
        return self.model_dump(mode="json", by_alias=True)


class EventPatch(BaseModel):
    """Partial update payload.

    Only collects which fields the client sent; values are validated once
    they are merged over the stored record. ``id``, ``createdAt`` and
    ``updatedAt`` are not part of the patch and are dropped.
    """

    title: Optional[Any] = None
    description: Optional[Any] = None
    event_date: Optional[Any] = None
    staff_member_count: Optional[Any] = None
    co_influencer: Optional[Any] = None
    location_name: Optional[Any] = None
    location_coordinates: Optional[Any] = None

    class Config:
        """Pydantic configuration."""

        alias_generator = to_camel
        populate_by_name = True
        extra = "ignore"

    def changes(self) -> Dict[str, Any]:
        """Return only the fields present in the payload."""
        return self.model_dump(exclude_unset=True)
