"""Pytest configuration for eventdesk tests."""

import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from eventdesk.database.repositories import InMemoryEventStore
from eventdesk.http_server import create_app
from eventdesk.integrations import CalendarProvider, EmailProvider
from eventdesk.models.config import EventDeskConfig
from eventdesk.models.event import DispatchAction, Event
from eventdesk.notifications import NotificationDispatcher


class RecordingEmailProvider(EmailProvider):
    """Email provider that records messages and replays scripted outcomes."""

    name = "recording_email"

    def __init__(self, outcomes: List[Any] = None):
        self.sent: List[Dict[str, str]] = []
        self.outcomes = list(outcomes or [])

    async def send(self, to: str, from_address: str, subject: str, body: str) -> bool:
        self.sent.append({"to": to, "from": from_address, "subject": subject, "body": body})
        if self.outcomes:
            outcome = self.outcomes.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        return True


class RecordingCalendarProvider(CalendarProvider):
    """Calendar provider that records calls and replays scripted outcomes."""

    name = "recording_calendar"

    def __init__(self, outcomes: List[Any] = None):
        self.calls: List[tuple] = []
        self.outcomes = list(outcomes or [])

    async def upsert_or_delete(self, event: Event, action: DispatchAction) -> bool:
        self.calls.append((event.id, action))
        if self.outcomes:
            outcome = self.outcomes.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        return True


class RecordingDispatcher(NotificationDispatcher):
    """Dispatcher that remembers every notify call."""

    def __init__(self, **kwargs):
        kwargs.setdefault("email_provider", RecordingEmailProvider())
        kwargs.setdefault("calendar_provider", RecordingCalendarProvider())
        kwargs.setdefault("retry_delay", 0)
        super().__init__(**kwargs)
        self.calls: List[tuple] = []
        self.outcomes: List[Dict[str, bool]] = []

    async def notify(self, event, action):
        self.calls.append((event, action))
        outcome = await super().notify(event, action)
        self.outcomes.append(outcome)
        return outcome


class StepClock:
    """Clock that advances by a fixed step on every reading."""

    def __init__(self, start: datetime = None, step: timedelta = timedelta(seconds=1)):
        self.current = start or datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture(scope="session", autouse=True)
def mock_env_vars():
    """Keep real credentials out of the test run."""
    with patch.dict(os.environ, {"SENDGRID_API_KEY": ""}):
        yield


@pytest.fixture
def eventdesk_config():
    """Create an EventDeskConfig for testing."""
    return EventDeskConfig(
        _env_file=None,
        sendgrid_api_key="",
        notification_retry_delay=0,
    )


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def store(clock):
    return InMemoryEventStore(clock=clock)


@pytest.fixture
def email_provider():
    return RecordingEmailProvider()


@pytest.fixture
def calendar_provider():
    return RecordingCalendarProvider()


@pytest.fixture
def dispatcher(email_provider, calendar_provider):
    return RecordingDispatcher(
        email_provider=email_provider,
        calendar_provider=calendar_provider,
        max_retries=1,
    )


@pytest.fixture
def client(eventdesk_config, store, dispatcher):
    """Create a test client."""
    return TestClient(create_app(config=eventdesk_config, store=store, dispatcher=dispatcher))


@pytest.fixture
def launch_payload():
    return {"title": "Launch", "eventDate": "2025-01-01T10:00", "locationName": "HQ"}
