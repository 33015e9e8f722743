"""Tests for the email and calendar providers."""

import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from eventdesk.exceptions import IntegrationError
from eventdesk.integrations import LoggingCalendarProvider, LoggingEmailProvider, SendGridEmailProvider
from eventdesk.integrations.email import SENDGRID_SEND_URL
from eventdesk.models.event import DispatchAction, Event


def mock_session(status: int = 202, text: str = ""):
    """Build a ClientSession mock whose post() yields a response with the given status."""
    response = MagicMock()
    response.status = status
    response.text = AsyncMock(return_value=text)

    session = MagicMock()
    session.__aenter__.return_value = session
    session.post.return_value.__aenter__.return_value = response
    return session


class TestLoggingProviders:
    """Test the log-only stand-ins."""

    @pytest.mark.asyncio
    async def test_logging_email_provider(self):
        provider = LoggingEmailProvider()

        assert await provider.send("to@example.com", "from@example.com", "Subject", "Body") is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("action", list(DispatchAction))
    async def test_logging_calendar_provider(self, action):
        now = datetime(2025, 1, 1, tzinfo=timezone.utc)
        event = Event(id=1, title="Launch", event_date=now, location_name="HQ", created_at=now, updated_at=now)

        assert await LoggingCalendarProvider().upsert_or_delete(event, action) is True


class TestSendGridEmailProvider:
    """Test the SendGrid provider."""

    def test_build_payload(self):
        payload = SendGridEmailProvider.build_payload("to@example.com", "from@example.com", "Hi", "Body")

        assert payload == {
            "personalizations": [{"to": [{"email": "to@example.com"}]}],
            "from": {"email": "from@example.com"},
            "subject": "Hi",
            "content": [{"type": "text/plain", "value": "Body"}],
        }

    @pytest.mark.asyncio
    async def test_send_success(self):
        session = mock_session(status=202)
        provider = SendGridEmailProvider("SG.key")

        with patch("aiohttp.ClientSession", return_value=session):
            result = await provider.send("to@example.com", "from@example.com", "Hi", "Body")

        assert result is True
        args, kwargs = session.post.call_args
        assert args[0] == SENDGRID_SEND_URL
        assert kwargs["headers"]["Authorization"] == "Bearer SG.key"
        assert kwargs["json"]["subject"] == "Hi"

    @pytest.mark.asyncio
    async def test_send_rejected(self):
        session = mock_session(status=401, text='{"errors": [{"message": "bad key"}]}')
        provider = SendGridEmailProvider("SG.bad")

        with patch("aiohttp.ClientSession", return_value=session):
            with pytest.raises(IntegrationError) as exc_info:
                await provider.send("to@example.com", "from@example.com", "Hi", "Body")

        assert exc_info.value.provider == "sendgrid"
        assert "401" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_send_connection_error(self):
        session = mock_session()
        session.post.side_effect = aiohttp.ClientConnectionError("unreachable")
        provider = SendGridEmailProvider("SG.key")

        with patch("aiohttp.ClientSession", return_value=session):
            with pytest.raises(IntegrationError) as exc_info:
                await provider.send("to@example.com", "from@example.com", "Hi", "Body")

        assert "unreachable" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_send_timeout(self):
        session = mock_session()
        session.post.side_effect = asyncio.TimeoutError()
        provider = SendGridEmailProvider("SG.key", timeout=2.5)

        with patch("aiohttp.ClientSession", return_value=session):
            with pytest.raises(IntegrationError) as exc_info:
                await provider.send("to@example.com", "from@example.com", "Hi", "Body")

        assert exc_info.value.provider == "sendgrid"
        assert "timed out after 2.5s" in exc_info.value.message
